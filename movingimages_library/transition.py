from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Any

from movingimages_core import commands as cmd
from movingimages_core.command_list import CommandList
from movingimages_core.geometry import make_rectangle, make_size
from movingimages_core.naming import ObjectNameFactory
from movingimages_core.smig import SmigClient, SmigResult, serialize_commands
from movingimages_draw.filters import (
    Filter,
    FilterChain,
    FilterChainRender,
    make_ciimageproperty,
    make_cinumberproperty,
    make_renderproperty_withfilternameid,
)

from .metadata import get_imagedimensions

TRANSITION_FILTER_ID = "transitionfilter"

FILE_EXTENSIONS = {
    "public.jpeg": "jpg",
    "public.png": "png",
    "public.tiff": "tiff",
    "com.compuserve.gif": "gif",
    "com.microsoft.bmp": "bmp",
}


@dataclass(frozen=True)
class TransitionOptions:
    sourceimage: str
    targetimage: str
    outputdir: str
    transitionfilter: str = "CIBarsSwipeTransition"
    exportfiletype: str = "public.tiff"
    basename: str = "image"
    count: int = 5
    filter_inputs: dict[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.count < 1:
            raise ValueError("count must be >= 1")
        if self.exportfiletype not in FILE_EXTENSIONS:
            raise ValueError(f"unsupported export file type: {self.exportfiletype}")
        if not self.basename:
            raise ValueError("basename must not be empty")


def build_transition_commands(
    options: TransitionOptions,
    *,
    dimensions: dict[str, Any] | None = None,
    name_factory: ObjectNameFactory | None = None,
) -> CommandList:
    """Renders `count` frames of a CoreImage transition from source to target image."""
    if dimensions is None:
        dimensions = get_imagedimensions(options.sourceimage)
    commands = CommandList(name_factory=name_factory)
    source = commands.make_createimporter(os.path.expanduser(options.sourceimage))
    target = commands.make_createimporter(os.path.expanduser(options.targetimage))
    bitmap = commands.make_createbitmapcontext(size=make_size(dimensions["width"], dimensions["height"]))

    transition = Filter(options.transitionfilter, identifier=TRANSITION_FILTER_ID)
    transition.add_property(make_ciimageproperty(value=source))
    transition.add_property(make_ciimageproperty(key="inputTargetImage", value=target))
    for key, value in options.filter_inputs.items():
        transition.add_property(make_cinumberproperty(key=key, value=value))
    transition.add_property(make_cinumberproperty(key="inputTime", value=0.0))
    filter_chain = commands.make_createimagefilterchain(FilterChain(bitmap, filters=[transition]))

    exporter = commands.make_createexporter(
        _frame_path(options, 0), export_type=options.exportfiletype
    )
    render_rect = make_rectangle(size=make_size(dimensions["width"], dimensions["height"]))
    for index in range(options.count):
        time = index / (options.count - 1) if options.count > 1 else 0.0
        render = FilterChainRender().set_destinationrectangle(render_rect).set_sourcerectangle(render_rect)
        render.add_filterproperty(
            make_renderproperty_withfilternameid(key="inputTime", value=time, filter_name_id=TRANSITION_FILTER_ID)
        )
        commands.add_command(cmd.make_renderfilterchain(filter_chain, render))
        commands.add_command(cmd.make_set_objectproperty(exporter, "exportfilepath", _frame_path(options, index)))
        commands.add_command(cmd.make_addimage(exporter, bitmap))
        commands.add_command(cmd.make_export(exporter))
    return commands


def dotransition(client: SmigClient, options: TransitionOptions) -> SmigResult:
    Path(options.outputdir).expanduser().mkdir(parents=True, exist_ok=True)
    return client.perform_commands(build_transition_commands(options))


def transition_json(options: TransitionOptions, *, dimensions: dict[str, Any] | None = None) -> str:
    return serialize_commands(build_transition_commands(options, dimensions=dimensions).to_document())


def _frame_path(options: TransitionOptions, index: int) -> str:
    extension = FILE_EXTENSIONS[options.exportfiletype]
    filename = f"{options.basename}{index:03d}.{extension}"
    return os.path.join(os.path.expanduser(options.outputdir), filename)
