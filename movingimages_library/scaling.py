from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import Any

from movingimages_core import commands as cmd
from movingimages_core.command_list import CommandList
from movingimages_core.geometry import make_point, make_rectangle, make_size
from movingimages_core.naming import ObjectNameFactory
from movingimages_core.smig import SmigClient, SmigResult
from movingimages_core.transforms import add_scaletransform, make_contexttransformation
from movingimages_draw.elements import DrawImageElement, InterpolationQuality
from movingimages_draw.filters import Filter, FilterChain, FilterChainRender, make_ciimageproperty, make_cinumberproperty

from .metadata import get_imagedimensions, get_imagefiletype

LOGGER = logging.getLogger(__name__)

INTERPOLATION_BY_NAME = {
    "default": InterpolationQuality.DEFAULT,
    "none": InterpolationQuality.NONE,
    "low": InterpolationQuality.LOW,
    "medium": InterpolationQuality.MEDIUM,
    "high": InterpolationQuality.HIGH,
}


@dataclass(frozen=True)
class ScaleOptions:
    outputdir: str
    scalex: float = 1.0
    scaley: float = 1.0
    interpqual: str = "default"
    copymetadata: bool = False
    quality: float | None = None
    run_async: bool = False

    def __post_init__(self) -> None:
        if not self.outputdir:
            raise ValueError("No output directory specified.")
        if self.scalex <= 0 or self.scaley <= 0:
            raise ValueError("scale factors must be > 0")
        if self.interpqual not in INTERPOLATION_BY_NAME:
            raise ValueError(f"unknown interpolation quality: {self.interpqual}")
        if self.quality is not None and not 0.0 <= self.quality <= 1.0:
            raise ValueError("quality must be within 0.0 and 1.0")


def build_lanczos_scale_commands(
    options: ScaleOptions,
    files: list[str],
    *,
    dimensions: dict[str, Any] | None = None,
    filetype: str | None = None,
    name_factory: ObjectNameFactory | None = None,
) -> CommandList:
    """Scales each file by drawing it into a bitmap and running CILanczosScaleTransform."""
    dimensions, filetype = _first_file_info(files, dimensions, filetype)
    scaled_width = float(dimensions["width"]) * options.scalex
    scaled_height = float(dimensions["height"]) * options.scaley

    commands = CommandList(name_factory=name_factory)
    commands.set_run_asynchronously(options.run_async)
    bitmap = commands.make_createbitmapcontext(size=make_size(int(scaled_width), int(scaled_height)))
    exporter = commands.make_createexporter(_placeholder_path(options), export_type=filetype)
    intermediate = commands.make_createbitmapcontext(size=make_size(dimensions["width"], dimensions["height"]))

    lanczos = Filter("CILanczosScaleTransform")
    lanczos.add_property(make_ciimageproperty(value=intermediate))
    lanczos.add_property(make_cinumberproperty(key="inputScale", value=options.scalex))
    lanczos.add_property(make_cinumberproperty(key="inputAspectRatio", value=options.scaley / options.scalex))
    filter_chain = commands.make_createimagefilterchain(FilterChain(bitmap, filters=[lanczos]))

    draw_rect = make_rectangle(size=make_size(dimensions["width"], dimensions["height"]))
    render_rect = make_rectangle(size=make_size(scaled_width, scaled_height))
    for file_path in files:
        importer = commands.make_createimporter(file_path, addtocleanup=False)
        draw_image = DrawImageElement().set_imagesource(importer, 0).set_destinationrectangle(draw_rect)
        commands.add_command(cmd.make_drawelement(intermediate, draw_image))
        render = FilterChainRender().set_destinationrectangle(render_rect)
        commands.add_command(cmd.make_renderfilterchain(filter_chain, render))
        _add_export_commands(commands, options, exporter, bitmap, importer, file_path)
    return commands


def build_quartz_scale_commands(
    options: ScaleOptions,
    files: list[str],
    *,
    dimensions: dict[str, Any] | None = None,
    filetype: str | None = None,
    name_factory: ObjectNameFactory | None = None,
) -> CommandList:
    """Scales each file with a CoreGraphics scale transform while drawing."""
    dimensions, filetype = _first_file_info(files, dimensions, filetype)
    scaled_width = float(dimensions["width"]) * options.scalex
    scaled_height = float(dimensions["height"]) * options.scaley

    commands = CommandList(name_factory=name_factory)
    commands.set_run_asynchronously(options.run_async)
    bitmap = commands.make_createbitmapcontext(size=make_size(int(scaled_width), int(scaled_height)))
    exporter = commands.make_createexporter(_placeholder_path(options), export_type=filetype)

    draw_rect = make_rectangle(size=make_size(dimensions["width"], dimensions["height"]))
    scale = add_scaletransform(make_contexttransformation(), make_point(options.scalex, options.scaley))
    for file_path in files:
        importer = commands.make_createimporter(file_path, addtocleanup=False)
        draw_image = (
            DrawImageElement()
            .set_imagesource(importer, 0)
            .set_destinationrectangle(draw_rect)
            .set_interpolationquality(INTERPOLATION_BY_NAME[options.interpqual])
            .set_contexttransformations(scale)
        )
        commands.add_command(cmd.make_drawelement(bitmap, draw_image))
        _add_export_commands(commands, options, exporter, bitmap, importer, file_path)
    return commands


def scale_files_uselanczos(client: SmigClient, options: ScaleOptions, files: list[str]) -> SmigResult:
    _prepare_output_dir(options)
    return client.perform_commands(build_lanczos_scale_commands(options, files))


def scale_files_usequartz(client: SmigClient, options: ScaleOptions, files: list[str]) -> SmigResult:
    _prepare_output_dir(options)
    return client.perform_commands(build_quartz_scale_commands(options, files))


def _add_export_commands(
    commands: CommandList,
    options: ScaleOptions,
    exporter: dict[str, Any],
    bitmap: dict[str, Any],
    importer: dict[str, Any],
    file_path: str,
) -> None:
    export_path = os.path.join(os.path.expanduser(options.outputdir), os.path.basename(file_path))
    commands.add_command(cmd.make_set_objectproperty(exporter, "exportfilepath", export_path))
    commands.add_command(cmd.make_addimage(exporter, bitmap))
    if options.copymetadata:
        commands.add_command(cmd.make_add_metadata(exporter, importer, importerimageindex=0, imageindex=0))
    if options.quality is not None:
        quality = cmd.make_set_objectproperty(exporter, "exportcompressionquality", options.quality)
        quality.add_option("imageindex", 0)
        commands.add_command(quality)
    commands.add_command(cmd.make_export(exporter))
    commands.add_command(cmd.make_close(importer))


def _first_file_info(
    files: list[str], dimensions: dict[str, Any] | None, filetype: str | None
) -> tuple[dict[str, Any], str]:
    if not files:
        raise ValueError("No files to scale.")
    first = os.path.expanduser(files[0])
    if dimensions is None:
        dimensions = get_imagedimensions(first)
    if filetype is None:
        filetype = get_imagefiletype(first)
    return dimensions, filetype


def _placeholder_path(options: ScaleOptions) -> str:
    return os.path.join(os.path.expanduser(options.outputdir), "placeholder")


def _prepare_output_dir(options: ScaleOptions) -> None:
    output_dir = Path(options.outputdir).expanduser()
    output_dir.mkdir(parents=True, exist_ok=True)
    LOGGER.info("scaling images into %s", output_dir)
