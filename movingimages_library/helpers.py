from __future__ import annotations

import logging
from typing import Any

from movingimages_core import commands as cmd
from movingimages_core.command_list import CommandList
from movingimages_core.smig import SmigClient, SmigResult
from movingimages_draw.elements import DrawImageElement

LOGGER = logging.getLogger(__name__)


def save_image(
    client: SmigClient,
    imagesource: dict[str, Any],
    pathtofile: str,
    filetype: str = cmd.DEFAULT_EXPORT_TYPE,
) -> SmigResult:
    """Exports the current image of a bitmap or window context to a file."""
    commands = CommandList()
    exporter = commands.make_createexporter(pathtofile, export_type=filetype, addtocleanup=True)
    commands.add_command(cmd.make_addimage(exporter, imagesource))
    commands.add_command(cmd.make_export(exporter))
    return client.perform_commands(commands)


def create_window(
    client: SmigClient,
    width: int | float = 800,
    height: int | float = 600,
    xloc: int | float = 100,
    yloc: int | float = 100,
    borderlesswindow: bool = False,
) -> dict[str, Any]:
    command = cmd.make_createwindowcontext(
        width=width, height=height, xloc=xloc, yloc=yloc, borderlesswindow=borderlesswindow
    )
    return {"objectreference": client.perform_command(command).as_int()}


def create_bitmapcontext(
    client: SmigClient,
    width: int | float = 800,
    height: int | float = 600,
    preset: str = cmd.DEFAULT_BITMAP_PRESET,
) -> dict[str, Any]:
    command = cmd.make_createbitmapcontext(width=width, height=height, preset=preset)
    return {"objectreference": client.perform_command(command).as_int()}


def close_object(client: SmigClient, object_id: dict[str, Any]) -> SmigResult:
    return client.perform_command(cmd.make_close(object_id))


def close_object_nothrow(client: SmigClient, object_id: dict[str, Any]) -> None:
    result = client.perform_commands_nothrow({"commands": [cmd.make_close(object_id).to_document()]})
    if not result.succeeded:
        LOGGER.debug("ignored failure closing %s", object_id)


def drawimage_to_object(
    client: SmigClient,
    destination: dict[str, Any],
    destinationrect: dict[str, Any],
    imagefile: str,
    imageindex: int | None = None,
    drawimageelement: DrawImageElement | None = None,
) -> SmigResult:
    """Draws an image file into a context through a temporary importer."""
    commands = build_drawimage_commands(destination, destinationrect, imagefile, imageindex, drawimageelement)
    return client.perform_commands(commands)


def build_drawimage_commands(
    destination: dict[str, Any],
    destinationrect: dict[str, Any],
    imagefile: str,
    imageindex: int | None = None,
    drawimageelement: DrawImageElement | None = None,
    commands: CommandList | None = None,
) -> CommandList:
    commands = commands if commands is not None else CommandList()
    element = drawimageelement if drawimageelement is not None else DrawImageElement()
    element.set_destinationrectangle(destinationrect)
    importer = commands.make_createimporter(imagefile, addtocleanup=True)
    element.set_imagesource(importer, imageindex)
    commands.add_command(cmd.make_drawelement(destination, element))
    return commands
