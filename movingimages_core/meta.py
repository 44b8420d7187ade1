from __future__ import annotations

from typing import Any

from .commands import CommandVerb
from .objectid import ObjectType, object_type_value
from .smig import SmigClient

MIN_IDLE_TIME_S = 1
MAX_IDLE_TIME_S = 900

_CONTEXT_TYPES = frozenset({ObjectType.BITMAP_CONTEXT, ObjectType.PDF_CONTEXT, ObjectType.WINDOW_CONTEXT})

COMMANDS_FOR_OBJECT_TYPES: dict[ObjectType, tuple[CommandVerb, ...]] = {
    ObjectType.BITMAP_CONTEXT: (
        CommandVerb.GET_PROPERTY,
        CommandVerb.GET_PROPERTIES,
        CommandVerb.CLOSE,
        CommandVerb.DRAW_ELEMENT,
        CommandVerb.SNAPSHOT,
        CommandVerb.GET_PIXEL_DATA,
    ),
    ObjectType.IMAGE_IMPORTER: (
        CommandVerb.GET_PROPERTY,
        CommandVerb.GET_PROPERTIES,
        CommandVerb.SET_PROPERTY,
        CommandVerb.CLOSE,
    ),
    ObjectType.IMAGE_EXPORTER: (
        CommandVerb.GET_PROPERTY,
        CommandVerb.GET_PROPERTIES,
        CommandVerb.SET_PROPERTY,
        CommandVerb.SET_PROPERTIES,
        CommandVerb.CLOSE,
        CommandVerb.ADD_IMAGE,
        CommandVerb.EXPORT,
    ),
    ObjectType.IMAGE_FILTER_CHAIN: (
        CommandVerb.GET_PROPERTY,
        CommandVerb.GET_PROPERTIES,
        CommandVerb.SET_PROPERTY,
        CommandVerb.CLOSE,
        CommandVerb.RENDER_FILTER_CHAIN,
    ),
    ObjectType.WINDOW_CONTEXT: (
        CommandVerb.GET_PROPERTY,
        CommandVerb.GET_PROPERTIES,
        CommandVerb.CLOSE,
        CommandVerb.DRAW_ELEMENT,
        CommandVerb.SNAPSHOT,
    ),
    ObjectType.PDF_CONTEXT: (
        CommandVerb.GET_PROPERTY,
        CommandVerb.GET_PROPERTIES,
        CommandVerb.CLOSE,
        CommandVerb.DRAW_ELEMENT,
        CommandVerb.FINALIZE_PAGE,
    ),
    ObjectType.MOVIE_IMPORTER: (
        CommandVerb.GET_PROPERTY,
        CommandVerb.GET_PROPERTIES,
        CommandVerb.CLOSE,
        CommandVerb.PROCESS_FRAMES,
    ),
}


def listobjecttypes() -> list[str]:
    return [t.value for t in ObjectType]


def listofallcommands() -> list[str]:
    return [v.value for v in CommandVerb]


def listofclasscommands(objecttype: ObjectType | str = ObjectType.BITMAP_CONTEXT) -> list[str]:
    kind = ObjectType(object_type_value(objecttype))
    verbs = [CommandVerb.CREATE, CommandVerb.GET_PROPERTY, CommandVerb.CLOSE_ALL]
    if kind in _CONTEXT_TYPES:
        verbs.append(CommandVerb.CALCULATE_GRAPHIC_SIZE_OF_TEXT)
    return [v.value for v in verbs]


def listofobjectcommands(objecttype: ObjectType | str = ObjectType.BITMAP_CONTEXT) -> list[str]:
    kind = ObjectType(object_type_value(objecttype))
    return [v.value for v in COMMANDS_FOR_OBJECT_TYPES[kind]]


def object_handles(objecttype: ObjectType | str, verb: CommandVerb | str) -> bool:
    return CommandVerb(verb).value in listofobjectcommands(objecttype)


def get_listoffilters(client: SmigClient, category: str | None = None) -> str:
    command: dict[str, Any] = {
        "command": CommandVerb.GET_PROPERTY.value,
        "objecttype": ObjectType.IMAGE_FILTER_CHAIN.value,
        "propertykey": "imagefilters",
    }
    if category is not None:
        command["filtercategory"] = category
    return client.perform_commands({"commands": [command]}).output


def get_filterattributes(client: SmigClient, filtername: str = "CIBoxBlur") -> str:
    command = {
        "command": CommandVerb.GET_PROPERTY.value,
        "objecttype": ObjectType.IMAGE_FILTER_CHAIN.value,
        "propertykey": "filterattributes",
        "filtername": filtername,
    }
    return client.perform_commands({"commands": [command]}).output


def listofpresets(client: SmigClient) -> str:
    return client.get_classtypeproperty(ObjectType.BITMAP_CONTEXT.value, "presets")


def cgblendmodes(client: SmigClient) -> str:
    return client.get_classtypeproperty(ObjectType.BITMAP_CONTEXT.value, "blendmodes")


def listofuserinterfacefonts(client: SmigClient) -> str:
    return client.get_classtypeproperty(ObjectType.BITMAP_CONTEXT.value, "userinterfacefonts")


def idletime(client: SmigClient) -> int:
    """Seconds the renderer agent stays alive with no objects before exiting."""
    return int(client.get_property("idletime"))


def set_idletime(client: SmigClient, seconds: int = 10) -> str:
    if not MIN_IDLE_TIME_S <= int(seconds) <= MAX_IDLE_TIME_S:
        raise ValueError(f"idletime must be within {MIN_IDLE_TIME_S}..{MAX_IDLE_TIME_S} seconds")
    return client.set_property("idletime", int(seconds))
