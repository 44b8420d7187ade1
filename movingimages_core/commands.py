from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from .documents import DocumentSource, DocumentValidationError, as_document, enum_value, expect_mapping
from .objectid import ObjectType, object_type_value

DEFAULT_BITMAP_PRESET = "AlphaPreMulFirstRGB8bpcInt"
DEFAULT_EXPORT_TYPE = "public.jpeg"


class CommandVerb(str, Enum):
    CREATE = "create"
    CLOSE = "close"
    CLOSE_ALL = "closeall"
    GET_PROPERTY = "getproperty"
    SET_PROPERTY = "setproperty"
    GET_PROPERTIES = "getproperties"
    SET_PROPERTIES = "setproperties"
    ADD_IMAGE = "addimage"
    EXPORT = "export"
    DRAW_ELEMENT = "drawelement"
    SNAPSHOT = "snapshot"
    FINALIZE_PAGE = "finalizepage"
    GET_PIXEL_DATA = "getpixeldata"
    CALCULATE_GRAPHIC_SIZE_OF_TEXT = "calculategraphicsizeoftext"
    RENDER_FILTER_CHAIN = "renderfilterchain"
    PROCESS_FRAMES = "processframes"
    ASSIGN_IMAGE_TO_COLLECTION = "assignimagetocollection"
    REMOVE_IMAGE_FROM_COLLECTION = "removeimagefromcollection"


class SnapshotAction(str, Enum):
    TAKE = "takesnapshot"
    DRAW = "drawsnapshot"
    CLEAR = "clearsnapshot"


class ResultsReturned(str, Enum):
    LAST_COMMAND_RESULT = "lastcommandresult"
    LIST_OF_RESULTS = "listofresults"
    NO_RESULTS = "noresults"


class SaveResultsType(str, Enum):
    JSON_FILE = "jsonfile"
    PROPERTY_FILE = "propertyfile"
    JSON_STRING = "jsonstring"
    DICTIONARY_OBJECT = "dictionaryobject"


FILE_RESULT_TYPES = frozenset({SaveResultsType.JSON_FILE, SaveResultsType.PROPERTY_FILE})


def require_results_destination(document: Mapping[str, Any]) -> None:
    """File result types write to `saveresultsto`, so it must be present."""
    results_type = document.get("saveresultstype")
    if results_type is None:
        return
    kind = SaveResultsType(enum_value(SaveResultsType, results_type, "saveresultstype"))
    if kind in FILE_RESULT_TYPES and "saveresultsto" not in document:
        raise DocumentValidationError(f"saveresultstype {kind.value} needs saveresultsto")


class Command(DocumentSource):
    """A single renderer command: a verb plus keyed options."""

    def __init__(self, verb: CommandVerb | str) -> None:
        self._document: dict[str, Any] = {"command": enum_value(CommandVerb, verb, "command")}

    @property
    def verb(self) -> CommandVerb:
        return CommandVerb(self._document["command"])

    def add_option(self, key: str, value: Any) -> Command:
        if not isinstance(key, str) or not key:
            raise DocumentValidationError("option key must be a non-empty string")
        self._document[key] = value
        return self

    def to_document(self) -> dict[str, Any]:
        return self._document


class ObjectCommand(Command):
    def __init__(self, verb: CommandVerb | str, receiver: dict[str, Any]) -> None:
        super().__init__(verb)
        self.set_receiver(receiver)

    def set_receiver(self, receiver: dict[str, Any]) -> ObjectCommand:
        self.add_option("receiverobject", expect_mapping(receiver, "receiverobject"))
        return self


class DrawElementCommand(ObjectCommand):
    def __init__(self, receiver: dict[str, Any], drawinstructions: Any = None) -> None:
        super().__init__(CommandVerb.DRAW_ELEMENT, receiver)
        if drawinstructions is not None:
            self.set_drawinstructions(drawinstructions)

    def set_drawinstructions(self, drawinstructions: Any) -> DrawElementCommand:
        self.add_option("drawinstructions", as_document(drawinstructions))
        return self


class RenderFilterChainCommand(ObjectCommand):
    def __init__(self, receiver: dict[str, Any], renderinstructions: Any = None) -> None:
        super().__init__(CommandVerb.RENDER_FILTER_CHAIN, receiver)
        if renderinstructions is not None:
            self.set_renderinstructions(renderinstructions)

    def set_renderinstructions(self, renderinstructions: Any) -> RenderFilterChainCommand:
        self.add_option("renderinstructions", as_document(renderinstructions))
        return self


class ProcessFramesCommand(ObjectCommand):
    """Runs per-frame instructions against a movie importer."""

    def __init__(self, receiver: dict[str, Any], create_localcontext: bool = False) -> None:
        super().__init__(CommandVerb.PROCESS_FRAMES, receiver)
        self.add_option("localcontext", bool(create_localcontext))

    def set_tracks(self, tracks: list[dict[str, Any]]) -> ProcessFramesCommand:
        self.add_option("tracks", [expect_mapping(t, "tracks[]") for t in tracks])
        return self

    def set_imageidentifier(self, identifier: str) -> ProcessFramesCommand:
        self.add_option("imageidentifier", identifier)
        return self

    def add_processinstruction(self, instruction: Any) -> ProcessFramesCommand:
        self._document.setdefault("processinstructions", []).append(as_document(instruction))
        return self

    def add_tocleanupcommands(self, command: Any) -> ProcessFramesCommand:
        self._document.setdefault("cleanupcommands", []).append(as_document(command))
        return self


def make_createimporter(image_file_path: str, name: str | None = None) -> Command:
    command = Command(CommandVerb.CREATE)
    command.add_option("objecttype", ObjectType.IMAGE_IMPORTER.value)
    command.add_option("file", image_file_path)
    if name is not None:
        command.add_option("objectname", name)
    return command


def make_createmovieimporter(movie_file_path: str, name: str | None = None) -> Command:
    command = Command(CommandVerb.CREATE)
    command.add_option("objecttype", ObjectType.MOVIE_IMPORTER.value)
    command.add_option("file", movie_file_path)
    if name is not None:
        command.add_option("objectname", name)
    return command


def make_createbitmapcontext(
    width: int | float = 800,
    height: int | float = 600,
    size: dict[str, Any] | None = None,
    preset: str = DEFAULT_BITMAP_PRESET,
    name: str | None = None,
) -> Command:
    command = Command(CommandVerb.CREATE)
    command.add_option("objecttype", ObjectType.BITMAP_CONTEXT.value)
    if name is not None:
        command.add_option("objectname", name)
    if size is None:
        command.add_option("width", width)
        command.add_option("height", height)
    else:
        command.add_option("size", size)
    command.add_option("preset", preset)
    return command


def make_createwindowcontext(
    rect: dict[str, Any] | None = None,
    width: int | float = 800,
    height: int | float = 600,
    xloc: int | float = 100,
    yloc: int | float = 100,
    borderlesswindow: bool = False,
    name: str | None = None,
) -> Command:
    command = Command(CommandVerb.CREATE)
    command.add_option("objecttype", ObjectType.WINDOW_CONTEXT.value)
    if name is not None:
        command.add_option("objectname", name)
    if rect is None:
        command.add_option("width", width)
        command.add_option("height", height)
        command.add_option("x", xloc)
        command.add_option("y", yloc)
    else:
        command.add_option("rect", rect)
    command.add_option("borderlesswindow", bool(borderlesswindow))
    return command


def make_createexporter(export_file_path: str, export_type: str = DEFAULT_EXPORT_TYPE, name: str | None = None) -> Command:
    command = Command(CommandVerb.CREATE)
    command.add_option("objecttype", ObjectType.IMAGE_EXPORTER.value)
    command.add_option("file", export_file_path)
    command.add_option("utifiletype", export_type)
    if name is not None:
        command.add_option("objectname", name)
    return command


def make_createimagefilterchain(filter_chain: Any, name: str | None = None) -> Command:
    command = Command(CommandVerb.CREATE)
    command.add_option("objecttype", ObjectType.IMAGE_FILTER_CHAIN.value)
    command.add_option("imagefilterchaindict", as_document(filter_chain))
    if name is not None:
        command.add_option("objectname", name)
    return command


def make_createpdfcontext(
    size: dict[str, Any] | None = None,
    width: int | float = 480,
    height: int | float = 640,
    filepath: str | None = None,
    name: str | None = None,
) -> Command:
    command = Command(CommandVerb.CREATE)
    command.add_option("objecttype", ObjectType.PDF_CONTEXT.value)
    if size is None:
        command.add_option("width", width)
        command.add_option("height", height)
    else:
        command.add_option("size", size)
    if name is not None:
        command.add_option("objectname", name)
    if filepath is not None:
        command.add_option("file", filepath)
    return command


def make_getnonobjectproperty(property: str = "numberofobjects", objecttype: ObjectType | str | None = None) -> Command:
    """Queries the framework, or a class when `objecttype` is given."""
    command = Command(CommandVerb.GET_PROPERTY)
    command.add_option("propertykey", property)
    if objecttype is not None:
        command.add_option("objecttype", object_type_value(objecttype))
    return command


def make_calculategraphicsizeoftext(
    text: str = "How long is a piece of string",
    postscriptfontname: str | None = None,
    userinterfacefont: str | None = None,
    fontsize: float | None = None,
    strokewidth: float | None = None,
) -> Command:
    command = Command(CommandVerb.CALCULATE_GRAPHIC_SIZE_OF_TEXT)
    command.add_option("objecttype", ObjectType.BITMAP_CONTEXT.value)
    command.add_option("getdatatype", SaveResultsType.DICTIONARY_OBJECT.value)
    inputdata: dict[str, Any] = {"stringtext": text}
    if postscriptfontname is not None:
        inputdata["postscriptfontname"] = postscriptfontname
    if userinterfacefont is not None:
        inputdata["userinterfacefont"] = userinterfacefont
    if fontsize is not None:
        inputdata["fontsize"] = fontsize
    if strokewidth is not None:
        inputdata["stringstrokewidth"] = strokewidth
    command.add_option("inputdata", inputdata)
    return command


def make_get_objectproperty(
    receiver: dict[str, Any], property: str = "objecttype", imageindex: int | None = None
) -> ObjectCommand:
    command = ObjectCommand(CommandVerb.GET_PROPERTY, receiver)
    command.add_option("propertykey", property)
    if imageindex is not None:
        command.add_option("imageindex", imageindex)
    return command


def make_get_objectproperties(receiver: dict[str, Any], imageindex: int | None = None) -> ObjectCommand:
    command = ObjectCommand(CommandVerb.GET_PROPERTIES, receiver)
    if imageindex is not None:
        command.add_option("imageindex", imageindex)
    return command


def make_set_objectproperty(receiver: dict[str, Any], propertykey: str, propertyvalue: Any) -> ObjectCommand:
    command = ObjectCommand(CommandVerb.SET_PROPERTY, receiver)
    command.add_option("propertykey", propertykey)
    command.add_option("propertyvalue", propertyvalue)
    return command


def make_set_objectproperties(
    receiver: dict[str, Any], properties: dict[str, Any], imageindex: int | None = None
) -> ObjectCommand:
    command = ObjectCommand(CommandVerb.SET_PROPERTIES, receiver)
    if imageindex is not None:
        command.add_option("imageindex", imageindex)
    command.add_option("propertiesdictionary", dict(expect_mapping(properties, "propertiesdictionary")))
    return command


def make_add_metadata(
    receiver: dict[str, Any],
    importersource: dict[str, Any],
    importerimageindex: int = 0,
    imageindex: int = 0,
) -> ObjectCommand:
    """Copies image metadata from an importer onto an exporter's image."""
    command = ObjectCommand(CommandVerb.SET_PROPERTIES, receiver)
    command.add_option("imageindex", imageindex)
    command.add_option("secondaryobject", expect_mapping(importersource, "secondaryobject"))
    command.add_option("secondaryimageindex", importerimageindex)
    return command


make_copymetadata = make_add_metadata


def make_drawelement(receiver: dict[str, Any], drawinstructions: Any) -> DrawElementCommand:
    return DrawElementCommand(receiver, drawinstructions=drawinstructions)


def make_renderfilterchain(receiver: dict[str, Any], renderinstructions: Any) -> RenderFilterChainCommand:
    return RenderFilterChainCommand(receiver, renderinstructions=renderinstructions)


def make_addimage(
    receiver: dict[str, Any], image_source: dict[str, Any], imageindex: int | None = None
) -> ObjectCommand:
    command = ObjectCommand(CommandVerb.ADD_IMAGE, receiver)
    command.add_option("secondaryobject", expect_mapping(image_source, "secondaryobject"))
    if imageindex is not None:
        command.add_option("secondaryimageindex", imageindex)
    return command


def make_export(receiver: dict[str, Any]) -> ObjectCommand:
    return ObjectCommand(CommandVerb.EXPORT, receiver)


def make_close(receiver: dict[str, Any]) -> ObjectCommand:
    return ObjectCommand(CommandVerb.CLOSE, receiver)


def make_closeall(objecttype: ObjectType | str | None = None) -> Command:
    command = Command(CommandVerb.CLOSE_ALL)
    if objecttype is not None:
        command.add_option("objecttype", object_type_value(objecttype))
    return command


def make_snapshot(receiver: dict[str, Any], snapshottype: SnapshotAction | str = SnapshotAction.TAKE) -> ObjectCommand:
    command = ObjectCommand(CommandVerb.SNAPSHOT, receiver)
    command.add_option("snapshotaction", enum_value(SnapshotAction, snapshottype, "snapshotaction"))
    return command


def make_getpixeldata(
    receiver: dict[str, Any],
    rectangle: dict[str, Any],
    resultstype: SaveResultsType | str = SaveResultsType.JSON_FILE,
    savelocation: str | None = None,
) -> ObjectCommand:
    """Reads back pixels from `rectangle`.

    When `savelocation` is omitted it must be supplied with `add_option`
    before the command is performed.
    """
    command = ObjectCommand(CommandVerb.GET_PIXEL_DATA, receiver)
    command.add_option("rectangle", expect_mapping(rectangle, "rectangle"))
    command.add_option("saveresultstype", enum_value(SaveResultsType, resultstype, "saveresultstype"))
    if savelocation is not None:
        command.add_option("saveresultsto", savelocation)
    return command


def make_finalizepdfpage_startnew(receiver: dict[str, Any]) -> ObjectCommand:
    return ObjectCommand(CommandVerb.FINALIZE_PAGE, receiver)


def make_processframes(
    receiver: dict[str, Any],
    instructions: list[Any] | None = None,
    create_localcontext: bool = False,
    imageidentifier: str | None = None,
) -> ProcessFramesCommand:
    command = ProcessFramesCommand(receiver, create_localcontext=create_localcontext)
    if imageidentifier is not None:
        command.set_imageidentifier(imageidentifier)
    for instruction in instructions or []:
        command.add_processinstruction(instruction)
    return command


def make_assignimage_tocollection(
    image_source: dict[str, Any], identifier: str, imageindex: int | None = None
) -> Command:
    command = Command(CommandVerb.ASSIGN_IMAGE_TO_COLLECTION)
    command.add_option("sourceobject", expect_mapping(image_source, "sourceobject"))
    if imageindex is not None:
        command.add_option("imageindex", imageindex)
    command.add_option("imageidentifier", identifier)
    return command


def make_removeimage_fromcollection(identifier: str) -> Command:
    command = Command(CommandVerb.REMOVE_IMAGE_FROM_COLLECTION)
    command.add_option("imageidentifier", identifier)
    return command
