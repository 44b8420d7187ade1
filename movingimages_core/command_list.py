from __future__ import annotations

import logging
from typing import Any, Callable, Literal

from . import commands as cmd
from .commands import ResultsReturned, SaveResultsType
from .documents import DocumentSource, DocumentValidationError, as_document, enum_value, expect_mapping
from .naming import ObjectNameFactory, uuid_object_name
from .objectid import ObjectType, makeid_withobjecttypeandname

LOGGER = logging.getLogger(__name__)

CommandListState = Literal["empty", "building", "sealed"]


class CommandListSealedError(DocumentValidationError):
    pass


class CommandList(DocumentSource):
    """An ordered batch of commands plus the options controlling how it runs.

    The list is mutable while being built. `seal()` hands back the final
    document and freezes the list: further mutation raises
    `CommandListSealedError` and a new list must be constructed.
    """

    def __init__(self, name_factory: ObjectNameFactory | None = None) -> None:
        self._document: dict[str, Any] = {}
        self._sealed = False
        self._name_factory = name_factory or uuid_object_name

    @property
    def state(self) -> CommandListState:
        if self._sealed:
            return "sealed"
        return "building" if self._document else "empty"

    @property
    def commands(self) -> list[dict[str, Any]]:
        return list(self._document.get("commands", []))

    @property
    def cleanupcommands(self) -> list[dict[str, Any]]:
        return list(self._document.get("cleanupcommands", []))

    def add_command(self, command: Any) -> CommandList:
        self._ensure_mutable("add_command")
        self._document.setdefault("commands", []).append(_command_document(command))
        return self

    def set_commands(self, commands: list[Any]) -> CommandList:
        self._ensure_mutable("set_commands")
        self._document["commands"] = [_command_document(c) for c in commands]
        return self

    def add_tocleanupcommands(self, command: Any) -> CommandList:
        self._ensure_mutable("add_tocleanupcommands")
        self._document.setdefault("cleanupcommands", []).append(_command_document(command))
        return self

    def add_tocleanupcommands_closeobject(self, object_id: dict[str, Any]) -> CommandList:
        return self.add_tocleanupcommands(cmd.make_close(object_id))

    def set_stoponfailure(self, stop_on_failure: bool) -> CommandList:
        self._ensure_mutable("set_stoponfailure")
        self._document["stoponfailure"] = bool(stop_on_failure)
        return self

    def set_informationreturned(self, returns: ResultsReturned | str) -> CommandList:
        self._ensure_mutable("set_informationreturned")
        self._document["returns"] = enum_value(ResultsReturned, returns, "returns")
        return self

    def set_saveresultstype(self, results_type: SaveResultsType | str = SaveResultsType.JSON_FILE) -> CommandList:
        self._ensure_mutable("set_saveresultstype")
        self._document["saveresultstype"] = enum_value(SaveResultsType, results_type, "saveresultstype")
        return self

    def set_saveresultsto(self, path: str) -> CommandList:
        self._ensure_mutable("set_saveresultsto")
        if not isinstance(path, str) or not path:
            raise DocumentValidationError("saveresultsto must be a non-empty path string")
        self._document["saveresultsto"] = path
        return self

    def set_run_asynchronously(self, run_async: bool) -> CommandList:
        self._ensure_mutable("set_run_asynchronously")
        self._document["runasynchronously"] = bool(run_async)
        return self

    def set_variables(self, variables: dict[str, Any]) -> CommandList:
        self._ensure_mutable("set_variables")
        self._document["variables"] = dict(expect_mapping(variables, "variables"))
        return self

    def clear(self) -> CommandList:
        self._ensure_mutable("clear")
        self._document = {}
        return self

    def clear_commandlist(self) -> CommandList:
        """Drops the commands while keeping every other option."""
        self._ensure_mutable("clear_commandlist")
        self._document.pop("commands", None)
        return self

    def to_document(self) -> dict[str, Any]:
        cmd.require_results_destination(self._document)
        return self._document

    def seal(self) -> dict[str, Any]:
        document = self.to_document()
        self._sealed = True
        return document

    def make_createbitmapcontext(
        self,
        size: dict[str, Any] | None = None,
        addtocleanup: bool = True,
        preset: str = cmd.DEFAULT_BITMAP_PRESET,
        name: str | None = None,
    ) -> dict[str, Any]:
        if size is None:
            raise DocumentValidationError("No dimensions provided for bitmap context")
        return self._add_create(
            ObjectType.BITMAP_CONTEXT,
            name,
            addtocleanup,
            lambda object_name: cmd.make_createbitmapcontext(size=size, preset=preset, name=object_name),
        )

    def make_createwindowcontext(
        self,
        rect: dict[str, Any] | None = None,
        addtocleanup: bool = True,
        borderlesswindow: bool = False,
        name: str | None = None,
    ) -> dict[str, Any]:
        if rect is None:
            raise DocumentValidationError("No window rectangle provided")
        return self._add_create(
            ObjectType.WINDOW_CONTEXT,
            name,
            addtocleanup,
            lambda object_name: cmd.make_createwindowcontext(
                rect=rect, borderlesswindow=borderlesswindow, name=object_name
            ),
        )

    def make_createpdfcontext(
        self,
        size: dict[str, Any] | None = None,
        addtocleanup: bool = True,
        filepath: str | None = None,
        name: str | None = None,
    ) -> dict[str, Any]:
        if size is None:
            raise DocumentValidationError("No dimensions provided for pdf context")
        if filepath is None:
            raise DocumentValidationError("No path provided for pdf context")
        return self._add_create(
            ObjectType.PDF_CONTEXT,
            name,
            addtocleanup,
            lambda object_name: cmd.make_createpdfcontext(size=size, filepath=filepath, name=object_name),
        )

    def make_createexporter(
        self,
        export_file_path: str,
        export_type: str = cmd.DEFAULT_EXPORT_TYPE,
        addtocleanup: bool = True,
        name: str | None = None,
    ) -> dict[str, Any]:
        return self._add_create(
            ObjectType.IMAGE_EXPORTER,
            name,
            addtocleanup,
            lambda object_name: cmd.make_createexporter(export_file_path, export_type=export_type, name=object_name),
        )

    def make_createimagefilterchain(
        self, filter_chain: Any, addtocleanup: bool = True, name: str | None = None
    ) -> dict[str, Any]:
        return self._add_create(
            ObjectType.IMAGE_FILTER_CHAIN,
            name,
            addtocleanup,
            lambda object_name: cmd.make_createimagefilterchain(filter_chain, name=object_name),
        )

    def make_createimporter(self, file_path: str, addtocleanup: bool = True, name: str | None = None) -> dict[str, Any]:
        return self._add_create(
            ObjectType.IMAGE_IMPORTER,
            name,
            addtocleanup,
            lambda object_name: cmd.make_createimporter(file_path, name=object_name),
        )

    def make_createmovieimporter(
        self, file_path: str, addtocleanup: bool = True, name: str | None = None
    ) -> dict[str, Any]:
        return self._add_create(
            ObjectType.MOVIE_IMPORTER,
            name,
            addtocleanup,
            lambda object_name: cmd.make_createmovieimporter(file_path, name=object_name),
        )

    def _add_create(
        self,
        objecttype: ObjectType,
        name: str | None,
        addtocleanup: bool,
        build: Callable[[str], cmd.Command],
    ) -> dict[str, Any]:
        self._ensure_mutable(f"create {objecttype.value}")
        object_name = name if name is not None else self._name_factory()
        if name is None:
            LOGGER.debug("generated object name %s for %s", object_name, objecttype.value)
        object_id = makeid_withobjecttypeandname(objecttype, object_name)
        self.add_command(build(object_name))
        if addtocleanup:
            self.add_tocleanupcommands_closeobject(object_id)
        return object_id

    def _ensure_mutable(self, operation: str) -> None:
        if self._sealed:
            raise CommandListSealedError(f"{operation}: command list has been sealed")


def _command_document(command: Any) -> dict[str, Any]:
    document = expect_mapping(as_document(command), "command")
    if "command" not in document:
        raise DocumentValidationError("command document is missing its command verb")
    return document  # type: ignore[return-value]
