from __future__ import annotations

from typing import Any

from movingimages_core.documents import DocumentSource, as_document, expect_mapping


class RendererDocument(DocumentSource):
    """Configuration for a renderer-hosted view.

    Setup commands run once, background commands off the main thread,
    main-thread commands must finish quickly, and the draw instructions are
    applied to the view's own context each time it draws.
    """

    def __init__(self) -> None:
        self._document: dict[str, Any] = {}

    def set_setupcommands(self, commands: Any) -> RendererDocument:
        return self._set_commands("setupcommandsdictionary", commands)

    def set_backgroundcommands(self, commands: Any) -> RendererDocument:
        return self._set_commands("backgroundcommandsdictionary", commands)

    def set_mainthreadcommands(self, commands: Any) -> RendererDocument:
        return self._set_commands("mainthreadcommandsdictionary", commands)

    def set_cleanupcommands(self, commands: Any) -> RendererDocument:
        return self._set_commands("cleanupcommandsdictionary", commands)

    def set_drawinstructions(self, draw_instructions: Any) -> RendererDocument:
        self._document["drawdictionary"] = expect_mapping(as_document(draw_instructions), "drawdictionary")
        return self

    def to_document(self) -> dict[str, Any]:
        return self._document

    def _set_commands(self, key: str, commands: Any) -> RendererDocument:
        self._document[key] = expect_mapping(as_document(commands), key)
        return self
