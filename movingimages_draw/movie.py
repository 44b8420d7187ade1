from __future__ import annotations

from typing import Any

from movingimages_core.documents import DocumentSource, DocumentValidationError, as_document, expect_list, require_number

MOVIE_NEXT_SAMPLE = "movienextsample"
DEFAULT_TIMESCALE = 600

MEDIA_TYPES = ("soun", "clcp", "meta", "muxx", "sbtl", "text", "tmcd", "vide")


def make_movietime_fromseconds(seconds: float) -> dict[str, Any]:
    return {"time": require_number(seconds, "time")}


def make_movietime(timevalue: int | None = None, timescale: int | None = None) -> dict[str, Any]:
    """A rational movie time: `timevalue / timescale` seconds from the start."""
    if timevalue is None:
        raise DocumentValidationError("The movie time value was not specified.")
    if timescale is None:
        raise DocumentValidationError("The movie time scale was not specified.")
    if int(timescale) <= 0:
        raise DocumentValidationError("The movie time scale must be > 0.")
    return {"value": int(timevalue), "timescale": int(timescale), "flags": 1, "epoch": 0}


def make_movietime_nextsample() -> str:
    return MOVIE_NEXT_SAMPLE


def make_movietrackid_from_mediatype(trackindex: int | None = None, mediatype: str | None = None) -> dict[str, Any]:
    if trackindex is None:
        raise DocumentValidationError("The track index was not specified.")
    track_id: dict[str, Any] = {"trackindex": int(trackindex)}
    if mediatype is not None:
        if mediatype not in MEDIA_TYPES:
            raise DocumentValidationError(f"unknown track media type: {mediatype!r}")
        track_id["mediatype"] = mediatype
    return track_id


def make_movietrackid_from_characteristic(
    trackindex: int | None = None, characteristic: str | None = None
) -> dict[str, Any]:
    if trackindex is None:
        raise DocumentValidationError("The track index was not specified.")
    track_id: dict[str, Any] = {"trackindex": int(trackindex)}
    if characteristic is not None:
        track_id["mediacharacteristic"] = characteristic
    return track_id


def make_movietrackid_from_persistenttrackid(trackid: int) -> dict[str, Any]:
    return {"trackid": int(trackid)}


class ProcessMovieFrameInstructions(DocumentSource):
    """Commands to run against one movie frame, addressed by `frametime`."""

    def __init__(self) -> None:
        self._document: dict[str, Any] = {}

    def set_frametime(self, frame_time: dict[str, Any] | str) -> ProcessMovieFrameInstructions:
        if isinstance(frame_time, str) and frame_time != MOVIE_NEXT_SAMPLE:
            raise DocumentValidationError(f"frametime must be a movie time or {MOVIE_NEXT_SAMPLE!r}")
        self._document["frametime"] = frame_time
        return self

    def set_commands(self, commands: list[Any]) -> ProcessMovieFrameInstructions:
        self._document["commands"] = [as_document(c) for c in expect_list(commands, "commands")]
        return self

    def add_command(self, command: Any) -> ProcessMovieFrameInstructions:
        self._document.setdefault("commands", []).append(as_document(command))
        return self

    def set_imageidentifier(self, identifier: str) -> ProcessMovieFrameInstructions:
        self._document["imageidentifier"] = str(identifier)
        return self

    def to_document(self) -> dict[str, Any]:
        if "frametime" not in self._document:
            raise DocumentValidationError("process movie frame instructions need a frametime")
        if not self._document.get("commands"):
            raise DocumentValidationError("process movie frame instructions need at least one command")
        return self._document
