from __future__ import annotations

from enum import Enum
from typing import Any

from .documents import DocumentValidationError


class ObjectIdentifierError(DocumentValidationError):
    pass


class ObjectType(str, Enum):
    BITMAP_CONTEXT = "bitmapcontext"
    IMAGE_IMPORTER = "imageimporter"
    IMAGE_EXPORTER = "imageexporter"
    IMAGE_FILTER_CHAIN = "imagefilterchain"
    PDF_CONTEXT = "pdfcontext"
    WINDOW_CONTEXT = "nsgraphicscontext"
    MOVIE_IMPORTER = "movieimporter"


def object_type_value(objecttype: ObjectType | str) -> str:
    try:
        return ObjectType(objecttype).value
    except ValueError as exc:
        raise ObjectIdentifierError(f"unknown object type: {objecttype!r}") from exc


def makeid_withobjecttypeandname(objecttype: ObjectType | str, name: str) -> dict[str, Any]:
    if not isinstance(name, str) or not name:
        raise ObjectIdentifierError("objectname must be a non-empty string")
    return {"objecttype": object_type_value(objecttype), "objectname": name}


def make_objectid(
    objectreference: int | None = None,
    objecttype: ObjectType | str | None = None,
    objectname: str | None = None,
    objectindex: int | None = None,
) -> dict[str, Any]:
    """Resolves the preferred identifier shape: reference, then name, then index."""
    if objectreference is not None:
        return {"objectreference": int(objectreference)}
    if objecttype is None:
        raise ObjectIdentifierError("object identifier needs an objectreference or an objecttype")
    if objectname is not None:
        return makeid_withobjecttypeandname(objecttype, objectname)
    if objectindex is not None:
        return {"objecttype": object_type_value(objecttype), "objectindex": int(objectindex)}
    raise ObjectIdentifierError(f"object identifier for {objecttype!r} needs an objectname or objectindex")


def makeid_withfilternameid(filtername_id: str) -> dict[str, Any]:
    if not isinstance(filtername_id, str) or not filtername_id:
        raise ObjectIdentifierError("filter identifier must be a non-empty string")
    return {"mifiltername": filtername_id}


def makeid_withfilterindex(filter_index: int) -> dict[str, Any]:
    return {"cifilterindex": int(filter_index)}
