from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Protocol, Union, runtime_checkable

Number = Union[int, float]
# A scalar field either holds a literal number or an equation string the
# renderer evaluates against the command list's variables.
Scalar = Union[int, float, str]


class MovingImagesError(Exception):
    pass


class DocumentValidationError(MovingImagesError, ValueError):
    pass


class EquationArithmeticError(DocumentValidationError):
    pass


@runtime_checkable
class DocumentSource(Protocol):
    """Anything that can render itself as a renderer wire document."""

    def to_document(self) -> Any: ...


def as_document(value: Any) -> Any:
    if isinstance(value, DocumentSource):
        return value.to_document()
    return value


def is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def require_number(value: object, field_name: str) -> float:
    if not is_number(value):
        raise DocumentValidationError(f"{field_name} must be a number")
    return float(value)  # type: ignore[arg-type]


def require_scalar(value: object, field_name: str) -> Scalar:
    if isinstance(value, str):
        return value
    if not is_number(value):
        raise DocumentValidationError(f"{field_name} must be a number or an equation string")
    return value  # type: ignore[return-value]


def expect_mapping(value: object, field_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise DocumentValidationError(f"{field_name} must be an object")
    return value


def expect_list(value: object, field_name: str) -> list[Any]:
    if not isinstance(value, list):
        raise DocumentValidationError(f"{field_name} must be a list")
    return value


def enum_value(enum_type: type[Enum], value: Any, field_name: str) -> str:
    """Coerces a tag into `enum_type`, rejecting anything outside the closed set."""
    try:
        return enum_type(value).value
    except ValueError as exc:
        raise DocumentValidationError(f"{field_name} is invalid: {value!r}") from exc
