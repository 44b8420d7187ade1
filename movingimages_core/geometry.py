from __future__ import annotations

from typing import Any

from .documents import EquationArithmeticError, Scalar, is_number, require_number, require_scalar

DEFAULT_RECT_ORIGIN = (0.0, 0.0)
DEFAULT_RECT_SIZE = (100.0, 100.0)


def make_point(x: Scalar = 0.0, y: Scalar = 0.0) -> dict[str, Any]:
    return {"x": require_scalar(x, "point.x"), "y": require_scalar(y, "point.y")}


def point_addxy(point: dict[str, Any], x: float = 0.0, y: float = 0.0) -> dict[str, Any]:
    """Offsets a point in place. Fails untouched if either coordinate is an equation."""
    _require_numeric_fields(point, ("x", "y"), "point")
    dx = require_number(x, "x offset")
    dy = require_number(y, "y offset")
    point["x"] = float(point["x"]) + dx
    point["y"] = float(point["y"]) + dy
    return point


def point_setx_equation(point: dict[str, Any], equation: str) -> dict[str, Any]:
    point["x"] = _require_equation(equation, "point.x")
    return point


def point_sety_equation(point: dict[str, Any], equation: str) -> dict[str, Any]:
    point["y"] = _require_equation(equation, "point.y")
    return point


def make_size(width: Scalar = 100.0, height: Scalar = 100.0) -> dict[str, Any]:
    return {
        "width": require_scalar(width, "size.width"),
        "height": require_scalar(height, "size.height"),
    }


def size_addwidthheight(size: dict[str, Any], width: float = 0.0, height: float = 0.0) -> dict[str, Any]:
    _require_numeric_fields(size, ("width", "height"), "size")
    dw = require_number(width, "width offset")
    dh = require_number(height, "height offset")
    size["width"] = float(size["width"]) + dw
    size["height"] = float(size["height"]) + dh
    return size


def size_setwidth_equation(size: dict[str, Any], equation: str) -> dict[str, Any]:
    size["width"] = _require_equation(equation, "size.width")
    return size


def size_setheight_equation(size: dict[str, Any], equation: str) -> dict[str, Any]:
    size["height"] = _require_equation(equation, "size.height")
    return size


def make_rectangle(
    origin: dict[str, Any] | None = None,
    size: dict[str, Any] | None = None,
    width: Scalar | None = None,
    height: Scalar | None = None,
    xloc: Scalar | None = None,
    yloc: Scalar | None = None,
) -> dict[str, Any]:
    """Builds `{origin, size}`.

    An explicit `origin` or `size` wins over the `xloc`/`yloc` and
    `width`/`height` convenience fields; missing pieces fall back to an origin
    of (0, 0) and a size of 100 x 100.
    """
    if origin is None:
        origin = make_point(
            DEFAULT_RECT_ORIGIN[0] if xloc is None else xloc,
            DEFAULT_RECT_ORIGIN[1] if yloc is None else yloc,
        )
    if size is None:
        size = make_size(
            DEFAULT_RECT_SIZE[0] if width is None else width,
            DEFAULT_RECT_SIZE[1] if height is None else height,
        )
    return {"origin": origin, "size": size}


def rect_setwidth_toequation(rect: dict[str, Any], equation: str) -> dict[str, Any]:
    rect["size"]["width"] = _require_equation(equation, "rect.size.width")
    return rect


def rect_setheight_toequation(rect: dict[str, Any], equation: str) -> dict[str, Any]:
    rect["size"]["height"] = _require_equation(equation, "rect.size.height")
    return rect


def rect_setx_toequation(rect: dict[str, Any], equation: str) -> dict[str, Any]:
    rect["origin"]["x"] = _require_equation(equation, "rect.origin.x")
    return rect


def rect_sety_toequation(rect: dict[str, Any], equation: str) -> dict[str, Any]:
    rect["origin"]["y"] = _require_equation(equation, "rect.origin.y")
    return rect


def rect_inset_forstroking(rect: dict[str, Any]) -> dict[str, Any]:
    """Moves a rect onto pixel centres so a 1px stroke lands on whole pixels."""
    origin = rect["origin"]
    size = rect["size"]
    _require_numeric_fields(origin, ("x", "y"), "rect.origin")
    _require_numeric_fields(size, ("width", "height"), "rect.size")
    origin["x"] = float(origin["x"]) + 0.5
    origin["y"] = float(origin["y"]) + 0.5
    if size["width"] > 1.0:
        size["width"] = float(size["width"]) - 1.0
    if size["height"] > 1.0:
        size["height"] = float(size["height"]) - 1.0
    return rect


def make_line(start: dict[str, Any], end: dict[str, Any]) -> dict[str, Any]:
    return {"startpoint": start, "endpoint": end}


def _require_numeric_fields(doc: dict[str, Any], fields: tuple[str, ...], name: str) -> None:
    for field in fields:
        if not is_number(doc.get(field)):
            raise EquationArithmeticError(f"can't add when {name}.{field} is not a number")


def _require_equation(value: object, field_name: str) -> str:
    if not isinstance(value, str):
        raise EquationArithmeticError(f"{field_name} equation must be a string")
    return value
