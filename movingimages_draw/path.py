from __future__ import annotations

from enum import Enum
from typing import Any

from movingimages_core.documents import DocumentSource, DocumentValidationError, Scalar, expect_list, expect_mapping

DEFAULT_CORNER_RADIUS = 10.0
DEFAULT_CORNER_RADIUSES = (2.0, 4.0, 8.0, 16.0)


class PathElementType(str, Enum):
    MOVE_TO = "pathmoveto"
    LINE_TO = "pathlineto"
    RECTANGLE = "pathrectangle"
    ROUNDED_RECTANGLE = "pathroundedrectangle"
    OVAL = "pathoval"
    BEZIER_CURVE = "pathbeziercurve"
    QUADRATIC_CURVE = "pathquadraticcurve"
    CLOSE_SUBPATH = "pathclosesubpath"


class Path(DocumentSource):
    """Accumulates path segments in drawing order.

    Geometry is not checked: a line-to before any move-to is passed through
    and left for the renderer to interpret.
    """

    def __init__(self) -> None:
        self._segments: list[dict[str, Any]] = []

    @property
    def patharray(self) -> list[dict[str, Any]]:
        return self._segments

    def __len__(self) -> int:
        return len(self._segments)

    def add_rect(self, rect: dict[str, Any]) -> Path:
        return self._append(PathElementType.RECTANGLE, rect=expect_mapping(rect, "rect"))

    def add_roundedrectangle(self, rect: dict[str, Any], radius: Scalar = DEFAULT_CORNER_RADIUS) -> Path:
        return self._append(PathElementType.ROUNDED_RECTANGLE, rect=expect_mapping(rect, "rect"), radius=radius)

    def add_roundedrectangle_withradiuses(
        self, rect: dict[str, Any], radiuses: list[Scalar] | tuple[Scalar, ...] = DEFAULT_CORNER_RADIUSES
    ) -> Path:
        """Radiuses run bottom-left, top-left, top-right, bottom-right."""
        if len(radiuses) != 4:
            raise DocumentValidationError("rounded rectangle needs exactly 4 corner radiuses")
        return self._append(PathElementType.ROUNDED_RECTANGLE, rect=expect_mapping(rect, "rect"), radiuses=list(radiuses))

    def add_oval(self, rect: dict[str, Any]) -> Path:
        return self._append(PathElementType.OVAL, rect=expect_mapping(rect, "rect"))

    def add_bezierpath_withcp1_cp2_endpoint(
        self, controlpoint1: dict[str, Any], controlpoint2: dict[str, Any], endpoint: dict[str, Any]
    ) -> Path:
        return self._append(
            PathElementType.BEZIER_CURVE,
            controlpoint1=controlpoint1,
            controlpoint2=controlpoint2,
            endpoint=endpoint,
        )

    def add_quadraticpath(self, controlpoint: dict[str, Any], endpoint: dict[str, Any]) -> Path:
        return self._append(PathElementType.QUADRATIC_CURVE, controlpoint1=controlpoint, endpoint=endpoint)

    def add_lineto(self, endpoint: dict[str, Any]) -> Path:
        return self._append(PathElementType.LINE_TO, endpoint=expect_mapping(endpoint, "endpoint"))

    def add_moveto(self, point: dict[str, Any]) -> Path:
        return self._append(PathElementType.MOVE_TO, point=expect_mapping(point, "point"))

    def add_closesubpath(self) -> Path:
        return self._append(PathElementType.CLOSE_SUBPATH)

    def add_triangle(self, points: list[dict[str, Any]]) -> Path:
        points = expect_list(points, "points")
        if len(points) != 3:
            raise DocumentValidationError("Needs an array of 3 points")
        self.add_moveto(points[0])
        self.add_lineto(points[1])
        self.add_lineto(points[2])
        self.add_lineto(points[0])
        return self.add_closesubpath()

    def to_document(self) -> list[dict[str, Any]]:
        return self._segments

    def _append(self, element_type: PathElementType, **fields: Any) -> Path:
        segment: dict[str, Any] = {"elementtype": element_type.value}
        segment.update(fields)
        self._segments.append(segment)
        return self
