from __future__ import annotations

from enum import Enum
import logging
from typing import Any, Self

from movingimages_core.documents import (
    DocumentSource,
    DocumentValidationError,
    Scalar,
    as_document,
    enum_value,
    expect_list,
    expect_mapping,
    is_number,
    require_number,
    require_scalar,
)
from movingimages_core.geometry import make_point
from movingimages_core.transforms import ElementTransform

LOGGER = logging.getLogger(__name__)


class ElementType(str, Enum):
    FILL_RECTANGLE = "fillrectangle"
    STROKE_RECTANGLE = "strokerectangle"
    FILL_OVAL = "filloval"
    STROKE_OVAL = "strokeoval"
    DRAW_LINE = "drawline"
    DRAW_LINES = "drawlines"
    FILL_ROUNDED_RECTANGLE = "fillroundedrectangle"
    STROKE_ROUNDED_RECTANGLE = "strokeroundedrectangle"
    FILL_PATH = "fillpath"
    STROKE_PATH = "strokepath"
    FILL_AND_STROKE_PATH = "fillandstrokepath"
    DRAW_BASIC_STRING = "drawbasicstring"
    LINEAR_GRADIENT_FILL = "lineargradientfill"
    DRAW_IMAGE = "drawimage"
    ARRAY_OF_ELEMENTS = "arrayofelements"


class BlendMode(str, Enum):
    NORMAL = "kCGBlendModeNormal"
    MULTIPLY = "kCGBlendModeMultiply"
    SCREEN = "kCGBlendModeScreen"
    OVERLAY = "kCGBlendModeOverlay"
    DARKEN = "kCGBlendModeDarken"
    LIGHTEN = "kCGBlendModeLighten"
    COLOR_DODGE = "kCGBlendModeColorDodge"
    COLOR_BURN = "kCGBlendModeColorBurn"
    SOFT_LIGHT = "kCGBlendModeSoftLight"
    HARD_LIGHT = "kCGBlendModeHardLight"
    DIFFERENCE = "kCGBlendModeDifference"
    EXCLUSION = "kCGBlendModeExclusion"
    HUE = "kCGBlendModeHue"
    SATURATION = "kCGBlendModeSaturation"
    COLOR = "kCGBlendModeColor"
    LUMINOSITY = "kCGBlendModeLuminosity"
    CLEAR = "kCGBlendModeClear"
    COPY = "kCGBlendModeCopy"
    SOURCE_IN = "kCGBlendModeSourceIn"
    SOURCE_OUT = "kCGBlendModeSourceOut"
    SOURCE_ATOP = "kCGBlendModeSourceAtop"
    DESTINATION_OVER = "kCGBlendModeDestinationOver"
    DESTINATION_IN = "kCGBlendModeDestinationIn"
    DESTINATION_OUT = "kCGBlendModeDestinationOut"
    DESTINATION_ATOP = "kCGBlendModeDestinationAtop"
    XOR = "kCGBlendModeXOR"
    PLUS_DARKER = "kCGBlendModePlusDarker"
    PLUS_LIGHTER = "kCGBlendModePlusLighter"


class LineCap(str, Enum):
    BUTT = "kCGLineCapButt"
    ROUND = "kCGLineCapRound"
    SQUARE = "kCGLineCapSquare"


class LineJoin(str, Enum):
    MITER = "kCGLineJoinMiter"
    ROUND = "kCGLineJoinRound"
    BEVEL = "kCGLineJoinBevel"


class InterpolationQuality(str, Enum):
    DEFAULT = "kCGInterpolationDefault"
    NONE = "kCGInterpolationNone"
    LOW = "kCGInterpolationLow"
    MEDIUM = "kCGInterpolationMedium"
    HIGH = "kCGInterpolationHigh"


class TextAlignment(str, Enum):
    LEFT = "kCTTextAlignmentLeft"
    RIGHT = "kCTTextAlignmentRight"
    CENTER = "kCTTextAlignmentCenter"
    JUSTIFIED = "kCTTextAlignmentJustified"
    NATURAL = "kCTTextAlignmentNatural"


PATH_ELEMENT_TYPES = frozenset({ElementType.FILL_PATH, ElementType.STROKE_PATH, ElementType.FILL_AND_STROKE_PATH})

_SPECIALIZED_BUILDERS = {
    ElementType.DRAW_BASIC_STRING: "DrawBasicStringElement",
    ElementType.LINEAR_GRADIENT_FILL: "LinearGradientFillElement",
    ElementType.DRAW_IMAGE: "DrawImageElement",
}

# Each entry lists field groups; one field out of every group must be set.
_REQUIRED_FIELDS: dict[ElementType, tuple[tuple[str, ...], ...]] = {
    ElementType.FILL_RECTANGLE: (("rect",),),
    ElementType.STROKE_RECTANGLE: (("rect",),),
    ElementType.FILL_OVAL: (("rect",),),
    ElementType.STROKE_OVAL: (("rect",),),
    ElementType.DRAW_LINE: (("line",),),
    ElementType.DRAW_LINES: (("points",),),
    ElementType.FILL_ROUNDED_RECTANGLE: (("rect",), ("radius", "radiuses")),
    ElementType.STROKE_ROUNDED_RECTANGLE: (("rect",), ("radius", "radiuses")),
    ElementType.FILL_PATH: (("arrayofpathelements",),),
    ElementType.STROKE_PATH: (("arrayofpathelements",),),
    ElementType.FILL_AND_STROKE_PATH: (("arrayofpathelements",),),
    ElementType.ARRAY_OF_ELEMENTS: (("arrayofelements",),),
}


class Shadow(DocumentSource):
    def __init__(
        self,
        color: dict[str, Any] | None = None,
        offset: dict[str, Any] | None = None,
        blur: Scalar | None = None,
    ) -> None:
        self._document: dict[str, Any] = {}
        if color is not None:
            self.set_color(color)
        if offset is not None:
            self.set_offset(offset)
        if blur is not None:
            self.set_blur(blur)

    def set_color(self, color: dict[str, Any]) -> Shadow:
        self._document["fillcolor"] = expect_mapping(color, "shadow.fillcolor")
        return self

    def set_offset(self, offset: dict[str, Any]) -> Shadow:
        self._document["offset"] = expect_mapping(offset, "shadow.offset")
        return self

    def set_blur(self, blur: Scalar) -> Shadow:
        self._document["blur"] = require_scalar(blur, "shadow.blur")
        return self

    def to_document(self) -> dict[str, Any]:
        return dict(self._document)


class _DrawInstruction(DocumentSource):
    """Fields shared by every draw instruction, plus its single transform slot."""

    def __init__(self, element_type: ElementType) -> None:
        self._document: dict[str, Any] = {"elementtype": element_type.value}
        self._transform: ElementTransform | None = None

    @property
    def element_type(self) -> ElementType:
        return ElementType(self._document["elementtype"])

    @property
    def transform(self) -> ElementTransform | None:
        return self._transform

    def set_blendmode(self, blendmode: BlendMode | str) -> Self:
        self._document["blendmode"] = enum_value(BlendMode, blendmode, "blendmode")
        return self

    def set_shadow(self, shadow: Shadow | dict[str, Any]) -> Self:
        self._document["shadow"] = expect_mapping(as_document(shadow), "shadow")
        return self

    def set_elementdebugname(self, name: str) -> Self:
        self._document["elementdebugname"] = str(name)
        return self

    def set_variables(self, variables: dict[str, Any]) -> Self:
        self._document["variables"] = dict(expect_mapping(variables, "variables"))
        return self

    def set_contexttransformations(self, transformations: list[dict[str, Any]]) -> Self:
        self._transform = ElementTransform.context(transformations)
        return self

    def set_affinetransform(self, affine: dict[str, Any]) -> Self:
        self._transform = ElementTransform.affine(affine)
        return self

    def clear_transform(self) -> Self:
        self._transform = None
        return self

    def to_document(self) -> dict[str, Any]:
        self._validate()
        document = dict(self._document)
        if self._transform is not None:
            self._transform.apply(document)
        return document

    def _validate(self) -> None:
        pass

    def _set(self, key: str, value: Any) -> Self:
        self._document[key] = value
        return self

    def _error(self, message: str) -> DocumentValidationError:
        name = self._document.get("elementdebugname")
        where = self._document["elementtype"] if name is None else f"{self._document['elementtype']} '{name}'"
        return DocumentValidationError(f"{where}: {message}")


class DrawElement(_DrawInstruction):
    """Shape drawing plus the `arrayofelements` container."""

    def __init__(self, element_type: ElementType | str = ElementType.FILL_RECTANGLE) -> None:
        super().__init__(_shape_element_type(element_type))

    def set_elementtype(self, element_type: ElementType | str) -> DrawElement:
        """Re-tags the element. Fields set for the previous tag are kept as they are."""
        new_type = _shape_element_type(element_type)
        LOGGER.debug("re-tagging draw element %s -> %s", self._document["elementtype"], new_type.value)
        self._document["elementtype"] = new_type.value
        return self

    def set_fillcolor(self, color: dict[str, Any]) -> DrawElement:
        return self._set("fillcolor", expect_mapping(color, "fillcolor"))

    def set_strokecolor(self, color: dict[str, Any]) -> DrawElement:
        return self._set("strokecolor", expect_mapping(color, "strokecolor"))

    def set_linewidth(self, width: Scalar) -> DrawElement:
        return self._set("linewidth", require_scalar(width, "linewidth"))

    def set_linecap(self, linecap: LineCap | str) -> DrawElement:
        return self._set("linecap", enum_value(LineCap, linecap, "linecap"))

    def set_linejoin(self, linejoin: LineJoin | str) -> DrawElement:
        return self._set("linejoin", enum_value(LineJoin, linejoin, "linejoin"))

    def set_miter(self, miter: float) -> DrawElement:
        return self._set("miter", require_number(miter, "miter"))

    def set_rectangle(self, rect: dict[str, Any]) -> DrawElement:
        return self._set("rect", expect_mapping(rect, "rect"))

    def set_line(self, line: dict[str, Any]) -> DrawElement:
        return self._set("line", expect_mapping(line, "line"))

    def set_points(self, points: list[dict[str, Any]]) -> DrawElement:
        return self._set("points", expect_list(points, "points"))

    def set_radius(self, radius: Scalar) -> DrawElement:
        return self._set("radius", require_scalar(radius, "radius"))

    def set_radiuses(self, radiuses: list[Scalar]) -> DrawElement:
        if len(expect_list(radiuses, "radiuses")) != 4:
            raise self._error("radiuses needs exactly 4 corner radiuses")
        return self._set("radiuses", radiuses)

    def set_arrayofpathelements(self, path: Any) -> DrawElement:
        if self.element_type not in PATH_ELEMENT_TYPES:
            raise self._error("a path can only be assigned to fillpath, strokepath or fillandstrokepath")
        return self._set("arrayofpathelements", expect_list(as_document(path), "arrayofpathelements"))

    def set_startpoint(self, point: dict[str, Any]) -> DrawElement:
        return self._set("startpoint", expect_mapping(point, "startpoint"))

    def add_drawelement_toarrayofelements(self, element: Any) -> DrawElement:
        if self.element_type != ElementType.ARRAY_OF_ELEMENTS:
            raise self._error("child draw elements can only be added to an arrayofelements element")
        child = expect_mapping(as_document(element), "arrayofelements[]")
        self._document.setdefault("arrayofelements", []).append(child)
        return self

    def _validate(self) -> None:
        for group in _REQUIRED_FIELDS.get(self.element_type, ()):
            if not any(field in self._document for field in group):
                raise self._error(f"missing required field {' or '.join(group)}")


class LinearGradientFillElement(_DrawInstruction):
    def __init__(self) -> None:
        super().__init__(ElementType.LINEAR_GRADIENT_FILL)
        self._document["startpoint"] = make_point(0.0, 0.0)

    def set_line(self, line: dict[str, Any]) -> LinearGradientFillElement:
        return self._set("line", expect_mapping(line, "line"))

    def set_arrayofpathelements(self, path: Any) -> LinearGradientFillElement:
        return self._set("arrayofpathelements", expect_list(as_document(path), "arrayofpathelements"))

    def set_startpoint(self, point: dict[str, Any]) -> LinearGradientFillElement:
        return self._set("startpoint", expect_mapping(point, "startpoint"))

    def set_arrayoflocations_andarrayofcolors(
        self, locations: list[Scalar], colors: list[dict[str, Any]]
    ) -> LinearGradientFillElement:
        locations = expect_list(locations, "arrayoflocations")
        colors = expect_list(colors, "arrayofcolors")
        if len(locations) != len(colors):
            raise self._error("Linear gradient fill needs a color for each location.")
        for i, location in enumerate(locations):
            require_scalar(location, f"arrayoflocations[{i}]")
            if is_number(location) and not 0.0 <= location <= 1.0:
                raise self._error(f"arrayoflocations[{i}] must be within 0.0 and 1.0")
        self._document["arrayoflocations"] = list(locations)
        self._document["arrayofcolors"] = list(colors)
        return self

    def _validate(self) -> None:
        for field in ("line", "arrayoflocations", "arrayofpathelements"):
            if field not in self._document:
                raise self._error(f"missing required field {field}")


class DrawBasicStringElement(_DrawInstruction):
    def __init__(self) -> None:
        super().__init__(ElementType.DRAW_BASIC_STRING)

    @property
    def text_drawing_mode(self) -> str:
        """`fill` without a stroke width, `stroke` for a positive one, `fillandstroke` for a negative one."""
        width = self._document.get("stringstrokewidth")
        if width is None or width == 0:
            return "fill"
        return "stroke" if width > 0 else "fillandstroke"

    def set_stringtext(self, text: str) -> DrawBasicStringElement:
        if not isinstance(text, str):
            raise self._error("stringtext must be a string")
        return self._set("stringtext", text)

    def set_point_textdrawnfrom(self, point: dict[str, Any]) -> DrawBasicStringElement:
        return self._set("point", expect_mapping(point, "point"))

    def set_postscriptfontname(self, font_name: str) -> DrawBasicStringElement:
        self._document.pop("userinterfacefont", None)
        return self._set("postscriptfontname", str(font_name))

    def set_userinterfacefont(self, font_name: str) -> DrawBasicStringElement:
        self._document.pop("postscriptfontname", None)
        return self._set("userinterfacefont", str(font_name))

    def set_fontsize(self, size: float) -> DrawBasicStringElement:
        return self._set("fontsize", require_number(size, "fontsize"))

    def set_fillcolor(self, color: dict[str, Any]) -> DrawBasicStringElement:
        return self._set("fillcolor", expect_mapping(color, "fillcolor"))

    def set_strokecolor(self, color: dict[str, Any]) -> DrawBasicStringElement:
        return self._set("strokecolor", expect_mapping(color, "strokecolor"))

    def set_stringstrokewidth(self, width: float) -> DrawBasicStringElement:
        return self._set("stringstrokewidth", require_number(width, "stringstrokewidth"))

    def set_arrayofpathelements(self, path: Any) -> DrawBasicStringElement:
        return self._set("arrayofpathelements", expect_list(as_document(path), "arrayofpathelements"))

    def set_textalignment(self, alignment: TextAlignment | str) -> DrawBasicStringElement:
        return self._set("textalignment", enum_value(TextAlignment, alignment, "textalignment"))

    def _validate(self) -> None:
        if "stringtext" not in self._document:
            raise self._error("missing required field stringtext")
        if "point" not in self._document and "arrayofpathelements" not in self._document:
            raise self._error("needs a point or a path to draw the text into")
        if "postscriptfontname" in self._document:
            if "fontsize" not in self._document:
                raise self._error("a postscript font needs a fontsize")
        elif "userinterfacefont" not in self._document:
            raise self._error("needs a postscriptfontname or a userinterfacefont")


class DrawImageElement(_DrawInstruction):
    def __init__(self) -> None:
        super().__init__(ElementType.DRAW_IMAGE)

    def set_imagesource(self, source_object: dict[str, Any], imageindex: int | None = None) -> DrawImageElement:
        self._document["sourceobject"] = expect_mapping(source_object, "sourceobject")
        if imageindex is None:
            self._document.pop("imageindex", None)
        else:
            self._document["imageindex"] = int(imageindex)
        return self

    def set_destinationrectangle(self, rect: dict[str, Any]) -> DrawImageElement:
        return self._set("destinationrectangle", expect_mapping(rect, "destinationrectangle"))

    def set_sourcerectangle(self, rect: dict[str, Any]) -> DrawImageElement:
        return self._set("sourcerectangle", expect_mapping(rect, "sourcerectangle"))

    def set_interpolationquality(self, quality: InterpolationQuality | str) -> DrawImageElement:
        return self._set("interpolationquality", enum_value(InterpolationQuality, quality, "interpolationquality"))

    def _validate(self) -> None:
        for field in ("sourceobject", "destinationrectangle"):
            if field not in self._document:
                raise self._error(f"missing required field {field}")


def _shape_element_type(element_type: ElementType | str) -> ElementType:
    kind = ElementType(enum_value(ElementType, element_type, "elementtype"))
    if kind in _SPECIALIZED_BUILDERS:
        raise DocumentValidationError(f"use {_SPECIALIZED_BUILDERS[kind]} for {kind.value} elements")
    return kind
