from __future__ import annotations

import math
from typing import Any

from movingimages_core.documents import (
    DocumentSource,
    DocumentValidationError,
    Number,
    as_document,
    expect_list,
    expect_mapping,
    is_number,
    require_number,
)
from movingimages_core.transforms import make_affinetransform


def make_ciimageproperty(key: str = "inputImage", value: dict[str, Any] | None = None) -> dict[str, Any]:
    """An image input. `value` names an object or an earlier filter in the chain."""
    prop: dict[str, Any] = {"cifilterkey": key, "cifiltervalueclass": "CIImage"}
    if value is not None:
        prop["cifiltervalue"] = expect_mapping(value, "cifiltervalue")
    return prop


def addimagesource_tociimageproperty(prop: dict[str, Any], image_source: dict[str, Any]) -> dict[str, Any]:
    prop["cifiltervalue"] = expect_mapping(image_source, "cifiltervalue")
    return prop


def make_civectorproperty_fromstring(key: str = "inputExtent", value: str = "[ 0 0 100 100 ]") -> dict[str, Any]:
    return {"cifilterkey": key, "cifiltervalue": value, "cifiltervalueclass": "CIVector"}


def make_civectorproperty_fromarray(key: str = "inputCenter", value: list[Number] | None = None) -> dict[str, Any]:
    items = [50.0, 50.0] if value is None else value
    text = "[" + "".join(f" {_component_text(v, key)}" for v in items) + " ]"
    return make_civectorproperty_fromstring(key=key, value=text)


def make_cicolorproperty_fromstring(key: str = "inputColor", value: str = "0 0 1 0") -> dict[str, Any]:
    return {"cifilterkey": key, "cifiltervalue": value, "cifiltervalueclass": "CIColor"}


def make_cicolorproperty_fromarray(key: str = "inputColor", value: list[Number] | None = None) -> dict[str, Any]:
    """Components run red, green, blue, alpha in the generic RGB space."""
    components = [0, 0, 0, 1] if value is None else value
    if len(components) != 4:
        raise DocumentValidationError(f"{key}: color needs 4 components (r g b a)")
    return make_cicolorproperty_fromstring(key=key, value=" ".join(_component_text(v, key) for v in components))


def make_cicolorproperty_fromhash(key: str = "inputColor", value: dict[str, Any] | None = None) -> dict[str, Any]:
    color = value
    if color is None:
        color = {"red": 1.0, "green": 1.0, "blue": 1.0, "alpha": 1.0, "colorcolorprofilename": "kCGColorSpaceSRGB"}
    return {"cifilterkey": key, "cifiltervalue": expect_mapping(color, key), "cifiltervalueclass": "CIColor"}


def make_cinumberproperty(key: str = "inputRadius", value: Number = 100.0) -> dict[str, Any]:
    return {"cifilterkey": key, "cifiltervalue": value}


def make_cinumberproperty_withmin_max_default(
    key: str = "inputAngle",
    min: Number = 0.0,
    max: Number = math.pi * 2.0,
    default: Number = math.pi,
) -> dict[str, Any]:
    if min > max:
        raise DocumentValidationError(f"{key}: min {min} is greater than max {max}")
    return {"cifilterkey": key, "cifiltervalue": default, "max": max, "min": min, "default": default}


def clamp_to_property_range(prop: dict[str, Any], value: Number) -> Number:
    """Clamps into [min, max], but only when the property carries both bounds."""
    low = prop.get("min")
    high = prop.get("max")
    if low is None or high is None:
        return value
    if value < low:
        return low
    if value > high:
        return high
    return value


def assignfloat_tonumberproperty(prop: dict[str, Any], value: Number) -> dict[str, Any]:
    prop["cifiltervalue"] = clamp_to_property_range(prop, require_number(value, prop.get("cifilterkey", "value")))
    return prop


def assigninteger_tonumberproperty(prop: dict[str, Any], value: Number) -> dict[str, Any]:
    number = int(require_number(value, prop.get("cifilterkey", "value")))
    prop["cifiltervalue"] = clamp_to_property_range(prop, number)
    return prop


def make_affinetransformproperty(
    key: str = "inputTransform",
    m11: float = 1.0,
    m12: float = 0.0,
    m21: float = 0.0,
    m22: float = 1.0,
    tX: float = 0.0,
    tY: float = 0.0,
) -> dict[str, Any]:
    return {
        "cifilterkey": key,
        "cifiltervalue": make_affinetransform(m11, m12, m21, m22, tX, tY),
        "cifiltervalueclass": "NSAffineTransform",
    }


class Filter(DocumentSource):
    """One CoreImage filter in a chain, optionally named so later filters can use its output."""

    def __init__(self, filter_name: str, identifier: str | None = None) -> None:
        if not filter_name:
            raise DocumentValidationError("cifiltername must not be empty")
        self._document: dict[str, Any] = {"cifiltername": str(filter_name)}
        if identifier is not None:
            self._document["mifiltername"] = str(identifier)

    @property
    def identifier(self) -> str | None:
        return self._document.get("mifiltername")

    @property
    def properties(self) -> list[dict[str, Any]]:
        return list(self._document.get("cifilterproperties", []))

    def add_property(self, prop: dict[str, Any]) -> Filter:
        prop = expect_mapping(prop, "cifilterproperties[]")
        if "cifilterkey" not in prop:
            raise DocumentValidationError(f"{self._document['cifiltername']}: filter property needs a cifilterkey")
        self._document.setdefault("cifilterproperties", []).append(prop)
        return self

    def add_properties(self, props: list[dict[str, Any]]) -> Filter:
        for prop in expect_list(props, "cifilterproperties"):
            self.add_property(prop)
        return self

    def to_document(self) -> dict[str, Any]:
        return self._document

    @staticmethod
    def with_input_image(filter_name: str, input_image: dict[str, Any], identifier: str | None = None) -> Filter:
        return Filter(filter_name, identifier).add_property(make_ciimageproperty(value=input_image))


class FilterChain(DocumentSource):
    """Filters applied in order, rendered into `render_destination`.

    Image inputs may name the output of an earlier filter by identifier or
    index, so a chain can branch and merge; pointing at the same or a later
    filter is rejected when the chain is serialized.
    """

    def __init__(self, render_destination: dict[str, Any], filters: list[Any] | None = None) -> None:
        self._document: dict[str, Any] = {"cirenderdestination": expect_mapping(render_destination, "cirenderdestination")}
        for f in filters or []:
            self.add_filter(f)

    @property
    def filters(self) -> list[dict[str, Any]]:
        return list(self._document.get("cifilterlist", []))

    def add_filter(self, filter_: Filter | dict[str, Any]) -> FilterChain:
        document = expect_mapping(as_document(filter_), "cifilterlist[]")
        if "cifiltername" not in document:
            raise DocumentValidationError("filter needs a cifiltername")
        self._document.setdefault("cifilterlist", []).append(document)
        return self

    def set_softwarerender(self, software_render: bool) -> FilterChain:
        self._document["coreimagesoftwarerender"] = bool(software_render)
        return self

    def set_use_srgbprofile(self, use_srgb: bool) -> FilterChain:
        self._document["use_srgbcolorspace"] = bool(use_srgb)
        return self

    def to_document(self) -> dict[str, Any]:
        _validate_filter_graph(self._document.get("cifilterlist", []))
        return self._document


def _validate_filter_graph(filters: list[dict[str, Any]]) -> None:
    seen: dict[str, int] = {}
    for index, filter_doc in enumerate(filters):
        name = filter_doc["cifiltername"]
        for prop in filter_doc.get("cifilterproperties", []):
            if prop.get("cifiltervalueclass") != "CIImage":
                continue
            source = prop.get("cifiltervalue")
            if not isinstance(source, dict):
                continue
            if "mifiltername" in source and source["mifiltername"] not in seen:
                raise DocumentValidationError(
                    f"cifilterlist[{index}] {name}: input {source['mifiltername']!r} is not an earlier filter"
                )
            if "cifilterindex" in source and not 0 <= _filter_index(source["cifilterindex"], index, name) < index:
                raise DocumentValidationError(
                    f"cifilterlist[{index}] {name}: input index {source['cifilterindex']} is not an earlier filter"
                )
        identifier = filter_doc.get("mifiltername")
        if identifier is not None:
            if identifier in seen:
                raise DocumentValidationError(f"cifilterlist[{index}]: duplicate filter identifier {identifier!r}")
            seen[identifier] = index


def make_renderproperty_withfilternameid(
    key: str = "inputLevel",
    value: Any = 10.0,
    filter_name_id: str = "blurfilter",
    value_class: str | None = None,
) -> dict[str, Any]:
    prop: dict[str, Any] = {"cifilterkey": key, "cifiltervalue": value, "mifiltername": filter_name_id}
    if value_class is not None:
        prop["cifiltervalueclass"] = value_class
    return prop


def make_renderproperty_withfilterindex(
    key: str = "inputRadius",
    value: Any = 5.0,
    filter_index: int = 0,
    value_class: str | None = None,
) -> dict[str, Any]:
    prop: dict[str, Any] = {"cifilterkey": key, "cifiltervalue": value, "cifilterindex": int(filter_index)}
    if value_class is not None:
        prop["cifiltervalueclass"] = value_class
    return prop


class FilterChainRender(DocumentSource):
    """Per-render instructions: rectangles plus property overrides targeting filters."""

    def __init__(self) -> None:
        self._document: dict[str, Any] = {}

    def set_sourcerectangle(self, rect: dict[str, Any]) -> FilterChainRender:
        self._document["sourcerectangle"] = expect_mapping(rect, "sourcerectangle")
        return self

    def set_destinationrectangle(self, rect: dict[str, Any]) -> FilterChainRender:
        self._document["destinationrectangle"] = expect_mapping(rect, "destinationrectangle")
        return self

    def set_filterproperties(self, props: list[dict[str, Any]]) -> FilterChainRender:
        self._document["cifilterproperties"] = [_render_property(p) for p in expect_list(props, "cifilterproperties")]
        return self

    def add_filterproperty(self, prop: dict[str, Any]) -> FilterChainRender:
        self._document.setdefault("cifilterproperties", []).append(_render_property(prop))
        return self

    def set_variables(self, variables: dict[str, Any]) -> FilterChainRender:
        self._document["variables"] = dict(expect_mapping(variables, "variables"))
        return self

    def to_document(self) -> dict[str, Any]:
        return self._document


def _filter_index(value: Any, index: int, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise DocumentValidationError(f"cifilterlist[{index}] {name}: input index {value!r} is not an integer") from exc


def _render_property(prop: Any) -> dict[str, Any]:
    prop = expect_mapping(prop, "cifilterproperties[]")
    if "mifiltername" not in prop and "cifilterindex" not in prop:
        raise DocumentValidationError("render property must target a filter by mifiltername or cifilterindex")
    return prop  # type: ignore[return-value]


def _component_text(value: Any, key: str) -> str:
    if not is_number(value):
        raise DocumentValidationError(f"{key}: components must be numbers")
    return str(value)
