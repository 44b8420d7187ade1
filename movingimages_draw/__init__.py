"""Draw instructions, paths and CoreImage filter chains for MovingImages."""

from .elements import (
    BlendMode,
    DrawBasicStringElement,
    DrawElement,
    DrawImageElement,
    ElementType,
    InterpolationQuality,
    LinearGradientFillElement,
    LineCap,
    LineJoin,
    Shadow,
    TextAlignment,
)
from .filters import (
    Filter,
    FilterChain,
    FilterChainRender,
    addimagesource_tociimageproperty,
    assignfloat_tonumberproperty,
    assigninteger_tonumberproperty,
    clamp_to_property_range,
    make_affinetransformproperty,
    make_ciimageproperty,
    make_cicolorproperty_fromarray,
    make_cicolorproperty_fromhash,
    make_cicolorproperty_fromstring,
    make_cinumberproperty,
    make_cinumberproperty_withmin_max_default,
    make_civectorproperty_fromarray,
    make_civectorproperty_fromstring,
    make_renderproperty_withfilterindex,
    make_renderproperty_withfilternameid,
)
from .movie import (
    MOVIE_NEXT_SAMPLE,
    ProcessMovieFrameInstructions,
    make_movietime,
    make_movietime_fromseconds,
    make_movietime_nextsample,
    make_movietrackid_from_characteristic,
    make_movietrackid_from_mediatype,
    make_movietrackid_from_persistenttrackid,
)
from .path import Path, PathElementType
from .renderer import RendererDocument

__all__ = [
    "BlendMode",
    "DrawBasicStringElement",
    "DrawElement",
    "DrawImageElement",
    "ElementType",
    "Filter",
    "FilterChain",
    "FilterChainRender",
    "InterpolationQuality",
    "LineCap",
    "LineJoin",
    "LinearGradientFillElement",
    "MOVIE_NEXT_SAMPLE",
    "Path",
    "PathElementType",
    "ProcessMovieFrameInstructions",
    "RendererDocument",
    "Shadow",
    "TextAlignment",
    "addimagesource_tociimageproperty",
    "assignfloat_tonumberproperty",
    "assigninteger_tonumberproperty",
    "clamp_to_property_range",
    "make_affinetransformproperty",
    "make_ciimageproperty",
    "make_cicolorproperty_fromarray",
    "make_cicolorproperty_fromhash",
    "make_cicolorproperty_fromstring",
    "make_cinumberproperty",
    "make_cinumberproperty_withmin_max_default",
    "make_civectorproperty_fromarray",
    "make_civectorproperty_fromstring",
    "make_movietime",
    "make_movietime_fromseconds",
    "make_movietime_nextsample",
    "make_movietrackid_from_characteristic",
    "make_movietrackid_from_mediatype",
    "make_movietrackid_from_persistenttrackid",
    "make_renderproperty_withfilterindex",
    "make_renderproperty_withfilternameid",
]
