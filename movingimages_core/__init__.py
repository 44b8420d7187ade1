"""Command documents for the MovingImages renderer and the `smig` transport."""

from .colors import (
    GRAY_PROFILES,
    RGB_PROFILES,
    make_cmykcolor,
    make_graycolor,
    make_rgbacolor,
    set_alpha_toequation,
    set_blue_toequation,
    set_gray_toequation,
    set_green_toequation,
    set_red_toequation,
)
from .command_list import CommandList, CommandListSealedError
from .commands import (
    Command,
    CommandVerb,
    DrawElementCommand,
    ObjectCommand,
    ProcessFramesCommand,
    RenderFilterChainCommand,
    ResultsReturned,
    SaveResultsType,
    SnapshotAction,
    make_add_metadata,
    make_addimage,
    make_assignimage_tocollection,
    make_calculategraphicsizeoftext,
    make_close,
    make_closeall,
    make_copymetadata,
    make_createbitmapcontext,
    make_createexporter,
    make_createimagefilterchain,
    make_createimporter,
    make_createmovieimporter,
    make_createpdfcontext,
    make_createwindowcontext,
    make_drawelement,
    make_export,
    make_finalizepdfpage_startnew,
    make_get_objectproperties,
    make_get_objectproperty,
    make_getnonobjectproperty,
    make_getpixeldata,
    make_processframes,
    make_removeimage_fromcollection,
    make_renderfilterchain,
    make_set_objectproperties,
    make_set_objectproperty,
    make_snapshot,
)
from .config import SmigConfig, load_smig_config
from .documents import (
    DocumentSource,
    DocumentValidationError,
    EquationArithmeticError,
    MovingImagesError,
    as_document,
)
from .geometry import (
    make_line,
    make_point,
    make_rectangle,
    make_size,
    point_addxy,
    point_setx_equation,
    point_sety_equation,
    rect_inset_forstroking,
    rect_setheight_toequation,
    rect_setwidth_toequation,
    rect_setx_toequation,
    rect_sety_toequation,
    size_addwidthheight,
    size_setheight_equation,
    size_setwidth_equation,
)
from .naming import SequentialNameFactory, uuid_object_name
from .objectid import (
    ObjectIdentifierError,
    ObjectType,
    make_objectid,
    makeid_withfilterindex,
    makeid_withfilternameid,
    makeid_withobjecttypeandname,
)
from .smig import (
    SmigClient,
    SmigCommandError,
    SmigResult,
    SmigTimeoutError,
    SmigUnavailableError,
    serialize_commands,
)
from .transforms import (
    ElementTransform,
    TransformKind,
    add_rotatetransform,
    add_scaletransform,
    add_translatetransform,
    make_affinetransform,
    make_contexttransformation,
)

__all__ = [
    "Command",
    "CommandList",
    "CommandListSealedError",
    "CommandVerb",
    "DocumentSource",
    "DocumentValidationError",
    "DrawElementCommand",
    "ElementTransform",
    "EquationArithmeticError",
    "GRAY_PROFILES",
    "MovingImagesError",
    "ObjectCommand",
    "ObjectIdentifierError",
    "ObjectType",
    "ProcessFramesCommand",
    "RGB_PROFILES",
    "RenderFilterChainCommand",
    "ResultsReturned",
    "SaveResultsType",
    "SequentialNameFactory",
    "SmigClient",
    "SmigCommandError",
    "SmigConfig",
    "SmigResult",
    "SmigTimeoutError",
    "SmigUnavailableError",
    "SnapshotAction",
    "TransformKind",
    "add_rotatetransform",
    "add_scaletransform",
    "add_translatetransform",
    "as_document",
    "load_smig_config",
    "make_add_metadata",
    "make_addimage",
    "make_affinetransform",
    "make_assignimage_tocollection",
    "make_calculategraphicsizeoftext",
    "make_close",
    "make_closeall",
    "make_cmykcolor",
    "make_contexttransformation",
    "make_copymetadata",
    "make_createbitmapcontext",
    "make_createexporter",
    "make_createimagefilterchain",
    "make_createimporter",
    "make_createmovieimporter",
    "make_createpdfcontext",
    "make_createwindowcontext",
    "make_drawelement",
    "make_export",
    "make_finalizepdfpage_startnew",
    "make_get_objectproperties",
    "make_get_objectproperty",
    "make_getnonobjectproperty",
    "make_getpixeldata",
    "make_graycolor",
    "make_line",
    "make_objectid",
    "make_point",
    "make_processframes",
    "make_rectangle",
    "make_removeimage_fromcollection",
    "make_renderfilterchain",
    "make_rgbacolor",
    "make_set_objectproperties",
    "make_set_objectproperty",
    "make_size",
    "make_snapshot",
    "makeid_withfilterindex",
    "makeid_withfilternameid",
    "makeid_withobjecttypeandname",
    "point_addxy",
    "point_setx_equation",
    "point_sety_equation",
    "rect_inset_forstroking",
    "rect_setheight_toequation",
    "rect_setwidth_toequation",
    "rect_setx_toequation",
    "rect_sety_toequation",
    "serialize_commands",
    "set_alpha_toequation",
    "set_blue_toequation",
    "set_gray_toequation",
    "set_green_toequation",
    "set_red_toequation",
    "size_addwidthheight",
    "size_setheight_equation",
    "size_setwidth_equation",
    "uuid_object_name",
]
