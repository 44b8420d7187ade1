"""Ready-made MovingImages workflows built from command lists."""

from .helpers import (
    build_drawimage_commands,
    close_object,
    close_object_nothrow,
    create_bitmapcontext,
    create_window,
    drawimage_to_object,
    save_image,
)
from .metadata import ImageMetadataError, get_imagedimensions, get_imagefiletype
from .scaling import (
    ScaleOptions,
    build_lanczos_scale_commands,
    build_quartz_scale_commands,
    scale_files_uselanczos,
    scale_files_usequartz,
)
from .transition import TransitionOptions, build_transition_commands, dotransition, transition_json

__all__ = [
    "ImageMetadataError",
    "ScaleOptions",
    "TransitionOptions",
    "build_drawimage_commands",
    "build_lanczos_scale_commands",
    "build_quartz_scale_commands",
    "build_transition_commands",
    "close_object",
    "close_object_nothrow",
    "create_bitmapcontext",
    "create_window",
    "dotransition",
    "drawimage_to_object",
    "get_imagedimensions",
    "get_imagefiletype",
    "save_image",
    "scale_files_uselanczos",
    "scale_files_usequartz",
    "transition_json",
]
