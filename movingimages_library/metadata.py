from __future__ import annotations

from pathlib import Path
from typing import Any

from PIL import Image, UnidentifiedImageError

from movingimages_core.documents import MovingImagesError

# Pillow format name -> uniform type identifier the exporter understands.
UTI_BY_FORMAT = {
    "JPEG": "public.jpeg",
    "PNG": "public.png",
    "TIFF": "public.tiff",
    "GIF": "com.compuserve.gif",
    "BMP": "com.microsoft.bmp",
    "JPEG2000": "public.jpeg-2000",
}


class ImageMetadataError(MovingImagesError, RuntimeError):
    pass


def get_imagedimensions(path: str | Path) -> dict[str, Any]:
    """Returns `{width, height}` read from the file header without decoding pixels."""
    with _open_image(path) as image:
        width, height = image.size
    return {"width": width, "height": height}


def get_imagefiletype(path: str | Path) -> str:
    with _open_image(path) as image:
        image_format = image.format
    try:
        return UTI_BY_FORMAT[image_format or ""]
    except KeyError as exc:
        raise ImageMetadataError(f"no export file type for image format {image_format!r}: {path}") from exc


def _open_image(path: str | Path) -> Image.Image:
    image_path = Path(path).expanduser()
    try:
        return Image.open(image_path)
    except FileNotFoundError as exc:
        raise ImageMetadataError(f"image file not found: {image_path}") from exc
    except UnidentifiedImageError as exc:
        raise ImageMetadataError(f"not a readable image file: {image_path}") from exc
