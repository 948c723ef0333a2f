"""Image normalizer — decode, downsample, re-encode as base64 JPEG."""
import asyncio
import base64
import io
import logging
from dataclasses import dataclass

from PIL import Image, ImageOps, UnidentifiedImageError

from foodlens.constants import (
    FLATTEN_BACKGROUND,
    JPEG_FORMAT,
    JPEG_MEDIA_TYPE,
    JPEG_QUALITY,
    MAX_IMAGE_DIMENSION,
    MSG_ERR_DECODE,
    MSG_ERR_EMPTY_FILE,
    MSG_ERR_RENDER,
    MSG_NORMALIZED,
)
from foodlens.errors import ImageDecodeError, ImageRenderError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EncodedImage:
    data: str  # base64, no data-URL prefix
    media_type: str
    width: int
    height: int

    def to_bytes(self) -> bytes:
        return base64.standard_b64decode(self.data)


def target_dimensions(
    width: int, height: int, max_dimension: int = MAX_IMAGE_DIMENSION
) -> tuple[int, int]:
    """Scale (width, height) so the longer side is at most max_dimension."""
    longest = max(width, height)
    match longest <= max_dimension:
        case True:
            return (width, height)
        case False:
            scale = max_dimension / longest
            return (
                max(1, round(width * scale)),
                max(1, round(height * scale)),
            )


def _decode(data: bytes) -> Image.Image:
    if not data:
        raise ImageDecodeError(MSG_ERR_EMPTY_FILE)
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
        return ImageOps.exif_transpose(img)
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        SyntaxError,
        ValueError,
    ) as exc:
        raise ImageDecodeError(MSG_ERR_DECODE) from exc


def _to_rgb(img: Image.Image) -> Image.Image:
    """Flatten transparency onto white; JPEG has no alpha channel."""
    match img.mode:
        case "RGB":
            return img
        case "RGBA" | "LA" | "P":
            rgba = img.convert("RGBA")
            background = Image.new("RGB", rgba.size, FLATTEN_BACKGROUND)
            background.paste(rgba, mask=rgba.split()[-1])
            return background
        case _:
            return img.convert("RGB")


def normalize_image(
    data: bytes,
    max_dimension: int = MAX_IMAGE_DIMENSION,
    quality: int = JPEG_QUALITY,
) -> EncodedImage:
    """Decode raw file bytes and return a transport-ready JPEG payload.

    Raises ImageDecodeError when the bytes are not an image and
    ImageRenderError when the raster cannot be converted or encoded.
    """
    img = _decode(data)
    original = img.size
    size = target_dimensions(*original, max_dimension=max_dimension)
    try:
        rgb = _to_rgb(img)
        if size != original:
            rgb = rgb.resize(size, Image.LANCZOS)
        output = io.BytesIO()
        rgb.save(output, format=JPEG_FORMAT, quality=quality, optimize=True)
    except (OSError, ValueError) as exc:
        raise ImageRenderError(MSG_ERR_RENDER) from exc

    payload = output.getvalue()
    logger.debug(MSG_NORMALIZED, *original, *size, len(payload))
    return EncodedImage(
        data=base64.standard_b64encode(payload).decode(),
        media_type=JPEG_MEDIA_TYPE,
        width=size[0],
        height=size[1],
    )


async def normalize_image_async(
    data: bytes,
    max_dimension: int = MAX_IMAGE_DIMENSION,
    quality: int = JPEG_QUALITY,
) -> EncodedImage:
    return await asyncio.to_thread(normalize_image, data, max_dimension, quality)
