"""
Image codec utilities.

Thin helpers around Pillow for decoding raw bytes into a working image,
reading source metadata and encoding results into the supported containers.
"""

import io
import logging
from dataclasses import dataclass
from typing import Optional

from PIL import ExifTags, Image, UnidentifiedImageError

from image_toolkit.core.exceptions import EncodingError, UnsupportedFormatError
from utils.format_utils import PIL_FORMATS, SUPPORTED_FORMATS

logger = logging.getLogger(__name__)

ORIENTATION_TAG = 0x0112

# Pillow mode -> color space label reported by analyze
_COLOR_SPACES = {
    "1": "b-w",
    "L": "b-w",
    "LA": "b-w",
    "I": "grey16",
    "I;16": "grey16",
    "CMYK": "cmyk",
    "LAB": "lab",
}


@dataclass(frozen=True, slots=True)
class SourceImage:
    """Decoded metadata of a source image. The raw bytes travel with it."""

    data: bytes
    width: int
    height: int
    format: Optional[str]
    has_alpha: bool
    mode: str
    color_space: str
    channels: int
    density: Optional[int] = None
    orientation: Optional[int] = None

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True, slots=True)
class EncodedAsset:
    data: bytes
    format: str
    width: int
    height: int


def has_alpha(img: Image.Image) -> bool:
    """True when the image carries an alpha channel or palette transparency."""
    if img.mode in ("RGBA", "LA", "PA", "RGBa", "La"):
        return True
    return "transparency" in img.info


def open_image(data: bytes) -> Image.Image:
    """Lazily open encoded bytes; unreadable data is an unsupported format."""
    try:
        return Image.open(io.BytesIO(data))
    except UnidentifiedImageError as e:
        raise UnsupportedFormatError(
            "Unsupported or unrecognized image data"
        ) from e


def describe_image(data: bytes) -> SourceImage:
    """Read source metadata without decoding the pixel data."""
    with open_image(data) as img:
        density = None
        dpi = img.info.get("dpi")
        if dpi:
            density = int(round(float(dpi[0])))
        try:
            orientation = img.getexif().get(ORIENTATION_TAG)
        except (OSError, SyntaxError):
            orientation = None
        return SourceImage(
            data=data,
            width=img.width,
            height=img.height,
            format=img.format.lower() if img.format else None,
            has_alpha=has_alpha(img),
            mode=img.mode,
            color_space=_COLOR_SPACES.get(img.mode, "srgb"),
            channels=len(img.getbands()),
            density=density,
            orientation=orientation,
        )


def load_image(data: bytes) -> Image.Image:
    """Decode bytes into an RGB or RGBA working image."""
    img = open_image(data)
    try:
        img.load()
    except OSError as e:
        raise EncodingError(f"Failed to decode image: {e}") from e
    return to_working_mode(img)


def to_working_mode(img: Image.Image) -> Image.Image:
    if img.mode in ("RGB", "RGBA"):
        return img
    return img.convert("RGBA" if has_alpha(img) else "RGB")


def flatten_alpha(img: Image.Image, background=(255, 255, 255)) -> Image.Image:
    """Composite an image with alpha onto a solid background."""
    if not has_alpha(img):
        return img.convert("RGB") if img.mode != "RGB" else img
    rgba = img.convert("RGBA")
    canvas = Image.new("RGB", rgba.size, background)
    canvas.paste(rgba, mask=rgba.getchannel("A"))
    return canvas


def encoding_params(image_format: str, quality: int) -> dict:
    """Pillow save() keyword arguments for a supported format."""
    if image_format == "webp":
        return {"quality": quality, "method": 4}
    if image_format == "jpeg":
        return {"quality": quality, "optimize": True, "progressive": True}
    if image_format == "png":
        return {"compress_level": 9}
    if image_format == "avif":
        return {"quality": quality, "speed": 6}
    raise UnsupportedFormatError(
        f"Unsupported output format: {image_format}", image_format
    )


def encode_image(
    img: Image.Image,
    image_format: str,
    quality: int = 100,
    exif: Optional[bytes] = None,
    **overrides,
) -> EncodedAsset:
    """
    Encode a working image into one of the supported containers.

    Args:
        img: Pillow image in any mode
        image_format: One of webp, jpeg, png, avif
        quality: 1-100, ignored by png
        exif: Optional raw EXIF block to embed
        **overrides: Extra Pillow save() options (e.g. compress_level=0)

    Returns:
        EncodedAsset with the encoded bytes and final dimensions
    """
    if image_format not in SUPPORTED_FORMATS:
        raise UnsupportedFormatError(
            f"Unsupported output format: {image_format}", image_format
        )
    params = encoding_params(image_format, quality)
    params.update(overrides)

    if image_format == "jpeg":
        img = flatten_alpha(img)
    elif img.mode not in ("RGB", "RGBA"):
        img = to_working_mode(img)
    if exif:
        params["exif"] = exif

    buffer = io.BytesIO()
    try:
        img.save(buffer, format=PIL_FORMATS[image_format], **params)
    except (OSError, ValueError, KeyError) as e:
        raise EncodingError(
            f"Failed to encode image as {image_format}: {e}", image_format
        ) from e

    logger.debug(
        "Encoded %sx%s image as %s (%d bytes)",
        img.width,
        img.height,
        image_format,
        buffer.tell(),
    )
    return EncodedAsset(
        data=buffer.getvalue(),
        format=image_format,
        width=img.width,
        height=img.height,
    )


def build_exif(
    copyright: Optional[str] = None,
    artist: Optional[str] = None,
    description: Optional[str] = None,
) -> bytes:
    """Raw EXIF block carrying the attribution tags."""
    exif = Image.Exif()
    if copyright:
        exif[ExifTags.Base.Copyright] = copyright
    if artist:
        exif[ExifTags.Base.Artist] = artist
    if description:
        exif[ExifTags.Base.ImageDescription] = description
    return exif.tobytes()
