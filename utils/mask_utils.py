"""
Alpha mask helpers: circular crop and uniform opacity.
"""

from PIL import Image, ImageChops, ImageDraw

from utils.geometry_utils import RESAMPLE, center_square

# Mask is drawn at this multiple of the target size and downsampled
SUPERSAMPLE = 4


def circle_mask(size: int) -> Image.Image:
    """L-mode mask with an opaque disc of radius size/2."""
    big = size * SUPERSAMPLE
    mask = Image.new("L", (big, big), 0)
    ImageDraw.Draw(mask).ellipse((0, 0, big - 1, big - 1), fill=255)
    return mask.resize((size, size), RESAMPLE)


def apply_mask(img: Image.Image, mask: Image.Image) -> Image.Image:
    """Destination-in: output alpha = source alpha x mask alpha."""
    out = img.convert("RGBA")
    alpha = ImageChops.multiply(out.getchannel("A"), mask)
    out.putalpha(alpha)
    return out


def circle_crop(img: Image.Image) -> Image.Image:
    """Center-crop to a square and cut a circle out of it (RGBA result)."""
    square = center_square(img)
    size = min(square.width, square.height)
    if square.size != (size, size):
        square = square.resize((size, size), RESAMPLE)
    return apply_mask(square, circle_mask(size))


def opacity_mask(size, opacity: int) -> Image.Image:
    """Uniform L-mode mask for an opacity given in percent (0-100)."""
    level = int(round(max(0, min(100, opacity)) * 255 / 100))
    return Image.new("L", size, level)


def apply_opacity(img: Image.Image, opacity: int) -> Image.Image:
    if opacity >= 100:
        return img.convert("RGBA")
    return apply_mask(img, opacity_mask(img.size, opacity))
