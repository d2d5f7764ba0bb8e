"""
Tonal adjustment filters.

Filters run in a fixed order: blur, sharpen, grayscale, sepia,
brightness/saturation, contrast. Color filters act on the RGB bands only;
an alpha channel is carried through untouched.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from PIL import Image, ImageEnhance, ImageFilter

MIN_SIGMA = 0.3
MAX_SIGMA = 1000.0

SEPIA_TINT = (0x70, 0x42, 0x14)
SEPIA_ALPHA = 0.4


@dataclass(frozen=True, slots=True)
class FilterOptions:
    blur: Optional[float] = None
    sharpen: Optional[float] = None
    grayscale: bool = False
    sepia: bool = False
    brightness: float = 0
    contrast: float = 0
    saturation: float = 0

    def is_identity(self) -> bool:
        return not (
            (self.blur or 0) > 0
            or (self.sharpen or 0) > 0
            or self.grayscale
            or self.sepia
            or self.brightness
            or self.contrast
            or self.saturation
        )


def clamp_sigma(value: float) -> float:
    return max(MIN_SIGMA, min(MAX_SIGMA, float(value)))


def contrast_coefficients(contrast: float) -> Tuple[float, float]:
    """
    Linear coefficients (a, b) for `out = a * in + b` on values in [0, 1].

    Examples:
        >>> contrast_coefficients(100)
        (2.0, -0.5)
        >>> contrast_coefficients(-100)
        (0.0, 0.25)
    """
    a = 1 + contrast / 100
    if contrast < 0:
        b = 0.25 * (1 - a)
    else:
        b = -0.5 * (a - 1)
    return a, b


def _signed(value: float) -> str:
    return f"{value:+g}"


def _split_alpha(img: Image.Image) -> Tuple[Image.Image, Optional[Image.Image]]:
    if img.mode == "RGBA":
        return img.convert("RGB"), img.getchannel("A")
    return (img if img.mode == "RGB" else img.convert("RGB")), None


def _merge_alpha(rgb: Image.Image, alpha: Optional[Image.Image]) -> Image.Image:
    if alpha is None:
        return rgb
    out = rgb.convert("RGBA")
    out.putalpha(alpha)
    return out


def _grayscale(rgb: Image.Image) -> Image.Image:
    return rgb.convert("L").convert("RGB")


def contrast_lut(contrast: float) -> List[int]:
    """Per-band 8-bit lookup table for a contrast adjustment."""
    a, b = contrast_coefficients(contrast)
    return [max(0, min(255, int(round((a * (v / 255) + b) * 255)))) for v in range(256)]


def _contrast(rgb: Image.Image, contrast: float) -> Image.Image:
    return rgb.point(contrast_lut(contrast) * 3)


def apply_filters(img: Image.Image, options: FilterOptions) -> Tuple[Image.Image, List[str]]:
    """
    Apply the requested tonal filters.

    Args:
        img: RGB or RGBA working image
        options: FilterOptions; zero/false values are skipped

    Returns:
        (filtered image, ordered list of applied filter tokens)
    """
    applied: List[str] = []
    if options.is_identity():
        return img, applied

    if options.blur is not None and options.blur > 0:
        sigma = clamp_sigma(options.blur)
        img = img.filter(ImageFilter.GaussianBlur(radius=sigma))
        applied.append(f"blur({sigma:.1f})")

    rgb, alpha = _split_alpha(img)

    if options.sharpen is not None and options.sharpen > 0:
        sigma = clamp_sigma(options.sharpen)
        rgb = rgb.filter(ImageFilter.UnsharpMask(radius=sigma, percent=100, threshold=0))
        applied.append(f"sharpen({sigma:.1f})")

    if options.grayscale:
        rgb = _grayscale(rgb)
        applied.append("grayscale")

    if options.sepia:
        base = _grayscale(rgb)
        tint = Image.new("RGB", base.size, SEPIA_TINT)
        rgb = Image.blend(base, tint, SEPIA_ALPHA)
        applied.append("sepia")

    if options.brightness:
        rgb = ImageEnhance.Brightness(rgb).enhance(1 + options.brightness / 100)
        applied.append(f"brightness({_signed(options.brightness)})")

    if options.saturation:
        rgb = ImageEnhance.Color(rgb).enhance(1 + options.saturation / 100)
        applied.append(f"saturation({_signed(options.saturation)})")

    if options.contrast:
        rgb = _contrast(rgb, options.contrast)
        applied.append(f"contrast({_signed(options.contrast)})")

    return _merge_alpha(rgb, alpha), applied
