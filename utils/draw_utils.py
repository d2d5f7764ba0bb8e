"""
Drawing helpers shared by the watermark and derived-asset generators.
"""

import logging
from typing import List, Optional, Tuple

from PIL import ImageColor, ImageFont

from image_toolkit.core.exceptions import InvalidParameterError

logger = logging.getLogger(__name__)

DEFAULT_FONT_FAMILY = "Arial, sans-serif"

# Tried in order after the requested families
FALLBACK_FONTS = ("DejaVuSans.ttf", "Arial.ttf")
BOLD_FALLBACK_FONTS = ("Arial Bold.ttf", "arialbd.ttf", "DejaVuSans-Bold.ttf")


def parse_color(value: str, parameter: Optional[str] = None) -> Tuple[int, int, int]:
    """Parse a CSS-style color ("#ccc", "#704214", "white") into RGB."""
    try:
        return ImageColor.getrgb(value)[:3]
    except ValueError as e:
        raise InvalidParameterError(f"Invalid color: {value}", parameter) from e


def font_candidates(family: Optional[str] = None, bold: bool = False) -> List[str]:
    """
    Font files to try, in order, for a CSS-style family list.

    Examples:
        >>> font_candidates("Arial, sans-serif", bold=True)[:2]
        ['Arial Bold.ttf', 'sans-serif Bold.ttf']
    """
    names = [f.strip() for f in (family or DEFAULT_FONT_FAMILY).split(",") if f.strip()]
    ordered = names + list(FALLBACK_FONTS)
    if bold:
        ordered = [f"{n} Bold.ttf" for n in names] + list(BOLD_FALLBACK_FONTS) + ordered
    return list(dict.fromkeys(ordered))


def load_font(size: int, family: Optional[str] = None, bold: bool = False) -> ImageFont.ImageFont:
    """
    Resolve a font for `family` (comma separated candidates) at `size` px.

    Loaded per call, never cached. Bold faces are tried first when `bold`.
    Falls back to Pillow's bundled default font when no candidate is
    installed on the host.
    """
    size = max(1, int(round(size)))
    for name in font_candidates(family, bold):
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    logger.debug("No truetype font found for %r, using default font", family)
    return ImageFont.load_default(size=size)
