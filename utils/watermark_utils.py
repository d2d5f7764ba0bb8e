"""
Watermark rendering and compositing.

A watermark is either a text label or an image. Both are rendered into an
RGBA tile, positioned on the base image and blended with "over" compositing.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from PIL import Image, ImageDraw

from image_toolkit.core.exceptions import (
    InvalidParameterError,
    MissingWatermarkSourceError,
)
from utils.draw_utils import DEFAULT_FONT_FAMILY, load_font, parse_color
from utils.geometry_utils import RESAMPLE
from utils.mask_utils import apply_opacity

POSITIONS = ("center", "top-left", "top-right", "bottom-left", "bottom-right", "custom")

MARGIN_RATIO = 0.05
DEFAULT_SIZE_RATIO = 0.2
DEFAULT_OPACITY = 50


@dataclass(frozen=True, slots=True)
class WatermarkSpec:
    text: Optional[str] = None
    text_color: str = "#ffffff"
    font_size: Optional[float] = None
    font_family: str = DEFAULT_FONT_FAMILY
    image_path: Optional[str] = None
    position: str = "center"
    x: Optional[int] = None
    y: Optional[int] = None
    size: Optional[int] = None
    size_percent: Optional[float] = None
    opacity: float = DEFAULT_OPACITY

    @property
    def is_text(self) -> bool:
        return bool(self.text)

    def validate(self) -> None:
        if self.text and self.image_path:
            raise InvalidParameterError(
                "Provide either text or watermark_image_path, not both", "watermark"
            )
        if not self.text and not self.image_path:
            raise MissingWatermarkSourceError()
        if self.position not in POSITIONS:
            raise InvalidParameterError(
                f"Unknown watermark position: {self.position}", "position"
            )

    @property
    def opacity_fraction(self) -> float:
        return max(0.0, min(100.0, float(self.opacity))) / 100


def text_box_size(text: str, font_size: float) -> Tuple[int, int]:
    """Estimated label box: glyphs at 0.6em wide, 1.2em line, 0.5em padding."""
    padding = font_size * 0.5
    width = math.ceil(len(text) * font_size * 0.6 + padding * 2)
    height = math.ceil(font_size * 1.2 + padding * 2)
    return width, height


def render_text_watermark(spec: WatermarkSpec, base_width: int, base_height: int) -> Image.Image:
    font_size = spec.font_size or min(base_width, base_height) / 20
    width, height = text_box_size(spec.text, font_size)
    r, g, b = parse_color(spec.text_color, "text_color")
    alpha = int(round(spec.opacity_fraction * 255))

    tile = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    draw = ImageDraw.Draw(tile)
    font = load_font(int(round(font_size)), spec.font_family, bold=True)
    draw.text(
        (width / 2, height / 2),
        spec.text,
        font=font,
        fill=(r, g, b, alpha),
        anchor="mm",
    )
    return tile


def watermark_target_size(
    mark_width: int,
    mark_height: int,
    base_width: int,
    base_height: int,
    size: Optional[int] = None,
    size_percent: Optional[float] = None,
) -> Tuple[int, int]:
    """Box the watermark image must fit in; the long side gets the target."""
    if size:
        target = float(size)
    elif size_percent:
        percent = max(1.0, min(100.0, float(size_percent))) / 100
        target = min(base_width, base_height) * percent
    else:
        target = min(base_width, base_height) * DEFAULT_SIZE_RATIO

    ratio = mark_width / mark_height
    if ratio >= 1:
        return max(1, round(target)), max(1, round(target / ratio))
    return max(1, round(target * ratio)), max(1, round(target))


def render_image_watermark(
    mark: Image.Image, spec: WatermarkSpec, base_width: int, base_height: int
) -> Image.Image:
    box = watermark_target_size(
        mark.width, mark.height, base_width, base_height, spec.size, spec.size_percent
    )
    tile = mark.convert("RGBA")
    # fit inside the box, never enlarge
    scale = min(box[0] / tile.width, box[1] / tile.height, 1.0)
    if scale < 1.0:
        size = (max(1, round(tile.width * scale)), max(1, round(tile.height * scale)))
        tile = tile.resize(size, RESAMPLE)
    if spec.opacity_fraction < 1:
        tile = apply_opacity(tile, spec.opacity)
    return tile


def compute_position(
    position: str,
    base_width: int,
    base_height: int,
    mark_width: int,
    mark_height: int,
    x: Optional[int] = None,
    y: Optional[int] = None,
) -> Tuple[int, int]:
    """
    Top-left placement of a watermark tile, clamped inside the base image.

    Examples:
        >>> compute_position("top-left", 1000, 500, 100, 50)
        (50, 25)
        >>> compute_position("custom", 100, 100, 50, 50, x=90, y=-5)
        (50, 0)
    """
    margin_x = base_width * MARGIN_RATIO
    margin_y = base_height * MARGIN_RATIO
    if position == "top-left":
        left, top = math.floor(margin_x), math.floor(margin_y)
    elif position == "top-right":
        left = math.floor(base_width - mark_width - margin_x)
        top = math.floor(margin_y)
    elif position == "bottom-left":
        left = math.floor(margin_x)
        top = math.floor(base_height - mark_height - margin_y)
    elif position == "bottom-right":
        left = math.floor(base_width - mark_width - margin_x)
        top = math.floor(base_height - mark_height - margin_y)
    elif position == "custom":
        left, top = int(x or 0), int(y or 0)
    else:
        left = (base_width - mark_width) // 2
        top = (base_height - mark_height) // 2

    left = max(0, min(left, base_width - mark_width))
    top = max(0, min(top, base_height - mark_height))
    return left, top


def composite(base: Image.Image, tile: Image.Image, left: int, top: int) -> Image.Image:
    """Blend `tile` over `base` at (left, top); keeps the base mode."""
    layer = Image.new("RGBA", base.size, (0, 0, 0, 0))
    layer.paste(tile, (left, top))
    out = Image.alpha_composite(base.convert("RGBA"), layer)
    return out if base.mode == "RGBA" else out.convert(base.mode)


def apply_watermark(
    base: Image.Image, spec: WatermarkSpec, mark: Optional[Image.Image] = None
) -> Image.Image:
    """Render the watermark described by `spec` and composite it onto `base`.

    `mark` is the decoded watermark image for the image variant.
    """
    spec.validate()
    if spec.is_text:
        tile = render_text_watermark(spec, base.width, base.height)
    else:
        if mark is None:
            raise MissingWatermarkSourceError("Watermark image was not loaded")
        tile = render_image_watermark(mark, spec, base.width, base.height)
    left, top = compute_position(
        spec.position, base.width, base.height, tile.width, tile.height, spec.x, spec.y
    )
    return composite(base, tile, left, top)
