"""
Geometry planning for resize and crop operations.

The planner is pure: it turns source dimensions plus a resolved sizing
request into a GeometryPlan. `apply_plan` then executes the plan with Pillow.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from PIL import Image

from image_toolkit.core.exceptions import InvalidParameterError

RESAMPLE = Image.Resampling.LANCZOS

DISTORTS_ASPECT_RATIO = "distorts-aspect-ratio"


@dataclass(frozen=True, slots=True)
class NoSizing:
    pass


@dataclass(frozen=True, slots=True)
class ExactDims:
    width: int
    height: int


@dataclass(frozen=True, slots=True)
class SingleDimension:
    width: Optional[int] = None
    height: Optional[int] = None


@dataclass(frozen=True, slots=True)
class AspectRatioBound:
    ratio_width: float
    ratio_height: float
    max_width: int

    @property
    def ratio(self) -> float:
        return self.ratio_width / self.ratio_height


@dataclass(frozen=True, slots=True)
class MaxWidthOnly:
    max_width: int


Sizing = Union[NoSizing, ExactDims, SingleDimension, AspectRatioBound, MaxWidthOnly]


@dataclass(frozen=True, slots=True)
class CropRect:
    left: int
    top: int
    width: int
    height: int

    @property
    def box(self) -> Tuple[int, int, int, int]:
        return (self.left, self.top, self.left + self.width, self.top + self.height)


@dataclass(frozen=True, slots=True)
class GeometryPlan:
    operation: str  # none | resize-fit | resize-fill | crop-then-resize
    target_width: int
    target_height: int
    crop_rect: Optional[CropRect] = None
    forced_format: Optional[str] = None
    warnings: Tuple[str, ...] = ()


def parse_aspect_ratio(value: Optional[str]) -> Optional[Tuple[float, float]]:
    """
    Parse a "W:H" string into a (width, height) pair.

    Examples:
        >>> parse_aspect_ratio("16:9")
        (16.0, 9.0)
        >>> parse_aspect_ratio(None) is None
        True
    """
    if not value:
        return None
    parts = value.split(":")
    try:
        if len(parts) != 2:
            raise ValueError(value)
        width, height = float(parts[0]), float(parts[1])
    except ValueError:
        width = height = 0.0
    if not (width > 0 and height > 0) or math.isinf(width) or math.isinf(height):
        raise InvalidParameterError(
            f'Invalid aspect ratio format: {value}. Expected format: "width:height"',
            "aspect_ratio",
        )
    return width, height


def resolve_sizing(
    *,
    width: Optional[int] = None,
    height: Optional[int] = None,
    max_width: Optional[int] = None,
    aspect_ratio: Optional[str] = None,
    circle: bool = False,
    default_max_width: Optional[int] = None,
) -> Sizing:
    """Collapse the optional sizing fields of a request into one Sizing value.

    Precedence: exact width+height, then a single dimension, then an aspect
    ratio (circle mode implies 1:1), then a max width bound.
    """
    bound = max_width or default_max_width
    if width and height:
        return ExactDims(width, height)
    if width or height:
        return SingleDimension(width=width or None, height=height or None)
    ratio = (1.0, 1.0) if circle else parse_aspect_ratio(aspect_ratio)
    if ratio is not None:
        if not bound:
            raise InvalidParameterError(
                "max_width is required for aspect ratio cropping", "max_width"
            )
        return AspectRatioBound(ratio[0], ratio[1], bound)
    if bound:
        return MaxWidthOnly(bound)
    return NoSizing()


@dataclass(frozen=True, slots=True)
class TransformRequest:
    width: Optional[int] = None
    height: Optional[int] = None
    max_width: Optional[int] = None
    aspect_ratio: Optional[str] = None
    format: Optional[str] = None
    quality: Optional[int] = None
    circle: bool = False

    def sizing(self, default_max_width: Optional[int] = None) -> Sizing:
        return resolve_sizing(
            width=self.width,
            height=self.height,
            max_width=self.max_width,
            aspect_ratio=self.aspect_ratio,
            circle=self.circle,
            default_max_width=default_max_width,
        )


def _fit_dimension(orig: int, scale: float) -> int:
    return max(1, int(round(orig * scale)))


def center_crop_rect(width: int, height: int, ratio: float) -> CropRect:
    """Largest centered rectangle of the given width/height ratio."""
    crop_w, crop_h = width, height
    original_ratio = width / height
    if original_ratio > ratio:
        crop_w = max(1, int(round(height * ratio)))
    elif original_ratio < ratio:
        crop_h = max(1, int(round(width / ratio)))
    left = (width - crop_w) // 2
    top = (height - crop_h) // 2
    return CropRect(left, top, crop_w, crop_h)


def plan_geometry(
    width: int, height: int, sizing: Sizing, *, circle: bool = False
) -> GeometryPlan:
    """Compute the resize/crop plan for a source of `width` x `height`."""
    forced = "png" if circle else None

    if isinstance(sizing, ExactDims):
        warnings: Tuple[str, ...] = ()
        if sizing.width * height != sizing.height * width:
            warnings = (DISTORTS_ASPECT_RATIO,)
        return GeometryPlan(
            "resize-fill",
            sizing.width,
            sizing.height,
            forced_format=forced,
            warnings=warnings,
        )

    if isinstance(sizing, SingleDimension):
        if sizing.width:
            scale = sizing.width / width
            target = (sizing.width, _fit_dimension(height, scale))
        else:
            scale = sizing.height / height
            target = (_fit_dimension(width, scale), sizing.height)
        return GeometryPlan("resize-fit", *target, forced_format=forced)

    if isinstance(sizing, AspectRatioBound):
        rect = center_crop_rect(width, height, sizing.ratio)
        target_w = sizing.max_width
        target_h = max(1, int(round(sizing.max_width / sizing.ratio)))
        if target_w > rect.width or target_h > rect.height:
            # never enlarge past the crop
            target_w, target_h = rect.width, rect.height
        return GeometryPlan(
            "crop-then-resize",
            target_w,
            target_h,
            crop_rect=rect,
            forced_format=forced,
        )

    if isinstance(sizing, MaxWidthOnly) and width > sizing.max_width:
        scale = sizing.max_width / width
        return GeometryPlan(
            "resize-fit",
            sizing.max_width,
            _fit_dimension(height, scale),
            forced_format=forced,
        )

    return GeometryPlan("none", width, height, forced_format=forced)


def apply_plan(img: Image.Image, plan: GeometryPlan) -> Image.Image:
    """Execute a GeometryPlan against a working image."""
    if plan.crop_rect is not None:
        img = img.crop(plan.crop_rect.box)
    if (img.width, img.height) != (plan.target_width, plan.target_height):
        img = img.resize((plan.target_width, plan.target_height), RESAMPLE)
    return img


def validate_crop_rect(
    x: float, y: float, width: float, height: float, image_width: int, image_height: int
) -> CropRect:
    """Floor an explicit crop rectangle and check it against the image bounds.

    Coordinates are clamped to >= 0 and sizes to >= 1 before the check.
    """
    left, top = max(0, math.floor(x)), max(0, math.floor(y))
    w, h = max(1, math.floor(width)), max(1, math.floor(height))
    if left + w > image_width:
        raise InvalidParameterError(
            f"Crop area exceeds image width: x({left}) + width({w}) > imageWidth({image_width})",
            "width",
        )
    if top + h > image_height:
        raise InvalidParameterError(
            f"Crop area exceeds image height: y({top}) + height({h}) > imageHeight({image_height})",
            "height",
        )
    return CropRect(left, top, w, h)


def center_square(img: Image.Image) -> Image.Image:
    """Center-crop an image to a square of side min(w, h)."""
    size = min(img.width, img.height)
    if img.width == img.height:
        return img
    left = (img.width - size) // 2
    top = (img.height - size) // 2
    return img.crop((left, top, left + size, top + size))


def rotation_angle(
    angle: Optional[float] = None,
    rotate90: bool = False,
    rotate180: bool = False,
    rotate270: bool = False,
) -> float:
    """
    Clockwise rotation in degrees, normalized to [0, 360).

    An explicit angle wins over the flags; among flags 270 > 180 > 90.

    Examples:
        >>> rotation_angle(-90)
        270.0
        >>> rotation_angle(rotate90=True, rotate270=True)
        270.0
    """
    if angle is not None:
        return float(angle) % 360
    if rotate270:
        return 270.0
    if rotate180:
        return 180.0
    if rotate90:
        return 90.0
    return 0.0
