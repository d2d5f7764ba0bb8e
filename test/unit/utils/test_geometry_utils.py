import pytest
from PIL import Image

from image_toolkit.core.exceptions import InvalidParameterError
from utils.geometry_utils import (
    DISTORTS_ASPECT_RATIO,
    AspectRatioBound,
    CropRect,
    ExactDims,
    MaxWidthOnly,
    NoSizing,
    SingleDimension,
    TransformRequest,
    apply_plan,
    center_crop_rect,
    parse_aspect_ratio,
    plan_geometry,
    resolve_sizing,
    rotation_angle,
    validate_crop_rect,
)


def test_resolve_sizing_precedence():
    assert resolve_sizing(width=800, height=600, aspect_ratio="16:9") == ExactDims(800, 600)
    assert resolve_sizing(width=800, max_width=100) == SingleDimension(width=800)
    assert resolve_sizing(aspect_ratio="16:9", max_width=1200) == AspectRatioBound(16, 9, 1200)
    assert resolve_sizing(default_max_width=1920) == MaxWidthOnly(1920)
    assert resolve_sizing() == NoSizing()


def test_circle_implies_square_ratio_with_default_bound():
    sizing = TransformRequest(circle=True, aspect_ratio="16:9").sizing(default_max_width=1920)
    assert sizing == AspectRatioBound(1.0, 1.0, 1920)


def test_aspect_ratio_requires_width_bound():
    with pytest.raises(InvalidParameterError):
        resolve_sizing(aspect_ratio="16:9")


@pytest.mark.parametrize("value", ["abc", "16:0", "16:9:1", ":9", "-4:3"])
def test_parse_aspect_ratio_rejects_malformed(value):
    with pytest.raises(InvalidParameterError):
        parse_aspect_ratio(value)


def test_exact_dims_fill_and_warn_on_distortion():
    plan = plan_geometry(4000, 3000, ExactDims(800, 800))
    assert plan.operation == "resize-fill"
    assert (plan.target_width, plan.target_height) == (800, 800)
    assert DISTORTS_ASPECT_RATIO in plan.warnings

    same_ratio = plan_geometry(4000, 3000, ExactDims(800, 600))
    assert same_ratio.warnings == ()


def test_single_dimension_keeps_ratio_and_may_enlarge():
    plan = plan_geometry(400, 300, SingleDimension(width=800))
    assert (plan.operation, plan.target_width, plan.target_height) == ("resize-fit", 800, 600)

    plan = plan_geometry(400, 300, SingleDimension(height=150))
    assert (plan.target_width, plan.target_height) == (200, 150)


def test_aspect_ratio_crop_then_resize():
    plan = plan_geometry(4000, 3000, AspectRatioBound(16, 9, 1200))
    assert plan.operation == "crop-then-resize"
    assert plan.crop_rect == CropRect(0, 375, 4000, 2250)
    assert (plan.target_width, plan.target_height) == (1200, 675)


def test_aspect_ratio_never_enlarges_past_crop():
    plan = plan_geometry(400, 300, AspectRatioBound(1, 1, 1920), circle=True)
    assert plan.crop_rect == CropRect(50, 0, 300, 300)
    assert (plan.target_width, plan.target_height) == (300, 300)
    assert plan.forced_format == "png"


def test_center_crop_rect_for_tall_source():
    assert center_crop_rect(300, 400, 1.0) == CropRect(0, 50, 300, 300)


def test_max_width_only_never_enlarges():
    assert plan_geometry(400, 300, MaxWidthOnly(1920)).operation == "none"
    plan = plan_geometry(4000, 3000, MaxWidthOnly(1920))
    assert (plan.operation, plan.target_width, plan.target_height) == ("resize-fit", 1920, 1440)


def test_apply_plan_crops_and_resizes():
    img = Image.new("RGB", (400, 300), (10, 20, 30))
    plan = plan_geometry(400, 300, AspectRatioBound(16, 9, 160))
    out = apply_plan(img, plan)
    assert out.size == (160, 90)


def test_validate_crop_rect_floors_and_clamps():
    assert validate_crop_rect(-5.7, 10.9, 100.2, 0.4, 200, 200) == CropRect(0, 10, 100, 1)


def test_validate_crop_rect_names_violated_bound():
    with pytest.raises(InvalidParameterError, match="Crop area exceeds image width"):
        validate_crop_rect(150, 0, 100, 10, 200, 200)
    with pytest.raises(InvalidParameterError, match=r"y\(150\) \+ height\(100\)"):
        validate_crop_rect(0, 150, 10, 100, 200, 200)


def test_rotation_angle():
    assert rotation_angle(-90) == 270.0
    assert rotation_angle(450) == 90.0
    assert rotation_angle(rotate90=True, rotate180=True) == 180.0
    assert rotation_angle(rotate90=True, rotate270=True) == 270.0
    assert rotation_angle(30, rotate90=True) == 30.0
    assert rotation_angle() == 0.0
