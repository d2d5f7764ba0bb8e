import pytest
from PIL import Image, ImageChops

from image_toolkit.core.exceptions import (
    InvalidParameterError,
    MissingWatermarkSourceError,
)
from utils.watermark_utils import (
    WatermarkSpec,
    apply_watermark,
    compute_position,
    render_image_watermark,
    text_box_size,
    watermark_target_size,
)


def test_spec_requires_exactly_one_source():
    with pytest.raises(MissingWatermarkSourceError):
        WatermarkSpec().validate()

    with pytest.raises(InvalidParameterError) as exc:
        WatermarkSpec(text="hi", image_path="logo.png").validate()
    assert not isinstance(exc.value, MissingWatermarkSourceError)


def test_spec_rejects_unknown_position():
    with pytest.raises(InvalidParameterError):
        WatermarkSpec(text="hi", position="middle").validate()


def test_opacity_is_clamped():
    assert WatermarkSpec(text="a", opacity=150).opacity_fraction == 1.0
    assert WatermarkSpec(text="a", opacity=-5).opacity_fraction == 0.0


def test_text_box_size():
    assert text_box_size("abc", 20) == (56, 44)


@pytest.mark.parametrize(
    "position, expected",
    [
        ("top-left", (50, 25)),
        ("top-right", (850, 25)),
        ("bottom-left", (50, 425)),
        ("bottom-right", (850, 425)),
        ("center", (450, 225)),
    ],
)
def test_compute_position_margins(position, expected):
    assert compute_position(position, 1000, 500, 100, 50) == expected


def test_compute_position_clamps_inside_image():
    assert compute_position("custom", 1000, 500, 100, 50, x=2000, y=-40) == (900, 0)
    # a watermark larger than the base is pinned to the origin
    assert compute_position("bottom-right", 100, 100, 300, 300) == (0, 0)


def test_watermark_target_size():
    assert watermark_target_size(100, 50, 1000, 1000) == (200, 100)
    assert watermark_target_size(100, 50, 1000, 1000, size=40) == (40, 20)
    assert watermark_target_size(100, 50, 1000, 1000, size_percent=150) == (1000, 500)
    assert watermark_target_size(50, 100, 1000, 1000) == (100, 200)


def test_image_watermark_is_never_enlarged():
    mark = Image.new("RGBA", (100, 50), (0, 0, 255, 255))
    tile = render_image_watermark(mark, WatermarkSpec(image_path="x", opacity=100), 1000, 1000)
    assert tile.size == (100, 50)


def test_image_watermark_composited_at_corner():
    base = Image.new("RGB", (1000, 500), (200, 40, 40))
    mark = Image.new("RGBA", (100, 50), (0, 0, 255, 255))
    spec = WatermarkSpec(image_path="logo.png", position="top-left", opacity=100)
    out = apply_watermark(base, spec, mark)
    assert out.mode == "RGB"
    assert out.getpixel((60, 30)) == (0, 0, 255)
    assert out.getpixel((10, 10)) == (200, 40, 40)


def test_half_opacity_blends_with_base():
    base = Image.new("RGB", (1000, 500), (200, 40, 40))
    mark = Image.new("RGBA", (100, 50), (0, 0, 255, 255))
    spec = WatermarkSpec(image_path="logo.png", position="top-left", opacity=50)
    r, _, b = apply_watermark(base, spec, mark).getpixel((60, 30))
    assert 0 < r < 200
    assert 40 < b < 255


def test_text_watermark_changes_pixels():
    base = Image.new("RGB", (400, 200), (200, 40, 40))
    out = apply_watermark(base, WatermarkSpec(text="SAMPLE", opacity=100))
    assert out.size == base.size
    assert ImageChops.difference(out, base).getbbox() is not None


def test_image_variant_requires_loaded_mark():
    with pytest.raises(MissingWatermarkSourceError):
        apply_watermark(Image.new("RGB", (10, 10)), WatermarkSpec(image_path="logo.png"))
