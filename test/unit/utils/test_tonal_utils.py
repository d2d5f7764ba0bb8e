from PIL import Image

from utils.tonal_utils import (
    FilterOptions,
    apply_filters,
    clamp_sigma,
    _contrast,
    contrast_coefficients,
    contrast_lut,
)


def _solid(color, mode="RGB", size=(20, 20)):
    return Image.new(mode, size, color)


def test_zero_options_are_identity():
    img = _solid((200, 40, 40))
    out, applied = apply_filters(img, FilterOptions(brightness=0, contrast=0, saturation=0))
    assert out is img
    assert applied == []


def test_zero_contrast_maps_every_value_to_itself():
    assert contrast_coefficients(0) == (1.0, 0.0)
    assert contrast_lut(0) == list(range(256))

    gradient = Image.linear_gradient("L").convert("RGB")
    out = _contrast(gradient, 0)
    assert list(out.getdata()) == list(gradient.getdata())


def test_filters_apply_in_fixed_order():
    _, applied = apply_filters(
        _solid((200, 40, 40)),
        FilterOptions(contrast=-30, brightness=20, grayscale=True, blur=5, sharpen=1),
    )
    assert applied == [
        "blur(5.0)",
        "sharpen(1.0)",
        "grayscale",
        "brightness(+20)",
        "contrast(-30)",
    ]


def test_sigma_is_clamped():
    assert clamp_sigma(0.01) == 0.3
    assert clamp_sigma(5000) == 1000.0
    _, applied = apply_filters(_solid((1, 2, 3)), FilterOptions(blur=0.1))
    assert applied == ["blur(0.3)"]


def test_grayscale_preserves_alpha():
    out, _ = apply_filters(_solid((200, 40, 40, 128), "RGBA"), FilterOptions(grayscale=True))
    assert out.mode == "RGBA"
    r, g, b, a = out.getpixel((5, 5))
    assert r == g == b
    assert a == 128


def test_sepia_tints_toward_brown():
    out, applied = apply_filters(_solid((120, 120, 120)), FilterOptions(sepia=True))
    r, g, b = out.getpixel((0, 0))
    assert applied == ["sepia"]
    assert r > g > b


def test_contrast_coefficients():
    assert contrast_coefficients(0) == (1.0, 0.0)
    assert contrast_coefficients(100) == (2.0, -0.5)
    assert contrast_coefficients(-100) == (0.0, 0.25)


def test_positive_contrast_spreads_values():
    img = Image.new("RGB", (2, 1))
    img.putpixel((0, 0), (50, 50, 50))
    img.putpixel((1, 0), (200, 200, 200))
    out, _ = apply_filters(img, FilterOptions(contrast=50))
    assert out.getpixel((0, 0))[0] < 50
    assert out.getpixel((1, 0))[0] > 200


def test_brightness_and_saturation_tokens_are_signed():
    _, applied = apply_filters(_solid((100, 60, 30)), FilterOptions(brightness=-10, saturation=15))
    assert applied == ["brightness(-10)", "saturation(+15)"]
