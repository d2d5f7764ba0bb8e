import pytest

from image_toolkit.application.use_cases.image_crop import CropImageUseCase
from image_toolkit.application.use_cases.image_filters import ApplyFiltersUseCase
from image_toolkit.application.use_cases.image_rotate import RotateImageUseCase
from image_toolkit.application.use_cases.image_watermark import AddWatermarkUseCase
from image_toolkit.core.exceptions import (
    InvalidParameterError,
    MissingWatermarkSourceError,
    NotFoundError,
)
from utils.tonal_utils import FilterOptions
from utils.watermark_utils import WatermarkSpec


@pytest.mark.asyncio
async def test_filters_applied_and_listed(adapters, project_root, decode_image):
    result = await ApplyFiltersUseCase(adapters).execute(
        "images/landscape.png",
        "out/gray.png",
        FilterOptions(grayscale=True, brightness=10),
    )

    assert result["applied_filters"] == ["grayscale", "brightness(+10)"]
    r, g, b = decode_image((project_root / "out" / "gray.png").read_bytes()).getpixel((5, 5))
    assert r == g == b


@pytest.mark.asyncio
async def test_identity_filters_report_nothing(adapters):
    result = await ApplyFiltersUseCase(adapters).execute(
        "images/landscape.png", "out/same.webp", FilterOptions()
    )
    assert result["applied_filters"] == []
    assert result["format"] == "webp"
    assert (result["width"], result["height"]) == (400, 300)


@pytest.mark.asyncio
async def test_text_watermark_bottom_right(adapters, project_root, decode_image):
    result = await AddWatermarkUseCase(adapters).execute(
        "images/landscape.png",
        "out/marked.png",
        WatermarkSpec(text="© ACME", position="bottom-right", opacity=100),
    )

    assert (result["width"], result["height"]) == (400, 300)
    marked = decode_image((project_root / "out" / "marked.png").read_bytes())
    # top-left corner untouched, label lands in the lower right quadrant
    assert marked.getpixel((5, 5)) == (200, 40, 40)
    changed = [
        (x, y)
        for x in range(200, 400, 2)
        for y in range(150, 300, 2)
        if marked.getpixel((x, y)) != (200, 40, 40)
    ]
    assert changed


@pytest.mark.asyncio
async def test_image_watermark_from_store(adapters, project_root, decode_image):
    await AddWatermarkUseCase(adapters).execute(
        "images/landscape.png",
        "out/logo_marked.png",
        WatermarkSpec(image_path="images/logo.png", position="top-left", opacity=100),
    )
    marked = decode_image((project_root / "out" / "logo_marked.png").read_bytes())
    # 20% of 300 -> 60x30 logo at the 5% margins (20, 15)
    assert marked.getpixel((30, 20)) == (0, 0, 255)
    assert marked.getpixel((10, 10)) == (200, 40, 40)


@pytest.mark.asyncio
async def test_watermark_requires_a_source_before_reading(adapters):
    with pytest.raises(MissingWatermarkSourceError):
        await AddWatermarkUseCase(adapters).execute(
            "images/does-not-exist.png", "out/x.png", WatermarkSpec()
        )


@pytest.mark.asyncio
async def test_missing_watermark_image(adapters):
    with pytest.raises(NotFoundError, match="Watermark image not found"):
        await AddWatermarkUseCase(adapters).execute(
            "images/landscape.png", "out/x.png", WatermarkSpec(image_path="images/nope.png")
        )


@pytest.mark.asyncio
async def test_crop_floors_coordinates(adapters, decode_image, project_root):
    result = await CropImageUseCase(adapters).execute(
        "images/landscape.png", "out/crop.png", 10.7, 20.2, 100.9, 50
    )
    assert result["crop_area"] == {"x": 10, "y": 20, "width": 100, "height": 50}
    assert decode_image((project_root / "out" / "crop.png").read_bytes()).size == (100, 50)


@pytest.mark.asyncio
async def test_crop_out_of_bounds(adapters, project_root):
    with pytest.raises(InvalidParameterError, match="exceeds image width"):
        await CropImageUseCase(adapters).execute(
            "images/landscape.png", "out/crop.png", 350, 0, 100, 10
        )
    assert not (project_root / "out" / "crop.png").exists()


@pytest.mark.asyncio
async def test_rotate_flags_and_angles(adapters, project_root, decode_image):
    use_case = RotateImageUseCase(adapters)

    result = await use_case.execute("images/landscape.png", "out/r.png", rotate90=True, rotate270=True)
    assert result["angle"] == 270.0
    assert (result["width"], result["height"]) == (300, 400)

    result = await use_case.execute("images/landscape.png", "out/r.png", angle=-180)
    assert result["angle"] == 180.0
    assert (result["width"], result["height"]) == (400, 300)

    result = await use_case.execute("images/logo.png", "out/tilted.png", angle=45)
    tilted = decode_image((project_root / "out" / "tilted.png").read_bytes())
    assert tilted.width > 100 and tilted.height > 50
    assert tilted.getpixel((0, 0))[3] == 0
