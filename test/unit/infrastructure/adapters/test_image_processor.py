import pytest
from PIL import Image

from image_toolkit.infrastructure.adapters import PillowImageProcessor, SystemClock
from utils.geometry_utils import CropRect


@pytest.mark.asyncio
async def test_rotate_is_clockwise():
    img = Image.new("RGB", (40, 20), (0, 0, 0))
    img.putpixel((0, 0), (255, 0, 0))

    rotated = await PillowImageProcessor().rotate(img, 90)

    assert rotated.size == (20, 40)
    # a clockwise quarter turn moves the top-left corner to the top-right
    assert rotated.getpixel((19, 0)) == (255, 0, 0)


@pytest.mark.asyncio
async def test_crop_uses_rect_box():
    img = Image.new("RGB", (40, 20))
    cropped = await PillowImageProcessor().crop(img, CropRect(5, 5, 10, 8))
    assert cropped.size == (10, 8)


@pytest.mark.asyncio
async def test_load_and_encode_png(image_bytes):
    processor = PillowImageProcessor()
    img = await processor.load(image_bytes((30, 10), (1, 2, 3)))
    encoded = await processor.encode(img, "png")
    assert (encoded.format, encoded.width, encoded.height) == ("png", 30, 10)
    assert encoded.data.startswith(b"\x89PNG")


def test_system_clock_is_utc():
    now = SystemClock().now()
    assert now.utcoffset().total_seconds() == 0
