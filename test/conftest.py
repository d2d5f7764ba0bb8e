"""
Shared test configuration and fixtures for the image pipeline.
"""

import datetime as _dt
import io
import logging
import os
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock

# Keep the API entry point from opening data/app.log during tests
os.environ.setdefault("LOG_FILE", "")

import pytest
from PIL import Image

from image_toolkit.infrastructure.adapters import (
    LocalFileStore,
    PillowColorQuantizer,
    PillowImageProcessor,
)


def setup_logging():
    """Console logging for the whole test run."""
    formatter = logging.Formatter(
        "[%(asctime)s] %(levelname)-8s [%(name)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.addHandler(console_handler)

    # Quiet noisy libraries
    logging.getLogger("PIL").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("image_toolkit").setLevel(logging.DEBUG)


def pytest_configure(config):  # pylint: disable=unused-argument
    setup_logging()


def make_image_bytes(
    size=(400, 300),
    color=(200, 40, 40),
    mode: str = "RGB",
    fmt: str = "PNG",
) -> bytes:
    """Encode a solid image in memory."""
    img = Image.new(mode, size, color)
    buffer = io.BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


def decode(data: bytes) -> Image.Image:
    img = Image.open(io.BytesIO(data))
    img.load()
    return img


class FixedClock:
    def __init__(self, moment: _dt.datetime | None = None):
        self.moment = moment or _dt.datetime(2024, 5, 1, 12, 0, tzinfo=_dt.timezone.utc)

    def now(self) -> _dt.datetime:
        return self.moment


@pytest.fixture
def project_root(tmp_path) -> Path:
    """Project root holding a few source images."""
    (tmp_path / "images").mkdir()
    (tmp_path / "images" / "landscape.png").write_bytes(make_image_bytes((400, 300)))
    (tmp_path / "images" / "photo.jpg").write_bytes(
        make_image_bytes((4000, 3000), (30, 90, 160), fmt="JPEG")
    )
    (tmp_path / "images" / "logo.png").write_bytes(
        make_image_bytes((100, 50), (0, 0, 255, 255), mode="RGBA")
    )
    return tmp_path


@pytest.fixture
def placeholder_source():
    source = SimpleNamespace()
    source.fetch = AsyncMock(return_value=make_image_bytes((300, 200), (10, 120, 10), fmt="JPEG"))
    return source


@pytest.fixture
def adapters(project_root, placeholder_source):
    """Real Pillow and filesystem adapters rooted at a temp project, with a
    fake placeholder source and a fixed clock."""
    return SimpleNamespace(
        store=LocalFileStore(project_root),
        processor=PillowImageProcessor(),
        quantizer=PillowColorQuantizer(),
        placeholder_source=placeholder_source,
        clock=FixedClock(),
    )


@pytest.fixture
def image_bytes():
    """Factory fixture: image_bytes(size, color, mode, fmt) -> encoded bytes."""
    return make_image_bytes


@pytest.fixture
def decode_image():
    return decode
