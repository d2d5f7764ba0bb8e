import pytest

from utils.format_utils import (
    format_file_size,
    format_from_path,
    normalize_format,
    resolve_format,
    with_extension,
)


@pytest.mark.parametrize(
    "path, explicit, default, expected",
    [
        ("hero.jpg", None, "webp", "jpeg"),
        ("hero.JPEG", None, "webp", "jpeg"),
        ("hero.jpg", "png", "webp", "png"),
        ("hero.tiff", None, "avif", "avif"),
        (None, None, "webp", "webp"),
        ("hero", "JPG", "webp", "jpeg"),
    ],
)
def test_resolve_format_precedence(path, explicit, default, expected):
    assert resolve_format(path, explicit, default) == expected


def test_resolve_format_keeps_unknown_explicit_value():
    # rejected later by the encoder
    assert resolve_format("a.png", "gif") == "gif"


def test_normalize_and_detect():
    assert normalize_format(".Jpg") == "jpeg"
    assert normalize_format("") is None
    assert format_from_path("a/b/c.webp") == "webp"
    assert format_from_path("a/b/c.bmp") is None


def test_with_extension():
    assert with_extension("out/avatar.jpg", "png") == "out/avatar.png"
    assert with_extension("out/avatar.jpg", "jpeg") == "out/avatar.jpg"
    assert with_extension("out/avatar", "webp") == "out/avatar.webp"


def test_format_file_size():
    assert format_file_size(512) == "512 B"
    assert format_file_size(2048) == "2.00 KB"
    assert format_file_size(3 * 1024 * 1024) == "3.00 MB"
