import pytest
from PIL import Image

from image_toolkit.core.exceptions import InvalidParameterError
from utils.derived_assets import (
    build_manifest,
    build_placeholder_url,
    favicon_link_tags,
    favicon_renditions,
    placeholder_label,
    render_placeholder,
    transparent_canvas,
    validate_favicon_sizes,
)


def test_placeholder_url():
    base = "https://picsum.photos"
    assert build_placeholder_url(base, 300, 200, "webp") == "https://picsum.photos/300/200.webp"
    assert build_placeholder_url(base, 300, 200, "jpeg", 7) == "https://picsum.photos/id/7/300/200.jpg"
    assert (
        build_placeholder_url(base, 300, 200, "png", blur=0, grayscale=True)
        == "https://picsum.photos/300/200?grayscale"
    )
    assert (
        build_placeholder_url(base + "/", 300, 200, "webp", blur=25, grayscale=True)
        == "https://picsum.photos/300/200.webp?blur=10&grayscale"
    )


def test_render_placeholder():
    img = render_placeholder(300, 200)
    assert img.size == (300, 200)
    assert img.mode == "RGB"
    assert img.getpixel((0, 0)) == (204, 204, 204)
    assert placeholder_label(300, 200) == "300 × 200"


def test_render_placeholder_rejects_bad_color():
    with pytest.raises(InvalidParameterError):
        render_placeholder(10, 10, background_color="not-a-color")


def test_transparent_canvas():
    img = transparent_canvas(20, 10)
    assert img.mode == "RGBA"
    assert img.getextrema()[3] == (0, 0)


def test_favicon_renditions_are_square_with_root_last():
    renditions = favicon_renditions(Image.new("RGB", (400, 300)), [16, 180, 192])
    assert [r.file_name for r in renditions] == [
        "favicon-16x16.png",
        "favicon-180x180.png",
        "favicon-192x192.png",
        "favicon.png",
    ]
    assert all(r.image.size == (r.size, r.size) for r in renditions)
    assert renditions[1].rel == "apple-touch-icon"
    assert renditions[2].in_manifest is True
    assert renditions[-1].size == 32


def test_favicon_link_tags_with_manifest():
    links = favicon_link_tags("public/", [16, 32, 48, 180, 192, 512])
    assert links[0] == '<link rel="icon" type="image/png" href="public/favicon.png">'
    assert '<link rel="apple-touch-icon" sizes="180x180" href="public/favicon-180x180.png">' in links
    assert links[-1] == '<link rel="manifest" href="public/site.webmanifest">'
    assert len(links) == 8


def test_favicon_link_tags_without_manifest():
    links = favicon_link_tags("", [16, 192])
    assert links[-1] == '<link rel="icon" type="image/png" sizes="192x192" href="favicon-192x192.png">'
    assert not any("manifest" in link for link in links)


def test_validate_favicon_sizes():
    assert validate_favicon_sizes(None) == [16, 32, 48, 180, 192, 512]
    with pytest.raises(InvalidParameterError):
        validate_favicon_sizes([16, 0])


def test_manifest_references_icons_beside_it():
    manifest = build_manifest(name="Demo")
    assert manifest["short_name"] == "Demo"
    assert [icon["src"] for icon in manifest["icons"]] == [
        "favicon-192x192.png",
        "favicon-512x512.png",
    ]
