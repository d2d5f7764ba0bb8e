"""
Derived asset generators: placeholders and favicon sets.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from PIL import Image, ImageDraw

from image_toolkit.core.exceptions import InvalidParameterError
from utils.draw_utils import load_font, parse_color
from utils.geometry_utils import RESAMPLE, center_square

DEFAULT_BACKGROUND = "#cccccc"
DEFAULT_TEXT_COLOR = "#666666"

DEFAULT_FAVICON_SIZES = (16, 32, 48, 180, 192, 512)
ROOT_FAVICON_SIZE = 32
ROOT_FAVICON_NAME = "favicon.png"
APPLE_TOUCH_SIZE = 180
MANIFEST_SIZES = (192, 512)
MANIFEST_NAME = "site.webmanifest"


def placeholder_label(width: int, height: int) -> str:
    return f"{width} × {height}"


def render_placeholder(
    width: int,
    height: int,
    background_color: str = DEFAULT_BACKGROUND,
    text_color: str = DEFAULT_TEXT_COLOR,
) -> Image.Image:
    """Solid rectangle with the centered "{w} × {h}" label."""
    background = parse_color(background_color, "background_color")
    fill = parse_color(text_color, "text_color")
    img = Image.new("RGB", (width, height), background)
    font_size = max(1, min(width, height) // 8)
    draw = ImageDraw.Draw(img)
    draw.text(
        (width / 2, height / 2),
        placeholder_label(width, height),
        font=load_font(font_size, bold=True),
        fill=fill,
        anchor="mm",
    )
    return img


def transparent_canvas(width: int, height: int) -> Image.Image:
    return Image.new("RGBA", (width, height), (0, 0, 0, 0))


def build_placeholder_url(
    base_url: str,
    width: int,
    height: int,
    image_format: str,
    image_id: Optional[int] = None,
    blur: Optional[int] = None,
    grayscale: bool = False,
) -> str:
    """
    Picsum-compatible URL for a random (or fixed id) photo.

    Examples:
        >>> build_placeholder_url("https://picsum.photos", 300, 200, "webp", blur=12)
        'https://picsum.photos/300/200.webp?blur=10'
        >>> build_placeholder_url("https://picsum.photos", 300, 200, "png", 42, grayscale=True)
        'https://picsum.photos/id/42/300/200?grayscale'
    """
    url = base_url.rstrip("/")
    if image_id is not None:
        url += f"/id/{image_id}"
    url += f"/{width}/{height}"
    if image_format == "webp":
        url += ".webp"
    elif image_format == "jpeg":
        url += ".jpg"

    params: List[str] = []
    if blur is not None and blur > 0:
        params.append(f"blur={min(max(int(blur), 1), 10)}")
    if grayscale:
        params.append("grayscale")
    if params:
        url += "?" + "&".join(params)
    return url


@dataclass(frozen=True, slots=True)
class FaviconRendition:
    size: int
    file_name: str
    image: Image.Image

    @property
    def rel(self) -> str:
        return "apple-touch-icon" if self.size == APPLE_TOUCH_SIZE else "icon"

    @property
    def in_manifest(self) -> bool:
        return self.size in MANIFEST_SIZES


def favicon_file_name(size: int) -> str:
    return f"favicon-{size}x{size}.png"


def validate_favicon_sizes(sizes: Optional[Sequence[int]]) -> List[int]:
    sizes = list(sizes) if sizes else list(DEFAULT_FAVICON_SIZES)
    bad = [s for s in sizes if int(s) < 1]
    if bad:
        raise InvalidParameterError(f"Invalid favicon sizes: {bad}", "sizes")
    return [int(s) for s in sizes]


def favicon_renditions(img: Image.Image, sizes: Sequence[int]) -> List[FaviconRendition]:
    """Square renditions for every size, plus the 32px root favicon last."""
    square = center_square(img)
    out = [
        FaviconRendition(size, favicon_file_name(size), square.resize((size, size), RESAMPLE))
        for size in sizes
    ]
    out.append(
        FaviconRendition(
            ROOT_FAVICON_SIZE,
            ROOT_FAVICON_NAME,
            square.resize((ROOT_FAVICON_SIZE, ROOT_FAVICON_SIZE), RESAMPLE),
        )
    )
    return out


def has_manifest_sizes(sizes: Sequence[int]) -> bool:
    return all(s in sizes for s in MANIFEST_SIZES)


def _href(output_dir: str, file_name: str) -> str:
    output_dir = output_dir.replace("\\", "/").rstrip("/")
    return f"{output_dir}/{file_name}" if output_dir else file_name


def favicon_link_tags(output_dir: str, sizes: Sequence[int]) -> List[str]:
    """HTML link tags: root favicon first, one per size, manifest link last."""
    links = [f'<link rel="icon" type="image/png" href="{_href(output_dir, ROOT_FAVICON_NAME)}">']
    for size in sizes:
        href = _href(output_dir, favicon_file_name(size))
        if size == APPLE_TOUCH_SIZE:
            links.append(f'<link rel="apple-touch-icon" sizes="{size}x{size}" href="{href}">')
        else:
            links.append(f'<link rel="icon" type="image/png" sizes="{size}x{size}" href="{href}">')
    if has_manifest_sizes(sizes):
        links.append(f'<link rel="manifest" href="{_href(output_dir, MANIFEST_NAME)}">')
    return links


def build_manifest(
    name: str = "App",
    short_name: Optional[str] = None,
    theme_color: str = "#ffffff",
    background_color: str = "#ffffff",
) -> Dict:
    """Web app manifest referencing the 192 and 512 icons beside it."""
    return {
        "name": name,
        "short_name": short_name or name,
        "icons": [
            {
                "src": favicon_file_name(size),
                "sizes": f"{size}x{size}",
                "type": "image/png",
            }
            for size in MANIFEST_SIZES
        ],
        "theme_color": theme_color,
        "background_color": background_color,
        "display": "standalone",
    }
