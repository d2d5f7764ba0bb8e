"""
Output format resolution helpers.
"""

from pathlib import PurePath
from typing import Optional

SUPPORTED_FORMATS = ("webp", "jpeg", "png", "avif")

EXTENSION_FORMATS = {
    "webp": "webp",
    "jpg": "jpeg",
    "jpeg": "jpeg",
    "png": "png",
    "avif": "avif",
}

# Pillow format identifiers
PIL_FORMATS = {
    "webp": "WEBP",
    "jpeg": "JPEG",
    "png": "PNG",
    "avif": "AVIF",
}

MIME_TYPES = {
    "webp": "image/webp",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "avif": "image/avif",
}


def normalize_format(value: Optional[str]) -> Optional[str]:
    """Lower-case a format name and fold "jpg" into "jpeg"."""
    if not value:
        return None
    value = value.strip().lower().lstrip(".")
    return "jpeg" if value == "jpg" else value


def format_from_path(path: Optional[str]) -> Optional[str]:
    """Infer a supported format from a file extension, or None."""
    if not path:
        return None
    ext = PurePath(path).suffix.lower().lstrip(".")
    return EXTENSION_FORMATS.get(ext)


def resolve_format(
    output_path: Optional[str],
    explicit_format: Optional[str] = None,
    configured_default: str = "webp",
) -> str:
    """
    Decide the output container format.

    Precedence: explicit format > output path extension > configured default.
    Unknown extensions fall through to the default. The explicit value is
    returned as given (normalized) so that an out-of-set format is only
    rejected at encoding time.

    Examples:
        >>> resolve_format("hero.jpg")
        'jpeg'
        >>> resolve_format("hero.jpg", "png")
        'png'
        >>> resolve_format("hero.tiff", configured_default="avif")
        'avif'
    """
    explicit = normalize_format(explicit_format)
    if explicit:
        return explicit
    return format_from_path(output_path) or normalize_format(configured_default) or "webp"


def with_extension(path: str, image_format: str) -> str:
    """Return `path` with its extension replaced to match `image_format`.

    Paths that already carry a matching extension ("jpg" for jpeg included)
    are returned untouched.
    """
    if format_from_path(path) == image_format:
        return path
    p = PurePath(path)
    if p.suffix:
        return str(p.with_suffix(f".{image_format}"))
    return f"{path}.{image_format}"


def format_file_size(size: int) -> str:
    """Human readable file size: B, KB or MB with two decimals."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.2f} KB"
    return f"{size / (1024 * 1024):.2f} MB"
