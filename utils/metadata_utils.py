"""
Photo attribution: JSON sidecar documents and EXIF tags.
"""

import datetime as _dt
from dataclasses import dataclass
from typing import Dict, Optional

from utils.image_utils import build_exif


@dataclass(frozen=True, slots=True)
class PhotoAttribution:
    provider: str
    photo_id: str
    photographer: str
    photographer_url: Optional[str] = None
    photo_url: Optional[str] = None

    @property
    def provider_name(self) -> str:
        return self.provider[:1].upper() + self.provider[1:]

    @property
    def credit(self) -> str:
        return f"Photo by {self.photographer} on {self.provider_name}"

    def as_text(self) -> str:
        return self.credit

    def as_html(self) -> str:
        return f'<a href="{self.photo_url or ""}">{self.credit}</a>'

    def as_markdown(self) -> str:
        return f"[{self.credit}]({self.photo_url or ''})"


def sidecar_path(output_path: str) -> str:
    return f"{output_path}.json"


def isoformat_utc(moment: _dt.datetime) -> str:
    """
    Examples:
        >>> isoformat_utc(_dt.datetime(2024, 5, 1, 12, 0, tzinfo=_dt.timezone.utc))
        '2024-05-01T12:00:00.000Z'
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=_dt.timezone.utc)
    moment = moment.astimezone(_dt.timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_sidecar(
    attribution: PhotoAttribution,
    *,
    file_path: str,
    image_format: str,
    width: int,
    height: int,
    quality: int,
    downloaded_at: _dt.datetime,
) -> Dict:
    """Metadata document written next to a saved photo as `<output>.json`."""
    return {
        "source": attribution.provider,
        "provider": attribution.provider,
        "photoId": attribution.photo_id,
        "photographer": attribution.photographer,
        "photographerUrl": attribution.photographer_url,
        "photoUrl": attribution.photo_url,
        "downloadedAt": isoformat_utc(downloaded_at),
        "filePath": file_path,
        "format": image_format,
        "width": width,
        "height": height,
        "quality": quality,
        "attribution": {
            "text": attribution.as_text(),
            "html": attribution.as_html(),
            "markdown": attribution.as_markdown(),
        },
    }


def attribution_exif(attribution: PhotoAttribution) -> bytes:
    """EXIF block with Copyright, Artist and ImageDescription set."""
    copyright = attribution.credit
    if attribution.photo_url:
        copyright = f"{copyright} - {attribution.photo_url}"
    return build_exif(
        copyright=copyright,
        artist=attribution.photographer,
        description=f"{attribution.provider_name} Photo ID: {attribution.photo_id}",
    )
