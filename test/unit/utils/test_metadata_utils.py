import datetime as dt

from utils.metadata_utils import (
    PhotoAttribution,
    build_sidecar,
    isoformat_utc,
    sidecar_path,
)

ATTRIBUTION = PhotoAttribution(
    provider="unsplash",
    photo_id="abc123",
    photographer="Jane Doe",
    photographer_url="https://unsplash.com/@jane",
    photo_url="https://unsplash.com/photos/abc123",
)


def test_credit_lines():
    assert ATTRIBUTION.as_text() == "Photo by Jane Doe on Unsplash"
    assert ATTRIBUTION.as_html() == (
        '<a href="https://unsplash.com/photos/abc123">Photo by Jane Doe on Unsplash</a>'
    )
    assert ATTRIBUTION.as_markdown() == (
        "[Photo by Jane Doe on Unsplash](https://unsplash.com/photos/abc123)"
    )


def test_sidecar_document():
    doc = build_sidecar(
        ATTRIBUTION,
        file_path="public/hero.webp",
        image_format="webp",
        width=1200,
        height=675,
        quality=90,
        downloaded_at=dt.datetime(2024, 5, 1, 12, 0, 0, 250000, tzinfo=dt.timezone.utc),
    )
    assert sidecar_path("public/hero.webp") == "public/hero.webp.json"
    assert doc["photoId"] == "abc123"
    assert doc["source"] == doc["provider"] == "unsplash"
    assert doc["downloadedAt"] == "2024-05-01T12:00:00.250Z"
    assert (doc["width"], doc["height"], doc["quality"]) == (1200, 675, 90)
    assert doc["attribution"]["text"] == "Photo by Jane Doe on Unsplash"


def test_isoformat_utc_converts_offsets():
    moment = dt.datetime(2024, 5, 1, 14, 0, tzinfo=dt.timezone(dt.timedelta(hours=2)))
    assert isoformat_utc(moment) == "2024-05-01T12:00:00.000Z"
