from __future__ import annotations

from types import SimpleNamespace

from image_toolkit.application.interfaces.image_adapters import IImagePipelineAdapters
from image_toolkit.core.config import settings
from image_toolkit.infrastructure.adapters import (
    LocalFileStore,
    PillowImageProcessor,
    PillowColorQuantizer,
    PicsumPlaceholderSource,
    SystemClock,
)


def get_image_adapter_bundle(*, root: str | None = None) -> IImagePipelineAdapters:
    """Provide the adapters container for the image pipeline and use cases.

    Every path handled by the bundle is resolved against `root`, which
    defaults to the configured project root.
    """
    return SimpleNamespace(
        store=LocalFileStore(root or settings.root),
        processor=PillowImageProcessor(),
        quantizer=PillowColorQuantizer(),
        placeholder_source=PicsumPlaceholderSource(),
        clock=SystemClock(),
    )
