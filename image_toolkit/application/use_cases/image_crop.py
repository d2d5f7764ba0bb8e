import logging
from typing import Any, Dict, Optional

from image_toolkit.application.interfaces import IImagePipelineAdapters
from image_toolkit.core.config import settings
from utils.format_utils import resolve_format
from utils.geometry_utils import validate_crop_rect

logger = logging.getLogger(__name__)


class CropImageUseCase:
    """Cut an explicit rectangle out of a local image."""

    def __init__(self, adapters: IImagePipelineAdapters) -> None:
        self._adapters = adapters

    async def execute(
        self,
        source_path: str,
        output_path: str,
        x: float,
        y: float,
        width: float,
        height: float,
        image_format: Optional[str] = None,
    ) -> Dict[str, Any]:
        store, processor = self._adapters.store, self._adapters.processor
        fmt = resolve_format(output_path, image_format, settings.default_format)

        image = await processor.load(await store.read_bytes(source_path))
        rect = validate_crop_rect(x, y, width, height, image.width, image.height)
        cropped = await processor.crop(image, rect)
        encoded = await processor.encode(cropped, fmt, settings.default_quality)
        path = await store.write_bytes(output_path, encoded.data)
        logger.info("Cropped %s to %dx%d at (%d, %d)", source_path, rect.width, rect.height, rect.left, rect.top)

        return {
            "path": path,
            "format": encoded.format,
            "width": encoded.width,
            "height": encoded.height,
            "crop_area": {
                "x": rect.left,
                "y": rect.top,
                "width": rect.width,
                "height": rect.height,
            },
        }
