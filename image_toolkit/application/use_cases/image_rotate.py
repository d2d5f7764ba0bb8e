from typing import Any, Dict, Optional

from image_toolkit.application.interfaces import IImagePipelineAdapters
from image_toolkit.core.config import settings
from utils.format_utils import resolve_format
from utils.geometry_utils import rotation_angle


class RotateImageUseCase:
    def __init__(self, adapters: IImagePipelineAdapters) -> None:
        self._adapters = adapters

    async def execute(
        self,
        source_path: str,
        output_path: str,
        angle: Optional[float] = None,
        rotate90: bool = False,
        rotate180: bool = False,
        rotate270: bool = False,
        image_format: Optional[str] = None,
    ) -> Dict[str, Any]:
        store, processor = self._adapters.store, self._adapters.processor
        fmt = resolve_format(output_path, image_format, settings.default_format)
        degrees = rotation_angle(angle, rotate90, rotate180, rotate270)

        image = await processor.load(await store.read_bytes(source_path))
        if degrees:
            image = await processor.rotate(image, degrees)
        encoded = await processor.encode(image, fmt, settings.default_quality)
        path = await store.write_bytes(output_path, encoded.data)

        return {
            "path": path,
            "format": encoded.format,
            "width": encoded.width,
            "height": encoded.height,
            "angle": degrees,
        }
