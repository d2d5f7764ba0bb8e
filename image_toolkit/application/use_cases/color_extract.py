import logging
from typing import Any, Dict, Optional

from image_toolkit.application.interfaces import IImagePipelineAdapters
from image_toolkit.core.exceptions import ImageProcessingError
from utils.palette_utils import PaletteResult, build_palette, format_palette_text

logger = logging.getLogger(__name__)


class ExtractColorsUseCase:
    """Dominant color and six-bucket palette of a local image."""

    def __init__(self, adapters: IImagePipelineAdapters) -> None:
        self._adapters = adapters

    async def palette(self, source_path: str) -> PaletteResult:
        data = await self._adapters.store.read_bytes(source_path)
        swatches = await self._adapters.quantizer.quantize(data)
        return build_palette(swatches)

    async def render(self, result: PaletteResult) -> bytes:
        processor = self._adapters.processor
        image = await processor.render_palette(result)
        encoded = await processor.encode(image, "png", compress_level=0)
        return encoded.data

    async def execute(
        self, source_path: str, include_palette_image: bool = False
    ) -> Dict[str, Any]:
        result = await self.palette(source_path)
        response: Dict[str, Any] = {
            **result.to_dict(),
            "summary": format_palette_text(result),
        }
        if include_palette_image:
            # the palette image is best effort; the color data stands on its own
            try:
                response["palette_image"] = await self.render(result)
            except (ImageProcessingError, OSError) as e:
                logger.warning("Palette image generation failed: %s", e)
                response["palette_image"] = None
        return response


class GeneratePaletteImageUseCase:
    def __init__(self, adapters: IImagePipelineAdapters) -> None:
        self._adapters = adapters
        self._colors = ExtractColorsUseCase(adapters)

    async def execute(
        self, source_path: str, output_path: Optional[str] = None
    ) -> Dict[str, Any]:
        result = await self._colors.palette(source_path)
        data = await self._colors.render(result)
        path = None
        if output_path:
            path = await self._adapters.store.write_bytes(output_path, data)
        return {
            "path": path,
            "data": data,
            "colors": len(result.all_colors) + 1,
        }
