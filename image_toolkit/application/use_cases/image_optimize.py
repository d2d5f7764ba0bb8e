from typing import Any, Dict, Optional

from image_toolkit.application.interfaces import IImagePipelineAdapters
from image_toolkit.application.use_cases.image_process import run_image_pipeline, summarize
from utils.format_utils import with_extension
from utils.geometry_utils import TransformRequest

DEFAULT_OPTIMIZE_QUALITY = 85


class OptimizeImageUseCase:
    """Re-encode an image into the best web format for its content.

    Sources with transparency become PNG, everything else WebP.
    """

    def __init__(self, adapters: IImagePipelineAdapters) -> None:
        self._adapters = adapters

    async def execute(
        self,
        source_path: str,
        output_path: Optional[str] = None,
        max_width: Optional[int] = None,
        quality: Optional[int] = None,
    ) -> Dict[str, Any]:
        data = await self._adapters.store.read_bytes(source_path)
        source = await self._adapters.processor.describe(data)

        best_format = "png" if source.has_alpha else "webp"
        target = with_extension(output_path or source_path, best_format)
        ctx = await run_image_pipeline(
            self._adapters,
            source_bytes=data,
            output_path=target,
            transform=TransformRequest(
                max_width=max_width,
                format=best_format,
                quality=quality or DEFAULT_OPTIMIZE_QUALITY,
            ),
        )

        optimized_size = len(ctx.get("encoded").data)
        saved = source.size - optimized_size
        return {
            **summarize(ctx),
            "original_size": source.size,
            "optimized_size": optimized_size,
            "saved_bytes": saved,
            "savings_percent": round(saved / source.size * 100, 1) if source.size else 0.0,
        }
