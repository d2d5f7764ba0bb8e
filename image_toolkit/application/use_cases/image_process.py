from typing import Any, Dict, Optional

from image_toolkit.application.interfaces import IImagePipelineAdapters
from image_toolkit.application.pipeline.base import PipelineContext
from image_toolkit.application.pipeline.image.builder import build_image_pipeline_via_container
from utils.geometry_utils import TransformRequest
from utils.metadata_utils import PhotoAttribution


async def run_image_pipeline(
    adapters: IImagePipelineAdapters, **payload: Any
) -> PipelineContext:
    """Run the transform pipeline over `payload` and return the final context."""
    ctx = PipelineContext(input=payload)
    pipeline = build_image_pipeline_via_container(adapters)
    result = await pipeline.execute(ctx)
    return result["context"]


def summarize(ctx: PipelineContext) -> Dict[str, Any]:
    """Common result fields of a saved transform."""
    encoded = ctx.get("encoded")
    return {
        "path": ctx.get("saved_path"),
        "format": encoded.format,
        "width": encoded.width,
        "height": encoded.height,
    }


class ProcessImageUseCase:
    """Resize, crop, circle-mask and re-encode a local image.

    The output path defaults to the source path (in-place processing).
    """

    def __init__(self, adapters: IImagePipelineAdapters) -> None:
        self._adapters = adapters

    async def execute(
        self,
        source_path: str,
        request: TransformRequest,
        output_path: Optional[str] = None,
        attribution: Optional[PhotoAttribution] = None,
    ) -> Dict[str, Any]:
        ctx = await run_image_pipeline(
            self._adapters,
            source_path=source_path,
            output_path=output_path or source_path,
            transform=request,
            attribution=attribution,
        )
        original_size = ctx.get("source").size
        new_size = len(ctx.get("encoded").data)
        warnings = ctx.get("warnings", [])
        return {
            **summarize(ctx),
            "original_size": original_size,
            "new_size": new_size,
            "saved_bytes": original_size - new_size,
            "warnings": warnings,
            "sidecar_path": ctx.get("sidecar_path"),
        }
