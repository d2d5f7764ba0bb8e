from typing import Any, Dict, Optional

from image_toolkit.application.interfaces import IImagePipelineAdapters
from image_toolkit.application.use_cases.image_process import run_image_pipeline, summarize
from utils.watermark_utils import WatermarkSpec


class AddWatermarkUseCase:
    def __init__(self, adapters: IImagePipelineAdapters) -> None:
        self._adapters = adapters

    async def execute(
        self,
        source_path: str,
        output_path: str,
        spec: WatermarkSpec,
        image_format: Optional[str] = None,
    ) -> Dict[str, Any]:
        # reject a bad spec before touching the filesystem
        spec.validate()
        ctx = await run_image_pipeline(
            self._adapters,
            source_path=source_path,
            output_path=output_path,
            watermark=spec,
            format=image_format,
        )
        return summarize(ctx)
