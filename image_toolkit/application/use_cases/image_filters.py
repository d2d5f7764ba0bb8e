from typing import Any, Dict, Optional

from image_toolkit.application.interfaces import IImagePipelineAdapters
from image_toolkit.application.use_cases.image_process import run_image_pipeline, summarize
from utils.tonal_utils import FilterOptions


class ApplyFiltersUseCase:
    def __init__(self, adapters: IImagePipelineAdapters) -> None:
        self._adapters = adapters

    async def execute(
        self,
        source_path: str,
        output_path: str,
        options: FilterOptions,
        image_format: Optional[str] = None,
    ) -> Dict[str, Any]:
        ctx = await run_image_pipeline(
            self._adapters,
            source_path=source_path,
            output_path=output_path,
            filters=options,
            format=image_format,
        )
        return {**summarize(ctx), "applied_filters": ctx.get("applied_filters", [])}
