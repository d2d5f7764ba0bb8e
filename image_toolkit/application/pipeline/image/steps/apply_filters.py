from __future__ import annotations

import logging

from image_toolkit.application.interfaces import IImageProcessor
from image_toolkit.application.pipeline.base import BaseStep, PipelineContext

logger = logging.getLogger(__name__)


class ApplyFiltersStep(BaseStep):
    """Tonal adjustments.

    Input:  image, filters (FilterOptions)
    Output: image, applied_filters
    """

    name = "apply_filters"
    required_keys = ["image"]

    def __init__(self, processor: IImageProcessor):
        self.processor = processor

    def can_skip(self, context: PipelineContext) -> bool:
        options = context.input.get("filters")
        if options is None or options.is_identity():
            context.set("applied_filters", [])
            return True
        return False

    async def run(self, context: PipelineContext) -> None:  # type: ignore[override]
        image, applied = await self.processor.apply_filters(
            context.get("image"), context.input["filters"]
        )
        logger.info("Applied filters: %s", ", ".join(applied))
        context.update(image=image, applied_filters=applied)
