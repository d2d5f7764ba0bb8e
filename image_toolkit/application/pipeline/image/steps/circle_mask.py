from __future__ import annotations

from image_toolkit.application.interfaces import IImageProcessor
from image_toolkit.application.pipeline.base import BaseStep, PipelineContext


class CircleMaskStep(BaseStep):
    name = "circle_mask"
    required_keys = ["image"]

    def __init__(self, processor: IImageProcessor):
        self.processor = processor

    def can_skip(self, context: PipelineContext) -> bool:
        transform = context.input.get("transform")
        return not (transform is not None and transform.circle)

    async def run(self, context: PipelineContext) -> None:  # type: ignore[override]
        context.set("image", await self.processor.circle(context.get("image")))
