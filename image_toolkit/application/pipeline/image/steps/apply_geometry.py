from __future__ import annotations

from image_toolkit.application.interfaces import IImageProcessor
from image_toolkit.application.pipeline.base import BaseStep, PipelineContext


class ApplyGeometryStep(BaseStep):
    name = "apply_geometry"
    required_keys = ["image", "plan"]

    def __init__(self, processor: IImageProcessor):
        self.processor = processor

    def can_skip(self, context: PipelineContext) -> bool:
        return context.get("plan").operation == "none"

    async def run(self, context: PipelineContext) -> None:  # type: ignore[override]
        image = await self.processor.apply_plan(context.get("image"), context.get("plan"))
        context.set("image", image)
