from __future__ import annotations

from image_toolkit.application.interfaces import IFileStore, IImageProcessor
from image_toolkit.application.pipeline.base import BaseStep, PipelineContext
from image_toolkit.core.exceptions import NotFoundError


class WatermarkStep(BaseStep):
    """Composite a text or image watermark onto the working image.

    Input:  image, watermark (WatermarkSpec)
    Output: image
    """

    name = "watermark"
    required_keys = ["image"]

    def __init__(self, store: IFileStore, processor: IImageProcessor):
        self.store = store
        self.processor = processor

    def can_skip(self, context: PipelineContext) -> bool:
        return context.input.get("watermark") is None

    async def run(self, context: PipelineContext) -> None:  # type: ignore[override]
        spec = context.input["watermark"]
        spec.validate()

        mark = None
        if not spec.is_text:
            try:
                data = await self.store.read_bytes(spec.image_path)
            except NotFoundError as e:
                raise NotFoundError(
                    f"Watermark image not found: {spec.image_path}", spec.image_path
                ) from e
            mark = await self.processor.load(data)

        image = await self.processor.watermark(context.get("image"), spec, mark)
        context.set("image", image)
