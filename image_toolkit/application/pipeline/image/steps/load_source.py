from __future__ import annotations

import logging

from image_toolkit.application.interfaces import IFileStore, IImageProcessor
from image_toolkit.application.pipeline.base import BaseStep, PipelineContext

logger = logging.getLogger(__name__)


class LoadSourceStep(BaseStep):
    """Read the source bytes and decode them.

    Input:  source_bytes | source_path
    Output: source (SourceImage), image (working image)
    """

    name = "load_source"

    def __init__(self, store: IFileStore, processor: IImageProcessor):
        self.store = store
        self.processor = processor

    async def run(self, context: PipelineContext) -> None:  # type: ignore[override]
        data = context.input.get("source_bytes")
        if data is None:
            source_path = context.input.get("source_path")
            if not source_path:
                raise ValueError("Either source_bytes or source_path is required")
            data = await self.store.read_bytes(source_path)

        source = await self.processor.describe(data)
        logger.debug(
            "Loaded %s source %dx%d (%d bytes)",
            source.format,
            source.width,
            source.height,
            source.size,
        )
        context.update(source=source, image=await self.processor.load(data))
