from __future__ import annotations

import logging

from image_toolkit.application.interfaces import IFileStore
from image_toolkit.application.pipeline.base import BaseStep, PipelineContext

logger = logging.getLogger(__name__)


class SaveAssetStep(BaseStep):
    name = "save_asset"
    required_keys = ["encoded", "output_path"]

    def __init__(self, store: IFileStore):
        self.store = store

    async def run(self, context: PipelineContext) -> None:  # type: ignore[override]
        encoded = context.get("encoded")
        saved = await self.store.write_bytes(context.get("output_path"), encoded.data)
        logger.info("Saved %s (%d bytes)", saved, len(encoded.data))
        context.set("saved_path", saved)
