from __future__ import annotations

import json
import logging

from image_toolkit.application.interfaces import IClock, IFileStore
from image_toolkit.application.pipeline.base import BaseStep, PipelineContext
from image_toolkit.core.config import settings
from image_toolkit.core.exceptions import SidecarWriteError, StorageError
from utils.metadata_utils import build_sidecar, sidecar_path

logger = logging.getLogger(__name__)


class WriteSidecarStep(BaseStep):
    """Write `<output>.json` attribution metadata next to the saved asset.

    Runs only when an attribution is attached and metadata saving is on. The
    primary asset is already on disk; a failure here is reported with its path.
    """

    name = "write_sidecar"
    required_keys = ["saved_path", "encoded"]

    def __init__(self, store: IFileStore, clock: IClock):
        self.store = store
        self.clock = clock

    def can_skip(self, context: PipelineContext) -> bool:
        return context.input.get("attribution") is None or not context.option(
            "save_metadata", settings.save_metadata
        )

    async def run(self, context: PipelineContext) -> None:  # type: ignore[override]
        encoded = context.get("encoded")
        output_path = context.get("output_path")
        document = build_sidecar(
            context.input["attribution"],
            file_path=output_path,
            image_format=encoded.format,
            width=encoded.width,
            height=encoded.height,
            quality=context.get("quality"),
            downloaded_at=self.clock.now(),
        )
        path = sidecar_path(output_path)
        try:
            written = await self.store.write_text(path, json.dumps(document, indent=2))
        except StorageError as e:
            raise SidecarWriteError(
                f"Image saved but metadata could not be written: {e.message}",
                asset_path=context.get("saved_path"),
                sidecar_path=path,
            ) from e
        context.set("sidecar_path", written)
