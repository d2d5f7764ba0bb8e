import json
from pathlib import PurePosixPath
from typing import Any, Dict

from image_toolkit.application.interfaces import IImagePipelineAdapters
from image_toolkit.core.config import CONFIG_FILE_NAME, settings


class WriteDefaultConfigUseCase:
    """Write a `.image-toolkit.json` with the processing defaults."""

    def __init__(self, adapters: IImagePipelineAdapters) -> None:
        self._adapters = adapters

    async def execute(self, directory: str = ".") -> Dict[str, Any]:
        defaults = settings.processing_defaults()
        path = str(PurePosixPath(directory) / CONFIG_FILE_NAME)
        written = await self._adapters.store.write_text(path, json.dumps(defaults, indent=2))
        return {"path": written, "config": defaults}
