import json
import logging
from pathlib import PurePosixPath
from typing import Any, Dict, List, Optional, Sequence

from image_toolkit.application.interfaces import IImagePipelineAdapters
from utils.derived_assets import (
    MANIFEST_NAME,
    build_manifest,
    favicon_link_tags,
    has_manifest_sizes,
    validate_favicon_sizes,
)

logger = logging.getLogger(__name__)


class CreateFaviconUseCase:
    """Export a favicon set (PNG renditions, HTML link tags, web manifest)."""

    def __init__(self, adapters: IImagePipelineAdapters) -> None:
        self._adapters = adapters

    async def execute(
        self,
        source_path: str,
        output_dir: str,
        sizes: Optional[Sequence[int]] = None,
        app_name: Optional[str] = None,
        write_manifest: bool = True,
    ) -> Dict[str, Any]:
        store, processor = self._adapters.store, self._adapters.processor
        sizes = validate_favicon_sizes(sizes)

        image = await processor.load(await store.read_bytes(source_path))
        renditions = await processor.favicons(image, sizes)

        files: List[Dict[str, Any]] = []
        favicon_path = None
        for rendition in renditions:
            rel_path = str(PurePosixPath(output_dir) / rendition.file_name)
            encoded = await processor.encode(rendition.image, "png")
            await store.write_bytes(rel_path, encoded.data)
            if rendition.file_name.startswith("favicon-"):
                files.append(
                    {
                        "path": rel_path,
                        "size": f"{rendition.size}x{rendition.size}",
                        "format": "png",
                        "rel": rendition.rel,
                        "manifest": rendition.in_manifest,
                    }
                )
            else:
                favicon_path = rel_path

        manifest_path = None
        if write_manifest and has_manifest_sizes(sizes):
            manifest_path = str(PurePosixPath(output_dir) / MANIFEST_NAME)
            manifest = build_manifest(name=app_name or "App")
            await store.write_text(manifest_path, json.dumps(manifest, indent=2))

        links = favicon_link_tags(output_dir, sizes)
        logger.info("Created %d favicon files in %s", len(files) + 1, output_dir)
        return {
            "files": files,
            "favicon_path": favicon_path,
            "manifest_path": manifest_path,
            "html_code": "\n".join(links),
        }
