from __future__ import annotations

from image_toolkit.application.interfaces import IImageProcessor
from image_toolkit.application.pipeline.base import BaseStep, PipelineContext
from image_toolkit.core.config import settings
from utils.metadata_utils import attribution_exif


class EncodeStep(BaseStep):
    """Encode the working image.

    Input:  image, format, quality?, attribution?
    Output: encoded (EncodedAsset), quality
    """

    name = "encode"
    required_keys = ["image", "format"]

    def __init__(self, processor: IImageProcessor):
        self.processor = processor

    async def run(self, context: PipelineContext) -> None:  # type: ignore[override]
        transform = context.input.get("transform")
        quality = context.input.get("quality") or (
            transform.quality if transform is not None else None
        )
        quality = quality or settings.default_quality

        exif = None
        attribution = context.input.get("attribution")
        if attribution is not None and context.option("embed_exif", settings.embed_exif):
            exif = attribution_exif(attribution)

        encoded = await self.processor.encode(
            context.get("image"), context.get("format"), quality, exif
        )
        context.update(encoded=encoded, quality=quality)
