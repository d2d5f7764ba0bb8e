from __future__ import annotations

import asyncio
from typing import List, Optional, Sequence, Tuple

from PIL import Image

from image_toolkit.application.interfaces.image_processor import IImageProcessor
from utils.derived_assets import FaviconRendition, favicon_renditions, render_placeholder
from utils.geometry_utils import CropRect, GeometryPlan, apply_plan
from utils.image_utils import EncodedAsset, SourceImage, describe_image, encode_image, load_image
from utils.mask_utils import circle_crop
from utils.palette_utils import PaletteResult, render_palette_image
from utils.tonal_utils import FilterOptions, apply_filters
from utils.watermark_utils import WatermarkSpec, apply_watermark


class PillowImageProcessor(IImageProcessor):
    """Pillow backed pixel operations, each run in a worker thread."""

    async def describe(self, data: bytes) -> SourceImage:
        return await asyncio.to_thread(describe_image, data)

    async def load(self, data: bytes) -> Image.Image:
        return await asyncio.to_thread(load_image, data)

    async def apply_plan(self, img: Image.Image, plan: GeometryPlan) -> Image.Image:
        return await asyncio.to_thread(apply_plan, img, plan)

    async def apply_filters(
        self, img: Image.Image, options: FilterOptions
    ) -> Tuple[Image.Image, List[str]]:
        return await asyncio.to_thread(apply_filters, img, options)

    async def circle(self, img: Image.Image) -> Image.Image:
        return await asyncio.to_thread(circle_crop, img)

    async def watermark(
        self, img: Image.Image, spec: WatermarkSpec, mark: Optional[Image.Image] = None
    ) -> Image.Image:
        return await asyncio.to_thread(apply_watermark, img, spec, mark)

    async def crop(self, img: Image.Image, rect: CropRect) -> Image.Image:
        return await asyncio.to_thread(img.crop, rect.box)

    async def rotate(self, img: Image.Image, angle: float) -> Image.Image:
        def _run():
            # PIL rotates counter-clockwise
            fill = (0, 0, 0, 0) if img.mode == "RGBA" else (0, 0, 0)
            return img.rotate(
                -angle, resample=Image.Resampling.BICUBIC, expand=True, fillcolor=fill
            )

        return await asyncio.to_thread(_run)

    async def encode(
        self,
        img: Image.Image,
        image_format: str,
        quality: int = 100,
        exif: Optional[bytes] = None,
        **overrides,
    ) -> EncodedAsset:
        return await asyncio.to_thread(
            encode_image, img, image_format, quality, exif, **overrides
        )

    async def render_placeholder(
        self, width: int, height: int, background_color: str, text_color: str
    ) -> Image.Image:
        return await asyncio.to_thread(
            render_placeholder, width, height, background_color, text_color
        )

    async def favicons(
        self, img: Image.Image, sizes: Sequence[int]
    ) -> List[FaviconRendition]:
        return await asyncio.to_thread(favicon_renditions, img, sizes)

    async def render_palette(self, result: PaletteResult) -> Image.Image:
        return await asyncio.to_thread(render_palette_image, result)
