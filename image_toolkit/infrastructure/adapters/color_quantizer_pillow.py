from __future__ import annotations

import asyncio
from typing import List

import numpy as np
from PIL import Image

from image_toolkit.application.interfaces.color_quantizer import IColorQuantizer
from utils.image_utils import open_image
from utils.palette_utils import Swatch, ensure_quantizable


class PillowColorQuantizer(IColorQuantizer):
    """Median-cut quantization over a downsampled copy of the image.

    Near-transparent and near-white pixels are ignored so backgrounds do
    not dominate the swatches.
    """

    def __init__(self, color_count: int = 64, quality: int = 5) -> None:
        self.color_count = color_count
        self.quality = max(1, quality)

    def _quantize(self, data: bytes) -> List[Swatch]:
        data = ensure_quantizable(data)
        with open_image(data) as img:
            rgba = img.convert("RGBA")
        if self.quality > 1:
            size = (
                max(1, rgba.width // self.quality),
                max(1, rgba.height // self.quality),
            )
            rgba = rgba.resize(size, Image.Resampling.BOX)

        pixels = np.asarray(rgba, dtype=np.uint8).reshape(-1, 4)
        keep = (pixels[:, 3] >= 125) & ~np.all(pixels[:, :3] > 250, axis=1)
        rgb = pixels[keep, :3]
        if rgb.size == 0:
            return []

        strip = Image.fromarray(rgb.reshape(1, -1, 3), "RGB")
        quantized = strip.quantize(
            colors=self.color_count, method=Image.Quantize.MEDIANCUT
        )
        palette = quantized.getpalette() or []
        swatches = []
        for population, index in quantized.getcolors(maxcolors=256) or []:
            r, g, b = palette[index * 3 : index * 3 + 3]
            swatches.append(Swatch((r, g, b), population))
        swatches.sort(key=lambda s: s.population, reverse=True)
        return swatches

    async def quantize(self, data: bytes) -> List[Swatch]:
        return await asyncio.to_thread(self._quantize, data)
