from __future__ import annotations

from typing import List, Optional, Protocol, Sequence, Tuple

from PIL import Image

from utils.derived_assets import FaviconRendition
from utils.geometry_utils import CropRect, GeometryPlan
from utils.image_utils import EncodedAsset, SourceImage
from utils.palette_utils import PaletteResult
from utils.tonal_utils import FilterOptions
from utils.watermark_utils import WatermarkSpec


class IImageProcessor(Protocol):
    """Pixel operations over decoded images.

    Implementations are expected to keep CPU bound work off the event loop.
    """

    async def describe(self, data: bytes) -> SourceImage:
        ...

    async def load(self, data: bytes) -> Image.Image:
        ...

    async def apply_plan(self, img: Image.Image, plan: GeometryPlan) -> Image.Image:
        ...

    async def apply_filters(
        self, img: Image.Image, options: FilterOptions
    ) -> Tuple[Image.Image, List[str]]:
        ...

    async def circle(self, img: Image.Image) -> Image.Image:
        ...

    async def watermark(
        self, img: Image.Image, spec: WatermarkSpec, mark: Optional[Image.Image] = None
    ) -> Image.Image:
        ...

    async def crop(self, img: Image.Image, rect: CropRect) -> Image.Image:
        ...

    async def rotate(self, img: Image.Image, angle: float) -> Image.Image:
        ...

    async def encode(
        self,
        img: Image.Image,
        image_format: str,
        quality: int = 100,
        exif: Optional[bytes] = None,
        **overrides,
    ) -> EncodedAsset:
        ...

    async def render_placeholder(
        self, width: int, height: int, background_color: str, text_color: str
    ) -> Image.Image:
        ...

    async def favicons(
        self, img: Image.Image, sizes: Sequence[int]
    ) -> List[FaviconRendition]:
        ...

    async def render_palette(self, result: PaletteResult) -> Image.Image:
        ...
