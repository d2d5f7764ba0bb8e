from __future__ import annotations

from typing import List, Protocol

from utils.palette_utils import Swatch


class IColorQuantizer(Protocol):
    async def quantize(self, data: bytes) -> List[Swatch]:
        """Reduce an encoded image to a list of representative swatches.

        Implementations transcode unsupported containers themselves.
        """
        ...
