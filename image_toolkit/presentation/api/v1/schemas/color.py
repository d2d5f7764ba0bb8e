from typing import Dict, List, Optional

from pydantic import BaseModel


class ExtractColorsRequest(BaseModel):
    source_path: str
    include_palette_image: bool = False


class PaletteColor(BaseModel):
    name: str
    rgb: str
    hex: str
    rgb_array: List[int]


class ExtractColorsResponse(BaseModel):
    dominant: PaletteColor
    palette: Dict[str, PaletteColor]
    all_colors: List[PaletteColor]
    summary: str
    # base64 encoded PNG
    palette_image: Optional[str] = None


class PaletteImageRequest(BaseModel):
    source_path: str
    output_path: Optional[str] = None


class PaletteImageResponse(BaseModel):
    path: str
    colors: int
