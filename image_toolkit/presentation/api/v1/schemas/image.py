from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from utils.geometry_utils import TransformRequest
from utils.metadata_utils import PhotoAttribution
from utils.tonal_utils import FilterOptions
from utils.watermark_utils import WatermarkSpec

WatermarkPosition = Literal[
    "center", "top-left", "top-right", "bottom-left", "bottom-right", "custom"
]


class Attribution(BaseModel):
    provider: str
    photo_id: str
    photographer: str
    photographer_url: Optional[str] = None
    photo_url: Optional[str] = None

    def to_domain(self) -> PhotoAttribution:
        return PhotoAttribution(**self.model_dump())


class ProcessImageRequest(BaseModel):
    source_path: str
    output_path: Optional[str] = None
    width: Optional[int] = Field(default=None, ge=1, le=10000)
    height: Optional[int] = Field(default=None, ge=1, le=10000)
    max_width: Optional[int] = Field(default=None, ge=1, le=10000)
    aspect_ratio: Optional[str] = None
    format: Optional[str] = None
    quality: Optional[int] = Field(default=None, ge=1, le=100)
    circle: bool = False
    attribution: Optional[Attribution] = None

    def to_transform(self) -> TransformRequest:
        return TransformRequest(
            width=self.width,
            height=self.height,
            max_width=self.max_width,
            aspect_ratio=self.aspect_ratio,
            format=self.format,
            quality=self.quality,
            circle=self.circle,
        )


class SavedImageResponse(BaseModel):
    path: str
    format: str
    width: int
    height: int


class ProcessImageResponse(SavedImageResponse):
    original_size: int
    new_size: int
    saved_bytes: int
    warnings: List[str] = []
    sidecar_path: Optional[str] = None


class OptimizeImageRequest(BaseModel):
    source_path: str
    output_path: Optional[str] = None
    max_width: Optional[int] = Field(default=None, ge=1, le=10000)
    quality: Optional[int] = Field(default=None, ge=1, le=100)


class OptimizeImageResponse(SavedImageResponse):
    original_size: int
    optimized_size: int
    saved_bytes: int
    savings_percent: float


class AnalyzeImageRequest(BaseModel):
    source_path: str


class AnalyzeImageResponse(BaseModel):
    path: str
    format: str
    width: int
    height: int
    size: int
    size_formatted: str
    aspect_ratio: str
    has_alpha: bool
    color_space: str
    channels: int
    density: Optional[int] = None
    orientation: Optional[int] = None
    is_optimized: bool
    optimization_suggestions: List[str] = []


class FiltersRequest(BaseModel):
    source_path: str
    output_path: str
    format: Optional[str] = None
    blur: Optional[float] = Field(default=None, ge=0)
    sharpen: Optional[float] = Field(default=None, ge=0)
    grayscale: bool = False
    sepia: bool = False
    brightness: float = Field(default=0, ge=-100, le=100)
    contrast: float = Field(default=0, ge=-100, le=100)
    saturation: float = Field(default=0, ge=-100, le=100)

    def to_options(self) -> FilterOptions:
        return FilterOptions(
            blur=self.blur,
            sharpen=self.sharpen,
            grayscale=self.grayscale,
            sepia=self.sepia,
            brightness=self.brightness,
            contrast=self.contrast,
            saturation=self.saturation,
        )


class FiltersResponse(SavedImageResponse):
    applied_filters: List[str] = []


class WatermarkRequest(BaseModel):
    source_path: str
    output_path: str
    format: Optional[str] = None
    text: Optional[str] = None
    text_color: str = "#ffffff"
    font_size: Optional[float] = Field(default=None, gt=0)
    font_family: Optional[str] = None
    watermark_image_path: Optional[str] = None
    position: WatermarkPosition = "center"
    x: Optional[int] = None
    y: Optional[int] = None
    size: Optional[int] = Field(default=None, ge=1)
    size_percent: Optional[float] = None
    opacity: float = 50

    def to_spec(self) -> WatermarkSpec:
        extra = {"font_family": self.font_family} if self.font_family else {}
        return WatermarkSpec(
            text=self.text,
            text_color=self.text_color,
            font_size=self.font_size,
            image_path=self.watermark_image_path,
            position=self.position,
            x=self.x,
            y=self.y,
            size=self.size,
            size_percent=self.size_percent,
            opacity=self.opacity,
            **extra,
        )


class CropRequest(BaseModel):
    source_path: str
    output_path: str
    x: float
    y: float
    width: float
    height: float
    format: Optional[str] = None


class CropArea(BaseModel):
    x: int
    y: int
    width: int
    height: int


class CropResponse(SavedImageResponse):
    crop_area: CropArea


class RotateRequest(BaseModel):
    source_path: str
    output_path: str
    angle: Optional[float] = None
    rotate90: bool = False
    rotate180: bool = False
    rotate270: bool = False
    format: Optional[str] = None


class RotateResponse(SavedImageResponse):
    angle: float


class PlaceholderRequest(BaseModel):
    output_path: str
    width: int = Field(ge=1, le=10000)
    height: int = Field(ge=1, le=10000)
    background_color: str = "#cccccc"
    text_color: str = "#666666"
    format: Optional[str] = None
    use_image: bool = False
    image_id: Optional[int] = Field(default=None, ge=0)
    blur: Optional[int] = None
    grayscale: bool = False
    transparent: bool = False


class PlaceholderResponse(SavedImageResponse):
    source: str


class FaviconRequest(BaseModel):
    source_path: str
    output_dir: str = "public"
    sizes: Optional[List[int]] = None
    app_name: Optional[str] = None

    @model_validator(mode="after")
    def check_sizes(self):
        if self.sizes is not None and not self.sizes:
            raise ValueError("sizes must not be empty")
        return self


class FaviconFile(BaseModel):
    path: str
    size: str
    format: str
    rel: str
    manifest: bool


class FaviconResponse(BaseModel):
    files: List[FaviconFile]
    favicon_path: Optional[str] = None
    manifest_path: Optional[str] = None
    html_code: str
