"""
Image transform API endpoints
"""

import logging

from fastapi import APIRouter, Depends

from image_toolkit.application.use_cases.favicon_create import CreateFaviconUseCase
from image_toolkit.application.use_cases.image_analyze import AnalyzeImageUseCase
from image_toolkit.application.use_cases.image_crop import CropImageUseCase
from image_toolkit.application.use_cases.image_filters import ApplyFiltersUseCase
from image_toolkit.application.use_cases.image_optimize import OptimizeImageUseCase
from image_toolkit.application.use_cases.image_process import ProcessImageUseCase
from image_toolkit.application.use_cases.image_rotate import RotateImageUseCase
from image_toolkit.application.use_cases.image_watermark import AddWatermarkUseCase
from image_toolkit.application.use_cases.placeholder_create import CreatePlaceholderUseCase
from image_toolkit.presentation.api.v1.dependencies.images import (
    get_add_watermark_use_case,
    get_analyze_image_use_case,
    get_apply_filters_use_case,
    get_create_favicon_use_case,
    get_create_placeholder_use_case,
    get_crop_image_use_case,
    get_optimize_image_use_case,
    get_process_image_use_case,
    get_rotate_image_use_case,
)
from image_toolkit.presentation.api.v1.schemas.image import (
    AnalyzeImageRequest,
    AnalyzeImageResponse,
    CropRequest,
    CropResponse,
    FaviconRequest,
    FaviconResponse,
    FiltersRequest,
    FiltersResponse,
    OptimizeImageRequest,
    OptimizeImageResponse,
    PlaceholderRequest,
    PlaceholderResponse,
    ProcessImageRequest,
    ProcessImageResponse,
    RotateRequest,
    RotateResponse,
    SavedImageResponse,
    WatermarkRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/images", tags=["images"])


@router.post("/process", response_model=ProcessImageResponse)
async def process_image(
    body: ProcessImageRequest,
    use_case: ProcessImageUseCase = Depends(get_process_image_use_case),
):
    """Resize, crop or circle-mask a local image and re-encode it."""
    return await use_case.execute(
        body.source_path,
        body.to_transform(),
        output_path=body.output_path,
        attribution=body.attribution.to_domain() if body.attribution else None,
    )


@router.post("/optimize", response_model=OptimizeImageResponse)
async def optimize_image(
    body: OptimizeImageRequest,
    use_case: OptimizeImageUseCase = Depends(get_optimize_image_use_case),
):
    return await use_case.execute(
        body.source_path,
        output_path=body.output_path,
        max_width=body.max_width,
        quality=body.quality,
    )


@router.post("/analyze", response_model=AnalyzeImageResponse)
async def analyze_image(
    body: AnalyzeImageRequest,
    use_case: AnalyzeImageUseCase = Depends(get_analyze_image_use_case),
):
    return await use_case.execute(body.source_path)


@router.post("/filters", response_model=FiltersResponse)
async def apply_filters(
    body: FiltersRequest,
    use_case: ApplyFiltersUseCase = Depends(get_apply_filters_use_case),
):
    return await use_case.execute(
        body.source_path, body.output_path, body.to_options(), body.format
    )


@router.post("/watermark", response_model=SavedImageResponse)
async def add_watermark(
    body: WatermarkRequest,
    use_case: AddWatermarkUseCase = Depends(get_add_watermark_use_case),
):
    return await use_case.execute(
        body.source_path, body.output_path, body.to_spec(), body.format
    )


@router.post("/crop", response_model=CropResponse)
async def crop_image(
    body: CropRequest,
    use_case: CropImageUseCase = Depends(get_crop_image_use_case),
):
    return await use_case.execute(
        body.source_path,
        body.output_path,
        body.x,
        body.y,
        body.width,
        body.height,
        image_format=body.format,
    )


@router.post("/rotate", response_model=RotateResponse)
async def rotate_image(
    body: RotateRequest,
    use_case: RotateImageUseCase = Depends(get_rotate_image_use_case),
):
    return await use_case.execute(
        body.source_path,
        body.output_path,
        angle=body.angle,
        rotate90=body.rotate90,
        rotate180=body.rotate180,
        rotate270=body.rotate270,
        image_format=body.format,
    )


@router.post("/placeholder", response_model=PlaceholderResponse)
async def create_placeholder(
    body: PlaceholderRequest,
    use_case: CreatePlaceholderUseCase = Depends(get_create_placeholder_use_case),
):
    return await use_case.execute(
        body.output_path,
        body.width,
        body.height,
        background_color=body.background_color,
        text_color=body.text_color,
        image_format=body.format,
        use_image=body.use_image,
        image_id=body.image_id,
        blur=body.blur,
        grayscale=body.grayscale,
        transparent=body.transparent,
    )


@router.post("/favicon", response_model=FaviconResponse)
async def create_favicon(
    body: FaviconRequest,
    use_case: CreateFaviconUseCase = Depends(get_create_favicon_use_case),
):
    """Export the favicon set and return the HTML snippet that links it."""
    return await use_case.execute(
        body.source_path, body.output_dir, body.sizes, app_name=body.app_name
    )
