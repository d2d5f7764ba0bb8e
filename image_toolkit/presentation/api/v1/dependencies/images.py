from fastapi import Depends

from image_toolkit.application.interfaces import IImagePipelineAdapters
from image_toolkit.application.use_cases.color_extract import (
    ExtractColorsUseCase,
    GeneratePaletteImageUseCase,
)
from image_toolkit.application.use_cases.config_write import WriteDefaultConfigUseCase
from image_toolkit.application.use_cases.favicon_create import CreateFaviconUseCase
from image_toolkit.application.use_cases.image_analyze import AnalyzeImageUseCase
from image_toolkit.application.use_cases.image_crop import CropImageUseCase
from image_toolkit.application.use_cases.image_filters import ApplyFiltersUseCase
from image_toolkit.application.use_cases.image_optimize import OptimizeImageUseCase
from image_toolkit.application.use_cases.image_process import ProcessImageUseCase
from image_toolkit.application.use_cases.image_rotate import RotateImageUseCase
from image_toolkit.application.use_cases.image_watermark import AddWatermarkUseCase
from image_toolkit.application.use_cases.placeholder_create import CreatePlaceholderUseCase
from image_toolkit.infrastructure.adapters.bundles.image import get_image_adapter_bundle


def get_adapters() -> IImagePipelineAdapters:
    """Compose the adapter bundle at the Presentation layer.

    Routers depend on this provider so tests can swap it through
    `app.dependency_overrides`.
    """
    return get_image_adapter_bundle()


def get_process_image_use_case(
    adapters: IImagePipelineAdapters = Depends(get_adapters),
) -> ProcessImageUseCase:
    return ProcessImageUseCase(adapters)


def get_optimize_image_use_case(
    adapters: IImagePipelineAdapters = Depends(get_adapters),
) -> OptimizeImageUseCase:
    return OptimizeImageUseCase(adapters)


def get_analyze_image_use_case(
    adapters: IImagePipelineAdapters = Depends(get_adapters),
) -> AnalyzeImageUseCase:
    return AnalyzeImageUseCase(adapters)


def get_apply_filters_use_case(
    adapters: IImagePipelineAdapters = Depends(get_adapters),
) -> ApplyFiltersUseCase:
    return ApplyFiltersUseCase(adapters)


def get_add_watermark_use_case(
    adapters: IImagePipelineAdapters = Depends(get_adapters),
) -> AddWatermarkUseCase:
    return AddWatermarkUseCase(adapters)


def get_crop_image_use_case(
    adapters: IImagePipelineAdapters = Depends(get_adapters),
) -> CropImageUseCase:
    return CropImageUseCase(adapters)


def get_rotate_image_use_case(
    adapters: IImagePipelineAdapters = Depends(get_adapters),
) -> RotateImageUseCase:
    return RotateImageUseCase(adapters)


def get_create_placeholder_use_case(
    adapters: IImagePipelineAdapters = Depends(get_adapters),
) -> CreatePlaceholderUseCase:
    return CreatePlaceholderUseCase(adapters)


def get_create_favicon_use_case(
    adapters: IImagePipelineAdapters = Depends(get_adapters),
) -> CreateFaviconUseCase:
    return CreateFaviconUseCase(adapters)


def get_extract_colors_use_case(
    adapters: IImagePipelineAdapters = Depends(get_adapters),
) -> ExtractColorsUseCase:
    return ExtractColorsUseCase(adapters)


def get_generate_palette_image_use_case(
    adapters: IImagePipelineAdapters = Depends(get_adapters),
) -> GeneratePaletteImageUseCase:
    return GeneratePaletteImageUseCase(adapters)


def get_write_default_config_use_case(
    adapters: IImagePipelineAdapters = Depends(get_adapters),
) -> WriteDefaultConfigUseCase:
    return WriteDefaultConfigUseCase(adapters)
