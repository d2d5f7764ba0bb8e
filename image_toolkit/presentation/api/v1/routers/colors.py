"""
Color palette API endpoints
"""

import base64

from fastapi import APIRouter, Depends, Response

from image_toolkit.application.use_cases.color_extract import (
    ExtractColorsUseCase,
    GeneratePaletteImageUseCase,
)
from image_toolkit.presentation.api.v1.dependencies.images import (
    get_extract_colors_use_case,
    get_generate_palette_image_use_case,
)
from image_toolkit.presentation.api.v1.schemas.color import (
    ExtractColorsRequest,
    ExtractColorsResponse,
    PaletteImageRequest,
    PaletteImageResponse,
)

router = APIRouter(prefix="/colors", tags=["colors"])


@router.post("/extract", response_model=ExtractColorsResponse)
async def extract_colors(
    body: ExtractColorsRequest,
    use_case: ExtractColorsUseCase = Depends(get_extract_colors_use_case),
):
    result = await use_case.execute(body.source_path, body.include_palette_image)
    image = result.pop("palette_image", None)
    if image is not None:
        result["palette_image"] = base64.b64encode(image).decode("ascii")
    return result


@router.post(
    "/palette",
    response_model=PaletteImageResponse,
    responses={200: {"content": {"image/png": {}}}},
)
async def generate_palette_image(
    body: PaletteImageRequest,
    use_case: GeneratePaletteImageUseCase = Depends(get_generate_palette_image_use_case),
):
    """Render the palette as a PNG; saved when `output_path` is given,
    otherwise returned as the response body."""
    result = await use_case.execute(body.source_path, body.output_path)
    if result["path"] is None:
        return Response(content=result["data"], media_type="image/png")
    return PaletteImageResponse(path=result["path"], colors=result["colors"])
