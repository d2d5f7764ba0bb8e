from fastapi import APIRouter, Depends

from image_toolkit.application.use_cases.config_write import WriteDefaultConfigUseCase
from image_toolkit.presentation.api.v1.dependencies.images import (
    get_write_default_config_use_case,
)
from image_toolkit.presentation.api.v1.schemas.config import (
    WriteConfigRequest,
    WriteConfigResponse,
)

router = APIRouter(prefix="/config", tags=["config"])


@router.post("/init", response_model=WriteConfigResponse)
async def write_default_config(
    body: WriteConfigRequest,
    use_case: WriteDefaultConfigUseCase = Depends(get_write_default_config_use_case),
):
    """Write `.image-toolkit.json` with the current processing defaults."""
    return await use_case.execute(body.directory)
