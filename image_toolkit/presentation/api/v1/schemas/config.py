from typing import Any, Dict

from pydantic import BaseModel


class WriteConfigRequest(BaseModel):
    directory: str = "."


class WriteConfigResponse(BaseModel):
    path: str
    config: Dict[str, Any]
