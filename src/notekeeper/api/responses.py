"""JSON envelope shared by every endpoint."""

from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ..core.schemas.common import ApiResponse, PaginationMeta


def api_response(
    code: int,
    message: str,
    data: Any = None,
    meta: Optional[PaginationMeta] = None,
    headers: Optional[dict] = None,
) -> JSONResponse:
    """Build `{success, message, code, data?, meta?}`; empty parts are left out."""
    envelope = ApiResponse(
        success=code < 400,
        message=message,
        code=code,
        data=jsonable_encoder(data, by_alias=True) if data is not None else None,
        meta=meta,
    )
    return JSONResponse(
        status_code=code,
        content=envelope.model_dump(mode="json", by_alias=True, exclude_none=True),
        headers=headers,
    )
