import math
from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def send_response(status_code: int, message: str, data: Optional[Any] = None) -> JSONResponse:
    """Wrap ``data`` in the standard envelope: {status, message, isSuccess, data}."""
    is_success = status_code < 400
    return JSONResponse(
        status_code=status_code,
        content={
            "status": "success" if is_success else "error",
            "message": message,
            "isSuccess": is_success,
            "data": jsonable_encoder(data) if data is not None else None,
        },
    )


def pagination_meta(page: int, limit: int, total_items: int) -> dict:
    return {
        "currentPage": page,
        "totalPages": math.ceil(total_items / limit) if limit else 0,
        "totalItems": total_items,
        "itemsPerPage": limit,
    }
