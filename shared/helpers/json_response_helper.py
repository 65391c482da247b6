from typing import Any

from fastapi.encoders import jsonable_encoder

from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode


def success_response(data: Any, message: str = "Success", status_code: str = AppStatusCode.DATA_RETRIEVED_SUCCESSFULLY) -> dict:
    """Build the success envelope; JsonResponseMiddleware passes it through unchanged."""
    return JsonOutResult(
        data=jsonable_encoder(data),
        status="Success",
        status_code=status_code,
        message=message
    ).model_dump()


def created_response(data: Any, message: str) -> dict:
    return success_response(data, message, AppStatusCode.CREATED_SUCCESSFULLY)


def updated_response(data: Any, message: str) -> dict:
    return success_response(data, message, AppStatusCode.UPDATED_SUCCESSFULLY)
