from fastapi import HTTPException, status

from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode


class AppException(HTTPException):
    """Base for domain errors; the detail is already the response envelope."""
    http_status = status.HTTP_400_BAD_REQUEST
    app_status_code = AppStatusCode.OPERATION_FAILED

    def __init__(self, message: str, status_code: str | None = None):
        self.message = message
        self.app_status_code = status_code or self.app_status_code
        super().__init__(
            status_code=self.http_status,
            detail=JsonOutResult(
                data=None,
                status="Failure",
                status_code=self.app_status_code,
                message=message
            ).model_dump()
        )

    def __str__(self):
        return self.message


class ValidationError(AppException):
    http_status = status.HTTP_400_BAD_REQUEST
    app_status_code = AppStatusCode.INVALID_INPUT


class ConflictError(AppException):
    http_status = status.HTTP_409_CONFLICT
    app_status_code = AppStatusCode.DUPLICATE_ADD_ERROR


class NotFoundError(AppException):
    http_status = status.HTTP_404_NOT_FOUND
    app_status_code = AppStatusCode.NOT_FOUND


class ForbiddenError(AppException):
    http_status = status.HTTP_403_FORBIDDEN
    app_status_code = AppStatusCode.UNAUTHORIZED_ACTION


class InvalidStateError(AppException):
    http_status = status.HTTP_400_BAD_REQUEST
    app_status_code = AppStatusCode.INVALID_STATE


class UnauthenticatedError(AppException):
    http_status = status.HTTP_401_UNAUTHORIZED
    app_status_code = AppStatusCode.AUTHENTICATION_TOKEN_INVALID


class UpstreamError(AppException):
    http_status = status.HTTP_503_SERVICE_UNAVAILABLE
    app_status_code = AppStatusCode.OPERATION_FAILED
