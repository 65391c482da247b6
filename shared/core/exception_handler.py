import logging

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError

from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Server error"


def _format_validation_errors(exc) -> str:
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ())
                            if part not in ("body", "query", "path"))
        messages.append(f"{location}: {err.get('msg')}" if location else err.get("msg"))
    return "; ".join(messages) or "Invalid input"


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        if isinstance(exc.detail, dict) and {"status", "status_code", "message"}.issubset(exc.detail.keys()):
            return JSONResponse(content=exc.detail, status_code=exc.status_code, headers=exc.headers)

        wrapped = JsonOutResult(
            data=None,
            status="Failure",
            status_code=str(exc.status_code or AppStatusCode.OPERATION_FAILED),
            message=str(exc.detail)
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=exc.status_code or 400, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        wrapped = JsonOutResult(
            data=None,
            status="Failure",
            status_code=AppStatusCode.INVALID_INPUT,
            message=_format_validation_errors(exc)
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=400)

    # Query models built through Depends() validate on construction
    @app.exception_handler(PydanticValidationError)
    async def model_validation_exception_handler(request: Request, exc: PydanticValidationError):
        wrapped = JsonOutResult(
            data=None,
            status="Failure",
            status_code=AppStatusCode.INVALID_INPUT,
            message=_format_validation_errors(exc)
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=400)

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Datastore error on %s %s", request.method, request.url.path)

        wrapped = JsonOutResult(
            data=None,
            status="Failure",
            status_code=AppStatusCode.OPERATION_FAILED,
            message=GENERIC_ERROR_MESSAGE
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=503)

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)

        wrapped = JsonOutResult(
            data=None,
            status="Failure",
            status_code=AppStatusCode.OPERATION_FAILED,
            message=GENERIC_ERROR_MESSAGE
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=500)
