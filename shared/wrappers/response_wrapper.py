import json
import logging
import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from fastapi.responses import JSONResponse
from fastapi import Request

from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger("asset_management.access")

ENVELOPE_KEYS = {"status", "status_code", "message"}


def _passthrough_headers(response):
    return {k: v for k, v in response.headers.items() if k.lower() != "content-length"}


class JsonResponseMiddleware(BaseHTTPMiddleware):
    """Wraps every JSON body in the JsonOutResult envelope."""

    async def dispatch(self, request: Request, call_next: Callable):
        # Skip docs/openapi endpoints
        if request.url.path.startswith(("/openapi", "/docs", "/redoc")):
            return await call_next(request)

        response = await call_next(request)

        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type:
            return response

        body_bytes = b""
        async for chunk in response.body_iterator:
            body_bytes += chunk

        try:
            data = json.loads(body_bytes.decode("utf-8")) if body_bytes else None
        except ValueError:
            async def body_gen():
                yield body_bytes
            response.body_iterator = body_gen()
            return response

        # Already wrapped (success_response or exception handlers)
        if isinstance(data, dict) and ENVELOPE_KEYS.issubset(data.keys()):
            return JSONResponse(
                content=data,
                status_code=response.status_code,
                headers=_passthrough_headers(response),
            )

        if not (200 <= response.status_code < 400):
            message = ""
            if isinstance(data, dict):
                message = data.get("detail") or data.get("message") or ""
            elif isinstance(data, str):
                message = data
            if not message:
                message = "An unexpected error occurred"

            wrapped_error = JsonOutResult(
                data=None,
                status="Failure",
                status_code=str(response.status_code),
                message=str(message),
            ).model_dump()

            return JSONResponse(
                content=wrapped_error,
                status_code=response.status_code,
                headers=_passthrough_headers(response),
            )

        wrapped = JsonOutResult(
            data=data,
            status="Success",
            status_code=AppStatusCode.DATA_RETRIEVED_SUCCESSFULLY,
            message="Data retrieved successfully"
        ).model_dump()

        return JSONResponse(
            content=wrapped,
            status_code=response.status_code,
            headers=_passthrough_headers(response),
        )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("%s %s %s %.1fms", request.method,
                    request.url.path, response.status_code, elapsed_ms)
        return response
