"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ProductProxyError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class MissingParameterError(ProductProxyError):
    def __init__(self, field: str):
        super().__init__(f"{field} is required", status_code=400)
        self.field = field


class UpstreamError(ProductProxyError):
    """The product-data API answered non-2xx or could not be reached."""

    def __init__(self, message: str, upstream_status: int | None = None):
        super().__init__(message, status_code=500)
        self.upstream_status = upstream_status


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = first.get("loc", ("request",))[-1]
    return f"{field}: {first.get('msg', 'invalid value')}"


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(ProductProxyError)
    async def handle_proxy_error(_request: Request, exc: ProductProxyError):
        return JSONResponse({"error": str(exc)}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_request: Request, exc: RequestValidationError):
        return JSONResponse({"error": _describe_validation_error(exc)}, status_code=400)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            {"error": "Internal server error"},
            status_code=500,
        )
