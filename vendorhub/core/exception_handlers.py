"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to the {"success": false, ...} failure envelope.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from vendorhub.core.config import get_settings
from vendorhub.domain.exceptions import VendorHubException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status
_ERROR_CODE_STATUS: dict[str, int] = {
    "RESOURCE_NOT_FOUND": 404,
    "ALREADY_EXISTS": 409,
    "VALIDATION_ERROR": 400,
    "EXTERNAL_SERVICE_ERROR": 502,
}


def _failure(message: Any, error_code: str, details: Any = None) -> dict[str, Any]:
    return {
        "success": False,
        "error": message,
        "error_code": error_code,
        "details": details if details is not None else {},
    }


def _vendorhub_exception_handler(
    request: Request, exc: VendorHubException
) -> JSONResponse:
    """Return JSON from VendorHubException.to_dict() with the mapped status code."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    return JSONResponse(status_code=status, content=exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content=_failure(
            "Request validation failed",
            "VALIDATION_ERROR",
            jsonable_encoder(exc.errors()),
        ),
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content=_failure(exc.detail, "HTTP_ERROR"),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(status_code=500, content=_failure(detail, "INTERNAL_ERROR"))


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: VendorHubException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(VendorHubException, _vendorhub_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
