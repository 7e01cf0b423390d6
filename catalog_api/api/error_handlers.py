"""Error Handlers — global exception handlers for the catalog API.

Invariants:
    - CatalogError → its own status with the envelope from to_response()
    - RequestValidationError → 400, message by failing location, error lists field: message
    - Unmatched route → 404 "Endpoint not found"; wrong method → 405
    - Exception (catch-all) → 500; internal message exposed only outside production

Design Decisions:
    - Four-layer handler: domain (CatalogError), validation (Pydantic),
      routing (Starlette HTTPException), catch-all (Exception)
    - Registered from main.py via register_error_handlers (keeps main.py import fan-out low)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog_api.api.responses import send_error
from catalog_api.config import get_settings
from catalog_api.core.errors import CatalogError, ErrorSeverity

logger = logging.getLogger(__name__)

_VALIDATION_MESSAGES = {
    "path": "Invalid ID format",
    "query": "Invalid query parameters",
    "body": "Validation failed",
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_catalog_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_catalog_error_handler(app: FastAPI) -> None:
    """Register catalog domain/infrastructure error handler."""

    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError):
        """Handle all catalog domain/infrastructure errors."""
        log = logger.error if exc.severity is ErrorSeverity.CRITICAL else logger.warning
        log(
            f"CatalogError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return send_error(exc.message, exc.http_status, exc.detail)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        message, detail = _describe_validation_error(exc)
        return send_error(message, status.HTTP_400_BAD_REQUEST, detail)


def _register_http_error_handler(app: FastAPI) -> None:
    """Register routing error handler (unmatched path, wrong method)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = "Endpoint not found"
        elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            message = "Method not allowed"
        else:
            message = str(exc.detail)
        response = send_error(message, exc.status_code)
        if exc.headers:
            response.headers.update(exc.headers)
        return response


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — internal details only outside production."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        detail = None if get_settings().is_production else str(exc)
        return send_error(
            "Internal server error",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail,
        )


def _describe_validation_error(exc: RequestValidationError) -> tuple[str, str]:
    """Build (message, detail) from the failing locations."""
    errors = exc.errors()
    location = str(errors[0]["loc"][0]) if errors and errors[0]["loc"] else "body"
    message = _VALIDATION_MESSAGES.get(location, "Validation failed")
    detail = "; ".join(
        f"{'.'.join(str(part) for part in e['loc'][1:]) or e['loc'][0]}: {e['msg']}"
        for e in errors
    )
    return message, detail
