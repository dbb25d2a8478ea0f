"""
Global exception handlers.

- AppError               -> its status code + {"success": false, "error": {code, message, field?}}
- RequestValidationError -> 400 + field-level details
- Exception (catch-all)  -> 500, logged with the request path, no internal details returned
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import AppError, Internal
from app.schemas.user import field_errors

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("AppError %s on %s", exc.code, request.url.path, exc_info=exc)
        else:
            logger.info("AppError %s on %s", exc.code, request.url.path)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        details = field_errors(exc.errors())
        logger.info("Validation error on %s: %s", request.url.path, details)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "success": False,
                "error": {"code": "VALIDATION_ERROR", "message": "Invalid data", "details": details},
            },
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=Internal.status_code, content=Internal().to_dict())
