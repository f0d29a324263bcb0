"""
Error Handling Middleware

Centralized error handling and response formatting.
"""
import traceback

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from fastapi import HTTPException, status

from ...core.config import ENVIRONMENT
from ...core.logging_config import get_logger
from ...api.exceptions import handle_business_exception
from ...domain.exceptions import FolderVaultError

logger = get_logger(__name__)


def error_response(request: Request, status_code: int, detail, **extra) -> JSONResponse:
    """Build the JSON error envelope shared by every error path."""
    content = {
        "error": detail,
        "status_code": status_code,
        "path": request.url.path,
        "request_id": getattr(request.state, "request_id", None)
    }
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


async def business_exception_handler(request: Request, exc: FolderVaultError) -> JSONResponse:
    """Exception handler turning business exceptions into JSON error responses."""
    http_exception = handle_business_exception(exc)
    if http_exception.status_code >= 500:
        logger.error(f"Business failure for {request.method} {request.url.path}: {exc}")
    else:
        logger.warning(f"Business exception for {request.method} {request.url.path}: {http_exception.detail}")
    return error_response(request, http_exception.status_code, http_exception.detail)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    logger.debug(f"HTTP exception for {request.method} {request.url.path}: {exc.status_code} - {exc.detail}")
    return error_response(request, exc.status_code, exc.detail)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that turns unexpected exceptions into 500 JSON responses.

    Business exceptions and HTTPException are handled by the exception
    handlers registered on the app; whatever escapes them ends up here.
    In development the response carries the error text and traceback.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            is_development = ENVIRONMENT != "production"

            logger.error(f"Unexpected error for {request.method} {request.url.path}: {e}", exc_info=True)

            return error_response(
                request,
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                str(e) if is_development else "Internal server error",
                traceback=traceback.format_exc() if is_development else None
            )
