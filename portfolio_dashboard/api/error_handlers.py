"""
Exception handlers mapping application errors to HTTP responses.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from ..core.exceptions import AppError

logger = structlog.get_logger()


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """
    Handle all AppError exceptions with their own HTTP status codes.

    NotInitializedError and SourceUnavailableError become 503 with an
    error_type the dashboard can branch on.
    """
    error_dict = exc.to_dict()

    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "Application error occurred",
        request_path=request.url.path,
        request_method=request.method,
        **error_dict,
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error_type": exc.error_type},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach application and rate-limit handlers."""
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]
