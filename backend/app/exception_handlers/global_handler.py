"""
Global exception handler for the FastAPI application.

Catches every unhandled exception, logs it with the request context and
returns a JSON body carrying an error id that can be matched against the logs.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Log an unhandled exception and turn it into a 500 response.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with the error id and type
    """
    error_id = id(exc)

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {exc}",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": type(exc).__name__,
        }
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "errorId": error_id,
            "errorType": type(exc).__name__,
        }
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the application."""
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered")
