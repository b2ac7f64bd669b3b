"""
Exception handlers for the FastAPI application.

Studio errors that an endpoint does not translate itself become 400
(unsupported settings) or 500 responses carrying the error message and
details. Anything else is logged with an error ID and answered with a
generic 500.
"""

import traceback
import uuid
from typing import Any, Union

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from promptframe_ai.core.logging_config import get_logger
from promptframe_ai.core.monitoring import log_error
from promptframe_ai.studio.errors import CapabilityError, StudioError

logger = get_logger(__name__)


def studio_error_detail(exc: StudioError) -> Union[str, dict[str, Any]]:
    """Response ``detail`` for a studio error: the message, plus details when present."""
    if exc.details:
        return {"error": exc.message, "details": exc.details}
    return exc.message


def to_http_exception(exc: StudioError, status_code: int = status.HTTP_400_BAD_REQUEST) -> HTTPException:
    return HTTPException(status_code=status_code, detail=studio_error_detail(exc))


async def studio_exception_handler(request: Request, exc: StudioError) -> JSONResponse:
    status_code = status.HTTP_400_BAD_REQUEST if isinstance(exc, CapabilityError) else 500
    logger.warning(f"{type(exc).__name__} in {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=status_code, content={"detail": studio_error_detail(exc)})


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Log an unhandled exception and return a 500 response with an error ID.

    Clients can quote the error ID when reporting the problem; the same ID is
    in the server log next to the full traceback.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with error details and error ID
    """
    error_id = uuid.uuid4().hex[:12]

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {exc}",
        exc_info=True,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": type(exc).__name__,
            "traceback": traceback.format_exc(),
        },
    )
    log_error(type(exc).__name__, str(exc), {"error_id": error_id, "path": request.url.path})

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "error_type": type(exc).__name__,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(StudioError, studio_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
