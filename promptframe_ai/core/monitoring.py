"""
Logfire monitoring for the image studio.

When enabled, requests, SQL, outgoing HTTP and OpenAI calls are traced, and
the helpers below add one event per API request, generation job change,
image call and unhandled error.

The initialization is opt-in and driven by environment variables, so local
development and tests run without any Logfire account.
"""

import logging
import os
from typing import Optional

import logfire
from fastapi import FastAPI

logger = logging.getLogger(__name__)


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


LOGFIRE_ENABLED = _flag("LOGFIRE_ENABLED", "false")
LOGFIRE_TOKEN = os.getenv("LOGFIRE_TOKEN", "")
LOGFIRE_PROJECT_NAME = os.getenv("LOGFIRE_PROJECT_NAME", "promptframe-ai")
LOGFIRE_ENVIRONMENT = os.getenv("LOGFIRE_ENVIRONMENT", "development")
LOGFIRE_SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "promptframe-ai-server")
LOGFIRE_SERVICE_VERSION = os.getenv("LOGFIRE_SERVICE_VERSION", "0.1.0")

# Sampling configuration
LOGFIRE_SAMPLE_RATE = float(os.getenv("LOGFIRE_SAMPLE_RATE", "1.0"))

# Feature flags
LOGFIRE_TRACE_PYDANTIC_AI = _flag("LOGFIRE_TRACE_PYDANTIC_AI", "true")
LOGFIRE_TRACE_OPENAI = _flag("LOGFIRE_TRACE_OPENAI", "true")
LOGFIRE_TRACE_SQLALCHEMY = _flag("LOGFIRE_TRACE_SQLALCHEMY", "true")
LOGFIRE_TRACE_HTTPX = _flag("LOGFIRE_TRACE_HTTPX", "true")
LOGFIRE_TRACE_FASTAPI = _flag("LOGFIRE_TRACE_FASTAPI", "true")

_configured = False


def is_logfire_active() -> bool:
    """Return True once ``initialize_logfire`` has configured Logfire."""
    return _configured


def initialize_logfire(app: FastAPI | None = None) -> None:
    """
    Initialize Pydantic Logfire for monitoring and tracing.

    Sets up Logfire with automatic instrumentation for Pydantic AI agents,
    the OpenAI SDK, SQLAlchemy, HTTPX and (when ``app`` is given) FastAPI.

    Args:
        app: FastAPI application instance for endpoint instrumentation (optional).
    """
    global _configured

    if not LOGFIRE_ENABLED:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return

    if not LOGFIRE_TOKEN:
        logger.warning(
            "Logfire is enabled but LOGFIRE_TOKEN is not set. "
            "Monitoring will not work. Set LOGFIRE_TOKEN to enable Logfire."
        )
        return

    try:
        logfire.configure(
            token=LOGFIRE_TOKEN,
            service_name=LOGFIRE_SERVICE_NAME,
            service_version=LOGFIRE_SERVICE_VERSION,
            environment=LOGFIRE_ENVIRONMENT,
            sampling=logfire.SamplingOptions(head=LOGFIRE_SAMPLE_RATE),
        )
        _configured = True
    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)
        return

    instrumentations = [
        (LOGFIRE_TRACE_PYDANTIC_AI, "Pydantic AI", logfire.instrument_pydantic_ai),
        (LOGFIRE_TRACE_OPENAI, "OpenAI", logfire.instrument_openai),
        (LOGFIRE_TRACE_SQLALCHEMY, "SQLAlchemy", logfire.instrument_sqlalchemy),
        (LOGFIRE_TRACE_HTTPX, "HTTPX", logfire.instrument_httpx),
    ]
    for enabled, label, instrument in instrumentations:
        if not enabled:
            continue
        try:
            instrument()
            logger.info(f"Logfire: {label} instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument {label}: {e}")

    if LOGFIRE_TRACE_FASTAPI:
        if app is not None:
            try:
                logfire.instrument_fastapi(app=app)
                logger.info("Logfire: FastAPI instrumentation enabled")
            except Exception as e:
                logger.warning(f"Failed to instrument FastAPI: {e}")
        else:
            logger.debug("FastAPI app instance not provided, skipping FastAPI instrumentation")

    logger.info(
        f"Logfire monitoring initialized: "
        f"project={LOGFIRE_PROJECT_NAME}, "
        f"environment={LOGFIRE_ENVIRONMENT}, "
        f"service={LOGFIRE_SERVICE_NAME}"
    )


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """
    Log an API request with performance metrics.

    Args:
        method: HTTP method
        path: Request path
        status_code: HTTP status code
        duration_ms: Request duration in milliseconds
    """
    if not _configured:
        return
    try:
        logfire.info(
            "API request completed",
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=duration_ms,
        )
    except Exception:
        logger.debug(f"Could not log API request to Logfire: {method} {path}")


def log_generation_job(job_id: str, status: str, completed: int, failed: int, total: int) -> None:
    """
    Log the outcome of an image generation or regeneration job.

    Args:
        job_id: The generation job identifier
        status: Final job status (completed, failed)
        completed: Number of images stored
        failed: Number of image calls that failed
        total: Number of images the job asked for
    """
    if not _configured:
        return
    try:
        logfire.info(
            "Generation job finished",
            job_id=job_id,
            status=status,
            completed=completed,
            failed=failed,
            total=total,
        )
    except Exception:
        logger.debug(f"Could not log generation job to Logfire: job_id={job_id}")


def log_image_call(operation: str, model: str, size: str, duration_ms: float) -> None:
    """
    Log a single OpenAI image API call.

    Args:
        operation: ``generate`` or ``edit``
        model: The image model name
        size: Requested image size
        duration_ms: Call duration in milliseconds
    """
    if not _configured:
        return
    try:
        logfire.info(
            "Image call completed",
            operation=operation,
            model=model,
            size=size,
            duration_ms=duration_ms,
        )
    except Exception:
        logger.debug(f"Could not log image call to Logfire: {operation} {model}")


def log_error(error_type: str, error_message: str, context: Optional[dict] = None) -> None:
    """
    Log an error with context for debugging.

    Args:
        error_type: Type of error
        error_message: Error message
        context: Additional context dictionary
    """
    if not _configured:
        return
    try:
        logfire.error(
            f"{error_type}: {error_message}",
            **(context or {}),
        )
    except Exception:
        logger.debug(f"Could not log error to Logfire: {error_type}")
