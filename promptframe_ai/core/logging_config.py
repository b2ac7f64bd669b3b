"""
Logging setup for the PromptFrame-AI server.

One console handler on the root logger, an optional file handler under
``LOG_FILE_DIR`` and fixed levels for noisy packages. ``LOG_FORMAT`` picks
one of the simple, detailed or JSON line formats.
"""

import logging
import os
from pathlib import Path
from typing import Optional


def _get_logging_config():
    """Get logging configuration from the environment.

    Settings are read straight from environment variables so this module can be
    imported before the settings model without creating an import cycle.
    """
    return {
        "log_level": os.getenv("PROMPTFRAME_AI_LOG_LEVEL", "INFO").upper(),
        "log_format": os.getenv("LOG_FORMAT", "detailed"),
        "log_file_dir": os.getenv("LOG_FILE_DIR", "logs"),
        "enable_file_logging": os.getenv("ENABLE_FILE_LOGGING", "false").lower() in ("true", "1", "yes"),
    }


_config = _get_logging_config()
LOG_LEVEL = _config["log_level"]
LOG_FORMAT = _config["log_format"]
LOG_FILE_DIR = _config["log_file_dir"]
ENABLE_FILE_LOGGING = _config["enable_file_logging"]


SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"

JSON_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", '
    '"module": "%(filename)s", "function": "%(funcName)s", "line": %(lineno)d, '
    '"message": "%(message)s"}'
)


MODULE_LOG_LEVELS = {
    # Core modules
    "promptframe_ai.core": "INFO",
    "promptframe_ai.core.database": "INFO",
    # Image and text generation
    "promptframe_ai.studio": "DEBUG",
    "promptframe_ai.studio.runner": "DEBUG",
    "promptframe_ai.studio.image_client": "DEBUG",
    "promptframe_ai.studio.text_client": "DEBUG",
    # Server modules
    "promptframe_ai.server": "INFO",
    "promptframe_ai.server.api": "DEBUG",
    "promptframe_ai.server.auth": "INFO",
    # Third-party
    "sqlalchemy": "WARNING",
    "sqlalchemy.engine": "WARNING",
    "sqlalchemy.pool": "WARNING",
    "httpx": "WARNING",
    "openai": "WARNING",
    "PIL": "WARNING",
    "asyncio": "WARNING",
    "uvicorn": "INFO",
    "uvicorn.access": "INFO",
}


def _format_string(fmt: str) -> str:
    if fmt == "json":
        return JSON_FORMAT
    if fmt == "simple":
        return SIMPLE_FORMAT
    return DETAILED_FORMAT


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_file: bool = True,
) -> None:
    """
    Replace the root handlers and apply ``MODULE_LOG_LEVELS``.

    Args:
        log_level: Console level; defaults to ``PROMPTFRAME_AI_LOG_LEVEL``
        log_format: ``simple``, ``detailed`` or ``json``; anything else means detailed
        enable_file: Allow the file handler when ``ENABLE_FILE_LOGGING`` is set
    """
    level = (log_level or LOG_LEVEL).upper()
    fmt = log_format or LOG_FORMAT

    formatter = logging.Formatter(_format_string(fmt), datefmt="%Y-%m-%d %H:%M:%S")

    # Handlers filter; the root passes everything
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    file_logging = enable_file and ENABLE_FILE_LOGGING
    if file_logging:
        Path(LOG_FILE_DIR).mkdir(parents=True, exist_ok=True)
        log_file = Path(LOG_FILE_DIR) / "promptframe_ai.log"
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    for module_name, module_level in MODULE_LOG_LEVELS.items():
        logging.getLogger(module_name).setLevel(module_level)

    root_logger.info(f"Logging configured: level={level}, format={fmt}, file_logging={file_logging}")


def get_logger(name: str) -> logging.Logger:
    """Module logger; call with ``__name__``."""
    return logging.getLogger(name)
