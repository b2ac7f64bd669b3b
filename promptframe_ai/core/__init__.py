"""
Core utilities and configuration for PromptFrame-AI.

This package provides core functionality including logging configuration,
monitoring, database setup and the API I/O models.
"""

from promptframe_ai.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
