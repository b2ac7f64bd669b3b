"""
Exception handlers for the PromptFrame-AI server.

This package contains the handler for studio domain errors that escape an
endpoint and the catch-all handler for unexpected exceptions.
"""

from .global_handler import setup_exception_handlers, to_http_exception

__all__ = ["setup_exception_handlers", "to_http_exception"]
