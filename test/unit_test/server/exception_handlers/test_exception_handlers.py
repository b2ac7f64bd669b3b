"""
Unit tests for server exception handlers.

Tests cover studio error translation, the catch-all handler and handler
registration.
"""

import json
from unittest.mock import Mock, patch

import pytest
from fastapi import FastAPI, Request

from promptframe_ai.server.exception_handlers import setup_exception_handlers, to_http_exception
from promptframe_ai.server.exception_handlers.global_handler import (
    global_exception_handler,
    studio_error_detail,
    studio_exception_handler,
)
from promptframe_ai.studio.errors import (
    ConceptParseError,
    ImageDownloadError,
    StudioError,
    UnsupportedQualityError,
)

pytestmark = pytest.mark.asyncio


@pytest.fixture
def mock_request():
    """Create a mock request object."""
    request = Mock(spec=Request)
    request.method = "POST"
    request.url.path = "/api/generate"
    request.query_params = {"page": "1"}
    request.client = Mock()
    request.client.host = "127.0.0.1"
    return request


class TestStudioErrorDetail:
    async def test_message_only(self):
        assert studio_error_detail(ImageDownloadError("Failed to download image: 404")) == (
            "Failed to download image: 404"
        )

    async def test_with_details(self):
        detail = studio_error_detail(UnsupportedQualityError("dall-e-2"))
        assert detail == {
            "error": "Model dall-e-2 does not support HD quality",
            "details": "dall-e-2 only supports standard quality. Please select standard quality.",
        }

    async def test_to_http_exception(self):
        exc = to_http_exception(StudioError("Nothing to undo"))
        assert exc.status_code == 400
        assert exc.detail == "Nothing to undo"
        assert to_http_exception(StudioError("boom"), 502).status_code == 502


class TestStudioExceptionHandler:
    """Test suite for the studio error handler."""

    async def test_capability_error_is_bad_request(self, mock_request):
        response = await studio_exception_handler(mock_request, UnsupportedQualityError("dall-e-2"))

        assert response.status_code == 400
        assert json.loads(response.body)["detail"]["error"] == "Model dall-e-2 does not support HD quality"

    async def test_other_errors_are_server_errors(self, mock_request):
        response = await studio_exception_handler(mock_request, ConceptParseError("Concepts array is empty"))

        assert response.status_code == 500
        assert json.loads(response.body) == {"detail": "Concepts array is empty"}

    async def test_logs_warning(self, mock_request):
        with patch("promptframe_ai.server.exception_handlers.global_handler.logger") as mock_logger:
            await studio_exception_handler(mock_request, ImageDownloadError("gone"))

        message = mock_logger.warning.call_args[0][0]
        assert "ImageDownloadError in POST /api/generate: gone" == message


class TestGlobalExceptionHandler:
    """Test suite for global exception handler."""

    async def test_returns_500_with_error_id(self, mock_request):
        response = await global_exception_handler(mock_request, ValueError("Test error"))

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body["detail"] == "Internal server error"
        assert body["error_type"] == "ValueError"
        assert len(body["error_id"]) == 12

    async def test_logs_error_with_context(self, mock_request):
        with patch("promptframe_ai.server.exception_handlers.global_handler.logger") as mock_logger:
            response = await global_exception_handler(mock_request, KeyError("missing"))

        call_args = mock_logger.error.call_args
        assert "Unhandled exception" in call_args[0][0]
        extra = call_args[1]["extra"]
        assert extra["error_type"] == "KeyError"
        assert extra["query_params"] == {"page": "1"}
        assert extra["client"] == "127.0.0.1"
        assert extra["error_id"] == json.loads(response.body)["error_id"]

    async def test_unknown_client(self, mock_request):
        mock_request.client = None
        with patch("promptframe_ai.server.exception_handlers.global_handler.logger") as mock_logger:
            await global_exception_handler(mock_request, RuntimeError("x"))
        assert mock_logger.error.call_args[1]["extra"]["client"] == "unknown"

    async def test_reports_to_monitoring(self, mock_request):
        with patch("promptframe_ai.server.exception_handlers.global_handler.log_error") as mock_log_error:
            response = await global_exception_handler(mock_request, RuntimeError("db down"))

        error_id = json.loads(response.body)["error_id"]
        mock_log_error.assert_called_once_with(
            "RuntimeError", "db down", {"error_id": error_id, "path": "/api/generate"}
        )


async def test_setup_exception_handlers():
    app = FastAPI()
    setup_exception_handlers(app)
    assert app.exception_handlers[StudioError] is studio_exception_handler
    assert app.exception_handlers[Exception] is global_exception_handler
