"""Unit tests for image download, conversion and upload helpers."""

import base64
import io
from types import SimpleNamespace

import httpx
import pytest
from PIL import Image

from promptframe_ai.studio.errors import ImageConversionError, ImageDownloadError
from promptframe_ai.studio.image_io import (
    decode_data_url,
    download_image,
    image_result_to_url,
    normalize_upload,
    to_data_url,
    to_rgba_png,
)


def _mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestDataUrls:
    """Tests for data URL encoding and decoding."""

    def test_to_data_url(self):
        assert to_data_url(b"abc") == "data:image/png;base64,YWJj"
        assert to_data_url(b"abc", "image/webp") == "data:image/webp;base64,YWJj"

    def test_decode_normalizes_jpg(self):
        assert decode_data_url("data:image/jpg;base64,YWJj") == (b"abc", "image/jpeg")

    def test_decode_png(self):
        assert decode_data_url("data:image/png;base64,YWJj") == (b"abc", "image/png")

    def test_decode_rejects_malformed_url(self):
        with pytest.raises(ImageDownloadError, match="Invalid data URL format"):
            decode_data_url("data:image/png,YWJj")

    def test_decode_rejects_unsupported_type(self):
        with pytest.raises(ImageDownloadError, match="Unsupported MIME type"):
            decode_data_url("data:image/gif;base64,YWJj")


class TestDownloadImage:
    """Tests for download_image."""

    async def test_data_url_is_decoded_without_http(self):
        assert await download_image("data:image/webp;base64,YWJj") == (b"abc", "image/webp")

    async def test_downloads_jpeg(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url == "https://mock/cat.jpg"
            return httpx.Response(200, content=b"jpeg-bytes", headers={"content-type": "image/jpeg"})

        async with _mock_client(handler) as client:
            data, mime = await download_image("https://mock/cat.jpg", client=client)
        assert data == b"jpeg-bytes"
        assert mime == "image/jpeg"

    async def test_missing_content_type_is_assumed_png(self):
        async with _mock_client(lambda request: httpx.Response(200, content=b"raw")) as client:
            data, mime = await download_image("https://mock/raw", client=client)
        assert (data, mime) == (b"raw", "image/png")

    async def test_non_image_content_type_is_rejected(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>", headers={"content-type": "text/html"})

        async with _mock_client(handler) as client:
            with pytest.raises(ImageDownloadError, match="Unsupported content type: text/html"):
                await download_image("https://mock/page", client=client)

    async def test_http_error_status(self):
        async with _mock_client(lambda request: httpx.Response(404)) as client:
            with pytest.raises(ImageDownloadError, match="Failed to download image: 404"):
                await download_image("https://mock/missing.png", client=client)

    async def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _mock_client(handler) as client:
            with pytest.raises(ImageDownloadError, match="connection refused"):
                await download_image("https://mock/down.png", client=client)


class TestToRgbaPng:
    def test_converts_jpeg_to_rgba_png(self, image_bytes):
        png = to_rgba_png(image_bytes("JPEG"))
        with Image.open(io.BytesIO(png)) as image:
            assert image.format == "PNG"
            assert image.mode == "RGBA"
            assert image.size == (4, 4)

    def test_invalid_data(self):
        with pytest.raises(ImageConversionError) as exc_info:
            to_rgba_png(b"definitely not an image")
        assert exc_info.value.message == "Image format conversion failed - regeneration requires RGBA format"


class TestNormalizeUpload:
    """Tests for normalize_upload."""

    def test_supported_type_is_kept(self, image_bytes):
        data = image_bytes("PNG")
        uploaded = normalize_upload(data, "image/png", "logo.png")
        assert uploaded.url == "data:image/png;base64," + base64.b64encode(data).decode("ascii")
        assert uploaded.file_name.startswith("reference-")
        assert uploaded.file_name.endswith(".png")
        assert uploaded.size == len(data)
        assert uploaded.mimetype == "image/png"
        assert uploaded.converted is False

    def test_supported_type_without_filename(self, image_bytes):
        uploaded = normalize_upload(image_bytes("JPEG"), "image/jpeg", None)
        assert uploaded.file_name.endswith(".png")
        assert uploaded.url.startswith("data:image/jpeg;base64,")

    def test_other_image_types_are_converted_to_png(self, image_bytes):
        uploaded = normalize_upload(image_bytes("BMP"), "image/bmp", "scan.bmp")
        assert uploaded.converted is True
        assert uploaded.mimetype == "image/png"
        assert uploaded.file_name.endswith(".png")
        data = base64.b64decode(uploaded.url.split(",", 1)[1])
        with Image.open(io.BytesIO(data)) as image:
            assert image.format == "PNG"

    def test_unreadable_image_fails_conversion(self):
        with pytest.raises(ImageConversionError, match="Could not convert image/tiff"):
            normalize_upload(b"garbage", "image/tiff", "broken.tiff")


class TestImageResultToUrl:
    def test_base64_result(self):
        assert image_result_to_url(SimpleNamespace(b64_json="QUJD", url=None)) == "data:image/png;base64,QUJD"

    def test_url_result(self):
        assert image_result_to_url(SimpleNamespace(b64_json=None, url="https://mock/a.png")) == "https://mock/a.png"

    def test_empty_result(self):
        assert image_result_to_url(None) is None
        assert image_result_to_url(SimpleNamespace(b64_json=None, url=None)) is None
