"""Unit tests for the HttpDocumentDownloader."""

import httpx
import pytest

from document_gateway.domain.exceptions import DocumentUnavailableError
from document_gateway.infrastructure.storage.http_document_downloader import HttpDocumentDownloader

PRESIGNED_URL = "https://historical-documents.s3.amazonaws.com/4-12.pdf?X-Amz-Expires=120"


def _make_mock_transport(
    captured: list[httpx.Request], status_code: int = 200, content: bytes = b""
) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(status_code, content=content, headers={"content-type": "application/pdf"})

    return httpx.MockTransport(handler)


@pytest.mark.asyncio
async def test_open_streams_body_in_chunks():
    captured: list[httpx.Request] = []
    pdf = b"%PDF-1.4\n" + b"x" * 1000
    downloader = HttpDocumentDownloader(
        chunk_size=256,
        http_client=httpx.AsyncClient(transport=_make_mock_transport(captured, content=pdf)),
    )

    body = await downloader.open(PRESIGNED_URL)
    chunks = [chunk async for chunk in body]

    assert b"".join(chunks) == pdf
    assert len(chunks) > 1
    assert captured[0].method == "GET"
    assert str(captured[0].url) == PRESIGNED_URL
    assert "authorization" not in captured[0].headers


@pytest.mark.asyncio
async def test_error_status_raises_before_streaming():
    captured: list[httpx.Request] = []
    downloader = HttpDocumentDownloader(
        http_client=httpx.AsyncClient(
            transport=_make_mock_transport(captured, status_code=403, content=b"<Error>AccessDenied</Error>")
        ),
    )

    with pytest.raises(DocumentUnavailableError, match="403"):
        await downloader.open(PRESIGNED_URL)


@pytest.mark.asyncio
async def test_transport_failure_raises_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    downloader = HttpDocumentDownloader(http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))

    with pytest.raises(DocumentUnavailableError):
        await downloader.open(PRESIGNED_URL)


@pytest.mark.asyncio
async def test_empty_url_raises_unavailable():
    with pytest.raises(DocumentUnavailableError):
        await HttpDocumentDownloader().open("")
