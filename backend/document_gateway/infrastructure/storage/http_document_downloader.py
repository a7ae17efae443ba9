"""Streams document bytes from presigned object-storage URLs over httpx."""

import logging
from collections.abc import AsyncIterator

import httpx

from document_gateway.application.interfaces.document_downloader import DocumentDownloader
from document_gateway.domain.exceptions import DocumentUnavailableError

logger = logging.getLogger(__name__)


class HttpDocumentDownloader(DocumentDownloader):
    """Infrastructure adapter — plain GET against a presigned URL, no auth headers."""

    def __init__(
        self,
        timeout: float = 60.0,
        chunk_size: int = 64 * 1024,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._timeout = timeout
        self._chunk_size = chunk_size
        self._http_client = http_client

    async def open(self, url: str) -> AsyncIterator[bytes]:
        client = self._http_client or httpx.AsyncClient(timeout=self._timeout)
        should_close = self._http_client is None

        try:
            response = await client.send(client.build_request("GET", url), stream=True)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            if should_close:
                await client.aclose()
            raise DocumentUnavailableError(f"Download failed: {type(exc).__name__}: {exc}") from exc

        if not response.is_success:
            await response.aclose()
            if should_close:
                await client.aclose()
            logger.warning("Object storage returned %d for document download", response.status_code)
            raise DocumentUnavailableError(f"Object storage returned {response.status_code}")

        return self._iter_body(response, client if should_close else None)

    async def _iter_body(
        self, response: httpx.Response, owned_client: httpx.AsyncClient | None
    ) -> AsyncIterator[bytes]:
        """Yield the body in chunks, closing the response (and owned client) afterwards."""
        total = 0
        try:
            async for chunk in response.aiter_bytes(self._chunk_size):
                total += len(chunk)
                yield chunk
        finally:
            await response.aclose()
            if owned_client is not None:
                await owned_client.aclose()
            logger.debug("Streamed %d bytes", total)
