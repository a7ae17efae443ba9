"""Document repository REST client — implements the DocumentRepository interface.

Talks to the repository's per-data-source query endpoints with httpx:

    POST {base_url}/{adhoc_query_path}/{categoryId}   compiled filter queries
    POST {base_url}/{index_lookup_path}/{categoryId}  list-all / index lookups

Responses look like ``{"Columns": [...], "Entries": [{"Id", "PageCount",
"IndexValues"}]}``.
"""

import json
import logging
from typing import Any

import httpx

from document_gateway.application.interfaces.document_repository import DocumentRepository
from document_gateway.domain.entities import Entry, NormalizedResult
from document_gateway.domain.exceptions import RepositoryError

logger = logging.getLogger(__name__)


class HttpDocumentRepository(DocumentRepository):
    """Infrastructure adapter — connects to the document repository search API."""

    def __init__(
        self,
        base_url: str,
        credentials: str,
        adhoc_query_path: str = "adhocqueryresults",
        index_lookup_path: str = "selectindexlookup",
        media_type: str = "application/vnd.emc.ax+json",
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._credentials = credentials
        self._adhoc_query_path = adhoc_query_path.strip("/")
        self._index_lookup_path = index_lookup_path.strip("/")
        self._media_type = media_type
        self._timeout = timeout
        self._http_client = http_client

    def _get_headers(self) -> dict[str, str]:
        """Basic auth plus the repository's vendor media type."""
        return {
            "Authorization": f"Basic {self._credentials}",
            "Accept": self._media_type,
            "Content-Type": self._media_type,
        }

    def _build_url(self, category_id: int, ad_hoc: bool) -> str:
        path = self._adhoc_query_path if ad_hoc else self._index_lookup_path
        return f"{self._base_url}/{path}/{category_id}"

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def search(
        self,
        category_id: int,
        body: Any,
        *,
        ad_hoc: bool = False,
    ) -> NormalizedResult:
        url = self._build_url(category_id, ad_hoc)
        content = json.dumps(body).encode("utf-8")

        client = await self._get_client()
        should_close = self._http_client is None

        try:
            logger.debug("POST %s (%d bytes)", url, len(content))
            try:
                response = await client.post(url, headers=self._get_headers(), content=content)
            except httpx.HTTPError as exc:
                raise RepositoryError(status_code=0, message=f"{type(exc).__name__}: {exc}") from exc

            if not response.is_success:
                self._raise_repository_error(response)

            try:
                data = response.json()
            except ValueError as exc:
                raise RepositoryError(
                    status_code=response.status_code,
                    message=f"Response is not valid JSON: {exc}",
                ) from exc

            return self._parse_result(data, response.status_code)

        finally:
            if should_close:
                await client.aclose()

    @staticmethod
    def _parse_result(data: Any, status_code: int) -> NormalizedResult:
        """Map the repository JSON body to a NormalizedResult."""
        if not isinstance(data, dict):
            raise RepositoryError(status_code=status_code, message="Unexpected response shape")

        try:
            columns = [str(c) for c in data.get("Columns") or []]
            entries = [
                Entry(
                    id=int(raw["Id"]),
                    page_count=int(raw.get("PageCount") or 0),
                    index_values=[
                        None if v is None else str(v)
                        for v in raw.get("IndexValues") or []
                    ],
                )
                for raw in data.get("Entries") or []
            ]
        except (KeyError, TypeError, ValueError) as exc:
            raise RepositoryError(
                status_code=status_code,
                message=f"Malformed repository entry: {exc}",
            ) from exc

        return NormalizedResult(columns=columns, entries=entries)

    def _raise_repository_error(self, response: httpx.Response) -> None:
        """Raise RepositoryError from a non-2xx httpx Response."""
        try:
            data = response.json()
            message = data.get("Message") or data.get("message") or response.text
        except Exception:
            message = response.text

        logger.warning("Repository returned %d: %s", response.status_code, message)
        raise RepositoryError(status_code=response.status_code, message=message)
