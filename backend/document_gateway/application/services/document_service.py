"""Document service — catalog browsing, filtered listings and PDF retrieval.

Retrieval flow for one document:
  1. Resolve entity and category by name.
  2. Check visibility with a targeted not-public index lookup.
  3. Issue a short-lived object-storage URL for ``{categoryId}-{documentId}.pdf``.
  4. Stream the bytes from that URL.

Unknown names, unknown documents and restricted documents all surface as
the same ``DocumentNotFoundError``.
"""

import asyncio
import logging
from collections.abc import AsyncIterator

from document_gateway.application.interfaces.document_downloader import DocumentDownloader
from document_gateway.application.interfaces.object_storage import ObjectStorage
from document_gateway.application.services.document_search_service import DocumentSearchService
from document_gateway.application.services.filter_query_compiler import FilterQueryCompiler
from document_gateway.application.services.page_count_enrichment import (
    PageCountEnrichmentService,
    merge_page_counts,
)
from document_gateway.application.services.taxonomy_registry import TaxonomyRegistry
from document_gateway.domain.entities import (
    AttributeType,
    Category,
    DocumentListing,
    DownloadLink,
    Entity,
    QueryRequest,
)
from document_gateway.domain.exceptions import (
    DocumentNotFoundError,
    DocumentUnavailableError,
    EntityNotFoundError,
    StorageError,
)

logger = logging.getLogger(__name__)

DEFAULT_LINK_EXPIRY_SECONDS = 120


def document_object_key(category_id: int, document_id: int) -> str:
    """Storage key of a scanned document."""
    return f"{category_id}-{document_id}.pdf"


class DocumentService:
    """Application service behind the document-request API."""

    def __init__(
        self,
        registry: TaxonomyRegistry,
        search_service: DocumentSearchService,
        enrichment_service: PageCountEnrichmentService,
        object_storage: ObjectStorage,
        downloader: DocumentDownloader,
        compiler: FilterQueryCompiler | None = None,
        link_expiry_seconds: int = DEFAULT_LINK_EXPIRY_SECONDS,
    ):
        self._registry = registry
        self._search = search_service
        self._enrichment = enrichment_service
        self._storage = object_storage
        self._downloader = downloader
        self._compiler = compiler or FilterQueryCompiler()
        self._link_expiry_seconds = link_expiry_seconds

    # ── Catalog ─────────────────────────────────────────────────────

    def list_entities(self) -> tuple[Entity, ...]:
        return self._registry.list_entities()

    def get_entity(self, entity_name: str) -> Entity | None:
        return self._registry.get_entity_by_name(entity_name)

    def list_attribute_types(self) -> tuple[AttributeType, ...]:
        return self._registry.list_attribute_types()

    def get_category(self, entity_id: int | None, category_id: int) -> Category | None:
        return self._registry.get_category(entity_id, category_id)

    def get_category_by_name(self, entity_name: str, category_name: str) -> Category | None:
        return self._registry.get_category_by_name(entity_name, category_name)

    # ── Listings ────────────────────────────────────────────────────

    async def filter_documents(self, category: Category) -> DocumentListing:
        """Compile the category's selected filters, run them and merge page counts."""
        query = self._compiler.compile(category)
        return await self._listing(category, query)

    async def list_all_documents(self, entity_id: int, category_id: int) -> DocumentListing:
        """List a whole category with page counts merged in."""
        category = self._registry.get_category(entity_id, category_id)
        if category is None:
            raise EntityNotFoundError("Category", category_id)
        return await self._listing(category)

    async def _listing(self, category: Category, query: QueryRequest | None = None) -> DocumentListing:
        """Search and page-count read run concurrently, then the counts are merged."""
        result, page_counts = await asyncio.gather(
            self._search.search(category, query),
            self._enrichment.enrich(category.entity_id, category.id),
        )
        merge_page_counts(result, page_counts.page_counts)
        return DocumentListing(result=result, page_counts_available=page_counts.available)

    # ── Retrieval ───────────────────────────────────────────────────

    async def is_document_public(self, category: Category, document_id: int) -> bool:
        return await self._search.lookup_public(category, document_id)

    def build_download_link(self, category: Category, document_id: int) -> DownloadLink:
        """Issue a presigned URL; storage failures yield an unissued link."""
        key = document_object_key(category.id, document_id)
        try:
            url = self._storage.generate_download_url(key, self._link_expiry_seconds)
        except StorageError:
            logger.exception("Could not issue download URL for %s", key)
            return DownloadLink(key=key)

        logger.info("Download URL issued for %s (valid %ds)", key, self._link_expiry_seconds)
        return DownloadLink(key=key, url=url, issued=True)

    async def open_document(
        self, entity_name: str, category_name: str, document_id: int
    ) -> AsyncIterator[bytes]:
        """Resolve, check visibility, and start streaming a document's PDF."""
        category = self._registry.get_category_by_name(entity_name, category_name)
        if category is None:
            raise DocumentNotFoundError(category_name, document_id)

        if not await self.is_document_public(category, document_id):
            logger.info("Document %s in %s withheld (not public or unknown)", document_id, category.name)
            raise DocumentNotFoundError(category_name, document_id)

        link = self.build_download_link(category, document_id)
        if not link.issued:
            raise DocumentUnavailableError(f"No download URL for {link.key}")

        return await self._downloader.open(link.url)
