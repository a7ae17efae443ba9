"""Page-count enrichment — best-effort merge of metadata-store page counts."""

import logging

from document_gateway.application.interfaces.page_count_store import PageCountStore
from document_gateway.domain.entities import (
    NormalizedResult,
    PageCountOutcome,
    PageCountsEnriched,
    PageCountsUnavailable,
)

logger = logging.getLogger(__name__)


class PageCountEnrichmentService:
    """Reads page counts for a category; never lets a store failure escape."""

    def __init__(self, store: PageCountStore):
        self._store = store

    async def enrich(self, entity_id: int, category_id: int) -> PageCountOutcome:
        try:
            page_counts = await self._store.fetch_page_counts(category_id)
        except Exception as exc:
            logger.exception(
                "Page counts unavailable for entity %s, category %s",
                entity_id, category_id,
            )
            return PageCountsUnavailable(reason=f"{type(exc).__name__}: {exc}")

        logger.debug("Read %d page counts for category %s", len(page_counts), category_id)
        return PageCountsEnriched(page_counts=page_counts)


def merge_page_counts(result: NormalizedResult, page_counts: dict[int, int]) -> NormalizedResult:
    """Set each entry's page count from *page_counts*; unmatched entries get 0."""
    for entry in result.entries:
        entry.page_count = page_counts.get(entry.id, 0)
    return result
