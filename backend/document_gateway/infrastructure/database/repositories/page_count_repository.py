"""SQLAlchemy implementation of the PageCountStore."""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from document_gateway.application.interfaces.page_count_store import PageCountStore
from document_gateway.infrastructure.database.models.historical_document import HistoricalDocumentModel

logger = logging.getLogger(__name__)


def _to_int(value: Any) -> int:
    """Integer value of a column, 0 when it is missing or not an integer."""
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return 0


class SQLAlchemyPageCountRepository(PageCountStore):
    """Reads DOCID/PAGES pairs for one application id."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def fetch_page_counts(self, category_id: int) -> dict[int, int]:
        result = await self._session.execute(
            select(HistoricalDocumentModel.doc_id, HistoricalDocumentModel.pages)
            .where(HistoricalDocumentModel.app_id == category_id)
        )
        page_counts: dict[int, int] = {}
        for doc_id, pages in result.all():
            page_counts[_to_int(doc_id)] = _to_int(pages)
        return page_counts
