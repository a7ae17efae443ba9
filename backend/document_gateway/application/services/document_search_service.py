"""Document search — runs repository queries and suppresses restricted documents."""

import logging

from document_gateway.application.interfaces.document_repository import DocumentRepository
from document_gateway.application.services.visibility_filter import suppress
from document_gateway.domain.entities import Category, NormalizedResult, QueryRequest

logger = logging.getLogger(__name__)


class DocumentSearchService:
    """Boundary around the repository: every result it returns is already suppressed."""

    def __init__(self, repository: DocumentRepository):
        self._repository = repository

    async def search(
        self, category: Category, query: QueryRequest | None = None
    ) -> NormalizedResult:
        """Search one category; ``query=None`` lists every document."""
        if query is None:
            result = await self._repository.search(category.id, [], ad_hoc=False)
        else:
            result = await self._repository.search(category.id, query.to_payload(), ad_hoc=True)

        logger.info(
            "Repository returned %d entries for category %s",
            len(result.entries), category.id,
        )
        if result.entries:
            result = suppress(result, category)
        return result

    async def lookup_public(self, category: Category, document_id: int) -> bool:
        """Check a document against the category's not-public field.

        Runs an index lookup for ``<not public field> = FALSE`` and reports
        whether *document_id* is among the matches. Categories without a
        not-public field have only public documents.
        """
        if not category.not_public_field_name:
            return True

        body = [{"Name": category.not_public_field_name, "Value": "FALSE"}]
        result = await self._repository.search(category.id, body, ad_hoc=False)
        return any(entry.id == document_id for entry in result.entries)
