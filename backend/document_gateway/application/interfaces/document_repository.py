"""Abstract interface (port) for the external document repository search API."""

from abc import ABC, abstractmethod
from typing import Any

from document_gateway.domain.entities import NormalizedResult


class DocumentRepository(ABC):
    """Port for repository searches — implemented in the infrastructure layer."""

    @abstractmethod
    async def search(
        self,
        category_id: int,
        body: Any,
        *,
        ad_hoc: bool = False,
    ) -> NormalizedResult:
        """Run a search against one category's data source.

        Args:
            category_id: Repository id of the category.
            body: JSON-serialisable request body (``[]`` lists everything).
            ad_hoc: True for compiled filter queries, False for index lookups.

        Returns:
            The raw, unsuppressed result.

        Raises:
            RepositoryError: On transport failures, error statuses or
                unparsable responses.
        """
        ...
