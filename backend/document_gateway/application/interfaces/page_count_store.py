"""Abstract interface (port) for the page-count metadata store."""

from abc import ABC, abstractmethod


class PageCountStore(ABC):
    """Port for reading per-document page counts."""

    @abstractmethod
    async def fetch_page_counts(self, category_id: int) -> dict[int, int]:
        """Return ``{document_id: page_count}`` for every document in a category."""
        ...
