"""Abstract interface (port) for fetching document bytes from a URL."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator


class DocumentDownloader(ABC):
    """Port for streaming a document from a (presigned) URL."""

    @abstractmethod
    async def open(self, url: str) -> AsyncIterator[bytes]:
        """Start the download and return an iterator over the body.

        The response status is checked before this returns.

        Raises:
            DocumentUnavailableError: On transport failures or error statuses.
        """
        ...
