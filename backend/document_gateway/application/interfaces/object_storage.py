"""Abstract interface (port) for the object storage holding scanned PDFs."""

from abc import ABC, abstractmethod


class ObjectStorage(ABC):
    """Port for issuing time-limited download URLs."""

    @abstractmethod
    def generate_download_url(self, key: str, expires_in: int) -> str:
        """Return a URL usable for a single GET of *key* within *expires_in* seconds.

        Raises:
            StorageError: When the URL cannot be issued.
        """
        ...
