from .document_repository import DocumentRepository
from .page_count_store import PageCountStore
from .object_storage import ObjectStorage
from .document_downloader import DocumentDownloader

__all__ = [
    "DocumentRepository",
    "PageCountStore",
    "ObjectStorage",
    "DocumentDownloader",
]
