from .historical_document import HistoricalDocumentModel

__all__ = [
    "HistoricalDocumentModel",
]
