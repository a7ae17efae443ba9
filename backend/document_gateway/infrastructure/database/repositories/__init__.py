from .page_count_repository import SQLAlchemyPageCountRepository

__all__ = [
    "SQLAlchemyPageCountRepository",
]
