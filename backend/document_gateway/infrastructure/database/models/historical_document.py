"""SQLAlchemy ORM model for the page-count metadata table."""

from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column

from document_gateway.infrastructure.database.base import Base


class HistoricalDocumentModel(Base):
    """ORM model — maps to the repository's 'historical' table (one row per scanned document)."""

    __tablename__ = "historical"

    app_id: Mapped[int] = mapped_column("APPID", Integer, primary_key=True)
    doc_id: Mapped[int] = mapped_column("DOCID", Integer, primary_key=True)
    pages: Mapped[int | None] = mapped_column("PAGES", Integer, nullable=True)

    def __repr__(self) -> str:
        return f"<HistoricalDocumentModel(app_id={self.app_id}, doc_id={self.doc_id}, pages={self.pages})>"
