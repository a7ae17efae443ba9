"""Domain-specific exceptions — framework-independent."""


class CatalogError(Exception):
    """Raised when the entity/category catalog cannot be built."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DocumentNotFoundError(Exception):
    """Raised when a document is unknown *or* not public.

    The message never reveals which of the two applies.
    """

    def __init__(self, category_name: str, document_id: int):
        self.category_name = category_name
        self.document_id = document_id
        super().__init__(f"Document {document_id} not found in '{category_name}'")


class RepositoryError(Exception):
    """Raised when the document repository search API fails."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"[repository] {status_code}: {message}")


class StorageError(Exception):
    """Raised when the object storage cannot issue a download URL."""


class DocumentUnavailableError(Exception):
    """Raised when a public document's bytes cannot be fetched."""
