from .document_request import (
    AttributeFilterRequest,
    AttributeSchema,
    AttributeTypeSchema,
    CategoryFilterRequest,
    CategorySchema,
    DocumentListSchema,
    EntitySchema,
    EntrySchema,
    FilterTypeSchema,
)

__all__ = [
    "AttributeFilterRequest",
    "AttributeSchema",
    "AttributeTypeSchema",
    "CategoryFilterRequest",
    "CategorySchema",
    "DocumentListSchema",
    "EntitySchema",
    "EntrySchema",
    "FilterTypeSchema",
]
