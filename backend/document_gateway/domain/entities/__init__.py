from .taxonomy import (
    Attribute,
    AttributeType,
    AttributeTypeName,
    Category,
    Entity,
    FilterType,
    OperatorSlot,
)
from .documents import (
    DocumentListing,
    DownloadLink,
    Entry,
    IndexCondition,
    NormalizedResult,
    PageCountOutcome,
    PageCountsEnriched,
    PageCountsUnavailable,
    QueryRequest,
)

__all__ = [
    "Attribute",
    "AttributeType",
    "AttributeTypeName",
    "Category",
    "Entity",
    "FilterType",
    "OperatorSlot",
    "DocumentListing",
    "DownloadLink",
    "Entry",
    "IndexCondition",
    "NormalizedResult",
    "PageCountOutcome",
    "PageCountsEnriched",
    "PageCountsUnavailable",
    "QueryRequest",
]
