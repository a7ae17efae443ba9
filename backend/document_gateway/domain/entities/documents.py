"""Domain entities for repository queries and their results."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class IndexCondition:
    """A condition on one named index field."""

    name: str
    value: str


@dataclass
class QueryRequest:
    """Compiled, backend-agnostic representation of the selected filters."""

    indexes: list[IndexCondition] = field(default_factory=list)
    full_text: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.indexes and self.full_text is None

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the repository's ad-hoc query body."""
        payload: dict[str, Any] = {
            "Indexes": [{"Name": c.name, "Value": c.value} for c in self.indexes],
        }
        if self.full_text is not None:
            payload["FullText"] = {"Value": self.full_text}
        return payload


@dataclass
class Entry:
    """One document in a search result.

    ``index_values`` is positional, aligned with ``NormalizedResult.columns``.
    """

    id: int
    page_count: int = 0
    index_values: list[str | None] = field(default_factory=list)


@dataclass
class NormalizedResult:
    """Search response: the index columns plus one entry per document."""

    columns: list[str] = field(default_factory=list)
    entries: list[Entry] = field(default_factory=list)

    def column_index(self, name: str | None) -> int | None:
        """Position of the named column, or None when absent."""
        if not name:
            return None
        try:
            return self.columns.index(name)
        except ValueError:
            return None


@dataclass
class PageCountsEnriched:
    """Page counts were read from the metadata store."""

    page_counts: dict[int, int]
    available: bool = True


@dataclass
class PageCountsUnavailable:
    """The metadata store could not be read; listings keep page count 0."""

    reason: str
    page_counts: dict[int, int] = field(default_factory=dict)
    available: bool = False


PageCountOutcome = PageCountsEnriched | PageCountsUnavailable


@dataclass
class DownloadLink:
    """A time-limited object-storage URL for one document.

    ``issued`` is False when the storage service refused to sign the key;
    ``url`` is then empty.
    """

    key: str
    url: str = ""
    issued: bool = False


@dataclass
class DocumentListing:
    """Enriched, suppressed listing of a whole category."""

    result: NormalizedResult
    page_counts_available: bool = True
