"""Domain entities for the document catalog — entities, categories, typed attributes.

Every catalog object is a frozen dataclass: the catalog is built once at
startup and shared read-only by all requests. Per-request filter selections
are applied to copies via ``dataclasses.replace``.
"""

from dataclasses import dataclass, field
from enum import Enum


class AttributeTypeName(str, Enum):
    """The four attribute types an index field can have."""

    NUMERIC = "NUMERIC"
    DATE = "DATE"
    TEXT = "TEXT"
    FULL_TEXT = "FULL_TEXT"


class OperatorSlot(Enum):
    """Structural position of an operator within its attribute type.

    Numeric, date and text operators line up slot by slot
    (``GREATER_THAN`` / ``AFTER`` / ``STARTS_WITH`` all sit in ``GREATER``),
    which lets the query compiler share one expression rule per slot.
    """

    EQUALS = "equals"
    GREATER = "greater"
    LESS = "less"
    BETWEEN = "between"
    FULL_TEXT = "full_text"


@dataclass(frozen=True)
class FilterType:
    """An operator scoped to a single attribute type."""

    name: str
    slot: OperatorSlot


@dataclass(frozen=True)
class AttributeType:
    """An attribute type with its fixed, ordered operator list."""

    name: AttributeTypeName
    filter_types: tuple[FilterType, ...] = ()

    def find_filter_type(self, name: str | None) -> FilterType | None:
        """Return the operator with the given name, or None if this type has none."""
        if not name:
            return None
        for filter_type in self.filter_types:
            if filter_type.name == name:
                return filter_type
        return None


@dataclass(frozen=True)
class Attribute:
    """A typed, filterable index field on a category.

    ``filter_value1``, ``filter_value2`` and ``selected_filter_type`` are only
    populated on request-scoped copies.
    """

    field_number: int
    name: str
    type: AttributeType
    filter_value1: str | None = None
    filter_value2: str | None = None
    selected_filter_type: FilterType | None = None


@dataclass(frozen=True)
class Category:
    """A document collection, mapped one-to-one to a repository data source."""

    id: int
    name: str
    display_name: str
    attributes: tuple[Attribute, ...] = ()
    not_public_field_name: str | None = None
    entity_id: int | None = None

    @property
    def max_field_number(self) -> int:
        return max((a.field_number for a in self.attributes), default=0)

    def find_attribute(self, name: str) -> Attribute | None:
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        return None


@dataclass(frozen=True)
class Entity:
    """An organisational unit owning a set of categories."""

    id: int
    name: str
    categories: tuple[Category, ...] = field(default_factory=tuple)
