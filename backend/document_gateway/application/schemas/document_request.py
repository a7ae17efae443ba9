"""Pydantic schemas for document-request API requests and responses."""

from pydantic import BaseModel, Field


# ── Catalog Schemas ──────────────────────────────────────────────────


class FilterTypeSchema(BaseModel):
    """An operator name, scoped to the attribute type it is listed under."""

    name: str = Field(..., min_length=1, examples=["BETWEEN"])


class AttributeTypeSchema(BaseModel):
    """An attribute type with the operators it supports."""

    name: str
    filter_types: list[FilterTypeSchema] = []


class AttributeSchema(BaseModel):
    """A filterable index field of a category."""

    field_number: int
    name: str
    type: AttributeTypeSchema
    filter_value1: str | None = None
    filter_value2: str | None = None
    selected_filter_type: FilterTypeSchema | None = None


class CategorySchema(BaseModel):
    """A document category with its attributes."""

    id: int
    name: str
    display_name: str
    entity_id: int | None = None
    attributes: list[AttributeSchema] = []


class EntitySchema(BaseModel):
    """An entity and the categories it owns."""

    id: int
    name: str
    categories: list[CategorySchema] = []


# ── Request Schemas ──────────────────────────────────────────────────


class AttributeFilterRequest(BaseModel):
    """Filter selection for one attribute.

    Clients usually post back the attribute they received from the catalog;
    its ``type`` is ignored in favour of the catalog's.
    """

    field_number: int | None = None
    name: str = ""
    filter_value1: str | None = None
    filter_value2: str | None = None
    selected_filter_type: FilterTypeSchema | None = None


class CategoryFilterRequest(BaseModel):
    """Request body for a filtered document list."""

    id: int = Field(..., description="Category id from the catalog")
    entity_id: int | None = Field(default=None, description="Owning entity; optional")
    attributes: list[AttributeFilterRequest] = []


# ── Result Schemas ───────────────────────────────────────────────────


class EntrySchema(BaseModel):
    """One document in a listing."""

    id: int
    page_count: int = 0
    index_values: list[str | None] = []


class DocumentListSchema(BaseModel):
    """A suppressed document listing."""

    columns: list[str] = []
    entries: list[EntrySchema] = []
    total: int = 0
    page_counts_available: bool | None = None
