"""Taxonomy registry — the read-only catalog of entities, categories and attribute types.

Built once at startup (see ``CatalogLoader``) and shared by every request.
Every category handed to the registry gets a synthesized ``FULL_TEXT``
attribute appended, numbered one past its highest declared field number.
"""

import dataclasses
import logging

from document_gateway.domain.entities import (
    Attribute,
    AttributeType,
    AttributeTypeName,
    Category,
    Entity,
    FilterType,
    OperatorSlot,
)
from document_gateway.domain.exceptions import CatalogError

logger = logging.getLogger(__name__)

# Operator names per type, in slot order.
_OPERATOR_NAMES: dict[AttributeTypeName, tuple[tuple[str, OperatorSlot], ...]] = {
    AttributeTypeName.NUMERIC: (
        ("EQUALS", OperatorSlot.EQUALS),
        ("GREATER_THAN", OperatorSlot.GREATER),
        ("LESS_THAN", OperatorSlot.LESS),
        ("BETWEEN", OperatorSlot.BETWEEN),
    ),
    AttributeTypeName.DATE: (
        ("EQUALS", OperatorSlot.EQUALS),
        ("AFTER", OperatorSlot.GREATER),
        ("BEFORE", OperatorSlot.LESS),
        ("BETWEEN", OperatorSlot.BETWEEN),
    ),
    AttributeTypeName.TEXT: (
        ("EQUALS", OperatorSlot.EQUALS),
        ("STARTS_WITH", OperatorSlot.GREATER),
        ("ENDS_WITH", OperatorSlot.LESS),
        ("CONTAINS", OperatorSlot.BETWEEN),
    ),
    AttributeTypeName.FULL_TEXT: (
        ("FULL_TEXT", OperatorSlot.FULL_TEXT),
    ),
}

FULL_TEXT_ATTRIBUTE_NAME = AttributeTypeName.FULL_TEXT.value


def build_attribute_types() -> tuple[AttributeType, ...]:
    """Build the fixed attribute types: numeric, date, text, full text."""
    return tuple(
        AttributeType(
            name=type_name,
            filter_types=tuple(FilterType(name=name, slot=slot) for name, slot in operators),
        )
        for type_name, operators in _OPERATOR_NAMES.items()
    )


def with_full_text_attribute(category: Category, full_text_type: AttributeType) -> Category:
    """Return a copy of *category* with the full-text attribute appended.

    A category that already carries it is returned unchanged.
    """
    if any(a.type.name is AttributeTypeName.FULL_TEXT for a in category.attributes):
        return category

    full_text = Attribute(
        field_number=category.max_field_number + 1,
        name=FULL_TEXT_ATTRIBUTE_NAME,
        type=full_text_type,
    )
    return dataclasses.replace(category, attributes=(*category.attributes, full_text))


class TaxonomyRegistry:
    """Immutable catalog of entities and attribute types."""

    def __init__(
        self,
        entities: list[Entity] | tuple[Entity, ...],
        attribute_types: tuple[AttributeType, ...] | None = None,
    ):
        self._attribute_types = attribute_types or build_attribute_types()
        self._types_by_name = {t.name: t for t in self._attribute_types}
        full_text_type = self._types_by_name[AttributeTypeName.FULL_TEXT]

        seen_category_ids: set[int] = set()
        built: list[Entity] = []
        for entity in entities:
            categories = []
            for category in entity.categories:
                if category.id in seen_category_ids:
                    raise CatalogError(f"Duplicate category id {category.id} in catalog")
                seen_category_ids.add(category.id)
                category = dataclasses.replace(category, entity_id=entity.id)
                categories.append(with_full_text_attribute(category, full_text_type))
            built.append(dataclasses.replace(entity, categories=tuple(categories)))

        self._entities = tuple(built)
        logger.debug(
            "Taxonomy registry built: %d entities, %d categories",
            len(self._entities), len(seen_category_ids),
        )

    # ── Listing ─────────────────────────────────────────────────────

    def list_entities(self) -> tuple[Entity, ...]:
        return self._entities

    def list_attribute_types(self) -> tuple[AttributeType, ...]:
        return self._attribute_types

    def get_attribute_type(self, name: AttributeTypeName | str) -> AttributeType | None:
        try:
            return self._types_by_name[AttributeTypeName(name)]
        except ValueError:
            return None

    # ── Lookup ──────────────────────────────────────────────────────

    def get_entity(self, entity_id: int) -> Entity | None:
        for entity in self._entities:
            if entity.id == entity_id:
                return entity
        return None

    def get_entity_by_name(self, name: str) -> Entity | None:
        for entity in self._entities:
            if entity.name == name:
                return entity
        return None

    def get_category(self, entity_id: int | None, category_id: int) -> Category | None:
        """Find a category by id; restrict to one entity when *entity_id* is given."""
        for entity in self._entities:
            if entity_id is not None and entity.id != entity_id:
                continue
            for category in entity.categories:
                if category.id == category_id:
                    return category
        return None

    def get_category_by_name(self, entity_name: str, category_name: str) -> Category | None:
        entity = self.get_entity_by_name(entity_name)
        if entity is None:
            return None
        for category in entity.categories:
            if category.name == category_name:
                return category
        return None
