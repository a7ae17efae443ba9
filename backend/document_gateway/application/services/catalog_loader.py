"""Catalog loader — parses the entity/category YAML file into a TaxonomyRegistry.

Executed once per process; the resulting registry is cached by the
dependency layer.
"""

import logging
from pathlib import Path

import yaml

from document_gateway.application.services.taxonomy_registry import (
    TaxonomyRegistry,
    build_attribute_types,
)
from document_gateway.domain.entities import (
    Attribute,
    AttributeType,
    AttributeTypeName,
    Category,
    Entity,
)
from document_gateway.domain.exceptions import CatalogError

logger = logging.getLogger(__name__)


class CatalogLoader:
    """Builds the taxonomy registry from a YAML catalog file.

    Expected layout::

        entities:
          - id: 1
            name: HISTORICAL_COMMISSION
            categories:
              - id: 6
                name: HISTORICAL_COMM-CARD_CATALOG
                display_name: Card Catalog
                not_public_field_name: NOT PUBLIC   # optional
                attributes:
                  - {field_number: 1, name: HOUSE NUMBER, type: NUMERIC}
    """

    def __init__(self, catalog_file: str | Path):
        self._catalog_file = Path(catalog_file)

    def load(self) -> TaxonomyRegistry:
        data = self._load_yaml(self._catalog_file)

        attribute_types = build_attribute_types()
        types_by_name = {t.name.value: t for t in attribute_types}

        entities = [
            self._build_entity(entry, types_by_name)
            for entry in data.get("entities") or []
        ]
        registry = TaxonomyRegistry(entities, attribute_types)

        logger.info(
            "Catalog loaded from %s: %d entities, %d categories",
            self._catalog_file,
            len(entities),
            sum(len(e.categories) for e in entities),
        )
        return registry

    def _build_entity(self, entry: dict, types_by_name: dict[str, AttributeType]) -> Entity:
        """Map a raw YAML dict to an Entity."""
        try:
            return Entity(
                id=int(entry["id"]),
                name=str(entry["name"]),
                categories=tuple(
                    self._build_category(c, types_by_name)
                    for c in entry.get("categories") or []
                ),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise CatalogError(f"Invalid entity definition {entry!r}: {exc}") from exc

    def _build_category(self, entry: dict, types_by_name: dict[str, AttributeType]) -> Category:
        """Map a raw YAML dict to a Category (without the full-text attribute)."""
        attributes = []
        for raw in entry.get("attributes") or []:
            type_name = str(raw.get("type", "")).upper()
            if type_name == AttributeTypeName.FULL_TEXT.value or type_name not in types_by_name:
                raise CatalogError(
                    f"Unknown attribute type '{raw.get('type')}' on "
                    f"{entry.get('name')}.{raw.get('name')}"
                )
            attributes.append(
                Attribute(
                    field_number=int(raw["field_number"]),
                    name=str(raw["name"]),
                    type=types_by_name[type_name],
                )
            )

        field_numbers = [a.field_number for a in attributes]
        if len(set(field_numbers)) != len(field_numbers):
            raise CatalogError(f"Duplicate field numbers in category {entry.get('name')}")

        return Category(
            id=int(entry["id"]),
            name=str(entry["name"]),
            display_name=str(entry.get("display_name", entry["name"])),
            attributes=tuple(attributes),
            not_public_field_name=entry.get("not_public_field_name") or None,
        )

    def _load_yaml(self, path: Path) -> dict:
        """Load and parse the catalog file."""
        if not path.exists():
            raise CatalogError(f"Catalog file not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise CatalogError(f"Failed to parse catalog file {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise CatalogError(f"Catalog file {path} must contain a mapping")
        return data
