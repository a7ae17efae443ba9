"""Visibility filter — drops documents flagged not-public from a search result.

Fails closed: an entry is kept only when its not-public value parses as
``false``. Missing, empty or unparsable values count as not public.
"""

import dataclasses
import logging

from document_gateway.domain.entities import Category, NormalizedResult

logger = logging.getLogger(__name__)


def parse_bool(value: str | None) -> bool | None:
    """Parse ``true``/``false`` (any case, surrounding whitespace allowed)."""
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    return None


def suppress(result: NormalizedResult, category: Category) -> NormalizedResult:
    """Return a copy of *result* without entries that are not explicitly public.

    When the category declares no not-public field, or the result has no
    such column, the result is returned unchanged.
    """
    column = result.column_index(category.not_public_field_name)
    if column is None:
        return result

    kept = []
    for entry in result.entries:
        raw = entry.index_values[column] if column < len(entry.index_values) else None
        if parse_bool(raw) is False:
            kept.append(entry)

    removed = len(result.entries) - len(kept)
    if removed:
        logger.info(
            "Suppressed %d of %d entries in category %s (%s)",
            removed, len(result.entries), category.id, category.not_public_field_name,
        )
    return dataclasses.replace(result, entries=kept)
