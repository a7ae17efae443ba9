"""Filter query compiler — turns a category's selected filters into a QueryRequest.

Each attribute type formats its two operands its own way (dates as short
dates, numbers as integers, text verbatim); the operator's slot then decides
how the operands are wrapped into the repository's expression syntax.

Malformed input never fails a request: unparsable dates become
``date.min`` and unparsable numbers become ``-1``.
"""

import logging
import re
from collections.abc import Callable
from datetime import date, datetime

from document_gateway.domain.entities import (
    Attribute,
    AttributeTypeName,
    Category,
    IndexCondition,
    OperatorSlot,
    QueryRequest,
)

logger = logging.getLogger(__name__)

NUMERIC_FALLBACK = -1
DATE_FALLBACK = date.min

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_INTEGER_PATTERN = re.compile(r"[+-]?\d+")

_DATE_FORMATS = (
    "%m/%d/%Y",
    "%m/%d/%y",
    "%m-%d-%Y",
    "%Y/%m/%d",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %I:%M %p",
    "%m/%d/%Y %I:%M:%S %p",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)

# Two-digit years map into the century ending here (62 -> 1962, 20 -> 2020).
_TWO_DIGIT_YEAR_MAX = 2049


# ── Operand parsing ─────────────────────────────────────────────────


def parse_int(value: str | None) -> int:
    """Parse a 32-bit integer, falling back to -1."""
    text = (value or "").strip()
    if not _INTEGER_PATTERN.fullmatch(text):
        return NUMERIC_FALLBACK
    number = int(text)
    if not _INT32_MIN <= number <= _INT32_MAX:
        return NUMERIC_FALLBACK
    return number


def parse_date(value: str | None) -> date:
    """Parse a date in ISO or common US/long forms, falling back to date.min."""
    text = (value or "").strip()
    if not text:
        return DATE_FALLBACK
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt).date()
        except ValueError:
            continue
        if "%y" in fmt and parsed.year > _TWO_DIGIT_YEAR_MAX:
            parsed = parsed.replace(year=parsed.year - 100)
        return parsed
    return DATE_FALLBACK


def format_short_date(value: date) -> str:
    """Short date form, e.g. ``3/7/1962`` (no zero padding)."""
    return f"{value.month}/{value.day}/{value.year:04d}"


def _text_operands(attribute: Attribute) -> tuple[str, str]:
    return attribute.filter_value1 or "", attribute.filter_value2 or ""


def _date_operands(attribute: Attribute) -> tuple[str, str]:
    return (
        format_short_date(parse_date(attribute.filter_value1)),
        format_short_date(parse_date(attribute.filter_value2)),
    )


def _numeric_operands(attribute: Attribute) -> tuple[str, str]:
    return (
        str(parse_int(attribute.filter_value1)),
        str(parse_int(attribute.filter_value2)),
    )


_OPERANDS: dict[AttributeTypeName, Callable[[Attribute], tuple[str, str]]] = {
    AttributeTypeName.TEXT: _text_operands,
    AttributeTypeName.DATE: _date_operands,
    AttributeTypeName.NUMERIC: _numeric_operands,
    AttributeTypeName.FULL_TEXT: _text_operands,
}

_EXPRESSIONS: dict[OperatorSlot, Callable[[str, str], str]] = {
    OperatorSlot.EQUALS: lambda v1, v2: v1,
    OperatorSlot.GREATER: lambda v1, v2: f"Expression: > {v1}",
    OperatorSlot.LESS: lambda v1, v2: f"Expression: < {v1}",
    OperatorSlot.BETWEEN: lambda v1, v2: f"Expression: ['{v1}','{v2}']",
    OperatorSlot.FULL_TEXT: lambda v1, v2: v1,
}


# ── Compiler ────────────────────────────────────────────────────────


class FilterQueryCompiler:
    """Compiles selected attribute filters into a repository QueryRequest."""

    def compile(self, category: Category) -> QueryRequest:
        query = QueryRequest()

        for attribute in category.attributes:
            expression = self.compile_attribute(attribute)
            if not expression:
                continue

            if attribute.type.name is AttributeTypeName.FULL_TEXT:
                query.full_text = expression
            else:
                query.indexes.append(IndexCondition(name=attribute.name, value=expression))

        logger.debug(
            "Compiled filters for category %s: %d index conditions, full text=%s",
            category.id, len(query.indexes), query.full_text is not None,
        )
        return query

    def compile_attribute(self, attribute: Attribute) -> str:
        """Expression for a single attribute, or "" when it contributes nothing."""
        selected = attribute.selected_filter_type
        if selected is None or not (attribute.filter_value1 or "").strip():
            return ""

        # Only operators belonging to the attribute's own type are honoured.
        filter_type = attribute.type.find_filter_type(selected.name)
        if filter_type is None:
            logger.debug(
                "Ignoring operator %s on %s attribute '%s'",
                selected.name, attribute.type.name.value, attribute.name,
            )
            return ""

        v1, v2 = _OPERANDS[attribute.type.name](attribute)
        return _EXPRESSIONS[filter_type.slot](v1, v2)
