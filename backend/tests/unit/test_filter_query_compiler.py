"""Unit tests for the FilterQueryCompiler."""

import dataclasses
from datetime import date

import pytest

from document_gateway.application.services.filter_query_compiler import (
    FilterQueryCompiler,
    format_short_date,
    parse_date,
    parse_int,
)
from document_gateway.application.services.taxonomy_registry import (
    TaxonomyRegistry,
    build_attribute_types,
)
from document_gateway.domain.entities import (
    Attribute,
    AttributeTypeName,
    Category,
    Entity,
    FilterType,
    OperatorSlot,
)


# ── Fixtures ─────────────────────────────────────────────────────────


@pytest.fixture
def types():
    return {t.name: t for t in build_attribute_types()}


@pytest.fixture
def category(types) -> Category:
    """Permits-like category, with the full-text attribute appended by the registry."""
    registry = TaxonomyRegistry([
        Entity(id=1, name="E", categories=(
            Category(
                id=4,
                name="PERMITS",
                display_name="Permits",
                attributes=(
                    Attribute(1, "PERMIT NUMBER", types[AttributeTypeName.NUMERIC]),
                    Attribute(2, "STREET NAME", types[AttributeTypeName.TEXT]),
                    Attribute(3, "SCAN DATE", types[AttributeTypeName.DATE]),
                ),
            ),
        )),
    ], attribute_types=tuple(types.values()))
    return registry.get_category(1, 4)


@pytest.fixture
def compiler() -> FilterQueryCompiler:
    return FilterQueryCompiler()


def _select(category: Category, name: str, operator: str, v1=None, v2=None) -> Category:
    """Return a copy of *category* with one attribute's filter selected."""
    attributes = []
    for attribute in category.attributes:
        if attribute.name == name:
            attribute = dataclasses.replace(
                attribute,
                selected_filter_type=attribute.type.find_filter_type(operator),
                filter_value1=v1,
                filter_value2=v2,
            )
        attributes.append(attribute)
    return dataclasses.replace(category, attributes=tuple(attributes))


def _expression(compiler, category, name, operator, v1=None, v2=None) -> str:
    query = compiler.compile(_select(category, name, operator, v1, v2))
    assert len(query.indexes) == 1
    assert query.indexes[0].name == name
    return query.indexes[0].value


# ── Text ─────────────────────────────────────────────────────────────


def test_text_equals_is_the_literal_value(compiler, category):
    assert _expression(compiler, category, "STREET NAME", "EQUALS", "ABC") == "ABC"


def test_text_starts_and_ends_with(compiler, category):
    assert _expression(compiler, category, "STREET NAME", "STARTS_WITH", "MA") == "Expression: > MA"
    assert _expression(compiler, category, "STREET NAME", "ENDS_WITH", "ST") == "Expression: < ST"


def test_text_contains_uses_bracketed_two_value_form(compiler, category):
    assert _expression(compiler, category, "STREET NAME", "CONTAINS", "A", "B") == "Expression: ['A','B']"


# ── Date ─────────────────────────────────────────────────────────────


def test_date_operators(compiler, category):
    assert _expression(compiler, category, "SCAN DATE", "EQUALS", "2019-03-07") == "3/7/2019"
    assert _expression(compiler, category, "SCAN DATE", "AFTER", "03/07/2019") == "Expression: > 3/7/2019"
    assert _expression(compiler, category, "SCAN DATE", "BEFORE", "March 7, 2019") == "Expression: < 3/7/2019"
    assert (
        _expression(compiler, category, "SCAN DATE", "BETWEEN", "1/1/1960", "1969-12-31")
        == "Expression: ['1/1/1960','12/31/1969']"
    )


def test_short_year_and_time_of_day_inputs(compiler, category):
    assert _expression(compiler, category, "SCAN DATE", "AFTER", "5/1/62") == "Expression: > 5/1/1962"
    assert _expression(compiler, category, "SCAN DATE", "EQUALS", "5/1/2020 10:00 AM") == "5/1/2020"


def test_unparsable_date_compiles_like_minimum_date(compiler, category):
    unparsable = _expression(compiler, category, "SCAN DATE", "AFTER", "not a date")
    minimum = _expression(compiler, category, "SCAN DATE", "AFTER", format_short_date(date.min))
    assert unparsable == minimum == "Expression: > 1/1/0001"


def test_date_between_with_missing_second_value_uses_minimum(compiler, category):
    assert (
        _expression(compiler, category, "SCAN DATE", "BETWEEN", "2001-02-03")
        == "Expression: ['2/3/2001','1/1/0001']"
    )


# ── Numeric ──────────────────────────────────────────────────────────


def test_numeric_operators(compiler, category):
    assert _expression(compiler, category, "PERMIT NUMBER", "EQUALS", " 42 ") == "42"
    assert _expression(compiler, category, "PERMIT NUMBER", "GREATER_THAN", "10") == "Expression: > 10"
    assert _expression(compiler, category, "PERMIT NUMBER", "LESS_THAN", "-5") == "Expression: < -5"
    assert _expression(compiler, category, "PERMIT NUMBER", "BETWEEN", "1", "9") == "Expression: ['1','9']"


def test_unparsable_number_compiles_like_minus_one(compiler, category):
    unparsable = _expression(compiler, category, "PERMIT NUMBER", "EQUALS", "12a")
    sentinel = _expression(compiler, category, "PERMIT NUMBER", "EQUALS", "-1")
    assert unparsable == sentinel == "-1"


# ── Full text & routing ──────────────────────────────────────────────


def test_full_text_becomes_the_full_text_condition(compiler, category):
    query = compiler.compile(_select(category, "FULL_TEXT", "FULL_TEXT", "Main Street fire"))
    assert query.indexes == []
    assert query.full_text == "Main Street fire"


def test_multiple_filters_keep_attribute_order(compiler, category):
    selected = _select(category, "PERMIT NUMBER", "EQUALS", "7")
    selected = _select(selected, "STREET NAME", "STARTS_WITH", "OAK")
    selected = _select(selected, "FULL_TEXT", "FULL_TEXT", "demolition")

    query = compiler.compile(selected)

    assert [(c.name, c.value) for c in query.indexes] == [
        ("PERMIT NUMBER", "7"),
        ("STREET NAME", "Expression: > OAK"),
    ]
    assert query.to_payload() == {
        "Indexes": [
            {"Name": "PERMIT NUMBER", "Value": "7"},
            {"Name": "STREET NAME", "Value": "Expression: > OAK"},
        ],
        "FullText": {"Value": "demolition"},
    }


def test_last_full_text_attribute_wins(compiler, category, types):
    full_text = types[AttributeTypeName.FULL_TEXT]
    selector = full_text.find_filter_type("FULL_TEXT")
    category = dataclasses.replace(category, attributes=(
        Attribute(1, "FULL_TEXT", full_text, "first", selected_filter_type=selector),
        Attribute(2, "FULL_TEXT", full_text, "second", selected_filter_type=selector),
    ))
    assert compiler.compile(category).full_text == "second"


# ── Attributes that contribute nothing ───────────────────────────────


def test_no_selection_produces_empty_query(compiler, category):
    query = compiler.compile(category)
    assert query.is_empty
    assert query.to_payload() == {"Indexes": []}


@pytest.mark.parametrize("value", [None, "", "   "])
def test_empty_value_contributes_nothing(compiler, category, value):
    query = compiler.compile(_select(category, "STREET NAME", "EQUALS", value))
    assert query.is_empty


def test_operator_from_another_type_contributes_nothing(compiler, category):
    foreign = FilterType(name="STARTS_WITH", slot=OperatorSlot.GREATER)
    attributes = tuple(
        dataclasses.replace(a, selected_filter_type=foreign, filter_value1="12")
        if a.name == "PERMIT NUMBER" else a
        for a in category.attributes
    )
    query = compiler.compile(dataclasses.replace(category, attributes=attributes))
    assert query.is_empty


# ── Operand parsing ──────────────────────────────────────────────────


@pytest.mark.parametrize("raw, expected", [
    ("15", 15),
    ("+15", 15),
    ("  -3 ", -3),
    ("2147483647", 2147483647),
    ("2147483648", -1),
    ("1.5", -1),
    ("1_000", -1),
    ("", -1),
    (None, -1),
])
def test_parse_int(raw, expected):
    assert parse_int(raw) == expected


@pytest.mark.parametrize("raw, expected", [
    ("1962-03-07", date(1962, 3, 7)),
    ("1962-03-07T10:15:00", date(1962, 3, 7)),
    ("3/7/1962", date(1962, 3, 7)),
    ("1962/03/07", date(1962, 3, 7)),
    ("7 March 1962", date(1962, 3, 7)),
    ("Mar 7, 1962", date(1962, 3, 7)),
    ("5/1/62", date(1962, 5, 1)),
    ("5/1/20", date(2020, 5, 1)),
    ("5/1/2020 10:00", date(2020, 5, 1)),
    ("5/1/2020 10:00 AM", date(2020, 5, 1)),
    ("5/1/2020 10:00:30 PM", date(2020, 5, 1)),
    ("13/45/1962", date.min),
    ("yesterday", date.min),
    (None, date.min),
])
def test_parse_date(raw, expected):
    assert parse_date(raw) == expected


def test_short_date_has_no_zero_padding():
    assert format_short_date(date(1905, 1, 9)) == "1/9/1905"
