import math
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

import pytest

from snowmonitor.ddl import Hint, identifier, keyword, list_of, parameter, static, struct_to_sql
from snowmonitor.errors import RenderError
from snowmonitor.identifiers import AccountObjectIdentifier


class Color(str, Enum):
    RED = "RED"


@dataclass(kw_only=True)
class Item:
    _item: None = static("ITEM")
    value: int | None = keyword()


@dataclass(kw_only=True)
class Nested:
    size: int | None = parameter("SIZE")


@dataclass(kw_only=True)
class Statement:
    _create: None = static("CREATE")
    or_replace: bool | None = keyword("OR REPLACE")
    _thing: None = static("THING")
    name: AccountObjectIdentifier | None = identifier()
    color: Color | None = parameter("COLOR")
    comment: str | None = parameter("COMMENT", modifiers=("equals", "single_quotes"))
    nested: Nested | None = keyword("SET")
    items: list[Item] | None = keyword("ITEMS", modifiers=("no_comma",))
    tags: list[str] = list_of(modifiers=("parentheses", "comma", "double_quotes"))


def test_static_fields_only():
    assert struct_to_sql(Statement()) == "CREATE THING"


def test_all_fields_in_declaration_order():
    statement = Statement(
        or_replace=True,
        name=AccountObjectIdentifier("my thing"),
        color=Color.RED,
        comment="hello",
        nested=Nested(size=3),
        items=[Item(value=1), Item(value=2)],
        tags=["a", "b"],
    )

    assert struct_to_sql(statement) == (
        'CREATE OR REPLACE THING "my thing" COLOR = RED COMMENT = \'hello\' '
        'SET SIZE = 3 ITEMS ITEM 1 ITEM 2 ("a", "b")'
    )


def test_false_and_empty_values_are_omitted():
    statement = Statement(or_replace=False, name=AccountObjectIdentifier(""), items=[], tags=[])

    assert struct_to_sql(statement) == "CREATE THING"


def test_zero_is_rendered():
    assert struct_to_sql(Item(value=0)) == "ITEM 0"


def test_nested_struct_with_no_values_keeps_keyword():
    assert struct_to_sql(Statement(nested=Nested())) == "CREATE THING SET"


def test_parameter_without_equals():
    @dataclass
    class NoEquals:
        size: int | None = parameter("SIZE", modifiers=("no_equals",))

    assert struct_to_sql(NoEquals(size=7)) == "SIZE 7"


def test_numeric_leaves():
    @dataclass
    class Numbers:
        ratio: float | None = parameter("RATIO")
        amount: Decimal | None = parameter("AMOUNT")
        enabled: bool | None = parameter("ENABLED")

    assert struct_to_sql(Numbers(ratio=0.5, amount=Decimal("12.50"), enabled=False)) == (
        "RATIO = 0.5 AMOUNT = 12.50 ENABLED = FALSE"
    )


@pytest.mark.parametrize("value", [math.nan, math.inf, Decimal("NaN")])
def test_non_finite_numbers_fail(value):
    @dataclass
    class Numbers:
        amount: object = parameter("AMOUNT")

    with pytest.raises(RenderError, match="non-finite"):
        struct_to_sql(Numbers(amount=value))


def test_unsupported_value_type_fails():
    @dataclass
    class Weird:
        value: object = parameter("VALUE")

    with pytest.raises(RenderError, match="cannot render value of type"):
        struct_to_sql(Weird(value=object()))


def test_field_without_hint_fails():
    @dataclass
    class Untagged:
        value: int | None = None

    with pytest.raises(RenderError, match="has no ddl hint"):
        struct_to_sql(Untagged())


def test_conflicting_modifiers_fail():
    @dataclass
    class Conflicting:
        value: str | None = parameter("VALUE", modifiers=("single_quotes", "double_quotes"))

    with pytest.raises(RenderError, match="exclusive"):
        struct_to_sql(Conflicting(value="x"))


def test_unknown_hint_kind_fails():
    @dataclass
    class Unknown:
        value: str | None = field(default="x", metadata={"ddl": Hint(kind="mystery")})

    with pytest.raises(RenderError, match="unsupported ddl hint"):
        struct_to_sql(Unknown())


def test_identifier_requires_qualified_name():
    @dataclass
    class BadIdentifier:
        name: object = identifier()

    with pytest.raises(RenderError, match="as an identifier"):
        struct_to_sql(BadIdentifier(name="plain string"))


def test_non_dataclass_fails():
    with pytest.raises(RenderError, match="expected an options dataclass"):
        struct_to_sql({"CREATE": True})


@dataclass(kw_only=True)
class Wrapper:
    _alter: None = static("ALTER")
    size: int | None = parameter("SIZE")
    nested: Nested | None = parameter("NESTED")
    names: list[str] | None = parameter("NAMES", modifiers=("equals", "parentheses"))


def test_parameter_with_empty_nested_value_is_omitted():
    assert struct_to_sql(Wrapper(size=5, nested=Nested())) == "ALTER SIZE = 5"


def test_parameter_with_empty_sequence_is_omitted():
    assert struct_to_sql(Wrapper(names=[], size=5)) == "ALTER SIZE = 5"
    assert struct_to_sql(Wrapper(names=["a", "b"])) == "ALTER NAMES = (a, b)"
