import dataclasses
import math
from decimal import Decimal
from enum import Enum
from typing import Any, Sequence

from ..errors import RenderError
from .hints import CONFLICTING_MODIFIERS, KINDS, MODIFIERS, Hint, hint_for


def struct_to_sql(value: Any) -> str:
    """
    Render an options dataclass into a single SQL statement.

    Fields are rendered in declaration order according to the hint attached to
    each of them. Fields whose value is absent contribute nothing, so the
    result never contains redundant whitespace.

    Raises:
        RenderError: If a field has no hint, a hint is inconsistent, or a value
            cannot be converted to text.
    """
    return " ".join(_render_struct(value))


def _render_struct(value: Any) -> list[str]:
    if not dataclasses.is_dataclass(value) or isinstance(value, type):
        raise RenderError(f"expected an options dataclass, got {type(value).__name__}")

    parts: list[str] = []
    for f in dataclasses.fields(value):
        hint = hint_for(f)
        if hint is None:
            raise RenderError(f"field {type(value).__name__}.{f.name} has no ddl hint")
        _check_hint(hint, f"{type(value).__name__}.{f.name}")
        parts.extend(_render_field(hint, getattr(value, f.name)))
    return [part for part in parts if part]


def _check_hint(hint: Hint, where: str) -> None:
    if hint.kind not in KINDS:
        raise RenderError(f"unsupported ddl hint {hint.kind!r} on {where}")
    unknown = hint.modifiers - MODIFIERS
    if unknown:
        raise RenderError(f"unsupported ddl modifiers {sorted(unknown)} on {where}")
    for first, second in CONFLICTING_MODIFIERS:
        if first in hint.modifiers and second in hint.modifiers:
            raise RenderError(f"ddl modifiers {first} and {second} are exclusive on {where}")
    if hint.kind in ("static", "parameter") and not hint.sql:
        raise RenderError(f"ddl hint {hint.kind!r} on {where} requires sql text")


def _render_field(hint: Hint, value: Any) -> list[str]:
    if hint.kind == "static":
        return [hint.sql]

    if hint.kind == "identifier":
        if value is None:
            return []
        qualified = getattr(value, "fully_qualified_name", None)
        if not callable(qualified):
            raise RenderError(f"cannot render {type(value).__name__} as an identifier")
        return [qualified()]

    if hint.kind == "list":
        if not value:
            return []
        return [_render_sequence(value, hint)]

    if hint.kind == "keyword":
        return _render_keyword(hint, value)

    return _render_parameter(hint, value)


def _render_keyword(hint: Hint, value: Any) -> list[str]:
    if value is None or value is False or value == "":
        return []
    if value is True:
        if not hint.sql:
            raise RenderError("boolean keyword requires sql text")
        return [hint.sql]

    if dataclasses.is_dataclass(value):
        rendered = _render_struct(value)
    elif _is_sequence(value):
        if not value:
            return []
        rendered = [_render_sequence(value, hint)]
    else:
        rendered = [_quote(_format_value(value), hint)]

    return [hint.sql, *rendered] if hint.sql else rendered


def _render_parameter(hint: Hint, value: Any) -> list[str]:
    if value is None:
        return []

    if dataclasses.is_dataclass(value):
        text = " ".join(_render_struct(value))
    elif _is_sequence(value):
        if not value:
            return []
        text = _render_sequence(value, hint)
    else:
        text = _quote(_format_value(value), hint)

    # A nested value or sequence that renders to nothing drops the whole parameter.
    if not text:
        return []
    if hint.has("no_equals"):
        return [f"{hint.sql} {text}"]
    return [f"{hint.sql} = {text}"]


def _render_sequence(items: Sequence[Any], hint: Hint) -> str:
    rendered = []
    for item in items:
        if dataclasses.is_dataclass(item):
            rendered.append(" ".join(_render_struct(item)))
        else:
            rendered.append(_quote(_format_value(item), hint))

    separator = " " if hint.has("no_comma") else ", "
    joined = separator.join(rendered)
    if hint.has("parentheses"):
        return f"({joined})"
    return joined


def _format_value(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise RenderError(f"cannot render non-finite number {value!r}")
        return repr(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise RenderError(f"cannot render non-finite number {value!r}")
        return str(value)
    if isinstance(value, str):
        return value
    raise RenderError(f"cannot render value of type {type(value).__name__}")


def _quote(text: str, hint: Hint) -> str:
    if hint.has("single_quotes"):
        return f"'{text}'"
    if hint.has("double_quotes"):
        return f'"{text}"'
    return text


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))
