from dataclasses import dataclass, field
from typing import Any

DDL_METADATA_KEY = "ddl"

KINDS = frozenset({"static", "keyword", "parameter", "identifier", "list"})

MODIFIERS = frozenset(
    {
        "equals",
        "no_equals",
        "single_quotes",
        "double_quotes",
        "parentheses",
        "no_parentheses",
        "comma",
        "no_comma",
    }
)

CONFLICTING_MODIFIERS = (
    ("equals", "no_equals"),
    ("single_quotes", "double_quotes"),
    ("parentheses", "no_parentheses"),
    ("comma", "no_comma"),
)


@dataclass(frozen=True)
class Hint:
    """How a single dataclass field is rendered into a SQL statement."""

    kind: str
    sql: str | None = None
    modifiers: frozenset[str] = frozenset()

    def has(self, modifier: str) -> bool:
        return modifier in self.modifiers


def _metadata(kind: str, sql: str | None, modifiers: tuple[str, ...] | frozenset[str]) -> dict[str, Hint]:
    return {DDL_METADATA_KEY: Hint(kind=kind, sql=sql, modifiers=frozenset(modifiers))}


def static(sql: str) -> Any:
    """A fixed keyword that is always rendered; the field itself carries no value."""
    return field(default=None, init=False, repr=False, compare=False, metadata=_metadata("static", sql, ()))


def keyword(sql: str | None = None, *, modifiers: tuple[str, ...] = (), default: Any = None) -> Any:
    return field(default=default, metadata=_metadata("keyword", sql, modifiers))


def parameter(sql: str, *, modifiers: tuple[str, ...] = ("equals",)) -> Any:
    return field(default=None, metadata=_metadata("parameter", sql, modifiers))


def identifier() -> Any:
    return field(default=None, metadata=_metadata("identifier", None, ()))


def list_of(*, modifiers: tuple[str, ...] = ("comma",)) -> Any:
    return field(default_factory=list, metadata=_metadata("list", None, modifiers))


def hint_for(f: Any) -> Hint | None:
    return f.metadata.get(DDL_METADATA_KEY)
