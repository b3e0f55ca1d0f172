from dataclasses import dataclass
from enum import Enum

from sqlglot import exp

MAX_IDENTIFIER_LENGTH = 255


class ObjectType(str, Enum):
    RESOURCE_MONITOR = "RESOURCE MONITOR"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AccountObjectIdentifier:
    """Name of an object that lives directly in the account (no database or schema)."""

    name: str

    def fully_qualified_name(self) -> str:
        if not self.name:
            return ""
        return exp.to_identifier(self.name, quoted=True).sql(dialect="snowflake")

    def __str__(self) -> str:
        return self.fully_qualified_name()


def valid_object_identifier(identifier: object) -> bool:
    # Double-quoted identifiers may contain any character, so only the length is checked.
    name = getattr(identifier, "name", None)
    if not isinstance(name, str):
        return False
    return 0 < len(name) <= MAX_IDENTIFIER_LENGTH
