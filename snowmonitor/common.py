from dataclasses import dataclass

from .ddl import keyword


@dataclass(kw_only=True)
class Like:
    pattern: str | None = keyword(modifiers=("single_quotes",))
