from .builder import struct_to_sql
from .hints import Hint, identifier, keyword, list_of, parameter, static

__all__ = [
    "Hint",
    "identifier",
    "keyword",
    "list_of",
    "parameter",
    "static",
    "struct_to_sql",
]
