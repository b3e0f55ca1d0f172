from .sql import load_sql

__all__ = ["load_sql"]
