import re
from importlib import resources

_SAFE_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_$]*$")


def load_sql(package: str, filename: str, **names: str) -> str:
    """
    Read a .sql file shipped inside ``package`` and fill in its placeholders.

    Placeholders only ever stand for schema or table names, so each value must
    be a plain unquoted identifier.
    """
    for key, value in names.items():
        if not isinstance(value, str) or not _SAFE_NAME.match(value):
            raise ValueError(f"{key} must be a plain identifier, got {value!r}")

    sql = resources.files(package).joinpath(*filename.split("/")).read_text(encoding="utf-8")
    return sql.format(**names)
