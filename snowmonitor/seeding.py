"""Seed the emulator with resource monitors, as SHOW RESOURCE MONITORS would list them."""
from typing import Any

import pandas as pd


def seed_resource_monitors(
    conn,
    data: pd.DataFrame | dict[str, list] | list[dict[str, Any]],
    replace: bool = True,
) -> int:
    """
    Insert resource monitors straight into the emulator catalog.

    Columns are the ones SHOW RESOURCE MONITORS returns (name, credit_quota,
    frequency, suspend_at, notify_users, ...); only ``name`` is required.
    Values are stored as given, so malformed ones can be seeded on purpose.

    Args:
        conn: Emulator connection (or Connector)
        data: Data as pandas DataFrame, dict of lists, or list of dicts
        replace: If True, replaces monitors with the same name (default: True)

    Returns:
        Number of monitors inserted

    Example:
        >>> import snowflake.connector
        >>> from snowmonitor import patch_snowflake, seed_resource_monitors
        >>>
        >>> with patch_snowflake():
        ...     conn = snowflake.connector.connect()
        ...     seed_resource_monitors(conn, [
        ...         {"name": "DAILY_CAP", "credit_quota": "10.00", "frequency": "DAILY"},
        ...         {"name": "ACCOUNT_CAP", "level": "ACCOUNT", "suspend_at": "90%,100%"},
        ...     ])
        2
    """
    if isinstance(data, (dict, list)):
        df = pd.DataFrame(data)
    else:
        df = data

    if len(df) == 0:
        raise ValueError("Cannot seed resource monitors with empty data")

    records = [
        {str(column): _to_python(value) for column, value in row.items()}
        for _, row in df.iterrows()
    ]
    return conn.catalog.insert(records, replace=replace)


def _to_python(value: Any) -> Any:
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if hasattr(value, "item") and not isinstance(value, str):
        # numpy scalars
        return value.item()
    return value
