import atexit
import glob
import os
from contextlib import contextmanager
from typing import Iterator
from unittest.mock import patch as mock_patch

from .emulator import Connector

_patch_ctx = None  # Global variable to track context


@contextmanager
def patch_snowflake(db_file: str | None = None, reset: bool = False) -> Iterator[Connector]:
    """
    Context manager that routes snowflake.connector.connect to the emulator.

    Args:
        db_file: Path to a DuckDB database file, ':memory:' for a transient one.
                 Defaults to SNOWMONITOR_DB_PATH, or ':memory:' when unset.
        reset: If True, deletes the database file before starting (default: False).

    Yields:
        The emulator Connector, e.g. for seeding resource monitors.
    """
    if reset and db_file and db_file != ":memory:":
        # Delete the main file and any related files (.wal, .tmp, etc.)
        for pattern in [db_file, f"{db_file}.wal", f"{db_file}.tmp"]:
            for file in glob.glob(pattern):
                if os.path.exists(file):
                    os.remove(file)

    connector = Connector(db_file=db_file)
    with mock_patch("snowflake.connector.connect", side_effect=connector.connect):
        try:
            yield connector
        finally:
            connector.close()


def start_patch_snowflake(db_file: str | None = None, reset: bool = False) -> None:
    """
    Start the patching context and register cleanup at interpreter exit.

    Example::

        start_patch_snowflake()
        client = Client.connect()
        client.resource_monitors.create(AccountObjectIdentifier("MONTHLY_CAP"))
    """
    global _patch_ctx
    if _patch_ctx is None:  # Ensure we don't register multiple times
        _patch_ctx = patch_snowflake(db_file=db_file, reset=reset)
        _patch_ctx.__enter__()
        atexit.register(stop_patch_snowflake)


def stop_patch_snowflake() -> None:
    """Stop the patching context."""
    global _patch_ctx
    if _patch_ctx:
        _patch_ctx.__exit__(None, None, None)
        _patch_ctx = None  # Reset for future use
