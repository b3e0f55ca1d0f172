import os

import duckdb

from .catalog import ResourceMonitorCatalog
from .connection import Connection

DB_PATH_ENV = "SNOWMONITOR_DB_PATH"


class Connector:
    def __init__(self, db_file: str | None = None):
        """
        Initializes the emulator connection factory.

        Args:
            db_file: The DuckDB database file to use. Defaults to SNOWMONITOR_DB_PATH,
                     or ':memory:' (transient) when that is unset.
        """
        self._db_file = db_file or os.getenv(DB_PATH_ENV, ":memory:")

        # All connections from this Connector share one DuckDB database, the
        # way every session of a Snowflake account sees the same monitors.
        self._duck_conn = duckdb.connect(database=self._db_file)
        self._catalog = ResourceMonitorCatalog(self._duck_conn)

    @property
    def catalog(self) -> ResourceMonitorCatalog:
        return self._catalog

    def connect(self, role: str | None = None, **kwargs) -> Connection:
        """
        Create a new connection that shares the underlying DuckDB instance.
        """
        return Connection(
            duck_conn=self._duck_conn,
            catalog=self._catalog,
            role=role,
            owns_duck_conn=False,
            **kwargs,
        )

    def close(self) -> None:
        """
        Close the shared DuckDB connection.
        """
        if self._duck_conn:
            self._duck_conn.close()
            self._duck_conn = None
