from types import TracebackType
from typing import Any, Self

import snowflake.connector.errors
from duckdb import DuckDBPyConnection
from snowflake.connector.cursor import DictCursor, SnowflakeCursor

from .catalog import ResourceMonitorCatalog
from .cursor import Cursor

DEFAULT_ROLE = "ACCOUNTADMIN"


class Connection:
    def __init__(
        self,
        duck_conn: DuckDBPyConnection,
        catalog: ResourceMonitorCatalog,
        role: str | None = None,
        owns_duck_conn: bool = False,
        *args: Any,
        **kwargs: Any,
    ) -> None:
        # account, user, password, warehouse, ... are accepted and ignored
        self._duck_conn = duck_conn
        self._catalog = catalog
        self._owns_duck_conn = owns_duck_conn
        self._is_closed = False
        self._role: str | None = None
        self.use_role(role or DEFAULT_ROLE)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def cursor(self, cursor_class: type[SnowflakeCursor] = SnowflakeCursor) -> Cursor:
        """
        Returns a new Cursor object for executing statements.
        """
        if self._is_closed:
            raise snowflake.connector.errors.DatabaseError(
                msg="Connection is closed", errno=250002, sqlstate="08003"
            )

        return Cursor(
            sf_conn=self,
            duck_conn=self._duck_conn,
            catalog=self._catalog,
            use_dict_result=issubclass(cursor_class, DictCursor),
        )

    @property
    def catalog(self) -> ResourceMonitorCatalog:
        return self._catalog

    @property
    def role(self) -> str | None:
        return self._role

    def use_role(self, role: str | None) -> None:
        """Sets the current role, which owns the resource monitors it creates."""
        self._role = role.upper() if role else None

    def close(self) -> None:
        if self._owns_duck_conn and not self._is_closed:
            self._duck_conn.close()
        self._is_closed = True

    def is_closed(self) -> bool:
        return self._is_closed
