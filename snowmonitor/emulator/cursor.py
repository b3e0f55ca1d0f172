import uuid
from types import TracebackType
from typing import TYPE_CHECKING, Any, Self, Sequence

import duckdb
import snowflake.connector.errors
from duckdb import DuckDBPyConnection

from .catalog import ResourceMonitorCatalog
from .statements import AlterMonitor, CreateMonitor, DropMonitor, ShowMonitors, parse_statement

if TYPE_CHECKING:
    from .connection import Connection

SQL_SUCCESS = "Statement executed successfully."


class Cursor:
    def __init__(
        self,
        sf_conn: "Connection",
        duck_conn: DuckDBPyConnection,
        catalog: ResourceMonitorCatalog,
        use_dict_result: bool = False,
    ) -> None:
        self._sf_conn = sf_conn
        self._duck_cur = duck_conn.cursor()
        self._catalog = catalog
        self._use_dict_result = use_dict_result
        self._is_closed = False

        self._last_sql: str | None = None
        self._rows: list[tuple] | None = None
        self._columns: list[str] = []
        self._fetch_index = 0
        self._rowcount: int | None = None
        self._sfqid: str | None = None
        self.arraysize: int = 1

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def execute(
        self,
        command: str,
        params: Sequence[Any] | dict[Any, Any] | None = None,
        *args: Any,
        **kwargs: Any,
    ) -> Self:
        """
        Execute a resource monitor statement.

        Extra keyword arguments accepted by snowflake.connector (``timeout`` and
        friends) are ignored.
        """
        if self._is_closed:
            raise snowflake.connector.errors.InterfaceError(msg="Cursor is closed in execute.", errno=251006)
        if params is not None:
            raise snowflake.connector.errors.ProgrammingError(
                msg="Bind parameters are not supported for resource monitor statements.",
                errno=1003,
                sqlstate="42601",
            )

        self._rows = None
        self._columns = []
        self._fetch_index = 0
        self._rowcount = None
        self._sfqid = None

        statement = parse_statement(command)

        try:
            if isinstance(statement, ShowMonitors):
                sql, sql_params = self._catalog.show_sql(statement)
                self._duck_cur.execute(sql, sql_params or None)
            elif isinstance(statement, CreateMonitor):
                self._catalog.create(self._duck_cur, statement, owner=self._sf_conn.role)
                self._generate_result(f"Resource monitor {statement.name} successfully created.")
            elif isinstance(statement, AlterMonitor):
                self._catalog.alter(self._duck_cur, statement)
                self._generate_result(SQL_SUCCESS)
            elif isinstance(statement, DropMonitor):
                self._catalog.drop(self._duck_cur, statement)
                self._generate_result(f"{statement.name} successfully dropped.")
        except duckdb.ConstraintException as e:
            raise snowflake.connector.errors.ProgrammingError(
                msg=e.args[0], errno=100072, sqlstate="22000"
            ) from None
        except duckdb.ConnectionException as e:
            raise snowflake.connector.errors.DatabaseError(
                msg=e.args[0], errno=250002, sqlstate="08003"
            ) from None

        self._rows = self._duck_cur.fetchall()
        self._columns = [column[0] for column in self._duck_cur.description or []]
        self._rowcount = len(self._rows)
        self._sfqid = str(uuid.uuid4())
        self._last_sql = command
        return self

    def _generate_result(self, status: str) -> None:
        self._duck_cur.execute("SELECT ? AS status", [status])

    @property
    def description(self) -> list[tuple]:
        return [(name, None, None, None, None, None, True) for name in self._columns]

    @property
    def rowcount(self) -> int | None:
        return self._rowcount

    @property
    def sfqid(self) -> str | None:
        return self._sfqid

    @property
    def query(self) -> str | None:
        return self._last_sql

    def fetchone(self) -> dict[str, Any] | tuple | None:
        rows = self._fetch(1)
        return rows[0] if rows else None

    def fetchmany(self, size: int | None = None) -> list[dict[str, Any] | tuple]:
        return self._fetch(size or self.arraysize)

    def fetchall(self) -> list[dict[str, Any] | tuple]:
        return self._fetch(None)

    def _fetch(self, size: int | None) -> list[dict[str, Any] | tuple]:
        if self._rows is None:
            raise TypeError("No open result set")
        end = len(self._rows) if size is None else self._fetch_index + size
        rows = self._rows[self._fetch_index : end]
        self._fetch_index += len(rows)
        if self._use_dict_result:
            return [dict(zip(self._columns, row)) for row in rows]
        return list(rows)

    def close(self) -> None:
        if not self._is_closed:
            self._duck_cur.close()
            self._is_closed = True

    def is_closed(self) -> bool:
        return self._is_closed
