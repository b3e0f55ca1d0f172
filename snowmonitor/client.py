import logging
from types import TracebackType
from typing import Any, Mapping, Protocol, Self

import snowflake.connector
from snowflake.connector.cursor import DictCursor

from .config import ClientConfig
from .resource_monitors import ResourceMonitors

logger = logging.getLogger(__name__)


class StatementExecutor(Protocol):
    def exec(self, sql: str) -> int: ...

    def query(self, sql: str) -> list[Mapping[str, Any]]: ...


class Client:
    def __init__(self, connection: Any, statement_timeout: int | None = None) -> None:
        """
        Wraps a DB-API connection from snowflake.connector (or anything that
        quacks like one, such as the snowmonitor emulator).

        Args:
            connection: An open connection; the client does not take ownership
                        unless used as a context manager.
            statement_timeout: Optional per-statement timeout in seconds.
        """
        self._conn = connection
        self._statement_timeout = statement_timeout
        self.resource_monitors = ResourceMonitors(self)

    @classmethod
    def connect(cls, config: ClientConfig | None = None) -> "Client":
        """Open a new Snowflake connection from config (or the environment)."""
        config = config or ClientConfig.from_env()
        connection = snowflake.connector.connect(**config.connect_kwargs())
        return cls(connection, statement_timeout=config.statement_timeout)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def connection(self) -> Any:
        return self._conn

    def exec(self, sql: str) -> int:
        """Execute a statement and return the number of rows it affected."""
        logger.debug("exec: %s", sql)
        with self._conn.cursor() as cursor:
            cursor.execute(sql, **self._execute_kwargs())
            return cursor.rowcount or 0

    def query(self, sql: str) -> list[Mapping[str, Any]]:
        """Execute a statement and return its rows as dicts keyed by column name."""
        logger.debug("query: %s", sql)
        with self._conn.cursor(DictCursor) as cursor:
            cursor.execute(sql, **self._execute_kwargs())
            return cursor.fetchall()

    def close(self) -> None:
        self._conn.close()

    def _execute_kwargs(self) -> dict[str, Any]:
        if self._statement_timeout is None:
            return {}
        return {"timeout": self._statement_timeout}
