from typing import Any, Generator, Iterator, Mapping

import pytest
import snowflake.connector

from snowmonitor import AccountObjectIdentifier, Client, patch_snowflake
from snowmonitor.emulator import Connection, Connector


class RecordingClient:
    """Stands in for Client: records statements and answers queries with canned rows."""

    def __init__(self, rows: list[Mapping[str, Any]] | None = None) -> None:
        self.rows = rows or []
        self.statements: list[str] = []

    def exec(self, sql: str) -> int:
        self.statements.append(sql)
        return 1

    def query(self, sql: str) -> list[Mapping[str, Any]]:
        self.statements.append(sql)
        return self.rows


@pytest.fixture
def connector() -> Iterator[Connector]:
    with patch_snowflake(db_file=":memory:") as connector:
        yield connector


@pytest.fixture
def conn(connector: Connector) -> Generator[Connection, Any, None]:
    with snowflake.connector.connect(account="snowmonitor", user="test") as conn:
        yield conn


@pytest.fixture
def client(conn: Connection) -> Client:
    return Client(conn)


@pytest.fixture
def recording_client() -> RecordingClient:
    return RecordingClient()


@pytest.fixture
def monitor_id() -> AccountObjectIdentifier:
    return AccountObjectIdentifier("MONTHLY_CAP")
