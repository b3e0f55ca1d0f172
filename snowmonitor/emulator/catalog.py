from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

import snowflake.connector.errors
from duckdb import DuckDBPyConnection

from ..errors import InvalidEnumError
from ..helper import load_sql
from ..resource_monitors.row import format_trigger_column
from ..resource_monitors.types import Frequency, TriggerAction, TriggerDefinition
from .statements import AlterMonitor, CreateMonitor, DropMonitor, MonitorParameters, ShowMonitors

SCHEMA_NAME = "_snowmonitor"

COLUMNS = (
    "name",
    "credit_quota",
    "used_credits",
    "remaining_credits",
    "level",
    "frequency",
    "start_time",
    "end_time",
    "notify_at",
    "suspend_at",
    "suspend_immediately_at",
    "created_on",
    "owner",
    "comment",
    "notify_users",
)

TIMESTAMP_COLUMNS = ("start_time", "end_time", "created_on")

TRIGGER_COLUMNS = {
    "suspend_at": TriggerAction.SUSPEND,
    "suspend_immediately_at": TriggerAction.SUSPEND_IMMEDIATE,
    "notify_at": TriggerAction.NOTIFY,
}


class ResourceMonitorCatalog:
    def __init__(self, duck_conn: DuckDBPyConnection, schema_name: str = SCHEMA_NAME) -> None:
        """
        Keeps resource monitors in a DuckDB table shaped like the output of
        SHOW RESOURCE MONITORS.
        """
        self._duck_conn = duck_conn
        self._schema_name = schema_name
        self._create_schema()

    @property
    def table(self) -> str:
        return f"{self._schema_name}.resource_monitors"

    def _create_schema(self) -> None:
        sql = load_sql(__package__, "sql/resource_monitors.sql", schema_name=self._schema_name)
        self._duck_conn.execute(sql)

    def exists(self, duck_cur: DuckDBPyConnection, name: str) -> bool:
        result = duck_cur.execute(f"SELECT 1 FROM {self.table} WHERE name = ?", [name]).fetchone()
        return result is not None

    def create(self, duck_cur: DuckDBPyConnection, statement: CreateMonitor, owner: str | None = None) -> None:
        exists = self.exists(duck_cur, statement.name)
        if exists and not statement.or_replace:
            raise snowflake.connector.errors.ProgrammingError(
                msg=f"SQL compilation error:\nObject '{statement.name}' already exists.",
                errno=2002,
                sqlstate="42710",
            )

        # Every value is checked before an existing monitor is replaced.
        parameters = statement.parameters
        now = _utcnow()
        quota = _credits(parameters.credit_quota)
        values = {
            "name": statement.name,
            "credit_quota": quota,
            "used_credits": "0.00",
            "remaining_credits": quota,
            "frequency": _frequency(parameters.frequency) or Frequency.MONTHLY.value,
            "start_time": _timestamp(parameters.start_timestamp, now) or now,
            "end_time": _timestamp(parameters.end_timestamp, now),
            **_trigger_values(parameters.triggers or []),
            "created_on": now,
            "owner": owner,
            "notify_users": _users(parameters.notify_users),
        }
        if exists:
            duck_cur.execute(f"DELETE FROM {self.table} WHERE name = ?", [statement.name])
        self._insert(duck_cur, values)

    def alter(self, duck_cur: DuckDBPyConnection, statement: AlterMonitor) -> None:
        if not self.exists(duck_cur, statement.name):
            if statement.if_exists:
                return
            raise _does_not_exist(statement.name)

        updates = _updated_values(statement.parameters)
        if not updates:
            return
        assignments = ", ".join(f"{column} = ?" for column in updates)
        duck_cur.execute(
            f"UPDATE {self.table} SET {assignments} WHERE name = ?",
            [*updates.values(), statement.name],
        )

    def drop(self, duck_cur: DuckDBPyConnection, statement: DropMonitor) -> None:
        if not self.exists(duck_cur, statement.name):
            raise _does_not_exist(statement.name)
        duck_cur.execute(f"DELETE FROM {self.table} WHERE name = ?", [statement.name])

    def show_sql(self, statement: ShowMonitors) -> tuple[str, list[Any]]:
        sql = f"SELECT {', '.join(COLUMNS)} FROM {self.table}"
        params: list[Any] = []
        if statement.pattern is not None:
            # SHOW ... LIKE is case-insensitive in Snowflake.
            sql += " WHERE name ILIKE ?"
            params.append(statement.pattern)
        return f"{sql} ORDER BY name", params

    def insert(self, records: list[dict[str, Any]], replace: bool = True) -> int:
        """Insert raw SHOW-shaped rows, e.g. for seeding test data."""
        duck_cur = self._duck_conn.cursor()
        try:
            for record in records:
                unknown = set(record) - set(COLUMNS)
                if unknown:
                    raise ValueError(f"Unknown resource monitor columns: {sorted(unknown)}")
                if not record.get("name"):
                    raise ValueError("Every resource monitor needs a name")
                if replace:
                    duck_cur.execute(f"DELETE FROM {self.table} WHERE name = ?", [record["name"]])
                values = {"used_credits": "0.00", "created_on": _utcnow(), **record}
                for column in TIMESTAMP_COLUMNS:
                    if isinstance(values.get(column), str):
                        values[column] = datetime.fromisoformat(values[column])
                self._insert(duck_cur, values)
        finally:
            duck_cur.close()
        return len(records)

    def _insert(self, duck_cur: DuckDBPyConnection, values: dict[str, Any]) -> None:
        columns = ", ".join(values)
        placeholders = ", ".join("?" * len(values))
        duck_cur.execute(
            f"INSERT INTO {self.table} ({columns}) VALUES ({placeholders})",
            list(values.values()),
        )


def _updated_values(parameters: MonitorParameters) -> dict[str, Any]:
    now = _utcnow()
    updates: dict[str, Any] = {}
    if parameters.credit_quota is not None:
        updates["credit_quota"] = updates["remaining_credits"] = _credits(parameters.credit_quota)
    if parameters.frequency is not None:
        updates["frequency"] = _frequency(parameters.frequency)
    if parameters.start_timestamp is not None:
        updates["start_time"] = _timestamp(parameters.start_timestamp, now)
    if parameters.end_timestamp is not None:
        updates["end_time"] = _timestamp(parameters.end_timestamp, now)
    if parameters.notify_users is not None:
        updates["notify_users"] = _users(parameters.notify_users)
    if parameters.triggers is not None:
        updates.update(_trigger_values(parameters.triggers))
    return updates


def _trigger_values(triggers: list[TriggerDefinition]) -> dict[str, str | None]:
    return {column: format_trigger_column(triggers, action) for column, action in TRIGGER_COLUMNS.items()}


def _users(users: list[str] | None) -> str | None:
    return ", ".join(users) if users else None


def _credits(value: str | None) -> str | None:
    if value is None:
        return None
    try:
        return f"{Decimal(value):.2f}"
    except InvalidOperation:
        raise _invalid_value("CREDIT_QUOTA", value) from None


def _frequency(value: str | None) -> str | None:
    if value is None:
        return None
    try:
        return Frequency.from_string(value).value
    except InvalidEnumError:
        raise _invalid_value("FREQUENCY", value) from None


def _timestamp(value: str | None, now: datetime) -> datetime | None:
    if value is None:
        return None
    if value.upper() == "IMMEDIATELY":
        return now
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise snowflake.connector.errors.ProgrammingError(
            msg=f"Timestamp '{value}' is not recognized",
            errno=100035,
            sqlstate="22007",
        ) from None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _invalid_value(parameter: str, value: str) -> snowflake.connector.errors.ProgrammingError:
    return snowflake.connector.errors.ProgrammingError(
        msg=f"SQL compilation error:\ninvalid value [{value}] for parameter '{parameter}'",
        errno=1008,
        sqlstate="22023",
    )


def _does_not_exist(name: str) -> snowflake.connector.errors.ProgrammingError:
    return snowflake.connector.errors.ProgrammingError(
        msg=f"SQL compilation error:\nResource monitor '{name}' does not exist or not authorized.",
        errno=2003,
        sqlstate="02000",
    )
