from dataclasses import dataclass, fields
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping

from ..errors import DecodeError
from .types import Frequency, ResourceMonitor, TriggerAction, TriggerDefinition

TRIGGER_SUFFIX = "%"
NOTIFY_USERS_SEPARATOR = ", "
ACCOUNT_LEVEL = "ACCOUNT"


@dataclass(kw_only=True)
class ResourceMonitorRow:
    """A row of SHOW RESOURCE MONITORS output, before any decoding."""

    name: str
    credit_quota: Any = None
    used_credits: Any = None
    remaining_credits: Any = None
    level: str | None = None
    frequency: str | None = None
    start_time: Any = None
    end_time: Any = None
    notify_at: str | None = None
    suspend_at: str | None = None
    suspend_immediately_at: str | None = None
    owner: str | None = None
    comment: str | None = None
    notify_users: str | None = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "ResourceMonitorRow":
        known = {f.name for f in fields(cls)}
        values = {str(key).lower(): value for key, value in row.items()}
        if values.get("name") is None:
            raise DecodeError("resource monitor row has no name column")
        return cls(**{key: value for key, value in values.items() if key in known})

    def to_resource_monitor(self) -> ResourceMonitor:
        return ResourceMonitor(
            name=self.name,
            credit_quota=_decode_decimal(self.credit_quota, "credit_quota"),
            frequency=Frequency.from_string(self.frequency) if self.frequency is not None else None,
            start_time=_decode_timestamp(self.start_time, "start_time"),
            end_time=_decode_timestamp(self.end_time, "end_time"),
            suspend_triggers=tuple(extract_triggers(self.suspend_at, TriggerAction.SUSPEND)),
            suspend_immediate_triggers=tuple(
                extract_triggers(self.suspend_immediately_at, TriggerAction.SUSPEND_IMMEDIATE)
            ),
            notify_triggers=tuple(extract_triggers(self.notify_at, TriggerAction.NOTIFY)),
            set_for_account=self.level == ACCOUNT_LEVEL,
            comment=self.comment,
            notify_users=tuple(extract_users(self.notify_users)),
        )


def extract_triggers(value: str | None, action: TriggerAction) -> list[TriggerDefinition]:
    """
    Decode a trigger column such as ``"50%,100%"``.

    Each of the three trigger columns holds the thresholds of one action only,
    so every decoded trigger is tagged with ``action``.
    """
    if not value:
        return []

    triggers = []
    for token in value.split(","):
        token = token.strip()
        if not token.endswith(TRIGGER_SUFFIX):
            raise DecodeError(f"failed to convert {token!r} to a trigger threshold")
        try:
            threshold = int(token[: -len(TRIGGER_SUFFIX)])
        except ValueError:
            raise DecodeError(f"failed to convert {token!r} to a trigger threshold") from None
        if threshold < 0:
            raise DecodeError(f"negative trigger threshold {token!r}")
        triggers.append(TriggerDefinition(threshold=threshold, trigger_action=action))
    return triggers


def format_trigger_column(triggers: Iterable[TriggerDefinition], action: TriggerAction) -> str | None:
    thresholds = [f"{t.threshold}{TRIGGER_SUFFIX}" for t in triggers if t.trigger_action == action]
    return ",".join(thresholds) if thresholds else None


def extract_users(value: str | None) -> list[str]:
    if not value:
        return []
    return value.split(NOTIFY_USERS_SEPARATOR)


def _decode_decimal(value: Any, column: str) -> Decimal | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise DecodeError(f"{column} is not numeric: {value!r}")
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        raise DecodeError(f"{column} is not numeric: {value!r}") from None
    if not number.is_finite():
        raise DecodeError(f"{column} is not numeric: {value!r}")
    return number


def _decode_timestamp(value: Any, column: str) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            raise DecodeError(f"{column} is not a timestamp: {value!r}") from None
    raise DecodeError(f"{column} is not a timestamp: {value!r}")
