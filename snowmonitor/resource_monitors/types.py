from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from ..ddl import keyword, list_of, static
from ..errors import InvalidEnumError
from ..identifiers import AccountObjectIdentifier, ObjectType


class Frequency(str, Enum):
    MONTHLY = "MONTHLY"
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    YEARLY = "YEARLY"
    NEVER = "NEVER"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, value: str) -> "Frequency":
        """Case-insensitive lookup; raises InvalidEnumError for unknown values."""
        try:
            return _FREQUENCIES[value.upper()]
        except KeyError:
            raise InvalidEnumError("frequency", value) from None


_FREQUENCIES = {frequency.value: frequency for frequency in Frequency}


class TriggerAction(str, Enum):
    SUSPEND = "SUSPEND"
    SUSPEND_IMMEDIATE = "SUSPEND_IMMEDIATE"
    NOTIFY = "NOTIFY"

    def __str__(self) -> str:
        return self.value


@dataclass(kw_only=True)
class TriggerDefinition:
    _on: None = static("ON")
    threshold: int = keyword(default=0)
    _percent: None = static("PERCENT")
    _do: None = static("DO")
    trigger_action: TriggerAction = keyword(default=TriggerAction.NOTIFY)


@dataclass(kw_only=True)
class NotifiedUser:
    name: str = keyword(modifiers=("double_quotes",), default="")


@dataclass(kw_only=True)
class NotifyUsers:
    users: list[NotifiedUser] = list_of(modifiers=("parentheses", "comma"))

    @classmethod
    def of(cls, *names: str) -> "NotifyUsers":
        return cls(users=[NotifiedUser(name=name) for name in names])


@dataclass(frozen=True, kw_only=True)
class ResourceMonitor:
    name: str
    credit_quota: Decimal | None = None
    frequency: Frequency | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    suspend_triggers: tuple[TriggerDefinition, ...] = ()
    suspend_immediate_triggers: tuple[TriggerDefinition, ...] = ()
    notify_triggers: tuple[TriggerDefinition, ...] = ()
    set_for_account: bool = False
    comment: str | None = None
    notify_users: tuple[str, ...] = ()

    def id(self) -> AccountObjectIdentifier:
        return AccountObjectIdentifier(self.name)

    def object_type(self) -> ObjectType:
        return ObjectType.RESOURCE_MONITOR
