from dataclasses import dataclass, replace

from ..common import Like
from ..ddl import identifier, keyword, parameter, static
from ..errors import InvalidObjectIdentifierError, ValidationError
from ..identifiers import AccountObjectIdentifier, valid_object_identifier
from .types import Frequency, NotifyUsers, TriggerDefinition


@dataclass(kw_only=True)
class CreateResourceMonitorOptions:
    _create: None = static("CREATE")
    or_replace: bool | None = keyword("OR REPLACE")
    _resource_monitor: None = static("RESOURCE MONITOR")
    name: AccountObjectIdentifier | None = identifier()
    # Always rendered; for_identifier() records whether any parameter follows it.
    _with: bool | None = static("WITH")

    # optional, at least one
    credit_quota: int | None = parameter("CREDIT_QUOTA")
    frequency: Frequency | None = parameter("FREQUENCY")
    start_timestamp: str | None = parameter("START_TIMESTAMP", modifiers=("equals", "single_quotes"))
    end_timestamp: str | None = parameter("END_TIMESTAMP", modifiers=("equals", "single_quotes"))
    notify_users: NotifyUsers | None = parameter("NOTIFY_USERS")
    triggers: list[TriggerDefinition] | None = keyword("TRIGGERS", modifiers=("no_comma",))

    def has_optional_parameters(self) -> bool:
        return any(
            value is not None
            for value in (
                self.credit_quota,
                self.frequency,
                self.start_timestamp,
                self.end_timestamp,
                self.notify_users,
                self.triggers,
            )
        )

    def for_identifier(self, id: AccountObjectIdentifier) -> "CreateResourceMonitorOptions":
        if self.has_optional_parameters():
            opts = replace(self, name=id)
            opts._with = True
        else:
            opts = CreateResourceMonitorOptions(or_replace=self.or_replace, name=id)
            opts._with = False
        return opts

    def validate(self) -> None:
        if not valid_object_identifier(self.name):
            raise InvalidObjectIdentifierError(self.name)


@dataclass(kw_only=True)
class ResourceMonitorSet:
    # at least one
    credit_quota: int | None = parameter("CREDIT_QUOTA")
    frequency: Frequency | None = parameter("FREQUENCY")
    start_timestamp: str | None = parameter("START_TIMESTAMP", modifiers=("equals", "single_quotes"))
    end_timestamp: str | None = parameter("END_TIMESTAMP", modifiers=("equals", "single_quotes"))


@dataclass(kw_only=True)
class AlterResourceMonitorOptions:
    _alter: None = static("ALTER")
    _resource_monitor: None = static("RESOURCE MONITOR")
    if_exists: bool | None = keyword("IF EXISTS")
    name: AccountObjectIdentifier | None = identifier()
    set: ResourceMonitorSet | None = keyword("SET")
    notify_users: NotifyUsers | None = parameter("NOTIFY_USERS")
    triggers: list[TriggerDefinition] | None = keyword("TRIGGERS", modifiers=("no_comma",))

    def validate(self) -> None:
        if not valid_object_identifier(self.name):
            raise InvalidObjectIdentifierError(self.name)
        if self.set is None:
            return
        if (self.set.frequency is None) != (self.set.start_timestamp is None):
            raise ValidationError("must specify frequency and start time together")


@dataclass(kw_only=True)
class DropResourceMonitorOptions:
    _drop: None = static("DROP")
    _resource_monitor: None = static("RESOURCE MONITOR")
    name: AccountObjectIdentifier | None = identifier()

    def validate(self) -> None:
        if not valid_object_identifier(self.name):
            raise InvalidObjectIdentifierError(self.name)


@dataclass(kw_only=True)
class ShowResourceMonitorOptions:
    _show: None = static("SHOW")
    _resource_monitors: None = static("RESOURCE MONITORS")
    like: Like | None = keyword("LIKE")

    def validate(self) -> None:
        return None
