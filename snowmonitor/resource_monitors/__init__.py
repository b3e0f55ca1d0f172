from .options import (
    AlterResourceMonitorOptions,
    CreateResourceMonitorOptions,
    DropResourceMonitorOptions,
    ResourceMonitorSet,
    ShowResourceMonitorOptions,
)
from .row import ResourceMonitorRow, extract_triggers, extract_users, format_trigger_column
from .service import ResourceMonitors
from .types import Frequency, NotifiedUser, NotifyUsers, ResourceMonitor, TriggerAction, TriggerDefinition

__all__ = [
    "AlterResourceMonitorOptions",
    "CreateResourceMonitorOptions",
    "DropResourceMonitorOptions",
    "Frequency",
    "NotifiedUser",
    "NotifyUsers",
    "ResourceMonitor",
    "ResourceMonitorRow",
    "ResourceMonitorSet",
    "ResourceMonitors",
    "ShowResourceMonitorOptions",
    "TriggerAction",
    "TriggerDefinition",
    "extract_triggers",
    "extract_users",
    "format_trigger_column",
]
