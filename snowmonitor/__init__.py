import logging

from .client import Client
from .common import Like
from .config import ClientConfig
from .decorators import mock_snowflake
from .errors import (
    DecodeError,
    InvalidEnumError,
    InvalidObjectIdentifierError,
    NotFoundError,
    RenderError,
    SnowmonitorError,
    TransportError,
    ValidationError,
)
from .identifiers import AccountObjectIdentifier, ObjectType, valid_object_identifier
from .patch import patch_snowflake, start_patch_snowflake, stop_patch_snowflake
from .resource_monitors import (
    AlterResourceMonitorOptions,
    CreateResourceMonitorOptions,
    Frequency,
    NotifiedUser,
    NotifyUsers,
    ResourceMonitor,
    ResourceMonitors,
    ResourceMonitorSet,
    ShowResourceMonitorOptions,
    TriggerAction,
    TriggerDefinition,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())


# Lazy import for seeding (requires pandas)
def __getattr__(name: str):
    if name == "seed_resource_monitors":
        from .seeding import seed_resource_monitors
        return seed_resource_monitors
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "AccountObjectIdentifier",
    "AlterResourceMonitorOptions",
    "Client",
    "ClientConfig",
    "CreateResourceMonitorOptions",
    "DecodeError",
    "Frequency",
    "InvalidEnumError",
    "InvalidObjectIdentifierError",
    "Like",
    "NotFoundError",
    "NotifiedUser",
    "NotifyUsers",
    "ObjectType",
    "RenderError",
    "ResourceMonitor",
    "ResourceMonitorSet",
    "ResourceMonitors",
    "ShowResourceMonitorOptions",
    "SnowmonitorError",
    "TransportError",
    "TriggerAction",
    "TriggerDefinition",
    "ValidationError",
    "mock_snowflake",
    "patch_snowflake",
    "seed_resource_monitors",
    "start_patch_snowflake",
    "stop_patch_snowflake",
    "valid_object_identifier",
]
