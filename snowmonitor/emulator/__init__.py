from .catalog import ResourceMonitorCatalog
from .connection import Connection
from .connector import Connector
from .cursor import Cursor

__all__ = [
    "Connection",
    "Connector",
    "Cursor",
    "ResourceMonitorCatalog",
]
