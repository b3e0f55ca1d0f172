import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from ..common import Like
from ..ddl import struct_to_sql
from ..errors import NotFoundError, ValidationError
from ..identifiers import AccountObjectIdentifier
from .options import (
    AlterResourceMonitorOptions,
    CreateResourceMonitorOptions,
    DropResourceMonitorOptions,
    ShowResourceMonitorOptions,
)
from .row import ResourceMonitorRow
from .types import ResourceMonitor

if TYPE_CHECKING:
    from ..client import StatementExecutor

logger = logging.getLogger(__name__)


class ResourceMonitors:
    """Create, alter, drop and list resource monitors."""

    def __init__(self, client: "StatementExecutor") -> None:
        self._client = client

    def create(self, id: AccountObjectIdentifier, opts: CreateResourceMonitorOptions | None = None) -> None:
        opts = (opts or CreateResourceMonitorOptions()).for_identifier(id)
        self._validate(opts)
        self._client.exec(struct_to_sql(opts))

    def alter(self, id: AccountObjectIdentifier, opts: AlterResourceMonitorOptions | None = None) -> None:
        opts = replace(opts or AlterResourceMonitorOptions(), name=id)
        self._validate(opts)
        self._client.exec(struct_to_sql(opts))

    def drop(self, id: AccountObjectIdentifier) -> None:
        opts = DropResourceMonitorOptions(name=id)
        self._validate(opts)
        self._client.exec(struct_to_sql(opts))

    def show(self, opts: ShowResourceMonitorOptions | None = None) -> list[ResourceMonitor]:
        """
        List resource monitors.

        Every row is decoded before anything is returned; a single malformed
        row fails the whole call.
        """
        opts = opts or ShowResourceMonitorOptions()
        self._validate(opts)
        rows = self._client.query(struct_to_sql(opts))
        return [ResourceMonitorRow.from_mapping(row).to_resource_monitor() for row in rows]

    def show_by_id(self, id: AccountObjectIdentifier) -> ResourceMonitor:
        # LIKE matches case-insensitively and treats _ and % as wildcards,
        # so the result still has to be filtered for an exact name.
        resource_monitors = self.show(ShowResourceMonitorOptions(like=Like(pattern=id.name)))
        for resource_monitor in resource_monitors:
            if resource_monitor.name == id.name:
                return resource_monitor

        logger.debug("no resource monitor named %s among %d candidates", id.name, len(resource_monitors))
        raise NotFoundError(f"resource monitor {id.fully_qualified_name()} does not exist or not authorized")

    @staticmethod
    def _validate(opts) -> None:
        try:
            opts.validate()
        except ValidationError as e:
            logger.debug("rejected %s: %s", type(opts).__name__, e)
            raise
