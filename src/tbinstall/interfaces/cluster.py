"""Interfaces for connecting to the Cassandra cluster."""

from __future__ import annotations

import abc
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from types import TracebackType

    from tbinstall.domain.consistency import ConsistencyLevelResolver
    from tbinstall.domain.value_objects import ClusterBootstrapConfig

# pylint: disable=too-few-public-methods

logger = logging.getLogger(__name__)


class ClusterSession:
    """A live cluster handle plus the session bound to the configured keyspace.

    Use it as a context manager; leaving the block shuts the cluster down.
    """

    def __init__(self, cluster: Any, session: Any, keyspace: str | None) -> None:
        self.cluster = cluster
        self.session = session
        self.keyspace = keyspace
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Shut the cluster (and with it the session) down. Safe to call twice."""
        if self._closed:
            return
        self._closed = True
        logger.debug("Shutting down cassandra cluster connection")
        self.cluster.shutdown()

    def __enter__(self) -> ClusterSession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class ClusterConnector(abc.ABC):
    """Builds a driver cluster from configuration and opens a keyspace session."""

    @abc.abstractmethod
    def connect(
        self,
        config: ClusterBootstrapConfig,
        consistency: ConsistencyLevelResolver,
    ) -> ClusterSession:
        """Make a single connection attempt.

        Implementations must release any partially built driver resources
        before raising.

        Raises:
            ConnectivityError: If the cluster cannot be reached or the session
                cannot be opened.
        """
