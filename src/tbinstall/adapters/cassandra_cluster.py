"""Cassandra driver adapter for the cluster bootstrap.

Translates a `ClusterBootstrapConfig` into a DataStax ``cassandra-driver``
`Cluster` and opens a session on the configured keyspace:

- contact points → ``DefaultEndPoint(host, port)``;
- ``connect_timeout`` → ``Cluster(connect_timeout=...)``, ``read_timeout`` →
  the request timeout of the execution profiles;
- keep-alive, reuse-address, linger, no-delay and buffer sizes → ``sockopts``,
  only for the options that are set;
- default read/write consistency → the default and ``write`` execution
  profiles;
- compression, TLS, client metrics and plain-text credentials as configured.

The driver has no JMX reporter; a ``cassandra.jmx=true`` setting is only
logged.
"""

from __future__ import annotations

import logging
import socket
import ssl
import struct
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from cassandra import ConsistencyLevel as DriverConsistencyLevel
from cassandra import UnsupportedOperation
from cassandra.auth import PlainTextAuthProvider
from cassandra.cluster import EXEC_PROFILE_DEFAULT, Cluster, ExecutionProfile
from cassandra.connection import DefaultEndPoint
from cassandra.policies import HostDistance

from tbinstall.domain.errors import ConnectivityError
from tbinstall.interfaces.cluster import ClusterConnector, ClusterSession

if TYPE_CHECKING:
    from tbinstall.domain.consistency import ConsistencyLevel, ConsistencyLevelResolver
    from tbinstall.domain.value_objects import ClusterBootstrapConfig, SocketSettings

logger = logging.getLogger(__name__)

EXEC_PROFILE_WRITE = "write"
MAX_REQUESTS_PER_CONNECTION = 32768
MS_PER_SECOND = 1000.0


class CassandraClusterConnector(ClusterConnector):
    """Connects to Cassandra with the DataStax Python driver.

    Args:
        cluster_factory: Callable building the driver cluster from keyword
            arguments; defaults to `cassandra.cluster.Cluster`.
        ssl_context_factory: Builds the TLS context when ``ssl`` is enabled.
    """

    def __init__(
        self,
        cluster_factory: Callable[..., Any] = Cluster,
        ssl_context_factory: Callable[[], ssl.SSLContext] = ssl.create_default_context,
    ) -> None:
        self._cluster_factory = cluster_factory
        self._ssl_context_factory = ssl_context_factory

    def connect(
        self,
        config: ClusterBootstrapConfig,
        consistency: ConsistencyLevelResolver,
    ) -> ClusterSession:
        cluster = None
        try:
            cluster = self._cluster_factory(**self.cluster_options(config, consistency))
            _apply_pooling(cluster)
            session = cluster.connect(config.keyspace_name)
            if config.query.default_fetch_size is not None:
                session.default_fetch_size = config.query.default_fetch_size
            _check_cluster_name(cluster, config.cluster_name)
        except Exception as e:  # pylint: disable=broad-except
            if cluster is not None:
                _shutdown_quietly(cluster)
            raise ConnectivityError(str(e) or type(e).__name__) from e
        return ClusterSession(cluster, session, config.keyspace_name)

    def cluster_options(
        self,
        config: ClusterBootstrapConfig,
        consistency: ConsistencyLevelResolver,
    ) -> dict[str, Any]:
        """Return the keyword arguments used to build the driver `Cluster`."""
        request_timeout = config.socket.read_timeout_ms / MS_PER_SECOND
        options: dict[str, Any] = {
            "contact_points": [
                DefaultEndPoint(point.host, point.port) for point in config.contact_points
            ],
            "connect_timeout": config.socket.connect_timeout_ms / MS_PER_SECOND,
            "sockopts": socket_options(config.socket),
            "execution_profiles": {
                EXEC_PROFILE_DEFAULT: ExecutionProfile(
                    request_timeout=request_timeout,
                    consistency_level=driver_consistency(consistency.default_read()),
                ),
                EXEC_PROFILE_WRITE: ExecutionProfile(
                    request_timeout=request_timeout,
                    consistency_level=driver_consistency(consistency.default_write()),
                ),
            },
            "compression": config.compression or False,
            "metrics_enabled": config.metrics,
        }
        if config.ssl:
            options["ssl_context"] = self._ssl_context_factory()
        if config.jmx:
            logger.debug("JMX reporting is not available with the Python driver, ignoring")
        if config.credentials:
            options["auth_provider"] = PlainTextAuthProvider(
                username=config.username, password=config.password
            )
        return options


def socket_options(settings: SocketSettings) -> list[tuple[int, int, Any]]:
    """Return ``setsockopt`` arguments for the socket options that are set."""
    options: list[tuple[int, int, Any]] = []
    if settings.keep_alive is not None:
        options.append((socket.SOL_SOCKET, socket.SO_KEEPALIVE, int(settings.keep_alive)))
    if settings.reuse_address is not None:
        options.append(
            (socket.SOL_SOCKET, socket.SO_REUSEADDR, int(settings.reuse_address))
        )
    if settings.so_linger is not None:
        # a negative linger disables SO_LINGER
        enabled = settings.so_linger >= 0
        linger = struct.pack("ii", int(enabled), max(settings.so_linger, 0))
        options.append((socket.SOL_SOCKET, socket.SO_LINGER, linger))
    if settings.tcp_no_delay is not None:
        options.append((socket.IPPROTO_TCP, socket.TCP_NODELAY, int(settings.tcp_no_delay)))
    if settings.receive_buffer_size is not None:
        options.append((socket.SOL_SOCKET, socket.SO_RCVBUF, settings.receive_buffer_size))
    if settings.send_buffer_size is not None:
        options.append((socket.SOL_SOCKET, socket.SO_SNDBUF, settings.send_buffer_size))
    return options


def driver_consistency(level: ConsistencyLevel) -> int:
    """Map a domain consistency level to the driver's constant."""
    return DriverConsistencyLevel.name_to_value[level.name]


def _apply_pooling(cluster: Any) -> None:
    for distance in (HostDistance.LOCAL, HostDistance.REMOTE):
        try:
            cluster.set_max_requests_per_connection(distance, MAX_REQUESTS_PER_CONNECTION)
        except UnsupportedOperation:
            # protocol v3+ already allows 32768 in-flight requests per connection
            logger.debug("Per-connection request cap is fixed by the protocol version")
            return


def _check_cluster_name(cluster: Any, expected: str | None) -> None:
    actual = getattr(cluster.metadata, "cluster_name", None)
    if expected and actual and actual != expected:
        logger.warning(
            "Connected to cassandra cluster '%s' but '%s' is configured", actual, expected
        )
    else:
        logger.debug("Connected to cassandra cluster '%s'", actual or expected)


def _shutdown_quietly(cluster: Any) -> None:
    try:
        cluster.shutdown()
    except Exception:  # pylint: disable=broad-except
        logger.debug("Failed to shut down partially built cluster", exc_info=True)
