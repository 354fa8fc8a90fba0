"""Configuration utilities for tb-install.

This module centralizes the property keys the tool reads, the built-in
default properties (the lowest-precedence ``defaultProperties`` source) and
the helpers that turn a resolved `Environment` into the value objects used by
the cluster bootstrap.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from cassandra import connection as driver_connection

from tbinstall.domain.errors import ConfigurationError
from tbinstall.domain.value_objects import (
    ClusterBootstrapConfig,
    ContactPoint,
    InstallPaths,
    QuerySettings,
    SocketSettings,
)

if TYPE_CHECKING:
    from tbinstall.service_layer.environment import Environment

THINGSBOARD_CONFIG_FILE_NAME = "thingsboard"
CONFIG_NAME_PROPERTY = "spring.config.name"
CONFIG_LOCATION_PROPERTY = "spring.config.location"
DATA_DIR_PROPERTY = "thingsboard.data.dir"

CLUSTER_NAME_KEY = "cassandra.cluster_name"
KEYSPACE_NAME_KEY = "cassandra.keyspace_name"
URL_KEY = "cassandra.url"
COMPRESSION_KEY = "cassandra.compression"
SSL_KEY = "cassandra.ssl"
JMX_KEY = "cassandra.jmx"
METRICS_KEY = "cassandra.metrics"
CREDENTIALS_KEY = "cassandra.credentials"
USERNAME_KEY = "cassandra.username"
PASSWORD_KEY = "cassandra.password"
INIT_TIMEOUT_KEY = "cassandra.init_timeout_ms"
INIT_RETRY_INTERVAL_KEY = "cassandra.init_retry_interval_ms"

SOCKET_CONNECT_TIMEOUT_KEY = "cassandra.socket.connect_timeout"
SOCKET_READ_TIMEOUT_KEY = "cassandra.socket.read_timeout"
SOCKET_KEEP_ALIVE_KEY = "cassandra.socket.keep_alive"
SOCKET_REUSE_ADDRESS_KEY = "cassandra.socket.reuse_address"
SOCKET_SO_LINGER_KEY = "cassandra.socket.so_linger"
SOCKET_TCP_NO_DELAY_KEY = "cassandra.socket.tcp_no_delay"
SOCKET_RECEIVE_BUFFER_SIZE_KEY = "cassandra.socket.receive_buffer_size"
SOCKET_SEND_BUFFER_SIZE_KEY = "cassandra.socket.send_buffer_size"

QUERY_DEFAULT_FETCH_SIZE_KEY = "cassandra.query.default_fetch_size"
QUERY_READ_CONSISTENCY_LEVEL_KEY = "cassandra.query.read_consistency_level"
QUERY_WRITE_CONSISTENCY_LEVEL_KEY = "cassandra.query.write_consistency_level"

COMPRESSION_NONE = "none"
SUPPORTED_COMPRESSIONS = ("lz4", "snappy")
# distributions the driver needs installed to use each codec
COMPRESSION_PACKAGES = {"lz4": "lz4", "snappy": "python-snappy"}

DEFAULT_PROPERTIES: dict[str, object] = {
    CLUSTER_NAME_KEY: "Thingsboard Cluster",
    KEYSPACE_NAME_KEY: "thingsboard",
    URL_KEY: "127.0.0.1:9042",
    COMPRESSION_KEY: COMPRESSION_NONE,
    SSL_KEY: False,
    JMX_KEY: False,
    METRICS_KEY: True,
    CREDENTIALS_KEY: False,
    INIT_TIMEOUT_KEY: 300000,
    INIT_RETRY_INTERVAL_KEY: 3000,
    SOCKET_CONNECT_TIMEOUT_KEY: 5000,
    SOCKET_READ_TIMEOUT_KEY: 20000,
    QUERY_DEFAULT_FETCH_SIZE_KEY: 2000,
}


def build_cluster_config(environment: Environment) -> ClusterBootstrapConfig:
    """Build the cluster bootstrap configuration from the resolved environment.

    Raises:
        ConfigurationError: If a contact point is malformed, a required numeric
            property is missing, a value has the wrong type, or the compression
            is not supported.
    """
    return ClusterBootstrapConfig(
        cluster_name=environment.get_str(CLUSTER_NAME_KEY),
        keyspace_name=environment.get_str(KEYSPACE_NAME_KEY),
        contact_points=tuple(ContactPoint.parse_list(environment.get_str(URL_KEY))),
        socket=build_socket_settings(environment),
        query=QuerySettings(
            default_fetch_size=environment.get_int(QUERY_DEFAULT_FETCH_SIZE_KEY)
        ),
        compression=_compression(environment),
        ssl=bool(environment.get_bool(SSL_KEY, False)),
        jmx=bool(environment.get_bool(JMX_KEY, False)),
        metrics=bool(environment.get_bool(METRICS_KEY, True)),
        credentials=bool(environment.get_bool(CREDENTIALS_KEY, False)),
        username=environment.get_str(USERNAME_KEY),
        password=environment.get_str(PASSWORD_KEY),
        init_timeout_ms=_required_int(environment, INIT_TIMEOUT_KEY),
        init_retry_interval_ms=_required_int(environment, INIT_RETRY_INTERVAL_KEY),
        read_consistency_level=environment.get_str(QUERY_READ_CONSISTENCY_LEVEL_KEY),
        write_consistency_level=environment.get_str(QUERY_WRITE_CONSISTENCY_LEVEL_KEY),
    )


def build_socket_settings(environment: Environment) -> SocketSettings:
    """Read the ``cassandra.socket.*`` options; unset optional values stay None."""
    return SocketSettings(
        connect_timeout_ms=_required_int(environment, SOCKET_CONNECT_TIMEOUT_KEY),
        read_timeout_ms=_required_int(environment, SOCKET_READ_TIMEOUT_KEY),
        keep_alive=environment.get_bool(SOCKET_KEEP_ALIVE_KEY),
        reuse_address=environment.get_bool(SOCKET_REUSE_ADDRESS_KEY),
        so_linger=environment.get_int(SOCKET_SO_LINGER_KEY),
        tcp_no_delay=environment.get_bool(SOCKET_TCP_NO_DELAY_KEY),
        receive_buffer_size=environment.get_int(SOCKET_RECEIVE_BUFFER_SIZE_KEY),
        send_buffer_size=environment.get_int(SOCKET_SEND_BUFFER_SIZE_KEY),
    )


def build_install_paths(environment: Environment) -> InstallPaths:
    """Return the installer data directories below ``thingsboard.data.dir``."""
    data_dir = environment.get_required_property(DATA_DIR_PROPERTY)
    return InstallPaths(data_dir=Path(str(data_dir)).expanduser())


def _required_int(environment: Environment, key: str) -> int:
    value = environment.get_int(key)
    if value is None:
        raise ConfigurationError(f"'{key}' property should be specified!")
    return value


def _compression(environment: Environment) -> str | None:
    value = environment.get_str(COMPRESSION_KEY)
    if value is None or not value.strip() or value.strip().lower() == COMPRESSION_NONE:
        return None
    name = value.strip().lower()
    if name not in SUPPORTED_COMPRESSIONS:
        raise ConfigurationError(
            f"Unsupported cassandra compression '{value}'. "
            f"Valid values: {COMPRESSION_NONE}, {', '.join(SUPPORTED_COMPRESSIONS)}"
        )
    if name not in driver_connection.locally_supported_compressions:
        raise ConfigurationError(
            f"Cassandra compression '{name}' is not available: install the "
            f"'{COMPRESSION_PACKAGES[name]}' package or set {COMPRESSION_KEY}={COMPRESSION_NONE}"
        )
    return name
