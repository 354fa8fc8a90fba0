"""Value objects describing how to reach the Cassandra cluster."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConfigurationError

CONTACT_POINT_SEPARATOR = ","
HOST_PORT_SEPARATOR = ":"
MAX_PORT = 65535


@dataclass(frozen=True)
class ContactPoint:
    """Network address of one node of the Cassandra cluster."""

    host: str
    port: int

    @classmethod
    def parse(cls, host_port: str) -> ContactPoint:
        """Parse a single ``host:port`` entry.

        Raises:
            ConfigurationError: If the entry does not split into a non-empty host
                and a numeric port in the range 1-65535.
        """
        parts = host_port.strip().split(HOST_PORT_SEPARATOR)
        if len(parts) != 2 or not parts[0].strip():
            raise ConfigurationError(
                f"Invalid cassandra contact point '{host_port}', expected host:port"
            )
        host, port_text = parts[0].strip(), parts[1].strip()
        if not port_text.isdigit() or not 0 < int(port_text) <= MAX_PORT:
            raise ConfigurationError(
                f"Invalid port '{port_text}' in cassandra contact point '{host_port}'"
            )
        return cls(host=host, port=int(port_text))

    @classmethod
    def parse_list(cls, url: str | None) -> list[ContactPoint]:
        """Parse a comma-separated ``host:port`` list, keeping input order.

        A blank or missing url yields an empty list.
        """
        if url is None or not url.strip():
            return []
        return [cls.parse(entry) for entry in url.split(CONTACT_POINT_SEPARATOR)]

    def __str__(self) -> str:
        return f"{self.host}{HOST_PORT_SEPARATOR}{self.port}"


@dataclass(frozen=True)
class SocketSettings:
    """Socket options for driver connections.

    Timeouts are always applied. Every other option is left at the driver
    default while it is None.
    """

    connect_timeout_ms: int
    read_timeout_ms: int
    keep_alive: bool | None = None
    reuse_address: bool | None = None
    so_linger: int | None = None
    tcp_no_delay: bool | None = None
    receive_buffer_size: int | None = None
    send_buffer_size: int | None = None


@dataclass(frozen=True)
class QuerySettings:
    """Query options applied to the session."""

    default_fetch_size: int | None = None


@dataclass(frozen=True)
class ClusterBootstrapConfig:  # pylint: disable=too-many-instance-attributes
    """Everything needed to open a session against the Cassandra cluster."""

    cluster_name: str | None
    keyspace_name: str | None
    contact_points: tuple[ContactPoint, ...]
    socket: SocketSettings
    query: QuerySettings = field(default_factory=QuerySettings)
    compression: str | None = None
    ssl: bool = False
    jmx: bool = False
    metrics: bool = True
    credentials: bool = False
    username: str | None = None
    password: str | None = field(default=None, repr=False)
    init_timeout_ms: int = 0
    init_retry_interval_ms: int = 0
    read_consistency_level: str | None = None
    write_consistency_level: str | None = None


@dataclass(frozen=True)
class InstallPaths:
    """Directories the installer reads its data files from."""

    data_dir: Path

    @property
    def json_dir(self) -> Path:
        return self.data_dir / "json"

    @property
    def system_json_dir(self) -> Path:
        return self.json_dir / "system"
