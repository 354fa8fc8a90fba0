"""Consistency levels and their configured defaults."""

from __future__ import annotations

from enum import Enum

from .errors import ConfigurationError


class ConsistencyLevel(Enum):
    """Consistency levels understood by Cassandra."""

    ANY = "ANY"
    ONE = "ONE"
    TWO = "TWO"
    THREE = "THREE"
    QUORUM = "QUORUM"
    ALL = "ALL"
    LOCAL_QUORUM = "LOCAL_QUORUM"
    EACH_QUORUM = "EACH_QUORUM"
    SERIAL = "SERIAL"
    LOCAL_SERIAL = "LOCAL_SERIAL"
    LOCAL_ONE = "LOCAL_ONE"

    @classmethod
    def from_name(cls, name: str) -> ConsistencyLevel:
        """Look up a level by name, ignoring case and surrounding whitespace.

        Raises:
            ConfigurationError: If the name is not a known consistency level.
        """
        try:
            return cls[name.strip().upper()]
        except KeyError as e:
            valid = ", ".join(level.name for level in cls)
            raise ConfigurationError(
                f"Unknown consistency level '{name}'. Valid levels: {valid}"
            ) from e


FALLBACK_CONSISTENCY_LEVEL = ConsistencyLevel.ONE


class ConsistencyLevelResolver:
    """Lazily resolves the default read and write consistency levels.

    Each level is computed on first use from the configured name and cached
    on the instance; later calls never look at the names again. Unset names
    fall back to `ConsistencyLevel.ONE`.
    """

    def __init__(
        self, read_level_name: str | None = None, write_level_name: str | None = None
    ) -> None:
        self._read_level_name = read_level_name
        self._write_level_name = write_level_name
        self._default_read: ConsistencyLevel | None = None
        self._default_write: ConsistencyLevel | None = None

    def default_read(self) -> ConsistencyLevel:
        """Return the default read consistency level."""
        if self._default_read is None:
            self._default_read = _resolve(self._read_level_name)
        return self._default_read

    def default_write(self) -> ConsistencyLevel:
        """Return the default write consistency level."""
        if self._default_write is None:
            self._default_write = _resolve(self._write_level_name)
        return self._default_write


def _resolve(name: str | None) -> ConsistencyLevel:
    if name is None or not name.strip():
        return FALLBACK_CONSISTENCY_LEVEL
    return ConsistencyLevel.from_name(name)
