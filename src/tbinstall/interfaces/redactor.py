"""Interfaces for redacting sensitive configuration values.

This module defines the Redactor interface and the RedactorMode enumeration
used by adapters to hide secrets (passwords, tokens, keys) before
configuration values are logged or shown to the operator. Implementations
decide from the property key whether its value must be masked.
"""

import abc
from collections.abc import Mapping
from enum import Enum
from typing import Any

# pylint: disable=too-few-public-methods


class RedactorMode(Enum):
    """Enumeration for redactor modes.

    Modes:
    - LENIENT: redact passwords/tokens but keep usernames visible.
    - STRICT: redact passwords/tokens and also usernames.
    """

    LENIENT = "lenient"
    STRICT = "strict"


class Redactor(abc.ABC):
    """Interface for sanitizing sensitive configuration values."""

    _mode: RedactorMode

    @abc.abstractmethod
    def sanitize_property(self, key: str, value: Any) -> Any:
        """Return a display-safe value for the property ``key``.

        Args:
            key: Dot-separated property key, e.g. ``cassandra.password``.
            value: Raw property value.

        Returns:
            The value unchanged, or a placeholder if the key names a secret.
        """

    def sanitize_properties(self, properties: Mapping[str, Any]) -> dict[str, Any]:
        """Return a copy of ``properties`` with every secret value masked."""
        return {
            key: self.sanitize_property(key, value) for key, value in properties.items()
        }

    @property
    def mode(self) -> RedactorMode:
        """Return the redaction mode."""
        return self._mode
