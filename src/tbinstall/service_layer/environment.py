"""The resolved configuration: ordered property sources plus typed lookups.

`Environment.get_property` returns the value of the first source (in
precedence order) that defines the key. String values may reference other
properties with ``${key}`` or ``${key:default}`` placeholders; these are
resolved against the whole environment at lookup time.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from tbinstall.domain.errors import ConfigurationError
from tbinstall.interfaces.property_source import MutablePropertySources, PropertySource

logger = logging.getLogger(__name__)

PLACEHOLDER_PREFIX = "${"
PLACEHOLDER_SUFFIX = "}"
VALUE_SEPARATOR = ":"

TRUE_VALUES = frozenset({"true", "on", "yes", "1"})
FALSE_VALUES = frozenset({"false", "off", "no", "0"})


class Environment:
    """Queryable view over an ordered set of property sources."""

    def __init__(self, property_sources: Iterable[PropertySource] = ()) -> None:
        if isinstance(property_sources, MutablePropertySources):
            self._property_sources = property_sources
        else:
            self._property_sources = MutablePropertySources(property_sources)

    @property
    def property_sources(self) -> MutablePropertySources:
        return self._property_sources

    def contains_property(self, key: str) -> bool:
        return any(source.contains_property(key) for source in self._property_sources)

    def get_property(self, key: str, default: Any = None) -> Any:
        """Return the resolved value for ``key``, or ``default`` if no source has it.

        Raises:
            ConfigurationError: If the value contains a placeholder that cannot be
                resolved, or placeholders reference each other in a cycle.
        """
        return self._get_property(key, default, frozenset())

    def get_raw_property(self, key: str) -> Any:
        """Return the value for ``key`` as stored, placeholders unresolved."""
        for source in self._property_sources:
            value = source.get_property(key)
            if value is not None:
                return value
        return None

    def get_required_property(self, key: str) -> Any:
        """Return the value for ``key``.

        Raises:
            ConfigurationError: If no source defines ``key``.
        """
        value = self.get_property(key)
        if value is None:
            raise ConfigurationError(f"'{key}' property should be specified!")
        return value

    def get_str(self, key: str, default: str | None = None) -> str | None:
        value = self.get_property(key)
        return default if value is None else str(value)

    def get_bool(self, key: str, default: bool | None = None) -> bool | None:
        """Return ``key`` converted to a bool.

        Accepts ``true/false``, ``yes/no``, ``on/off`` and ``1/0`` in any case.
        A blank value counts as unset.

        Raises:
            ConfigurationError: If the value is not a recognised boolean.
        """
        value = self.get_property(key)
        if isinstance(value, bool):
            return value
        if value is None or not str(value).strip():
            return default
        text = str(value).strip().lower()
        if text in TRUE_VALUES:
            return True
        if text in FALSE_VALUES:
            return False
        raise ConfigurationError(f"'{key}' property value '{value}' is not a boolean")

    def get_int(self, key: str, default: int | None = None) -> int | None:
        """Return ``key`` converted to an int. A blank value counts as unset.

        Raises:
            ConfigurationError: If the value is not an integer.
        """
        value = self.get_property(key)
        if isinstance(value, bool):
            raise ConfigurationError(f"'{key}' property value '{value}' is not an integer")
        if isinstance(value, int):
            return value
        if value is None or not str(value).strip():
            return default
        try:
            return int(str(value).strip())
        except ValueError as e:
            raise ConfigurationError(
                f"'{key}' property value '{value}' is not an integer"
            ) from e

    def resolve_placeholders(self, text: str, strict: bool = True) -> str:
        """Replace ``${key}``/``${key:default}`` placeholders in ``text``.

        Args:
            text: Text that may contain placeholders.
            strict: When False, placeholders that cannot be resolved are left
                untouched instead of raising.

        Raises:
            ConfigurationError: In strict mode, if a placeholder cannot be resolved.
        """
        return self._resolve(text, frozenset(), strict)

    def _get_property(self, key: str, default: Any, visiting: frozenset[str]) -> Any:
        for source in self._property_sources:
            value = source.get_property(key)
            if value is not None:
                logger.debug(
                    "Found key '%s' in property source '%s'", key, source.name
                )
                if isinstance(value, str):
                    return self._resolve(value, visiting | {key}, strict=True)
                return value
        return default

    def _resolve(self, text: str, visiting: frozenset[str], strict: bool) -> str:
        start = text.find(PLACEHOLDER_PREFIX)
        if start == -1:
            return text
        result: list[str] = []
        cursor = 0
        while start != -1:
            end = _find_placeholder_end(text, start)
            if end == -1:
                break
            result.append(text[cursor:start])
            content = text[start + len(PLACEHOLDER_PREFIX) : end]
            result.append(self._resolve_placeholder(text, content, visiting, strict))
            cursor = end + len(PLACEHOLDER_SUFFIX)
            start = text.find(PLACEHOLDER_PREFIX, cursor)
        result.append(text[cursor:])
        return "".join(result)

    def _resolve_placeholder(
        self, text: str, content: str, visiting: frozenset[str], strict: bool
    ) -> str:
        # the key itself may be built from placeholders, e.g. ${${env}.url}
        key_and_default = self._resolve(content, visiting, strict)
        key, sep, default = _split_default(key_and_default)
        if key in visiting:
            raise ConfigurationError(
                f"Circular placeholder reference '{key}' in property value '{text}'"
            )
        value = self._get_property(key, None, visiting)
        if value is not None:
            return str(value)
        if sep:
            return default
        if strict:
            raise ConfigurationError(
                f"Could not resolve placeholder '{key}' in value '{text}'"
            )
        return f"{PLACEHOLDER_PREFIX}{content}{PLACEHOLDER_SUFFIX}"


def _find_placeholder_end(text: str, start: int) -> int:
    index = start + len(PLACEHOLDER_PREFIX)
    depth = 0
    while index < len(text):
        if text.startswith(PLACEHOLDER_PREFIX, index):
            depth += 1
            index += len(PLACEHOLDER_PREFIX)
        elif text.startswith(PLACEHOLDER_SUFFIX, index):
            if depth == 0:
                return index
            depth -= 1
            index += len(PLACEHOLDER_SUFFIX)
        else:
            index += 1
    return -1


def _split_default(content: str) -> tuple[str, str, str]:
    return content.partition(VALUE_SEPARATOR)
