"""Property source backed by an in-memory mapping."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from tbinstall.interfaces.property_source import EnumerablePropertySource


class MapPropertySource(EnumerablePropertySource):
    """Enumerable source over a snapshot of ``properties``.

    Used for the built-in default properties and for every configuration file
    loaded from disk or from the package resources.
    """

    def __init__(
        self, name: str, properties: Mapping[str, Any], group: str | None = None
    ) -> None:
        super().__init__(name, group)
        self._properties = MappingProxyType(dict(properties))

    @property
    def properties(self) -> Mapping[str, Any]:
        return self._properties

    def get_property(self, key: str) -> Any | None:
        return self._properties.get(key)

    @property
    def property_names(self) -> tuple[str, ...]:
        return tuple(self._properties)
