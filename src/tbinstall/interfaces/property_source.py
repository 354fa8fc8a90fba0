"""Property source contracts and the ordered source collection.

A property source is a named lookup from configuration key to value. An
`Environment` consults an ordered `MutablePropertySources`; the first source
that defines a key wins.
"""

from __future__ import annotations

import abc
from collections.abc import Iterable, Iterator
from typing import Any

# pylint: disable=too-few-public-methods


class PropertySource(abc.ABC):
    """A named key/value lookup contributing to configuration resolution."""

    def __init__(self, name: str, group: str | None = None) -> None:
        self._name = name
        self._group = group

    @property
    def name(self) -> str:
        """Unique name of the source within a `MutablePropertySources`."""
        return self._name

    @property
    def group(self) -> str | None:
        """Group tag the source was loaded into, if any."""
        return self._group

    @abc.abstractmethod
    def get_property(self, key: str) -> Any | None:
        """Return the value for ``key`` or None if the source does not define it."""

    def contains_property(self, key: str) -> bool:
        """Return True if the source defines ``key``."""
        return self.get_property(key) is not None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r})"


class EnumerablePropertySource(PropertySource):
    """A property source whose keys can be listed."""

    @property
    @abc.abstractmethod
    def property_names(self) -> tuple[str, ...]:
        """All keys defined by the source, in source order."""

    def contains_property(self, key: str) -> bool:
        return key in self.property_names


class CompositePropertySource(EnumerablePropertySource):
    """Read-through composite of several sources; earlier sources win."""

    def __init__(
        self,
        name: str,
        sources: Iterable[PropertySource] = (),
        group: str | None = None,
    ) -> None:
        super().__init__(name, group)
        self._sources: list[PropertySource] = list(sources)

    def add_property_source(self, source: PropertySource) -> None:
        """Append ``source``; it loses against every source added before it."""
        self._sources.append(source)

    @property
    def sources(self) -> tuple[PropertySource, ...]:
        return tuple(self._sources)

    def get_property(self, key: str) -> Any | None:
        for source in self._sources:
            value = source.get_property(key)
            if value is not None:
                return value
        return None

    @property
    def property_names(self) -> tuple[str, ...]:
        names: dict[str, None] = {}
        for source in self._sources:
            if isinstance(source, EnumerablePropertySource):
                names.update(dict.fromkeys(source.property_names))
        return tuple(names)

    def contains_property(self, key: str) -> bool:
        return any(source.contains_property(key) for source in self._sources)


class MutablePropertySources:
    """Ordered, name-unique collection of property sources.

    Iteration order is precedence order: the first source wins.
    """

    def __init__(self, sources: Iterable[PropertySource] = ()) -> None:
        self._sources: list[PropertySource] = []
        for source in sources:
            self.add_last(source)

    def __iter__(self) -> Iterator[PropertySource]:
        return iter(tuple(self._sources))

    def __len__(self) -> int:
        return len(self._sources)

    def names(self) -> tuple[str, ...]:
        """Source names in precedence order."""
        return tuple(source.name for source in self._sources)

    def contains(self, name: str) -> bool:
        return any(source.name == name for source in self._sources)

    def get(self, name: str) -> PropertySource | None:
        for source in self._sources:
            if source.name == name:
                return source
        return None

    def add_first(self, source: PropertySource) -> None:
        self._remove_if_present(source.name)
        self._sources.insert(0, source)

    def add_last(self, source: PropertySource) -> None:
        self._remove_if_present(source.name)
        self._sources.append(source)

    def add_before(self, relative_name: str, source: PropertySource) -> None:
        """Insert ``source`` immediately before the source named ``relative_name``."""
        self._assert_not_self(relative_name, source)
        self._remove_if_present(source.name)
        self._sources.insert(self._index_of(relative_name), source)

    def add_after(self, relative_name: str, source: PropertySource) -> None:
        """Insert ``source`` immediately after the source named ``relative_name``."""
        self._assert_not_self(relative_name, source)
        self._remove_if_present(source.name)
        self._sources.insert(self._index_of(relative_name) + 1, source)

    def replace(self, name: str, source: PropertySource) -> None:
        """Replace the source named ``name`` with ``source`` at the same position."""
        self._sources[self._index_of(name)] = source

    def remove(self, name: str) -> PropertySource | None:
        source = self.get(name)
        if source is not None:
            self._sources.remove(source)
        return source

    def _index_of(self, name: str) -> int:
        for index, source in enumerate(self._sources):
            if source.name == name:
                return index
        raise KeyError(f"Property source named '{name}' does not exist")

    def _remove_if_present(self, name: str) -> None:
        self.remove(name)

    @staticmethod
    def _assert_not_self(relative_name: str, source: PropertySource) -> None:
        if source.name == relative_name:
            raise ValueError(
                f"Property source named '{relative_name}' cannot be added relative to itself"
            )
