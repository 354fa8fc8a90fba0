"""Dispatches configuration resources to the loader for their extension."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from tbinstall.interfaces.loader import PropertySourceLoader
from tbinstall.interfaces.property_source import (
    CompositePropertySource,
    MutablePropertySources,
    PropertySource,
)
from tbinstall.interfaces.resource import Resource

from .properties_loader import PropertiesPropertySourceLoader
from .yaml_loader import YamlPropertySourceLoader

logger = logging.getLogger(__name__)


class PropertySourcesLoader:
    """Loads resources and collects the resulting sources by group.

    Sources loaded into the same group share one composite: the source loaded
    first wins inside a group. A group created later is placed ahead of the
    groups created before it.
    """

    def __init__(self, loaders: Sequence[PropertySourceLoader] | None = None) -> None:
        self._loaders: tuple[PropertySourceLoader, ...] = tuple(
            loaders
            if loaders is not None
            else (PropertiesPropertySourceLoader(), YamlPropertySourceLoader())
        )
        self._property_sources = MutablePropertySources()

    @property
    def property_sources(self) -> MutablePropertySources:
        return self._property_sources

    @property
    def all_file_extensions(self) -> tuple[str, ...]:
        """Every supported extension, in loader order, without duplicates."""
        extensions: dict[str, None] = {}
        for loader in self._loaders:
            extensions.update(dict.fromkeys(loader.file_extensions))
        return tuple(extensions)

    def load(
        self, resource: Resource, group: str | None, name: str
    ) -> PropertySource | None:
        """Load ``resource`` with the loader matching its extension.

        Returns:
            The loaded source, or None if no loader handles the extension or
            the resource holds no properties.
        """
        extension = _extension_of(resource.location)
        for loader in self._loaders:
            if extension in loader.file_extensions:
                source = loader.load(name, resource, group)
                if source is not None:
                    logger.debug("Loaded config file '%s'", resource.location)
                    self._add_property_source(group, source)
                return source
        logger.debug(
            "No loader for '%s' (extension '%s'), skipping", resource.location, extension
        )
        return None

    def _add_property_source(self, group: str | None, source: PropertySource) -> None:
        if group is None:
            self._property_sources.add_last(source)
            return
        composite = self._property_sources.get(group)
        if not isinstance(composite, CompositePropertySource):
            composite = CompositePropertySource(group, group=group)
            self._property_sources.add_first(composite)
        composite.add_property_source(source)


def _extension_of(location: str) -> str:
    filename = location.rstrip("/").rsplit("/", 1)[-1]
    _, dot, extension = filename.rpartition(".")
    return extension.lower() if dot else ""
