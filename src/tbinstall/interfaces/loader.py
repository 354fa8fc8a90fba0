"""Interface for turning a configuration resource into a property source."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tbinstall.interfaces.property_source import PropertySource
    from tbinstall.interfaces.resource import Resource

# pylint: disable=too-few-public-methods


class PropertySourceLoader(abc.ABC):
    """Parses one configuration file format."""

    @property
    @abc.abstractmethod
    def file_extensions(self) -> tuple[str, ...]:
        """File extensions handled by this loader, without the leading dot."""

    @abc.abstractmethod
    def load(
        self, name: str, resource: Resource, group: str | None = None
    ) -> PropertySource | None:
        """Load ``resource`` into a source called ``name``.

        Returns:
            The loaded source, or None if the resource holds no properties.

        Raises:
            ConfigurationError: If the resource cannot be parsed.
        """
