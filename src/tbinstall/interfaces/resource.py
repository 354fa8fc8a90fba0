"""Interfaces for locating configuration resources."""

import abc

# pylint: disable=too-few-public-methods


class Resource(abc.ABC):
    """A readable resource addressed by a location string."""

    @property
    @abc.abstractmethod
    def location(self) -> str:
        """The location the resource was requested with."""

    @abc.abstractmethod
    def exists(self) -> bool:
        """Return True if the resource can be read."""

    @abc.abstractmethod
    def read_text(self) -> str:
        """Read the whole resource as UTF-8 text.

        Raises:
            FileNotFoundError: If the resource does not exist.
        """


class ResourceLoader(abc.ABC):
    """Resolves location strings (``classpath:``, ``file:``, plain paths) to resources."""

    @abc.abstractmethod
    def get_resource(self, location: str) -> Resource:
        """Return a handle for ``location``; the resource need not exist."""
