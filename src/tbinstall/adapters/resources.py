"""Resource loading for configuration search locations.

Locations are resolved as follows:

- ``classpath:<path>`` → a file shipped inside the ``tbinstall.resources``
  package (``classpath:/`` is the package root).
- ``file:<path>`` → a file on disk; relative paths are resolved against the
  loader's base directory (the current working directory by default).
- Any other URL scheme (``http:``, ...) is not supported and never exists.
- A plain path → a file on disk, as for ``file:``.
"""

from __future__ import annotations

import logging
from importlib.resources import files
from importlib.resources.abc import Traversable
from pathlib import Path
from urllib.parse import unquote, urlparse

from tbinstall.interfaces.resource import Resource, ResourceLoader

logger = logging.getLogger(__name__)

CLASSPATH_URL_PREFIX = "classpath:"
FILE_URL_PREFIX = "file:"
DEFAULT_CLASSPATH_PACKAGE = "tbinstall.resources"


class FileResource(Resource):
    """A resource on the local file system."""

    def __init__(self, location: str, path: Path) -> None:
        self._location = location
        self.path = path

    @property
    def location(self) -> str:
        return self._location

    def exists(self) -> bool:
        return self.path.is_file()

    def read_text(self) -> str:
        return self.path.read_text(encoding="utf-8")


class ClasspathResource(Resource):
    """A resource packaged with the application."""

    def __init__(self, location: str, traversable: Traversable) -> None:
        self._location = location
        self._traversable = traversable

    @property
    def location(self) -> str:
        return self._location

    def exists(self) -> bool:
        return self._traversable.is_file()

    def read_text(self) -> str:
        if not self.exists():
            raise FileNotFoundError(self._location)
        return self._traversable.read_text(encoding="utf-8")


class UnsupportedResource(Resource):
    """Placeholder for locations with a scheme the loader cannot read."""

    def __init__(self, location: str) -> None:
        self._location = location

    @property
    def location(self) -> str:
        return self._location

    def exists(self) -> bool:
        return False

    def read_text(self) -> str:
        raise FileNotFoundError(self._location)


class DefaultResourceLoader(ResourceLoader):
    """Resolves ``classpath:``, ``file:`` and plain-path locations."""

    def __init__(
        self,
        classpath_package: str = DEFAULT_CLASSPATH_PACKAGE,
        base_dir: Path | None = None,
    ) -> None:
        self._classpath_package = classpath_package
        self._base_dir = base_dir

    def get_resource(self, location: str) -> Resource:
        if location.startswith(CLASSPATH_URL_PREFIX):
            return self._classpath_resource(location)
        if location.startswith(FILE_URL_PREFIX):
            return FileResource(location, self._resolve_path(_file_url_path(location)))
        if is_url(location):
            logger.debug("Unsupported resource location '%s', skipping", location)
            return UnsupportedResource(location)
        return FileResource(location, self._resolve_path(location))

    def _classpath_resource(self, location: str) -> ClasspathResource:
        relative = location[len(CLASSPATH_URL_PREFIX) :]
        traversable = files(self._classpath_package)
        for part in relative.split("/"):
            if part and part != ".":
                traversable = traversable.joinpath(part)
        return ClasspathResource(location, traversable)

    def _resolve_path(self, raw: str) -> Path:
        path = Path(raw).expanduser()
        if path.is_absolute():
            return path
        base = self._base_dir if self._base_dir is not None else Path.cwd()
        return base / path


def is_url(location: str) -> bool:
    """Return True if ``location`` carries a URL scheme or the classpath prefix.

    Single-letter schemes are treated as Windows drive letters, not URLs.
    """
    if location.startswith(CLASSPATH_URL_PREFIX):
        return True
    scheme = urlparse(location).scheme
    return len(scheme) > 1


def _file_url_path(location: str) -> str:
    remainder = location[len(FILE_URL_PREFIX) :]
    if remainder.startswith("//"):
        return unquote(urlparse(location).path)
    return remainder
