"""Layered configuration resolution.

Builds the `Environment` the tool runs with, from highest to lowest
precedence:

1. ``commandLineArgs`` - ``--key=value`` arguments.
2. ``systemEnvironment`` - environment variables (``CASSANDRA_URL`` for
   ``cassandra.url``).
3. ``random`` - ``random.*`` keys.
4. ``applicationConfigurationProperties`` - every configuration file found
   along the search locations, for every search name and file extension.
5. ``defaultProperties`` - built-in defaults.

Search locations and names are comma lists that are reversed before they are
collected, so a location or name declared *later* wins over one declared
earlier, and the built-in locations lose against any override.
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from tbinstall.adapters.loaders import PropertySourcesLoader
from tbinstall.adapters.property_sources import (
    COMMAND_LINE_PROPERTY_SOURCE_NAME,
    SYSTEM_ENVIRONMENT_PROPERTY_SOURCE_NAME,
    CommandLinePropertySource,
    MapPropertySource,
    RandomValuePropertySource,
    SystemEnvironmentPropertySource,
)
from tbinstall.adapters.resources import FILE_URL_PREFIX, DefaultResourceLoader, is_url
from tbinstall.config import (
    CONFIG_LOCATION_PROPERTY,
    CONFIG_NAME_PROPERTY,
    DATA_DIR_PROPERTY,
    DEFAULT_PROPERTIES,
)
from tbinstall.domain.arguments import ApplicationArguments
from tbinstall.domain.errors import ConfigurationError
from tbinstall.interfaces.property_source import (
    CompositePropertySource,
    MutablePropertySources,
    PropertySource,
)
from tbinstall.interfaces.resource import ResourceLoader

from .environment import Environment

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LOCATIONS = "classpath:/,classpath:/config/,file:./,file:./config/"
DEFAULT_NAMES = "application"
DEFAULT_PROPERTIES_SOURCE_NAME = "defaultProperties"
APPLICATION_CONFIGURATION_PROPERTY_SOURCE_NAME = "applicationConfigurationProperties"
APPLICATION_CONFIG_GROUP = "applicationConfig: [profile=]"


class ConfigurationResolver:
    """Resolves command-line arguments into a fully layered `Environment`.

    Args:
        environ: Environment variables to expose; defaults to ``os.environ``.
        default_properties: Lowest-precedence properties; defaults to the
            built-in `DEFAULT_PROPERTIES`. Pass an empty mapping to omit the
            ``defaultProperties`` source.
        resource_loader: Resolves search locations to resources.
        loader_factory: Creates the file loader used for one resolution.
    """

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        default_properties: Mapping[str, Any] | None = None,
        resource_loader: ResourceLoader | None = None,
        loader_factory: type[PropertySourcesLoader] = PropertySourcesLoader,
    ) -> None:
        self._environ = environ
        self._default_properties = (
            DEFAULT_PROPERTIES if default_properties is None else default_properties
        )
        self._resource_loader = resource_loader or DefaultResourceLoader()
        self._loader_factory = loader_factory

    def resolve(
        self,
        args: ApplicationArguments | Iterable[str],
        base_sources: Iterable[PropertySource] | None = None,
    ) -> Environment:
        """Build the environment for ``args``.

        Args:
            args: Parsed arguments, or the raw tokens to parse.
            base_sources: Sources to seed the environment with instead of the
                system environment and default properties.

        Returns:
            The resolved environment.

        Raises:
            UsageError: If an argument has invalid syntax.
            ConfigurationError: If a configuration file cannot be parsed, or
                ``thingsboard.data.dir`` is missing or not a directory.
        """
        if not isinstance(args, ApplicationArguments):
            args = ApplicationArguments.parse(args)

        sources = (
            MutablePropertySources(base_sources)
            if base_sources is not None
            else self._base_sources()
        )
        environment = Environment(sources)
        _add_command_line_source(sources, args)
        _add_random_source(sources)
        self._add_configuration_files(environment)
        logger.debug("Property sources: %s", ", ".join(sources.names()))

        validate_data_dir(environment)
        return environment

    def _base_sources(self) -> MutablePropertySources:
        sources = MutablePropertySources()
        sources.add_last(SystemEnvironmentPropertySource(self._environ))
        if self._default_properties:
            sources.add_last(
                MapPropertySource(
                    DEFAULT_PROPERTIES_SOURCE_NAME, self._default_properties
                )
            )
        return sources

    def _add_configuration_files(self, environment: Environment) -> None:
        loader = self._loader_factory()
        for location in get_search_locations(environment):
            if not location.endswith("/"):
                self._load(environment, loader, location, None)
            else:
                for name in get_search_names(environment):
                    self._load(environment, loader, location, name)

        configuration = CompositePropertySource(
            APPLICATION_CONFIGURATION_PROPERTY_SOURCE_NAME,
            loader.property_sources,
        )
        sources = environment.property_sources
        if sources.contains(DEFAULT_PROPERTIES_SOURCE_NAME):
            sources.add_before(DEFAULT_PROPERTIES_SOURCE_NAME, configuration)
        else:
            sources.add_last(configuration)

    def _load(
        self,
        environment: Environment,
        loader: PropertySourcesLoader,
        location: str,
        name: str | None,
    ) -> None:
        if not name:
            self._load_into_group(environment, loader, location)
            return
        for extension in loader.all_file_extensions:
            self._load_into_group(environment, loader, f"{location}{name}.{extension}")

    def _load_into_group(
        self, environment: Environment, loader: PropertySourcesLoader, location: str
    ) -> None:
        resolved = environment.resolve_placeholders(location, strict=False)
        resource = self._resource_loader.get_resource(resolved)
        if not resource.exists():
            logger.debug("Skipped missing config '%s'", resolved)
            return
        loader.load(resource, APPLICATION_CONFIG_GROUP, f"applicationConfig: [{location}]")


def get_search_locations(environment: Environment) -> list[str]:
    """Return the configuration search locations in load order.

    The ``spring.config.location`` override comes first (last-declared entry
    first), followed by the built-in locations (``file:./config/`` first).
    Override entries are path-cleaned and prefixed with ``file:`` unless they
    already carry a scheme. Placeholders that cannot be resolved are kept, and
    such an entry is passed through unchanged.
    """
    locations: dict[str, None] = {}
    if environment.contains_property(CONFIG_LOCATION_PROPERTY):
        raw = str(environment.get_raw_property(CONFIG_LOCATION_PROPERTY))
        for path in as_resolved_set(environment.resolve_placeholders(raw, strict=False)):
            if "$" not in path:
                path = clean_path(path)
                if not is_url(path):
                    path = FILE_URL_PREFIX + path
            locations[path] = None
    locations.update(dict.fromkeys(as_resolved_set(DEFAULT_SEARCH_LOCATIONS)))
    return list(locations)


def get_search_names(environment: Environment) -> list[str]:
    """Return the configuration base names in load order (last-declared first)."""
    if environment.contains_property(CONFIG_NAME_PROPERTY):
        return as_resolved_set(str(environment.get_property(CONFIG_NAME_PROPERTY)))
    return as_resolved_set(DEFAULT_NAMES)


def as_resolved_set(value: str) -> list[str]:
    """Split a comma list, trim entries, reverse, and drop duplicates.

    Examples:
        ```py
        >>> as_resolved_set("file:./, file:./config/")
        ['file:./config/', 'file:./']
        ```
    """
    items = [item.strip() for item in value.split(",")]
    items.reverse()
    return list(dict.fromkeys(item for item in items if item))


def clean_path(path: str) -> str:
    """Normalize a location path, keeping its prefix and trailing slash.

    Backslashes become slashes, ``.`` segments are dropped and ``..``
    segments are collapsed.
    """
    path = path.replace("\\", "/")
    prefix = ""
    colon = path.find(":")
    if colon != -1 and "/" not in path[:colon]:
        prefix, path = path[: colon + 1], path[colon + 1 :]
    if not path:
        return prefix
    trailing = path.endswith("/")
    cleaned = posixpath.normpath(path)
    if cleaned == ".":
        cleaned = "./" if trailing else "."
    elif trailing and not cleaned.endswith("/"):
        cleaned += "/"
    return prefix + cleaned


def validate_data_dir(environment: Environment) -> Path:
    """Check that ``thingsboard.data.dir`` names an existing directory.

    Raises:
        ConfigurationError: If the property is missing or not a directory.
    """
    data_dir = environment.get_property(DATA_DIR_PROPERTY)
    if data_dir is None or not str(data_dir).strip():
        raise ConfigurationError(f"'{DATA_DIR_PROPERTY}' property should be specified!")
    path = Path(str(data_dir)).expanduser()
    if not path.is_dir():
        raise ConfigurationError(
            f"'{DATA_DIR_PROPERTY}' property value is not valid directory: {data_dir}"
        )
    return path


def _add_command_line_source(
    sources: MutablePropertySources, args: ApplicationArguments
) -> None:
    if not args.source_args:
        return
    name = COMMAND_LINE_PROPERTY_SOURCE_NAME
    existing = sources.get(name)
    if existing is not None:
        composite = CompositePropertySource(name)
        composite.add_property_source(
            CommandLinePropertySource(args, name=f"{name}-{id(args)}")
        )
        composite.add_property_source(existing)
        sources.replace(name, composite)
    else:
        sources.add_first(CommandLinePropertySource(args))


def _add_random_source(sources: MutablePropertySources) -> None:
    random_source = RandomValuePropertySource()
    if sources.contains(SYSTEM_ENVIRONMENT_PROPERTY_SOURCE_NAME):
        sources.add_after(SYSTEM_ENVIRONMENT_PROPERTY_SOURCE_NAME, random_source)
    else:
        sources.add_last(random_source)

