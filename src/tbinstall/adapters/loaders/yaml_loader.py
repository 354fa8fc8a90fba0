"""Loader for YAML configuration files.

Nested mappings are flattened to dot-separated keys and sequences to indexed
keys, so

```yaml
cassandra:
  url: "127.0.0.1:9042"
  hosts: [a, b]
```

yields ``cassandra.url``, ``cassandra.hosts[0]`` and ``cassandra.hosts[1]``.
Documents of a multi-document file are merged in order, later documents
overriding earlier ones. Documents restricted to a profile (those declaring
``spring.profiles``) are skipped, since the tool runs without profiles.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import yaml

from tbinstall.adapters.property_sources.map import MapPropertySource
from tbinstall.domain.errors import ConfigurationError
from tbinstall.interfaces.loader import PropertySourceLoader
from tbinstall.interfaces.resource import Resource

logger = logging.getLogger(__name__)

PROFILES_KEY = "spring.profiles"


class YamlPropertySourceLoader(PropertySourceLoader):
    """Loads ``.yml``/``.yaml`` resources into a `MapPropertySource`."""

    @property
    def file_extensions(self) -> tuple[str, ...]:
        return ("yml", "yaml")

    def load(
        self, name: str, resource: Resource, group: str | None = None
    ) -> MapPropertySource | None:
        try:
            documents = list(yaml.safe_load_all(resource.read_text()))
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Cannot parse YAML file '{resource.location}': {e}"
            ) from e

        properties: dict[str, Any] = {}
        for index, document in enumerate(documents):
            if document is None:
                continue
            if not isinstance(document, Mapping):
                raise ConfigurationError(
                    f"YAML document #{index} in '{resource.location}' is not a mapping"
                )
            flat = flatten(document)
            if PROFILES_KEY in flat:
                logger.debug(
                    "Skipping profile-specific document #%d in %s",
                    index,
                    resource.location,
                )
                continue
            properties.update(flat)
        if not properties:
            return None
        return MapPropertySource(name, properties, group=group)


def flatten(document: Mapping[Any, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten nested mappings and sequences into dotted/indexed keys."""
    result: dict[str, Any] = {}
    for key, value in document.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        _flatten_value(path, value, result)
    return result


def _flatten_value(path: str, value: Any, result: dict[str, Any]) -> None:
    if isinstance(value, Mapping):
        result.update(flatten(value, path))
    elif isinstance(value, list):
        for index, item in enumerate(value):
            _flatten_value(f"{path}[{index}]", item, result)
    else:
        result[path] = "" if value is None else value
