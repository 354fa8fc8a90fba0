"""Configuration file loaders (``.properties`` and YAML)."""

from .properties_loader import PropertiesPropertySourceLoader
from .property_sources_loader import PropertySourcesLoader
from .yaml_loader import YamlPropertySourceLoader

__all__ = [
    "PropertiesPropertySourceLoader",
    "PropertySourcesLoader",
    "YamlPropertySourceLoader",
]
