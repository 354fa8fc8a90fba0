"""Concrete property sources for the layered configuration."""

from .command_line import COMMAND_LINE_PROPERTY_SOURCE_NAME, CommandLinePropertySource
from .map import MapPropertySource
from .random_value import RANDOM_PROPERTY_SOURCE_NAME, RandomValuePropertySource
from .system_environment import (
    SYSTEM_ENVIRONMENT_PROPERTY_SOURCE_NAME,
    SystemEnvironmentPropertySource,
)

__all__ = [
    "COMMAND_LINE_PROPERTY_SOURCE_NAME",
    "RANDOM_PROPERTY_SOURCE_NAME",
    "SYSTEM_ENVIRONMENT_PROPERTY_SOURCE_NAME",
    "CommandLinePropertySource",
    "MapPropertySource",
    "RandomValuePropertySource",
    "SystemEnvironmentPropertySource",
]
