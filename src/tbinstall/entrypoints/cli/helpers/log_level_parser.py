"""Parsing of the ``-L/--logger-level NAME=LEVEL`` option.

Values may be repeated on the command line or given as one comma/space
separated list (the form used by the environment variable). The Cassandra
driver is chatty at INFO during connection attempts, so it starts at WARNING
unless overridden.
"""

import logging
import re

import click

DEFAULT_LIB_LEVELS = {"cassandra": logging.WARNING}

_SEPARATORS = re.compile(r"[,\s]+")


def _normalize_items(value: str | list[str] | tuple[str, ...] | None) -> list[str]:
    """Flatten the option value(s) into non-empty ``NAME=LEVEL`` items."""
    if value is None:
        return []
    values = [value] if isinstance(value, str) else list(value)
    return [item for v in values for item in _SEPARATORS.split(v) if item]


def parse_log_level(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: str | list[str] | tuple[str, ...] | None,
) -> dict[str, int]:
    """Click callback turning ``NAME=LEVEL`` items into a name→level mapping.

    The result starts from `DEFAULT_LIB_LEVELS`; later items override earlier
    ones for the same logger.

    Raises:
        click.BadParameter: If an item is not ``NAME=LEVEL`` or the level is
            not a standard logging level name.
    """
    levels = dict(DEFAULT_LIB_LEVELS)
    for item in _normalize_items(value):
        name, sep, level_str = item.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"Expected NAME=LEVEL, got {item!r}")
        level = logging.getLevelNamesMapping().get(level_str.strip().upper())
        if level is None:
            raise click.BadParameter(f"Invalid log level: {level_str}")
        levels[name.strip()] = level
    return levels
