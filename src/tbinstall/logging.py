"""Logging setup for the tb-install CLI.

Two handlers hang off the root logger:

- a Rich console handler on stderr whose level follows ``-v``/``-q``;
- an optional in-memory "flight recorder" that keeps the last records at
  DEBUG granularity and writes them to a file once something goes wrong
  (a WARNING such as a failed connection attempt), or on exit when asked to.

Records from other libraries (the Cassandra driver mostly) get a short
``[cassandra]`` style prefix on the console so they stand out from the tool's
own messages.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

import cassandra
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Handler, Logger

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "tbinstall"
DEFAULT_CONSOLE_LEVEL = logging.WARNING
LEVEL_STEP = 10

ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]


@dataclass(frozen=True)
class LoggingSettings:  # pylint: disable=too-many-instance-attributes
    """Logging options collected from the command line."""

    verbose: int = 0
    quiet: int = 0
    debug: bool = False
    color: bool = True
    log_path: Path | None = None
    flight_recorder: bool = True
    flight_recorder_capacity: int = 2000
    force_flush: bool = False
    logger_levels: Mapping[str, int] = field(default_factory=dict)

    @property
    def console_level(self) -> int:
        """WARNING moved one step per ``-v``/``-q``, clamped to DEBUG..CRITICAL."""
        level = DEFAULT_CONSOLE_LEVEL - LEVEL_STEP * self.verbose + LEVEL_STEP * self.quiet
        return max(logging.DEBUG, min(logging.CRITICAL, level))

    @property
    def records_to_file(self) -> bool:
        return self.flight_recorder and self.log_path is not None


class ThirdPartyPrefixFilter(logging.Filter):
    """Set ``record.prefix`` to ``[top-level-package]`` for foreign loggers.

    Project records get an empty prefix. Never drops a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith(PROJECT_PREFIX):
            record.prefix = ""
        else:
            # "cassandra.pool" -> "[cassandra]"
            record.prefix = f"[{record.name.split('.')[0]}]"
        return True


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Build the stderr console handler.

    Args:
        level: Minimum level shown; debug mode forces DEBUG.
        debug_mode: Show logger names, timestamps and source locations.
        color: False disables colours (mirrors click-extra's ``--no-color``).
    """
    color_system: ColorSystem | None = "auto" if color else None
    handler = RichHandler(
        level=logging.DEBUG if debug_mode else level,
        console=Console(color_system=color_system, stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )
    if debug_mode:
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s: %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(prefix)s %(message)s"))
        handler.addFilter(ThirdPartyPrefixFilter())
    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Build the flight recorder: a bounded buffer dumped to ``path``.

    The buffer is written out when a record at ``flush_level`` or above
    arrives, when it is full, and on close if ``flush_on_close`` is set. The
    file is truncated per run and only created on the first write.
    """
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8", delay=True)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(process)d:%(threadName)s] %(levelname)s "
            "%(name)s:%(lineno)d: %(message)s"
        )
    )
    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )


def configure_logging(settings: LoggingSettings) -> list[Handler]:
    """Replace the root handlers according to ``settings``.

    The root logger passes everything (DEBUG); each handler filters on its
    own level. Per-logger levels in ``settings.logger_levels`` apply to both
    handlers.

    Returns:
        The installed handlers, console first.
    """
    handlers: list[Handler] = [
        config_console_handler(
            level=settings.console_level,
            debug_mode=settings.debug,
            color=settings.color,
        )
    ]
    if settings.records_to_file:
        handlers.append(
            config_flight_recorder(
                path=settings.log_path,
                capacity=settings.flight_recorder_capacity,
                flush_on_close=settings.force_flush,
            )
        )
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    for name, level in settings.logger_levels.items():
        logging.getLogger(name).setLevel(level)
    return handlers


def log_startup(
    logger: Logger,
    settings: LoggingSettings,
    handlers: list[Handler],
    *,
    app_version: str,
    redactor_mode: str,
) -> None:
    """Log a one-line INFO banner followed by DEBUG diagnostics.

    The diagnostics (interpreter, platform, driver version, handlers,
    flight recorder and per-logger levels) usually only reach the flight
    recorder file, where they give context to a failed run.
    """
    logger.info(
        "ThingsBoard install tool %s - console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(settings.console_level),
        "ON" if settings.records_to_file else "OFF",
    )
    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s", os.getpid())
    logger.debug("CWD: %s", Path.cwd())
    logger.debug("cassandra-driver: %s", cassandra.__version__)
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    logger.debug("Redactor mode: %s", redactor_mode)
    if settings.records_to_file:
        logger.debug(
            "Flight recorder: path=%s, capacity=%s, flush_on_close=%s",
            settings.log_path,
            settings.flight_recorder_capacity,
            settings.force_flush,
        )
    logger.debug(
        "Per-logger overrides: %s",
        {name: logging.getLevelName(level) for name, level in settings.logger_levels.items()}
        or "<none>",
    )
