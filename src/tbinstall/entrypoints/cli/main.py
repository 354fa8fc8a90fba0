"""tb-install CLI entry point.

Defines the top-level ``tb-install`` command (via Click-Extra). Tool options
(verbosity, flight recorder, redaction) are parsed by Click; every other token
is handed unprocessed to the install tool, which selects the mode from the
``install`` / ``upgrade`` tokens and resolves ``--key=value`` options as the
highest-precedence configuration source.

Notes
- The CLI version is sourced from `tbinstall.__version__` and displayed
  automatically by Click-Extra (``--version``).
- SIGINT/SIGTERM cancel the cluster bootstrap. Once the installer runs they
  get their previous handlers back, so Ctrl-C interrupts it as usual.

Examples
    $ tb-install install
    $ tb-install -v upgrade --fromVersion=3.6.4 --cassandra.url=db1:9042,db2:9042
    $ tb-install install --spring.config.location=/etc/thingsboard/conf/
"""

import logging
import signal
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path

import click
import click_extra as clickx
from platformdirs import user_log_dir

from tbinstall import __version__
from tbinstall.bootstrap import bootstrap, run
from tbinstall.domain.errors import (
    BootstrapCancelledError,
    BootstrapTimeoutError,
    ConfigurationError,
    InstallToolError,
    UsageError,
)
from tbinstall.interfaces.redactor import RedactorMode
from tbinstall.logging import LoggingSettings, configure_logging, log_startup

from .helpers import error, hyperlink, success, warn
from .helpers.log_level_parser import parse_log_level

logger = logging.getLogger(__name__)


HELP = """ThingsBoard install tool.

    Installs the ThingsBoard system data into a Cassandra keyspace, or upgrades
    an existing installation. Select the mode with INSTALL or UPGRADE; upgrades
    also need --fromVersion=<version>.

    Configuration is read from --key=value arguments, environment variables,
    thingsboard.yml/.properties files and built-in defaults, in that order of
    precedence. Use --spring.config.location and --spring.config.name to point
    at other configuration files.
    """


EPILOG = "\b\n" + "\n".join(
    [
        f"{click.style('See Also:', fg='blue', bold=True, underline=True)}",
        "  Docs  : " + hyperlink("https://thingsboard.io/docs/user-guide/install/"),
        "  Issues: " + hyperlink("https://github.com/thingsboard/thingsboard/issues"),
    ]
)

INSTALL_SUCCESS_MSG = "Installation finished successfully!"
UPGRADE_SUCCESS_MSG = "Upgrade finished successfully!"
CANCELLED_MSG = "Install interrupted, cluster bootstrap cancelled."
TIMEOUT_HINT = (
    "Check that Cassandra is running and that cassandra.url "
    "(CASSANDRA_URL) points at a reachable node."
)
INSTALL_FAILED_MSG = "Unexpected error during ThingsBoard installation!"

DEFAULT_LOG_PATH = (
    Path(user_log_dir("tb-install", appauthor=False, ensure_exists=True)) / "latest.log"
)


@contextmanager
def _cancel_on_signals(cancel: Callable[[], None]) -> Iterator[None]:
    """Route SIGINT/SIGTERM to *cancel* while the block runs.

    Handlers can only be installed from the main thread; elsewhere the block
    runs without them.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def _handler(signum: int, frame) -> None:  # pylint: disable=unused-argument
        logger.warning("Received %s, cancelling", signal.Signals(signum).name)
        cancel()

    previous = {
        signum: signal.signal(signum, _handler)
        for signum in (signal.SIGINT, signal.SIGTERM)
    }
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)


@clickx.extra_command(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
    epilog=EPILOG,
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    default=0,
    help="Show more on the console: -v for INFO, -vv for DEBUG.",
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    default=0,
    help="Show less on the console: -q for ERROR only, -qq for CRITICAL only.",
)
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Log everything with timestamps, logger names and source locations.",
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_LOG_PATH,
    envvar="TB_INSTALL_LOG_PATH",
    show_default=True,
    show_envvar=True,
    help="File the flight recorder writes to.",
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=2000,
    hidden=True,
    envvar="TB_INSTALL_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Number of log records the flight recorder keeps.",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    default=True,
    envvar="TB_INSTALL_FLIGHT_RECORDER",
    show_envvar=True,
    help=(
        "Keep recent DEBUG records in memory and write them to --log-path as "
        "soon as a WARNING or ERROR is logged, e.g. when a connection attempt "
        "to Cassandra fails. Independent of -v/-q."
    ),
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush",
    default=False,
    envvar="TB_INSTALL_FORCE_FLUSH_FLIGHT_RECORDER",
    show_default=True,
    show_envvar=True,
    help="Also write the flight recorder to --log-path when the run ends cleanly.",
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    default=("cassandra=WARNING",),
    envvar="TB_INSTALL_LOGGER_LEVEL",
    show_default=True,
    show_envvar=True,
    help=(
        "Minimum level for one logger and its children, as NAME=LEVEL. "
        "Applies to the console and the flight recorder. Repeatable "
        "(-L cassandra=INFO -L cassandra.pool=DEBUG); the environment "
        "variable takes a comma or space separated list."
    ),
)
@click.option(
    "--redactor-mode",
    type=click.Choice([mode.value for mode in RedactorMode], case_sensitive=False),
    default=RedactorMode.LENIENT.value,
    envvar="TB_INSTALL_REDACTOR_MODE",
    show_default=True,
    show_envvar=True,
    help=(
        "How logged configuration values are masked: 'lenient' hides "
        "passwords and tokens, 'strict' hides usernames as well."
    ),
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@clickx.pass_context
def tb_install(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush: bool,
    logger_levels: dict[str, int],
    redactor_mode: str,
    args: tuple[str, ...],
) -> None:
    """Install or upgrade the ThingsBoard database."""
    settings = LoggingSettings(
        verbose=verbose_count,
        quiet=quiet_count,
        debug=debug,
        color=ctx.color is not False,
        log_path=log_path,
        flight_recorder=flight_recorder,
        flight_recorder_capacity=flight_recorder_capacity,
        force_flush=force_flush,
        logger_levels=logger_levels,
    )
    handlers = configure_logging(settings)
    ctx.call_on_close(logging.shutdown)
    mode = RedactorMode(redactor_mode.lower())
    log_startup(
        logger, settings, handlers, app_version=__version__, redactor_mode=mode.value
    )

    _install(list(args), mode)


def _install(args: list[str], redactor_mode: RedactorMode) -> None:
    try:
        container = bootstrap(args, redactor_mode=redactor_mode)
    except UsageError as e:
        raise click.UsageError(str(e)) from e
    except ConfigurationError as e:
        logger.error("Invalid configuration: %s", e)
        raise click.ClickException(str(e)) from e

    try:
        run(
            container,
            connect_scope=lambda: _cancel_on_signals(container.bootstrapper.cancel),
        )
    except BootstrapCancelledError as e:
        warn(CANCELLED_MSG)
        raise click.ClickException(str(e)) from e
    except BootstrapTimeoutError as e:
        error(TIMEOUT_HINT)
        raise click.ClickException(str(e)) from e
    except InstallToolError as e:
        logger.error(INSTALL_FAILED_MSG, exc_info=True)
        raise click.ClickException(str(e)) from e
    except Exception as e:  # pylint: disable=broad-except
        logger.error(INSTALL_FAILED_MSG, exc_info=True)
        raise click.ClickException(f"{INSTALL_FAILED_MSG} {e}") from e

    success(UPGRADE_SUCCESS_MSG if container.is_upgrade else INSTALL_SUCCESS_MSG)
