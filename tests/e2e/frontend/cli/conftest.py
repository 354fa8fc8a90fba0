"""Fixtures and test helpers for end-to-end tests of the `tb-install` command.

The Cassandra connector built by the bootstrap is replaced by a
`FakeConnector`, so every run goes through argument parsing, configuration
resolution, logging setup and the retry loop without a live cluster.
"""

import logging
import sys
from logging.handlers import MemoryHandler

import pytest

import tbinstall.bootstrap.bootstrap  # noqa: F401  (the package attribute shadows the module)
from click.testing import CliRunner
from rich.logging import RichHandler

from tests.fixtures.cluster import FakeConnector

bootstrap_module = sys.modules["tbinstall.bootstrap.bootstrap"]

# pylint: disable=redefined-outer-name

LOG_PATH = "flight_recorder.log"

# Arguments every run needs inside the isolated filesystem: an existing data
# dir and no waiting between connection attempts.
BASE_ARGS = ["--thingsboard.data.dir=.", "--cassandra.init_retry_interval_ms=0"]


@pytest.fixture
def connector(monkeypatch) -> FakeConnector:
    """Install a `FakeConnector` as the connector the bootstrap builds.

    Tests adjust ``failures`` or ``error_factory`` before invoking the CLI.
    """
    fake = FakeConnector()
    monkeypatch.setattr(
        bootstrap_module, "CassandraClusterConnector", lambda: fake
    )
    return fake


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo the root handlers and logger levels a CLI run leaves behind."""
    root = logging.getLogger()
    root_level = root.level
    loggers = logging.root.manager.loggerDict
    saved = {
        name: lg.level for name, lg in loggers.items() if isinstance(lg, logging.Logger)
    }
    yield
    for handler in root.handlers[:]:
        if isinstance(handler, (RichHandler, MemoryHandler)):
            root.removeHandler(handler)
    root.setLevel(root_level)
    for name, lg in list(loggers.items()):
        if isinstance(lg, logging.Logger):
            lg.setLevel(saved.get(name, logging.NOTSET))


@pytest.fixture
def runner():
    """Return a Click CliRunner for invoking CLI commands in tests.

    Console logs are rendered wide so messages do not wrap, and the flight
    recorder writes next to the test instead of the user log directory.
    """
    return CliRunner(env={"COLUMNS": "250", "TB_INSTALL_LOG_PATH": LOG_PATH})


@pytest.fixture
def fs(runner):
    """Provide an isolated filesystem context for tests using CliRunner."""
    with runner.isolated_filesystem():
        yield
