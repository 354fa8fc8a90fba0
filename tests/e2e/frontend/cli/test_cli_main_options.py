"""End-to-end CLI tests for the logging options of `tb-install`.

These tests exercise verbosity flags, logger-level overrides, debug
formatting, and the in-memory flight-recorder on complete install runs
against a fake cluster connector.
"""

import re
from pathlib import Path

import pytest

from tbinstall.entrypoints.cli.main import tb_install

from tests.e2e.frontend.cli.conftest import BASE_ARGS, LOG_PATH

# pylint: disable=unused-argument

INSTALL = ["install", *BASE_ARGS]


def assert_in_output(pattern: str, output: str) -> None:
    """Assert that a regex pattern is found in the output string."""
    if not re.search(pattern, output, re.MULTILINE):
        raise AssertionError(f"Pattern '{pattern}' not found in output:\n{output}")


def assert_not_in_output(pattern: str, output: str) -> None:
    """Assert that a regex pattern is NOT found in the output string."""
    if re.search(pattern, output, re.MULTILINE):
        raise AssertionError(f"Pattern '{pattern}' found in output:\n{output}")


def read_log(path: str = LOG_PATH) -> str:
    return Path(path).read_text(encoding="utf-8")


def test_default_shows_retry_warning_only(connector, runner, fs):
    """Default invocation shows WARNING and above but not INFO."""
    connector.failures = 1
    result = runner.invoke(tb_install, INSTALL)
    assert result.exit_code == 0
    assert_in_output("WARNING", result.output)
    assert_in_output("Will retry in 0 ms", result.output)
    assert_not_in_output("INFO", result.output)


def test_verbose_shows_info(connector, runner, fs):
    """Single -v should enable INFO-level console output (but not DEBUG)."""
    result = runner.invoke(tb_install, ["-v", *INSTALL])
    assert result.exit_code == 0
    assert_in_output("Going to install ThingsBoard System Data", result.output)
    assert_in_output("Install tool finished", result.output)
    assert_not_in_output("DEBUG", result.output)


def test_vv_shows_debug(connector, runner, fs):
    """-vv should enable DEBUG-level console output."""
    result = runner.invoke(tb_install, ["-vv", *INSTALL])
    assert result.exit_code == 0
    assert_in_output("DEBUG", result.output)
    assert_in_output("Property sources: commandLineArgs", result.output)


def test_quiet_suppresses_warning(connector, runner, fs):
    """-q should lower verbosity so the retry WARNING is suppressed."""
    connector.failures = 1
    result = runner.invoke(tb_install, ["-q", *INSTALL])
    assert result.exit_code == 0
    assert_not_in_output("Will retry", result.output)


@pytest.mark.parametrize(
    "env, cli_args",
    [
        ({}, ["-vv", "-L", "tbinstall.service_layer=INFO"]),
        ({"TB_INSTALL_LOGGER_LEVEL": "tbinstall.service_layer=INFO"}, ["-vv"]),
    ],
)
def test_logger_level_silences_debug(connector, runner, fs, env, cli_args):
    """Logger-level overrides silence DEBUG for a subtree while keeping INFO+."""
    result = runner.invoke(tb_install, cli_args + INSTALL, env=env)
    assert result.exit_code == 0
    assert_not_in_output("Property sources:", result.output)
    assert_in_output("Connected to cassandra cluster after 1 attempt", result.output)


def test_debug_mode_shows_paths(connector, runner, fs):
    """When --debug is set, log output includes file paths and line numbers."""
    result = runner.invoke(tb_install, ["--debug", *INSTALL])
    assert result.exit_code == 0
    assert_in_output(r"bootstrapper\.py:\d+\b", result.output)


def test_debug_mode_is_off_by_default(connector, runner, fs):
    """By default, file paths should not be included in log output."""
    connector.failures = 1
    result = runner.invoke(tb_install, INSTALL)
    assert result.exit_code == 0
    assert_not_in_output(r"bootstrapper\.py:\d+\b", result.output)


def test_flight_recorder_flush_on_warning(connector, runner, fs):
    """A failed attempt dumps the buffered DEBUG trail to disk."""
    connector.failures = 1
    result = runner.invoke(tb_install, INSTALL)
    assert result.exit_code == 0
    content = read_log()
    assert_in_output("Property sources: commandLineArgs", content)
    assert_in_output("WARNING .*Will retry in 0 ms", content)
    # records after the warning stay in memory
    assert_not_in_output("Install tool finished", content)


@pytest.mark.parametrize(
    "env, cli_args",
    [({}, ["--force-flush"]), ({"TB_INSTALL_FORCE_FLUSH_FLIGHT_RECORDER": "true"}, [])],
    ids=["cli-flag", "env-var"],
)
def test_flight_recorder_force_flush(connector, runner, fs, env, cli_args):
    """When force-flush is enabled (CLI flag or env var), the final buffer is written."""
    result = runner.invoke(tb_install, cli_args + INSTALL, env=env)
    assert result.exit_code == 0
    assert_in_output("Install tool finished", read_log())


@pytest.mark.parametrize(
    "env, cli_args",
    [({}, ["--no-flight-recorder"]), ({"TB_INSTALL_FLIGHT_RECORDER": "0"}, [])],
    ids=["cli-flag", "env-var"],
)
def test_flight_recorder_can_be_disabled(connector, runner, fs, env, cli_args):
    """Disabling the flight recorder should prevent writing the log file."""
    connector.failures = 1
    result = runner.invoke(tb_install, cli_args + INSTALL, env=env)
    assert result.exit_code == 0
    assert not Path(LOG_PATH).exists()


def test_flight_recorder_truncates_log(connector, runner, fs):
    """Flight recorder log file should be truncated between runs (not appended)."""
    cli = ["--force-flush", *INSTALL]
    assert runner.invoke(tb_install, cli).exit_code == 0
    num_lines1 = len(read_log().splitlines())
    assert runner.invoke(tb_install, cli).exit_code == 0
    num_lines2 = len(read_log().splitlines())
    assert num_lines1 == num_lines2


def test_log_path_option(connector, runner, fs):
    """--log-path overrides the environment default."""
    result = runner.invoke(tb_install, ["--log-path", "custom.log", "--force-flush", *INSTALL])
    assert result.exit_code == 0
    assert Path("custom.log").exists()
    assert not Path(LOG_PATH).exists()


def test_startup_logging(connector, runner, fs):
    """Startup diagnostics land in the flight recorder."""
    result = runner.invoke(
        tb_install,
        ["--log-path", "startup.log", "--flight-recorder", "--force-flush", *INSTALL],
        env={"TB_INSTALL_LOGGER_LEVEL": "cassandra.cluster=INFO"},
    )
    assert result.exit_code == 0
    content = read_log("startup.log")
    assert_in_output(r"ThingsBoard install tool \d+\.\d+\.\d+", content)
    assert_in_output(r"console=WARNING", content)
    assert_in_output(r"flight-recorder=ON", content)
    assert_in_output(r"Python: \d+\.\d+\.\d+", content)
    assert_in_output(r"Platform: .+", content)
    assert_in_output(r"PID: \d+", content)
    assert_in_output(r"CWD: .+", content)
    assert_in_output(r"cassandra-driver: \d+\.\d+\.\d+", content)
    assert_in_output(r"Handlers: .+", content)
    assert_in_output(r"Redactor mode: lenient", content)
    assert_in_output(
        r"Flight recorder: path=startup\.log, capacity=2000, flush_on_close=True",
        content,
    )
    assert_in_output(
        r"Per-logger overrides: {'cassandra': 'WARNING', 'cassandra.cluster': 'INFO'}",
        content,
    )


def test_strict_redaction_masks_username(connector, runner, fs):
    """--redactor-mode strict masks usernames in the logged settings."""
    result = runner.invoke(
        tb_install,
        ["-vv", "--redactor-mode", "STRICT", *INSTALL, "--cassandra.username=tb_admin"],
    )
    assert result.exit_code == 0
    assert_in_output(r"cassandra\.username = \*\*\*", result.output)
    assert_not_in_output(r"cassandra\.username = tb_admin", result.output)
