"""Test the bootstrap function."""

import logging
from pathlib import Path

import pytest

from tbinstall.bootstrap import bootstrap, run
from tbinstall.bootstrap.bootstrap import update_arguments
from tbinstall.domain.consistency import ConsistencyLevel
from tbinstall.domain.errors import ConfigurationError, UsageError
from tbinstall.domain.modes import InstallMode, UpgradeMode
from tbinstall.domain.value_objects import ContactPoint
from tbinstall.interfaces.redactor import RedactorMode

from tests.fixtures.cluster import FakeConnector
from tests.fixtures.config_files import write_config

# pylint: disable=redefined-outer-name
# pylint: disable=unused-argument


@pytest.fixture
def environ(data_dir: Path) -> dict[str, str]:
    """Process environment pointing the packaged config at the test data dir."""
    return {"TB_DATA_DIR": str(data_dir)}


@pytest.fixture
def connector() -> FakeConnector:
    """A connector that succeeds at once."""
    return FakeConnector()


class TestUpdateArguments:
    """Tests for the update_arguments function."""

    @staticmethod
    def test_appends_config_name():
        """The thingsboard config name is added when none is given."""
        assert update_arguments(["install"]) == [
            "install",
            "--spring.config.name=thingsboard",
        ]

    @staticmethod
    def test_keeps_explicit_config_name():
        """An explicit config name is left alone."""
        args = ["install", "--spring.config.name=custom"]
        assert update_arguments(args) == args


class TestBootstrap:
    """Tests for the bootstrap function."""

    @staticmethod
    def test_install_container(workdir, environ, connector, installer):
        """Bootstrap wires an install run from the packaged defaults."""
        container = bootstrap(
            ["install"], environ=environ, connector=connector, installer=installer
        )
        assert container.mode == InstallMode()
        assert not container.is_upgrade
        assert container.installer is installer
        config = container.cluster_config
        assert config.cluster_name == "Thingsboard Cluster"
        assert config.keyspace_name == "thingsboard"
        assert config.contact_points == (ContactPoint("127.0.0.1", 9042),)
        assert config.init_timeout_ms == 300000
        assert config.socket.keep_alive is True
        assert config.socket.so_linger is None
        assert container.consistency.default_read() is ConsistencyLevel.ONE
        assert connector.attempts == 0

    @staticmethod
    def test_upgrade_container(workdir, environ, connector, installer):
        """The upgrade mode carries the version to upgrade from."""
        container = bootstrap(
            ["upgrade", "--fromVersion=3.6.4"],
            environ=environ,
            connector=connector,
            installer=installer,
        )
        assert container.mode == UpgradeMode("3.6.4")
        assert container.is_upgrade

    @staticmethod
    def test_local_file_overrides_packaged_defaults(
        workdir, environ, connector, installer
    ):
        """./config/thingsboard.yml wins over the packaged file."""
        write_config(
            workdir / "config",
            "thingsboard.yml",
            """
            cassandra:
              url: db1:9042,db2:9042
              query:
                write_consistency_level: QUORUM
            """,
        )
        container = bootstrap(
            ["install"], environ=environ, connector=connector, installer=installer
        )
        assert container.cluster_config.contact_points == (
            ContactPoint("db1", 9042),
            ContactPoint("db2", 9042),
        )
        assert container.consistency.default_write() is ConsistencyLevel.QUORUM
        assert container.cluster_config.keyspace_name == "thingsboard"

    @staticmethod
    def test_environment_and_arguments_override_files(
        workdir, environ, connector, installer
    ):
        """Environment variables beat files; arguments beat both."""
        write_config(workdir, "thingsboard.properties", "cassandra.url=file:9042\n")
        container = bootstrap(
            ["install", "--cassandra.keyspace_name=tb_test"],
            environ={
                **environ,
                "CASSANDRA_URL": "env:9042",
                "CASSANDRA_KEYSPACE_NAME": "tb_env",
            },
            connector=connector,
            installer=installer,
        )
        assert container.cluster_config.contact_points == (ContactPoint("env", 9042),)
        assert container.cluster_config.keyspace_name == "tb_test"

    @staticmethod
    def test_usage_error_before_connect(workdir, environ, connector, installer):
        """A missing mode fails before the cluster is touched."""
        with pytest.raises(UsageError, match="Invalid options specified"):
            bootstrap([], environ=environ, connector=connector, installer=installer)
        assert connector.attempts == 0

    @staticmethod
    def test_upgrade_without_version(workdir, environ, connector, installer):
        """upgrade requires --fromVersion."""
        with pytest.raises(UsageError, match="--fromVersion"):
            bootstrap(
                ["upgrade"], environ=environ, connector=connector, installer=installer
            )

    @staticmethod
    @pytest.mark.parametrize(
        "arg, message",
        [
            ("--cassandra.query.read_consistency_level=SOMETIMES", "Valid levels"),
            ("--cassandra.url=db1", "expected host:port"),
            ("--cassandra.compression=zstd", "Unsupported cassandra compression"),
            ("--cassandra.init_timeout_ms=soon", "is not an integer"),
        ],
    )
    def test_configuration_errors_before_connect(
        workdir, environ, connector, installer, arg, message
    ):
        """Invalid settings fail before the cluster is touched."""
        with pytest.raises(ConfigurationError, match=message):
            bootstrap(
                ["install", arg],
                environ=environ,
                connector=connector,
                installer=installer,
            )
        assert connector.attempts == 0

    @staticmethod
    def test_missing_data_dir(workdir, tmp_path, connector, installer):
        """A data dir that does not exist is rejected."""
        with pytest.raises(ConfigurationError, match="thingsboard.data.dir"):
            bootstrap(
                ["install", f"--thingsboard.data.dir={tmp_path / 'nope'}"],
                environ={},
                connector=connector,
                installer=installer,
            )

    @staticmethod
    @pytest.mark.parametrize(
        "mode, username_shown", [(RedactorMode.LENIENT, True), (RedactorMode.STRICT, False)]
    )
    def test_debug_log_redacts_secrets(
        workdir, environ, connector, installer, caplog, mode, username_shown
    ):
        """The resolved cluster settings are logged with secrets masked."""
        caplog.set_level(logging.DEBUG, logger="tbinstall.bootstrap")
        bootstrap(
            [
                "install",
                "--cassandra.username=tb_admin",
                "--cassandra.password=s3cr3t",
            ],
            environ=environ,
            connector=connector,
            installer=installer,
            redactor_mode=mode,
        )
        assert "cassandra.password = ***" in caplog.text
        assert "s3cr3t" not in caplog.text
        assert ("tb_admin" in caplog.text) is username_shown


class TestRun:
    """Tests for the run function."""

    @staticmethod
    def test_install_run(workdir, environ, connector, installer):
        """run bootstraps the session and hands it to the installer."""
        container = bootstrap(
            ["install"], environ=environ, connector=connector, installer=installer
        )
        run(container)
        assert connector.attempts == 1
        kind, environment, session = installer.calls[0]
        assert kind == "install"
        assert environment is container.environment
        assert session.keyspace == "thingsboard"
        assert session.closed

    @staticmethod
    def test_upgrade_run(workdir, environ, connector, installer):
        """The upgrade version reaches the installer."""
        container = bootstrap(
            ["upgrade", "--fromVersion=3.6.4"],
            environ=environ,
            connector=connector,
            installer=installer,
        )
        run(container)
        assert installer.calls[0][:2] == ("upgrade", "3.6.4")
