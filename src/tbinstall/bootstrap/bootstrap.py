"""Wire the install tool from command-line arguments."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from contextlib import AbstractContextManager, nullcontext
from dataclasses import asdict, dataclass

from tbinstall import config
from tbinstall.adapters.cassandra_cluster import CassandraClusterConnector
from tbinstall.adapters.installer import LoggingInstaller
from tbinstall.adapters.redactor import Redactor
from tbinstall.domain.arguments import ApplicationArguments
from tbinstall.domain.consistency import ConsistencyLevelResolver
from tbinstall.domain.modes import Mode, UpgradeMode, select_mode
from tbinstall.domain.value_objects import ClusterBootstrapConfig
from tbinstall.interfaces.cluster import ClusterConnector
from tbinstall.interfaces.installer import Installer
from tbinstall.interfaces.redactor import Redactor as AbstractRedactor
from tbinstall.interfaces.redactor import RedactorMode
from tbinstall.service_layer.bootstrapper import ClusterBootstrapper
from tbinstall.service_layer.configuration_resolver import ConfigurationResolver
from tbinstall.service_layer.environment import Environment
from tbinstall.service_layer.install import run_install

logger = logging.getLogger(__name__)

CONFIG_NAME_ARG_PREFIX = f"--{config.CONFIG_NAME_PROPERTY}"
DEFAULT_CONFIG_NAME_ARG = (
    f"{CONFIG_NAME_ARG_PREFIX}={config.THINGSBOARD_CONFIG_FILE_NAME}"
)


@dataclass(frozen=True)
class AppContainer:  # pylint: disable=too-many-instance-attributes
    """A class to hold the wired tool for one run."""

    mode: Mode
    environment: Environment
    cluster_config: ClusterBootstrapConfig
    consistency: ConsistencyLevelResolver
    bootstrapper: ClusterBootstrapper
    installer: Installer
    redactor: AbstractRedactor

    @property
    def is_upgrade(self) -> bool:
        return isinstance(self.mode, UpgradeMode)


def update_arguments(args: Iterable[str]) -> list[str]:
    """Append ``--spring.config.name=thingsboard`` unless a config name is given."""
    updated = list(args)
    if not any(arg.startswith(CONFIG_NAME_ARG_PREFIX) for arg in updated):
        updated.append(DEFAULT_CONFIG_NAME_ARG)
    return updated


def bootstrap(  # pylint: disable=too-many-arguments
    args: Iterable[str],
    *,
    environ: Mapping[str, str] | None = None,
    connector: ClusterConnector | None = None,
    installer: Installer | None = None,
    redactor_mode: RedactorMode = RedactorMode.LENIENT,
    resolver: ConfigurationResolver | None = None,
) -> AppContainer:
    """Resolve configuration and wire the collaborators for one run.

    Nothing touches the network here; every usage and configuration error
    surfaces before the cluster bootstrap starts.

    Raises:
        UsageError: If the mode arguments are missing or contradictory.
        ConfigurationError: If the configuration is missing or invalid.
    """
    parsed = ApplicationArguments.parse(update_arguments(args))
    mode = select_mode(parsed)

    resolver = resolver or ConfigurationResolver(environ=environ)
    environment = resolver.resolve(parsed)
    cluster_config = config.build_cluster_config(environment)

    consistency = ConsistencyLevelResolver(
        cluster_config.read_consistency_level, cluster_config.write_consistency_level
    )
    # validate the configured names now rather than mid-bootstrap
    consistency.default_read()
    consistency.default_write()

    redactor = Redactor(redactor_mode)
    _log_cluster_config(cluster_config, redactor)

    return AppContainer(
        mode=mode,
        environment=environment,
        cluster_config=cluster_config,
        consistency=consistency,
        bootstrapper=ClusterBootstrapper(connector or CassandraClusterConnector()),
        installer=installer or LoggingInstaller(),
        redactor=redactor,
    )


def run(
    container: AppContainer,
    connect_scope: Callable[[], AbstractContextManager[object]] = nullcontext,
) -> None:
    """Bootstrap the cluster session and run the selected install or upgrade.

    ``connect_scope`` wraps the cluster bootstrap only, not the installer.
    """
    run_install(
        mode=container.mode,
        environment=container.environment,
        cluster_config=container.cluster_config,
        consistency=container.consistency,
        bootstrapper=container.bootstrapper,
        installer=container.installer,
        connect_scope=connect_scope,
    )


def _log_cluster_config(
    cluster_config: ClusterBootstrapConfig, redactor: AbstractRedactor
) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    values = asdict(cluster_config)
    values["contact_points"] = ",".join(str(p) for p in cluster_config.contact_points)
    sanitized = redactor.sanitize_properties(
        {f"cassandra.{key}": value for key, value in values.items()}
    )
    for key, value in sanitized.items():
        logger.debug("%s = %s", key, value)
