"""Runs the selected install or upgrade against a bootstrapped session."""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext
from typing import TYPE_CHECKING

from tbinstall.domain.modes import InstallMode, Mode, UpgradeMode

if TYPE_CHECKING:
    from tbinstall.domain.consistency import ConsistencyLevelResolver
    from tbinstall.domain.value_objects import ClusterBootstrapConfig
    from tbinstall.interfaces.installer import Installer
    from tbinstall.service_layer.bootstrapper import ClusterBootstrapper
    from tbinstall.service_layer.environment import Environment

logger = logging.getLogger(__name__)


def run_install(  # pylint: disable=too-many-arguments
    *,
    mode: Mode,
    environment: Environment,
    cluster_config: ClusterBootstrapConfig,
    consistency: ConsistencyLevelResolver,
    bootstrapper: ClusterBootstrapper,
    installer: Installer,
    connect_scope: Callable[[], AbstractContextManager[object]] = nullcontext,
) -> None:
    """Connect to the cluster and hand the session to the installer.

    ``connect_scope`` is entered around the cluster bootstrap only and left
    before the installer starts. The session is closed on every exit path,
    including installer failures.
    """
    with connect_scope():
        session = bootstrapper.connect(cluster_config, consistency)
    with session:
        if isinstance(mode, UpgradeMode):
            installer.upgrade_from(mode.from_version, environment, session)
        elif isinstance(mode, InstallMode):
            installer.install_system_data(environment, session)
        else:  # pragma: no cover
            raise TypeError(f"Unsupported mode: {mode!r}")
    logger.info("Install tool finished")
