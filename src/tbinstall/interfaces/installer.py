"""Interface of the schema/data installer that runs after the bootstrap."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tbinstall.interfaces.cluster import ClusterSession
    from tbinstall.service_layer.environment import Environment


class Installer(abc.ABC):
    """Receives the resolved configuration and a live session."""

    @abc.abstractmethod
    def install_system_data(
        self, config: Environment, session: ClusterSession
    ) -> None:
        """Install the system data into an empty keyspace."""

    @abc.abstractmethod
    def upgrade_from(
        self, version: str, config: Environment, session: ClusterSession
    ) -> None:
        """Upgrade an existing installation from ``version``."""
