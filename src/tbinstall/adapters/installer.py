"""Default installer: reports what would be installed or upgraded.

Schema creation, system/demo data loading and version migrations are carried
out by the migration engine; this implementation only records the request
together with the data directories it would read from.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tbinstall.config import build_install_paths
from tbinstall.interfaces.installer import Installer

if TYPE_CHECKING:
    from tbinstall.interfaces.cluster import ClusterSession
    from tbinstall.service_layer.environment import Environment

logger = logging.getLogger(__name__)

SCHEMA_CQL = "schema.cql"


class LoggingInstaller(Installer):
    """Installer that logs the requested operation and performs no writes."""

    def install_system_data(
        self, config: Environment, session: ClusterSession
    ) -> None:
        paths = build_install_paths(config)
        logger.info("Going to install ThingsBoard System Data ...")
        logger.debug(
            "keyspace=%s, schema=%s, system data=%s",
            session.keyspace,
            paths.data_dir / SCHEMA_CQL,
            paths.system_json_dir,
        )

    def upgrade_from(
        self, version: str, config: Environment, session: ClusterSession
    ) -> None:
        paths = build_install_paths(config)
        logger.info("Going to upgrade ThingsBoard from version %s ...", version)
        logger.debug("keyspace=%s, data dir=%s", session.keyspace, paths.data_dir)
