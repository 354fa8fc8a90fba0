"""Operating modes of the install tool.

The tool either installs the system data from scratch or upgrades an
existing installation from a given version. The mode is selected from the
non-option tokens ``install`` / ``upgrade``; exactly one of them is required.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .arguments import ApplicationArguments
from .errors import UsageError

INSTALL_OPTION = "install"
UPGRADE_OPTION = "upgrade"
FROM_VERSION_OPTION = "fromVersion"

INVALID_MODE_MSG = "Invalid options specified! Valid options: install | upgrade"
INVALID_UPGRADE_MSG = (
    "Invalid upgrade option values specified! Valid upgrade option values: "
    "--fromVersion=<ThingsBoard version, e.g. 1.2.3>"
)


@dataclass(frozen=True)
class Mode:
    """Base class for operating modes."""


@dataclass(frozen=True)
class InstallMode(Mode):
    """Install the system data into an empty keyspace."""


@dataclass(frozen=True)
class UpgradeMode(Mode):
    """Upgrade an existing installation from ``from_version``."""

    from_version: str


def select_mode(args: ApplicationArguments | Iterable[str]) -> Mode:
    """Select the operating mode from the command-line arguments.

    Args:
        args: Parsed arguments, or the raw tokens to parse.

    Returns:
        `InstallMode` or `UpgradeMode` carrying the version to upgrade from.

    Raises:
        UsageError: If neither or both of ``install``/``upgrade`` are given, or
            ``upgrade`` is given without exactly one non-blank ``--fromVersion``
            value.
    """
    if not isinstance(args, ApplicationArguments):
        args = ApplicationArguments.parse(args)

    is_install = INSTALL_OPTION in args.non_option_args
    is_upgrade = UPGRADE_OPTION in args.non_option_args
    if is_install == is_upgrade:
        raise UsageError(INVALID_MODE_MSG)
    if is_install:
        return InstallMode()

    values = args.option_values(FROM_VERSION_OPTION)
    if values is None or len(values) != 1 or not values[0].strip():
        raise UsageError(INVALID_UPGRADE_MSG)
    return UpgradeMode(from_version=values[0].strip())
