"""Cluster bootstrap with bounded, cancellable retry.

`ClusterBootstrapper.connect` keeps asking its `ClusterConnector` for a
session until one attempt succeeds or the init deadline passes:

- ``deadline = now + init_timeout``.
- The first attempt always runs. A further attempt starts only while
  ``now < deadline``; an attempt that is already running is never aborted, so
  a connection completing after the deadline still counts as success.
- Between attempts the bootstrapper waits ``init_retry_interval``, cut short
  at the deadline, on an event that `cancel` sets, so an operator shutdown
  interrupts the wait.
- A session connected after `cancel` was called is closed and discarded.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from tbinstall.domain.consistency import ConsistencyLevelResolver
from tbinstall.domain.errors import (
    BootstrapCancelledError,
    BootstrapTimeoutError,
    ConnectivityError,
)

if TYPE_CHECKING:
    from tbinstall.domain.value_objects import ClusterBootstrapConfig
    from tbinstall.interfaces.cluster import ClusterConnector, ClusterSession

logger = logging.getLogger(__name__)

MS_PER_SECOND = 1000.0


class ClusterBootstrapper:
    """Opens the cluster session the installer runs against.

    Args:
        connector: Makes a single connection attempt.
        clock: Monotonic clock in seconds; injectable for tests.
        cancel_event: Event that interrupts the retry wait when set.
    """

    def __init__(
        self,
        connector: ClusterConnector,
        clock: Callable[[], float] = time.monotonic,
        cancel_event: threading.Event | None = None,
    ) -> None:
        self._connector = connector
        self._clock = clock
        self._cancel_event = cancel_event or threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def cancel(self) -> None:
        """Stop retrying; a pending wait returns immediately."""
        self._cancel_event.set()

    def connect(
        self,
        config: ClusterBootstrapConfig,
        consistency: ConsistencyLevelResolver | None = None,
    ) -> ClusterSession:
        """Connect to the cluster, retrying until the init deadline.

        Args:
            config: Connection parameters.
            consistency: Default consistency levels for the session; resolved
                from ``config`` when not given.

        Returns:
            The connected session. The caller owns it and must close it.

        Raises:
            BootstrapTimeoutError: If no attempt succeeded before the deadline.
            BootstrapCancelledError: If `cancel` was called.
        """
        if consistency is None:
            consistency = ConsistencyLevelResolver(
                config.read_consistency_level, config.write_consistency_level
            )
        retry_interval = config.init_retry_interval_ms / MS_PER_SECOND
        deadline = self._clock() + config.init_timeout_ms / MS_PER_SECOND
        attempts = 0
        last_error: ConnectivityError | None = None

        while True:
            if self.cancelled:
                raise BootstrapCancelledError(attempts)
            attempts += 1
            try:
                cluster_session = self._connector.connect(config, consistency)
            except ConnectivityError as e:
                last_error = e
                remaining = deadline - self._clock()
                if remaining <= 0:
                    break
                logger.warning(
                    "Failed to initialize cassandra cluster due to %s. Will retry in %d ms",
                    e,
                    config.init_retry_interval_ms,
                )
                if self._cancel_event.wait(min(retry_interval, remaining)):
                    raise BootstrapCancelledError(attempts) from e
                if self._clock() >= deadline:
                    break
                continue
            if self.cancelled:
                # cancelled while the attempt was running
                cluster_session.close()
                raise BootstrapCancelledError(attempts)
            logger.info(
                "Connected to cassandra cluster after %d attempt(s)", attempts
            )
            return cluster_session

        logger.error(
            "Giving up on cassandra cluster after %d attempt(s): %s",
            attempts,
            last_error,
        )
        raise BootstrapTimeoutError(
            config.init_timeout_ms, attempts, last_error
        ) from last_error
