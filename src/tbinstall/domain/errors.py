"""Domain-layer error definitions."""

# ============================================================================
#                           General tool errors
# ============================================================================


class InstallToolError(Exception):
    """Base class for install tool errors."""


class UsageError(InstallToolError):
    """Raised when the command-line arguments are contradictory or incomplete."""


class ConfigurationError(InstallToolError):
    """Raised when the resolved configuration is missing or invalid."""


# ============================================================================
#                   Cluster bootstrap related errors
# ============================================================================


class ConnectivityError(InstallToolError):
    """Raised when a single attempt to connect to the cluster fails."""


class BootstrapTimeoutError(InstallToolError):
    """Raised when no connection attempt succeeded before the init deadline."""

    def __init__(
        self, timeout_ms: int, attempts: int, last_error: Exception | None = None
    ) -> None:
        reason = f": {last_error}" if last_error is not None else ""
        super().__init__(
            f"Failed to connect to the cassandra cluster within {timeout_ms} ms "
            f"after {attempts} attempt(s){reason}"
        )
        self.timeout_ms = timeout_ms
        self.attempts = attempts
        self.last_error = last_error


class BootstrapCancelledError(InstallToolError):
    """Raised when the cluster bootstrap is cancelled by the operator."""

    def __init__(self, attempts: int) -> None:
        super().__init__(
            f"Cassandra cluster bootstrap cancelled after {attempts} attempt(s)."
        )
        self.attempts = attempts
