"""Unit tests for tbinstall.domain.errors."""

from tbinstall.domain import errors


class TestBootstrapTimeoutError:
    """Tests for BootstrapTimeoutError."""

    @staticmethod
    def test_attributes() -> None:
        """The error carries the timeout, attempt count and last error."""
        cause = errors.ConnectivityError("connection refused")
        error = errors.BootstrapTimeoutError(300000, 4, cause)
        assert error.timeout_ms == 300000
        assert error.attempts == 4
        assert error.last_error is cause

    @staticmethod
    def test_error_message() -> None:
        """The message names the timeout, the attempts and the last failure."""
        error = errors.BootstrapTimeoutError(
            0, 1, errors.ConnectivityError("connection refused")
        )
        assert str(error) == (
            "Failed to connect to the cassandra cluster within 0 ms "
            "after 1 attempt(s): connection refused"
        )

    @staticmethod
    def test_error_message_without_cause() -> None:
        """Without a last error the message ends after the attempt count."""
        error = errors.BootstrapTimeoutError(1000, 2)
        assert str(error).endswith("after 2 attempt(s)")


class TestBootstrapCancelledError:
    """Tests for BootstrapCancelledError."""

    @staticmethod
    def test_attributes_and_message() -> None:
        """The error reports how many attempts ran before cancellation."""
        error = errors.BootstrapCancelledError(3)
        assert error.attempts == 3
        assert str(error) == "Cassandra cluster bootstrap cancelled after 3 attempt(s)."


def test_hierarchy():
    """Every tool error derives from InstallToolError."""
    for error_type in (
        errors.UsageError,
        errors.ConfigurationError,
        errors.ConnectivityError,
        errors.BootstrapTimeoutError,
        errors.BootstrapCancelledError,
    ):
        assert issubclass(error_type, errors.InstallToolError)
