"""Error hierarchy for the Flexo probe.

Every error raised inside a session worker is fatal to that worker: it is
never retried and never turned into a partial result. A session timeout is
*not* an error and has no class here; it is reported as ``None``.

Exit code ranges:
- 30-39: Connection errors
- 40-49: Header errors
- 50-59: Body errors
- 60-69: Configuration errors
"""

from __future__ import annotations


class ProbeError(Exception):
    """Base error for all probe errors.

    Every subclass defines a class-level ``exit_code`` so the command line
    runner can map exceptions to process exit codes automatically.

    Attributes:
        exit_code: Process exit code returned when this error reaches
            the ``flexo-probe`` command. Defaults to ``1``.

    Args:
        message: Human-readable error description.
        exit_code: Override the class-level exit code for this instance.
    """

    exit_code: int = 1

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


# ============================================================================
# Connection errors (30-39)
# ============================================================================


class ConnectionFailedError(ProbeError):
    """Connecting, writing to or reading from the peer failed.

    Also raised when a single socket operation exceeds the socket timeout.
    """

    exit_code = 30


# ============================================================================
# Header errors (40-49)
# ============================================================================


class MalformedHeaderError(ProbeError):
    """Response header could not be interpreted (exit codes 40–49).

    Raised directly for non-decimal status codes or content lengths.
    """

    exit_code = 40


class HeaderTooLargeError(MalformedHeaderError):
    """No header terminator was found within the maximum header size."""

    exit_code = 41


class IncompleteHeaderError(MalformedHeaderError):
    """Peer closed the connection before the header terminator arrived."""

    exit_code = 42


class MissingHeaderFieldError(MalformedHeaderError):
    """A required header field (e.g. ``Content-Length``) is absent."""

    exit_code = 43


# ============================================================================
# Body errors (50-59)
# ============================================================================


class ShortBodyError(ProbeError):
    """Peer closed the connection before ``Content-Length`` bytes arrived.

    Attributes:
        expected: Number of body bytes announced by the header.
        received: Number of body bytes actually read.
    """

    exit_code = 50

    def __init__(
        self,
        message: str,
        *,
        expected: int = 0,
        received: int = 0,
        exit_code: int | None = None,
    ):
        super().__init__(message, exit_code=exit_code)
        self.expected = expected
        self.received = received


# ============================================================================
# Configuration errors (60-69)
# ============================================================================


class ConfigurationError(ProbeError):
    """Invalid session, chunk pattern or environment settings."""

    exit_code = 60
