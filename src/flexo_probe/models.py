"""Value types shared by the request emitter, the response framer and the
session driver.

All types are frozen dataclasses so tests can compare and hash them by value.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .errors import ConfigurationError

DEFAULT_TIMEOUT = 5.0  # seconds


@dataclass(frozen=True)
class ConnectionAddress:
    """One TCP endpoint."""

    host: str
    port: int

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class AutoGenerated:
    """Derive a minimal ``GET <path> HTTP/1.1`` header with a ``Host`` field."""


@dataclass(frozen=True)
class Custom:
    """Send ``header`` verbatim, terminating blank line included.

    Used to probe the server with malformed or unusual request framing.
    """

    header: str | bytes


HeaderMode = AutoGenerated | Custom


@dataclass(frozen=True)
class RequestSpec:
    """A single GET request of a session.

    Attributes:
        path: Request target, e.g. ``"/packages/foo.tar.zst"``.
        header_mode: ``AutoGenerated()`` (default) or ``Custom(header)``.
    """

    path: str
    header_mode: HeaderMode = field(default_factory=AutoGenerated)


@dataclass(frozen=True)
class SessionSpec:
    """One TCP connection and the requests sent over it, in order.

    Attributes:
        connection: Address of the server under test.
        requests: Requests sent sequentially on the connection.
        timeout: Wall-clock bound in seconds for the whole session, from
            connection open through the last result.

    Raises:
        ConfigurationError: If ``timeout`` is not a positive finite number.
    """

    connection: ConnectionAddress
    requests: tuple[RequestSpec, ...] = ()
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        # Freeze list input so the session stays hashable
        object.__setattr__(self, "requests", tuple(self.requests))
        if not math.isfinite(self.timeout) or self.timeout <= 0:
            raise ConfigurationError(
                f"Session timeout must be positive and finite, got {self.timeout!r}"
            )


@dataclass(frozen=True)
class ChunkPattern:
    """How an outbound request header is split into writes.

    Attributes:
        chunk_size: Maximum number of bytes per ``sendall`` call.
        wait_interval: Pause in seconds between two successive writes.

    Raises:
        ConfigurationError: If ``chunk_size`` is not positive or
            ``wait_interval`` is negative or not finite.
    """

    chunk_size: int
    wait_interval: float = 0.0

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise ConfigurationError(f"chunk_size must be positive, got {self.chunk_size!r}")
        if not math.isfinite(self.wait_interval) or self.wait_interval < 0:
            raise ConfigurationError(
                f"wait_interval must be finite and not negative, got {self.wait_interval!r}"
            )

    @classmethod
    def whole(cls, data: bytes) -> ChunkPattern:
        """Pattern that sends ``data`` as one write with no delay."""
        return cls(chunk_size=max(len(data), 1))


@dataclass(frozen=True)
class HeaderResult:
    """Fields extracted from a response header."""

    status_code: int
    content_length: int
    cached: bool = False


@dataclass(frozen=True)
class BodyResult:
    """Digest of a response body.

    Attributes:
        digest: SHA-256 of the exact body bytes read.
        size: Number of body bytes read; equals ``Content-Length``.
    """

    digest: bytes
    size: int

    @property
    def hexdigest(self) -> str:
        return self.digest.hex()


@dataclass(frozen=True)
class HttpGetResult:
    """Outcome of one request/response exchange.

    ``body`` is ``None`` exactly when the response announced
    ``Content-Length: 0``.
    """

    header: HeaderResult
    body: BodyResult | None = None


SessionResult = list[HttpGetResult]
