"""Flexo probe.

Protocol-level HTTP/1.1 client for exercising a server under controlled
network conditions: request headers fragmented into paced writes, several
requests on one connection, a single wall-clock bound per session.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("flexo-probe")
except PackageNotFoundError:
    __version__ = "0.0.0"

from .errors import (
    ConfigurationError,
    ConnectionFailedError,
    HeaderTooLargeError,
    IncompleteHeaderError,
    MalformedHeaderError,
    MissingHeaderFieldError,
    ProbeError,
    ShortBodyError,
)
from .logging import configure_logging, get_logger
from .models import (
    AutoGenerated,
    BodyResult,
    ChunkPattern,
    ConnectionAddress,
    Custom,
    HeaderResult,
    HttpGetResult,
    RequestSpec,
    SessionResult,
    SessionSpec,
)
from .session import SessionDriver, http_get, run_session
from .settings import ProbeSettings

__all__ = [
    "AutoGenerated",
    "BodyResult",
    "ChunkPattern",
    "ConfigurationError",
    "ConnectionAddress",
    "ConnectionFailedError",
    "Custom",
    "HeaderResult",
    "HeaderTooLargeError",
    "HttpGetResult",
    "IncompleteHeaderError",
    "MalformedHeaderError",
    "MissingHeaderFieldError",
    "ProbeError",
    "ProbeSettings",
    "RequestSpec",
    "SessionDriver",
    "SessionResult",
    "SessionSpec",
    "ShortBodyError",
    "configure_logging",
    "get_logger",
    "http_get",
    "run_session",
]
