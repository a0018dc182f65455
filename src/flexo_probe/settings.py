"""ProbeSettings: defaults for the ``flexo-probe`` command."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass

from .errors import ConfigurationError
from .logging import LOG_FORMATS
from .models import DEFAULT_TIMEOUT
from .wire.framer import MAX_HEADER_SIZE

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class ProbeSettings:
    """Settings read by the command line runner.

    The session driver itself never reads the environment; these values
    only seed the ``flexo-probe`` command's defaults.

    Attributes:
        timeout: Session timeout in seconds.
        max_header_size: Upper bound on response header bytes.
        log_format: ``"text"`` or ``"json"``.
        verbose: Enable ``DEBUG`` logging.
    """

    timeout: float = DEFAULT_TIMEOUT
    max_header_size: int = MAX_HEADER_SIZE
    log_format: str = "text"
    verbose: bool = False

    @classmethod
    def from_environment(cls) -> ProbeSettings:
        """Create settings from environment variables.

        Recognized env vars:
        - FLEXO_PROBE_TIMEOUT: Session timeout in seconds (default: 5)
        - FLEXO_PROBE_MAX_HEADER_SIZE: Header size bound in bytes (default: 4096)
        - FLEXO_PROBE_LOG_FORMAT: 'text' or 'json' (default: text)
        - FLEXO_PROBE_VERBOSE: Set to '1' for debug logging

        Raises:
            ConfigurationError: If a variable holds an invalid value.
        """
        timeout = _parse_number("FLEXO_PROBE_TIMEOUT", float, DEFAULT_TIMEOUT)
        if not math.isfinite(timeout) or timeout <= 0:
            raise ConfigurationError(
                f"FLEXO_PROBE_TIMEOUT must be positive and finite, got {timeout}"
            )

        max_header_size = _parse_number("FLEXO_PROBE_MAX_HEADER_SIZE", int, MAX_HEADER_SIZE)
        if max_header_size < 4:
            raise ConfigurationError(
                f"FLEXO_PROBE_MAX_HEADER_SIZE must be at least 4, got {max_header_size}"
            )

        log_format = os.environ.get("FLEXO_PROBE_LOG_FORMAT", "text").strip().lower()
        if log_format not in LOG_FORMATS:
            raise ConfigurationError(
                f"FLEXO_PROBE_LOG_FORMAT must be one of {LOG_FORMATS}, got {log_format!r}"
            )

        verbose = os.environ.get("FLEXO_PROBE_VERBOSE", "").strip().lower() in _TRUE_VALUES

        return cls(
            timeout=timeout,
            max_header_size=max_header_size,
            log_format=log_format,
            verbose=verbose,
        )


def _parse_number(name: str, kind: type, default: float | int) -> float | int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return kind(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} is not a valid {kind.__name__}: {raw!r}") from e
