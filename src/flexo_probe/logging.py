"""Structured logging for sessions and the wire layer.

The session driver logs through ``structlog``; the wire modules log
byte-level events through plain ``logging``. Both end up on one handler
with one renderer, so a session's output reads as a single stream.
Events emitted inside ``session_context`` carry the session's id and
address, including those from the worker thread's wire calls.

Usage::

    from flexo_probe.logging import configure_logging, get_logger

    configure_logging(log_format="json", verbose=True)
    logger = get_logger(__name__)
    logger.info("session_started", address="localhost:9999", requests=2)
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

import structlog

from .errors import ConfigurationError

LOG_FORMATS = ("text", "json")


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(sort_keys=True)
    if log_format == "text":
        return structlog.dev.ConsoleRenderer(colors=False)
    raise ConfigurationError(
        f"Unknown log format {log_format!r}; expected one of {', '.join(LOG_FORMATS)}"
    )


def configure_logging(
    log_format: str = "text",
    verbose: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Route structlog and stdlib records to one handler.

    Call once at startup. Replaces any handlers already on the root logger.

    Args:
        log_format: ``"json"`` (one object per line) or ``"text"``.
        verbose: Log at ``DEBUG``, which includes wire events; otherwise
            ``INFO``.
        stream: Destination; defaults to ``sys.stderr`` so stdout carries
            only results.

    Raises:
        ConfigurationError: If ``log_format`` is not a known format.
    """
    renderer = _renderer(log_format)

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.DEBUG if verbose else logging.INFO)


@contextmanager
def session_context(address: object, session_id: int) -> Iterator[None]:
    """Tag every event logged in this context with the session's identity.

    Context variables are per thread, so enter this inside the thread
    doing the work.
    """
    with structlog.contextvars.bound_contextvars(session_id=session_id, address=str(address)):
        yield


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
