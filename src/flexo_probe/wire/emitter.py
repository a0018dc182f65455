"""Request emission: build a GET header and write it in paced chunks."""

from __future__ import annotations

import logging
import socket
import time
from collections.abc import Iterator

from ..errors import ConnectionFailedError
from ..models import AutoGenerated, ChunkPattern, ConnectionAddress, Custom, RequestSpec

logger = logging.getLogger(__name__)


def build_request_header(path: str, host: str) -> bytes:
    """Return ``GET <path> HTTP/1.1\\r\\nHost: <host>\\r\\n\\r\\n`` as bytes."""
    return f"GET {path} HTTP/1.1\r\nHost: {host}\r\n\r\n".encode("utf-8")


def request_bytes(request: RequestSpec, address: ConnectionAddress) -> bytes:
    """Resolve the header mode of ``request`` into the exact bytes to send."""
    mode = request.header_mode
    if isinstance(mode, AutoGenerated):
        return build_request_header(request.path, address.host)
    if isinstance(mode, Custom):
        if isinstance(mode.header, bytes):
            return mode.header
        return mode.header.encode("utf-8")
    raise TypeError(f"Unknown header mode: {mode!r}")


def iter_chunks(data: bytes, chunk_size: int) -> Iterator[bytes]:
    """Yield consecutive slices of ``data`` no longer than ``chunk_size``."""
    for start in range(0, len(data), chunk_size):
        yield data[start:start + chunk_size]


def send_request(sock: socket.socket, data: bytes, pattern: ChunkPattern) -> None:
    """Write ``data`` to ``sock`` split and paced according to ``pattern``.

    The delay is applied between writes only, so a single-chunk request is
    sent without any pause.

    Raises:
        ConnectionFailedError: If any write fails.
    """
    for index, chunk in enumerate(iter_chunks(data, pattern.chunk_size)):
        if index and pattern.wait_interval:
            time.sleep(pattern.wait_interval)
        try:
            sock.sendall(chunk)
        except OSError as e:
            raise ConnectionFailedError(f"Failed to send request chunk {index}: {e}") from e
        logger.debug("Sent request chunk %d (%d bytes)", index, len(chunk))
