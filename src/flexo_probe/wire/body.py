"""Response body streaming into a SHA-256 digest."""

from __future__ import annotations

import hashlib
import logging
import socket

from ..errors import ConnectionFailedError, ShortBodyError
from ..models import BodyResult

logger = logging.getLogger(__name__)

BUF_SIZE = 4096


def stream_body(
    sock: socket.socket,
    content_length: int,
    buffer_size: int = BUF_SIZE,
) -> BodyResult:
    """Read exactly ``content_length`` bytes from ``sock`` and hash them.

    Each read asks for at most the remaining byte count, so a following
    response on the same connection is left untouched.

    Args:
        sock: Connected socket positioned at the first body byte.
        content_length: Number of body bytes announced by the header.
        buffer_size: Upper bound on a single ``recv``.

    Returns:
        BodyResult with the digest and the number of bytes read.

    Raises:
        ShortBodyError: If the peer closes before ``content_length`` bytes.
        ConnectionFailedError: On socket errors, timeouts included.
    """
    hasher = hashlib.sha256()
    size_read = 0
    while size_read < content_length:
        try:
            chunk = sock.recv(min(buffer_size, content_length - size_read))
        except OSError as e:
            raise ConnectionFailedError(f"Unable to read body: {e}") from e
        if not chunk:
            raise ShortBodyError(
                f"Connection closed after {size_read} of {content_length} body bytes",
                expected=content_length,
                received=size_read,
            )
        size_read += len(chunk)
        hasher.update(chunk)

    logger.debug("Streamed response body (%d bytes)", size_read)
    return BodyResult(digest=hasher.digest(), size=size_read)
