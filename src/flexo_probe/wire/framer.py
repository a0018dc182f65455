"""Response header framing.

The header is read one byte at a time. A buffered read would be faster but
could pull body bytes off the socket, and the body streamer must find the
connection positioned exactly at the first body byte.
"""

from __future__ import annotations

import logging
import socket

from ..errors import ConnectionFailedError, HeaderTooLargeError, IncompleteHeaderError

logger = logging.getLogger(__name__)

HEADER_SEPARATOR = b"\r\n\r\n"
MAX_HEADER_SIZE = 4096


def read_header(sock: socket.socket, max_size: int = MAX_HEADER_SIZE) -> bytes:
    """Read a response header off ``sock``.

    Reads until the last four bytes received equal ``\\r\\n\\r\\n``. A bare
    ``\\n\\n`` does not terminate the header.

    Args:
        sock: Connected socket positioned at the start of a response.
        max_size: Upper bound on header bytes, terminator included.

    Returns:
        The header bytes, without the terminating separator.

    Raises:
        HeaderTooLargeError: If ``max_size`` bytes arrive without a terminator.
        IncompleteHeaderError: If the peer closes the connection first.
        ConnectionFailedError: On socket errors, timeouts included.
    """
    payload = bytearray()
    while True:
        if len(payload) >= max_size:
            raise HeaderTooLargeError(
                f"No header terminator within {max_size} bytes"
            )
        try:
            byte = sock.recv(1)
        except OSError as e:
            raise ConnectionFailedError(f"Unable to read header: {e}") from e
        if not byte:
            raise IncompleteHeaderError(
                f"Connection closed after {len(payload)} header bytes, before terminator"
            )
        payload += byte
        if payload.endswith(HEADER_SEPARATOR):
            break

    header = bytes(payload[:-len(HEADER_SEPARATOR)])
    logger.debug("Framed response header (%d bytes)", len(header))
    return header
