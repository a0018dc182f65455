"""Byte-level HTTP/1.1 framing used by the session driver.

Every function here operates on an already-connected socket (or any
object with the same ``recv``/``sendall`` methods) and never buffers
beyond what it returns, so the next reader finds the connection exactly
where the previous one stopped.
"""

from .body import stream_body
from .emitter import build_request_header, iter_chunks, request_bytes, send_request
from .framer import HEADER_SEPARATOR, MAX_HEADER_SIZE, read_header
from .headers import content_length, is_cached, parse_header, status_code

__all__ = [
    "HEADER_SEPARATOR",
    "MAX_HEADER_SIZE",
    "build_request_header",
    "content_length",
    "is_cached",
    "iter_chunks",
    "parse_header",
    "read_header",
    "request_bytes",
    "send_request",
    "status_code",
    "stream_body",
]
