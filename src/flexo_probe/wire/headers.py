"""Field extraction from a framed response header.

Lookups work on the raw header bytes by literal, case-sensitive prefix; no
general header parsing is attempted.
"""

from __future__ import annotations

from ..errors import MalformedHeaderError, MissingHeaderFieldError
from ..models import HeaderResult

CONTENT_LENGTH_PREFIX = b"Content-Length: "
PAYLOAD_ORIGIN_PREFIX = b"Flexo-Payload-Origin: "
CACHE_ORIGIN = b"Cache"


def _field_value(header: bytes, prefix: bytes) -> bytes | None:
    """Bytes following the first ``prefix`` up to ``\\r`` or end of header."""
    start = header.find(prefix)
    if start == -1:
        return None
    start += len(prefix)
    end = header.find(b"\r", start)
    if end == -1:
        end = len(header)
    return header[start:end]


def _parse_decimal(value: bytes, what: str) -> int:
    # bytes.isdigit() is ASCII-only and rejects signs, blanks and underscores
    if not value.isdigit():
        raise MalformedHeaderError(f"Invalid {what}: {value!r}")
    return int(value)


def status_code(header: bytes) -> int:
    """Status code from the first line, ``<version> <code> <reason>``.

    Raises:
        MalformedHeaderError: If the first line has no space or the code is
            not decimal.
    """
    line_end = header.find(b"\r")
    first_line = header if line_end == -1 else header[:line_end]
    _, sep, rest = first_line.partition(b" ")
    if not sep:
        raise MalformedHeaderError(f"Malformed status line: {first_line!r}")
    code, _, _ = rest.partition(b" ")
    return _parse_decimal(code, "status code")


def content_length(header: bytes) -> int:
    """Value of the first ``Content-Length`` field.

    Raises:
        MissingHeaderFieldError: If the field is absent.
        MalformedHeaderError: If the value is not decimal.
    """
    value = _field_value(header, CONTENT_LENGTH_PREFIX)
    if value is None:
        raise MissingHeaderFieldError("Response header has no Content-Length")
    return _parse_decimal(value, "Content-Length")


def is_cached(header: bytes) -> bool:
    """Whether the server reports the payload as served from its cache.

    A missing ``Flexo-Payload-Origin`` field means not cached.
    """
    return _field_value(header, PAYLOAD_ORIGIN_PREFIX) == CACHE_ORIGIN


def parse_header(header: bytes) -> HeaderResult:
    return HeaderResult(
        status_code=status_code(header),
        content_length=content_length(header),
        cached=is_cached(header),
    )
