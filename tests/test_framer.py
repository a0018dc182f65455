"""Tests for response header framing."""

import pytest

from flexo_probe.errors import ConnectionFailedError, HeaderTooLargeError, IncompleteHeaderError
from flexo_probe.testing.mocks import FakeConnection
from flexo_probe.wire.framer import MAX_HEADER_SIZE, read_header


class TestReadHeader:
    def test_returns_header_without_separator(self):
        conn = FakeConnection([b"HTTP/1.1 200 OK\r\nContent-Length: 0\r\n\r\n"])
        assert read_header(conn) == b"HTTP/1.1 200 OK\r\nContent-Length: 0"

    def test_reads_one_byte_at_a_time(self):
        conn = FakeConnection([b"HTTP/1.1 200 OK\r\n\r\n"])
        read_header(conn)
        assert set(conn.recv_sizes) == {1}

    def test_leaves_body_on_connection(self):
        conn = FakeConnection([b"HTTP/1.1 200 OK\r\nContent-Length: 5\r\n\r\nhello"])
        read_header(conn)
        assert conn.remaining() == b"hello"

    def test_leaves_next_response_on_connection(self):
        first = b"HTTP/1.1 204 No Content\r\nContent-Length: 0\r\n\r\n"
        second = b"HTTP/1.1 200 OK\r\nContent-Length: 0\r\n\r\n"
        conn = FakeConnection([first + second])

        assert read_header(conn) == first[:-4]
        assert read_header(conn) == second[:-4]

    def test_separator_split_across_reads(self):
        conn = FakeConnection([b"HTTP/1.1 200 OK\r\n", b"\r", b"\n", b"body"])
        assert read_header(conn) == b"HTTP/1.1 200 OK"
        assert conn.remaining() == b"body"

    def test_bare_lf_separator_not_accepted(self):
        conn = FakeConnection([b"HTTP/1.1 200 OK\n\nbody"])
        with pytest.raises(IncompleteHeaderError):
            read_header(conn)

    def test_peer_close_before_terminator(self):
        conn = FakeConnection([b"HTTP/1.1 200 OK\r\n"])
        with pytest.raises(IncompleteHeaderError, match="before terminator"):
            read_header(conn)

    def test_empty_stream(self):
        with pytest.raises(IncompleteHeaderError):
            read_header(FakeConnection())

    def test_header_too_large(self):
        conn = FakeConnection([b"X" * (MAX_HEADER_SIZE + 10)])
        with pytest.raises(HeaderTooLargeError, match=str(MAX_HEADER_SIZE)):
            read_header(conn)
        assert len(conn.recv_sizes) == MAX_HEADER_SIZE

    def test_header_exactly_at_bound_accepted(self):
        header = b"HTTP/1.1 200 OK\r\nX-Pad: " + b"a" * 20
        conn = FakeConnection([header + b"\r\n\r\n"])
        assert read_header(conn, max_size=len(header) + 4) == header

    def test_custom_bound(self):
        conn = FakeConnection([b"HTTP/1.1 200 OK\r\n\r\n"])
        with pytest.raises(HeaderTooLargeError):
            read_header(conn, max_size=10)

    def test_socket_error_raises_connection_failed(self):
        conn = FakeConnection([b"HTTP/1.1"], recv_error=ConnectionResetError("reset by peer"))
        with pytest.raises(ConnectionFailedError, match="reset by peer"):
            read_header(conn)

    def test_socket_timeout_raises_connection_failed(self):
        conn = FakeConnection(recv_error=TimeoutError("timed out"))
        with pytest.raises(ConnectionFailedError, match="timed out"):
            read_header(conn)
