"""Pytest fixtures for testing code built on the probe."""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest

from .mocks import FakeConnection
from .server import ScriptedResponse, ScriptedServer


@pytest.fixture
def scripted_server() -> Iterator[Callable[..., ScriptedServer]]:
    """Pytest fixture providing a factory for started ``ScriptedServer`` instances.

    Every server created through the factory is stopped at teardown.

    Returns:
        ``factory(*responses, linger=False) -> ScriptedServer``.
    """
    servers: list[ScriptedServer] = []

    def factory(*responses: bytes | ScriptedResponse | None, linger: bool = False) -> ScriptedServer:
        server = ScriptedServer(responses, linger=linger).start()
        servers.append(server)
        return server

    yield factory

    for server in servers:
        server.stop()


@pytest.fixture
def fake_connection() -> Callable[..., FakeConnection]:
    """Pytest fixture providing the ``FakeConnection`` constructor.

    Returns:
        ``factory(*chunks, recv_error=None, send_error=None) -> FakeConnection``.
    """

    def factory(*chunks: bytes, recv_error=None, send_error=None) -> FakeConnection:
        return FakeConnection(chunks, recv_error=recv_error, send_error=send_error)

    return factory
