"""Test doubles for exercising the probe without a real Flexo server."""

from .mocks import FakeConnection
from .server import ScriptedResponse, ScriptedServer, make_response

__all__ = ["FakeConnection", "ScriptedResponse", "ScriptedServer", "make_response"]
