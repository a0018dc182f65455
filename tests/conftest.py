"""Shared pytest configuration."""

import pytest
import structlog

pytest_plugins = ["flexo_probe.testing.fixtures"]


@pytest.fixture(autouse=True, scope="session")
def _structlog_to_stdlib():
    """Route structlog events through stdlib logging so ``caplog`` sees them."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()
