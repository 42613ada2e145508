"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest
from sqlalchemy import Engine, create_engine
from structlog.testing import capture_logs


@pytest.fixture
def captured_logs() -> Iterator[list[dict]]:
    """Capture structlog events emitted during the test."""
    with capture_logs() as logs:
        yield logs


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    """In-memory SQLite engine, disposed after the test."""
    engine = create_engine("sqlite+pysqlite:///:memory:")
    yield engine
    engine.dispose()
