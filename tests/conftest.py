"""Pytest configuration and fixtures."""

import logging

import pytest

from fieldstore import InMemoryDB, RecordStore, SnapshotArchive


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo configure_logging between tests."""
    yield
    logger = logging.getLogger("fieldstore")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def store():
    """Create an empty record store."""
    return RecordStore()


@pytest.fixture
def archive():
    """Create an empty snapshot archive."""
    return SnapshotArchive()


@pytest.fixture
def db():
    """Create an empty database."""
    return InMemoryDB(name="test")


@pytest.fixture
def sample_config_dict():
    """Sample configuration dictionary for testing."""
    return {
        "name": "sessions",
        "logging": {"level": "DEBUG", "format": "text"},
    }
