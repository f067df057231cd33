"""Shared pytest fixtures for all tests."""

from unittest.mock import patch

import pytest

from missionmatch.cache import NullCacheStore, ResultCache
from tests.test_utils import FailingCacheStore, InMemoryCacheStore


@pytest.fixture
def temp_db(tmp_path):
    """Create a temporary database for testing.

    Patches DB_PATH and DATA_DIR at the connection module level.
    """
    db_path = tmp_path / "test.db"
    data_dir = tmp_path

    # Patch at db.connection where they're used at runtime
    with (
        patch("missionmatch.db.connection.DB_PATH", db_path),
        patch("missionmatch.db.connection.DATA_DIR", data_dir),
        patch("missionmatch.db.connection.DATABASE_URL", None),  # Force SQLite
    ):
        from missionmatch.db.connection import init_tables

        init_tables()
        yield db_path


@pytest.fixture(autouse=True)
def no_cache_backend():
    """Never reach a real Redis from tests: the result cache always misses."""
    with patch("missionmatch.services.match_service._result_cache", ResultCache(NullCacheStore())):
        yield


@pytest.fixture
def memory_cache():
    """Route the service result cache to an in-memory store."""
    store = InMemoryCacheStore()
    with patch("missionmatch.services.match_service._result_cache", ResultCache(store)):
        yield store


@pytest.fixture
def failing_cache():
    """Route the service result cache to a store that always fails."""
    store = FailingCacheStore()
    with patch("missionmatch.services.match_service._result_cache", ResultCache(store)):
        yield store
