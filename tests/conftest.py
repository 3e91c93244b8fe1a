"""
Shared pytest fixtures and configuration for all tests.
"""

import os
import sys
from collections.abc import AsyncGenerator, Generator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
import strawberry

# Add src directory to path so imports work
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from notegraph.config import Settings
from notegraph.dbmodels import Base
from notegraph.graphql.context import build_context
from notegraph.store.factory import create_memory_store
from notegraph.store.memory import InMemoryNoteStore
from notegraph.store.sql import SqlNoteStore


@pytest.fixture
def settings() -> Settings:
    """Settings for an app running on the in-memory mock store."""
    return Settings(
        store_backend="memory",
        seed_mock_data=True,
        debug=False,
        query_timeout=5.0,
        _env_file=None,
    )


@pytest.fixture
def memory_store() -> InMemoryNoteStore:
    """In-memory store filled with the mock users and notes."""
    return create_memory_store(seed=True)


@pytest_asyncio.fixture
async def sql_store(tmp_path: Path) -> AsyncGenerator[SqlNoteStore, None]:
    """SQL store on a throwaway SQLite database with the tables created."""
    store = SqlNoteStore.from_url(f"sqlite+aiosqlite:///{tmp_path / 'notegraph.db'}")
    async with store.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield store
    finally:
        await store.close()


@pytest.fixture
def mock_info(memory_store: InMemoryNoteStore) -> Any:
    """Create a mock GraphQL info object carrying the memory store."""
    info = MagicMock(spec=strawberry.Info)
    info.context = build_context(memory_store)
    return info


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)
