"""
Shared test fixtures for the typeahead test suite.

Engines run on an in-memory sorted set, so no Redis server is needed.
Each test drives its coroutines through one ``asyncio.run`` call.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from typeahead.completion.engine import CompletionEngine
from typeahead.config.settings import CompletionSettings, Settings, StoreSettings
from typeahead.storage.ordered_set import MemoryOrderedSetStore


@pytest.fixture
def run():
    """Run a coroutine to completion on a fresh event loop."""
    return asyncio.run


@pytest.fixture
def store_settings() -> StoreSettings:
    return StoreSettings(backend="memory", key_prefix="test:")


@pytest.fixture
def completion_settings() -> CompletionSettings:
    return CompletionSettings()


@pytest.fixture
def store() -> MemoryOrderedSetStore:
    return MemoryOrderedSetStore()


@pytest.fixture
def engine(store, store_settings, completion_settings) -> CompletionEngine:
    """Provide a CompletionEngine over an empty in-memory store."""
    return CompletionEngine(
        store=store,
        store_settings=store_settings,
        completion_settings=completion_settings,
    )


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings rooted in a temporary directory, memory backend."""
    s = Settings(project_root=tmp_path, store=StoreSettings(backend="memory"))
    s.ensure_dirs()
    return s
