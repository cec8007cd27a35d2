from __future__ import annotations

import random

import pytest

from src.memory_match.adapters.history_store_json import InMemoryHistoryRepository
from src.memory_match.adapters.session_store_memory import MemorySessionStore
from src.memory_match.services import gameplay


@pytest.fixture
def store() -> MemorySessionStore:
    return MemorySessionStore()


@pytest.fixture
def repo() -> InMemoryHistoryRepository:
    return InMemoryHistoryRepository()


@pytest.fixture
def easy_game(store: MemorySessionStore) -> MemorySessionStore:
    """t=0.0 で開始した 4x4 のゲーム。"""
    gameplay.start_new_game(store, "easy", now=0.0, rng=random.Random(7))
    return store
