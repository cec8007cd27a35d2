from __future__ import annotations

from typing import Literal

from src.memory_match.app.ports.session_store import SessionStore
from src.memory_match.domain import DEFAULT_DIFFICULTY, Card, HistoryItem, find_card

# セッション内のキー参照を一箇所に集める。サービス/UI は本モジュール経由で読み書きする。

Phase = Literal["idle", "playing", "won"]


def get_deck(store: SessionStore) -> list[Card]:
    """現在のデッキを返す（未設定時は空リスト）。"""
    return store.get("deck") or []


def set_deck(store: SessionStore, deck: list[Card]) -> None:
    store.set("deck", deck)


def get_difficulty(store: SessionStore) -> str:
    return store.get("difficulty") or DEFAULT_DIFFICULTY


def get_grid_size(store: SessionStore) -> int:
    """現在の盤面の一辺。ゲーム開始時に確定した値を返す。"""
    return int(store.get("grid_size", 0))


def get_phase(store: SessionStore) -> Phase:
    return store.get("phase") or "idle"


def set_phase(store: SessionStore, phase: Phase) -> None:
    store.set("phase", phase)


def get_attempts(store: SessionStore) -> int:
    return int(store.get("attempts", 0))


def get_choice_ids(store: SessionStore) -> tuple[str | None, str | None]:
    """選択中の札 id（1枚目, 2枚目）。"""
    return store.get("choice1"), store.get("choice2")


def get_choices(store: SessionStore) -> tuple[Card | None, Card | None]:
    """選択中の札（現在のデッキ上の値）を返す。"""
    deck = get_deck(store)
    c1, c2 = get_choice_ids(store)
    return find_card(deck, c1), find_card(deck, c2)


def is_locked(store: SessionStore) -> bool:
    return bool(store.get("locked", False))


def get_history(store: SessionStore) -> list[HistoryItem]:
    """セッションに読み込み済みの履歴（新しい順）。"""
    return store.get("history") or []


def set_history(store: SessionStore, items: list[HistoryItem]) -> None:
    store.set("history", items)
