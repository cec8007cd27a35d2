from __future__ import annotations

from src.memory_match.app.ports.history_repository import HistoryRepository
from src.memory_match.app.ports.session_store import SessionStore
from src.memory_match.app.state import Settings
from src.memory_match.domain import HISTORY_LIMIT
from src.memory_match.services import data_access, gameplay
from src.memory_match.services import history as history_service
from src.memory_match.services.config_loader import load_default_settings


def initialize_state(
    store: SessionStore,
    repo: HistoryRepository,
    settings: Settings | None = None,
    now: float | None = None,
) -> None:
    """アプリ起動時に必要なセッション状態を初期化する。

    既に存在するキーは上書きせず、未定義のときのみ初期値を設定する。
    履歴はセッションにつき1度だけ読み込み、最初のゲームを設定の難易度で開始する。
    """
    if store.get("settings") is None:
        cfg = settings if settings is not None else load_default_settings()
        store.set("settings", cfg)
        store.set("match_delay_ms", cfg.match_delay_ms)
        store.set("mismatch_delay_ms", cfg.mismatch_delay_ms)
        store.set("history_limit", min(cfg.history_limit, HISTORY_LIMIT))
        store.set("difficulty", cfg.difficulty)

    if store.get("history") is None:
        history_service.load_history(store, repo)
    if store.get("notifications") is None:
        store.set("notifications", [])

    if data_access.get_phase(store) == "idle":
        gameplay.start_new_game(store, data_access.get_difficulty(store), now)


def change_difficulty(store: SessionStore, difficulty: str, now: float | None = None) -> bool:
    """難易度を切り替える。変化がなければ何もしない。切り替えたら True。"""
    if difficulty == data_access.get_difficulty(store) and data_access.get_phase(store) != "idle":
        return False
    gameplay.start_new_game(store, difficulty, now)
    return True
