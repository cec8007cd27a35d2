from __future__ import annotations

import logging
from datetime import datetime

from src.memory_match.app.ports.history_repository import HistoryRepository
from src.memory_match.app.ports.session_store import SessionStore
from src.memory_match.domain import (
    HISTORY_LIMIT,
    HistoryItem,
    all_matched,
    format_time,
    grid_label,
    new_history_item,
    prepend_capped,
)
from src.memory_match.services import data_access, notifications, timer

logger = logging.getLogger(__name__)


def history_limit(store: SessionStore) -> int:
    """セッションの保持件数。設定値に関わらず HISTORY_LIMIT を超えない。"""
    return max(0, min(int(store.get("history_limit", HISTORY_LIMIT)), HISTORY_LIMIT))


def load_history(store: SessionStore, repo: HistoryRepository) -> list[HistoryItem]:
    """起動時に1度だけ履歴を読み込み、保持件数に切り詰めてセッションに保持する。"""
    items = repo.load()[: history_limit(store)]
    data_access.set_history(store, items)
    logger.info("history: loaded %d record(s)", len(items))
    return items


def check_win(
    store: SessionStore,
    repo: HistoryRepository | None,
    now: float | None = None,
    completed_at: datetime | None = None,
) -> HistoryItem | None:
    """全札が揃っていればクリアを確定し、記録を返す。

    振る舞い:
    - デッキが空、未完成、または既に記録済みのゲームでは何もせず None。
    - 計時を止め、フェーズを won にし、記録を先頭に追加して上限件数に切り詰める。
    - repo があれば履歴全体を保存する。保存失敗はログのみ（セッション上の履歴は更新する）。
    """
    deck = data_access.get_deck(store)
    if not all_matched(deck):
        return None
    if store.get("won_recorded"):
        return None
    store.set("won_recorded", True)

    timer.stop_timer(store, now)
    data_access.set_phase(store, "won")

    item = new_history_item(
        grid=grid_label(data_access.get_grid_size(store)),
        attempts=data_access.get_attempts(store),
        time_ms=timer.get_elapsed_ms(store),
        now=completed_at,
    )
    items = prepend_capped(data_access.get_history(store), item, history_limit(store))
    data_access.set_history(store, items)
    if repo is not None:
        try:
            repo.save(items)
        except OSError as e:
            logger.warning("history: could not save: %s", e)

    logger.info(
        "game won: grid=%s attempts=%d time=%s", item.grid, item.attempts, format_time(item.time_ms)
    )
    notifications.notify(store, "You won! Saved to history.", "success")
    return item
