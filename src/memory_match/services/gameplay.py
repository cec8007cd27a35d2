from __future__ import annotations

import logging
import random

from src.memory_match.app.ports.history_repository import HistoryRepository
from src.memory_match.app.ports.session_store import SessionStore
from src.memory_match.domain import (
    MATCH_CLEAR_DELAY_MS,
    MISMATCH_CLEAR_DELAY_MS,
    Card,
    find_card,
    grid_size_for,
    make_deck,
    mark_matched,
)
from src.memory_match.services import data_access, history, notifications, scheduler, timer

# UI コンポーネントからのイベント（札の選択、新しいゲーム、画面更新）を受け取り、
# セッション状態の更新とドメイン操作を一箇所に集約する。
# 本モジュールは UI フレームワークに依存しない。状態アクセスは SessionStore 経由で行う。
# 時刻 now は秒（time.monotonic() 相当）。省略時は各関数の内部で取得する。

logger = logging.getLogger(__name__)

CLEAR_SELECTION = "clear_selection"


def start_new_game(
    store: SessionStore,
    difficulty: str | None = None,
    now: float | None = None,
    rng: random.Random | None = None,
) -> None:
    """新しいゲームを開始する（どのフェーズからでも playing へ）。

    - 難易度未指定なら現在の難易度を使う。
    - デッキ再生成、試行回数・経過時間・選択・ロックを初期化する。
    - セッション世代を進めるため、前のゲームの遅延解除は新しいゲームに影響しない。
    """
    diff = difficulty if difficulty is not None else data_access.get_difficulty(store)
    size = grid_size_for(diff)
    scheduler.bump_generation(store)
    scheduler.cancel_all(store)

    store.set("difficulty", diff)
    store.set("grid_size", size)
    data_access.set_deck(store, make_deck(size, rng))
    _reset_choices(store)
    store.set("attempts", 0)
    store.set("won_recorded", False)
    data_access.set_phase(store, "playing")
    timer.reset_timer(store)
    timer.start_timer(store, now)

    logger.info("new game: difficulty=%s grid=%dx%d", diff, size, size)
    notifications.notify(store, "New game started")


def select_card(
    store: SessionStore,
    card_id: str,
    repo: HistoryRepository | None = None,
    now: float | None = None,
) -> bool:
    """札の選択を処理する。受け付けたら True、無視したら False。

    無視する条件:
    - 判定中（ロック中）
    - 現在のデッキに無い札、既に揃った札
    - 1枚目として選択中の札と同じ札（id が同じ）

    受け付けた場合:
    - 計時が止まっていれば開始する。
    - 1枚目なら choice1 に、2枚目なら choice2 に入れて判定する。
    """
    if data_access.is_locked(store):
        return False
    card = find_card(data_access.get_deck(store), card_id)
    if card is None or card.matched:
        return False
    choice1, choice2 = data_access.get_choice_ids(store)
    if choice1 == card.id:
        return False
    if choice1 is not None and choice2 is not None:
        return False

    if not timer.is_running(store) and data_access.get_phase(store) == "playing":
        timer.start_timer(store, now)

    if choice1 is None:
        store.set("choice1", card.id)
        return True
    store.set("choice2", card.id)
    _evaluate(store, repo, now)
    return True


def _evaluate(store: SessionStore, repo: HistoryRepository | None, now: float | None) -> None:
    """2枚揃った時点の判定。ロックと試行回数の加算は同期的に行い、選択解除は遅延させる。"""
    first, second = data_access.get_choices(store)
    if first is None or second is None:
        return
    store.set("locked", True)
    store.set("attempts", data_access.get_attempts(store) + 1)

    if first.content == second.content:
        # 揃いは id ではなく絵柄で判定する
        data_access.set_deck(store, mark_matched(data_access.get_deck(store), first.content))
        notifications.notify(store, "Match!", "success")
        delay = int(store.get("match_delay_ms", MATCH_CLEAR_DELAY_MS))
    else:
        notifications.notify(store, "Try again", "info")
        delay = int(store.get("mismatch_delay_ms", MISMATCH_CLEAR_DELAY_MS))
    scheduler.schedule(store, CLEAR_SELECTION, delay, now)

    history.check_win(store, repo, now)


def clear_selection(store: SessionStore) -> None:
    """両方の選択を外し、ロックを解除する。"""
    _reset_choices(store)


def _reset_choices(store: SessionStore) -> None:
    store.set("choice1", None)
    store.set("choice2", None)
    store.set("locked", False)


def advance(store: SessionStore, now: float | None = None) -> bool:
    """再実行のたびに呼ぶポンプ。計時を進め、期限の来た遅延アクションを実行する。

    Returns:
        遅延アクションを1つ以上実行したら True（盤面の再描画が必要）。
    """
    timer.tick(store, now)
    fired = scheduler.pop_due(store, now)
    for name in fired:
        if name == CLEAR_SELECTION:
            clear_selection(store)
    return bool(fired)


def is_face_up(store: SessionStore, card: Card) -> bool:
    """表向きに描画すべき札か（揃っている、または選択中）。"""
    if card.matched:
        return True
    return card.id in data_access.get_choice_ids(store)


def needs_refresh(store: SessionStore) -> bool:
    """定期的な再実行が必要か（計時中、または遅延アクションが残っている）。"""
    return timer.is_running(store) or scheduler.has_pending(store)
