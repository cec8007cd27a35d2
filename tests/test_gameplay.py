from __future__ import annotations

from collections import defaultdict

from src.memory_match.adapters.history_store_json import InMemoryHistoryRepository
from src.memory_match.app.state import Settings
from src.memory_match.domain import HISTORY_LIMIT, HistoryItem
from src.memory_match.services import (
    app_state,
    data_access,
    gameplay,
    history,
    notifications,
    scheduler,
    timer,
)


def _pairs(store) -> list[tuple[str, str]]:
    """デッキ内の (id, id) ペアを絵柄ごとに返す。"""
    by_content: dict[str, list[str]] = defaultdict(list)
    for card in data_access.get_deck(store):
        by_content[card.content].append(card.id)
    return [(ids[0], ids[1]) for ids in by_content.values()]


def _mismatch(store) -> tuple[str, str]:
    pairs = _pairs(store)
    return pairs[0][0], pairs[1][0]


def _card(store, card_id):
    return next(c for c in data_access.get_deck(store) if c.id == card_id)


def test_start_new_game_resets_session(easy_game) -> None:
    store = easy_game
    assert data_access.get_phase(store) == "playing"
    assert len(data_access.get_deck(store)) == 16
    assert data_access.get_attempts(store) == 0
    assert timer.get_elapsed_ms(store) == 0
    assert timer.is_running(store)
    assert data_access.get_choice_ids(store) == (None, None)
    assert not data_access.is_locked(store)
    assert ("default", "New game started") in notifications.drain(store)


def test_matching_pair_is_marked_and_counted(easy_game, repo) -> None:
    store = easy_game
    a, b = _pairs(store)[0]
    assert gameplay.select_card(store, a, repo, now=1.0)
    assert data_access.get_attempts(store) == 0
    assert gameplay.select_card(store, b, repo, now=1.5)
    assert data_access.get_attempts(store) == 1
    assert data_access.is_locked(store)
    assert _card(store, a).matched and _card(store, b).matched
    assert ("success", "Match!") in notifications.drain(store)


def test_mismatch_leaves_cards_unmatched(easy_game, repo) -> None:
    store = easy_game
    a, b = _mismatch(store)
    gameplay.select_card(store, a, repo, now=1.0)
    gameplay.select_card(store, b, repo, now=1.2)
    assert data_access.get_attempts(store) == 1
    assert not _card(store, a).matched
    assert not _card(store, b).matched
    assert ("info", "Try again") in notifications.drain(store)


def test_same_card_twice_does_not_make_a_pair(easy_game, repo) -> None:
    store = easy_game
    a, _ = _pairs(store)[0]
    assert gameplay.select_card(store, a, repo, now=1.0)
    assert not gameplay.select_card(store, a, repo, now=1.1)
    assert data_access.get_choice_ids(store) == (a, None)
    assert data_access.get_attempts(store) == 0


def test_third_selection_while_locked_is_ignored(easy_game, repo) -> None:
    store = easy_game
    a, b = _mismatch(store)
    c = _pairs(store)[2][0]
    gameplay.select_card(store, a, repo, now=1.0)
    gameplay.select_card(store, b, repo, now=1.0)
    assert not gameplay.select_card(store, c, repo, now=1.1)
    assert data_access.get_choice_ids(store) == (a, b)
    assert data_access.get_attempts(store) == 1


def test_matched_card_cannot_be_selected(easy_game, repo) -> None:
    store = easy_game
    a, b = _pairs(store)[0]
    gameplay.select_card(store, a, repo, now=1.0)
    gameplay.select_card(store, b, repo, now=1.0)
    gameplay.advance(store, now=2.0)
    assert not gameplay.select_card(store, a, repo, now=2.1)
    assert data_access.get_choice_ids(store) == (None, None)


def test_unknown_card_is_ignored(easy_game, repo) -> None:
    assert not gameplay.select_card(easy_game, "not-a-card", repo, now=1.0)


def test_match_clears_after_short_delay(easy_game, repo) -> None:
    store = easy_game
    a, b = _pairs(store)[0]
    gameplay.select_card(store, a, repo, now=1.0)
    gameplay.select_card(store, b, repo, now=1.0)
    assert not gameplay.advance(store, now=1.2)
    assert data_access.is_locked(store)
    assert gameplay.advance(store, now=1.35)
    assert not data_access.is_locked(store)
    assert data_access.get_choice_ids(store) == (None, None)


def test_mismatch_clears_after_longer_delay(easy_game, repo) -> None:
    store = easy_game
    a, b = _mismatch(store)
    gameplay.select_card(store, a, repo, now=1.0)
    gameplay.select_card(store, b, repo, now=1.0)
    assert not gameplay.advance(store, now=1.5)
    assert data_access.get_choice_ids(store) == (a, b)
    assert gameplay.advance(store, now=1.85)
    assert data_access.get_choice_ids(store) == (None, None)
    assert not data_access.is_locked(store)


def test_face_up_cards(easy_game, repo) -> None:
    store = easy_game
    a, b = _mismatch(store)
    gameplay.select_card(store, a, repo, now=1.0)
    assert gameplay.is_face_up(store, _card(store, a))
    assert not gameplay.is_face_up(store, _card(store, b))


def _win(store, repo, start: float = 1.0, step: float = 0.5) -> float:
    """すべてのペアを最短手数で揃える。最後の時刻を返す。"""
    now = start
    for a, b in _pairs(store):
        gameplay.select_card(store, a, repo, now=now)
        gameplay.select_card(store, b, repo, now=now)
        now += step
        gameplay.advance(store, now=now)
    return now


def test_completing_all_pairs_records_one_history_item(easy_game, repo) -> None:
    store = easy_game
    _win(store, repo)
    assert data_access.get_phase(store) == "won"
    assert data_access.get_attempts(store) == 8
    assert repo.save_count == 1
    assert len(repo.items) == 1
    record = repo.items[0]
    assert record.grid == "4x4"
    assert record.attempts == 8
    assert record.time_ms >= 0
    assert data_access.get_history(store) == repo.items
    assert ("success", "You won! Saved to history.") in notifications.drain(store)


def test_timer_stops_after_win(easy_game, repo) -> None:
    store = easy_game
    last = _win(store, repo)
    final = timer.get_elapsed_ms(store)
    assert not timer.is_running(store)
    # 最後のペアは last - 0.5 秒に揃っている
    assert final == round((last - 0.5) * 1000) // 100 * 100
    assert repo.items[0].time_ms == final
    gameplay.advance(store, now=last + 60.0)
    assert timer.get_elapsed_ms(store) == final


def test_win_is_recorded_only_once(easy_game, repo) -> None:
    store = easy_game
    last = _win(store, repo)
    assert history.check_win(store, repo, now=last + 1) is None
    assert history.check_win(store, repo, now=last + 2) is None
    assert repo.save_count == 1


def test_history_is_capped(store) -> None:
    old = [
        HistoryItem(id=f"old-{n}", date="2026-01-01T00:00:00", grid="6x6", attempts=30, time_ms=1000)
        for n in range(HISTORY_LIMIT)
    ]
    repo = InMemoryHistoryRepository(old)
    app_state.initialize_state(store, repo, now=0.0)
    _win(store, repo)
    assert len(repo.items) == HISTORY_LIMIT
    assert repo.items[0].grid == "4x4"
    assert repo.items[-1].id == f"old-{HISTORY_LIMIT - 2}"


def test_elapsed_time_accrues_in_ticks(easy_game) -> None:
    store = easy_game
    gameplay.advance(store, now=0.05)
    assert timer.get_elapsed_ms(store) == 0
    gameplay.advance(store, now=0.25)
    assert timer.get_elapsed_ms(store) == 200
    gameplay.advance(store, now=0.3)
    assert timer.get_elapsed_ms(store) == 300
    # 時刻が戻っても減らない
    gameplay.advance(store, now=0.1)
    assert timer.get_elapsed_ms(store) == 300


def test_switching_difficulty_resets_and_discards_pending_clear(easy_game, repo) -> None:
    store = easy_game
    a, b = _mismatch(store)
    gameplay.select_card(store, a, repo, now=1.0)
    gameplay.select_card(store, b, repo, now=1.0)
    gameplay.advance(store, now=1.5)
    assert app_state.change_difficulty(store, "hard", now=1.6)

    assert data_access.get_difficulty(store) == "hard"
    assert len(data_access.get_deck(store)) == 36
    assert data_access.get_attempts(store) == 0
    assert timer.get_elapsed_ms(store) == 0
    assert not data_access.is_locked(store)

    # 新しいゲームで1枚目を選んでから、前のゲームの解除期限を過ぎる
    first = _pairs(store)[0][0]
    gameplay.select_card(store, first, repo, now=1.7)
    assert not gameplay.advance(store, now=5.0)
    assert data_access.get_choice_ids(store) == (first, None)


def test_stale_actions_are_dropped_by_generation(store) -> None:
    scheduler.schedule(store, "clear_selection", 100, now=0.0)
    scheduler.bump_generation(store)
    scheduler.schedule(store, "clear_selection", 100, now=0.0)
    assert scheduler.pop_due(store, now=1.0) == ["clear_selection"]
    assert not scheduler.has_pending(store)


def test_same_difficulty_is_a_no_op(easy_game) -> None:
    deck = data_access.get_deck(easy_game)
    assert not app_state.change_difficulty(easy_game, "easy")
    assert data_access.get_deck(easy_game) is deck


def test_initialize_state_loads_history_once(store) -> None:
    repo = InMemoryHistoryRepository(
        [HistoryItem(id="x", date="2026-01-01T00:00:00", grid="4x4", attempts=8, time_ms=5000)]
    )
    app_state.initialize_state(store, repo, now=0.0)
    assert data_access.get_phase(store) == "playing"
    assert data_access.get_difficulty(store) == "easy"
    deck = data_access.get_deck(store)
    repo.items = []
    app_state.initialize_state(store, repo, now=1.0)
    assert len(data_access.get_history(store)) == 1
    # 再実行では新しいゲームを始めない
    assert data_access.get_deck(store) is deck


def _records(n: int, prefix: str = "old") -> list[HistoryItem]:
    return [
        HistoryItem(id=f"{prefix}-{i}", date="2026-01-01T00:00:00", grid="6x6", attempts=30, time_ms=1000)
        for i in range(n)
    ]


def test_oversized_stored_history_is_truncated_on_load(store) -> None:
    repo = InMemoryHistoryRepository(_records(HISTORY_LIMIT + 10))
    app_state.initialize_state(store, repo, Settings(history_limit=100), now=0.0)
    items = data_access.get_history(store)
    assert len(items) == HISTORY_LIMIT
    assert items[0].id == "old-0"


def test_configured_limit_above_cap_still_keeps_fifty(store) -> None:
    repo = InMemoryHistoryRepository(_records(HISTORY_LIMIT))
    app_state.initialize_state(store, repo, Settings(history_limit=100), now=0.0)
    _win(store, repo)
    assert len(repo.items) == HISTORY_LIMIT
    assert len(data_access.get_history(store)) == HISTORY_LIMIT
    assert repo.items[0].grid == "4x4"


class _FailingRepository(InMemoryHistoryRepository):
    def save(self, items: list[HistoryItem]) -> None:
        raise OSError("disk full")


def test_save_failure_still_finishes_the_game(easy_game) -> None:
    store = easy_game
    repo = _FailingRepository()
    _win(store, repo)
    assert data_access.get_phase(store) == "won"
    assert not timer.is_running(store)
    history_items = data_access.get_history(store)
    assert len(history_items) == 1
    assert history_items[0].attempts == 8
    assert repo.items == []


def test_first_selection_starts_a_stopped_timer(easy_game, repo) -> None:
    store = easy_game
    timer.reset_timer(store)
    assert not timer.is_running(store)
    a, _ = _pairs(store)[0]
    gameplay.select_card(store, a, repo, now=2.0)
    assert timer.is_running(store)
    gameplay.advance(store, now=2.5)
    assert timer.get_elapsed_ms(store) == 500


def test_ignored_selection_does_not_start_timer(easy_game, repo) -> None:
    store = easy_game
    timer.reset_timer(store)
    assert not gameplay.select_card(store, "not-a-card", repo, now=2.0)
    assert not timer.is_running(store)


def test_needs_refresh_until_won_and_settled(easy_game, repo) -> None:
    store = easy_game
    assert gameplay.needs_refresh(store)
    last = _win(store, repo)
    assert not gameplay.needs_refresh(store)

    gameplay.start_new_game(store, now=last)
    assert gameplay.needs_refresh(store)
