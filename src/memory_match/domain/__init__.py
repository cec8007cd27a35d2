"""ドメイン層（純粋ロジック/データモデル）。

提供物:
- デッキ生成と札の操作（deck）
- クリア履歴の記録型（history）
- 定数（constants）
"""

from src.memory_match.domain.constants import (
    DEFAULT_DIFFICULTY,
    DIFFICULTY_GRID,
    EMOJI_SET,
    HISTORY_LIMIT,
    MATCH_CLEAR_DELAY_MS,
    MISMATCH_CLEAR_DELAY_MS,
    STORAGE_KEY,
    TICK_MS,
)
from src.memory_match.domain.deck import (
    Card,
    all_matched,
    find_card,
    grid_label,
    grid_size_for,
    make_deck,
    mark_matched,
    matched_count,
)
from src.memory_match.domain.history import (
    HistoryItem,
    format_time,
    new_history_item,
    prepend_capped,
)

__all__ = [
    # deck
    "Card",
    "make_deck",
    "grid_size_for",
    "grid_label",
    "find_card",
    "mark_matched",
    "all_matched",
    "matched_count",
    # history
    "HistoryItem",
    "new_history_item",
    "prepend_capped",
    "format_time",
    # constants
    "EMOJI_SET",
    "DIFFICULTY_GRID",
    "DEFAULT_DIFFICULTY",
    "STORAGE_KEY",
    "HISTORY_LIMIT",
    "TICK_MS",
    "MATCH_CLEAR_DELAY_MS",
    "MISMATCH_CLEAR_DELAY_MS",
]
