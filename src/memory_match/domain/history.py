from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from src.memory_match.domain.constants import HISTORY_LIMIT


@dataclass(frozen=True)
class HistoryItem:
    """クリア1回分の記録。

    現状の契約:
    - id: uuid4 文字列
    - date: クリア時刻（ローカル時刻の ISO 8601、秒精度）
    - grid: "4x4" などの盤面ラベル
    - attempts: 2枚めくった回数
    - time_ms: 経過時間（ミリ秒）
    """

    id: str
    date: str
    grid: str
    attempts: int
    time_ms: int

    def to_dict(self) -> dict[str, Any]:
        """保存用の dict（キー名は保存形式に合わせる）。"""
        return {
            "id": self.id,
            "date": self.date,
            "grid": self.grid,
            "attempts": self.attempts,
            "timeMs": self.time_ms,
        }

    @classmethod
    def from_dict(cls, data: Any) -> HistoryItem:  # noqa: ANN401 - 保存データは型が不定
        """保存用 dict から復元する。形式が不正なら ValueError。"""
        if not isinstance(data, dict):
            raise ValueError("history entry must be an object")
        try:
            item_id = data["id"]
            date = data["date"]
            grid = data["grid"]
            attempts = data["attempts"]
            time_ms = data["timeMs"]
        except KeyError as e:
            raise ValueError(f"history entry is missing {e.args[0]!r}") from None
        if not all(isinstance(v, str) for v in (item_id, date, grid)):
            raise ValueError("history entry has non-string id/date/grid")
        # bool は int のサブクラスなので除外する
        for v in (attempts, time_ms):
            if isinstance(v, bool) or not isinstance(v, int) or v < 0:
                raise ValueError("history entry has invalid attempts/timeMs")
        return cls(id=item_id, date=date, grid=grid, attempts=attempts, time_ms=time_ms)


def new_history_item(
    grid: str, attempts: int, time_ms: int, now: datetime | None = None
) -> HistoryItem:
    """現在時刻と新しい id で記録を作る。"""
    ts = now if now is not None else datetime.now()
    return HistoryItem(
        id=str(uuid.uuid4()),
        date=ts.isoformat(timespec="seconds"),
        grid=grid,
        attempts=int(attempts),
        time_ms=int(time_ms),
    )


def prepend_capped(
    items: list[HistoryItem], item: HistoryItem, limit: int = HISTORY_LIMIT
) -> list[HistoryItem]:
    """新しい順のリストの先頭に追加し、古いものから切り捨てる。"""
    return [item, *items][: max(0, limit)]


def format_time(ms: int) -> str:
    """ミリ秒を MM:SS に整形する。"""
    s = max(0, int(ms)) // 1000
    return f"{s // 60:02d}:{s % 60:02d}"
