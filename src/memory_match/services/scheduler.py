"""
遅延アクションのスケジューラ（UI フレームワーク非依存）。

目的:
- 「一定時間後に選択を解除する」といった遅延処理を、タイマースレッドを使わずに表現する。
- 描画のたび（再実行のたび）に pop_due を呼び、期限の来たアクションだけを取り出す。

契約:
- 各アクションは登録時のセッション世代（generation）を持つ。
- 新しいゲームで世代を進めると、古い世代のアクションは発火せずに捨てられる。
- 時刻は秒（time.monotonic() 相当）で外から渡す。
"""

from __future__ import annotations

import logging
import time

from src.memory_match.app.ports.session_store import SessionStore

logger = logging.getLogger(__name__)


def current_generation(store: SessionStore) -> int:
    return int(store.get("generation", 0))


def bump_generation(store: SessionStore) -> int:
    """セッション世代を進めて新しい値を返す。既存のアクションはすべて無効になる。"""
    gen = current_generation(store) + 1
    store.set("generation", gen)
    return gen


def schedule(store: SessionStore, name: str, delay_ms: int, now: float | None = None) -> None:
    """現在の世代で name を delay_ms 後に予約する。"""
    now_ts = time.monotonic() if now is None else now
    pending: list[dict] = list(store.get("scheduled") or [])
    pending.append(
        {
            "name": name,
            "due_at": now_ts + max(0, int(delay_ms)) / 1000.0,
            "generation": current_generation(store),
        }
    )
    store.set("scheduled", pending)


def pop_due(store: SessionStore, now: float | None = None) -> list[str]:
    """期限の来た現世代のアクション名を予約順に返し、予約から取り除く。

    古い世代のアクションは期限に関わらず捨てる。期限前のものは残す。
    """
    now_ts = time.monotonic() if now is None else now
    gen = current_generation(store)
    due: list[str] = []
    keep: list[dict] = []
    for action in store.get("scheduled") or []:
        if action.get("generation") != gen:
            logger.debug("scheduler: dropping stale action %s", action.get("name"))
            continue
        if now_ts >= float(action["due_at"]):
            due.append(str(action["name"]))
        else:
            keep.append(action)
    store.set("scheduled", keep)
    return due


def has_pending(store: SessionStore) -> bool:
    return bool(store.get("scheduled"))


def cancel_all(store: SessionStore) -> None:
    store.set("scheduled", [])
