from __future__ import annotations

import time

from src.memory_match.app.ports.session_store import SessionStore
from src.memory_match.domain import TICK_MS

# 経過時間の計測。実行中のみ TICK_MS 単位で加算する。
# 加算量は前回の基準時刻からの実時間差で決める（間隔タイマーの取りこぼしで遅れない）。


def reset_timer(store: SessionStore) -> None:
    store.set("running", False)
    store.set("elapsed_ms", 0)
    store.set("tick_anchor", None)


def start_timer(store: SessionStore, now: float | None = None) -> None:
    """停止中なら計測を開始する。実行中なら何もしない。"""
    if store.get("running"):
        return
    store.set("running", True)
    store.set("tick_anchor", time.monotonic() if now is None else now)


def stop_timer(store: SessionStore, now: float | None = None) -> None:
    """最後の刻みを反映してから停止する。以後 elapsed_ms は変わらない。"""
    if not store.get("running"):
        return
    tick(store, now)
    store.set("running", False)
    store.set("tick_anchor", None)


def tick(store: SessionStore, now: float | None = None) -> int:
    """基準時刻から経過した刻み分だけ elapsed_ms を進め、現在値を返す。"""
    elapsed = int(store.get("elapsed_ms", 0))
    anchor = store.get("tick_anchor")
    if not store.get("running") or anchor is None:
        return elapsed
    now_ts = time.monotonic() if now is None else now
    # 浮動小数の誤差で刻みを取りこぼさないよう僅かに丸める
    ticks = int(max(0.0, now_ts - float(anchor)) * 1000 + 1e-6) // TICK_MS
    if ticks > 0:
        elapsed += ticks * TICK_MS
        store.set("elapsed_ms", elapsed)
        # 端数は次回に持ち越す
        store.set("tick_anchor", float(anchor) + ticks * TICK_MS / 1000.0)
    return elapsed


def is_running(store: SessionStore) -> bool:
    return bool(store.get("running", False))


def get_elapsed_ms(store: SessionStore) -> int:
    return int(store.get("elapsed_ms", 0))
