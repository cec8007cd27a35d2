from __future__ import annotations

import streamlit as st

from src.memory_match.adapters.session_store_streamlit import StSessionStore
from src.memory_match.domain import format_time, matched_count
from src.memory_match.services import data_access, gameplay, timer


def render_status(store: StSessionStore, refresh_ms: int) -> None:
    """経過時間・試行回数を表示し、一定間隔で計時と遅延解除を進める。

    - フラグメントとして refresh_ms ごとに自身だけを再実行する。
    - 遅延解除が発火したときだけアプリ全体を再実行し、盤面を描き直す。
    - 計時が止まり遅延アクションも無ければ（クリア後など）自動再実行しない。
    """
    run_every = max(50, int(refresh_ms)) / 1000.0 if gameplay.needs_refresh(store) else None

    @st.fragment(run_every=run_every)
    def _status() -> None:
        if gameplay.advance(store):
            st.rerun()
        deck = data_access.get_deck(store)
        c1, c2, c3 = st.columns(3)
        with c1:
            st.metric("Time", format_time(timer.get_elapsed_ms(store)))
        with c2:
            st.metric("Attempts", data_access.get_attempts(store))
        with c3:
            st.metric("Pairs", f"{matched_count(deck) // 2}/{len(deck) // 2}")
        if data_access.get_phase(store) == "won":
            st.success("All pairs found! Start a new game to play again.")

    _status()
