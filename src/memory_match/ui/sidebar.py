from __future__ import annotations

import streamlit as st

from src.memory_match.adapters.session_store_streamlit import StSessionStore
from src.memory_match.domain import DIFFICULTY_GRID, grid_label
from src.memory_match.services import app_state, data_access


def _difficulty_label(difficulty: str) -> str:
    return f"{difficulty.capitalize()} ({grid_label(DIFFICULTY_GRID[difficulty])})"


def render_sidebar(store: StSessionStore) -> None:
    """サイドバーの設定 UI を描画する。

    - 難易度はプレイ中でも切り替え可能。切り替えると新しいゲームになる。
    - ページリンクは利用可能な場合のみ表示する。
    """
    with st.sidebar:
        st.subheader("Settings")
        options = list(DIFFICULTY_GRID)
        current = data_access.get_difficulty(store)
        chosen = st.radio(
            "Difficulty",
            options=options,
            index=options.index(current) if current in options else 0,
            format_func=_difficulty_label,
        )
        if chosen != current:
            app_state.change_difficulty(store, chosen)
            st.rerun()

        if hasattr(st.sidebar, "page_link"):
            st.divider()
            st.page_link("pages/history.py", label="History")
