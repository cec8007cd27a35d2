from __future__ import annotations

import pandas as pd
import streamlit as st

from src.memory_match.adapters.session_store_streamlit import StSessionStore
from src.memory_match.domain import HistoryItem, format_time
from src.memory_match.services import data_access


def history_frame(items: list[HistoryItem]) -> pd.DataFrame:
    """履歴を表示用の DataFrame にする（新しい順のまま）。"""
    return pd.DataFrame(
        [
            {
                "Date": it.date.replace("T", " "),
                "Grid": it.grid,
                "Attempts": it.attempts,
                "Time": format_time(it.time_ms),
            }
            for it in items
        ],
        columns=["Date", "Grid", "Attempts", "Time"],
    )


def render_history_table(items: list[HistoryItem]) -> None:
    if not items:
        st.info("No games finished yet.")
        return
    st.dataframe(history_frame(items), hide_index=True, use_container_width=True)


@st.dialog("Game History")
def show_history_dialog(store: StSessionStore) -> None:
    render_history_table(data_access.get_history(store))
