from __future__ import annotations

import streamlit as st

from src.memory_match.adapters.session_store_streamlit import StSessionStore
from src.memory_match.services.gameplay import start_new_game as _svc_start_new_game
from src.memory_match.ui.history import show_history_dialog


def render_header(store: StSessionStore) -> None:
    """メインヘッダー（新しいゲーム / 履歴ボタン）を描画する。"""
    c1, c2, _ = st.columns([2, 2, 6])
    with c1:
        if st.button("New game", use_container_width=True):
            _svc_start_new_game(store)
            st.rerun()
    with c2:
        if st.button("History", use_container_width=True):
            show_history_dialog(store)
