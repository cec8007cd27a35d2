from __future__ import annotations

from collections.abc import Callable

import streamlit as st

from src.memory_match.adapters.session_store_streamlit import StSessionStore
from src.memory_match.app.ports.history_repository import HistoryRepository
from src.memory_match.services import data_access
from src.memory_match.services.gameplay import is_face_up
from src.memory_match.services.gameplay import select_card as _svc_select_card

FACE_DOWN_LABEL = "❓"


def render_board(store: StSessionStore, on_click: Callable[[str], None]) -> None:
    """盤面を描画し、クリックで on_click(card_id) を呼び出す。"""
    deck = data_access.get_deck(store)
    size = data_access.get_grid_size(store)
    if not deck or size <= 0:
        return
    locked = data_access.is_locked(store)
    for r in range(size):
        cols = st.columns(size)
        for c in range(size):
            card = deck[r * size + c]
            face_up = is_face_up(store, card)
            label = card.content if face_up else FACE_DOWN_LABEL
            # 揃った札は押せない。判定中は見た目を保ったまま押下を無視する（サービス側で判定）
            if cols[c].button(
                label,
                key=f"card-{card.id}",
                use_container_width=True,
                disabled=card.matched,
                type="secondary" if face_up else "primary",
            ):
                if not locked:
                    on_click(card.id)
                st.rerun()


def handle_click(store: StSessionStore, repo: HistoryRepository, card_id: str) -> None:
    """札クリック時の処理をサービスに委譲する。"""
    _svc_select_card(store, card_id, repo)
