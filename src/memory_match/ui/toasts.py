from __future__ import annotations

import streamlit as st

from src.memory_match.adapters.session_store_streamlit import StSessionStore
from src.memory_match.services.notifications import drain

_ICONS: dict[str, str | None] = {"success": "✅", "info": "ℹ️", "default": None}


def render_toasts(store: StSessionStore) -> None:
    """積まれた通知をトーストとして表示する（表示したものはキューから消える）。"""
    for kind, message in drain(store):
        st.toast(message, icon=_ICONS.get(kind))
