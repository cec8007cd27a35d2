"""
履歴ページ
- セッションに読み込み済みの履歴を表示します。
- 直接開かれた場合は保存先から読み込みます。
"""

import streamlit as st

from src.memory_match.adapters.history_store_json import JsonFileHistoryRepository
from src.memory_match.services.config_loader import load_config_file, load_default_settings
from src.memory_match.ui.history import render_history_table

# ページ設定
st.set_page_config(page_title="Game History", layout="centered")
st.title("Game History")

items = st.session_state.get("history")
if items is None:
    load_config_file()
    items = JsonFileHistoryRepository(load_default_settings().history_path).load()

st.caption(f"{len(items)} most recent game(s), newest first.")
render_history_table(items)
