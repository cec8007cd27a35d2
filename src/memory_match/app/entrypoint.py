import logging

import streamlit as st

from src.memory_match.adapters.history_store_json import JsonFileHistoryRepository
from src.memory_match.adapters.session_store_streamlit import StSessionStore
from src.memory_match.services import app_state
from src.memory_match.services.config_loader import (
    get_app_title,
    load_config_file,
    load_default_settings,
)
from src.memory_match.ui.board import handle_click, render_board
from src.memory_match.ui.header import render_header
from src.memory_match.ui.sidebar import render_sidebar
from src.memory_match.ui.status import render_status
from src.memory_match.ui.toasts import render_toasts

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def main():
    # set_page_config は最初に 1 度だけ呼ぶ必要があるため、設定読込より前に固定タイトルで呼ぶ。
    default_title = "Memory Game"
    st.set_page_config(page_title=default_title, layout="centered")

    try:
        load_config_file()
        settings = load_default_settings()
        repo = JsonFileHistoryRepository(settings.history_path)
        store = StSessionStore()
        app_state.initialize_state(store, repo, settings)
    except Exception as e:
        logger.exception("initialization failed")
        st.error(f"Failed to start the game: {e}")
        return

    st.title(get_app_title(default_title))

    # サイドバー: 難易度
    render_sidebar(store)

    # ヘッダー操作（新しいゲーム + 履歴）
    render_header(store)

    # 計時・遅延解除のポンプを兼ねたステータス表示（盤面より先に実行する）
    render_status(store, settings.refresh_ms)

    # 盤面
    st.divider()
    render_board(store, lambda card_id: handle_click(store, repo, card_id))

    # 通知
    render_toasts(store)
