"""Streamlit セッション状態アダプタ。

目的:
- ゲーム状態を `st.session_state` に載せ、再実行（クリック・フラグメント更新）をまたいで保持する。
- アプリ層ポート `SessionStore` の実装を提供する。

使い方:
- entrypoint で `StSessionStore` を生成し、サービス関数と UI 描画関数へ渡す。
- streamlit の import は呼び出し時まで遅らせる（サービス層のテストで streamlit を要求しないため）。
"""

from __future__ import annotations

from typing import Any

from src.memory_match.app.ports.session_store import SessionStore


class StSessionStore(SessionStore):
    """`st.session_state` 上のゲームセッション。"""

    def get(self, key: str, default: Any = None) -> Any:  # noqa: ANN401 - 状態の型はキーごとに異なる
        import streamlit as st

        return st.session_state.get(key, default)

    def set(self, key: str, value: Any) -> None:  # noqa: ANN401 - 状態の型はキーごとに異なる
        import streamlit as st

        st.session_state[key] = value
