"""
アプリケーション層のポート: セッションストア

目的:
- 1 ブラウザセッション分のゲーム状態（デッキ・選択・ロック・計時・予約済みアクション・履歴）を
  UI フレームワークから切り離して保持する。
- サービス層は本ポート（Protocol）にのみ依存し、テストでは dict 実装を差し込む。

主なキー（読み書きは services.data_access / timer / scheduler に集約）:
- deck, grid_size, difficulty, phase, attempts, choice1, choice2, locked
- running, elapsed_ms, tick_anchor
- generation, scheduled
- history, history_limit, notifications
"""

from __future__ import annotations

from typing import Any, Protocol


class SessionStore(Protocol):
    """ゲームセッション状態へのアクセス抽象。

    契約:
    - dict 風の get/set を提供する。未設定キーは default を返す。
    - 値はそのまま保持する（Card/HistoryItem のリストなどを複製せずに渡す）。
    """

    def get(self, key: str, default: Any = None) -> Any:  # noqa: ANN401 - 状態の型はキーごとに異なる
        """キーに対応する値を取得する。存在しない場合は default を返す。"""

    def set(self, key: str, value: Any) -> None:  # noqa: ANN401 - 状態の型はキーごとに異なる
        """キーに値を設定する。"""
