"""
アプリケーション層のポート: 履歴リポジトリ

目的:
- クリア履歴の永続化先（ローカルファイル等）をサービス層から切り離す。
- テストではメモリ実装を差し込む。
"""

from __future__ import annotations

from typing import Protocol

from src.memory_match.domain import HistoryItem


class HistoryRepository(Protocol):
    """履歴の読み書き抽象。

    契約:
    - load は新しい順のリストを返す。壊れたデータは空リスト扱いで、例外は出さない。
    - save はリスト全体を書き換える（追記ではない）。
    """

    def load(self) -> list[HistoryItem]:
        """保存済みの履歴を返す。"""

    def save(self, items: list[HistoryItem]) -> None:
        """履歴全体を保存する。"""
