"""アプリケーションの設定モデル定義。

目的:
- config.toml 由来の値とコード既定値を一つの構造にまとめる。
- サービス層/UI は Settings を受け取り、設定の出どころを意識しない。
"""

from __future__ import annotations

from dataclasses import dataclass

from src.memory_match.domain import (
    DEFAULT_DIFFICULTY,
    HISTORY_LIMIT,
    MATCH_CLEAR_DELAY_MS,
    MISMATCH_CLEAR_DELAY_MS,
)


@dataclass
class Settings:
    """画面構成や動作に関する設定。

    現状の契約:
    - difficulty は起動時の難易度（"easy" / "hard"）。
    - match_delay_ms / mismatch_delay_ms は選択解除までの遅延。
    - refresh_ms は画面の自動更新間隔（計時表示と遅延解除の反映）。
    - history_path は履歴ファイルのパス。None なら既定の場所。
    - history_limit は履歴の保持件数。
    """

    difficulty: str = DEFAULT_DIFFICULTY
    match_delay_ms: int = MATCH_CLEAR_DELAY_MS
    mismatch_delay_ms: int = MISMATCH_CLEAR_DELAY_MS
    refresh_ms: int = 200
    history_path: str | None = None
    history_limit: int = HISTORY_LIMIT
