"""
共通定数
- コメントは現状の目的・契約・使い方のみを記載する。
"""

# カードに使う絵柄（先頭から必要数だけ使う。順序は固定）
EMOJI_SET: list[str] = [
    "🐶", "🐱", "🦊", "🐻", "🐼", "🐨", "🐯", "🦁", "🐮", "🐷", "🐸", "🐵",
    "🐔", "🐧", "🐦", "🐤", "🐙", "🦄", "🐝", "🐢", "🦋", "🐞", "🌸", "🍀",
    "🍎", "🍌", "🍇", "🍉", "⚽", "🏀", "🎲", "🎧", "🎹", "🚗", "✈️",
]  # fmt: skip

# 難易度 -> 盤面の一辺
DIFFICULTY_GRID: dict[str, int] = {"easy": 4, "hard": 6}
DEFAULT_DIFFICULTY: str = "easy"

# 履歴の保存キー（ファイル名の元にもなる）と保持件数
STORAGE_KEY: str = "memoryGame:history"
HISTORY_LIMIT: int = 50

# 計時の刻み（ミリ秒）
TICK_MS: int = 100

# 2枚目を開いてから選択を解除するまでの遅延（ミリ秒）
MATCH_CLEAR_DELAY_MS: int = 300
MISMATCH_CLEAR_DELAY_MS: int = 800
