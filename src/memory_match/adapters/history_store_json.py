"""JSON ファイルによる履歴リポジトリ。

目的:
- ブラウザのローカルストレージに相当する「端末ローカルの永続領域」として、
  1 つの JSON ファイルに新しい順の配列を保存する。

契約:
- load: ファイルが無い/読めない/JSON でない/配列でない場合は空リスト。
  HISTORY_LIMIT 件を超える分（古い側）は読み捨てる。
  個々の不正なエントリは読み飛ばす。いずれも警告ログのみで例外は出さない。
- save: 一時ファイルに書いてから置き換える（途中で落ちても既存ファイルを壊さない）。
"""

from __future__ import annotations

import json
import logging
import os
import pathlib
import tempfile

from src.memory_match.app.ports.history_repository import HistoryRepository
from src.memory_match.domain import HISTORY_LIMIT, STORAGE_KEY, HistoryItem

logger = logging.getLogger(__name__)


def default_history_path() -> pathlib.Path:
    """既定の保存先（ホーム配下）。ファイル名は STORAGE_KEY から作る。"""
    name = STORAGE_KEY.replace(":", "_") + ".json"
    return pathlib.Path.home() / ".memory_match" / name


class JsonFileHistoryRepository(HistoryRepository):
    """ローカル JSON ファイル実装の HistoryRepository。"""

    def __init__(self, path: str | pathlib.Path | None = None) -> None:
        self.path = pathlib.Path(path) if path is not None else default_history_path()

    def load(self) -> list[HistoryItem]:
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("history: could not read %s: %s", self.path, e)
            return []
        if not isinstance(raw, list):
            logger.warning("history: %s does not hold a list, ignoring", self.path)
            return []

        items: list[HistoryItem] = []
        for entry in raw:
            try:
                items.append(HistoryItem.from_dict(entry))
            except ValueError as e:
                logger.warning("history: skipping malformed entry: %s", e)
        return items[:HISTORY_LIMIT]

    def save(self, items: list[HistoryItem]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps([it.to_dict() for it in items], ensure_ascii=False, indent=2)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".history-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp, self.path)
        except BaseException:
            # 置き換えに失敗した一時ファイルは残さない
            pathlib.Path(tmp).unlink(missing_ok=True)
            raise


class InMemoryHistoryRepository(HistoryRepository):
    """メモリ上の HistoryRepository（テスト用）。save 回数も記録する。"""

    def __init__(self, items: list[HistoryItem] | None = None) -> None:
        self.items: list[HistoryItem] = list(items or [])
        self.save_count = 0

    def load(self) -> list[HistoryItem]:
        return list(self.items)

    def save(self, items: list[HistoryItem]) -> None:
        self.items = list(items)
        self.save_count += 1
