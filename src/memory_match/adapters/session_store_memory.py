"""dict ベースの SessionStore（UI なしでの利用・テスト用）。"""

from __future__ import annotations

from typing import Any

from src.memory_match.app.ports.session_store import SessionStore


class MemorySessionStore(SessionStore):
    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:  # noqa: ANN401
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:  # noqa: ANN401
        self._data[key] = value
