from __future__ import annotations

from typing import Literal

from src.memory_match.app.ports.session_store import SessionStore

# 一時通知（トースト）のキュー。サービスが積み、UI が描画時に取り出す。

Kind = Literal["success", "info", "default"]


def notify(store: SessionStore, message: str, kind: Kind = "default") -> None:
    """通知を1件積む。"""
    queue: list[tuple[str, str]] = list(store.get("notifications") or [])
    queue.append((kind, message))
    store.set("notifications", queue)


def drain(store: SessionStore) -> list[tuple[str, str]]:
    """積まれた通知を (kind, message) の古い順で返し、キューを空にする。"""
    queue: list[tuple[str, str]] = list(store.get("notifications") or [])
    store.set("notifications", [])
    return queue
