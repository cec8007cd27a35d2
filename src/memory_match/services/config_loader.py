from __future__ import annotations

import logging
import os
import pathlib
import tomllib
from typing import TYPE_CHECKING, Any

from src.memory_match.domain import DIFFICULTY_GRID, HISTORY_LIMIT

logger = logging.getLogger(__name__)

# 設定ファイルのパスを指定する環境変数（未指定時はカレントの config.toml）
CONFIG_ENV_VAR = "MEMORY_MATCH_CONFIG"
DEFAULT_CONFIG_FILE = "config.toml"


class _ConfigStore:
    file_config: dict[str, Any] | None = None


_CONFIG_STORE = _ConfigStore()


def load_config_file(path: str | pathlib.Path | None = None) -> dict[str, Any]:
    """ローカルの TOML を読み込み、ファイル由来の設定として保持する。

    - path 未指定時は環境変数 MEMORY_MATCH_CONFIG、次に ./config.toml を見る。
    - ファイルが無い/壊れている場合は空辞書（コード既定値にフォールバック）。
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_FILE
    p = pathlib.Path(path)
    cfg: dict[str, Any] = {}
    if p.is_file():
        try:
            with p.open("rb") as f:
                cfg = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning("config: could not read %s: %s", p, e)
            cfg = {}
    _CONFIG_STORE.file_config = cfg
    return cfg


def _get_config() -> dict[str, Any]:
    """現在有効な設定を返す。

    方針:
    - load_config_file で読み込んだ設定があればそれを返す。
    - 無ければ空辞書を返し、各呼び出し側で default 値にフォールバックさせる。
    """
    if isinstance(_CONFIG_STORE.file_config, dict):
        return _CONFIG_STORE.file_config
    return {}


def _section(name: str) -> dict[str, Any]:
    v = _get_config().get(name)
    return v if isinstance(v, dict) else {}


def _positive_int(v: Any) -> bool:  # noqa: ANN401
    return isinstance(v, int) and not isinstance(v, bool) and v > 0


def get_app_title(default: str = "Memory Game") -> str:
    cfg = _get_config()
    title = cfg.get("title")
    if isinstance(title, str) and title.strip():
        return title.strip()
    return default


def load_default_settings_values() -> dict[str, int | str]:
    """設定ファイルから妥当な値だけを取り出す（不正な型は捨てる）。"""
    result: dict[str, int | str] = {}
    settings = _section("settings")
    difficulty = settings.get("difficulty")
    if isinstance(difficulty, str) and difficulty in DIFFICULTY_GRID:
        result["difficulty"] = difficulty

    timing = _section("timing")
    for key in ("match_delay_ms", "mismatch_delay_ms", "refresh_ms"):
        if _positive_int(timing.get(key)):
            result[key] = int(timing[key])

    history = _section("history")
    path = history.get("path")
    if isinstance(path, str) and path.strip():
        result["history_path"] = os.path.expanduser(path.strip())
    if _positive_int(history.get("limit")):
        # 保持件数は HISTORY_LIMIT が上限（それ以上は切り詰める）
        result["history_limit"] = min(int(history["limit"]), HISTORY_LIMIT)
    return result


if TYPE_CHECKING:
    from src.memory_match.app.state import Settings as _SettingsType


def load_default_settings() -> _SettingsType:
    from src.memory_match.app.state import Settings  # 局所インポートで循環回避

    values = load_default_settings_values()
    return Settings(
        difficulty=str(values.get("difficulty", Settings.difficulty)),
        match_delay_ms=int(values.get("match_delay_ms", Settings.match_delay_ms)),
        mismatch_delay_ms=int(values.get("mismatch_delay_ms", Settings.mismatch_delay_ms)),
        refresh_ms=int(values.get("refresh_ms", Settings.refresh_ms)),
        history_path=values.get("history_path"),  # type: ignore[arg-type]
        history_limit=int(values.get("history_limit", Settings.history_limit)),
    )
