from __future__ import annotations

import logging
import tomllib
from typing import TYPE_CHECKING, Any

logger = logging.getLogger(__name__)


class _RuntimeStore:
    config: dict[str, Any] | None = None


_RUNTIME_STORE = _RuntimeStore()


def set_runtime_config(cfg: dict[str, Any] | None) -> None:
    """実行時（アップロード）で与えられた設定を保持する。None で解除。"""
    _RUNTIME_STORE.config = cfg if isinstance(cfg, dict) else None


def set_runtime_toml_bytes(data: bytes) -> None:
    """アップロードされた TOML バイト列から実行時設定を反映する。

    解釈できない場合は設定を解除してコード既定値に戻す。
    """
    try:
        cfg = tomllib.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.warning("ignoring invalid config.toml: %s", e)
        set_runtime_config(None)
        return
    set_runtime_config(cfg)


def _get_config() -> dict[str, Any]:
    """現在有効な設定を返す。

    方針: ローカルの TOML は読み込まない。
    - アップロードで与えられたランタイム設定があればそれを返す。
    - それ以外は空辞書を返し、各呼び出し側で default 値にフォールバックさせる。
    """
    if isinstance(_RUNTIME_STORE.config, dict):
        return _RUNTIME_STORE.config
    return {}


def get_app_title(default: str = "Word Games") -> str:
    cfg = _get_config()
    title = cfg.get("title")
    if isinstance(title, str) and title.strip():
        return title.strip()
    return default


def _get_page_text(key: str, default: str) -> str:
    pages = _get_config().get("pages") or {}
    if isinstance(pages, dict):
        v = pages.get(key)
        if isinstance(v, str) and v.strip():
            return v.strip()
    return default


def get_word_match_subheader_text(
    default: str = "Match English words with Turkish meanings",
) -> str:
    return _get_page_text("word_match_subheader", default)


def get_compound_subheader_text(default: str = "Combine words to create new meanings") -> str:
    return _get_page_text("compound_subheader", default)


def _is_number(v: object) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def load_default_settings_values() -> dict[str, int | float | bool]:
    result: dict[str, int | float | bool] = {}
    cfg = _get_config()
    settings = cfg.get("settings")
    if isinstance(settings, dict):
        # 不正な型・範囲の場合は各呼び出し側でコード既定値へフォールバックする。
        if isinstance(settings.get("pair_count"), int) and not isinstance(
            settings.get("pair_count"), bool
        ):
            if settings["pair_count"] >= 1:
                result["pair_count"] = int(settings["pair_count"])
        for key in ("settle_delay", "reset_delay"):
            if _is_number(settings.get(key)) and settings[key] >= 0:
                result[key] = float(settings[key])
        if isinstance(settings.get("muted"), bool):
            result["muted"] = bool(settings["muted"])
    comp = cfg.get("compound")
    if isinstance(comp, dict):
        for key in ("merge_delay", "next_delay"):
            if _is_number(comp.get(key)) and comp[key] >= 0:
                result[key] = float(comp[key])
    return result


if TYPE_CHECKING:
    from word_games.app.state import Settings as _SettingsType


def load_default_settings() -> _SettingsType:
    from word_games.app.state import Settings  # 局所インポートで循環回避

    values = load_default_settings_values()
    return Settings(
        pair_count=int(values.get("pair_count", Settings.pair_count)),
        settle_delay=float(values.get("settle_delay", Settings.settle_delay)),
        reset_delay=float(values.get("reset_delay", Settings.reset_delay)),
        merge_delay=float(values.get("merge_delay", Settings.merge_delay)),
        next_delay=float(values.get("next_delay", Settings.next_delay)),
        muted=bool(values.get("muted", Settings.muted)),
    )
