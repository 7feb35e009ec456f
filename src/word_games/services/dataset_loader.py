"""
データセット読み込みサービス（Streamlit 非依存）
- 同梱 CSV の読込
- 個別ファイル（ベース名->バイト列）の読込
- CSV の種類は内容の列ヘッダで判定する（ファイル名は固定しない）

戻り値の契約:
    (word_pairs: list[WordPair], compound_words: list[CompoundWord])
"""

from __future__ import annotations

import io
import logging
from collections.abc import Callable

import pandas as pd

from word_games.domain import (
    COMPOUND_WORDS_CSV,
    FILE_ALIASES,
    WORD_POOL_CSV,
    CompoundWord,
    WordPair,
    load_compound_words,
    load_word_pairs,
)
from word_games.domain.data import COMPOUND_COLUMNS
from word_games.services.config_loader import set_runtime_config, set_runtime_toml_bytes

logger = logging.getLogger(__name__)


def load_builtin() -> tuple[list[WordPair], list[CompoundWord]]:
    """同梱の単語リストと複合語リストを読み込む。"""
    set_runtime_config(None)
    pairs = load_word_pairs(WORD_POOL_CSV)
    compounds = load_compound_words(COMPOUND_WORDS_CSV)
    logger.info("loaded built-in dataset: %d pairs, %d compounds", len(pairs), len(compounds))
    return pairs, compounds


def resolve_required_files(
    names: list[str],
    read_bytes: Callable[[str], bytes],
) -> tuple[dict[str, str], list[str]]:
    """ファイル名一覧から、単語 CSV / 複合語 CSV / 設定 TOML を自動検出する。

    - 複合語 CSV: 6 列（word1..compound_tr）を全て含むもの。
    - 単語 CSV: それ以外で 2 列以上ある最初の CSV。
    - config: FILE_ALIASES["config"] に一致するベース名（任意）。

    Returns:
        (resolved_map, missing_keys)
        resolved_map: {"words": 名前, "compounds": 名前?, "config": 名前?}
        missing_keys: ["words"] だけを返す（他は任意のため欠如しても含めない）
    """
    resolved: dict[str, str] = {}
    for name in sorted(names):
        lower = name.lower()
        if lower in FILE_ALIASES["config"] and "config" not in resolved:
            resolved["config"] = name
            continue
        if not lower.endswith(".csv"):
            continue
        try:
            header = pd.read_csv(io.BytesIO(read_bytes(name)), nrows=0)
        except (ValueError, UnicodeDecodeError, pd.errors.ParserError) as e:
            logger.warning("skipping unreadable CSV %s: %s", name, e)
            continue
        cols = {str(c).strip().lower() for c in header.columns}
        if set(COMPOUND_COLUMNS).issubset(cols):
            resolved.setdefault("compounds", name)
        elif len(cols) >= 2:
            resolved.setdefault("words", name)

    missing = [] if "words" in resolved else ["words"]
    return resolved, missing


def load_from_multi_bytes(
    by_name_bytes: dict[str, bytes],
) -> tuple[list[WordPair], list[CompoundWord]]:
    """個別ファイル（ベース名->バイト列）からデータセットを読み込む。

    複合語 CSV が無い場合は同梱の複合語リストを使う。
    """
    resolved, missing_keys = resolve_required_files(
        list(by_name_bytes.keys()), read_bytes=lambda k: by_name_bytes[k]
    )
    if missing_keys:
        raise ValueError("Missing files: " + ", ".join(missing_keys))

    pairs = load_word_pairs(io.BytesIO(by_name_bytes[resolved["words"]]))
    if "compounds" in resolved:
        compounds = load_compound_words(io.BytesIO(by_name_bytes[resolved["compounds"]]))
    else:
        compounds = load_compound_words(COMPOUND_WORDS_CSV)

    if "config" in resolved:
        set_runtime_toml_bytes(by_name_bytes[resolved["config"]])
    else:
        set_runtime_config(None)

    logger.info(
        "loaded uploaded dataset %s: %d pairs, %d compounds",
        resolved["words"],
        len(pairs),
        len(compounds),
    )
    return pairs, compounds
