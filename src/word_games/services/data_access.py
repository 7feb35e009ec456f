from __future__ import annotations

from word_games.app.ports.session_store import SessionStore
from word_games.domain import CompoundWord, WordPair


def set_word_pairs(store: SessionStore, pairs: list[WordPair]) -> None:
    """セッションに単語ペアを設定する。

    - UI やコントローラ層からは本関数経由で設定することで、参照箇所の統一を図る。
    """
    store.set("word_pairs", pairs)


def get_word_pairs(store: SessionStore) -> list[WordPair]:
    """セッションの単語ペア一覧を返す（未設定時は空リスト）。"""
    return store.get("word_pairs") or []


def set_compound_words(store: SessionStore, words: list[CompoundWord]) -> None:
    store.set("compound_words", words)


def get_compound_words(store: SessionStore) -> list[CompoundWord]:
    return store.get("compound_words") or []


# ---- Dataset metadata helpers ----


def set_dataset_meta(store: SessionStore, path: str) -> None:
    """データセットの識別情報をセッションに設定する。

    Args:
        path: 表示用の識別（例: builtin://word_pool.csv やファイル名等）
    """
    store.set("data_path", path)


def get_dataset_path(store: SessionStore) -> str | None:
    """データセットの識別パスを返す。未設定なら None。"""
    return store.get("data_path")
