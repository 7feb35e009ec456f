from __future__ import annotations

import dataclasses
import logging

from word_games.app.ports.session_store import SessionStore
from word_games.app.state import Settings
from word_games.domain import MAX_PAIR_COUNT, Board, CompoundWord, WordPair
from word_games.services import data_access
from word_games.services.compound_session import CompoundSession
from word_games.services.config_loader import load_default_settings
from word_games.services.pairing_engine import PairingEngine

logger = logging.getLogger(__name__)


def initialize_state(store: SessionStore) -> None:
    """アプリ起動時に必要なセッション状態を初期化する。

    既に存在するキーは上書きせず、未定義のときのみ初期値を設定する。
    データ未読込時は空の単語リストで空盤面のエンジンを用意する。
    """
    if store.get("word_pairs") is None:
        data_access.set_word_pairs(store, [])
        data_access.set_compound_words(store, [])
        data_access.set_dataset_meta(store, "uploaded://pending")
    if store.get("settings") is None:
        settings = load_default_settings()
        store.set("settings", settings)
        store.set("muted", settings.muted)
    if store.get("engine") is None:
        store.set("engine", _new_engine(store, get_settings(store)))
    if store.get("compound_session") is None:
        store.set("compound_session", CompoundSession(get_settings(store).compound_timing()))
    if store.get("speak_text") is None:
        store.set("speak_text", None)


def get_settings(store: SessionStore) -> Settings:
    settings = store.get("settings")
    return settings if isinstance(settings, Settings) else Settings()


def get_engine(store: SessionStore) -> PairingEngine:
    return store.get("engine")


def get_compound_session(store: SessionStore) -> CompoundSession:
    return store.get("compound_session")


def get_board(store: SessionStore) -> Board:
    """エンジンが最後に通知した盤面。未通知なら空盤面。"""
    board = store.get("board")
    return board if isinstance(board, Board) else Board.empty()


def _new_engine(store: SessionStore, settings: Settings) -> PairingEngine:
    # 盤面が変わるたびにスナップショットをセッションへ置き、描画はそれを読む
    store.set("board", Board.empty())
    return PairingEngine(
        pair_count=settings.pair_count,
        timing=settings.match_timing(),
        on_change=lambda board: store.set("board", board),
    )


def _fit_pair_count(settings: Settings, pool_size: int) -> Settings:
    """ペア数を 1..min(上限, 単語数) に収める。単語が無いときはそのまま。"""
    if pool_size <= 0:
        return settings
    fitted = max(1, min(settings.pair_count, MAX_PAIR_COUNT, pool_size))
    if fitted == settings.pair_count:
        return settings
    return dataclasses.replace(settings, pair_count=fitted)


def reset_game(
    store: SessionStore,
    pairs: list[WordPair] | None = None,
    compounds: list[CompoundWord] | None = None,
) -> None:
    """ゲーム状態をリセットし、新しいエンジンでサイクルを開始する。

    引数が指定されればそれを優先し、未指定のときはセッション内のデータを用いる。
    旧エンジンの未実行継続は破棄する。
    """
    if pairs is not None:
        data_access.set_word_pairs(store, pairs)
    if compounds is not None:
        data_access.set_compound_words(store, compounds)
    settings = get_settings(store)

    old = store.get("engine")
    if isinstance(old, PairingEngine):
        old.teardown()
    engine = _new_engine(store, settings)
    engine.start_cycle(data_access.get_word_pairs(store))
    store.set("engine", engine)

    session = CompoundSession(settings.compound_timing())
    session.start(data_access.get_compound_words(store))
    store.set("compound_session", session)
    store.set("speak_text", None)
    logger.info("game reset with pair_count=%d", settings.pair_count)


def load_dataset(
    store: SessionStore,
    pairs: list[WordPair],
    compounds: list[CompoundWord],
    settings: Settings,
    path: str,
) -> None:
    """読み込んだデータと設定をセッションへ反映し、ゲームを開始する。"""
    settings = _fit_pair_count(settings, len(pairs))
    store.set("settings", settings)
    store.set("muted", settings.muted)
    data_access.set_dataset_meta(store, path)
    reset_game(store, pairs, compounds)


def apply_settings(store: SessionStore, settings: Settings) -> None:
    """設定を保存する。盤面の大きさやタイミングが変わったときはゲームを作り直す。"""
    settings = _fit_pair_count(settings, len(data_access.get_word_pairs(store)))
    current = get_settings(store)
    store.set("settings", settings)
    store.set("muted", settings.muted)
    if (
        settings.pair_count != current.pair_count
        or settings.match_timing() != current.match_timing()
        or settings.compound_timing() != current.compound_timing()
    ):
        reset_game(store)
