from __future__ import annotations

from word_games.app.ports.session_store import SessionStore
from word_games.domain.compound import MergedFace
from word_games.services import app_state
from word_games.services.audio import queue_speech

# UI コンポーネントからのイベント（クリック、時間経過）を受け取り、
# セッション状態の更新とドメイン操作を一箇所に集約する。
# 本モジュールは UI フレームワークに依存しない。状態アクセスは SessionStore 経由で行う。


def handle_left_click(store: SessionStore, index: int) -> None:
    """左（英語）スロットのクリック。新しく選択されたら発音を予約する。"""
    engine = app_state.get_engine(store)
    before = engine.board
    board = engine.select_left(index)
    if board is before or before.selected_left == index:
        return
    queue_speech(store, board.left_words[index].prompt)


def handle_right_click(store: SessionStore, index: int) -> None:
    """右（訳語）スロットのクリック。"""
    app_state.get_engine(store).select_right(index)


def tick(store: SessionStore) -> bool:
    """期限が来た遅延継続を処理する。盤面が変わったら True。

    複合語カードが合体した瞬間には複合語の発音を予約する。
    """
    fired = app_state.get_engine(store).run_due()
    session = app_state.get_compound_session(store)
    before = session.state
    fired += session.run_due()
    after = session.state
    if after.merged is MergedFace.FRONT and before.merged is MergedFace.HIDDEN:
        assert after.current is not None
        queue_speech(store, after.current.compound)
    return fired > 0


def has_pending(store: SessionStore) -> bool:
    return (
        app_state.get_engine(store).has_pending()
        or app_state.get_compound_session(store).has_pending()
    )


def handle_compound_card(store: SessionStore, side: str) -> None:
    """複合語の左右カードのクリック（side は "left" / "right"）。"""
    session = app_state.get_compound_session(store)
    if side == "left":
        session.reveal_left()
    else:
        session.reveal_right()


def handle_merged_card(store: SessionStore) -> None:
    app_state.get_compound_session(store).flip_merged()


def on_muted_toggle(store: SessionStore, new_muted: bool) -> None:
    """ミュート切替時の副作用（設定更新・予約済み発音の破棄）を処理する。"""
    desired = bool(new_muted)
    if bool(store.get("muted", False)) == desired:
        return
    settings = app_state.get_settings(store)
    settings.muted = desired
    store.set("settings", settings)
    store.set("muted", desired)
    if desired:
        store.set("speak_text", None)
