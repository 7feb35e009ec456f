from __future__ import annotations

from collections.abc import Callable

import streamlit as st

from word_games.domain import Board, SlotState, WordPair

# 状態ごとのラベル装飾（Streamlit のボタンは色を個別指定できないため記号で表す）
_STATE_MARKS: dict[SlotState, str] = {
    SlotState.DEFAULT: "",
    SlotState.SELECTED: "👉 ",
    SlotState.CORRECT: "✅ ",
    SlotState.WRONG: "❌ ",
}


def _label(word: str, state: SlotState) -> str:
    return f"{_STATE_MARKS[state]}{word}"


def _render_column(
    side: str,
    words: tuple[WordPair, ...],
    states: tuple[SlotState, ...],
    text_of: Callable[[WordPair], str],
    on_click: Callable[[int], None],
) -> None:
    for index, (word, state) in enumerate(zip(words, states)):
        clicked = st.button(
            _label(text_of(word), state),
            key=f"{side}-{index}-{word.id}",
            use_container_width=True,
            type="primary" if state is SlotState.SELECTED else "secondary",
            disabled=state is SlotState.CORRECT,
        )
        if clicked:
            on_click(index)
            st.rerun()


def render_board(
    board: Board,
    on_left: Callable[[int], None],
    on_right: Callable[[int], None],
) -> None:
    """左右2列の盤面を描画する。クリックで on_left(i) / on_right(i) を呼び出す。

    盤面が空のときは読み込み中の表示にする。
    """
    if board.is_empty:
        st.info("Loading words...")
        return
    c_left, c_right = st.columns(2)
    with c_left:
        _render_column("left", board.left_words, board.left_states, lambda w: w.prompt, on_left)
    with c_right:
        _render_column(
            "right", board.right_words, board.right_states, lambda w: w.answer, on_right
        )
