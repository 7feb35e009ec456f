from __future__ import annotations

import streamlit as st

from word_games.domain import Board


def render_status(board: Board) -> None:
    """ステータス（正解・ミス・サイクル）とフッターの残り数を描画する。"""
    if board.is_empty:
        return
    c1, c2, c3 = st.columns(3)
    with c1:
        st.metric("Matches", board.matches)
    with c2:
        st.metric("Misses", board.misses)
    with c3:
        st.metric("Cycle", board.cycles)


def render_footer(board: Board) -> None:
    st.caption(f"Tap words to match • {board.remaining} words remaining in cycle")
