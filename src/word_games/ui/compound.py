from __future__ import annotations

from collections.abc import Callable

import streamlit as st

from word_games.domain.compound import CardFace, CompoundRound, MergedFace


def render_compound_cards(
    state: CompoundRound,
    on_card: Callable[[str], None],
    on_merged: Callable[[], None],
) -> None:
    """左右のカード、または合体カードを描画する。"""
    word = state.current
    if word is None:
        st.info("Loading...")
        return

    if state.merged is MergedFace.HIDDEN:
        _, c_left, c_right, _ = st.columns([1, 2, 2, 1])
        with c_left:
            text = word.word1 if state.left is CardFace.FRONT else word.word1_tr
            if st.button(
                text,
                key=f"cw-left-{state.generation}",
                use_container_width=True,
                type="primary" if state.left is CardFace.BACK else "secondary",
            ):
                on_card("left")
                st.rerun()
        with c_right:
            text = word.word2 if state.right is CardFace.FRONT else word.word2_tr
            if st.button(
                text,
                key=f"cw-right-{state.generation}",
                use_container_width=True,
                type="primary" if state.right is CardFace.BACK else "secondary",
            ):
                on_card("right")
                st.rerun()
        return

    _, c_mid, _ = st.columns([1, 2, 1])
    with c_mid:
        text = word.compound if state.merged is MergedFace.FRONT else word.compound_tr
        if st.button(
            text,
            key=f"cw-merged-{state.generation}",
            use_container_width=True,
            type="primary" if state.merged is MergedFace.BACK else "secondary",
        ):
            on_merged()
            st.rerun()


def render_learned_words(state: CompoundRound) -> None:
    """学習済みの複合語一覧を描画する。"""
    with st.expander(f"All Words ({len(state.learned)})"):
        if not state.learned:
            st.write("No words learned yet. Start playing!")
            return
        for w in state.learned:
            st.markdown(f"**{w.word1} + {w.word2} = {w.compound}**")
            st.caption(f"{w.word1_tr} + {w.word2_tr} = {w.compound_tr}")
