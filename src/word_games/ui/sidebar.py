from __future__ import annotations

import dataclasses

import streamlit as st

from word_games.adapters.session_store_streamlit import StSessionStore
from word_games.domain import MAX_PAIR_COUNT
from word_games.services import app_state, data_access
from word_games.services.gameplay import on_muted_toggle as _svc_on_muted_toggle


def render_sidebar(store: StSessionStore) -> None:
    """サイドバーの設定 UI を描画する。

    - データ未読込時はペア数を無効化する。
    - ペア数は読込時に上限内へ収めてあるので、描画だけで盤面は作り直さない。
    - ミュート切替は常に反映する（プレイ中でも可）。
    - ページリンクは利用可能な場合のみ表示する。
    """
    settings = app_state.get_settings(store)
    pool_size = len(data_access.get_word_pairs(store))
    with st.sidebar:
        st.subheader("Game settings")
        controls_disabled = pool_size == 0
        max_pairs = max(1, min(MAX_PAIR_COUNT, pool_size))
        pair_count = st.number_input(
            "Pairs on board",
            min_value=1,
            max_value=max_pairs,
            value=min(max_pairs, max(1, settings.pair_count)),
            step=1,
            disabled=controls_disabled,
        )
        new_muted = st.toggle("Mute pronunciation", value=settings.muted, disabled=controls_disabled)

        if not controls_disabled and int(pair_count) != settings.pair_count:
            app_state.apply_settings(
                store, dataclasses.replace(settings, pair_count=int(pair_count))
            )
        # ミュート設定は常に反映（プレイ中でも切替可）
        _svc_on_muted_toggle(store, bool(new_muted))

        if st.button("New game", disabled=controls_disabled, use_container_width=True):
            app_state.reset_game(store)
            st.rerun()

        path = data_access.get_dataset_path(store)
        if pool_size and path:
            st.caption(f"Words: {path} ({pool_size})")

        # ページ移動リンク（Streamlit が対応している場合はサイドバーに表示）
        if hasattr(st.sidebar, "page_link"):
            st.divider()
            st.page_link("streamlit_app.py", label="Word Match")
            st.page_link("pages/compound_words.py", label="Compound Words")
