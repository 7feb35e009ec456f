from __future__ import annotations

import streamlit as st

from word_games.adapters.session_store_streamlit import StSessionStore
from word_games.domain import TICK_INTERVAL
from word_games.services import gameplay


@st.fragment(run_every=TICK_INTERVAL)
def _poll(store: StSessionStore) -> None:
    if gameplay.tick(store):
        st.rerun()


def render_scheduler(store: StSessionStore) -> None:
    """遅延継続が残っている間だけ定期的に再実行させる。

    time.sleep は使わない。予約が無い回の描画ではフラグメントを置かないので、
    ポーリングもそこで止まる。
    """
    if gameplay.has_pending(store):
        _poll(store)
