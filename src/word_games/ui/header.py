from __future__ import annotations

import streamlit as st


def render_header(subheader: str) -> object:
    """ページ見出しの下に説明文と音声プレースホルダを描画する。

    Returns:
        音声プレースホルダ（st.empty() の返り値）。
    """
    st.caption(subheader)
    return st.empty()
