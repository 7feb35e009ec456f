from __future__ import annotations

import os
from collections.abc import Callable

import streamlit as st

from word_games.app.state import Settings
from word_games.domain import CompoundWord, WordPair
from word_games.services import dataset_loader
from word_games.services.config_loader import load_default_settings


def render_upload_ui(
    load_dataset: Callable[[list[WordPair], list[CompoundWord], Settings, str], None],
) -> None:
    """ランディングのデータ選択 UI を描画する。

    使用者は、単語データ未読込のときに本関数を呼び出し、その直後に return すること。

    Args:
        load_dataset: 読み込んだ単語・設定でゲームを初期化するコールバック。
    """
    st.header("Choose a word list")
    mode = st.radio(
        "Source",
        options=["Built-in list", "Upload files (CSV required, config.toml optional)"],
        horizontal=True,
    )
    err_holder = st.empty()

    if mode.startswith("Built-in"):
        if st.button("Start", type="primary", key="main_btn_load_builtin"):
            try:
                pairs, compounds = dataset_loader.load_builtin()
            except (OSError, ValueError) as e:
                err_holder.error(f"Failed to load words: {e}")
                return
            load_dataset(pairs, compounds, load_default_settings(), "builtin://word_pool.csv")
            st.rerun()
        return

    ups = st.file_uploader(
        "Required: word CSV (english, turkish) / optional: compound CSV, config.toml",
        type=["csv", "toml"],
        accept_multiple_files=True,
    )
    if st.button("Load", type="primary", key="main_btn_load_multi"):
        files = ups or []
        by_name_bytes: dict[str, bytes] = {os.path.basename(f.name): f.getvalue() for f in files}
        try:
            pairs, compounds = dataset_loader.load_from_multi_bytes(by_name_bytes)
        except (OSError, ValueError) as e:
            err_holder.error(f"Failed to load words: {e}")
            return
        names = ", ".join(sorted(by_name_bytes)) or "uploaded"
        load_dataset(pairs, compounds, load_default_settings(), f"uploaded://{names}")
        st.success("Word list loaded.")
        st.rerun()
