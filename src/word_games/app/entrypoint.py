import streamlit as st

from word_games.adapters.session_store_streamlit import StSessionStore
from word_games.app.logging_config import configure_logging
from word_games.services import app_state, data_access, gameplay
from word_games.services.config_loader import (
    get_app_title,
    get_compound_subheader_text,
    get_word_match_subheader_text,
)
from word_games.ui.audio_player import render_speech
from word_games.ui.board import render_board
from word_games.ui.compound import render_compound_cards, render_learned_words
from word_games.ui.header import render_header
from word_games.ui.landing import render_upload_ui
from word_games.ui.scheduler import render_scheduler
from word_games.ui.sidebar import render_sidebar
from word_games.ui.status import render_footer, render_status


def _prepare(page_title: str) -> StSessionStore | None:
    """ページ共通の初期化（ログ・セッション・期限到来済みの継続の適用）。"""
    configure_logging()
    st.set_page_config(page_title=page_title, layout="wide")
    store = StSessionStore()
    try:
        app_state.initialize_state(store)
    except (OSError, ValueError) as e:
        st.error(f"Failed to initialise the game: {e}")
        return None
    gameplay.tick(store)
    return store


def main():
    store = _prepare("Word Match")
    if store is None:
        return
    data_loaded = len(data_access.get_word_pairs(store)) > 0
    st.title(get_app_title("Word Match") if data_loaded else "Word Match")

    render_sidebar(store)

    # データ未読込ならメインエリアをデータ選択画面にする
    if not data_loaded:
        render_upload_ui(
            load_dataset=lambda pairs, compounds, settings, path: app_state.load_dataset(
                store, pairs, compounds, settings, path
            )
        )
        return

    audio_placeholder = render_header(get_word_match_subheader_text())
    board = app_state.get_board(store)
    render_status(board)
    st.divider()
    render_board(
        board,
        on_left=lambda i: gameplay.handle_left_click(store, i),
        on_right=lambda i: gameplay.handle_right_click(store, i),
    )
    render_footer(board)
    render_speech(audio_placeholder, store)
    render_scheduler(store)


def compound_main():
    store = _prepare("Compound Words")
    if store is None:
        return
    st.title("Compound Words")
    render_sidebar(store)

    if not data_access.get_word_pairs(store):
        st.info("Load a word list on the Word Match page first.")
        return

    audio_placeholder = render_header(get_compound_subheader_text())
    session = app_state.get_compound_session(store)
    render_compound_cards(
        session.state,
        on_card=lambda side: gameplay.handle_compound_card(store, side),
        on_merged=lambda: gameplay.handle_merged_card(store),
    )
    st.divider()
    render_learned_words(session.state)
    render_speech(audio_placeholder, store)
    render_scheduler(store)
