from __future__ import annotations

import base64
import uuid
from typing import Any

import streamlit.components.v1 as components

from word_games.adapters.session_store_streamlit import StSessionStore
from word_games.services.audio import pop_speech_audio


def build_autoplay_html(audio_bytes: bytes, player_id: str) -> str:
    """自動再生用の HTML を生成する（autoplay + JS の play() フォールバック）。"""
    b64 = base64.b64encode(audio_bytes).decode("utf-8")
    tpl = """
        <audio id="__ID__" src="data:audio/mp3;base64,__SRC__" autoplay></audio>
        <script>
        (function(){
            var a = document.getElementById("__ID__");
            if (!a || !a.play) return;
            var p = a.play();
            if (p && p.catch) { p.catch(function(){}); }
        })();
        </script>
    """
    return tpl.replace("__ID__", player_id).replace("__SRC__", b64)


def render_speech(placeholder: Any, store: StSessionStore) -> None:
    """予約された発音があれば再生する。音声が作れなかった場合は単語だけ表示する。"""
    text, audio_bytes = pop_speech_audio(store)
    if text is None:
        return
    if audio_bytes:
        html = build_autoplay_html(audio_bytes, f"speech-{uuid.uuid4().hex[:8]}")
        with placeholder:
            components.html(html, height=0)
    elif not store.get("muted", False):
        placeholder.caption(f"🔇 {text}")
