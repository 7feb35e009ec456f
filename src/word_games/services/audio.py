from __future__ import annotations

import logging
from functools import lru_cache
from io import BytesIO

from gtts import gTTS
from gtts.tts import gTTSError

from word_games.app.ports.session_store import SessionStore
from word_games.domain import SPEECH_LANG

logger = logging.getLogger(__name__)


@lru_cache(maxsize=256)
def synthesize_word(text: str, lang: str = SPEECH_LANG) -> bytes | None:
    """単語テキストから発音音声(mp3)のバイト列を生成して返す。

    - gTTS のネットワーク障害などが起きた場合は None を返す。
    - lru_cache でテキストごとの結果をメモリキャッシュ。
    """
    if not text:
        return None
    try:
        tts = gTTS(text=text, lang=lang)
        bio = BytesIO()
        tts.write_to_fp(bio)
        return bio.getvalue()
    except (gTTSError, OSError) as e:
        logger.warning("speech synthesis failed for %r: %s", text, e)
        return None


def queue_speech(store: SessionStore, text: str) -> None:
    """次の描画で再生する単語を予約する（ミュート時は何もしない）。"""
    if store.get("muted", False):
        return
    store.set("speak_text", text)


def pop_speech_audio(store: SessionStore) -> tuple[str | None, bytes | None]:
    """予約された発音を取り出し、(テキスト, 音声) を返す。予約が無ければ (None, None)。"""
    text = store.get("speak_text")
    if not text:
        return None, None
    store.set("speak_text", None)
    if store.get("muted", False):
        return text, None
    return text, synthesize_word(text)
