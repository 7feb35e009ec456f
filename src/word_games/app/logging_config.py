from __future__ import annotations

import logging
import os

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging() -> None:
    """ルートロガーを設定する。レベルは環境変数 WORD_GAMES_LOG_LEVEL（既定 INFO）。

    Streamlit は再実行のたびに呼ぶので、ハンドラが既にあれば追加しない。
    """
    level_name = os.getenv("WORD_GAMES_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level, format=_LOG_FORMAT)
    logging.getLogger("word_games").setLevel(level)
