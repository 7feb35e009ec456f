"""
共通定数
- コメントは現状の目的・契約・使い方のみを記載する。
"""

import pathlib

# 同梱データの置き場所
DATA_DIR: pathlib.Path = pathlib.Path(__file__).resolve().parent.parent / "data"

# 同梱の単語リスト（english, turkish）
WORD_POOL_CSV: pathlib.Path = DATA_DIR / "word_pool.csv"

# 同梱の複合語リスト
COMPOUND_WORDS_CSV: pathlib.Path = DATA_DIR / "compound_words.csv"

# 発音に使う言語（gTTS）
SPEECH_LANG: str = "en"

# 遅延継続の有無を確認する間隔（秒）。Streamlit の再実行周期になる
TICK_INTERVAL: float = 0.2

# アップロード時に受け付けるファイル（論理名 -> 許容ベース名の候補リスト）
FILE_ALIASES: dict[str, list[str]] = {
    "config": ["config.toml"],
}

# 盤面に並べるペア数の上限（サイドバーの入力上限）
MAX_PAIR_COUNT: int = 10
