"""ドメイン層（純粋ロジック/データモデル）。

提供物:
- 単語データ（WordPair / CompoundWord）と CSV 読み込み
- Word Match の盤面遷移（pairing）
- Compound Words のめくり遷移（compound）
"""

from word_games.domain.constants import (
    COMPOUND_WORDS_CSV,
    FILE_ALIASES,
    MAX_PAIR_COUNT,
    SPEECH_LANG,
    TICK_INTERVAL,
    WORD_POOL_CSV,
)
from word_games.domain.data import (
    CompoundWord,
    WordPair,
    load_compound_words,
    load_word_pairs,
)
from word_games.domain.pairing import (
    DEFAULT_PAIR_COUNT,
    Board,
    Continuation,
    MatchTiming,
    ResetWrong,
    Select,
    SettleCorrect,
    Side,
    SlotState,
    Transition,
)

__all__ = [
    # data
    "WordPair",
    "CompoundWord",
    "load_word_pairs",
    "load_compound_words",
    # pairing
    "Board",
    "Continuation",
    "MatchTiming",
    "ResetWrong",
    "Select",
    "SettleCorrect",
    "Side",
    "SlotState",
    "Transition",
    "DEFAULT_PAIR_COUNT",
    # constants
    "WORD_POOL_CSV",
    "COMPOUND_WORDS_CSV",
    "SPEECH_LANG",
    "TICK_INTERVAL",
    "FILE_ALIASES",
    "MAX_PAIR_COUNT",
]
