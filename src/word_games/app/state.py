"""アプリケーションの状態モデル定義。

目的:
- UI とドメインの境界で用いる明示的な設定構造を提供する。
- サービス層は Settings からエンジンのタイミング等を組み立てる。
"""

from __future__ import annotations

from dataclasses import dataclass

from word_games.domain.compound import CompoundTiming
from word_games.domain.pairing import DEFAULT_PAIR_COUNT, MatchTiming


@dataclass
class Settings:
    """ゲームの動作に関する設定。

    現状の契約:
    - pair_count は Word Match の盤面に並べるペア数。
    - settle_delay/reset_delay は正解/不正解表示の持続秒数。
    - merge_delay/next_delay は Compound Words の合体/次の問題までの秒数。
    - muted は発音再生のミュート状態を示す。
    """

    pair_count: int = DEFAULT_PAIR_COUNT
    settle_delay: float = 0.6
    reset_delay: float = 0.8
    merge_delay: float = 0.5
    next_delay: float = 1.0
    muted: bool = False

    def match_timing(self) -> MatchTiming:
        return MatchTiming(settle_delay=self.settle_delay, reset_delay=self.reset_delay)

    def compound_timing(self) -> CompoundTiming:
        return CompoundTiming(merge_delay=self.merge_delay, next_delay=self.next_delay)
