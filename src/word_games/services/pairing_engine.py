from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence

from word_games.domain import pairing
from word_games.domain.data import WordPair
from word_games.domain.pairing import (
    DEFAULT_PAIR_COUNT,
    Board,
    Event,
    MatchTiming,
    Select,
    Side,
    Transition,
)
from word_games.services.scheduler import DeadlineScheduler

logger = logging.getLogger(__name__)


class PairingEngine:
    """Word Match の盤面を保持し、選択イベントと遅延継続を処理する。

    セッション（画面）ごとに1つ生成して持つ。盤面の更新はすべて
    domain.pairing の純粋関数を通し、得られた継続はスケジューラに予約する。
    更新のたびに on_change へ不変の Board を渡す。
    """

    def __init__(
        self,
        pair_count: int = DEFAULT_PAIR_COUNT,
        timing: MatchTiming | None = None,
        scheduler: DeadlineScheduler | None = None,
        rng: random.Random | None = None,
        on_change: Callable[[Board], None] | None = None,
    ) -> None:
        self.pair_count = max(1, int(pair_count))
        self.timing = timing or MatchTiming()
        self.scheduler = scheduler or DeadlineScheduler()
        self.rng = rng or random.Random()
        self.on_change = on_change
        self._board = Board.empty()

    @property
    def board(self) -> Board:
        return self._board

    def _commit(self, board: Board) -> None:
        self._board = board
        if self.on_change is not None:
            self.on_change(board)

    def _run(self, transition: Transition) -> Board:
        for cont in transition.continuations:
            self.scheduler.call_later(cont.delay, cont.name, cont.event)
            logger.debug("scheduled %s in %.2fs: %r", cont.name, cont.delay, cont.event)
        self._commit(transition.board)
        return transition.board

    def start_cycle(self, pool: Sequence[WordPair]) -> Board:
        """pool をシャッフルして新しいサイクルを始める。空なら空盤面になる。"""
        board = pairing.start_cycle(pool, self.pair_count, self.rng, board=self._board)
        if board.is_empty:
            logger.warning("word source is empty; board left empty")
        else:
            logger.info(
                "cycle %d started: %d pairs on board, %d remaining",
                board.cycles,
                board.size,
                board.remaining,
            )
        self._commit(board)
        return board

    def load_pairs(self, count: int) -> Board:
        board = pairing.load_pairs(self._board, count, self.rng)
        self._commit(board)
        return board

    def select_left(self, index: int) -> Board:
        return self.dispatch(Select(Side.LEFT, index))

    def select_right(self, index: int) -> Board:
        return self.dispatch(Select(Side.RIGHT, index))

    def dispatch(self, event: Event) -> Board:
        before = self._board
        transition = pairing.apply(before, event, self.rng, self.timing, self.pair_count)
        if transition.board is before:
            logger.debug("ignored %r", event)
            return before
        if transition.board.matches > before.matches:
            logger.debug("match at %r", event)
        elif transition.board.misses > before.misses:
            logger.debug("miss at %r", event)
        if transition.board.cycles > before.cycles:
            logger.info("cycle exhausted; reshuffled %d words", len(transition.board.pool))
        return self._run(transition)

    def run_due(self, now: float | None = None) -> int:
        """期限が到来した遅延継続を順に適用し、適用した件数を返す。"""
        tasks = self.scheduler.pop_due(now)
        for task in tasks:
            self.dispatch(task.event)
        return len(tasks)

    def has_pending(self) -> bool:
        return self.scheduler.pending() > 0

    def teardown(self) -> None:
        """未実行の継続を破棄する（盤面は部分的に書き換えない）。"""
        dropped = self.scheduler.pending()
        self.scheduler.cancel_all()
        if dropped:
            logger.debug("dropped %d pending continuations", dropped)
