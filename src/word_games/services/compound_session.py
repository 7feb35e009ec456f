from __future__ import annotations

import logging
import random
from collections.abc import Sequence

from word_games.domain import compound
from word_games.domain.compound import CompoundRound, CompoundStep, CompoundTiming
from word_games.domain.data import CompoundWord
from word_games.domain.pairing import Side
from word_games.services.scheduler import DeadlineScheduler

logger = logging.getLogger(__name__)


class CompoundSession:
    """Compound Words の1セッション分の状態と遅延継続を保持する。"""

    def __init__(
        self,
        timing: CompoundTiming | None = None,
        scheduler: DeadlineScheduler | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.timing = timing or CompoundTiming()
        self.scheduler = scheduler or DeadlineScheduler()
        self.rng = rng or random.Random()
        self.state = CompoundRound()

    def start(self, words: Sequence[CompoundWord]) -> CompoundRound:
        self.scheduler.cancel_all()
        self.state = compound.start(words, self.rng)
        if self.state.current is None:
            logger.warning("no compound words available")
        return self.state

    def _run(self, step: CompoundStep) -> CompoundRound:
        for cont in step.continuations:
            self.scheduler.call_later(cont.delay, cont.name, cont.event)
        self.state = step.round
        return self.state

    def reveal_left(self) -> CompoundRound:
        return self._run(compound.reveal(self.state, Side.LEFT, self.timing))

    def reveal_right(self) -> CompoundRound:
        return self._run(compound.reveal(self.state, Side.RIGHT, self.timing))

    def flip_merged(self) -> CompoundRound:
        return self._run(compound.flip_merged(self.state, self.timing))

    def run_due(self, now: float | None = None) -> int:
        tasks = self.scheduler.pop_due(now)
        for task in tasks:
            before = self.state
            self.state = compound.apply(self.state, task.event, self.rng)
            if self.state is not before and task.name == compound.MERGE:
                assert self.state.current is not None
                logger.debug("merged into %s", self.state.current.compound)
        return len(tasks)

    def has_pending(self) -> bool:
        return self.scheduler.pending() > 0
