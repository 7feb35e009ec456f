import random

import pytest

from word_games.domain import compound
from word_games.domain.compound import (
    MERGE,
    NEXT_WORD,
    CardFace,
    CompoundTiming,
    MergedFace,
)
from word_games.domain.pairing import Side
from word_games.services.compound_session import CompoundSession
from word_games.services.scheduler import DeadlineScheduler

TIMING = CompoundTiming(merge_delay=0.5, next_delay=1.0)


@pytest.mark.unit
def test_start_draws_a_word(compound_words, rng):
    state = compound.start(compound_words, rng)
    assert state.current in compound_words
    assert len(state.deck) == 2
    assert state.left is CardFace.FRONT and state.right is CardFace.FRONT
    assert state.merged is MergedFace.HIDDEN


@pytest.mark.unit
def test_empty_word_list_has_no_current(rng):
    state = compound.start([], rng)
    assert state.current is None
    step = compound.reveal(state, Side.LEFT, TIMING)
    assert step.round is state


@pytest.mark.unit
def test_revealing_both_cards_schedules_merge(compound_words, rng):
    state = compound.start(compound_words, rng)
    step = compound.reveal(state, Side.LEFT, TIMING)
    assert step.round.left is CardFace.BACK
    assert step.continuations == ()

    # 同じカードをもう一度押しても何も起きない
    again = compound.reveal(step.round, Side.LEFT, TIMING)
    assert again.round is step.round

    step = compound.reveal(step.round, Side.RIGHT, TIMING)
    (cont,) = step.continuations
    assert cont.name == MERGE
    assert cont.delay == 0.5


@pytest.mark.unit
def test_merge_then_flip_then_next(compound_words, rng):
    state = compound.start(compound_words, rng)
    state = compound.reveal(state, Side.LEFT, TIMING).round
    step = compound.reveal(state, Side.RIGHT, TIMING)
    merged = compound.apply(step.round, step.continuations[0].event, rng)
    assert merged.merged is MergedFace.FRONT
    assert merged.learned == (state.current,)

    # 同じ merge が二重に届いても learned は増えない
    assert compound.apply(merged, step.continuations[0].event, rng) is merged

    flipped = compound.flip_merged(merged, TIMING)
    assert flipped.round.merged is MergedFace.BACK
    assert flipped.continuations == ()

    step = compound.flip_merged(flipped.round, TIMING)
    (cont,) = step.continuations
    assert cont.name == NEXT_WORD
    nxt = compound.apply(step.round, cont.event, rng)
    assert nxt.generation == step.round.generation + 1
    assert nxt.merged is MergedFace.HIDDEN
    assert nxt.left is CardFace.FRONT
    assert nxt.learned == (state.current,)
    assert nxt.current is not None


@pytest.mark.unit
def test_deck_is_reshuffled_when_exhausted(compound_words, rng):
    state = compound.start(compound_words[:1], rng)
    first = state.current
    state = compound.next_word(state, state.generation, rng)
    assert state.current == first


@pytest.mark.unit
def test_compound_session_runs_merge_after_delay(compound_words, clock):
    session = CompoundSession(TIMING, DeadlineScheduler(clock), random.Random(3))
    session.start(compound_words)
    session.reveal_left()
    session.reveal_right()
    assert session.has_pending()

    clock.advance(0.4)
    assert session.run_due() == 0
    clock.advance(0.2)
    assert session.run_due() == 1
    assert session.state.merged is MergedFace.FRONT
    assert len(session.state.learned) == 1

    session.flip_merged()
    session.flip_merged()
    clock.advance(1.0)
    session.run_due()
    assert session.state.merged is MergedFace.HIDDEN
    assert not session.has_pending()
