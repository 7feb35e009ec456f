"""Compound Words のめくり/合体ロジック（純粋関数）。

左右2枚のカード（word1 / word2）を両方めくると、少し遅れて合体カード（compound）が
表に出る。合体カードをめくると訳語、もう一度押すと少し遅れて次の問題へ進む。
"""

from __future__ import annotations

import enum
import random
from dataclasses import dataclass, replace
from typing import Sequence, Union

from word_games.domain.data import CompoundWord
from word_games.domain.pairing import Side

MERGE = "merge"
NEXT_WORD = "next-word"


class CardFace(str, enum.Enum):
    FRONT = "front"
    BACK = "back"


class MergedFace(str, enum.Enum):
    HIDDEN = "hidden"
    FRONT = "front"
    BACK = "back"


@dataclass(frozen=True)
class CompoundTiming:
    merge_delay: float = 0.5
    next_delay: float = 1.0


@dataclass(frozen=True)
class CompoundRound:
    words: tuple[CompoundWord, ...] = ()
    deck: tuple[CompoundWord, ...] = ()
    current: CompoundWord | None = None
    left: CardFace = CardFace.FRONT
    right: CardFace = CardFace.FRONT
    merged: MergedFace = MergedFace.HIDDEN
    learned: tuple[CompoundWord, ...] = ()
    generation: int = 0


@dataclass(frozen=True)
class Merge:
    generation: int


@dataclass(frozen=True)
class NextWord:
    generation: int


CompoundEvent = Union[Merge, NextWord]


@dataclass(frozen=True)
class CompoundContinuation:
    name: str
    delay: float
    event: CompoundEvent


@dataclass(frozen=True)
class CompoundStep:
    round: CompoundRound
    continuations: tuple[CompoundContinuation, ...] = ()


def _draw(state: CompoundRound, rng: random.Random) -> CompoundRound:
    """山札から1枚引いて新しい問題にする。山札が尽きたら全単語をシャッフルし直す。"""
    deck = state.deck
    if not deck:
        shuffled = list(state.words)
        rng.shuffle(shuffled)
        deck = tuple(shuffled)
    current = deck[0] if deck else None
    return replace(
        state,
        deck=deck[1:],
        current=current,
        left=CardFace.FRONT,
        right=CardFace.FRONT,
        merged=MergedFace.HIDDEN,
        generation=state.generation + 1,
    )


def start(words: Sequence[CompoundWord], rng: random.Random) -> CompoundRound:
    """単語一覧から最初の問題を作る。空なら current は None（読み込み中表示）。"""
    return _draw(CompoundRound(words=tuple(words)), rng)


def reveal(state: CompoundRound, side: Side, timing: CompoundTiming) -> CompoundStep:
    """片側のカードをめくる。表のときだけ有効で、両方めくれたら合体を予約する。"""
    if state.current is None or state.merged is not MergedFace.HIDDEN:
        return CompoundStep(state)
    face = state.left if side is Side.LEFT else state.right
    if face is CardFace.BACK:
        return CompoundStep(state)
    if side is Side.LEFT:
        state = replace(state, left=CardFace.BACK)
    else:
        state = replace(state, right=CardFace.BACK)
    if state.left is CardFace.BACK and state.right is CardFace.BACK:
        cont = CompoundContinuation(MERGE, timing.merge_delay, Merge(state.generation))
        return CompoundStep(state, (cont,))
    return CompoundStep(state)


def merge(state: CompoundRound, generation: int) -> CompoundRound:
    """合体カードを表にし、学習済み一覧に現在の単語を加える。"""
    if generation != state.generation or state.merged is not MergedFace.HIDDEN:
        return state
    assert state.current is not None
    return replace(
        state,
        merged=MergedFace.FRONT,
        learned=state.learned + (state.current,),
    )


def flip_merged(state: CompoundRound, timing: CompoundTiming) -> CompoundStep:
    if state.merged is MergedFace.FRONT:
        return CompoundStep(replace(state, merged=MergedFace.BACK))
    if state.merged is MergedFace.BACK:
        cont = CompoundContinuation(NEXT_WORD, timing.next_delay, NextWord(state.generation))
        return CompoundStep(state, (cont,))
    return CompoundStep(state)


def next_word(state: CompoundRound, generation: int, rng: random.Random) -> CompoundRound:
    if generation != state.generation:
        return state
    return _draw(state, rng)


def apply(state: CompoundRound, event: CompoundEvent, rng: random.Random) -> CompoundRound:
    """遅延継続イベントを適用する。"""
    if isinstance(event, Merge):
        return merge(state, event.generation)
    if isinstance(event, NextWord):
        return next_word(state, event.generation, rng)
    raise TypeError(f"unknown event: {event!r}")
