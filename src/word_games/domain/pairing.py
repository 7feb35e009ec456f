"""Word Match の盤面ロジック（純粋関数）。

盤面 `Board` は不変オブジェクトで、各操作は新しい `Board` と
遅延実行してほしい継続（`Continuation`）の組 `Transition` を返す。
タイマーの実体は持たない。継続の実行タイミングは呼び出し側（サービス層）が決める。

契約:
- 左右の盤面は常に同じ長さで、id の多重集合が一致する。
- `correct` のスロットが選択中になることはない。
- 補充は空いたスロットだけを書き換え、他のスロットには触れない。
"""

from __future__ import annotations

import enum
import random
from dataclasses import dataclass, replace
from typing import Sequence, Union

from word_games.domain.data import WordPair

DEFAULT_PAIR_COUNT = 5

SETTLE_CORRECT = "settle-correct"
RESET_WRONG = "reset-wrong"


class SlotState(str, enum.Enum):
    DEFAULT = "default"
    SELECTED = "selected"
    CORRECT = "correct"
    WRONG = "wrong"


class Side(str, enum.Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class MatchTiming:
    """遅延継続の秒数。settle は正解後の差し替えまで、reset は不正解表示の解除まで。"""

    settle_delay: float = 0.6
    reset_delay: float = 0.8


@dataclass(frozen=True)
class Board:
    """盤面のスナップショット。

    - pool: 全単語（起動時に一度だけ読み込む）
    - unused: 今のサイクルでまだ盤面に出ていない単語（シャッフル済み）
    - generation: 盤面を新しく作るたびに増える。古い継続の検出に使う
    - left_wrong_marks / right_wrong_marks: スロットが最後に wrong になった時の misses 値
    """

    pool: tuple[WordPair, ...] = ()
    unused: tuple[WordPair, ...] = ()
    left_words: tuple[WordPair, ...] = ()
    right_words: tuple[WordPair, ...] = ()
    left_states: tuple[SlotState, ...] = ()
    right_states: tuple[SlotState, ...] = ()
    left_wrong_marks: tuple[int, ...] = ()
    right_wrong_marks: tuple[int, ...] = ()
    selected_left: int | None = None
    selected_right: int | None = None
    generation: int = 0
    matches: int = 0
    misses: int = 0
    cycles: int = 0

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.left_words

    @property
    def size(self) -> int:
        return len(self.left_words)

    @property
    def remaining(self) -> int:
        """このサイクルで残っている単語数（フッター表示用）。"""
        return len(self.unused)

    def states(self, side: Side) -> tuple[SlotState, ...]:
        return self.left_states if side is Side.LEFT else self.right_states

    def selected(self, side: Side) -> int | None:
        return self.selected_left if side is Side.LEFT else self.selected_right


@dataclass(frozen=True)
class Select:
    side: Side
    index: int


@dataclass(frozen=True)
class SettleCorrect:
    left_index: int
    right_index: int
    generation: int


@dataclass(frozen=True)
class ResetWrong:
    left_index: int
    right_index: int
    generation: int
    miss: int


Event = Union[Select, SettleCorrect, ResetWrong]


@dataclass(frozen=True)
class Continuation:
    """`delay` 秒後に `event` を apply してほしいという要求。"""

    name: str
    delay: float
    event: Event


@dataclass(frozen=True)
class Transition:
    board: Board
    continuations: tuple[Continuation, ...] = ()


def _shuffled(items: Sequence[WordPair], rng: random.Random) -> tuple[WordPair, ...]:
    out = list(items)
    rng.shuffle(out)
    return tuple(out)


def _set_state(states: tuple[SlotState, ...], index: int, state: SlotState) -> tuple[SlotState, ...]:
    out = list(states)
    out[index] = state
    return tuple(out)


def _set_mark(marks: tuple[int, ...], index: int, mark: int) -> tuple[int, ...]:
    out = list(marks)
    out[index] = mark
    return tuple(out)


def start_cycle(
    pool: Sequence[WordPair],
    count: int,
    rng: random.Random,
    board: Board | None = None,
) -> Board:
    """pool をシャッフルして新しいサイクルを始め、先頭 count 件で盤面を作る。

    pool が空なら空の盤面を返す（例外は投げない）。
    board を渡した場合は generation と集計値を引き継ぐ。
    """
    prev = board or Board.empty()
    if not pool:
        return replace(Board.empty(), generation=prev.generation + 1)
    base = replace(
        prev,
        pool=tuple(pool),
        unused=_shuffled(pool, rng),
        cycles=prev.cycles + 1,
    )
    return load_pairs(base, min(count, len(base.unused)), rng)


def load_pairs(board: Board, count: int, rng: random.Random) -> Board:
    """unused の先頭 count 件を取り出し、左は引いた順、右は独立にシャッフルして並べる。"""
    count = max(0, min(count, len(board.unused)))
    words = board.unused[:count]
    return replace(
        board,
        unused=board.unused[count:],
        left_words=tuple(words),
        right_words=_shuffled(words, rng),
        left_states=(SlotState.DEFAULT,) * count,
        right_states=(SlotState.DEFAULT,) * count,
        left_wrong_marks=(0,) * count,
        right_wrong_marks=(0,) * count,
        selected_left=None,
        selected_right=None,
        generation=board.generation + 1,
    )


def select(board: Board, side: Side, index: int, timing: MatchTiming) -> Transition:
    """片側のスロットの選択をトグルし、両側が揃えば判定する。"""
    states = board.states(side)
    if not 0 <= index < len(states):
        return Transition(board)
    # 正解済みスロットへのクリックは無視
    if states[index] is SlotState.CORRECT:
        return Transition(board)

    current = board.selected(side)
    if current == index:
        # 選択解除（判定はしない）
        board = _with_side(board, side, _set_state(states, index, SlotState.DEFAULT), None)
        return Transition(board)

    if current is not None:
        states = _set_state(states, current, SlotState.DEFAULT)
    board = _with_side(board, side, _set_state(states, index, SlotState.SELECTED), index)

    if board.selected_left is not None and board.selected_right is not None:
        return evaluate_match(board, board.selected_left, board.selected_right, timing)
    return Transition(board)


def _with_side(
    board: Board, side: Side, states: tuple[SlotState, ...], selected: int | None
) -> Board:
    if side is Side.LEFT:
        return replace(board, left_states=states, selected_left=selected)
    return replace(board, right_states=states, selected_right=selected)


def evaluate_match(
    board: Board, left_index: int, right_index: int, timing: MatchTiming
) -> Transition:
    """左右の id を比較して correct/wrong を反映し、遅延継続を1つ要求する。"""
    is_match = board.left_words[left_index].id == board.right_words[right_index].id
    state = SlotState.CORRECT if is_match else SlotState.WRONG
    board = replace(
        board,
        left_states=_set_state(board.left_states, left_index, state),
        right_states=_set_state(board.right_states, right_index, state),
        selected_left=None,
        selected_right=None,
        matches=board.matches + (1 if is_match else 0),
        misses=board.misses + (0 if is_match else 1),
    )
    if is_match:
        cont = Continuation(
            SETTLE_CORRECT,
            timing.settle_delay,
            SettleCorrect(left_index, right_index, board.generation),
        )
    else:
        # この不正解の番号（misses）をスロットに刻み、継続にも持たせる
        board = replace(
            board,
            left_wrong_marks=_set_mark(board.left_wrong_marks, left_index, board.misses),
            right_wrong_marks=_set_mark(board.right_wrong_marks, right_index, board.misses),
        )
        cont = Continuation(
            RESET_WRONG,
            timing.reset_delay,
            ResetWrong(left_index, right_index, board.generation, board.misses),
        )
    return Transition(board, (cont,))


def replace_matched_pair(
    board: Board, left_index: int, right_index: int, count: int, rng: random.Random
) -> Board:
    """正解したスロットを新しい1ペアで置き換える。

    unused が空ならサイクル終了とみなし、全単語で start_cycle し直す。
    同じ新単語を左右の空きスロット両方に入れるので、左右の一致は崩れない。
    """
    if not board.unused:
        return start_cycle(board.pool, count, rng, board=board)

    new_word = board.unused[0]
    left_words = list(board.left_words)
    right_words = list(board.right_words)
    left_words[left_index] = new_word
    right_words[right_index] = new_word
    return replace(
        board,
        unused=board.unused[1:],
        left_words=tuple(left_words),
        right_words=tuple(right_words),
        left_states=_set_state(board.left_states, left_index, SlotState.DEFAULT),
        right_states=_set_state(board.right_states, right_index, SlotState.DEFAULT),
    )


def reset_wrong(board: Board, left_index: int, right_index: int, miss: int) -> Board:
    """miss 番目の不正解で wrong になったスロットを default に戻す。

    その間に再選択・正解されたスロットや、後の不正解で wrong になり直した
    スロットはそのまま残す（後者は自分の継続で戻る）。
    """
    left_states = board.left_states
    right_states = board.right_states
    if left_states[left_index] is SlotState.WRONG and board.left_wrong_marks[left_index] == miss:
        left_states = _set_state(left_states, left_index, SlotState.DEFAULT)
    if right_states[right_index] is SlotState.WRONG and board.right_wrong_marks[right_index] == miss:
        right_states = _set_state(right_states, right_index, SlotState.DEFAULT)
    return replace(board, left_states=left_states, right_states=right_states)


def apply(
    board: Board,
    event: Event,
    rng: random.Random,
    timing: MatchTiming | None = None,
    count: int = DEFAULT_PAIR_COUNT,
) -> Transition:
    """(Board, Event) -> Transition。

    継続イベントは自分を予約した盤面の generation を持つ。
    盤面が作り直された後に届いたもの（generation 不一致）は無視する。
    """
    timing = timing or MatchTiming()
    if board.is_empty:
        return Transition(board)
    if isinstance(event, Select):
        return select(board, event.side, event.index, timing)
    if not isinstance(event, (SettleCorrect, ResetWrong)):
        raise TypeError(f"unknown event: {event!r}")
    if event.generation != board.generation:
        return Transition(board)
    if isinstance(event, SettleCorrect):
        if not (
            board.left_states[event.left_index] is SlotState.CORRECT
            and board.right_states[event.right_index] is SlotState.CORRECT
        ):
            return Transition(board)
        return Transition(
            replace_matched_pair(board, event.left_index, event.right_index, count, rng)
        )
    return Transition(reset_wrong(board, event.left_index, event.right_index, event.miss))
