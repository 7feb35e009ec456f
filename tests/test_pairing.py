import random

import pytest

from word_games.domain import MatchTiming, Side, SlotState, WordPair
from word_games.domain import pairing
from word_games.domain.pairing import (
    RESET_WRONG,
    SETTLE_CORRECT,
    Board,
    ResetWrong,
    Select,
    SettleCorrect,
)

TIMING = MatchTiming(settle_delay=0.6, reset_delay=0.8)


def make_pool(n):
    return [WordPair(id=i, prompt=f"en{i}", answer=f"tr{i}") for i in range(1, n + 1)]


def ids(words):
    return [w.id for w in words]


def right_index_of(board, word_id):
    return ids(board.right_words).index(word_id)


def wrong_right_index(board, left_index):
    target = board.left_words[left_index].id
    return next(i for i, w in enumerate(board.right_words) if w.id != target)


def assert_invariants(board):
    assert len(board.left_words) == len(board.right_words)
    assert len(board.left_states) == len(board.left_words)
    assert len(board.right_states) == len(board.right_words)
    assert sorted(ids(board.left_words)) == sorted(ids(board.right_words))
    if board.selected_left is not None:
        assert board.left_states[board.selected_left] is not SlotState.CORRECT
    if board.selected_right is not None:
        assert board.right_states[board.selected_right] is not SlotState.CORRECT


@pytest.fixture
def board():
    return pairing.start_cycle(make_pool(6), 5, random.Random(7))


@pytest.mark.unit
def test_start_cycle_draws_in_shuffled_order(board):
    expected = make_pool(6)
    random.Random(7).shuffle(expected)

    assert ids(board.left_words) == ids(expected[:5])
    assert sorted(ids(board.right_words)) == sorted(ids(expected[:5]))
    assert ids(board.unused) == ids(expected[5:])
    assert board.left_states == (SlotState.DEFAULT,) * 5
    assert board.right_states == (SlotState.DEFAULT,) * 5
    assert board.selected_left is None and board.selected_right is None
    assert board.cycles == 1
    assert_invariants(board)


@pytest.mark.unit
def test_start_cycle_with_empty_pool_gives_empty_board():
    board = pairing.start_cycle([], 5, random.Random(0))
    assert board.is_empty
    assert board.size == 0
    # 空盤面へのクリックは無視される
    t = pairing.apply(board, Select(Side.LEFT, 0), random.Random(0), TIMING)
    assert t.board is board
    assert t.continuations == ()


@pytest.mark.unit
def test_small_pool_fills_fewer_slots():
    board = pairing.start_cycle(make_pool(3), 5, random.Random(1))
    assert board.size == 3
    assert board.remaining == 0
    assert_invariants(board)


@pytest.mark.unit
def test_load_pairs_takes_from_unused(board):
    reloaded = pairing.load_pairs(board, 1, random.Random(2))
    assert ids(reloaded.left_words) == ids(board.unused[:1])
    assert reloaded.unused == ()
    assert reloaded.generation == board.generation + 1


@pytest.mark.unit
def test_select_same_slot_twice_deselects(board):
    t1 = pairing.select(board, Side.LEFT, 0, TIMING)
    assert t1.board.selected_left == 0
    assert t1.board.left_states[0] is SlotState.SELECTED

    t2 = pairing.select(t1.board, Side.LEFT, 0, TIMING)
    assert t2.board.selected_left is None
    assert t2.board.left_states[0] is SlotState.DEFAULT
    assert t2.continuations == ()


@pytest.mark.unit
def test_selecting_other_slot_moves_selection(board):
    b = pairing.select(board, Side.RIGHT, 1, TIMING).board
    b = pairing.select(b, Side.RIGHT, 3, TIMING).board
    assert b.selected_right == 3
    assert b.right_states[1] is SlotState.DEFAULT
    assert b.right_states[3] is SlotState.SELECTED
    assert b.selected_left is None


@pytest.mark.unit
def test_correct_match_then_settle_replaces_exact_slots(board):
    r = right_index_of(board, board.left_words[0].id)
    b = pairing.select(board, Side.LEFT, 0, TIMING).board
    t = pairing.select(b, Side.RIGHT, r, TIMING)

    assert t.board.left_states[0] is SlotState.CORRECT
    assert t.board.right_states[r] is SlotState.CORRECT
    assert t.board.selected_left is None and t.board.selected_right is None
    assert t.board.matches == 1
    (cont,) = t.continuations
    assert cont.name == SETTLE_CORRECT
    assert cont.delay == 0.6
    assert cont.event == SettleCorrect(0, r, t.board.generation)

    before = t.board
    after = pairing.apply(before, cont.event, random.Random(0), TIMING).board
    new_word = board.unused[0]
    assert after.left_words[0] == new_word
    assert after.right_words[r] == new_word
    assert after.left_states[0] is SlotState.DEFAULT
    assert after.right_states[r] is SlotState.DEFAULT
    assert after.unused == ()
    for i in range(1, 5):
        assert after.left_words[i] == before.left_words[i]
        assert after.left_states[i] == before.left_states[i]
    for i in range(5):
        if i != r:
            assert after.right_words[i] == before.right_words[i]
            assert after.right_states[i] == before.right_states[i]
    assert_invariants(after)


@pytest.mark.unit
def test_wrong_match_resets_after_continuation(board):
    r = wrong_right_index(board, 2)
    b = pairing.select(board, Side.RIGHT, r, TIMING).board
    t = pairing.select(b, Side.LEFT, 2, TIMING)

    assert t.board.left_states[2] is SlotState.WRONG
    assert t.board.right_states[r] is SlotState.WRONG
    assert t.board.selected_left is None and t.board.selected_right is None
    assert t.board.misses == 1
    (cont,) = t.continuations
    assert cont.name == RESET_WRONG
    assert cont.delay == 0.8

    after = pairing.apply(t.board, cont.event, random.Random(0), TIMING).board
    assert after.left_states == (SlotState.DEFAULT,) * 5
    assert after.right_states == (SlotState.DEFAULT,) * 5
    assert after.left_words == board.left_words
    assert after.right_words == board.right_words


@pytest.mark.unit
def test_click_on_correct_slot_is_ignored(board):
    r = right_index_of(board, board.left_words[0].id)
    b = pairing.select(board, Side.LEFT, 0, TIMING).board
    b = pairing.select(b, Side.RIGHT, r, TIMING).board

    t = pairing.select(b, Side.LEFT, 0, TIMING)
    assert t.board is b
    t = pairing.select(b, Side.RIGHT, r, TIMING)
    assert t.board is b


@pytest.mark.unit
def test_evaluate_match_is_idempotent(board):
    r = right_index_of(board, board.left_words[1].id)
    assert pairing.evaluate_match(board, 1, r, TIMING) == pairing.evaluate_match(
        board, 1, r, TIMING
    )


@pytest.mark.unit
def test_exhausted_cycle_restarts_from_full_pool():
    pool = make_pool(5)
    board = pairing.start_cycle(pool, 5, random.Random(3))
    assert board.unused == ()

    r = right_index_of(board, board.left_words[4].id)
    b = pairing.select(board, Side.LEFT, 4, TIMING).board
    t = pairing.select(b, Side.RIGHT, r, TIMING)
    after = pairing.apply(t.board, t.continuations[0].event, random.Random(4), TIMING).board

    assert after.cycles == 2
    assert after.generation > t.board.generation
    assert after.size == 5
    assert sorted(ids(after.left_words)) == [1, 2, 3, 4, 5]
    assert after.left_states == (SlotState.DEFAULT,) * 5
    assert after.matches == 1
    assert_invariants(after)


@pytest.mark.unit
def test_stale_continuation_after_new_cycle_is_ignored():
    board = pairing.start_cycle(make_pool(5), 5, random.Random(5))
    rng = random.Random(6)

    # 2 組を続けて正解させ、継続を2つ溜める
    conts = []
    b = board
    for left in (0, 1):
        r = right_index_of(b, b.left_words[left].id)
        b = pairing.select(b, Side.LEFT, left, TIMING).board
        t = pairing.select(b, Side.RIGHT, r, TIMING)
        b = t.board
        conts.extend(t.continuations)

    # 1 つ目でサイクルが作り直され、2 つ目は古い generation になる
    b = pairing.apply(b, conts[0].event, rng, TIMING).board
    assert b.cycles == 2
    t = pairing.apply(b, conts[1].event, rng, TIMING)
    assert t.board is b


@pytest.mark.unit
def test_wrong_reset_leaves_reselected_slot_alone(board):
    r = wrong_right_index(board, 0)
    b = pairing.select(board, Side.LEFT, 0, TIMING).board
    t = pairing.select(b, Side.RIGHT, r, TIMING)
    b = pairing.select(t.board, Side.LEFT, 0, TIMING).board
    assert b.left_states[0] is SlotState.SELECTED

    after = pairing.apply(b, t.continuations[0].event, random.Random(0), TIMING).board
    assert after.left_states[0] is SlotState.SELECTED
    assert after.selected_left == 0
    assert after.right_states[r] is SlotState.DEFAULT


@pytest.mark.unit
def test_first_wrong_reset_keeps_slot_that_went_wrong_again(board):
    # L0 を 2 回続けて別々の右スロットと不正解にする
    target = board.left_words[0].id
    r_a, r_b = [i for i, w in enumerate(board.right_words) if w.id != target][:2]
    b = pairing.select(board, Side.LEFT, 0, TIMING).board
    first = pairing.select(b, Side.RIGHT, r_a, TIMING)
    b = pairing.select(first.board, Side.LEFT, 0, TIMING).board
    second = pairing.select(b, Side.RIGHT, r_b, TIMING)
    b = second.board
    assert b.misses == 2
    assert second.continuations[0].event.miss == 2

    b = pairing.apply(b, first.continuations[0].event, random.Random(0), TIMING).board
    assert b.left_states[0] is SlotState.WRONG
    assert b.right_states[r_b] is SlotState.WRONG
    assert b.right_states[r_a] is SlotState.DEFAULT

    b = pairing.apply(b, second.continuations[0].event, random.Random(0), TIMING).board
    assert b.left_states == (SlotState.DEFAULT,) * 5
    assert b.right_states == (SlotState.DEFAULT,) * 5


@pytest.mark.unit
def test_settle_leaves_other_correct_pair_untouched():
    board = pairing.start_cycle(make_pool(9), 5, random.Random(11))
    rng = random.Random(12)
    conts = []
    rights = []
    b = board
    for left in (0, 1):
        r = right_index_of(b, b.left_words[left].id)
        b = pairing.select(b, Side.LEFT, left, TIMING).board
        t = pairing.select(b, Side.RIGHT, r, TIMING)
        b = t.board
        conts.extend(t.continuations)
        rights.append(r)
    r0, r1 = rights

    before = b
    b = pairing.apply(b, conts[0].event, rng, TIMING).board
    assert b.left_words[0] == before.unused[0]
    assert b.right_words[r0] == before.unused[0]
    # 2 組目は正解表示のまま、同じ単語が残る
    assert b.left_states[1] is SlotState.CORRECT
    assert b.right_states[r1] is SlotState.CORRECT
    assert b.left_words[1] == before.left_words[1]
    assert b.right_words[r1] == before.right_words[r1]
    for i in range(2, 5):
        assert b.left_words[i] == before.left_words[i]
        assert b.left_states[i] == before.left_states[i]

    mid = b
    b = pairing.apply(b, conts[1].event, rng, TIMING).board
    assert b.cycles == 1
    assert b.left_words[1] == mid.unused[0]
    assert b.right_words[r1] == mid.unused[0]
    for i in range(5):
        if i != 1:
            assert b.left_words[i] == mid.left_words[i]
            assert b.left_states[i] == mid.left_states[i]
        if i != r1:
            assert b.right_words[i] == mid.right_words[i]
            assert b.right_states[i] == mid.right_states[i]
    assert_invariants(b)


@pytest.mark.unit
def test_out_of_range_index_is_ignored(board):
    t = pairing.select(board, Side.LEFT, 99, TIMING)
    assert t.board is board


@pytest.mark.unit
def test_random_play_keeps_board_invariants():
    rng = random.Random(42)
    pool = make_pool(12)
    board = pairing.start_cycle(pool, 5, rng)
    pending = []
    for _ in range(600):
        if pending and rng.random() < 0.4:
            event = pending.pop(0).event
            board = pairing.apply(board, event, rng, TIMING).board
        else:
            side = rng.choice([Side.LEFT, Side.RIGHT])
            t = pairing.apply(board, Select(side, rng.randrange(board.size)), rng, TIMING)
            board = t.board
            pending.extend(t.continuations)
        assert board.size == 5
        assert_invariants(board)
        on_board = set(ids(board.left_words))
        assert len(on_board) == 5
        assert on_board.isdisjoint(ids(board.unused))


@pytest.mark.unit
def test_apply_rejects_unknown_event(board):
    with pytest.raises(TypeError):
        pairing.apply(board, object(), random.Random(0), TIMING)


@pytest.mark.unit
def test_board_empty_defaults():
    b = Board.empty()
    assert b.is_empty
    assert b.remaining == 0
    assert ResetWrong(0, 0, 0, 0) != SettleCorrect(0, 0, 0)
