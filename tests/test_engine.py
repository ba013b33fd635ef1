from dataclasses import replace

import pytest

from tetris_piece import Kind, Piece, SHAPES, rotate_cw, COLS, ROWS
from tetris_board import empty_board
from tetris_engine import Engine, Command, GameState, POINTS, level_for_lines
from tetris_rng import UniformRandom

from conftest import FixedRandom, make_board


def filled(board):
    return sum(v is not None for r in board for v in r)


def tick_until_lock(engine, state):
    """Tick until the active piece is replaced; return (state before lock, state after)."""
    while True:
        after = engine.tick(state)
        if after.active is not state.active and after.active.y <= state.active.y:
            return state, after
        state = after


def test_new_game(engine_for):
    s = engine_for(Kind.T, Kind.S).new_game()
    assert s.board == empty_board()
    assert s.active == Piece.spawn(Kind.T)
    assert s.next == Piece.spawn(Kind.S)
    assert (s.score, s.lines, s.level) == (0, 0, 1)
    assert not s.is_over and s.is_running


def test_new_game_with_default_randomizer_is_valid():
    s = Engine(UniformRandom(7)).new_game()
    assert s.active.kind in Kind and s.next.kind in Kind


def test_tick_moves_piece_down(engine_for):
    e = engine_for(Kind.T)
    s = e.new_game()
    t = e.tick(s)
    assert t.active == s.active.moved(dy=1)
    assert t.board == s.board


def test_empty_board_drop_lands_on_floor(engine_for):
    e = engine_for(Kind.O, Kind.T, Kind.I)
    last, after = tick_until_lock(e, e.new_game())
    assert last.active.y == ROWS - 2
    assert filled(after.board) == 4
    assert after.board[ROWS - 1][4] is Kind.O and after.board[ROWS - 2][5] is Kind.O
    assert after.score == 0
    assert after.active == Piece.spawn(Kind.T)
    assert after.next == Piece.spawn(Kind.I)


def test_lock_happens_exactly_once(engine_for):
    e = engine_for(Kind.I, Kind.I)
    s = e.new_game()
    s = replace(s, active=replace(s.active, y=ROWS - 1))
    locked = e.tick(s)
    assert filled(locked.board) == 4
    again = e.tick(locked)
    assert filled(again.board) == 4
    assert again.active.y == 1


def test_single_line_clear_with_o_piece(engine_for):
    e = engine_for(Kind.O, Kind.T)
    s = e.new_game()
    s = replace(s, board=make_board("JJJJ--JJJJ"))
    out = e.apply(s, Command.HARD_DROP)
    assert out.lines == 1
    assert out.score == 100
    assert out.board[ROWS - 1] == (None,) * 4 + (Kind.O, Kind.O) + (None,) * 4
    assert out.board[0] == (None,) * COLS
    assert filled(out.board) == 2


def vertical_i_over_well(rows, lines):
    board = make_board(*["-ZZZZZZZZZ"] * rows)
    i = Piece(Kind.I, rotate_cw(SHAPES[Kind.I]), 0, 0)
    return GameState(board=board, active=i, next=Piece.spawn(Kind.T), lines=lines)


@pytest.mark.parametrize("rows,lines,expected", [
    (1, 0, 100), (2, 0, 300), (3, 0, 500), (4, 0, 800),
    (1, 20, 300), (2, 20, 900), (3, 20, 1500), (4, 20, 2400),
])
def test_scoring_table(engine_for, rows, lines, expected):
    e = engine_for(Kind.O)
    out = e.apply(vertical_i_over_well(rows, lines), Command.HARD_DROP)
    assert out.score == expected
    assert out.lines == lines + rows
    assert filled(out.board) == 4 - rows


def test_points_table():
    assert POINTS == (0, 100, 300, 500, 800)


def test_level_is_derived_from_lines():
    assert [level_for_lines(n) for n in (0, 9, 10, 19, 20, 95)] == [1, 1, 2, 2, 3, 10]


def test_score_uses_level_before_the_clear(engine_for):
    e = engine_for(Kind.O)
    out = e.apply(vertical_i_over_well(2, 9), Command.HARD_DROP)
    assert out.score == 300
    assert out.lines == 11 and out.level == 2


def test_level_never_decreases_over_a_game(engine_for):
    e = Engine(UniformRandom(3))
    s = e.new_game()
    levels = [s.level]
    for n in range(400):
        s = e.apply(s, [Command.HARD_DROP, Command.LEFT, Command.ROTATE_CW, Command.RIGHT][n % 4])
        assert s.level == s.lines // 10 + 1
        levels.append(s.level)
        if s.is_over:
            break
    assert levels == sorted(levels)


def test_left_right_blocked_is_noop(engine_for):
    e = engine_for(Kind.O)
    s = e.new_game()
    s = replace(s, active=replace(s.active, x=0))
    assert e.apply(s, Command.LEFT) is s
    moved = e.apply(s, Command.RIGHT)
    assert moved.active.x == 1
    s = replace(s, active=replace(s.active, x=COLS - 2))
    assert e.apply(s, Command.RIGHT) is s


def test_rotation_applies_and_rejects(engine_for):
    e = engine_for(Kind.I)
    s = e.new_game()
    s = replace(s, active=replace(s.active, y=5))
    turned = e.apply(s, Command.ROTATE_CW)
    assert turned.active.shape == ((1,), (1,), (1,), (1,))
    # vertical I in a one-wide well has no four free cells on its top row
    packed = replace(turned, board=make_board(*["Z-ZZZZZZZ-"] * 4),
                     active=replace(turned.active, x=1, y=ROWS - 4))
    assert e.apply(packed, Command.ROTATE_CW) is packed


def test_soft_drop_is_a_tick(engine_for):
    e1, e2 = engine_for(Kind.T, Kind.S), engine_for(Kind.T, Kind.S)
    s = e1.new_game()
    e2.new_game()
    for _ in range(ROWS + 2):
        a, b = e1.apply(s, Command.SOFT_DROP), e2.tick(s)
        assert a == b
        s = a


def test_hard_drop_equals_repeated_ticks(engine_for):
    kinds = (Kind.L, Kind.Z, Kind.O, Kind.S)
    e_hard, e_tick = engine_for(*kinds), engine_for(*kinds)
    start = e_hard.new_game()
    e_tick.new_game()
    start = replace(start, board=make_board("---ZZ-----", "I--ZZ----I", "IJJJ-SS--I"))
    start = e_hard.apply(start, Command.LEFT)

    hard = e_hard.apply(start, Command.HARD_DROP)
    last, ticked = tick_until_lock(e_tick, start)
    assert hard.board == ticked.board
    assert (hard.score, hard.lines) == (ticked.score, ticked.lines)
    assert hard.active == ticked.active and hard.next == ticked.next


def test_commands_ignored_while_paused(engine_for):
    e = engine_for(Kind.T)
    s = e.pause(e.new_game())
    assert not s.is_running
    for c in Command:
        assert e.apply(s, c) is s
    assert e.tick(s) is s
    assert e.resume(s).is_running


def test_unknown_command_is_noop(engine_for):
    e = engine_for(Kind.T)
    s = e.new_game()
    assert e.apply(s, "teleport") is s


def test_spawn_blocked_ends_game(engine_for):
    e = engine_for(Kind.I, Kind.O, Kind.T)
    s = e.new_game()
    board = [list(r) for r in empty_board()]
    board[1][4] = Kind.Z
    s = replace(s, board=tuple(tuple(r) for r in board),
                active=replace(s.active, x=0, y=ROWS - 1))
    over = e.tick(s)
    assert over.is_over and not over.is_running
    assert over.active.kind is Kind.O
    assert filled(over.board) == 5

    for c in Command:
        assert e.apply(over, c) is over
    assert e.tick(over) is over
    assert e.resume(over) is over


def test_reset_starts_over(engine_for):
    e = engine_for(Kind.I, Kind.O, Kind.T, Kind.S)
    s = e.new_game()
    s = replace(s, score=900, lines=12, is_over=True, is_running=False)
    fresh = e.reset()
    assert (fresh.score, fresh.lines, fresh.level) == (0, 0, 1)
    assert fresh.board == empty_board() and not fresh.is_over
