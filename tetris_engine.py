
"""
Rules engine for the falling-block puzzle.

The engine owns no timer and performs no I/O. Every operation takes a
GameState and returns a GameState; blocked moves, rotations, and commands
issued while paused or after game over return the state unchanged.

Lock sequence (a downward move that fails, or a hard drop):

  1) merge the active piece into the board
  2) remove full rows and compact the rest downwards
  3) score POINTS[cleared] * level (level before this lock)
  4) add cleared lines; level = lines // LINES_PER_LEVEL + 1
  5) promote next to active at the spawn anchor, draw a new next
  6) if the spawned piece is invalid, the game is over
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, replace
from enum import Enum

from tetris_config import CONFIG
from tetris_piece import Piece, try_rotate
from tetris_board import Board, empty_board, collide, is_valid, merge, sweep, ghost_y, board_text
from tetris_rng import make_randomizer

log = logging.getLogger(__name__)

POINTS = (0, 100, 300, 500, 800)


class Command(Enum):
    LEFT = "left"
    RIGHT = "right"
    ROTATE_CW = "rotate_cw"
    SOFT_DROP = "soft_drop"
    HARD_DROP = "hard_drop"


def level_for_lines(lines: int) -> int:
    return lines // CONFIG["LINES_PER_LEVEL"] + 1


@dataclass(frozen=True)
class GameState:
    board: Board
    active: Piece
    next: Piece
    score: int = 0
    lines: int = 0
    is_over: bool = False
    is_running: bool = True

    @property
    def level(self) -> int:
        return level_for_lines(self.lines)

    @property
    def accepts_input(self) -> bool:
        return self.is_running and not self.is_over

    def __str__(self) -> str:
        return board_text(self.board, None if self.is_over else self.active)


class Engine:
    """Applies gravity and player commands to immutable game states.

    ``randomizer`` is any object with a ``next_piece() -> Kind`` method; by
    default one is built from CONFIG["RNG_SEED"] and CONFIG["SEVEN_BAG"].
    """

    def __init__(self, randomizer=None):
        if randomizer is None:
            randomizer = make_randomizer(CONFIG["RNG_SEED"], CONFIG["SEVEN_BAG"])
        self.randomizer = randomizer

    def _draw(self) -> Piece:
        return Piece.spawn(self.randomizer.next_piece())

    def new_game(self) -> GameState:
        active = self._draw()
        return GameState(board=empty_board(), active=active, next=self._draw())

    reset = new_game

    def pause(self, state: GameState) -> GameState:
        if state.is_over or not state.is_running: return state
        return replace(state, is_running=False)

    def resume(self, state: GameState) -> GameState:
        if state.is_over or state.is_running: return state
        return replace(state, is_running=True)

    def tick(self, state: GameState) -> GameState:
        """Move the active piece down one row, or lock it if it cannot move."""
        if not state.accepts_input: return state
        down = state.active.moved(dy=1)
        if not collide(state.board, down):
            return replace(state, active=down)
        return self._lock(state)

    def apply(self, state: GameState, command: Command) -> GameState:
        if not state.accepts_input: return state
        p = state.active
        if command is Command.LEFT or command is Command.RIGHT:
            t = p.moved(dx=-1 if command is Command.LEFT else 1)
            return state if collide(state.board, t) else replace(state, active=t)
        if command is Command.ROTATE_CW:
            t = try_rotate(state.board, p)
            return state if t is None else replace(state, active=t)
        if command is Command.SOFT_DROP:
            return self.tick(state)
        if command is Command.HARD_DROP:
            landed = p.moved(dy=ghost_y(state.board, p) - p.y)
            return self._lock(replace(state, active=landed))
        return state

    def _lock(self, state: GameState) -> GameState:
        board, cleared = sweep(merge(state.board, state.active))
        score = state.score + POINTS[cleared] * state.level
        lines = state.lines + cleared
        active = state.next
        nxt = self._draw()
        over = not is_valid(board, active)
        log.debug("locked %s at (%d,%d), cleared %d", state.active.kind.value,
                  state.active.x, state.active.y, cleared)
        if over:
            log.debug("spawn of %s blocked, game over\n%s", active.kind.value,
                      board_text(board))
        return replace(state, board=board, active=active, next=nxt,
                       score=score, lines=lines,
                       is_over=over, is_running=state.is_running and not over)
