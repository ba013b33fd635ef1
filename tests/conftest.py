import os

import pytest

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

from tetris_piece import Kind, COLS, ROWS
from tetris_engine import Engine


class FixedRandom:
    """Deals the given kinds in order, then repeats the last one."""
    def __init__(self, *kinds):
        self.kinds = list(kinds)
        self.dealt = 0

    def next_piece(self):
        k = self.kinds[min(self.dealt, len(self.kinds) - 1)]
        self.dealt += 1
        return k


class FakeClock:
    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


def make_board(*rows):
    """Build a board from strings for the bottom rows; '-' is empty."""
    top = [(None,) * COLS] * (ROWS - len(rows))
    bottom = [tuple(None if ch == "-" else Kind(ch) for ch in r) for r in rows]
    for r in rows:
        assert len(r) == COLS
    return tuple(top + bottom)


@pytest.fixture
def engine_for():
    def build(*kinds):
        return Engine(FixedRandom(*kinds))
    return build


@pytest.fixture
def clock():
    return FakeClock()
