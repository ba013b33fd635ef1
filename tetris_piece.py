
"""Piece model, shapes, clockwise rotation with simple wall kicks"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Optional, Tuple

COLS, ROWS = 10, 20

Shape = Tuple[Tuple[int, ...], ...]


class Kind(str, Enum):
    I = "I"
    O = "O"
    T = "T"
    L = "L"
    J = "J"
    S = "S"
    Z = "Z"


SHAPES: Dict[Kind, Shape] = {
    Kind.I: ((1,1,1,1),),
    Kind.O: ((1,1),(1,1)),
    Kind.T: ((0,1,0),(1,1,1)),
    Kind.L: ((1,0,0),(1,1,1)),
    Kind.J: ((0,0,1),(1,1,1)),
    Kind.S: ((0,1,1),(1,1,0)),
    Kind.Z: ((1,1,0),(0,1,1)),
}

COLORS: Dict[Kind, Tuple[int,int,int]] = {
    Kind.I: (6,182,212),
    Kind.O: (234,179,8),
    Kind.T: (168,85,247),
    Kind.L: (249,115,22),
    Kind.J: (59,130,246),
    Kind.S: (34,197,94),
    Kind.Z: (239,68,68),
}

# Tried in order when the unkicked rotation is blocked.
KICK_OFFSETS = (-1, 1, -2, 2)


def rotate_cw(m: Shape) -> Shape:
    return tuple(tuple(r) for r in zip(*m[::-1]))


@dataclass(frozen=True)
class Piece:
    kind: Kind
    shape: Shape
    x: int
    y: int

    @staticmethod
    def spawn(kind: Kind) -> "Piece":
        p = Piece(kind, SHAPES[kind], 0, 0)
        return replace(p, x=COLS // 2 - p.width // 2)

    @property
    def width(self) -> int:
        return len(self.shape[0])

    def cells(self) -> List[Tuple[int, int]]:
        """Occupied (x, y) board coordinates, including rows above the board."""
        return [(self.x+c, self.y+r)
                for r,row in enumerate(self.shape)
                for c,v in enumerate(row) if v]

    def moved(self, dx: int = 0, dy: int = 0) -> "Piece":
        return replace(self, x=self.x+dx, y=self.y+dy)

    def rotated(self) -> "Piece":
        return replace(self, shape=rotate_cw(self.shape))

# rotation

def try_rotate(board, piece: Piece) -> Optional[Piece]:
    """Rotate clockwise at the current anchor, falling back to KICK_OFFSETS.

    Returns the first valid placement or None when every attempt collides.
    """
    from tetris_board import collide
    turned = piece.rotated()
    if not collide(board, turned): return turned
    for dx in KICK_OFFSETS:
        test = turned.moved(dx=dx)
        if not collide(board, test): return test
    return None
