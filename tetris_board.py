
"""Board helpers: collide, merge, sweep, ghost"""
from typing import List, Optional, Tuple
from tetris_piece import Piece, Kind, COLS, ROWS

Row = Tuple[Optional[Kind], ...]
Board = Tuple[Row, ...]

EMPTY_ROW: Row = (None,) * COLS


def empty_board() -> Board:
    return (EMPTY_ROW,) * ROWS


def collide(board: Board, piece: Piece) -> bool:
    for bx,by in piece.cells():
        if bx<0 or bx>=COLS or by>=ROWS: return True
        if by>=0 and board[by][bx] is not None: return True
    return False


def is_valid(board: Board, piece: Piece) -> bool:
    return not collide(board, piece)


def merge(board: Board, piece: Piece) -> Board:
    """Return a new board with the piece's on-board cells set to its kind."""
    rows = [list(r) for r in board]
    for bx,by in piece.cells():
        if 0<=by<ROWS and 0<=bx<COLS:
            rows[by][bx] = piece.kind
    return tuple(tuple(r) for r in rows)


def sweep(board: Board) -> Tuple[Board, int]:
    """Drop full rows, pad with empty rows on top; return (board, cleared)."""
    kept = [r for r in board if any(v is None for v in r)]
    c = len(board) - len(kept)
    return (EMPTY_ROW,)*c + tuple(kept), c


def ghost_y(board: Board, piece: Piece) -> int:
    y = piece.y
    while not collide(board, piece.moved(dy=y-piece.y+1)):
        y += 1
    return y


def ghost_cells(board: Board, piece: Piece) -> List[Tuple[int, int]]:
    return [(x,y) for x,y in piece.moved(dy=ghost_y(board,piece)-piece.y).cells() if y>=0]


def board_text(board: Board, piece: Optional[Piece] = None) -> str:
    """Render the board as text: kind letters, '#' active, '.' ghost, '-' empty."""
    grid: List[List[str]] = [[v.value if v else "-" for v in r] for r in board]
    if piece is not None:
        for x,y in ghost_cells(board, piece):
            if grid[y][x] == "-": grid[y][x] = "."
        for x,y in piece.cells():
            if 0<=y<ROWS and 0<=x<COLS: grid[y][x] = "#"
    return "\n".join("".join(r) for r in grid)
