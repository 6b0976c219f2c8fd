from __future__ import annotations

import re
from typing import Optional, Tuple

import numpy as np

from .types import (
    Board,
    BoardSnapshot,
    COLS,
    HOME_ROWS,
    INITIAL_TERMS,
    Move,
    Piece,
    PieceType,
    Player,
    ROWS,
    is_valid_coord,
)

# ============================
# Board setup and utilities
# ============================

# Signed type codes used by board_to_array (BLUE positive, RED negative)
TYPE_CODES = {
    PieceType.CONSTANT: 1,
    PieceType.LINEAR: 2,
    PieceType.QUADRATIC: 3,
}


def empty_board() -> Board:
    return [[None] * COLS for _ in range(ROWS)]


def home_row_values(player: Player, piece_type: PieceType) -> Tuple[int, ...]:
    """Coefficients of a player's home row, column 0 first. RED's row is mirrored."""
    values = INITIAL_TERMS[piece_type]
    return tuple(reversed(values)) if player is Player.RED else values


def setup_player(board: Board, player: Player) -> None:
    """Place a player's quadratic, linear and constant rows along its home edge."""
    row_types = (PieceType.QUADRATIC, PieceType.LINEAR, PieceType.CONSTANT)
    for row, piece_type in zip(HOME_ROWS[player], row_types):
        for col, value in enumerate(home_row_values(player, piece_type)):
            board[row][col] = Piece(player, piece_type, value)


def initial_board() -> Board:
    """Initial position: RED on rows 0..2, BLUE on rows 6..8."""
    b: Board = empty_board()
    setup_player(b, Player.RED)
    setup_player(b, Player.BLUE)
    return b


def get_piece(board: Board, row: int, col: int) -> Optional[Piece]:
    """Piece at (row, col), or None when the cell is empty or off the board."""
    if not is_valid_coord(row, col):
        return None
    return board[row][col]


def count_pieces(board: Board) -> Tuple[int, int]:
    """Count pieces per player.

    Returns:
        Tuple of (red_pieces, blue_pieces)
    """
    red: int = 0
    blue: int = 0
    for row in board:
        for p in row:
            if p is None:
                continue
            if p.player is Player.RED:
                red += 1
            else:
                blue += 1
    return red, blue


def snapshot(board: Board) -> BoardSnapshot:
    """Immutable copy of the grid. Pieces are shared, they are immutable themselves."""
    return tuple(tuple(row) for row in board)


def board_to_array(board: Board) -> np.ndarray:
    """Encode the board as a ROWS x COLS int8 array of signed type codes."""
    arr = np.zeros((ROWS, COLS), dtype=np.int8)
    for r, row in enumerate(board):
        for c, p in enumerate(row):
            if p is not None:
                code = TYPE_CODES[p.type]
                arr[r, c] = code if p.player is Player.BLUE else -code
    return arr


_MOVE_RE = re.compile(r"(\d+)\s*[,\s]\s*(\d+)\s*[-\s]\s*(\d+)\s*[,\s]\s*(\d+)")


def move_to_str(move: Move) -> str:
    """Convert a move to ``"r,c-r,c"`` notation."""
    return f"{move.from_row},{move.from_col}-{move.to_row},{move.to_col}"


def parse_move_str(s: str) -> Optional[Move]:
    """Parse ``"6,3-5,3"`` or ``"6 3 5 3"`` into a Move."""
    m = _MOVE_RE.fullmatch(s.strip())
    if m is None:
        return None
    fr, fc, tr, tc = (int(g) for g in m.groups())
    if not (is_valid_coord(fr, fc) and is_valid_coord(tr, tc)):
        return None
    return Move(fr, fc, tr, tc)
