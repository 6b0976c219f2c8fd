"""
Type definitions, records and constants for the Discriminant engine.

This module provides:
- Closed enumerations for players and piece types
- Frozen dataclass records for pieces, moves and equation events
- Board geometry and starting-layout constants
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import numbers
from typing import List, Tuple, Dict, Any, Optional


class Player(str, Enum):
    RED = "RED"
    BLUE = "BLUE"

    @property
    def opponent(self) -> 'Player':
        return Player.BLUE if self is Player.RED else Player.RED

    @property
    def forward(self) -> int:
        """Row step of forward motion: RED advances down the board, BLUE up."""
        return 1 if self is Player.RED else -1


class PieceType(str, Enum):
    QUADRATIC = "QUADRATIC"
    LINEAR = "LINEAR"
    CONSTANT = "CONSTANT"


# Basic type aliases
Coord = Tuple[int, int]  # (row, col)
Coefficients = Tuple[int, int, int]  # (a, b, c)


def piece_label(value: int, piece_type: PieceType) -> str:
    """Display label for a term, e.g. ``-x²``, ``3x``, ``0x²`` or ``-4``."""
    if piece_type is PieceType.CONSTANT:
        return f"{value}"
    suffix = "x²" if piece_type is PieceType.QUADRATIC else "x"
    if value == 1:
        return suffix
    if value == -1:
        return f"-{suffix}"
    return f"{value}{suffix}"


@dataclass(frozen=True)
class Piece:
    """A term on the board. Owner, type and coefficient never change."""
    player: Player
    type: PieceType
    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.player, Player):
            raise ValueError(f"player must be a Player, got {self.player!r}")
        if not isinstance(self.type, PieceType):
            raise ValueError(f"type must be a PieceType, got {self.type!r}")
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"value must be an int, got {self.value!r}")

    @property
    def label(self) -> str:
        return piece_label(self.value, self.type)


Board = List[List[Optional[Piece]]]
BoardSnapshot = Tuple[Tuple[Optional[Piece], ...], ...]


@dataclass(frozen=True)
class Move:
    from_row: int
    from_col: int
    to_row: int
    to_col: int

    @property
    def origin(self) -> Coord:
        return (self.from_row, self.from_col)

    @property
    def destination(self) -> Coord:
        return (self.to_row, self.to_col)


GameResult = Tuple[int, Optional[Move]]  # (score, best_move)


@dataclass(frozen=True)
class ChainEntry:
    """A piece together with the cell it occupied when a chain was scanned."""
    row: int
    col: int
    piece: Piece


@dataclass(frozen=True)
class EquationResult:
    """One resolved axis: the equation formed and the pieces it destroys."""
    equation: str
    delta: int
    real_roots: bool
    victim: Player
    coefficients: Coefficients
    removed: Tuple[ChainEntry, ...]
    chain: Tuple[ChainEntry, ...]

    @property
    def backfire(self) -> bool:
        return not self.real_roots


@dataclass(frozen=True)
class MoveOutcome:
    """Result of ``BoardEngine.move_piece``.

    ``pending`` is True when equations resolved; the caller animates ``events``
    and then hands them back to ``complete_turn``.
    """
    events: Tuple[EquationResult, ...] = ()
    pending: bool = False


@dataclass
class UndoRecord:
    """Everything needed to reverse one simulated search move."""
    move: Move
    piece: Piece
    captured: List[ChainEntry] = field(default_factory=list)


# Board geometry
ROWS = 9
COLS = 8

# Home rows per player, ordered quadratic, linear, constant
HOME_ROWS: Dict[Player, Tuple[int, int, int]] = {
    Player.RED: (0, 1, 2),
    Player.BLUE: (8, 7, 6),
}

# Coefficients for each home row in BLUE's column order; RED uses them reversed
INITIAL_TERMS: Dict[PieceType, Tuple[int, ...]] = {
    PieceType.QUADRATIC: (1, -2, 3, -1, 1, -3, 2, -1),
    PieceType.LINEAR: (2, -1, 0, 3, -3, 0, 1, -2),
    PieceType.CONSTANT: (-4, 1, -2, 5, -5, 2, -1, 4),
}

STARTING_PLAYER = Player.BLUE

# Static evaluation weights
MATERIAL_WEIGHTS: Dict[PieceType, int] = {
    PieceType.QUADRATIC: 50,
    PieceType.LINEAR: 30,
    PieceType.CONSTANT: 10,
}
ADVANCEMENT_WEIGHT = 2


def is_valid_coord(row: Any, col: Any) -> bool:
    """Check whether (row, col) lies on the board."""
    return (isinstance(row, numbers.Integral) and isinstance(col, numbers.Integral)
            and 0 <= row < ROWS and 0 <= col < COLS)

