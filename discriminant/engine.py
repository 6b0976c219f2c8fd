"""
Authoritative game state: board, turn, move execution and win detection.

Typical use from a front end::

    engine = BoardEngine()
    dests = engine.get_valid_moves(6, 3)
    outcome = engine.move_piece(6, 3, 5, 3)
    if outcome.pending:
        ...  # animate outcome.events
        engine.complete_turn(outcome.events)
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .config import get_game_rules

from .board import board_to_array, count_pieces, empty_board, get_piece, initial_board, snapshot
from .equations import resolve_equations
from .moves import MoveGenerator
from .types import (
    Board,
    BoardSnapshot,
    Coord,
    EquationResult,
    Move,
    MoveOutcome,
    Piece,
    Player,
    is_valid_coord,
)

logger = logging.getLogger(__name__)


class BoardEngine:
    """Owns the board and the turn; the only place authoritative moves happen."""

    def __init__(self, board: Optional[Board] = None,
                 current_player: Optional[Player] = None,
                 min_chain_length: Optional[int] = None,
                 stalemate_policy: Optional[str] = None) -> None:
        rules = get_game_rules()
        self.board: Board = board if board is not None else initial_board()
        self.current_player: Player = current_player or Player(rules.starting_player)
        self.min_chain_length: int = min_chain_length or rules.min_chain_length
        self.stalemate_policy: str = stalemate_policy or rules.stalemate_policy
        self.game_over: bool = False
        self.winner: Optional[Player] = None
        self.move_generator = MoveGenerator()

    @classmethod
    def empty(cls, current_player: Player = Player.BLUE, **kwargs) -> 'BoardEngine':
        """An engine with no pieces, for building custom positions."""
        return cls(board=empty_board(), current_player=current_player, **kwargs)

    def copy(self) -> 'BoardEngine':
        """Independent engine with the same position. Pieces are shared."""
        other = BoardEngine(
            board=[list(row) for row in self.board],
            current_player=self.current_player,
            min_chain_length=self.min_chain_length,
            stalemate_policy=self.stalemate_policy,
        )
        other.game_over = self.game_over
        other.winner = self.winner
        return other

    # --- Board access ---

    def get_piece(self, row: int, col: int) -> Optional[Piece]:
        return get_piece(self.board, row, col)

    def clear(self) -> None:
        """Remove every piece and reset the result, keeping the player to move."""
        self.board[:] = empty_board()
        self.game_over = False
        self.winner = None

    def place_piece(self, row: int, col: int, piece: Piece) -> None:
        if not is_valid_coord(row, col):
            raise ValueError(f"({row}, {col}) is off the board")
        self.board[row][col] = piece

    def remove_piece(self, row: int, col: int) -> Optional[Piece]:
        """Empty a cell and return what was there. Empty or off-board cells are a no-op."""
        piece = self.get_piece(row, col)
        if piece is not None:
            self.board[row][col] = None
        return piece

    def snapshot(self) -> BoardSnapshot:
        return snapshot(self.board)

    def to_array(self) -> np.ndarray:
        return board_to_array(self.board)

    def piece_counts(self) -> Tuple[int, int]:
        """(red_pieces, blue_pieces)"""
        return count_pieces(self.board)

    # --- Movement ---

    def get_valid_moves(self, row: int, col: int) -> List[Coord]:
        """Destinations for the piece at (row, col); empty unless it belongs to the player to move."""
        return self.move_generator.destinations(self.board, row, col, self.current_player)

    def all_moves(self, player: Optional[Player] = None) -> List[Move]:
        return self.move_generator.legal_moves(self.board, player or self.current_player)

    def has_legal_moves(self, player: Optional[Player] = None) -> bool:
        return bool(self.all_moves(player))

    def move_piece(self, from_row: int, from_col: int, to_row: int, to_col: int) -> MoveOutcome:
        """Relocate a piece and resolve equations at its destination.

        The move is not validated. When equations form, the turn is left with
        the mover until ``complete_turn`` is called with the returned events.
        """
        piece = self.board[from_row][from_col]
        self.board[to_row][to_col] = piece
        self.board[from_row][from_col] = None

        events = self.resolve_equations(to_row, to_col)
        if events:
            return MoveOutcome(events=tuple(events), pending=True)

        self.switch_turn()
        return MoveOutcome()

    def apply_move(self, move: Move) -> MoveOutcome:
        return self.move_piece(move.from_row, move.from_col, move.to_row, move.to_col)

    # --- Equations ---

    def resolve_equations(self, row: int, col: int) -> List[EquationResult]:
        return resolve_equations(self.board, row, col, self.current_player, self.min_chain_length)

    def remove_pieces(self, event: EquationResult) -> None:
        for entry in event.removed:
            self.remove_piece(entry.row, entry.col)

    # --- Turn handling ---

    def complete_turn(self, events: Optional[Sequence[EquationResult]] = None) -> None:
        """Apply queued removals, then hand the turn over."""
        for event in events or ():
            self.remove_pieces(event)
        self.switch_turn()

    def switch_turn(self) -> None:
        if self.game_over:
            return
        self.current_player = self.current_player.opponent
        self.check_win_condition()
        if not self.game_over:
            self._apply_stalemate_policy()

    def check_win_condition(self) -> None:
        red, blue = self.piece_counts()
        if red == 0:
            self.winner = Player.BLUE
        elif blue == 0:
            self.winner = Player.RED
        else:
            return
        self.game_over = True
        logger.info("game over: %s wins", self.winner.value)

    def _apply_stalemate_policy(self) -> None:
        """Handle a player to move who still has pieces but no legal move."""
        if self.stalemate_policy == "none" or self.has_legal_moves():
            return
        stuck = self.current_player
        if self.stalemate_policy == "forfeit":
            self.game_over = True
            self.winner = stuck.opponent
            logger.info("%s cannot move and forfeits", stuck.value)
        elif self.has_legal_moves(stuck.opponent):
            self.current_player = stuck.opponent
            logger.info("%s cannot move, turn passes", stuck.value)
        else:
            self.game_over = True
            self.winner = None
            logger.info("neither side can move: draw")
