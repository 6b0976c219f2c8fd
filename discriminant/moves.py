from __future__ import annotations

from typing import Dict, List, Tuple

from .types import Board, Coord, Move, PieceType, Player, is_valid_coord

ORTHOGONAL: List[Tuple[int, int]] = [(-1, 0), (1, 0), (0, -1), (0, 1)]
DIAGONAL: List[Tuple[int, int]] = [(-1, -1), (-1, 1), (1, -1), (1, 1)]

# Directions and range per piece type; constants are handled separately
_RAYS: Dict[PieceType, Tuple[List[Tuple[int, int]], int]] = {
    PieceType.QUADRATIC: (ORTHOGONAL + DIAGONAL, 3),
    PieceType.LINEAR: (ORTHOGONAL, 2),
}


class MoveGenerator:
    """Generates legal destinations for pieces on a board.

    Pieces never capture by landing: every ray stops at the board edge or at
    the first occupied cell, and that cell is not a destination.
    """

    def _cast(self, board: Board, row: int, col: int, dr: int, dc: int, reach: int) -> List[Coord]:
        dests: List[Coord] = []
        for dist in range(1, reach + 1):
            nr, nc = row + dr * dist, col + dc * dist
            if not is_valid_coord(nr, nc) or board[nr][nc] is not None:
                break
            dests.append((nr, nc))
        return dests

    def destinations(self, board: Board, row: int, col: int, player: Player) -> List[Coord]:
        """Destinations for the piece at (row, col) if it belongs to ``player``."""
        if not is_valid_coord(row, col):
            return []
        piece = board[row][col]
        if piece is None or piece.player is not player:
            return []
        if piece.type is PieceType.CONSTANT:
            return self._cast(board, row, col, player.forward, 0, 1)
        dirs, reach = _RAYS[piece.type]
        dests: List[Coord] = []
        for dr, dc in dirs:
            dests.extend(self._cast(board, row, col, dr, dc, reach))
        return dests

    def legal_moves(self, board: Board, player: Player) -> List[Move]:
        """Every legal move of ``player``, scanning the board row by row."""
        moves: List[Move] = []
        for r, cells in enumerate(board):
            for c, p in enumerate(cells):
                if p is None or p.player is not player:
                    continue
                for tr, tc in self.destinations(board, r, c, player):
                    moves.append(Move(r, c, tr, tc))
        return moves


class MoveValidator:
    """Validates moves against generated legal moves."""

    @staticmethod
    def validate(board: Board, player: Player, move: Move) -> bool:
        dests = MoveGenerator().destinations(board, move.from_row, move.from_col, player)
        return move.destination in dests


# Convenience functional API

def valid_moves(board: Board, row: int, col: int, player: Player) -> List[Coord]:
    return MoveGenerator().destinations(board, row, col, player)


def legal_moves(board: Board, player: Player) -> List[Move]:
    return MoveGenerator().legal_moves(board, player)
