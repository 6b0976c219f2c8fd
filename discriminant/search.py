"""
Minimax search with alpha-beta pruning over a live BoardEngine.

The search mutates the engine's board in place and reverses every change with
an undo record, so no board is copied per node. The authoritative turn on the
engine is never touched; the side to move inside the tree is a parameter.
"""
from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import List, Optional

from .config import get_engine_settings

from .board import count_pieces, move_to_str
from .engine import BoardEngine
from .equations import resolve_equations
from .eval import Evaluator, get_evaluator
from .types import ChainEntry, GameResult, Move, Player, UndoRecord

logger = logging.getLogger(__name__)

INF = 10**9


class SearchEngine:
    """Depth-limited minimax with alpha-beta pruning."""

    def __init__(self, engine: BoardEngine, evaluator: Optional[Evaluator] = None,
                 use_pruning: Optional[bool] = None) -> None:
        settings = get_engine_settings()
        self.engine = engine
        self.evaluator: Evaluator = evaluator or get_evaluator()
        self.use_pruning: bool = settings.use_pruning if use_pruning is None else bool(use_pruning)
        self.default_depth: int = settings.default_depth
        self.nodes: int = 0

    # --- Reversible move simulation ---

    def apply(self, move: Move, side: Player) -> UndoRecord:
        """Play ``move`` for ``side`` and remove equation victims immediately."""
        board = self.engine.board
        piece = board[move.from_row][move.from_col]
        board[move.to_row][move.to_col] = piece
        board[move.from_row][move.from_col] = None

        record = UndoRecord(move=move, piece=piece)
        events = resolve_equations(board, move.to_row, move.to_col, side, self.engine.min_chain_length)
        for event in events:
            for entry in event.removed:
                current = board[entry.row][entry.col]
                # overlapping chains can list the same cell twice
                if current is None:
                    continue
                record.captured.append(ChainEntry(entry.row, entry.col, current))
                board[entry.row][entry.col] = None
        return record

    def undo(self, record: UndoRecord) -> None:
        board = self.engine.board
        for entry in record.captured:
            board[entry.row][entry.col] = entry.piece
        move = record.move
        board[move.from_row][move.from_col] = record.piece
        board[move.to_row][move.to_col] = None

    # --- Search ---

    def _is_terminal(self) -> bool:
        red, blue = count_pieces(self.engine.board)
        return red == 0 or blue == 0

    def _minimax(self, depth: int, alpha: int, beta: int, maximizing: bool,
                 side: Player, perspective: Player) -> GameResult:
        self.nodes += 1
        board = self.engine.board
        if depth == 0 or self._is_terminal():
            return self.evaluator.evaluate_position(board, perspective), None

        moves: List[Move] = self.engine.move_generator.legal_moves(board, side)
        if not moves:
            return self.evaluator.evaluate_position(board, perspective), None

        best_move: Optional[Move] = None
        if maximizing:
            best = -INF
            for m in moves:
                record = self.apply(m, side)
                score, _ = self._minimax(depth - 1, alpha, beta, False, side.opponent, perspective)
                self.undo(record)
                if score > best:
                    best = score
                    best_move = m
                alpha = max(alpha, score)
                if self.use_pruning and beta <= alpha:
                    break
        else:
            best = INF
            for m in moves:
                record = self.apply(m, side)
                score, _ = self._minimax(depth - 1, alpha, beta, True, side.opponent, perspective)
                self.undo(record)
                if score < best:
                    best = score
                    best_move = m
                beta = min(beta, score)
                if self.use_pruning and beta <= alpha:
                    break
        return best, best_move

    def search(self, depth: int) -> GameResult:
        """Search from the player to move, who maximizes throughout."""
        self.nodes = 0
        perspective = self.engine.current_player
        return self._minimax(depth, -INF, INF, True, perspective, perspective)

    def choose_move(self, depth_limit: Optional[int] = None) -> Optional[Move]:
        depth = depth_limit if depth_limit is not None else self.default_depth
        player = self.engine.current_player
        logger.debug("%s thinking (depth %d)", player.value, depth)
        start = time.time()
        score, move = self.search(depth)
        elapsed = time.time() - start
        if move is None:
            logger.debug("%s has no move to play", player.value)
        else:
            logger.debug("%s plays %s (score %d, %d nodes, %.2fs)",
                     player.value, move_to_str(move), score, self.nodes, elapsed)
        return move


class SearchStrategy(ABC):
    """Abstract interface for search strategies."""

    @abstractmethod
    def search(self, engine: BoardEngine, depth: int) -> GameResult:  # pragma: no cover
        raise NotImplementedError


class AlphaBetaSearchStrategy(SearchStrategy):
    """Adapter around SearchEngine implementing the interface."""

    def __init__(self, evaluator: Optional[Evaluator] = None, use_pruning: Optional[bool] = None) -> None:
        self.evaluator = evaluator
        self.use_pruning = use_pruning

    def search(self, engine: BoardEngine, depth: int) -> GameResult:
        return SearchEngine(engine, self.evaluator, self.use_pruning).search(depth)


def get_search_strategy() -> SearchStrategy:
    """Factory for the default search strategy (alpha-beta)."""
    return AlphaBetaSearchStrategy()


def minimax(engine: BoardEngine, depth: int, use_pruning: bool = True) -> GameResult:
    """Functional wrapper returning (score, best_move)."""
    return SearchEngine(engine, use_pruning=use_pruning).search(depth)


__all__ = [
    "SearchEngine",
    "SearchStrategy",
    "AlphaBetaSearchStrategy",
    "get_search_strategy",
    "minimax",
    "INF",
]
