"""Discriminant package: rules engine and search for the quadratic-terms board game.

Usage examples:
    from discriminant import BoardEngine, SearchEngine
    from discriminant import GameSession
    from discriminant import MatchRunner
"""
from __future__ import annotations

from .types import (
    Player,
    PieceType,
    Piece,
    Move,
    ChainEntry,
    EquationResult,
    MoveOutcome,
    UndoRecord,
    ROWS,
    COLS,
    INITIAL_TERMS,
    STARTING_PLAYER,
)

# Board and rules
from .board import initial_board, empty_board, count_pieces, board_to_array, move_to_str, parse_move_str
from .moves import MoveGenerator, MoveValidator, legal_moves, valid_moves
from .equations import check_polynomial, format_equation, resolve_equations
from .engine import BoardEngine

# Evaluation and search
from .eval import Evaluator, MaterialEvaluator, evaluate, get_evaluator
from .search import SearchEngine, SearchStrategy, AlphaBetaSearchStrategy, get_search_strategy, minimax

# Sessions and matches
from .session import GameSession
from .match import MatchRunner, MatchStats, GameRecord
