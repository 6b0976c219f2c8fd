"""
Game session management for front ends.
"""
from __future__ import annotations

import copy
import logging
import threading
import time
from typing import Callable, List, Optional, Tuple

from .config import get_engine_settings

from .engine import BoardEngine
from .moves import MoveValidator
from .search import SearchEngine
from .types import Board, Coord, EquationResult, Move, MoveOutcome, Player

logger = logging.getLogger(__name__)

HistoryEntry = Tuple[Board, Player, bool, Optional[Player], int, Optional[Move]]


class GameSession:
    """Wraps a BoardEngine with history, pending-turn handling and engine play."""

    def __init__(self, human_side: Player = Player.BLUE, depth: Optional[int] = None,
                 engine: Optional[BoardEngine] = None) -> None:
        self.engine = engine or BoardEngine()
        self.human_side = human_side
        self.engine_depth = depth if depth is not None else get_engine_settings().default_depth
        self.move_number = 0
        self.last_move: Optional[Move] = None
        self.history: List[HistoryEntry] = []
        self.pending_events: Tuple[EquationResult, ...] = ()
        self.is_thinking = False

    def reset_game(self, human_side: Optional[Player] = None) -> None:
        """Reset the game to the initial position."""
        self.engine = BoardEngine(min_chain_length=self.engine.min_chain_length,
                                  stalemate_policy=self.engine.stalemate_policy)
        if human_side is not None:
            self.human_side = human_side
        self.move_number = 0
        self.last_move = None
        self.history.clear()
        self.pending_events = ()

    @property
    def game_over(self) -> bool:
        return self.engine.game_over

    @property
    def winner(self) -> Optional[Player]:
        return self.engine.winner

    @property
    def has_pending(self) -> bool:
        return bool(self.pending_events)

    def is_human_turn(self) -> bool:
        return self.engine.current_player is self.human_side

    def select(self, row: int, col: int) -> List[Coord]:
        """Destinations for a selected cell; nothing while a turn is pending."""
        if self.game_over or self.has_pending:
            return []
        return self.engine.get_valid_moves(row, col)

    def play(self, move: Move) -> Optional[MoveOutcome]:
        """Validate and play a move. Returns None when the move is refused."""
        if self.game_over or self.has_pending:
            return None
        if not MoveValidator.validate(self.engine.board, self.engine.current_player, move):
            logger.debug("rejected move %s", move)
            return None

        self.history.append((
            copy.deepcopy(self.engine.board),
            self.engine.current_player,
            self.engine.game_over,
            self.engine.winner,
            self.move_number,
            self.last_move,
        ))

        outcome = self.engine.apply_move(move)
        self.last_move = move
        if outcome.pending:
            self.pending_events = outcome.events
        else:
            self.move_number += 1
        return outcome

    def commit_pending(self) -> None:
        """Apply removals of the pending move once the front end has shown them."""
        if not self.has_pending:
            return
        events, self.pending_events = self.pending_events, ()
        self.engine.complete_turn(events)
        self.move_number += 1

    def undo_move(self) -> bool:
        """Undo the last move (pending or committed) and return success."""
        if not self.history or self.is_thinking:
            return False
        board, player, game_over, winner, self.move_number, self.last_move = self.history.pop()
        self.engine.board = board
        self.engine.current_player = player
        self.engine.game_over = game_over
        self.engine.winner = winner
        self.pending_events = ()
        return True

    # --- Engine play ---

    def engine_move(self, depth: Optional[int] = None) -> Optional[Move]:
        """Search on a copy of the position and return the chosen move."""
        searcher = SearchEngine(self.engine.copy())
        return searcher.choose_move(depth if depth is not None else self.engine_depth)

    def request_engine_move_async(self, on_complete: Callable[[Optional[Move], float], None],
                                  depth: Optional[int] = None) -> bool:
        """Search in a daemon thread; ``on_complete(move, elapsed)`` runs on that thread.

        Returns False if a search is already running.
        """
        if self.is_thinking or self.game_over or self.has_pending:
            return False

        self.is_thinking = True
        searcher = SearchEngine(self.engine.copy())
        search_depth = depth if depth is not None else self.engine_depth

        def worker() -> None:
            start_time = time.time()
            try:
                move = searcher.choose_move(search_depth)
            finally:
                self.is_thinking = False
            on_complete(move, time.time() - start_time)

        threading.Thread(target=worker, daemon=True).start()
        return True
