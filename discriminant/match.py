"""
Computer-versus-computer matches.

Each game is driven through the same contract a front end uses:
choose_move, then move_piece, then complete_turn for pending moves.
"""
from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

import numpy as np

from .config import MatchSettings, get_match_settings

from .engine import BoardEngine
from .eval import Evaluator, get_evaluator
from .search import SearchEngine
from .types import Board, Player

logger = logging.getLogger(__name__)


@dataclass
class GameRecord:
    """Outcome of a single game."""
    winner: Optional[Player]
    moves: int
    depth: int
    equations: int = 0
    backfires: int = 0
    random_moves: int = 0
    final_board: Optional[Board] = None


@dataclass
class MatchStats:
    """Statistics over a series of games."""
    games_played: int = 0
    red_wins: int = 0
    blue_wins: int = 0
    draws: int = 0
    equations: int = 0
    backfires: int = 0
    random_moves_total: int = 0
    game_lengths: List[int] = field(default_factory=list)
    final_scores: List[int] = field(default_factory=list)

    def record(self, game: GameRecord) -> None:
        self.games_played += 1
        if game.winner is Player.RED:
            self.red_wins += 1
        elif game.winner is Player.BLUE:
            self.blue_wins += 1
        else:
            self.draws += 1
        self.equations += game.equations
        self.backfires += game.backfires
        self.random_moves_total += game.random_moves
        self.game_lengths.append(game.moves)

    def summary(self) -> Dict[str, float]:
        lengths = np.asarray(self.game_lengths, dtype=np.float64)
        scores = np.asarray(self.final_scores, dtype=np.float64)
        return {
            'games_played': self.games_played,
            'red_wins': self.red_wins,
            'blue_wins': self.blue_wins,
            'draws': self.draws,
            'avg_game_length': float(lengths.mean()) if lengths.size else 0.0,
            'std_game_length': float(lengths.std()) if lengths.size else 0.0,
            'avg_final_score': float(scores.mean()) if scores.size else 0.0,
            'equations': self.equations,
            'backfire_rate': self.backfires / self.equations if self.equations else 0.0,
            'random_moves_total': self.random_moves_total,
        }


class MatchRunner:
    """Plays games between two search engines with epsilon-greedy exploration."""

    def __init__(self, settings: Optional[MatchSettings] = None, seed: Optional[int] = None,
                 evaluator: Optional[Evaluator] = None) -> None:
        self.settings: MatchSettings = settings or get_match_settings()
        self.rng = random.Random(seed)
        self.evaluator: Evaluator = evaluator or get_evaluator()

    def play_game(self, depth: Optional[int] = None) -> GameRecord:
        engine = BoardEngine()
        if depth is None:
            depth = self.rng.choice(self.settings.depths)
        record = GameRecord(winner=None, moves=0, depth=depth)

        while not engine.game_over and record.moves < self.settings.max_moves:
            legal = engine.all_moves()
            if not legal:
                # only reachable with stalemate_policy "none"
                break
            if self.rng.random() < self.settings.epsilon:
                move = self.rng.choice(legal)
                record.random_moves += 1
            else:
                move = SearchEngine(engine, self.evaluator).choose_move(depth)

            outcome = engine.apply_move(move)
            if outcome.pending:
                record.equations += len(outcome.events)
                record.backfires += sum(1 for ev in outcome.events if ev.backfire)
                engine.complete_turn(outcome.events)
            record.moves += 1

        record.winner = engine.winner if engine.game_over else None
        record.final_board = engine.board
        return record

    def run(self, num_games: int,
            progress_callback: Optional[Callable[[int, int], None]] = None) -> MatchStats:
        stats = MatchStats()
        finals: List[Board] = []
        start_time = time.time()

        for game_num in range(num_games):
            game_start = time.time()
            game = self.play_game()
            stats.record(game)
            finals.append(game.final_board)

            result_str = f"{game.winner.value} wins" if game.winner else "Draw"
            logger.info("Game %3d: %-10s | Moves: %3d | Depth: %d | Equations: %2d | "
                        "Backfires: %2d | Random: %2d | Time: %.2fs",
                        game_num + 1, result_str, game.moves, game.depth, game.equations,
                        game.backfires, game.random_moves, time.time() - game_start)
            if progress_callback:
                progress_callback(game_num + 1, num_games)

        # final positions scored from BLUE's side
        stats.final_scores = [int(s) for s in self.evaluator.batch_evaluate(finals, Player.BLUE)]
        logger.info("Match of %d games completed in %.2fs", num_games, time.time() - start_time)
        return stats
