"""
Evaluation interfaces and the material + advancement evaluator.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np

from .board import TYPE_CODES, board_to_array
from .types import ADVANCEMENT_WEIGHT, Board, MATERIAL_WEIGHTS, Player, ROWS


def progress(player: Player, row: int) -> int:
    """Rows a piece has advanced from its own edge."""
    return row if player is Player.RED else (ROWS - 1) - row


def evaluate(board: Board, player: Player) -> int:
    """Material plus advancement, positive when ``player`` is ahead."""
    score: int = 0
    for r, cells in enumerate(board):
        for p in cells:
            if p is None:
                continue
            value = MATERIAL_WEIGHTS[p.type] + ADVANCEMENT_WEIGHT * progress(p.player, r)
            if p.player is player:
                score += value
            else:
                score -= value
    return score


class Evaluator(ABC):
    """Abstract evaluator interface for position scoring."""

    @abstractmethod
    def evaluate_position(self, board: Board, player: Player) -> int:  # pragma: no cover
        """Evaluate a single board position for the given player."""
        raise NotImplementedError

    def __call__(self, board: Board, player: Player) -> int:
        return self.evaluate_position(board, player)

    def batch_evaluate(self, boards: Sequence[Board], player: Player) -> np.ndarray:
        """Scores for several boards. Default falls back to single calls."""
        out = np.zeros(len(boards), dtype=np.int64)
        for i, board in enumerate(boards):
            out[i] = self.evaluate_position(board, player)
        return out


# Material weight indexed by absolute type code
_WEIGHT_BY_CODE = np.zeros(max(TYPE_CODES.values()) + 1, dtype=np.int64)
for _type, _code in TYPE_CODES.items():
    _WEIGHT_BY_CODE[_code] = MATERIAL_WEIGHTS[_type]

_ROW_INDEX = np.arange(ROWS, dtype=np.int64)[:, None]


class MaterialEvaluator(Evaluator):
    """Material weight per term type plus a bonus for forward progress."""

    def evaluate_position(self, board: Board, player: Player) -> int:
        return evaluate(board, player)

    def batch_evaluate(self, boards: Sequence[Board], player: Player) -> np.ndarray:
        if not boards:
            return np.zeros(0, dtype=np.int64)
        codes = np.stack([board_to_array(b) for b in boards]).astype(np.int64)
        blue = codes > 0
        red = codes < 0
        advance = np.where(blue, (ROWS - 1) - _ROW_INDEX, _ROW_INDEX)
        value = _WEIGHT_BY_CODE[np.abs(codes)] + ADVANCEMENT_WEIGHT * advance
        signed = value * (blue.astype(np.int64) - red.astype(np.int64))
        scores = signed.sum(axis=(1, 2))
        return scores if player is Player.BLUE else -scores


def get_evaluator() -> Evaluator:
    return MaterialEvaluator()


__all__ = [
    "Evaluator",
    "MaterialEvaluator",
    "get_evaluator",
    "evaluate",
    "progress",
]
