"""
Equation detection and resolution.

A move forms up to four chains through the destination cell, one per axis.
Each chain is read as ``ax² + bx + c`` by summing the coefficients of its
quadratic, linear and constant terms. The discriminant decides who pays:
real roots destroy the opponent's terms in the chain, complex roots backfire
on the mover.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from .types import (
    Board,
    ChainEntry,
    Coefficients,
    EquationResult,
    PieceType,
    Player,
    is_valid_coord,
)

logger = logging.getLogger(__name__)

# Horizontal, vertical, diagonal "\", diagonal "/"
AXES: Tuple[Tuple[Tuple[int, int], Tuple[int, int]], ...] = (
    ((0, 1), (0, -1)),
    ((1, 0), (-1, 0)),
    ((1, 1), (-1, -1)),
    ((1, -1), (-1, 1)),
)

MIN_CHAIN_LENGTH = 2


def contiguous_chain(board: Board, row: int, col: int,
                     axis: Tuple[Tuple[int, int], Tuple[int, int]]) -> List[ChainEntry]:
    """Maximal run of occupied cells through (row, col) along ``axis``.

    The starting cell comes first, followed by the cells found in the first
    direction and then the second. An empty cell or the edge ends a direction.
    """
    start = board[row][col]
    if start is None:
        return []
    chain: List[ChainEntry] = [ChainEntry(row, col, start)]
    for dr, dc in axis:
        r, c = row + dr, col + dc
        while is_valid_coord(r, c):
            p = board[r][c]
            if p is None:
                break
            chain.append(ChainEntry(r, c, p))
            r += dr
            c += dc
    return chain


def sum_coefficients(chain: Sequence[ChainEntry]) -> Coefficients:
    a = b = c = 0
    for entry in chain:
        p = entry.piece
        if p.type is PieceType.QUADRATIC:
            a += p.value
        elif p.type is PieceType.LINEAR:
            b += p.value
        else:
            c += p.value
    return a, b, c


def discriminant(a: int, b: int, c: int) -> int:
    return b * b - 4 * a * c


def format_equation(a: int, b: int, c: int) -> str:
    """Render ``ax² + bx + c = 0`` with explicit signs and zero terms kept."""
    if a == 1:
        s = 'x²'
    elif a == -1:
        s = '-x²'
    else:
        s = f'{a}x²'

    if b > 0:
        s += ' + x' if b == 1 else f' + {b}x'
    elif b < 0:
        s += ' - x' if b == -1 else f' - {abs(b)}x'
    else:
        s += ' + 0x'

    if c > 0:
        s += f' + {c}'
    elif c < 0:
        s += f' - {abs(c)}'
    else:
        s += ' + 0'

    return s + ' = 0'


def check_polynomial(chain: Sequence[ChainEntry], mover: Player) -> Optional[EquationResult]:
    """Evaluate a chain as a quadratic. Returns None when it has no effect."""
    players = {entry.piece.player for entry in chain}
    if len(players) < 2:
        return None

    a, b, c = sum_coefficients(chain)
    if a == 0:
        return None

    delta = discriminant(a, b, c)
    real_roots = delta >= 0
    victim = mover.opponent if real_roots else mover

    removed = tuple(entry for entry in chain if entry.piece.player is victim)
    if not removed:
        return None

    return EquationResult(
        equation=format_equation(a, b, c),
        delta=delta,
        real_roots=real_roots,
        victim=victim,
        coefficients=(a, b, c),
        removed=removed,
        chain=tuple(chain),
    )


def resolve_equations(board: Board, row: int, col: int, mover: Player,
                      min_chain_length: int = MIN_CHAIN_LENGTH) -> List[EquationResult]:
    """Evaluate every axis through (row, col) against the same board.

    Nothing is removed here; callers apply the returned removals.
    """
    if not is_valid_coord(row, col):
        return []
    events: List[EquationResult] = []
    for axis in AXES:
        chain = contiguous_chain(board, row, col, axis)
        if len(chain) < min_chain_length:
            continue
        result = check_polynomial(chain, mover)
        if result is not None:
            logger.debug("equation %s (delta=%d) removes %d %s piece(s)",
                         result.equation, result.delta, len(result.removed), result.victim.value)
            events.append(result)
    return events
