import pytest

from discriminant.board import empty_board
from discriminant.equations import (
    AXES,
    check_polynomial,
    contiguous_chain,
    discriminant,
    format_equation,
    resolve_equations,
    sum_coefficients,
)
from discriminant.types import ChainEntry, Piece, PieceType, Player

Q, L, C = PieceType.QUADRATIC, PieceType.LINEAR, PieceType.CONSTANT
RED, BLUE = Player.RED, Player.BLUE

# Helpers

def chain_of(*terms):
    """Build a horizontal chain on row 0 from (player, type, value) triples."""
    return [ChainEntry(0, i, Piece(p, t, v)) for i, (p, t, v) in enumerate(terms)]


def board_with(pieces):
    board = empty_board()
    for r, c, player, ptype, value in pieces:
        board[r][c] = Piece(player, ptype, value)
    return board


@pytest.mark.parametrize("coeffs, expected", [
    ((1, 0, 0), "x² + 0x + 0 = 0"),
    ((-2, -1, 3), "-2x² - x + 3 = 0"),
    ((-1, 1, -4), "-x² + x - 4 = 0"),
    ((3, 5, 0), "3x² + 5x + 0 = 0"),
    ((2, -7, -1), "2x² - 7x - 1 = 0"),
])
def test_format_equation(coeffs, expected):
    assert format_equation(*coeffs) == expected


def test_piece_labels():
    assert Piece(RED, Q, 1).label == "x²"
    assert Piece(RED, Q, -1).label == "-x²"
    assert Piece(RED, Q, 0).label == "0x²"
    assert Piece(BLUE, L, 3).label == "3x"
    assert Piece(BLUE, L, -1).label == "-x"
    assert Piece(BLUE, C, -4).label == "-4"
    assert Piece(BLUE, C, 0).label == "0"


def test_piece_rejects_bad_fields():
    with pytest.raises(ValueError):
        Piece("GREEN", Q, 1)
    with pytest.raises(ValueError):
        Piece(RED, "CUBIC", 1)
    with pytest.raises(ValueError):
        Piece(RED, Q, 1.5)


def test_sum_coefficients_ignores_order():
    chain = chain_of((RED, C, 2), (BLUE, Q, 1), (RED, Q, 2), (BLUE, L, -3), (BLUE, C, 1))
    assert sum_coefficients(chain) == (3, -3, 3)
    assert sum_coefficients(list(reversed(chain))) == (3, -3, 3)
    assert discriminant(3, -3, 3) == 9 - 36


def test_single_player_chain_never_resolves():
    chain = chain_of((BLUE, Q, 1), (BLUE, L, 0), (BLUE, C, -4))
    assert check_polynomial(chain, BLUE) is None
    assert check_polynomial(chain, RED) is None


def test_zero_quadratic_never_resolves():
    chain = chain_of((BLUE, Q, 2), (RED, Q, -2), (BLUE, L, 5), (RED, C, 3))
    assert check_polynomial(chain, BLUE) is None
    chain = chain_of((BLUE, L, 5), (RED, C, -3))
    assert check_polynomial(chain, RED) is None


def test_real_roots_remove_non_mover_pieces():
    chain = chain_of((BLUE, Q, 1), (RED, C, -4))
    result = check_polynomial(chain, BLUE)
    assert result is not None
    assert result.delta == 16
    assert result.real_roots is True
    assert result.backfire is False
    assert result.victim is RED
    assert result.coefficients == (1, 0, -4)
    assert result.equation == "x² + 0x - 4 = 0"
    assert [(e.row, e.col) for e in result.removed] == [(0, 1)]
    assert len(result.chain) == 2


def test_complex_roots_backfire_on_mover():
    chain = chain_of((BLUE, Q, 1), (RED, C, 4))
    result = check_polynomial(chain, BLUE)
    assert result is not None
    assert result.delta == -16
    assert result.real_roots is False
    assert result.backfire is True
    assert result.victim is BLUE
    assert [(e.row, e.col) for e in result.removed] == [(0, 0)]


def test_outcome_depends_on_who_moved():
    chain = chain_of((BLUE, Q, 1), (RED, C, -4), (RED, L, 1))
    assert check_polynomial(chain, BLUE).victim is RED
    assert check_polynomial(chain, RED).victim is BLUE


def test_contiguous_chain_stops_at_gap():
    board = board_with([
        (4, 1, RED, C, 1),
        (4, 2, BLUE, Q, 1),
        (4, 3, RED, L, 2),
        (4, 5, RED, C, 9),  # beyond the gap at (4, 4)
        (3, 2, RED, C, 5),
    ])
    horizontal = contiguous_chain(board, 4, 2, AXES[0])
    assert sorted((e.row, e.col) for e in horizontal) == [(4, 1), (4, 2), (4, 3)]
    assert (horizontal[0].row, horizontal[0].col) == (4, 2)
    vertical = contiguous_chain(board, 4, 2, AXES[1])
    assert sorted((e.row, e.col) for e in vertical) == [(3, 2), (4, 2)]


def test_resolve_equations_one_event_per_axis():
    # BLUE quadratic at (4, 3) touches a RED constant on two different axes
    board = board_with([
        (4, 3, BLUE, Q, 1),
        (4, 4, RED, C, -4),
        (5, 3, RED, C, -1),
        (0, 0, RED, Q, 1),
    ])
    events = resolve_equations(board, 4, 3, BLUE)
    assert len(events) == 2
    removed = sorted((e.row, e.col) for ev in events for e in ev.removed)
    assert removed == [(4, 4), (5, 3)]
    # resolution only reports; the board is untouched
    assert board[4][4] is not None and board[5][3] is not None


def test_resolve_equations_respects_min_chain_length():
    board = board_with([(4, 3, BLUE, Q, 1), (4, 4, RED, C, -4)])
    assert len(resolve_equations(board, 4, 3, BLUE)) == 1
    assert resolve_equations(board, 4, 3, BLUE, min_chain_length=3) == []


def test_resolve_equations_on_empty_or_invalid_cell():
    board = empty_board()
    assert resolve_equations(board, 4, 4, BLUE) == []
    assert resolve_equations(board, -1, 4, BLUE) == []
