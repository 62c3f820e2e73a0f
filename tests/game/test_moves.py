"""Unit tests for gravity4/game/moves.py"""

import pytest

from gravity4.exceptions import ColumnFullError, OutOfBoundsError
from gravity4.game.moves import landing_row, resolve_landing, valid_columns
from gravity4.utils import ROWS, COLS, Gravity, Player


def test_empty_column_landing(board):
    assert landing_row(board, 3, Gravity.DOWN) == ROWS - 1
    assert landing_row(board, 3, Gravity.UP) == 0


def test_down_stacks_upwards(board):
    board.set(5, 0, Player.ONE)
    board.set(4, 0, Player.TWO)

    assert landing_row(board, 0, Gravity.DOWN) == 3


def test_up_stacks_downwards(board):
    board.set(0, 0, Player.ONE)
    board.set(1, 0, Player.TWO)

    assert landing_row(board, 0, Gravity.UP) == 2


def test_scan_starts_at_far_edge(board):
    # A piece packed against row 0 does not block a drop under DOWN gravity
    board.set(0, 4, Player.ONE)

    assert landing_row(board, 4, Gravity.DOWN) == 5
    assert landing_row(board, 4, Gravity.UP) == 1


@pytest.mark.parametrize("gravity", [Gravity.DOWN, Gravity.UP])
def test_full_column(board, gravity):
    for row in range(ROWS):
        board.set(row, 6, Player.ONE if row % 2 else Player.TWO)

    assert landing_row(board, 6, gravity) is None
    with pytest.raises(ColumnFullError) as exc_info:
        resolve_landing(board, 6, gravity)
    assert exc_info.value.col == 6


@pytest.mark.parametrize("column", [-1, COLS])
def test_column_out_of_bounds(board, column):
    with pytest.raises(OutOfBoundsError):
        landing_row(board, column, Gravity.DOWN)


def test_landing_row_does_not_mutate(board):
    board.set(5, 1, Player.ONE)
    before = board.get_state()

    landing_row(board, 1, Gravity.DOWN)
    landing_row(board, 1, Gravity.UP)

    assert (board.get_state() == before).all()
    assert board.piece_count() == 1


def test_valid_columns(board):
    assert valid_columns(board, Gravity.DOWN) == list(range(COLS))

    for row in range(ROWS):
        board.set(row, 2, Player.ONE if row % 2 else Player.TWO)

    assert valid_columns(board, Gravity.DOWN) == [0, 1, 3, 4, 5, 6]
    assert valid_columns(board, Gravity.UP) == [0, 1, 3, 4, 5, 6]
