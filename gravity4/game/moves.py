"""
moves.py - Landing-row resolution under the current gravity

These functions are pure: they only read the board, so the heuristic
opponent can use them for hypothetical placements.
"""

from typing import List, Optional

from gravity4.debug import debug
from gravity4.exceptions import ColumnFullError, OutOfBoundsError
from gravity4.game.board import Board
from gravity4.utils import ROWS, COLS, Gravity, Player, is_valid_column


def landing_row(board: Board, column: int, gravity: Gravity) -> Optional[int]:
    """
    Find the row a piece dropped into ``column`` would occupy.

    Under Gravity.DOWN the column is scanned from the last row toward row 0,
    under Gravity.UP from row 0 toward the last row; the first empty cell
    is the landing row.

    Args:
        board: The board to inspect
        column: Column index (0-indexed)
        gravity: Current gravity direction

    Returns:
        The landing row, or None if the column is full

    Raises:
        OutOfBoundsError: if the column is outside the board
    """
    if not is_valid_column(column):
        raise OutOfBoundsError(col=column)

    rows = range(ROWS - 1, -1, -1) if gravity == Gravity.DOWN else range(ROWS)
    for row in rows:
        if board.grid[row, column] == Player.EMPTY.value:
            return row
    return None


def resolve_landing(board: Board, column: int, gravity: Gravity) -> int:
    """Like landing_row, but a full column raises ColumnFullError."""
    row = landing_row(board, column, gravity)
    if row is None:
        debug.debug(f"Column {column} is full under gravity {gravity}", "moves")
        raise ColumnFullError(column)
    return row


def valid_columns(board: Board, gravity: Gravity) -> List[int]:
    """Columns, ascending, that still have a landing row."""
    return [col for col in range(COLS) if landing_row(board, col, gravity) is not None]
