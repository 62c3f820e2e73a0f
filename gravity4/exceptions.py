"""
exceptions.py - Error types raised by the game engine

OutOfBoundsError and CellOccupiedError signal broken invariants and are
left to propagate. ColumnFullError is an expected condition that the game
session turns into a rejected move.
"""


class Gravity4Error(Exception):
    """Base class for all game engine errors."""


class OutOfBoundsError(Gravity4Error, IndexError):
    """A row or column index lies outside the grid."""

    def __init__(self, row=None, col=None):
        self.row = row
        self.col = col
        if row is None:
            message = f"Column {col} is outside the board"
        else:
            message = f"Position ({row}, {col}) is outside the board"
        super().__init__(message)


class CellOccupiedError(Gravity4Error):
    """A piece was placed on a cell that already holds one."""

    def __init__(self, row: int, col: int, occupant):
        self.row = row
        self.col = col
        self.occupant = occupant
        super().__init__(f"Cell ({row}, {col}) is already occupied by {occupant.name}")


class ColumnFullError(Gravity4Error):
    """No landing row exists in the column under the current gravity."""

    def __init__(self, col: int):
        self.col = col
        super().__init__(f"Column {col} is full")
