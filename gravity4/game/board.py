"""
board.py - Board representation for gravity Connect Four

This module implements the Board class, which owns the 6x7 grid and the
list of committed pieces. The grid is the single source of truth for
occupancy; the piece list mirrors it so the gravity inverter can restack
every piece column by column.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

import numpy as np

from gravity4.debug import debug
from gravity4.exceptions import CellOccupiedError, OutOfBoundsError
from gravity4.utils import ROWS, COLS, Gravity, Player, is_valid_position, render_board_ascii

SYMBOL_TO_PLAYER = {".": Player.EMPTY, "X": Player.ONE, "O": Player.TWO}


@dataclass(frozen=True)
class Piece:
    """One committed placement."""
    row: int
    col: int
    owner: Player


class Board:
    """
    Represents the gravity Connect Four grid.

    The board knows nothing about turns or gravity; it only stores pieces
    and answers cell queries. Callers decide where a piece lands.
    """

    def __init__(self):
        """Initialize an empty board."""
        self.grid = np.zeros((ROWS, COLS), dtype=int)
        self.pieces: List[Piece] = []

    @classmethod
    def from_pieces(cls, pieces: Iterable[Piece]) -> 'Board':
        """
        Build a board from scratch out of a collection of pieces.

        Raises:
            OutOfBoundsError: if a piece lies outside the grid
            CellOccupiedError: if two pieces share a cell
        """
        board = cls()
        for piece in pieces:
            board.set(piece.row, piece.col, piece.owner)
        return board

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> 'Board':
        """
        Build a board from ROWS strings of COLS symbols, top row first.

        "." is empty, "X" is Player.ONE and "O" is Player.TWO. Pieces are
        registered in row-major order.
        """
        if len(rows) != ROWS or any(len(line) != COLS for line in rows):
            raise ValueError(f"Expected {ROWS} rows of {COLS} symbols")

        board = cls()
        for row, line in enumerate(rows):
            for col, symbol in enumerate(line):
                if symbol not in SYMBOL_TO_PLAYER:
                    raise ValueError(f"Unknown board symbol {symbol!r}")
                player = SYMBOL_TO_PLAYER[symbol]
                if player != Player.EMPTY:
                    board.set(row, col, player)
        return board

    def copy(self) -> 'Board':
        """Create an independent copy of the board."""
        debug.trace("Creating board copy", "board")
        new_board = Board()
        new_board.grid = self.grid.copy()
        new_board.pieces = list(self.pieces)
        return new_board

    def get(self, row: int, col: int) -> Player:
        """Return the cell value at (row, col)."""
        if not is_valid_position(row, col):
            raise OutOfBoundsError(row, col)
        return Player(int(self.grid[row, col]))

    def set(self, row: int, col: int, player: Player) -> Piece:
        """
        Place a piece for ``player`` at (row, col).

        Returns:
            The committed Piece

        Raises:
            OutOfBoundsError: if (row, col) is outside the grid
            CellOccupiedError: if the cell already holds a piece
        """
        if player == Player.EMPTY:
            raise ValueError("Cannot place an empty piece")
        if not is_valid_position(row, col):
            raise OutOfBoundsError(row, col)

        occupant = Player(int(self.grid[row, col]))
        if occupant != Player.EMPTY:
            raise CellOccupiedError(row, col, occupant)

        self.grid[row, col] = player.value
        piece = Piece(row, col, player)
        self.pieces.append(piece)
        debug.trace(f"Placed {player.name} at ({row}, {col})", "board")
        return piece

    def clear(self) -> None:
        """Reset every cell to empty and drop all pieces."""
        debug.debug("Clearing board", "board")
        self.grid.fill(Player.EMPTY.value)
        self.pieces = []

    def is_full(self) -> bool:
        return len(self.pieces) >= ROWS * COLS

    def piece_count(self) -> int:
        return len(self.pieces)

    def pieces_in_column(self, col: int) -> List[Piece]:
        """Pieces of one column, ordered by row ascending."""
        return sorted((p for p in self.pieces if p.col == col), key=lambda p: p.row)

    def get_state(self) -> np.ndarray:
        """Return a copy of the grid as a numpy array."""
        return self.grid.copy()

    def render(self, gravity: Optional[Gravity] = None, highlight=()) -> str:
        return render_board_ascii(self.grid, gravity, highlight)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Board(pieces={len(self.pieces)})"
