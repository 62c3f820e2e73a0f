"""
utils.py - Constants, enumerations and helpers shared by the game engine

This module provides the board dimensions, the tagged Player/Gravity/
GameStatus enumerations, the win-check direction vectors and a plain ASCII
renderer used by the board and the command-line interface.
"""

from enum import Enum, auto
from typing import Iterable, List, Optional, Tuple

import numpy as np

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win

# Column preference of the heuristic opponent, center first
CENTER_ORDER = [3, 2, 4, 1, 5, 0, 6]


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    ONE = 1    # First player
    TWO = 2    # Second player

    def other(self) -> 'Player':
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    @property
    def symbol(self) -> str:
        return {Player.EMPTY: ".", Player.ONE: "X", Player.TWO: "O"}[self]

    def __str__(self):
        return self.symbol


PLAYERS = (Player.ONE, Player.TWO)


class Gravity(Enum):
    """Direction in which unsupported pieces settle."""
    DOWN = 1   # toward increasing row index
    UP = -1    # toward row 0

    def flipped(self) -> 'Gravity':
        return Gravity.UP if self == Gravity.DOWN else Gravity.DOWN

    @property
    def arrow(self) -> str:
        return "v" if self == Gravity.DOWN else "^"

    def __str__(self):
        return "Down" if self == Gravity.DOWN else "Up"


class GameStatus(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        return self != GameStatus.IN_PROGRESS

    @property
    def winner(self) -> Optional[Player]:
        if self == GameStatus.PLAYER_ONE_WIN:
            return Player.ONE
        if self == GameStatus.PLAYER_TWO_WIN:
            return Player.TWO
        return None

    @classmethod
    def won_by(cls, player: Player) -> 'GameStatus':
        if player == Player.ONE:
            return cls.PLAYER_ONE_WIN
        if player == Player.TWO:
            return cls.PLAYER_TWO_WIN
        raise ValueError(f"{player!r} cannot win a game")


class Direction(Enum):
    """Line directions checked for four in a row."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL = auto()       # top-left to bottom-right
    ANTI_DIAGONAL = auto()  # top-right to bottom-left


# Direction vectors (row, col), in the order they are checked
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL: (1, 1),
    Direction.ANTI_DIAGONAL: (1, -1),
}


def is_valid_position(row: int, col: int) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index
        col: Column index

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < ROWS and 0 <= col < COLS


def is_valid_column(col: int) -> bool:
    return 0 <= col < COLS


def render_board_ascii(grid: np.ndarray, gravity: Optional[Gravity] = None,
                       highlight: Iterable[Tuple[int, int]] = ()) -> str:
    """
    Render the board as ASCII art.

    Args:
        grid: The ROWS x COLS grid of Player values
        gravity: If given, a line naming the gravity direction is appended
        highlight: Positions drawn as "*", e.g. a winning line

    Returns:
        ASCII representation of the board
    """
    marked = set(highlight)
    border = "+" + "-" * (COLS * 2 - 1) + "+"
    col_numbers = "|" + " ".join(str(i) for i in range(COLS)) + "|"

    lines: List[str] = []
    for row in range(ROWS):
        cells = []
        for col in range(COLS):
            if (row, col) in marked:
                cells.append("*")
            else:
                cells.append(Player(int(grid[row, col])).symbol)
        lines.append("|" + " ".join(cells) + "|")

    result = [border] + lines + [border, col_numbers]
    if gravity is not None:
        result.append(f" gravity: {gravity} {gravity.arrow}")
    return "\n".join(result)
