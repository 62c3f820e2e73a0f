"""
heuristic.py - Rule-based opponents for gravity Connect Four

HeuristicPlayer picks, in priority order:
1. a column that wins immediately,
2. a column that blocks the opponent's immediate win,
3. a center-weighted column, with a small chance of a random one.

Placements are simulated on scratch copies of the board, so the real board
is never touched while the player is thinking.
"""

import random
from typing import Optional, Sequence

from gravity4.config import AI_RANDOM_RATE
from gravity4.debug import debug
from gravity4.game.board import Board
from gravity4.game.moves import landing_row, valid_columns as open_columns
from gravity4.game.win_detector import local_win
from gravity4.utils import CENTER_ORDER, Gravity, Player


class RandomPlayer:
    """Picks a uniformly random valid column."""

    def __init__(self, player: Player = Player.TWO, rng: Optional[random.Random] = None):
        self.player = player
        self.rng = rng or random.Random()

    def choose_column(self, board: Board, gravity: Gravity,
                      valid_columns: Optional[Sequence[int]] = None) -> int:
        columns = list(valid_columns) if valid_columns is not None else open_columns(board, gravity)
        if not columns:
            raise ValueError("No valid columns to choose from")
        return self.rng.choice(columns)


class HeuristicPlayer:
    """
    Win-block-center opponent.

    Args:
        player: The side this player moves for
        random_rate: Probability of exploring a random column when there is
            nothing to win or block
        rng: Random source, injectable for reproducible games
    """

    def __init__(self, player: Player = Player.TWO, random_rate: float = AI_RANDOM_RATE,
                 rng: Optional[random.Random] = None):
        if player == Player.EMPTY:
            raise ValueError("HeuristicPlayer needs a real side")
        self.player = player
        self.random_rate = random_rate
        self.rng = rng or random.Random()

    def _wins_at(self, board: Board, column: int, gravity: Gravity, player: Player) -> bool:
        row = landing_row(board, column, gravity)
        if row is None:
            return False
        scratch = board.copy()
        scratch.set(row, column, player)
        return local_win(scratch, row, column, player)

    def find_winning_column(self, board: Board, gravity: Gravity,
                            columns: Sequence[int], player: Player) -> Optional[int]:
        """First column, ascending, where ``player`` would complete four in a row."""
        for column in sorted(columns):
            if self._wins_at(board, column, gravity, player):
                return column
        return None

    def choose_column(self, board: Board, gravity: Gravity,
                      valid_columns: Optional[Sequence[int]] = None) -> int:
        """
        Choose the column to play.

        Args:
            board: Current board (not modified)
            gravity: Current gravity direction
            valid_columns: Columns that still have a landing row; computed
                from the board when omitted

        Returns:
            The chosen column index
        """
        columns = list(valid_columns) if valid_columns is not None else open_columns(board, gravity)
        if not columns:
            raise ValueError("No valid columns to choose from")

        column = self.find_winning_column(board, gravity, columns, self.player)
        if column is not None:
            debug.debug(f"{self.player.name} takes the win in column {column}", "ai")
            return column

        column = self.find_winning_column(board, gravity, columns, self.player.other())
        if column is not None:
            debug.debug(f"{self.player.name} blocks column {column}", "ai")
            return column

        if self.rng.random() < self.random_rate:
            column = self.rng.choice(columns)
            debug.debug(f"{self.player.name} explores column {column}", "ai")
            return column

        for column in CENTER_ORDER:
            if column in columns:
                debug.debug(f"{self.player.name} prefers center column {column}", "ai")
                return column

        # Only reachable if valid_columns holds indices outside CENTER_ORDER
        return self.rng.choice(columns)
