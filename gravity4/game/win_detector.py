"""
win_detector.py - Four-in-a-row detection

local_win checks the lines through one cell, which is enough after a
normal drop. A gravity flip can create a line anywhere, so global_win scans
the whole board. When both players have a line after a flip, the owner of
the first winning cell in row-major order (rows ascending, then columns
ascending) is the winner.
"""

from typing import List, Optional, Tuple

from gravity4.debug import debug
from gravity4.exceptions import OutOfBoundsError
from gravity4.game.board import Board
from gravity4.utils import ROWS, COLS, CONNECT_N, DIRECTION_VECTORS, Player, is_valid_position

Position = Tuple[int, int]


def _run(board: Board, row: int, col: int, dr: int, dc: int, player: Player) -> List[Position]:
    """Contiguous ``player`` cells starting next to (row, col) along (dr, dc)."""
    positions = []
    r, c = row + dr, col + dc
    while is_valid_position(r, c) and board.grid[r, c] == player.value:
        positions.append((r, c))
        r += dr
        c += dc
    return positions


def _line_through(board: Board, row: int, col: int, player: Player) -> List[Position]:
    for dr, dc in DIRECTION_VECTORS.values():
        backward = _run(board, row, col, -dr, -dc, player)
        forward = _run(board, row, col, dr, dc, player)
        if len(backward) + 1 + len(forward) >= CONNECT_N:
            return list(reversed(backward)) + [(row, col)] + forward
    return []


def local_win(board: Board, row: int, col: int, player: Player) -> bool:
    """
    Check whether ``player`` has four in a row through (row, col).

    The origin counts as ``player`` whatever the grid holds there, so a
    hypothetical placement can be tested without writing it.

    Args:
        board: The board to inspect
        row: Row index of the just-placed piece
        col: Column index of the just-placed piece
        player: Owner of the piece

    Returns:
        True if any direction reaches CONNECT_N pieces
    """
    if not is_valid_position(row, col):
        raise OutOfBoundsError(row, col)
    if player == Player.EMPTY:
        return False

    for dr, dc in DIRECTION_VECTORS.values():
        count = 1 + len(_run(board, row, col, dr, dc, player)) + len(_run(board, row, col, -dr, -dc, player))
        if count >= CONNECT_N:
            debug.trace(f"{player.name} connects {count} through ({row}, {col}) along ({dr}, {dc})", "win")
            return True
    return False


def global_win(board: Board) -> Optional[Player]:
    """Return the owner of the first winning cell in row-major order, or None."""
    for row in range(ROWS):
        for col in range(COLS):
            owner = Player(int(board.grid[row, col]))
            if owner != Player.EMPTY and local_win(board, row, col, owner):
                debug.debug(f"Board scan found a win for {owner.name} at ({row}, {col})", "win")
                return owner
    return None


def get_winning_line(board: Board, row: int, col: int) -> List[Position]:
    """
    Positions of the first winning line through an occupied cell.

    Returns:
        List of (row, col) positions, or an empty list if there is no line
    """
    owner = board.get(row, col)
    if owner == Player.EMPTY:
        return []
    return _line_through(board, row, col, owner)


def find_winning_line(board: Board) -> Tuple[Optional[Player], List[Position]]:
    """Global scan that also returns the winning positions."""
    for row in range(ROWS):
        for col in range(COLS):
            line = get_winning_line(board, row, col)
            if line:
                return board.get(row, col), line
    return None, []
