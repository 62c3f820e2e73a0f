"""
gravity.py - Restacking every piece when gravity flips

Each column keeps its stacking order: the piece nearest row 0 before the
flip is still the piece nearest row 0 afterwards. Only the edge the column
is packed against changes.
"""

from collections import defaultdict
from typing import Dict, List, Tuple

from gravity4.debug import debug
from gravity4.game.board import Board, Piece
from gravity4.utils import ROWS, Gravity


def restack_column(pieces: List[Piece], gravity: Gravity) -> List[Piece]:
    """
    Pack one column's pieces against the edge ``gravity`` points to.

    Under Gravity.DOWN the pieces are sorted by row descending and assigned
    rows ROWS-1, ROWS-2, ...; under Gravity.UP they are sorted ascending and
    assigned rows 0, 1, 2, ...
    """
    if gravity == Gravity.DOWN:
        ordered = sorted(pieces, key=lambda p: p.row, reverse=True)
        return [Piece(ROWS - 1 - i, p.col, p.owner) for i, p in enumerate(ordered)]

    ordered = sorted(pieces, key=lambda p: p.row)
    return [Piece(i, p.col, p.owner) for i, p in enumerate(ordered)]


def invert_gravity(board: Board, gravity: Gravity) -> Tuple[Gravity, Board, List[Piece]]:
    """
    Flip gravity and rebuild the board with every column restacked.

    The input board is left untouched. Deciding whether the new position is
    won belongs to the caller.

    Args:
        board: The current board
        gravity: The gravity in force before the flip

    Returns:
        (new_gravity, new_board, repositioned_pieces)
    """
    new_gravity = gravity.flipped()

    columns: Dict[int, List[Piece]] = defaultdict(list)
    for piece in board.pieces:
        columns[piece.col].append(piece)

    repositioned: List[Piece] = []
    for col in sorted(columns):
        repositioned.extend(restack_column(columns[col], new_gravity))

    new_board = Board.from_pieces(repositioned)
    debug.debug(f"Gravity {gravity} -> {new_gravity}, restacked {len(repositioned)} pieces "
                f"in {len(columns)} columns", "gravity")
    return new_gravity, new_board, repositioned
