"""Unit tests for gravity4/game/gravity.py"""

from gravity4.game.board import Piece
from gravity4.game.gravity import invert_gravity, restack_column
from gravity4.game.win_detector import global_win
from gravity4.utils import Gravity, Player


def column_from_top(board, col):
    return [board.get(row, col) for row in range(6)]


def test_stack_moves_to_top_edge(board):
    for row in (5, 4, 3):
        board.set(row, 0, Player.ONE)

    gravity, new_board, pieces = invert_gravity(board, Gravity.DOWN)

    assert gravity == Gravity.UP
    assert sorted(p.row for p in pieces) == [0, 1, 2]
    assert column_from_top(new_board, 0)[:3] == [Player.ONE] * 3
    assert column_from_top(new_board, 0)[3:] == [Player.EMPTY] * 3


def test_stacking_order_is_preserved(board):
    # Bottom to top: X, X, O. The O nearest row 0 stays nearest row 0.
    board.set(5, 0, Player.ONE)
    board.set(4, 0, Player.ONE)
    board.set(3, 0, Player.TWO)

    _, up_board, _ = invert_gravity(board, Gravity.DOWN)

    assert column_from_top(up_board, 0) == [Player.TWO, Player.ONE, Player.ONE,
                                            Player.EMPTY, Player.EMPTY, Player.EMPTY]


def test_up_to_down_packs_against_last_row(board):
    board.set(0, 6, Player.TWO)
    board.set(1, 6, Player.ONE)

    gravity, down_board, _ = invert_gravity(board, Gravity.UP)

    assert gravity == Gravity.DOWN
    assert down_board.get(4, 6) == Player.TWO
    assert down_board.get(5, 6) == Player.ONE
    assert down_board.piece_count() == 2


def test_double_inversion_restores_every_piece(board_from_rows):
    board = board_from_rows([
        ".......",
        ".......",
        "...X...",
        "..OO...",
        "X.XOO..",
        "OXXOXO.",
    ])

    gravity, flipped, _ = invert_gravity(board, Gravity.DOWN)
    gravity, restored, _ = invert_gravity(flipped, gravity)

    assert gravity == Gravity.DOWN
    assert set(restored.pieces) == set(board.pieces)
    assert (restored.get_state() == board.get_state()).all()


def test_input_board_is_untouched(board):
    board.set(5, 2, Player.ONE)
    before = board.get_state()

    _, new_board, _ = invert_gravity(board, Gravity.DOWN)

    assert (board.get_state() == before).all()
    assert board.pieces == [Piece(5, 2, Player.ONE)]
    assert new_board is not board


def test_empty_board(board):
    gravity, new_board, pieces = invert_gravity(board, Gravity.UP)

    assert gravity == Gravity.DOWN
    assert pieces == []
    assert new_board.piece_count() == 0


def test_single_piece_moves_to_new_edge(board):
    board.set(5, 4, Player.TWO)

    _, new_board, pieces = invert_gravity(board, Gravity.DOWN)

    assert pieces == [Piece(0, 4, Player.TWO)]
    assert new_board.get(0, 4) == Player.TWO


def test_pieces_match_grid_after_inversion(board_from_rows):
    board = board_from_rows([
        ".......", ".......", ".......", "O......", "X..O..X", "XO.XO.O",
    ])

    _, new_board, pieces = invert_gravity(board, Gravity.DOWN)

    assert len(pieces) == board.piece_count() == new_board.piece_count()
    for piece in pieces:
        assert new_board.get(piece.row, piece.col) == piece.owner


def test_restack_column_orders():
    pieces = [Piece(3, 1, Player.ONE), Piece(5, 1, Player.TWO), Piece(4, 1, Player.ONE)]

    assert restack_column(pieces, Gravity.UP) == [
        Piece(0, 1, Player.ONE), Piece(1, 1, Player.ONE), Piece(2, 1, Player.TWO)]
    assert restack_column(pieces, Gravity.DOWN) == [
        Piece(5, 1, Player.TWO), Piece(4, 1, Player.ONE), Piece(3, 1, Player.ONE)]


def test_flip_can_complete_a_line(board_from_rows):
    board = board_from_rows([
        ".......", ".......", ".......", ".......", "...X...", "XXXO...",
    ])
    assert global_win(board) is None

    _, flipped, _ = invert_gravity(board, Gravity.DOWN)

    assert [flipped.get(0, c) for c in range(4)] == [Player.ONE] * 4
    assert flipped.get(1, 3) == Player.TWO
    assert global_win(flipped) == Player.ONE
