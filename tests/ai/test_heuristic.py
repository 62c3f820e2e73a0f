"""Unit tests for gravity4/ai/heuristic.py"""

import random

import pytest

from gravity4.ai import HeuristicPlayer, RandomPlayer
from gravity4.utils import Gravity, Player

EMPTY_ROW = "......."


def quiet_player(player=Player.TWO, rng=None):
    return HeuristicPlayer(player, random_rate=0.0, rng=rng or random.Random(0))


def test_takes_immediate_win(board_from_rows):
    board = board_from_rows([EMPTY_ROW] * 5 + ["OOO.XX."])

    assert quiet_player().choose_column(board, Gravity.DOWN) == 3


def test_blocks_opponent_win(board_from_rows):
    board = board_from_rows([EMPTY_ROW] * 5 + ["OOO.X.."])

    assert quiet_player(Player.ONE).choose_column(board, Gravity.DOWN) == 3


def test_prefers_win_over_block(board_from_rows):
    board = board_from_rows([EMPTY_ROW] * 3 + ["......O", "......O", "XXX...O"])

    assert quiet_player().choose_column(board, Gravity.DOWN) == 6


def test_lowest_winning_column_first(board_from_rows):
    board = board_from_rows([EMPTY_ROW] * 3 + [".O...O.", ".O...O.", ".O...O."])

    assert quiet_player().choose_column(board, Gravity.DOWN) == 1


def test_respects_current_gravity(board_from_rows):
    board = board_from_rows(["....O..", "....O..", "....O.."] + [EMPTY_ROW] * 3)
    player = quiet_player()

    assert player.choose_column(board, Gravity.UP) == 4
    assert player.choose_column(board, Gravity.DOWN) == 3


def test_center_order(board):
    player = quiet_player()

    assert player.choose_column(board, Gravity.DOWN) == 3
    assert player.choose_column(board, Gravity.DOWN, [0, 6, 5]) == 5
    assert player.choose_column(board, Gravity.DOWN, [6]) == 6


def test_random_exploration(board, fixed_random):
    exploring = HeuristicPlayer(Player.TWO, random_rate=0.2, rng=fixed_random(0.0))
    settled = HeuristicPlayer(Player.TWO, random_rate=0.2, rng=fixed_random(0.5))

    assert exploring.choose_column(board, Gravity.DOWN) == 6
    assert settled.choose_column(board, Gravity.DOWN) == 3


def test_exploration_never_skips_a_win(board_from_rows, fixed_random):
    board = board_from_rows([EMPTY_ROW] * 5 + ["OOO...."])
    player = HeuristicPlayer(Player.TWO, random_rate=1.0, rng=fixed_random(0.0))

    assert player.choose_column(board, Gravity.DOWN) == 3


def test_board_is_not_modified(board_from_rows):
    board = board_from_rows([EMPTY_ROW] * 4 + ["X......", "XOO.O.."])
    before = board.get_state()
    pieces = list(board.pieces)

    quiet_player().choose_column(board, Gravity.DOWN)
    quiet_player(Player.ONE).choose_column(board, Gravity.UP)

    assert (board.get_state() == before).all()
    assert board.pieces == pieces


def test_no_columns(board):
    with pytest.raises(ValueError):
        quiet_player().choose_column(board, Gravity.DOWN, [])
    with pytest.raises(ValueError):
        RandomPlayer().choose_column(board, Gravity.DOWN, [])


def test_needs_a_real_side():
    with pytest.raises(ValueError):
        HeuristicPlayer(Player.EMPTY)


def test_random_player_picks_valid_column(board):
    player = RandomPlayer(Player.ONE, rng=random.Random(42))

    picks = {player.choose_column(board, Gravity.DOWN, [1, 4]) for _ in range(20)}

    assert picks <= {1, 4}
    assert player.choose_column(board, Gravity.UP) in range(7)
