"""
gravity4.game - Core game mechanics for gravity Connect Four

This package contains the board representation, landing and win rules,
the gravity inverter, the settle scheduler and the turn-controlling
game session.
"""

from gravity4.game.board import Board, Piece
from gravity4.game.gravity import invert_gravity
from gravity4.game.moves import landing_row, valid_columns
from gravity4.game.scheduler import SettleScheduler
from gravity4.game.win_detector import global_win, local_win

__all__ = ['Board', 'Piece', 'invert_gravity', 'landing_row', 'valid_columns',
           'SettleScheduler', 'global_win', 'local_win']
