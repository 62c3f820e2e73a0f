"""
gravity4 - Connect Four with invertible gravity

This package provides the rules engine for a two-player Connect Four
variant whose gravity can flip between down and up: board model, landing
rules, win detection, gravity restacking, a turn-controlling game session,
a heuristic opponent, a Gymnasium environment and a terminal interface.
"""

# Version number
__version__ = '0.1.0'
