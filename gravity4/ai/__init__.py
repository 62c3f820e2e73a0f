"""
gravity4.ai - Automated opponents for gravity Connect Four
"""

from gravity4.ai.heuristic import HeuristicPlayer, RandomPlayer

__all__ = ['HeuristicPlayer', 'RandomPlayer']
