"""
c4engine.ai - Move selection for the computer-controlled side
"""

from c4engine.ai.heuristic import HeuristicPlayer, select_move

__all__ = ['HeuristicPlayer', 'select_move']
