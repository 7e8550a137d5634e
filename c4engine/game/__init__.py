"""
c4engine.game - Core game mechanics for Connect Four

This package contains the Engine (board and game state) and, in
c4engine.game.rules, the turn-level wrappers built on it.
"""

from c4engine.game.engine import Engine, Move

__all__ = ['Engine', 'Move']
