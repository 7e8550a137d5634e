"""
c4engine - Connect Four game engine with a heuristic opponent

This package provides the game-state engine (board, drops, undo, win and
draw detection), a one-ply heuristic move selector, a terminal interface
and a Gymnasium environment.
"""

# Version number
__version__ = '0.1.0'
