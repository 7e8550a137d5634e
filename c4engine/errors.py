"""
errors.py - Exceptions raised by the c4engine Engine

Every engine operation either applies completely or raises one of these
with the board left untouched.
"""

from typing import Optional


class EngineError(Exception):
    """Base class for rejected engine operations."""


class InvalidColumnError(EngineError):
    """The column index lies outside the board."""

    def __init__(self, column, cols: int):
        self.column = column
        self.cols = cols
        super().__init__(f"Column {column!r} is out of range [0, {cols})")


class ColumnFullError(EngineError):
    """Every cell of the column is already occupied."""

    def __init__(self, column: int):
        self.column = column
        super().__init__(f"Column {column} is full")


class GameAlreadyOverError(EngineError):
    """A move was attempted after the game reached a terminal state."""

    def __init__(self, status, column: Optional[int] = None):
        self.status = status
        self.column = column
        super().__init__(f"Game is already over ({status.name})")


class NothingToUndoError(EngineError):
    """Undo was requested with an empty move history."""

    def __init__(self):
        super().__init__("No moves to undo")


class NotHumanTurnError(EngineError):
    """The human tried to move while the opponent is to play."""

    def __init__(self, side):
        self.side = side
        super().__init__(f"It is {side.label}'s turn")
