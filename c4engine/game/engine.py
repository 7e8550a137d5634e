"""
engine.py - Game-state engine for Connect Four

This module implements the Engine class: the board, the move history and the
game status. The engine deliberately keeps dropping a disc, checking for a
win or a draw, and passing the turn as separate calls. A full turn is::

    row = engine.drop(col)
    if not engine.check_win() and not engine.check_draw():
        engine.advance_side()

Keeping them apart lets the move selector drop, inspect and undo a disc
without touching whose turn it is.
"""

from typing import Iterable, List, NamedTuple, Optional, Tuple

import numpy as np

from c4engine.debug import debug
from c4engine.errors import (ColumnFullError, GameAlreadyOverError,
                             InvalidColumnError, NothingToUndoError)
from c4engine.utils import (ROWS, COLS, CONNECT_N, EMPTY, DIRECTION_VECTORS,
                            Side, GameStatus, line_through, render_board_ascii)


class Move(NamedTuple):
    """A resolved placement; ``row`` is where gravity put the disc."""
    row: int
    col: int
    side: Side


class Engine:
    """
    Connect Four game state.

    Row 0 is the top of the board and row ``rows - 1`` the bottom, so a disc
    dropped into an empty column lands on the highest row index.
    """

    def __init__(self, rows: int = ROWS, cols: int = COLS):
        if rows < CONNECT_N or cols < CONNECT_N:
            raise ValueError(f"Board must be at least {CONNECT_N}x{CONNECT_N}, got {rows}x{cols}")

        self._rows = rows
        self._cols = cols
        debug.debug(f"Initializing {rows}x{cols} engine", "engine")
        self.reset()

    def reset(self) -> None:
        """Restore the empty starting position."""
        debug.debug("Resetting engine", "engine")
        self._grid = np.zeros((self._rows, self._cols), dtype=np.int8)
        self._history: List[Move] = []
        self._current_side = Side.FIRST
        self._status = GameStatus.IN_PROGRESS
        self._last_move: Optional[Tuple[int, int]] = None

    @classmethod
    def from_moves(cls, columns: Iterable[int], rows: int = ROWS, cols: int = COLS) -> 'Engine':
        """
        Build an engine by playing ``columns`` with the standard turn order.

        Raises:
            EngineError: if any column cannot be played
        """
        engine = cls(rows, cols)
        for col in columns:
            engine.drop(col)
            if not engine.check_win() and not engine.check_draw():
                engine.advance_side()
        return engine

    def copy(self) -> 'Engine':
        """Return an independent engine in the same state."""
        new_engine = Engine.__new__(Engine)
        new_engine._rows = self._rows
        new_engine._cols = self._cols
        new_engine._grid = self._grid.copy()
        new_engine._history = list(self._history)
        new_engine._current_side = self._current_side
        new_engine._status = self._status
        new_engine._last_move = self._last_move
        return new_engine

    # State accessors

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def current_side(self) -> Side:
        return self._current_side

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def last_move(self) -> Optional[Tuple[int, int]]:
        return self._last_move

    @property
    def history(self) -> Tuple[Move, ...]:
        return tuple(self._history)

    @property
    def move_count(self) -> int:
        return len(self._history)

    def cell(self, row: int, col: int) -> Optional[Side]:
        """Return the side occupying (row, col), or None if it is empty."""
        value = self._grid[row, col]
        return None if value == EMPTY else Side(int(value))

    def get_state(self) -> np.ndarray:
        """Return a copy of the board grid."""
        return self._grid.copy()

    # Moves

    def _check_column(self, col) -> None:
        if isinstance(col, bool) or not isinstance(col, (int, np.integer)):
            raise InvalidColumnError(col, self._cols)
        if not 0 <= col < self._cols:
            raise InvalidColumnError(col, self._cols)

    def is_column_full(self, col: int) -> bool:
        self._check_column(col)
        return self._grid[0, col] != EMPTY

    def available_columns(self) -> List[int]:
        """Columns whose top cell is still empty, in ascending order."""
        return [col for col in range(self._cols) if self._grid[0, col] == EMPTY]

    def drop(self, col: int) -> int:
        """
        Drop a disc for the current side into ``col``.

        Neither the turn nor the game status changes; call check_win,
        check_draw and advance_side afterwards.

        Args:
            col: Column index (0-indexed)

        Returns:
            The row the disc landed on

        Raises:
            InvalidColumnError: col is outside [0, cols)
            GameAlreadyOverError: the game has been won or drawn
            ColumnFullError: the column has no empty cell
        """
        self._check_column(col)

        if self._status.is_game_over():
            debug.debug(f"Rejected drop in column {col}: game is over ({self._status.name})", "engine")
            raise GameAlreadyOverError(self._status, col)

        for row in range(self._rows - 1, -1, -1):
            if self._grid[row, col] == EMPTY:
                break
        else:
            debug.debug(f"Rejected drop in column {col}: column is full", "engine")
            raise ColumnFullError(col)

        col = int(col)
        self._grid[row, col] = self._current_side.value
        self._history.append(Move(row, col, self._current_side))
        self._last_move = (row, col)
        debug.trace(f"{self._current_side.name} dropped at ({row}, {col})", "engine")
        return row

    def undo(self) -> Move:
        """
        Take back the most recent move.

        The turn returns to the side that made it and the game is live again.

        Returns:
            The move that was removed

        Raises:
            NothingToUndoError: the history is empty
        """
        if not self._history:
            debug.debug("No moves to undo", "engine")
            raise NothingToUndoError()

        move = self._history.pop()
        self._grid[move.row, move.col] = EMPTY
        self._current_side = move.side
        self._status = GameStatus.IN_PROGRESS

        if self._history:
            top = self._history[-1]
            self._last_move = (top.row, top.col)
        else:
            self._last_move = None

        debug.trace(f"Undid {move.side.name} at ({move.row}, {move.col})", "engine")
        return move

    def advance_side(self) -> None:
        """Pass the turn to the other side while the game is in progress."""
        if self._status.is_game_over():
            return
        self._current_side = self._current_side.other()
        debug.trace(f"Turn passes to {self._current_side.name}", "engine")

    # Game status

    def check_win(self) -> bool:
        """
        Check whether the last move completed a line of CONNECT_N.

        Only the lines through the last-move cell are examined. On a win the
        status becomes a win for the current side.

        Returns:
            True if the last move wins, False otherwise
        """
        if self._last_move is None:
            return False

        row, col = self._last_move
        for dr, dc in DIRECTION_VECTORS.values():
            if len(line_through(self._grid, row, col, dr, dc)) >= CONNECT_N:
                if self._status == GameStatus.IN_PROGRESS:
                    self._status = GameStatus.won_by(self._current_side)
                    debug.info(f"{self._current_side.name} wins after move at {self._last_move}", "engine")
                return True

        return False

    def is_board_full(self) -> bool:
        return len(self._history) == self._rows * self._cols

    def check_draw(self) -> bool:
        """
        Mark the game drawn if the board is full and nobody has won.

        Call only after check_win() returned False.

        Returns:
            True if the game is drawn
        """
        if self._status == GameStatus.IN_PROGRESS and self.is_board_full():
            self._status = GameStatus.DRAW
            debug.info("Game ends in a draw", "engine")
        return self._status == GameStatus.DRAW

    def get_winning_line(self) -> List[Tuple[int, int]]:
        """
        Get the cells of the winning line if the game has been won.

        Returns:
            (row, col) cells of the line through the last move, or [] if
            there is no winner
        """
        if self._status.winner is None or self._last_move is None:
            return []

        row, col = self._last_move
        for dr, dc in DIRECTION_VECTORS.values():
            cells = line_through(self._grid, row, col, dr, dc)
            if len(cells) >= CONNECT_N:
                return sorted(cells)

        return []

    def render(self) -> str:
        return render_board_ascii(self._grid)

    def __str__(self) -> str:
        return self.render()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Engine):
            return NotImplemented
        return (self._rows == other._rows and self._cols == other._cols
                and np.array_equal(self._grid, other._grid)
                and self._history == other._history
                and self._current_side == other._current_side
                and self._status == other._status
                and self._last_move == other._last_move)

    __hash__ = None
