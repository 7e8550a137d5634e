"""
utils.py - Constants, enumerations and helpers shared across c4engine

This module holds the board dimensions, the heuristic scoring tables and the
Side / GameStatus enumerations used by the engine, the move selector and the
interfaces.
"""

from enum import Enum, auto
from typing import Dict, List, Optional, Tuple

import numpy as np

# Board constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of discs in a row to win
EMPTY = 0  # Grid value of an unoccupied cell

# Move selector constants
WIN_SCORE = 1000.0
RUN_WEIGHTS = (0, 1, 10, 100, 1000)  # indexed by run length, capped at CONNECT_N
OPPONENT_DISCOUNT = 0.8

# Presentation constants
AI_THINK_DELAY = 0.5  # seconds


class Side(Enum):
    """The two competing sides. The value is what the board grid stores."""
    FIRST = 1
    SECOND = 2

    def other(self) -> 'Side':
        return Side.SECOND if self == Side.FIRST else Side.FIRST

    @property
    def label(self) -> str:
        """Colour name used by the presentation layer."""
        return "red" if self == Side.FIRST else "yellow"

    @property
    def symbol(self) -> str:
        return "X" if self == Side.FIRST else "O"

    def __str__(self):
        return self.symbol


class GameStatus(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    FIRST_WIN = auto()
    SECOND_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        return self != GameStatus.IN_PROGRESS

    @property
    def winner(self) -> Optional[Side]:
        if self == GameStatus.FIRST_WIN:
            return Side.FIRST
        if self == GameStatus.SECOND_WIN:
            return Side.SECOND
        return None

    @staticmethod
    def won_by(side: Side) -> 'GameStatus':
        return GameStatus.FIRST_WIN if side == Side.FIRST else GameStatus.SECOND_WIN


class Direction(Enum):
    """The four axes a run can lie on."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN = auto()  # top-left to bottom-right
    DIAGONAL_UP = auto()  # top-right to bottom-left


# Direction vectors (row, col) for each axis
DIRECTION_VECTORS: Dict[Direction, Tuple[int, int]] = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN: (1, 1),
    Direction.DIAGONAL_UP: (1, -1),
}


def is_valid_position(grid: np.ndarray, row: int, col: int) -> bool:
    """Check if (row, col) lies inside the grid."""
    rows, cols = grid.shape
    return 0 <= row < rows and 0 <= col < cols


def count_run(grid: np.ndarray, row: int, col: int, dr: int, dc: int) -> int:
    """
    Count contiguous same-side discs starting at (row, col) in one direction.

    The starting cell counts as 1; cells are matched against its value.

    Args:
        grid: The board grid
        row: Starting row
        col: Starting column
        dr: Row step
        dc: Column step

    Returns:
        Run length including the starting cell
    """
    value = grid[row, col]
    count = 1
    r, c = row + dr, col + dc
    while is_valid_position(grid, r, c) and grid[r, c] == value:
        count += 1
        r += dr
        c += dc
    return count


def line_through(grid: np.ndarray, row: int, col: int, dr: int, dc: int) -> List[Tuple[int, int]]:
    """
    Collect the contiguous same-side cells through (row, col) along one axis,
    extending in both the positive and the negative direction.

    Returns:
        Cells of the line, starting with (row, col)
    """
    value = grid[row, col]
    cells = [(row, col)]
    for step in (1, -1):
        r, c = row + step * dr, col + step * dc
        while is_valid_position(grid, r, c) and grid[r, c] == value:
            cells.append((r, c))
            r += step * dr
            c += step * dc
    return cells


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render the board as ASCII art, row 0 at the top.

    Args:
        grid: The board grid

    Returns:
        ASCII representation of the board with column numbers underneath
    """
    rows, cols = grid.shape
    border = "|" + "-" * (cols * 2 - 1) + "|"
    result = [border]

    for row in range(rows):
        cells = []
        for col in range(cols):
            value = grid[row, col]
            cells.append(" " if value == EMPTY else Side(int(value)).symbol)
        result.append("|" + " ".join(cells) + "|")

    result.append(border)
    result.append("|" + " ".join(str(i % 10) for i in range(cols)) + "|")

    return "\n".join(result)


def parse_moves(text: str) -> List[int]:
    """
    Parse a comma-separated column sequence such as "3,4,3".

    Raises:
        ValueError: if an entry is not an integer
    """
    text = text.strip()
    if not text:
        return []
    return [int(part) for part in text.split(',')]
