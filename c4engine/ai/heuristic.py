"""
heuristic.py - One-ply heuristic opponent for Connect Four

HeuristicPlayer tries every open column, scores the position each drop would
leave, and picks the best one. A column that wins on the spot scores
WIN_SCORE; any other is scored by summing, over every occupied cell, the
weighted length of the run starting there along each axis.

The run count here goes in one direction only. That is not the same count
the engine's win check uses, and changing it would change which columns the
player prefers.
"""

from typing import Dict, Optional

from c4engine.debug import debug
from c4engine.game.engine import Engine
from c4engine.utils import (CONNECT_N, EMPTY, DIRECTION_VECTORS, OPPONENT_DISCOUNT,
                            RUN_WEIGHTS, WIN_SCORE, Side, count_run)


class HeuristicPlayer:
    """
    Chooses a column by looking one move ahead.

    The player holds no game state; every call works off the engine it is
    given and leaves that engine exactly as it found it.
    """

    def __init__(self, side: Optional[Side] = None):
        """
        Args:
            side: The side this player plays for. None means whichever side
                is to move when get_move is called.
        """
        self.side = side

    def _own_side(self, engine: Engine) -> Side:
        return self.side if self.side is not None else engine.current_side

    def get_move(self, engine: Engine) -> Optional[int]:
        """
        Get the best column for the side to move.

        Ties go to the lowest column index.

        Returns:
            The chosen column, or None if no column can be played
        """
        if engine.status.is_game_over():
            debug.debug("No move: game is over", "ai")
            return None

        scores = self.score_moves(engine)
        if not scores:
            debug.debug("No move: every column is full", "ai")
            return None

        best_score = float('-inf')
        best_column = None
        for column, score in scores.items():
            if score > best_score:
                best_score = score
                best_column = column

        debug.debug(f"Chose column {best_column} with score {best_score:.1f}", "ai")
        return best_column

    def score_moves(self, engine: Engine) -> Dict[int, float]:
        """
        Score every available column.

        Each candidate is dropped, scored and undone before the next one, so
        the engine ends up unchanged.

        Returns:
            Mapping of column to score, in ascending column order
        """
        own_side = self._own_side(engine)
        scores = {}
        if engine.status.is_game_over():
            return scores

        with debug.timed("score_moves", "ai"):
            for column in engine.available_columns():
                engine.drop(column)
                try:
                    if engine.check_win():
                        score = WIN_SCORE
                    else:
                        score = self.evaluate_board(engine, own_side)
                finally:
                    engine.undo()

                debug.trace(f"Column {column} scores {score:.1f}", "ai")
                scores[column] = score

        return scores

    def evaluate_board(self, engine: Engine, side: Optional[Side] = None) -> float:
        """
        Sum evaluate_position over every occupied cell.

        Args:
            engine: The position to evaluate
            side: Side to evaluate for (defaults to this player's side)
        """
        side = side if side is not None else self._own_side(engine)
        grid = engine.get_state()

        score = 0.0
        for row in range(engine.rows):
            for col in range(engine.cols):
                if grid[row, col] != EMPTY:
                    score += self._score_cell(grid, row, col, side)
        return score

    def evaluate_position(self, engine: Engine, row: int, col: int,
                          side: Optional[Side] = None) -> float:
        """
        Score the runs that start at an occupied cell.

        For each axis the run starting at (row, col) is counted in one
        direction, capped at CONNECT_N and weighted through RUN_WEIGHTS. Runs
        of ``side`` add their weight; the other side's runs subtract
        OPPONENT_DISCOUNT times theirs. An empty cell scores 0.
        """
        side = side if side is not None else self._own_side(engine)
        grid = engine.get_state()
        if grid[row, col] == EMPTY:
            return 0.0
        return self._score_cell(grid, row, col, side)

    @staticmethod
    def _score_cell(grid, row: int, col: int, side: Side) -> float:
        own = grid[row, col] == side.value
        score = 0.0
        for dr, dc in DIRECTION_VECTORS.values():
            count = min(count_run(grid, row, col, dr, dc), CONNECT_N)
            weight = RUN_WEIGHTS[count]
            if own:
                score += weight
            else:
                score -= weight * OPPONENT_DISCOUNT
        return score


def select_move(engine: Engine, side: Optional[Side] = None) -> Optional[int]:
    """Pick a column for ``side`` (default: the side to move), or None."""
    return HeuristicPlayer(side).get_move(engine)
