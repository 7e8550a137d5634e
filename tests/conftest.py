"""Shared fixtures for c4engine tests."""

import numpy as np
import pytest

from c4engine.debug import debug, DebugLevel
from c4engine.game.engine import Engine
from c4engine.utils import EMPTY, Side

# A complete alternating game that fills all 42 cells without four in a row.
# Final position (X = FIRST, O = SECOND, row 0 on top):
#   O X O X O X O
#   X O X O X O X
#   O X O X O X O
#   O X O X O X O
#   X O X O X O X
#   X O X O X O X
DRAW_SEQUENCE = [
    0, 1, 0, 1, 1, 0, 1, 0, 0, 1, 1, 0,
    2, 3, 2, 3, 3, 2, 3, 2, 2, 3, 3, 2,
    4, 5, 4, 5, 6, 4, 6, 4, 4, 6, 5, 6, 5, 5, 5, 4, 6, 6,
]


@pytest.fixture(autouse=True)
def quiet_debug():
    """Keep log output quiet and restore the shared debug settings afterwards."""
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[])
    yield
    debug.configure(level=DebugLevel.WARNING, enabled=True, log_file="", components=[])


@pytest.fixture
def engine():
    return Engine()


@pytest.fixture
def draw_moves():
    return list(DRAW_SEQUENCE)


def occupied(engine: Engine) -> int:
    return int(np.count_nonzero(engine.get_state() != EMPTY))


def drop_as(engine: Engine, side: Side, col: int) -> int:
    """Drop a disc for ``side`` regardless of whose turn it is."""
    if engine.current_side != side:
        engine.advance_side()
    return engine.drop(col)
