"""Tests for the heuristic move selector."""

import numpy as np
import pytest

from c4engine.ai.heuristic import HeuristicPlayer, select_move
from c4engine.game.engine import Engine
from c4engine.game.rules import play_turn
from c4engine.utils import WIN_SCORE, GameStatus, Side

from conftest import drop_as


def test_empty_board_ties_go_to_first_column(engine):
    scores = HeuristicPlayer().score_moves(engine)

    # A lone disc scores 1 on each of the four axes wherever it lands
    assert set(scores.values()) == {4.0}
    assert select_move(engine) == 0


def test_select_move_takes_immediate_win():
    # SECOND holds row 5 cols 0-2; FIRST has a harmless block on the right
    engine = Engine.from_moves([6, 0, 6, 1, 5, 2, 5])
    assert engine.current_side == Side.SECOND

    column = select_move(engine)

    assert column == 3
    engine.drop(column)
    assert engine.check_win()


def test_winning_column_scores_win_score():
    engine = Engine.from_moves([6, 0, 6, 1, 5, 2, 5])

    scores = HeuristicPlayer(Side.SECOND).score_moves(engine)

    assert scores[3] == WIN_SCORE
    assert all(score < WIN_SCORE for col, score in scores.items() if col != 3)


def test_select_move_leaves_engine_unchanged():
    engine = Engine.from_moves([3, 4, 3, 2, 5])
    before = engine.copy()

    first = select_move(engine)
    assert engine == before
    second = select_move(engine)

    assert first == second
    assert engine == before
    assert np.array_equal(engine.get_state(), before.get_state())
    assert engine.last_move == before.last_move


def test_select_move_restores_state_after_trying_a_win():
    engine = Engine.from_moves([6, 0, 6, 1, 5, 2, 5])
    before = engine.copy()

    select_move(engine)

    assert engine.status == GameStatus.IN_PROGRESS
    assert engine == before


def test_no_move_when_board_is_full(draw_moves):
    engine = Engine.from_moves(draw_moves)

    assert select_move(engine) is None
    assert HeuristicPlayer().score_moves(engine) == {}


def test_no_move_when_game_is_won():
    engine = Engine.from_moves([3, 4, 3, 4, 3, 4, 3])

    assert select_move(engine) is None


def test_only_open_columns_are_scored(engine):
    for _ in range(6):
        play_turn(engine, 2)

    scores = HeuristicPlayer().score_moves(engine)

    assert list(scores) == [0, 1, 3, 4, 5, 6]


def test_position_run_counted_in_one_direction(engine):
    drop_as(engine, Side.FIRST, 0)
    drop_as(engine, Side.SECOND, 0)
    drop_as(engine, Side.FIRST, 1)
    drop_as(engine, Side.SECOND, 1)
    drop_as(engine, Side.FIRST, 2)
    player = HeuristicPlayer(Side.FIRST)

    # (5, 0) starts a run of three to the right: 100 + 1 + 1 + 1
    assert player.evaluate_position(engine, 5, 0) == pytest.approx(103.0)
    # (5, 2) ends that run, so looking right it only sees itself
    assert player.evaluate_position(engine, 5, 2) == pytest.approx(4.0)


def test_opponent_runs_are_discounted(engine):
    drop_as(engine, Side.FIRST, 0)
    drop_as(engine, Side.SECOND, 0)
    drop_as(engine, Side.FIRST, 1)
    drop_as(engine, Side.SECOND, 1)
    player = HeuristicPlayer(Side.FIRST)

    # SECOND's (4, 0): horizontal run of 2 (10) plus three single-cell axes
    assert player.evaluate_position(engine, 4, 0) == pytest.approx(-13 * 0.8)
    # Same cell from SECOND's own point of view
    assert player.evaluate_position(engine, 4, 0, Side.SECOND) == pytest.approx(13.0)


def test_empty_cell_scores_zero(engine):
    assert HeuristicPlayer(Side.FIRST).evaluate_position(engine, 0, 0) == 0.0


def test_board_score_is_sum_of_positions():
    engine = Engine.from_moves([3, 3, 4, 2, 5, 4, 1])
    player = HeuristicPlayer(Side.SECOND)

    total = sum(player.evaluate_position(engine, row, col)
                for row in range(engine.rows)
                for col in range(engine.cols)
                if engine.cell(row, col) is not None)

    assert player.evaluate_board(engine) == pytest.approx(total)
    assert isinstance(player.evaluate_board(engine), float)


def test_runs_are_capped_at_four(engine):
    for col in range(5):
        drop_as(engine, Side.FIRST, col)
    player = HeuristicPlayer(Side.FIRST)

    # A run of five starting here still weighs as four
    assert player.evaluate_position(engine, 5, 0) == pytest.approx(1000 + 3)


def test_side_defaults_to_side_to_move():
    engine = Engine.from_moves([3])
    player = HeuristicPlayer()

    # SECOND to move, so FIRST's disc counts against
    assert player.evaluate_board(engine) == pytest.approx(-4 * 0.8)


def test_heuristic_self_play_finishes():
    engine = Engine()
    player = HeuristicPlayer()

    while not engine.status.is_game_over():
        column = player.get_move(engine)
        assert column in engine.available_columns()
        play_turn(engine, column)

    assert engine.move_count <= engine.rows * engine.cols
