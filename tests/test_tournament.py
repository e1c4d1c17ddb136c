"""Tests for the game runner."""

from typing import Any

import pytest

from plysearch.core.configs import SearchConfig
from plysearch.games import Flags, Mark, TicTacToe
from plysearch.search import HIGHEST, LOWEST, AlphaBetaEngine
from plysearch.tournament import GameConfig, GameRunner, GameTermination


class FailingEngine:
    """Engine that raises on every move."""

    name = "Failing"

    def select_move(self, position: Any) -> Any:
        raise RuntimeError("engine crashed")

    def reset(self) -> None:
        pass


class PassingEngine(FailingEngine):
    """Engine that never finds a move."""

    name = "Passing"

    def select_move(self, position: Any) -> Any:
        return None


@pytest.fixture
def solver() -> AlphaBetaEngine:
    """Engine that solves small games completely."""
    return AlphaBetaEngine(SearchConfig(default_time_limit=None))


class TestGameRunner:
    """Tests for GameRunner.play_game."""

    def test_perfect_tic_tac_toe_is_a_draw(self, solver: AlphaBetaEngine) -> None:
        """Test that self-play with perfect search draws."""
        record = GameRunner().play_game(solver, solver, TicTacToe())

        assert record.termination is GameTermination.NO_MOVES
        assert record.move_count == 9
        assert record.final_position.is_full()
        assert record.final_position.winner() is None
        assert record.score_a == 0

    def test_solver_beats_first_move_engine(self, solver: AlphaBetaEngine, first_move_engine) -> None:
        """Test that the solver wins 21 flags against a weak opponent."""
        record = GameRunner().play_game(solver, first_move_engine, Flags(21))

        assert record.termination is GameTermination.NO_MOVES
        assert record.final_position.winner() is True
        assert record.score_a is True

    def test_engine_b_plays_second(self, solver: AlphaBetaEngine, first_move_engine) -> None:
        """Test that engine A plays the side to move in the start position."""
        record = GameRunner().play_game(first_move_engine, solver, TicTacToe())

        # The first-move engine opens in the corner; the solver then never loses.
        assert record.moves[0] == 0
        assert record.final_position.winner() in (None, Mark.O)

    def test_max_moves(self, first_move_engine) -> None:
        """Test that long games are stopped."""
        record = GameRunner(GameConfig(max_moves=3)).play_game(
            first_move_engine, first_move_engine, Flags(21)
        )

        assert record.termination is GameTermination.MAX_MOVES
        assert record.moves == [1, 1, 1]
        assert record.final_position == Flags(18, player=False)
        assert record.score_a is False

    def test_engine_error_loses(self, first_move_engine) -> None:
        """Test that the engine that crashes loses the game."""
        record = GameRunner().play_game(first_move_engine, FailingEngine(), Flags(5))

        assert record.termination is GameTermination.ENGINE_ERROR
        assert record.moves == [1]
        assert record.score_a is HIGHEST

    def test_missing_move_loses(self) -> None:
        """Test that returning None in a live position counts as a loss."""
        record = GameRunner().play_game(PassingEngine(), PassingEngine(), TicTacToe())

        assert record.termination is GameTermination.ENGINE_ERROR
        assert record.moves == []
        assert record.score_a is LOWEST

    def test_invalid_config(self) -> None:
        """Test argument validation."""
        with pytest.raises(ValueError):
            GameConfig(max_moves=-1)
