"""Tests for the iterative deepening driver."""

import pytest

from plysearch.games import Flags, Node, TicTacToe, random_tree
from plysearch.search.brute import best_moves
from plysearch.search.budget import StepBudget, TimeBudget, UnlimitedBudget
from plysearch.search.deepening import DeepeningState, IterativeDeepening
from plysearch.search.engine import AlphaBetaEngine


class TestIterativeDeepening:
    """Tests for IterativeDeepening.run."""

    def test_stops_at_max_depth(self) -> None:
        """Test that the depth cap is honoured."""
        driver = IterativeDeepening(max_depth=3)
        result = driver.run(TicTacToe())

        assert result.depth == 3
        assert result.exhausted_tree is False
        assert driver.state is DeepeningState.COMPLETED

    def test_stops_when_tree_is_exhausted(self, small_tree: Node) -> None:
        """Test that an exhausted tree ends the run without a depth cap."""
        result = IterativeDeepening().run(small_tree)

        assert result.depth == 2
        assert result.exhausted_tree is True
        assert result.best_move == 1
        assert result.evaluation == 4

    def test_root_without_moves(self) -> None:
        """Test that a terminal root yields no move and its own evaluation."""
        finished = Flags(0, player=False)
        result = IterativeDeepening().run(finished)

        assert result.best_move is None
        assert not result.has_move
        assert result.evaluation is False
        assert result.depth == 0
        assert result.nodes == 0

    @pytest.mark.parametrize("budget", [StepBudget(0), TimeBudget(0)])
    def test_fallback_when_no_depth_completes(self, budget) -> None:
        """Test that an empty budget still produces a legal move."""
        position = TicTacToe()
        result = IterativeDeepening(budget=budget).run(position)

        assert result.fallback is True
        assert result.depth == 1
        assert result.best_move in position.legal_moves()
        # Root plus its nine children.
        assert result.nodes == 10

    def test_fallback_when_first_depth_is_interrupted(self) -> None:
        """Test that a budget smaller than depth 1 falls back."""
        position = TicTacToe()
        result = IterativeDeepening(budget=StepBudget(4)).run(position)

        assert result.fallback is True
        assert result.best_move == 0
        assert result.nodes == 4 + 10

    @pytest.mark.parametrize("max_nodes", [0, 3, 10, 25, 60, 150, 400, 5000])
    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_result_matches_last_completed_depth(self, max_nodes: int, seed: int) -> None:
        """Test that an interrupted depth never leaks into the result."""
        tree = random_tree(seed, size=120)
        result = IterativeDeepening(budget=StepBudget(max_nodes)).run(tree)

        moves, value = best_moves(tree, result.depth)
        assert result.best_move == moves[0]
        assert result.evaluation == value

    def test_step_budget_is_never_exceeded(self) -> None:
        """Test that node visits stay within the step cap."""
        result = IterativeDeepening(budget=StepBudget(300)).run(TicTacToe())

        assert result.fallback is False
        assert result.nodes <= 300
        assert result.depth >= 2

    def test_deeper_search_with_more_budget(self) -> None:
        """Test that a larger budget reaches at least the same depth."""
        tree = random_tree(11, size=300)
        small = IterativeDeepening(budget=StepBudget(100)).run(tree)
        large = IterativeDeepening(budget=StepBudget(2000)).run(tree)

        assert large.depth >= small.depth

    def test_time_budget_returns_promptly(self) -> None:
        """Test that a time-bounded search returns close to the deadline."""
        result = IterativeDeepening(budget=TimeBudget(0.2)).run(TicTacToe())

        assert result.best_move is not None
        assert result.elapsed < 1.0

    def test_start_depth(self) -> None:
        """Test that searching can start at a given depth."""
        result = IterativeDeepening(budget=UnlimitedBudget(), max_depth=2, start_depth=2).run(TicTacToe())
        assert result.depth == 2

    def test_invalid_depths(self) -> None:
        """Test argument validation."""
        with pytest.raises(ValueError):
            IterativeDeepening(start_depth=0)
        with pytest.raises(ValueError):
            IterativeDeepening(max_depth=2, start_depth=3)


class TestSearchToCompletion:
    """Solving whole game trees."""

    @pytest.mark.parametrize("seed", range(10))
    def test_solves_random_trees(self, seed: int) -> None:
        """Test that the solved value matches a full-depth minimax."""
        tree = random_tree(seed, size=100)
        result = AlphaBetaEngine().search_to_completion(tree)

        moves, value = best_moves(tree, tree.size())
        assert result.exhausted_tree is True
        assert result.evaluation == value
        assert result.best_move == moves[0]

    @pytest.mark.parametrize("flags,move", [(5, 1), (6, 2), (10, 2), (11, 3)])
    def test_flags_winning_moves(self, flags: int, move: int) -> None:
        """Test that the first player takes the pile to a multiple of four."""
        result = AlphaBetaEngine().search_to_completion(Flags(flags))

        assert result.best_move == move
        assert result.evaluation is True

    def test_flags_lost_position(self) -> None:
        """Test that a lost pile returns the first move with a losing value."""
        result = AlphaBetaEngine().search_to_completion(Flags(8))

        assert result.best_move == 1
        assert result.evaluation is False
        assert result.exhausted_tree is True
