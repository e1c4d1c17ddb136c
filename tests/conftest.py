"""Pytest configuration and shared fixtures."""

from typing import Any

import pytest

from plysearch.core.configs import SearchConfig
from plysearch.games import Node, TicTacToe
from plysearch.search import AlphaBetaEngine


class FirstMoveEngine:
    """Engine that always plays the first legal move."""

    name = "FirstMove"

    def select_move(self, position: Any) -> Any:
        moves = position.legal_moves()
        return moves[0] if moves else None

    def reset(self) -> None:
        pass


@pytest.fixture
def engine() -> AlphaBetaEngine:
    """Sequential engine with default settings."""
    return AlphaBetaEngine()


@pytest.fixture(params=["sequential", "thread", "process"])
def any_engine(request: pytest.FixtureRequest) -> AlphaBetaEngine:
    """Engine in each execution mode."""
    if request.param == "sequential":
        return AlphaBetaEngine(SearchConfig())
    return AlphaBetaEngine(SearchConfig(parallel=True, max_workers=2, executor=request.param))


@pytest.fixture
def first_move_engine() -> FirstMoveEngine:
    return FirstMoveEngine()


@pytest.fixture
def o_wins_in_one() -> TicTacToe:
    """O to move; square 7 completes the middle column, square 8 only draws."""
    return TicTacToe.from_string("XOX|OOX|X..")


@pytest.fixture
def o_must_block() -> TicTacToe:
    """O to move; X threatens the bottom row, only square 6 holds."""
    return TicTacToe.from_string("O..|...|.XX")


@pytest.fixture
def small_tree() -> Node:
    """Hand-built tree where the second root move is best.

    Root (True to move)
    ├── 0: False to move -> leaves 3, -2   => min = -2
    ├── 1: False to move -> leaves 5, 4    => min = 4
    └── 2: False to move -> leaves 4, 9    => min = 4 (tie, later)
    """
    return Node.root(
        Node(player=False, children=(Node(fitness=3), Node(fitness=-2))),
        Node(player=False, children=(Node(fitness=5), Node(fitness=4))),
        Node(player=False, children=(Node(fitness=4), Node(fitness=9))),
    )
