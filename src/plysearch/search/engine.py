"""Engine entry points.

``AlphaBetaEngine`` wires the iterative deepening driver, the budgets and the
(optional) parallel root dispatcher together behind four search calls:

- ``search_complete``: fixed depth, no budget
- ``search_time_bounded``: deepen until a wall-clock budget runs out
- ``search_step_bounded``: deepen until a node-visit budget runs out
- ``search_to_completion``: deepen until the game tree is solved
"""

from __future__ import annotations

from contextlib import nullcontext
from datetime import timedelta
from typing import Any, Protocol

from loguru import logger

from plysearch.core.configs.schema import SearchConfig
from plysearch.search.alpha_beta import search_root
from plysearch.search.budget import Budget, StepBudget, TimeBudget, UnlimitedBudget
from plysearch.search.deepening import IterativeDeepening, SearchResult
from plysearch.search.game import Game
from plysearch.search.parallel import RootDispatcher


class Engine(Protocol):
    """Protocol for engines that can select moves.

    Engines are stateless with respect to game history: they receive a
    position and return a move without keeping any search tree between calls.
    """

    @property
    def name(self) -> str:
        """Return the name of the engine for logging/display."""
        ...

    def select_move(self, position: Game) -> Any:
        """Select the best move in the given position.

        Args:
            position: Current position. The engine does not modify it.

        Returns:
            The selected move, or None if no legal moves exist.
        """
        ...

    def reset(self) -> None:
        """Reset any internal state.

        Most engines are stateless and this is a no-op.
        """
        ...


class AlphaBetaEngine:
    """Game-agnostic alpha-beta engine with iterative deepening.

    Works with any position implementing the ``Game`` protocol. Whether the
    root moves are searched sequentially or by a worker pool is controlled by
    ``SearchConfig.parallel``; both select the same move.
    """

    def __init__(self, config: SearchConfig | None = None) -> None:
        """Initialize the engine.

        Args:
            config: Search configuration. Uses defaults if None.
        """
        self.config = config or SearchConfig()
        self.last_result: SearchResult | None = None

    @property
    def name(self) -> str:
        """Return the engine name."""
        mode = f"parallel-{self.config.executor}" if self.config.parallel else "sequential"
        return f"AlphaBeta({mode})"

    def reset(self) -> None:
        """Forget the last search result."""
        self.last_result = None

    def search_complete(self, position: Game, depth: int) -> SearchResult:
        """Search exactly ``depth`` plies with no budget.

        Args:
            position: Root position.
            depth: Search depth in plies. Must be >= 1.

        Returns:
            SearchResult at ``depth``, or at a shallower depth if the game
            tree ends earlier.
        """
        if depth < 1:
            raise ValueError(f"Search depth must be >= 1, got {depth}")
        return self._run(position, UnlimitedBudget(), max_depth=depth, start_depth=depth)

    def search_time_bounded(self, position: Game, max_duration: float | timedelta) -> SearchResult:
        """Deepen until ``max_duration`` (seconds or timedelta) is used up."""
        budget = TimeBudget(max_duration, growth_factor=self.config.growth_factor)
        return self._run(position, budget, max_depth=self.config.max_depth)

    def search_step_bounded(self, position: Game, max_node_visits: int) -> SearchResult:
        """Deepen until ``max_node_visits`` node visits are used up."""
        return self._run(position, StepBudget(max_node_visits), max_depth=self.config.max_depth)

    def search_to_completion(self, position: Game) -> SearchResult:
        """Deepen until every line reaches a terminal position.

        Only suitable for games with small, finite trees.
        """
        return self._run(position, UnlimitedBudget(), max_depth=self.config.max_depth)

    def select_move(self, position: Game) -> Any:
        """Search with the configured default limit and return the best move.

        Returns:
            The selected move, or None if no legal moves exist.
        """
        if self.config.default_node_limit is not None:
            result = self.search_step_bounded(position, self.config.default_node_limit)
        elif self.config.default_time_limit is not None:
            result = self.search_time_bounded(position, self.config.default_time_limit)
        else:
            result = self.search_to_completion(position)
        return result.best_move

    def _run(
        self,
        position: Game,
        budget: Budget,
        max_depth: int | None = None,
        start_depth: int = 1,
    ) -> SearchResult:
        dispatcher = (
            RootDispatcher(
                max_workers=self.config.max_workers,
                executor=self.config.executor,
                share_bound=self.config.share_bound,
            )
            if self.config.parallel
            else None
        )

        with dispatcher if dispatcher is not None else nullcontext():
            driver = IterativeDeepening(
                root_search=dispatcher if dispatcher is not None else search_root,
                budget=budget,
                max_depth=max_depth,
                start_depth=start_depth,
            )
            result = driver.run(position)

        logger.debug(
            f"{self.name}: move={result.best_move!r} eval={result.evaluation!r} "
            f"depth={result.depth} nodes={result.nodes} time={result.elapsed:.3f}s"
            + (" (fallback)" if result.fallback else "")
        )
        self.last_result = result
        return result
