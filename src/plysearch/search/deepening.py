"""Iterative deepening driver.

Runs the root search at depth 1, 2, 3, ... and keeps the result of the last
depth that finished completely. A depth that is interrupted by the budget is
discarded wholesale; its partial values are never reported.

The same driver serves complete search (a single fixed depth, unlimited budget)
and partial search (deepen until the budget, the depth cap, or the game tree
runs out).
"""

from __future__ import annotations

import time
from collections.abc import Callable, Hashable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from loguru import logger

from plysearch.search.alpha_beta import RootOutcome, search_root
from plysearch.search.budget import Budget, UnlimitedBudget
from plysearch.search.errors import SearchInterrupted
from plysearch.search.game import Game, expand

RootSearch = Callable[[Sequence[tuple[Any, Game]], int, Hashable, Budget], RootOutcome]


class DeepeningState(Enum):
    """Lifecycle of one driver run."""

    NOT_STARTED = "not_started"
    SEARCHING = "searching"
    COMPLETED = "completed"


@dataclass(frozen=True)
class SearchResult:
    """Result produced by one top-level search call.

    Attributes:
        best_move: Selected move, or None if the root has no legal moves.
        evaluation: Value of ``best_move`` for the root player. For a root
            without moves, the static evaluation of the root itself.
        depth: Deepest depth that completed without interruption.
        nodes: Node visits made during the whole call.
        elapsed: Wall-clock seconds spent in the call.
        exhausted_tree: True if the last completed depth reached every
            terminal position, i.e. the value is exact for the whole game.
        fallback: True if no depth completed within the budget and the move
            comes from the uninterrupted single-ply fallback.
    """

    best_move: Any
    evaluation: Any
    depth: int
    nodes: int
    elapsed: float
    exhausted_tree: bool = False
    fallback: bool = False

    @property
    def has_move(self) -> bool:
        """Whether a move is available."""
        return self.best_move is not None


class IterativeDeepening:
    """Deepen a root search until the budget says stop.

    Args:
        root_search: Callable searching the root children at a given depth;
            either ``search_root`` or an open ``RootDispatcher``.
        budget: Budget for the whole call.
        max_depth: Deepest depth to try. None means unbounded.
        start_depth: First depth to search. Complete search sets this equal
            to ``max_depth``.
    """

    def __init__(
        self,
        root_search: RootSearch = search_root,
        budget: Budget | None = None,
        max_depth: int | None = None,
        start_depth: int = 1,
    ) -> None:
        if start_depth < 1:
            raise ValueError(f"start_depth must be >= 1, got {start_depth}")
        if max_depth is not None and max_depth < start_depth:
            raise ValueError(f"max_depth ({max_depth}) must be >= start_depth ({start_depth})")

        self.root_search = root_search
        self.budget = budget or UnlimitedBudget()
        self.max_depth = max_depth
        self.start_depth = start_depth
        self.state = DeepeningState.NOT_STARTED
        self.current_depth = 0

    def run(self, position: Game) -> SearchResult:
        """Search ``position`` and return the best fully searched move."""
        start = time.perf_counter()
        perspective = position.active_player()
        children = expand(position)

        if not children:
            self.state = DeepeningState.COMPLETED
            logger.debug("Root position has no legal moves")
            return SearchResult(
                best_move=None,
                evaluation=position.evaluate(perspective),
                depth=0,
                nodes=self.budget.nodes,
                elapsed=time.perf_counter() - start,
                exhausted_tree=True,
            )

        best: RootOutcome | None = None
        completed_depth = 0
        depth = self.start_depth
        proceed = self.budget.has_remaining()

        while proceed:
            self.state = DeepeningState.SEARCHING
            self.current_depth = depth
            depth_start = time.perf_counter()
            try:
                outcome = self.root_search(children, depth, perspective, self.budget)
            except SearchInterrupted as e:
                logger.debug(f"Depth {depth} interrupted ({e}); keeping depth {completed_depth}")
                break

            depth_elapsed = time.perf_counter() - depth_start
            best = outcome
            completed_depth = depth
            logger.debug(
                f"Depth {depth} completed: move={outcome.move!r} eval={outcome.evaluation!r} "
                f"nodes={self.budget.nodes} time={depth_elapsed:.4f}s"
            )

            if not outcome.depth_limited:
                logger.debug(f"Game tree exhausted at depth {depth}")
                break
            if self.max_depth is not None and depth >= self.max_depth:
                break
            proceed = self.budget.should_continue_deepening(depth_elapsed)
            depth += 1

        self.state = DeepeningState.COMPLETED

        if best is None:
            return self._fallback(children, perspective, start)

        return SearchResult(
            best_move=best.move,
            evaluation=best.evaluation,
            depth=completed_depth,
            nodes=self.budget.nodes,
            elapsed=time.perf_counter() - start,
            exhausted_tree=not best.depth_limited,
        )

    def _fallback(
        self,
        children: Sequence[tuple[Any, Game]],
        perspective: Hashable,
        start: float,
    ) -> SearchResult:
        """Single-ply search without interruption when no depth completed."""
        logger.info("No depth completed within budget; using single-ply fallback")
        fallback_budget = UnlimitedBudget()
        outcome = search_root(children, 1, perspective, fallback_budget)
        return SearchResult(
            best_move=outcome.move,
            evaluation=outcome.evaluation,
            depth=1,
            nodes=self.budget.nodes + fallback_budget.nodes,
            elapsed=time.perf_counter() - start,
            exhausted_tree=not outcome.depth_limited,
            fallback=True,
        )
