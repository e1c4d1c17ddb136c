"""Parallel root dispatcher.

Only the root's direct children are distributed. Each worker searches its
subtree sequentially with the alpha-beta core, and the dispatcher merges the
per-move values with the same tie-break rule as the sequential search (first
in enumeration order wins), so both select the same move whenever the budget
is not the limiting factor.

Two executors are supported:

- ``"thread"``: workers share the caller's budget (one strict node counter,
  one deadline) and, optionally, a ``SharedBound`` for cross-branch pruning.
- ``"process"``: workers get picklable tasks, a partitioned share of the
  budget and an independent full window. Positions must be picklable.
"""

from __future__ import annotations

import threading
from collections.abc import Hashable, Sequence
from concurrent.futures import (
    CancelledError,
    Executor,
    Future,
    ProcessPoolExecutor,
    ThreadPoolExecutor,
    as_completed,
)
from dataclasses import dataclass
from typing import Any

from loguru import logger

from plysearch.core.configs.schema import EXECUTORS
from plysearch.search.alpha_beta import RootOutcome, search_branch
from plysearch.search.budget import Budget
from plysearch.search.errors import SearchInterrupted
from plysearch.search.evaluation import LOWEST
from plysearch.search.game import Game


class SharedBound:
    """Best values reported by finished root branches, keyed by move index.

    A branch may only prune against branches that come *before* it in
    enumeration order: those win ties against it, so a value that does not
    beat the bound can be discarded without losing the tie-break. For a given
    index the bound only ever tightens.
    """

    def __init__(self) -> None:
        self._values: dict[int, Any] = {}
        self._lock = threading.Lock()

    def tighten(self, index: int, value: Any) -> None:
        """Record the value returned by branch ``index``."""
        with self._lock:
            self._values[index] = value

    def alpha_for(self, index: int) -> Any:
        """Return the best value among branches preceding ``index``."""
        with self._lock:
            earlier = [value for i, value in self._values.items() if i < index]
        return max(earlier, default=LOWEST)


@dataclass(frozen=True)
class _BranchTask:
    """Work item for a process worker."""

    index: int
    child: Game
    depth: int
    perspective: Hashable
    budget: Budget


@dataclass(frozen=True)
class _BranchResult:
    """Value of one root branch, or a note that it was interrupted."""

    index: int
    value: Any
    depth_limited: bool
    nodes: int = 0
    interrupted: bool = False


def _run_branch(task: _BranchTask) -> _BranchResult:
    """Search one root branch inside a process worker."""
    try:
        value, depth_limited = search_branch(task.child, task.depth, task.perspective, task.budget)
    except SearchInterrupted:
        return _BranchResult(task.index, None, False, task.budget.nodes, interrupted=True)
    return _BranchResult(task.index, value, depth_limited, task.budget.nodes)


def _run_shared_branch(
    index: int,
    child: Game,
    depth: int,
    perspective: Hashable,
    budget: Budget,
    bound: SharedBound | None,
) -> _BranchResult:
    """Search one root branch inside a thread worker."""
    alpha = bound.alpha_for(index) if bound is not None else LOWEST
    value, depth_limited = search_branch(child, depth, perspective, budget, alpha)
    if bound is not None:
        bound.tighten(index, value)
    return _BranchResult(index, value, depth_limited)


class RootDispatcher:
    """Fans root moves out to a worker pool for the duration of one search call.

    Example:
        with RootDispatcher(max_workers=4) as dispatcher:
            outcome = dispatcher.search_root(children, depth, perspective, budget)

    Args:
        max_workers: Pool size. None lets ``concurrent.futures`` decide.
        executor: ``"thread"`` or ``"process"``.
        share_bound: Share the best value found so far between thread workers
            to prune more. Pruning then varies between runs; the selected move
            and value do not. Ignored for process workers.
    """

    def __init__(
        self,
        max_workers: int | None = None,
        executor: str = "thread",
        share_bound: bool = True,
    ) -> None:
        if executor not in EXECUTORS:
            raise ValueError(f"Unknown executor: {executor}. Expected one of {EXECUTORS}")
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")

        self.max_workers = max_workers
        self.executor = executor
        self.share_bound = share_bound
        self._pool: Executor | None = None

    def __enter__(self) -> RootDispatcher:
        if self.executor == "thread":
            self._pool = ThreadPoolExecutor(
                max_workers=self.max_workers, thread_name_prefix="plysearch"
            )
        else:
            self._pool = ProcessPoolExecutor(max_workers=self.max_workers)
        logger.debug(f"Started {self.executor} pool (max_workers={self.max_workers})")
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Shut the worker pool down, waiting for running branches."""
        if self._pool is not None:
            self._pool.shutdown(wait=True, cancel_futures=True)
            self._pool = None

    def __call__(
        self,
        children: Sequence[tuple[Any, Game]],
        depth: int,
        perspective: Hashable,
        budget: Budget,
    ) -> RootOutcome:
        return self.search_root(children, depth, perspective, budget)

    def search_root(
        self,
        children: Sequence[tuple[Any, Game]],
        depth: int,
        perspective: Hashable,
        budget: Budget,
    ) -> RootOutcome:
        """Search every root child in parallel and merge the results.

        Args:
            children: Root (move, successor) pairs in enumeration order.
            depth: Search depth in plies, counted from the root. Must be >= 1.
            perspective: The root's active player.
            budget: Budget for the whole iteration.

        Returns:
            RootOutcome for the first child with the best value.

        Raises:
            SearchInterrupted: If any branch ran out of budget. The whole
                depth is discarded.
            ContractViolationError: If an adapter bug surfaced in a worker.
        """
        if self._pool is None:
            raise RuntimeError("RootDispatcher must be used as a context manager")
        if depth < 1:
            raise ValueError(f"depth must be >= 1, got {depth}")
        if not children:
            raise ValueError("cannot search a root without children")

        budget.consume_one()

        futures: list[Future[_BranchResult]]
        if self.executor == "thread":
            bound = SharedBound() if self.share_bound else None
            futures = [
                self._pool.submit(
                    _run_shared_branch, index, child, depth, perspective, budget, bound
                )
                for index, (_, child) in enumerate(children)
            ]
        else:
            shares = budget.partition(len(children))
            futures = [
                self._pool.submit(
                    _run_branch, _BranchTask(index, child, depth, perspective, shares[index])
                )
                for index, (_, child) in enumerate(children)
            ]

        results = self._collect(futures, budget)
        return self._merge(children, results)

    def _collect(self, futures: list[Future[_BranchResult]], budget: Budget) -> list[_BranchResult]:
        """Wait for every branch; never abandon one that is still running."""
        results: list[_BranchResult] = []
        interrupted: SearchInterrupted | None = None
        fatal: BaseException | None = None
        worker_nodes = 0

        for future in as_completed(futures):
            try:
                result = future.result()
            except CancelledError:
                continue
            except SearchInterrupted as e:
                interrupted = interrupted or e
                self._cancel_pending(futures)
                continue
            except Exception as e:
                fatal = fatal or e
                self._cancel_pending(futures)
                continue

            worker_nodes += result.nodes
            if result.interrupted:
                interrupted = interrupted or SearchInterrupted(
                    f"root branch {result.index} exhausted its budget share"
                )
                self._cancel_pending(futures)
                continue
            results.append(result)

        if worker_nodes:
            budget.absorb(worker_nodes)
        if fatal is not None:
            raise fatal
        if interrupted is not None:
            logger.debug(f"Parallel iteration interrupted: {interrupted}")
            raise interrupted
        return results

    @staticmethod
    def _cancel_pending(futures: list[Future[_BranchResult]]) -> None:
        for future in futures:
            future.cancel()

    @staticmethod
    def _merge(
        children: Sequence[tuple[Any, Game]], results: list[_BranchResult]
    ) -> RootOutcome:
        best: _BranchResult | None = None
        depth_limited = False
        for result in sorted(results, key=lambda r: r.index):
            depth_limited = depth_limited or result.depth_limited
            if best is None or result.value > best.value:
                best = result

        assert best is not None
        return RootOutcome(
            index=best.index,
            move=children[best.index][0],
            evaluation=best.value,
            depth_limited=depth_limited,
        )
