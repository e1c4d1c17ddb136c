"""Search budgets: how much capacity is left for further search.

Three strategies share one interface:

- ``StepBudget``: a cap on node visits. Strict, safe to share between threads.
- ``TimeBudget``: a wall-clock deadline on the monotonic clock.
- ``UnlimitedBudget``: never runs out. Used for complete search and for the
  single-ply fallback.

The alpha-beta core calls ``consume_one`` once per node visit; it raises
``SearchInterrupted`` when the budget is spent. The iterative deepening driver
asks ``should_continue_deepening`` between depths.
"""

from __future__ import annotations

import threading
import time
from abc import ABC, abstractmethod
from datetime import timedelta

from plysearch.search.errors import SearchInterrupted


class Budget(ABC):
    """Base class for search budgets.

    Tracks the number of node visits made so far. The counter is guarded by a
    lock so a single budget can be shared by thread workers.
    """

    def __init__(self) -> None:
        self._nodes = 0
        self._lock = threading.Lock()

    @property
    def nodes(self) -> int:
        """Total node visits charged to this budget."""
        return self._nodes

    @abstractmethod
    def has_remaining(self) -> bool:
        """Return True if there is budget for at least one more node visit."""

    @abstractmethod
    def consume_one(self) -> None:
        """Charge one node visit.

        Raises:
            SearchInterrupted: If the budget is exhausted.
        """

    @abstractmethod
    def should_continue_deepening(self, elapsed_for_last_depth: float) -> bool:
        """Return True if another, deeper iteration is worth starting.

        Args:
            elapsed_for_last_depth: Seconds taken by the depth that just completed.
        """

    @abstractmethod
    def partition(self, workers: int) -> list[Budget]:
        """Split the remaining capacity into independent per-worker budgets."""

    def absorb(self, nodes: int) -> None:
        """Fold node visits made by partitioned workers back into this budget."""
        with self._lock:
            self._nodes += nodes

    def __getstate__(self) -> dict:
        state = self.__dict__.copy()
        del state["_lock"]
        return state

    def __setstate__(self, state: dict) -> None:
        self.__dict__.update(state)
        self._lock = threading.Lock()


class UnlimitedBudget(Budget):
    """A budget that never runs out."""

    def has_remaining(self) -> bool:
        return True

    def consume_one(self) -> None:
        with self._lock:
            self._nodes += 1

    def should_continue_deepening(self, elapsed_for_last_depth: float) -> bool:
        return True

    def partition(self, workers: int) -> list[Budget]:
        return [UnlimitedBudget() for _ in range(workers)]

    def __repr__(self) -> str:
        return "UnlimitedBudget()"


class StepBudget(Budget):
    """A budget of at most ``max_nodes`` node visits.

    The cap is strict: ``nodes`` never exceeds ``max_nodes``, even when the
    budget is shared between threads.
    """

    def __init__(self, max_nodes: int) -> None:
        if max_nodes < 0:
            raise ValueError(f"max_nodes must be >= 0, got {max_nodes}")
        super().__init__()
        self.max_nodes = max_nodes

    @property
    def remaining(self) -> int:
        """Node visits still available. Never negative."""
        return max(self.max_nodes - self._nodes, 0)

    def has_remaining(self) -> bool:
        return self.remaining > 0

    def consume_one(self) -> None:
        with self._lock:
            if self._nodes >= self.max_nodes:
                raise SearchInterrupted(f"step budget of {self.max_nodes} visits exhausted")
            self._nodes += 1

    def should_continue_deepening(self, elapsed_for_last_depth: float) -> bool:
        return self.has_remaining()

    def partition(self, workers: int) -> list[Budget]:
        """Split the remaining visits evenly; the shares never sum above the cap."""
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        share, extra = divmod(self.remaining, workers)
        return [StepBudget(share + (1 if i < extra else 0)) for i in range(workers)]

    def absorb(self, nodes: int) -> None:
        with self._lock:
            self._nodes = min(self._nodes + nodes, self.max_nodes)

    def __repr__(self) -> str:
        return f"StepBudget(max_nodes={self.max_nodes}, nodes={self._nodes})"


class TimeBudget(Budget):
    """A wall-clock budget ending at a fixed deadline.

    The deadline is an absolute ``time.monotonic()`` value computed once, at
    construction, and shared by every worker of the call.

    Args:
        max_duration: Time available, in seconds or as a ``timedelta``.
        growth_factor: Expected cost ratio between consecutive depths. A new
            depth is only started if ``growth_factor`` times the previous
            depth's duration still fits before the deadline.
    """

    def __init__(self, max_duration: float | timedelta, growth_factor: float = 2.0) -> None:
        if isinstance(max_duration, timedelta):
            max_duration = max_duration.total_seconds()
        if max_duration < 0:
            raise ValueError(f"max_duration must be >= 0, got {max_duration}")
        if growth_factor < 0:
            raise ValueError(f"growth_factor must be >= 0, got {growth_factor}")
        super().__init__()
        self.max_duration = float(max_duration)
        self.growth_factor = growth_factor
        self.deadline = time.monotonic() + self.max_duration

    @classmethod
    def until(cls, deadline: float, growth_factor: float = 2.0) -> TimeBudget:
        """Create a budget that ends at an existing monotonic ``deadline``."""
        budget = cls(0.0, growth_factor)
        budget.deadline = deadline
        budget.max_duration = max(deadline - time.monotonic(), 0.0)
        return budget

    @property
    def remaining(self) -> float:
        """Seconds left before the deadline. Never negative."""
        return max(self.deadline - time.monotonic(), 0.0)

    def has_remaining(self) -> bool:
        return time.monotonic() < self.deadline

    def consume_one(self) -> None:
        if time.monotonic() >= self.deadline:
            raise SearchInterrupted(f"time budget of {self.max_duration:.3f}s exhausted")
        with self._lock:
            self._nodes += 1

    def should_continue_deepening(self, elapsed_for_last_depth: float) -> bool:
        remaining = self.remaining
        if remaining <= 0.0:
            return False
        return elapsed_for_last_depth * self.growth_factor < remaining

    def partition(self, workers: int) -> list[Budget]:
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        return [TimeBudget.until(self.deadline, self.growth_factor) for _ in range(workers)]

    def __repr__(self) -> str:
        return f"TimeBudget(max_duration={self.max_duration:.3f}, remaining={self.remaining:.3f})"
