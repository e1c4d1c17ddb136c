"""Fixed-depth alpha-beta search.

Values are always taken from one fixed ``perspective`` (the player to move at
the root). Nodes where that player is to move maximize, all others minimize.
This is the negamax recurrence written without negation, so it works for any
totally ordered evaluation type, including ones that cannot be negated (bools,
tuples, ...).

Search is fail-soft: a node cut off by its window returns a bound rather than
an exact value, which is always on the side that cannot change the parent's
choice. Ties keep the first child in enumeration order.
"""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from dataclasses import dataclass
from typing import Any

from plysearch.search.budget import Budget
from plysearch.search.evaluation import HIGHEST, LOWEST
from plysearch.search.game import Game, iter_children


@dataclass
class SearchStats:
    """Bookkeeping for one depth iteration.

    Attributes:
        depth_limited: True once a node was evaluated at the depth horizon
            while it still had legal moves. A completed iteration that never
            set this flag has solved the game tree exactly.
    """

    depth_limited: bool = False


@dataclass(frozen=True)
class RootOutcome:
    """Best root move found by one completed depth iteration."""

    index: int
    move: Any
    evaluation: Any
    depth_limited: bool


def alpha_beta(
    position: Game,
    depth: int,
    alpha: Any,
    beta: Any,
    perspective: Hashable,
    budget: Budget,
    stats: SearchStats,
) -> Any:
    """Return the minimax value of ``position`` searched ``depth`` plies deep.

    Args:
        position: Position to search.
        depth: Remaining plies. At 0 the position is evaluated statically.
        alpha: Lower bound of the window.
        beta: Upper bound of the window.
        perspective: Player whose fitness is being maximized.
        budget: Charged once per visited node.
        stats: Updated with horizon information.

    Returns:
        The exact value if it lies strictly inside (alpha, beta), otherwise a
        bound on the same side of the window as the true value.

    Raises:
        SearchInterrupted: If the budget runs out mid-search.
        ContractViolationError: If a legal move fails to apply.
    """
    budget.consume_one()

    if depth <= 0:
        if not stats.depth_limited and position.legal_moves():
            stats.depth_limited = True
        return position.evaluate(perspective)

    moves = position.legal_moves()
    if not moves:
        return position.evaluate(perspective)

    if position.active_player() == perspective:
        best = LOWEST
        for _, child in iter_children(position, moves):
            value = alpha_beta(child, depth - 1, alpha, beta, perspective, budget, stats)
            if value > best:
                best = value
                if best > alpha:
                    alpha = best
                if alpha >= beta:
                    break
        return best

    best = HIGHEST
    for _, child in iter_children(position, moves):
        value = alpha_beta(child, depth - 1, alpha, beta, perspective, budget, stats)
        if value < best:
            best = value
            if best < beta:
                beta = best
            if alpha >= beta:
                break
    return best


def search_branch(
    child: Game,
    depth: int,
    perspective: Hashable,
    budget: Budget,
    alpha: Any = LOWEST,
) -> tuple[Any, bool]:
    """Search a single root child ``depth`` plies deep.

    Returns:
        Tuple of (value, depth_limited). The value is exact whenever it is
        strictly greater than ``alpha``.
    """
    stats = SearchStats()
    value = alpha_beta(child, depth - 1, alpha, HIGHEST, perspective, budget, stats)
    return value, stats.depth_limited


def search_root(
    children: Sequence[tuple[Any, Game]],
    depth: int,
    perspective: Hashable,
    budget: Budget,
) -> RootOutcome:
    """Pick the best root move with a sequential alpha-beta search.

    Args:
        children: Root (move, successor) pairs in enumeration order.
        depth: Search depth in plies, counted from the root. Must be >= 1.
        perspective: The root's active player.
        budget: Budget shared by the whole iteration.

    Returns:
        RootOutcome for the first child with the best value.
    """
    if depth < 1:
        raise ValueError(f"depth must be >= 1, got {depth}")
    if not children:
        raise ValueError("cannot search a root without children")

    budget.consume_one()

    stats = SearchStats()
    alpha = LOWEST
    best_index: int | None = None
    best_value: Any = LOWEST

    for index, (_, child) in enumerate(children):
        value = alpha_beta(child, depth - 1, alpha, HIGHEST, perspective, budget, stats)
        if best_index is None or value > best_value:
            best_index = index
            best_value = value
            if value > alpha:
                alpha = value

    assert best_index is not None
    return RootOutcome(
        index=best_index,
        move=children[best_index][0],
        evaluation=best_value,
        depth_limited=stats.depth_limited,
    )
