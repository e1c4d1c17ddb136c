"""Unpruned minimax, used as a reference when validating the alpha-beta core.

This explores every node, so it is only practical for small trees.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any

from plysearch.search.game import Game, expand


def minimax(position: Game, depth: int, perspective: Hashable) -> Any:
    """Return the exact minimax value of ``position`` at ``depth`` plies."""
    children = expand(position) if depth > 0 else []
    if not children:
        return position.evaluate(perspective)

    values = [minimax(child, depth - 1, perspective) for _, child in children]
    if position.active_player() == perspective:
        return max(values)
    return min(values)


def best_moves(position: Game, depth: int) -> tuple[list[Any], Any]:
    """Return every optimal root move and their shared value.

    Args:
        position: Root position. Must have at least one legal move.
        depth: Search depth in plies, counted from the root.

    Returns:
        Tuple of (moves, value) where moves lists all root moves achieving
        the minimax value, in enumeration order.
    """
    perspective = position.active_player()
    scored = [(move, minimax(child, depth - 1, perspective)) for move, child in expand(position)]
    if not scored:
        raise ValueError("position has no legal moves")

    value = max(score for _, score in scored)
    return [move for move, score in scored if score == value], value


def is_best(position: Game, move: Any, depth: int) -> bool:
    """Return True if ``move`` is one of the optimal root moves at ``depth``."""
    moves, _ = best_moves(position, depth)
    return move in moves
