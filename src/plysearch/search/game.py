"""Position contract consumed by the search engine, and the move expander."""

from __future__ import annotations

from collections.abc import Hashable, Iterator, Sequence
from typing import Any, Protocol

from loguru import logger

from plysearch.search.errors import ContractViolationError


class Game(Protocol):
    """Protocol for game positions that can be searched.

    A position is an opaque, caller-owned value. The engine never inspects its
    internals and only talks to it through these four operations. Positions
    must follow a pure-transition discipline: ``apply`` returns a new position
    and leaves the receiver untouched, so concurrent branches never observe
    each other's moves.

    Evaluations may be any totally ordered type. Higher is better for the
    ``perspective`` player.
    """

    def active_player(self) -> Hashable:
        """Return the player whose turn it is."""
        ...

    def legal_moves(self) -> Sequence[Any]:
        """Return the legal moves in a stable order.

        An empty sequence marks a terminal position.
        """
        ...

    def apply(self, move: Any) -> "Game":
        """Return the position reached by playing ``move``."""
        ...

    def evaluate(self, perspective: Hashable) -> Any:
        """Return the fitness of this position for ``perspective``."""
        ...


def apply_move(position: Game, move: Any) -> Game:
    """Apply ``move`` to ``position``, surfacing adapter bugs immediately.

    Raises:
        ContractViolationError: If the adapter fails to apply a move it
            reported as legal, or returns no successor position.
    """
    try:
        successor = position.apply(move)
    except Exception as e:
        logger.error(f"Failed to apply legal move {move!r}: {e}")
        raise ContractViolationError(
            f"legal move {move!r} could not be applied: {e}", move=move
        ) from e

    if successor is None:
        raise ContractViolationError(
            f"apply({move!r}) returned None instead of a successor position", move=move
        )
    return successor


def iter_children(position: Game, moves: Sequence[Any] | None = None) -> Iterator[tuple[Any, Game]]:
    """Lazily yield (move, successor) pairs in enumeration order.

    Successors are only built when requested, so a search that cuts off early
    never pays for the remaining siblings.
    """
    if moves is None:
        moves = position.legal_moves()
    for move in moves:
        yield move, apply_move(position, move)


def expand(position: Game) -> list[tuple[Any, Game]]:
    """Return every (move, successor) pair of ``position`` in enumeration order.

    Args:
        position: Position to expand.

    Returns:
        List of (move, successor) pairs. Empty for terminal positions.
    """
    return list(iter_children(position))
