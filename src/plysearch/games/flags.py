"""The "21 flags" take-away game.

Two players alternately remove 1, 2 or 3 flags from a pile; whoever takes the
last flag wins. With perfect play the first player wins a pile of 21.

The evaluation is a plain ``bool`` (True = the perspective player has won),
which shows that the engine needs nothing more than a total order.
"""

from __future__ import annotations

from dataclasses import dataclass

MAX_TAKE = 3


@dataclass(frozen=True)
class Flags:
    """Immutable pile of flags.

    Attributes:
        flags: Flags left on the pile.
        player: Player to move. Players are ``True`` and ``False``.
    """

    flags: int = 21
    player: bool = True

    def __post_init__(self) -> None:
        if self.flags < 0:
            raise ValueError(f"flags must be >= 0, got {self.flags}")

    def winner(self) -> bool | None:
        """Return the player who took the last flag, if the game is over."""
        if self.flags == 0:
            return not self.player
        return None

    # Game protocol

    def active_player(self) -> bool:
        return self.player

    def legal_moves(self) -> range:
        return range(1, min(self.flags, MAX_TAKE) + 1)

    def apply(self, move: int) -> Flags:
        if not 1 <= move <= min(self.flags, MAX_TAKE):
            raise ValueError(f"Cannot take {move} flags from a pile of {self.flags}")
        return Flags(flags=self.flags - move, player=not self.player)

    def evaluate(self, perspective: bool) -> bool:
        return self.winner() == perspective
