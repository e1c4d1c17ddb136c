"""Tic-tac-toe (three in a row) position."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from plysearch.search.evaluation import HIGHEST, LOWEST


class Mark(Enum):
    """Player marks. X always moves first."""

    X = "X"
    O = "O"  # noqa: E741

    @property
    def opponent(self) -> Mark:
        return Mark.O if self is Mark.X else Mark.X


LINES: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


@dataclass(frozen=True)
class TicTacToe:
    """Immutable tic-tac-toe position.

    Squares are numbered 0-8, row by row from the top-left corner. A move is
    the index of an empty square. Wins evaluate to ``HIGHEST`` / ``LOWEST``,
    everything else to 0.
    """

    cells: tuple[Mark | None, ...] = (None,) * 9
    to_move: Mark = Mark.X

    def __post_init__(self) -> None:
        if len(self.cells) != 9:
            raise ValueError(f"A board has 9 cells, got {len(self.cells)}")

    @classmethod
    def from_string(cls, board: str) -> TicTacToe:
        """Parse a board such as ``"XO.|.X.|..O"`` (separators optional).

        The side to move is derived from the number of marks.
        """
        symbols = [c for c in board if c in "XO.-_ "]
        if len(symbols) != 9:
            raise ValueError(f"Expected 9 squares, got {len(symbols)}: {board!r}")

        cells = tuple(Mark(c) if c in "XO" else None for c in symbols)
        x_count = cells.count(Mark.X)
        o_count = cells.count(Mark.O)
        if x_count - o_count not in (0, 1):
            raise ValueError(f"Impossible mark counts: X={x_count}, O={o_count}")

        to_move = Mark.X if x_count == o_count else Mark.O
        return cls(cells=cells, to_move=to_move)

    def winner(self) -> Mark | None:
        """Return the mark that completed a line, if any."""
        for a, b, c in LINES:
            mark = self.cells[a]
            if mark is not None and mark == self.cells[b] == self.cells[c]:
                return mark
        return None

    def is_full(self) -> bool:
        return all(cell is not None for cell in self.cells)

    # Game protocol

    def active_player(self) -> Mark:
        return self.to_move

    def legal_moves(self) -> list[int]:
        if self.winner() is not None:
            return []
        return [i for i, cell in enumerate(self.cells) if cell is None]

    def apply(self, move: int) -> TicTacToe:
        if not 0 <= move < 9 or self.cells[move] is not None:
            raise ValueError(f"Square {move} is not available")
        cells = list(self.cells)
        cells[move] = self.to_move
        return TicTacToe(cells=tuple(cells), to_move=self.to_move.opponent)

    def evaluate(self, perspective: Mark) -> object:
        winner = self.winner()
        if winner is None:
            return 0
        return HIGHEST if winner == perspective else LOWEST

    def __str__(self) -> str:
        rows = []
        for row in range(3):
            rows.append(
                " ".join(
                    cell.value if cell is not None else "." for cell in self.cells[row * 3 : row * 3 + 3]
                )
            )
        return "\n".join(rows)
