"""Chess positions backed by python-chess."""

from __future__ import annotations

import chess

from plysearch.search.evaluation import HIGHEST, LOWEST

# Piece values in pawns x 10 (king weighted to dominate everything else).
PIECE_VALUES: dict[chess.PieceType, int] = {
    chess.PAWN: 10,
    chess.KNIGHT: 30,
    chess.BISHOP: 30,
    chess.ROOK: 50,
    chess.QUEEN: 90,
    chess.KING: 900,
}


class ChessPosition:
    """Chess position implementing the ``Game`` protocol.

    ``apply`` copies the underlying board before pushing, so every search
    branch owns its own board. Terminal positions (checkmate, stalemate,
    insufficient material, 75-move rule, fivefold repetition) report no legal
    moves. Checkmate evaluates to ``HIGHEST`` / ``LOWEST``, draws to 0, and
    other positions to the material balance for the perspective colour.
    """

    __slots__ = ("board",)

    def __init__(self, board: chess.Board | None = None) -> None:
        self.board = board if board is not None else chess.Board()

    @classmethod
    def from_fen(cls, fen: str) -> ChessPosition:
        """Create a position from a FEN string.

        Raises:
            ValueError: If the FEN is malformed.
        """
        return cls(chess.Board(fen))

    def fen(self) -> str:
        return self.board.fen()

    # Game protocol

    def active_player(self) -> chess.Color:
        return self.board.turn

    def legal_moves(self) -> list[chess.Move]:
        if self.board.outcome() is not None:
            return []
        return list(self.board.legal_moves)

    def apply(self, move: chess.Move) -> ChessPosition:
        board = self.board.copy()
        board.push(move)
        return ChessPosition(board)

    def evaluate(self, perspective: chess.Color) -> object:
        outcome = self.board.outcome()
        if outcome is not None:
            if outcome.winner is None:
                return 0
            return HIGHEST if outcome.winner == perspective else LOWEST

        score = 0
        for piece_type, value in PIECE_VALUES.items():
            own = len(self.board.pieces(piece_type, perspective))
            other = len(self.board.pieces(piece_type, not perspective))
            score += value * (own - other)
        return score

    def __getstate__(self) -> str:
        # Pickle as FEN plus move stack so process workers keep repetition history.
        return self.board.root().fen() + "|" + " ".join(m.uci() for m in self.board.move_stack)

    def __setstate__(self, state: str) -> None:
        root_fen, _, moves = state.partition("|")
        board = chess.Board(root_fen)
        for uci in moves.split():
            board.push(chess.Move.from_uci(uci))
        self.board = board

    def __repr__(self) -> str:
        return f"ChessPosition({self.board.fen()!r})"

    def __str__(self) -> str:
        return str(self.board)
