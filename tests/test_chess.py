"""Tests for the python-chess position adapter."""

import pickle

import chess
import pytest

from plysearch.core.configs import SearchConfig
from plysearch.games import ChessPosition
from plysearch.search import HIGHEST, LOWEST, AlphaBetaEngine

BACK_RANK_MATE = "6k1/5ppp/8/8/8/8/5PPP/R5K1 w - - 0 1"
FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
STALEMATE = "7k/5Q2/6K1/8/8/8/8/8 b - - 0 1"
HANGING_QUEEN = "4k3/8/8/3q4/8/8/8/3RK3 w - - 0 1"


class TestChessPosition:
    """Tests for ChessPosition."""

    def test_starting_position(self) -> None:
        """Test the initial position."""
        position = ChessPosition()
        assert position.fen() == chess.STARTING_FEN
        assert position.active_player() == chess.WHITE
        assert len(position.legal_moves()) == 20
        assert position.evaluate(chess.WHITE) == 0

    def test_apply_is_pure(self) -> None:
        """Test that apply copies the board."""
        position = ChessPosition()
        after = position.apply(chess.Move.from_uci("e2e4"))

        assert position.fen() == chess.STARTING_FEN
        assert after.active_player() == chess.BLACK
        assert after.board.piece_at(chess.E4) == chess.Piece(chess.PAWN, chess.WHITE)

    def test_material_evaluation(self) -> None:
        """Test material balance from both perspectives."""
        position = ChessPosition.from_fen("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNB1KBNR w KQkq - 0 1")
        assert position.evaluate(chess.WHITE) == -90
        assert position.evaluate(chess.BLACK) == 90

    def test_checkmate(self) -> None:
        """Test that checkmate is terminal and decisive."""
        position = ChessPosition.from_fen(FOOLS_MATE)
        assert position.legal_moves() == []
        assert position.evaluate(chess.WHITE) is LOWEST
        assert position.evaluate(chess.BLACK) is HIGHEST

    def test_stalemate(self) -> None:
        """Test that stalemate is terminal and drawn."""
        position = ChessPosition.from_fen(STALEMATE)
        assert position.legal_moves() == []
        assert position.evaluate(chess.BLACK) == 0

    def test_invalid_fen(self) -> None:
        """Test that malformed FENs raise ValueError."""
        with pytest.raises(ValueError):
            ChessPosition.from_fen("not a fen")

    def test_pickle_keeps_history(self) -> None:
        """Test that pickling keeps the position and its move stack."""
        position = ChessPosition().apply(chess.Move.from_uci("g1f3")).apply(chess.Move.from_uci("g8f6"))

        restored = pickle.loads(pickle.dumps(position))

        assert restored.fen() == position.fen()
        assert restored.board.move_stack == position.board.move_stack


class TestChessSearch:
    """Searching chess positions."""

    def test_mate_in_one(self, any_engine: AlphaBetaEngine) -> None:
        """Test that the back-rank mate is found at depth 1."""
        result = any_engine.search_complete(ChessPosition.from_fen(BACK_RANK_MATE), 1)

        assert result.best_move == chess.Move.from_uci("a1a8")
        assert result.evaluation is HIGHEST

    def test_checkmated_side_has_no_move(self, any_engine: AlphaBetaEngine) -> None:
        """Test that a checkmated root yields no move."""
        result = any_engine.search_complete(ChessPosition.from_fen(FOOLS_MATE), 2)

        assert result.best_move is None
        assert result.evaluation is LOWEST

    def test_captures_hanging_queen(self, engine: AlphaBetaEngine) -> None:
        """Test that a free queen is taken."""
        result = engine.search_complete(ChessPosition.from_fen(HANGING_QUEEN), 2)

        assert result.best_move == chess.Move.from_uci("d1d5")
        assert result.evaluation == 50

    def test_step_bounded_search_returns_legal_move(self) -> None:
        """Test a budgeted search from the opening."""
        position = ChessPosition()
        engine = AlphaBetaEngine(SearchConfig(parallel=True, max_workers=2))
        result = engine.search_step_bounded(position, 2000)

        assert result.nodes <= 2000
        assert result.best_move in position.legal_moves()
