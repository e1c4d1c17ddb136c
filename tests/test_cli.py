"""Tests for the command-line interface."""

from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger
from typer.testing import CliRunner

from plysearch import __version__
from plysearch.cli import app

runner = CliRunner()

BACK_RANK_MATE = "6k1/5ppp/8/8/8/8/5PPP/R5K1 w - - 0 1"


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop sinks bound to the runner's captured streams."""
    yield
    logger.remove()


class TestCli:
    """Tests for the typer app."""

    def test_version(self) -> None:
        """Test the version command."""
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_play_tic_tac_toe(self) -> None:
        """Test engine self-play of tic-tac-toe."""
        result = runner.invoke(app, ["play", "tictactoe", "--set", "search.default_node_limit=3000"])

        assert result.exit_code == 0
        assert "no_moves" in result.output

    def test_play_unknown_game(self) -> None:
        """Test that unknown games are rejected."""
        result = runner.invoke(app, ["play", "go"])

        assert result.exit_code == 1
        assert "Unknown game" in result.output

    def test_analyze_mate_in_one(self) -> None:
        """Test analyzing a chess position at fixed depth."""
        result = runner.invoke(app, ["analyze", BACK_RANK_MATE, "--depth", "1"])

        assert result.exit_code == 0
        assert "a1a8" in result.output

    def test_analyze_with_config_file(self, tmp_path: Path) -> None:
        """Test that a YAML config file is picked up."""
        config_file = tmp_path / "engine.yaml"
        config_file.write_text("search:\n  parallel: true\n  max_workers: 2\n")

        result = runner.invoke(app, ["analyze", BACK_RANK_MATE, "--steps", "500", "--config", str(config_file)])

        assert result.exit_code == 0
        assert "parallel-thread" in result.output

    def test_analyze_rejects_two_limits(self) -> None:
        """Test that only one limit may be given."""
        result = runner.invoke(app, ["analyze", BACK_RANK_MATE, "--depth", "1", "--time", "1"])

        assert result.exit_code == 1

    def test_analyze_rejects_invalid_fen(self) -> None:
        """Test that malformed FENs are reported."""
        result = runner.invoke(app, ["analyze", "not-a-fen"])

        assert result.exit_code == 1
        assert "Invalid FEN" in result.output

    def test_bench(self) -> None:
        """Test the bench table."""
        result = runner.invoke(app, ["bench", "--steps", "200", "--workers", "2"])

        assert result.exit_code == 0
        assert "Bench" in result.output
        assert "sequential" in result.output
