"""Game runner for engine-vs-engine matches.

Plays a single game between two ``Engine`` implementations on any position
implementing the ``Game`` protocol.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from loguru import logger

from plysearch.search.engine import Engine
from plysearch.search.evaluation import HIGHEST, LOWEST
from plysearch.search.game import Game, apply_move


class GameTermination(Enum):
    """How a game ended."""

    NO_MOVES = "no_moves"
    MAX_MOVES = "max_moves"
    ENGINE_ERROR = "engine_error"


@dataclass
class GameConfig:
    """Configuration for game adjudication."""

    # Maximum moves before the game is stopped
    max_moves: int = 200

    def __post_init__(self) -> None:
        if self.max_moves < 0:
            msg = f"max_moves must be >= 0, got {self.max_moves}"
            raise ValueError(msg)


@dataclass
class GameRecord:
    """Record of a single game."""

    moves: list[Any]
    final_position: Game
    termination: GameTermination

    # Final evaluation from Engine A's perspective. An engine error counts as
    # a loss for the engine that failed.
    score_a: Any

    # Metadata
    move_count: int = field(init=False)
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    def __post_init__(self) -> None:
        self.move_count = len(self.moves)


class GameRunner:
    """Runs games between two engines."""

    def __init__(self, config: GameConfig | None = None):
        """Initialize game runner.

        Args:
            config: Game adjudication configuration.
        """
        self.config = config or GameConfig()

    def play_game(self, engine_a: Engine, engine_b: Engine, position: Game) -> GameRecord:
        """Play a single game between two engines.

        Engine A plays the side to move in ``position``; engine B plays every
        other side. Turns follow ``active_player()``, so games where a player
        moves twice in a row are handled too.

        Args:
            engine_a: Engine moving first.
            engine_b: Opponent engine.
            position: Starting position. Not modified.

        Returns:
            GameRecord with the outcome.
        """
        player_a = position.active_player()
        moves: list[Any] = []

        while True:
            if not position.legal_moves():
                termination = GameTermination.NO_MOVES
                score_a = position.evaluate(player_a)
                break

            if len(moves) >= self.config.max_moves:
                termination = GameTermination.MAX_MOVES
                score_a = position.evaluate(player_a)
                break

            a_to_move = position.active_player() == player_a
            current_engine = engine_a if a_to_move else engine_b

            try:
                move = current_engine.select_move(position)
            except Exception as e:
                logger.error(f"Engine error ({current_engine.name}): {e}")
                termination = GameTermination.ENGINE_ERROR
                score_a = LOWEST if a_to_move else HIGHEST
                break

            if move is None:
                logger.warning(f"{current_engine.name} returned None but the game is not over")
                termination = GameTermination.ENGINE_ERROR
                score_a = LOWEST if a_to_move else HIGHEST
                break

            position = apply_move(position, move)
            moves.append(move)
            logger.debug(f"Move {len(moves)}: {current_engine.name} played {move!r}")

        logger.info(
            f"{engine_a.name} vs {engine_b.name}: {termination.value} after "
            f"{len(moves)} moves, score_a={score_a!r}"
        )
        return GameRecord(
            moves=moves,
            final_position=position,
            termination=termination,
            score_a=score_a,
        )
