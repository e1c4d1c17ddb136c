"""Engine-vs-engine games."""

from plysearch.tournament.game_runner import GameConfig, GameRecord, GameRunner, GameTermination

__all__ = [
    "GameConfig",
    "GameRecord",
    "GameRunner",
    "GameTermination",
]
