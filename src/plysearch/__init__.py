"""plysearch: game-agnostic alpha-beta search with iterative deepening.

Any position implementing the ``Game`` protocol can be searched:
- `from plysearch import AlphaBetaEngine`
- `from plysearch.games import TicTacToe, Flags, ChessPosition`

Shared utilities are in `plysearch.core`:
- `from plysearch.core import setup_logging, load_config`
"""

__version__ = "0.1.0"

# Re-export common entry points for convenience
from plysearch.core import load_config, save_config, setup_logging
from plysearch.search import HIGHEST, LOWEST, AlphaBetaEngine, Game, SearchResult

__all__ = [
    "HIGHEST",
    "LOWEST",
    "AlphaBetaEngine",
    "Game",
    "SearchResult",
    "__version__",
    "load_config",
    "save_config",
    "setup_logging",
]
