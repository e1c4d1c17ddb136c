"""Game-agnostic adversarial search: alpha-beta, iterative deepening, parallel root."""

from plysearch.search.alpha_beta import RootOutcome, SearchStats, alpha_beta, search_root
from plysearch.search.budget import Budget, StepBudget, TimeBudget, UnlimitedBudget
from plysearch.search.deepening import DeepeningState, IterativeDeepening, SearchResult
from plysearch.search.engine import AlphaBetaEngine, Engine
from plysearch.search.errors import ContractViolationError, SearchError, SearchInterrupted
from plysearch.search.evaluation import HIGHEST, LOWEST
from plysearch.search.game import Game, expand
from plysearch.search.parallel import RootDispatcher, SharedBound

__all__ = [
    "HIGHEST",
    "LOWEST",
    "AlphaBetaEngine",
    "Budget",
    "ContractViolationError",
    "DeepeningState",
    "Engine",
    "Game",
    "IterativeDeepening",
    "RootDispatcher",
    "RootOutcome",
    "SearchError",
    "SearchInterrupted",
    "SearchResult",
    "SearchStats",
    "SharedBound",
    "StepBudget",
    "TimeBudget",
    "UnlimitedBudget",
    "alpha_beta",
    "expand",
    "search_root",
]
