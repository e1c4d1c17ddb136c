"""Exceptions raised by the search engine."""


class SearchError(Exception):
    """Base exception for search errors."""

    pass


class ContractViolationError(SearchError):
    """Raised when a position does not honour the game contract.

    This always indicates a bug in the caller's game adapter (for example a
    move reported as legal that cannot be applied), so it is never retried.
    """

    def __init__(self, message: str, move: object = None) -> None:
        super().__init__(message)
        self.move = move


class SearchInterrupted(SearchError):
    """Raised by a budget when no capacity is left for another node visit.

    The iterative deepening driver catches this and discards the depth that
    was being searched. It never escapes an engine entry point.
    """

    pass
