"""Exceptions raised by the Flow Free solver core."""

from __future__ import annotations


class InvalidBoardError(ValueError):
    """Raised when a raw grid cannot be turned into a puzzle board."""


class InternalConsistencyError(AssertionError):
    """Raised when an extension step tries to paint a cell that is already occupied."""


class SearchBudgetExceeded(RuntimeError):
    """Raised when the search driver expands more states than it was allowed to."""

    def __init__(self, limit: int, observed: int) -> None:
        """Record the configured limit and the number of expansions observed."""
        super().__init__(f"Search expanded {observed} states (limit {limit})")
        self.limit = limit
        self.observed = observed
