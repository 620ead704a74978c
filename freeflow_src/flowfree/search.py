"""State-space search over move sequences, yielding every fully filled board."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tqdm import tqdm

from freeflow_src.util.config import get_key, is_verbose, show_progress

from .errors import SearchBudgetExceeded
from .moves import InProgress

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .board import Board

ORDERS: tuple[str, ...] = ("bfs", "dfs")


@dataclass(slots=True)
class SearchStats:
    """Counters collected while a search runs."""

    expanded: int = 0  # states whose children were requested
    generated: int = 0  # child states produced by the move generator
    solutions: int = 0  # terminal states reported


class StateSearch:
    """
    Walks the tree of InProgress states rooted at a validated board.

    Terminal states are reported and never expanded. No state is ever
    deduplicated: the same board reached by connecting colors in a different
    order is explored again, and reported again unless `unique` is set.
    """

    def __init__(
        self,
        board: Board,
        order: str = get_key("search.order", "bfs"),
        max_expansions: int | None = get_key("search.max_expansions", None),
        unique: bool = get_key("search.unique", False),
        stats: SearchStats | None = None,
        verbose: bool = is_verbose(),
        progress: bool = show_progress(),
    ):
        """Initialize the search; `order` is "bfs" or "dfs"."""
        if order not in ORDERS:
            raise ValueError(f"Unknown search order {order!r} (expected one of {ORDERS})")
        if max_expansions is not None and max_expansions < 0:
            raise ValueError("max_expansions must be non-negative")

        self.root = InProgress.initial(board)
        self.order = order
        self.max_expansions = max_expansions
        self.unique = unique
        self.stats = stats if stats is not None else SearchStats()
        self.verbose = verbose
        self.progress = progress
        self._seen: set[bytes] = set()
        self._pbar: tqdm | None = None

    def __iter__(self) -> Iterator[InProgress]:
        """Iterate over terminal states in the configured order."""
        return self.run()

    def run(self) -> Iterator[InProgress]:
        """Yield every terminal state reachable from the root."""
        board = self.root.board
        if self.verbose:
            print(
                f"Starting {self.order} search on a {board.height}x{board.width} board "
                f"with {len(board.endpoints)} colors..."
            )

        self._pbar = tqdm(desc="Expanding states", unit="state", disable=not self.progress)
        try:
            if self.order == "bfs":
                yield from self._bfs()
            else:
                yield from self._dfs()
        finally:
            self._pbar.close()

        if self.verbose:
            print(
                f"Search finished: {self.stats.expanded} expanded, "
                f"{self.stats.generated} generated, {self.stats.solutions} solutions"
            )

    def _bfs(self) -> Iterator[InProgress]:
        """Expand states in first-in first-out order."""
        queue: deque[InProgress] = deque([self.root])
        while queue:
            state = queue.popleft()
            if state.is_final():
                if self._accept(state):
                    yield state
                continue

            self._count_expansion()
            for child in state.moves():
                self.stats.generated += 1
                queue.append(child)

    def _dfs(self) -> Iterator[InProgress]:
        """Descend into every child as soon as it is produced, resuming the parent afterwards."""
        if self.root.is_final():
            if self._accept(self.root):
                yield self.root
            return

        self._count_expansion()
        stack: list[tuple[InProgress, Iterator[InProgress]]] = [(self.root, self.root.moves())]
        while stack:
            _, children = stack[-1]
            child = next(children, None)
            if child is None:
                stack.pop()
                continue

            self.stats.generated += 1
            if child.is_final():
                if self._accept(child):
                    yield child
                continue

            self._count_expansion()
            stack.append((child, child.moves()))

    def _count_expansion(self) -> None:
        """Record one more expanded state, enforcing the expansion budget."""
        if self.max_expansions is not None and self.stats.expanded >= self.max_expansions:
            raise SearchBudgetExceeded(self.max_expansions, self.stats.expanded + 1)
        self.stats.expanded += 1
        self._pbar.update(1)

    def _accept(self, state: InProgress) -> bool:
        """Return True if a terminal state should be reported."""
        if self.unique:
            key = state.board.encode()
            if key in self._seen:
                return False
            self._seen.add(key)

        self.stats.solutions += 1
        if self.verbose:
            print(f"Solution #{self.stats.solutions} after {self.stats.expanded} expansions")
        return True


def solve(board: Board, **kwargs: object) -> Iterator[InProgress]:
    """Return an iterator over every terminal state reachable from board. See `StateSearch`."""
    return StateSearch(board, **kwargs).run()


def solutions(board: Board, **kwargs: object) -> Iterator[Board]:
    """Like `solve`, but yield only the solved boards."""
    return (state.board for state in solve(board, **kwargs))
