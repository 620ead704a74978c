"""Search states and the per-color move generator."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .geometry import Coordinate
from .paths import Path

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .board import Board

Route = tuple[Coordinate, ...]


@dataclass(frozen=True, slots=True)
class InProgress:
    """
    A node of the search tree: a board plus the colors already connected on it.

    `connected` pairs every color in `colors_moved` with the cells of its
    connecting path, in order from one endpoint to the other.
    """

    board: Board
    colors_moved: frozenset[int] = frozenset()
    connected: tuple[tuple[int, Route], ...] = ()

    @classmethod
    def initial(cls, board: Board) -> InProgress:
        """Return the root state for a freshly validated board."""
        return cls(board)

    @property
    def routes(self) -> dict[int, Route]:
        """Return a fresh color -> route mapping of the connected colors."""
        return dict(self.connected)

    def is_final(self) -> bool:
        """Return True if the board has no empty cells left."""
        return self.board.is_final()

    def pending_colors(self) -> list[tuple[int, Coordinate, Coordinate]]:
        """
        Return (color, start, dest) for every color not connected yet.

        Endpoints are ranked from the outside of the board inwards. Each color
        starts from its best-ranked endpoint; searching from the other one would
        find the same paths backwards.
        """
        doubled_centre = Coordinate(self.board.height - 1, self.board.width - 1)
        candidates: list[tuple[int, Coordinate, Coordinate]] = []
        for color, (a, b) in self.board.endpoints.items():
            if color in self.colors_moved:
                continue
            candidates.append((color, a, b))
            candidates.append((color, b, a))
        candidates.sort(key=lambda t: t[1].double_manhattan(doubled_centre), reverse=True)

        picked: list[tuple[int, Coordinate, Coordinate]] = []
        seen: set[int] = set()
        for color, start, dest in candidates:
            if color not in seen:
                seen.add(color)
                picked.append((color, start, dest))
        return picked

    def moves(self) -> Iterator[InProgress]:
        """Lazily yield one child state per complete connecting path of each pending color."""
        for color, start, dest in self.pending_colors():
            yield from self.connections(color, start, dest)

    def connections(self, color: int, start: Coordinate, dest: Coordinate) -> Iterator[InProgress]:
        """Yield a child state for every path joining start to dest made of straight runs."""
        moved = self.colors_moved | {color}
        queue: deque[Path] = deque([Path.seed(self.board, color, start, dest)])
        while queue:
            path = queue.popleft()
            for direction in path.next_directions():
                for ext in path.extensions(direction):
                    if ext.reached:
                        yield InProgress(ext.board, moved, (*self.connected, (color, ext.route)))
                    else:
                        queue.append(ext)
