"""Straight-run path extension for a single color's connection search."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .geometry import Coordinate, Direction

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .board import Board


@dataclass(frozen=True, slots=True)
class Path:
    """
    A route in progress from one endpoint of `color` towards `dest`.

    `board` already contains every cell of the route painted in `color`.
    `arrived` is the direction of the last straight run, or None for a path that
    has not left its starting endpoint yet.
    """

    board: Board
    color: int
    head: Coordinate
    dest: Coordinate
    arrived: Direction | None = None
    route: tuple[Coordinate, ...] = ()

    @classmethod
    def seed(cls, board: Board, color: int, start: Coordinate, dest: Coordinate) -> Path:
        """Return the degenerate path sitting on the starting endpoint."""
        return cls(board, color, start, dest, None, (start,))

    @property
    def reached(self) -> bool:
        """Return True once the head sits on the destination endpoint."""
        return self.head == self.dest

    def next_directions(self) -> tuple[Direction, ...]:
        """
        Return the directions the next straight run may take.

        A fresh path may leave in any direction. Afterwards a path can only
        turn: going back is blocked by its own trail, and carrying straight on
        would just reproduce a stopping point the previous run already offered.
        """
        if self.arrived is None:
            return tuple(Direction)
        return self.arrived.turns()

    def extend(self, stop: Coordinate, direction: Direction) -> Path:
        """
        Return a new path whose head moved in a straight line to `stop`.

        Every cell after the head up to and including `stop` is painted in this
        path's color on a cloned board, except the destination endpoint, which
        already carries the color.
        """
        n = stop.along(direction) - self.head.along(direction)
        n *= direction.d_row + direction.d_col
        if n <= 0 or self.head.step(direction, n) != stop:
            raise ValueError(f"{stop} is not ahead of {self.head} going {direction.name}")

        run = tuple(self.head.step(direction, i) for i in range(1, n + 1))
        board = self.board.painted((c for c in run if c != self.dest), self.color)
        return Path(board, self.color, stop, self.dest, direction, self.route + run)

    def extensions(self, direction: Direction) -> Iterator[Path]:
        """
        Yield every straight-line extension of this path in `direction`.

        The first extension goes as far as possible. The scan bound is then
        pulled in to one cell short of that stop and the scan repeated, so every
        empty cell on the run becomes a stopping point in turn, furthest first.
        """
        sign = direction.d_row + direction.d_col
        bound = self.board.edge(direction)
        while True:
            stop = self.board.furthest(self.head, self.dest, direction, bound)
            if stop == self.head:
                return
            yield self.extend(stop, direction)
            bound = stop.along(direction) - sign
