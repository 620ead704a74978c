"""Grid coordinates and compass directions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    """The four compass directions a path segment can travel in."""

    NORTH = (-1, 0)
    SOUTH = (1, 0)
    EAST = (0, 1)
    WEST = (0, -1)

    @property
    def d_row(self) -> int:
        """Row delta of a single step."""
        return self.value[0]

    @property
    def d_col(self) -> int:
        """Column delta of a single step."""
        return self.value[1]

    @property
    def opposite(self) -> Direction:
        """Return the direction pointing the other way."""
        return _OPPOSITES[self]

    @property
    def is_vertical(self) -> bool:
        """Return True for NORTH and SOUTH."""
        return self.d_col == 0

    def turns(self) -> tuple[Direction, Direction]:
        """Return the two directions perpendicular to this one."""
        if self.is_vertical:
            return (Direction.EAST, Direction.WEST)
        return (Direction.NORTH, Direction.SOUTH)


_OPPOSITES: dict[Direction, Direction] = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Immutable grid coordinate (row, col)."""

    row: int
    col: int

    def step(self, direction: Direction, n: int = 1) -> Coordinate:
        """Return the coordinate n cells away in the given direction."""
        return Coordinate(self.row + n * direction.d_row, self.col + n * direction.d_col)

    def neighbors4(self) -> list[Coordinate]:
        """Return the four adjacent coordinates (up, down, left, right)."""
        return [self.step(d) for d in Direction]

    def manhattan(self, other: Coordinate) -> int:
        """Return the Manhattan distance to another coordinate."""
        return abs(self.row - other.row) + abs(self.col - other.col)

    def double_manhattan(self, doubled: Coordinate) -> int:
        """
        Return the Manhattan distance between this coordinate scaled by two and `doubled`.

        Passing (height - 1, width - 1) measures how far a cell is from the centre of
        the board without going through fractions on even-sized boards.
        """
        return abs(doubled.row - 2 * self.row) + abs(doubled.col - 2 * self.col)

    def along(self, direction: Direction) -> int:
        """Return the component that changes when moving in the given direction."""
        return self.row if direction.is_vertical else self.col

    def __add__(self, other: Coordinate) -> Coordinate:
        """Return a new coordinate that is the sum of this and other."""
        return Coordinate(self.row + other.row, self.col + other.col)

    def __sub__(self, other: Coordinate) -> Coordinate:
        """Return a new coordinate that is the difference of this and other."""
        return Coordinate(self.row - other.row, self.col - other.col)

    def __str__(self) -> str:
        """Return the coordinate as (row, col)."""
        return f"({self.row}, {self.col})"
