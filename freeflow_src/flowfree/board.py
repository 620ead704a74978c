from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

import numpy as np

from .errors import InternalConsistencyError, InvalidBoardError
from .geometry import Coordinate, Direction

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

EMPTY: int = 0
MAX_COLOR: int = int(np.iinfo(np.int8).max)
MAX_RENDERABLE_COLOR: int = 9  # one ascii digit per cell
DIGITS: str = "0123456789"

Endpoints = dict[int, tuple[Coordinate, Coordinate]]


class Board:
    """
    A puzzle grid together with the fixed endpoint pair of every color.

    Boards are treated as values: every operation that changes cells returns a
    new Board. The endpoint table is established once by `validate` and shared
    between a board and all of its descendants.
    """

    __slots__ = ("_cells", "_endpoints")

    def __init__(self, cells: np.ndarray, endpoints: Endpoints) -> None:
        """Wrap an int8 cell array and its endpoint table. Use `validate` for raw input."""
        self._cells = cells
        self._endpoints = endpoints

    # ────────────────────────────── accessors ────────────────────────────── #

    @property
    def height(self) -> int:
        """Number of rows."""
        return int(self._cells.shape[0])

    @property
    def width(self) -> int:
        """Number of columns."""
        return int(self._cells.shape[1])

    @property
    def endpoints(self) -> Endpoints:
        """Mapping from color to its two terminal coordinates."""
        return self._endpoints

    @property
    def colors(self) -> tuple[int, ...]:
        """All colors on the board, in ascending order."""
        return tuple(sorted(self._endpoints))

    @property
    def cells(self) -> np.ndarray:
        """Return a copy of the underlying cell array."""
        return self._cells.copy()

    def in_bounds(self, c: Coordinate) -> bool:
        """Return True if coordinate c is inside the board bounds."""
        return 0 <= c.row < self.height and 0 <= c.col < self.width

    def get(self, c: Coordinate) -> int:
        """Return the color at coordinate c (0 for empty)."""
        if not self.in_bounds(c):
            raise ValueError(f"Coordinate {c} out of bounds")
        return int(self._cells[c.row, c.col])

    def __getitem__(self, c: Coordinate) -> int:
        """Return the color at coordinate c."""
        return self.get(c)

    def coords(self) -> Iterator[Coordinate]:
        """Yield every coordinate on the board in row-major order."""
        for r in range(self.height):
            for c in range(self.width):
                yield Coordinate(r, c)

    def cells_of(self, color: int) -> set[Coordinate]:
        """Return every coordinate currently holding the given color."""
        return {Coordinate(int(r), int(c)) for r, c in np.argwhere(self._cells == color)}

    def is_final(self) -> bool:
        """Return True if no cell on the board is empty."""
        return not bool((self._cells == EMPTY).any())

    # ────────────────────────────── geometry ────────────────────────────── #

    def edge(self, direction: Direction) -> int:
        """Return the last row or column index reachable when travelling in direction."""
        if direction is Direction.NORTH or direction is Direction.WEST:
            return 0
        if direction is Direction.SOUTH:
            return self.height - 1
        return self.width - 1

    def furthest(
        self, src: Coordinate, dest: Coordinate, direction: Direction, bound: int
    ) -> Coordinate:
        """
        Return the furthest cell reachable from src in a straight line.

        The scan starts one step past src and ends at the first of:
        reaching dest (dest is returned), meeting a non-empty cell (the cell just
        before it is returned) or passing the row/column `bound` (the cell on the
        bound is returned). If not even one step is possible, src is returned,
        which callers treat as "no progress in this direction".
        """
        sign = direction.d_row + direction.d_col
        last = src
        cur = src.step(direction)
        while self.in_bounds(cur) and (bound - cur.along(direction)) * sign >= 0:
            if cur == dest:
                return dest
            if self._cells[cur.row, cur.col] != EMPTY:
                return last
            last = cur
            cur = cur.step(direction)
        return last

    def northernmost(self, src: Coordinate, dest: Coordinate, min_row: int) -> Coordinate:
        """Furthest reachable cell going north, not past `min_row`."""
        return self.furthest(src, dest, Direction.NORTH, min_row)

    def southernmost(self, src: Coordinate, dest: Coordinate, max_row: int) -> Coordinate:
        """Furthest reachable cell going south, not past `max_row`."""
        return self.furthest(src, dest, Direction.SOUTH, max_row)

    def easternmost(self, src: Coordinate, dest: Coordinate, max_col: int) -> Coordinate:
        """Furthest reachable cell going east, not past `max_col`."""
        return self.furthest(src, dest, Direction.EAST, max_col)

    def westernmost(self, src: Coordinate, dest: Coordinate, min_col: int) -> Coordinate:
        """Furthest reachable cell going west, not past `min_col`."""
        return self.furthest(src, dest, Direction.WEST, min_col)

    # ────────────────────────────── new states ────────────────────────────── #

    def clone(self) -> Board:
        """Return a copy with its own cell array."""
        return Board(self._cells.copy(), self._endpoints)

    def painted(self, coords: Iterable[Coordinate], color: int) -> Board:
        """Return a clone with every given (currently empty) coordinate set to color."""
        board = self.clone()
        for c in coords:
            if board._cells[c.row, c.col] != EMPTY:
                raise InternalConsistencyError(
                    f"Cannot paint {c} with color {color}: "
                    f"already holds color {int(board._cells[c.row, c.col])}"
                )
            board._cells[c.row, c.col] = color
        return board

    # ────────────────────────────── text ────────────────────────────── #

    def render(self) -> str:
        """Return the board as one line of digits per row."""
        if self._cells.size and int(self._cells.max()) > MAX_RENDERABLE_COLOR:
            raise ValueError(
                f"Cannot render colors above {MAX_RENDERABLE_COLOR} as single digits"
            )
        return "\n".join("".join(str(int(v)) for v in row) for row in self._cells)

    def encode(self) -> bytes:
        """Return the raw cell bytes, usable as a dictionary key."""
        return self._cells.tobytes()

    @classmethod
    def from_text(cls, text: str) -> Board:
        """Parse and validate a board written in the `render` format."""
        return validate(parse_grid(text))

    def __eq__(self, other: object) -> bool:
        """Boards are equal when their cells are equal."""
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells.shape == other._cells.shape and bool(
            np.array_equal(self._cells, other._cells)
        )

    def __hash__(self) -> int:
        """Hash the raw cells."""
        return hash((self._cells.shape, self.encode()))

    def __str__(self) -> str:
        """Return the rendered board."""
        return self.render()

    def __repr__(self) -> str:
        """Return a string representation of the Board instance."""
        return f"Board(rows={self.height}, cols={self.width}, colors={len(self._endpoints)})"


def parse_grid(text: str) -> list[list[int]]:
    """
    Convert rendered board text into a grid of ints.

    Each non-blank line is one row and each character one cell. Digits are
    colors, `0` and `.` are empty cells.
    """
    rows = [line.strip() for line in text.strip("\n").splitlines() if line.strip()]
    if not rows:
        raise InvalidBoardError("Board text is empty")
    if any(len(r) != len(rows[0]) for r in rows):
        raise InvalidBoardError("All rows must have the same length")

    grid: list[list[int]] = []
    for r, row in enumerate(rows):
        values = []
        for c, ch in enumerate(row):
            if ch == ".":
                values.append(EMPTY)
            elif ch in DIGITS:
                values.append(int(ch))
            else:
                raise InvalidBoardError(f"Unexpected character {ch!r} at row {r}, column {c}")
        grid.append(values)
    return grid


def validate(raw_grid: Sequence[Sequence[int]] | np.ndarray) -> Board:
    """
    Build a Board from a rectangular grid of color ids (0 = empty).

    Every color must occur exactly twice; its two occurrences, in row-major
    order, become its endpoints.

    Raises:
        InvalidBoardError: if the grid is not a non-empty rectangle of integers in
            0..127, or if some color does not occur exactly twice.
    """
    try:
        arr = np.asarray(raw_grid)
    except ValueError as e:
        raise InvalidBoardError("All rows must have the same length") from e

    if arr.ndim != 2 or arr.size == 0:
        raise InvalidBoardError("Board must be a non-empty rectangular grid")
    if not np.issubdtype(arr.dtype, np.integer):
        raise InvalidBoardError(f"Board cells must be integers, got {arr.dtype}")
    if int(arr.min()) < EMPTY or int(arr.max()) > MAX_COLOR:
        raise InvalidBoardError(f"Board cells must lie between {EMPTY} and {MAX_COLOR}")

    cells = arr.astype(np.int8, copy=True)

    occurrences: dict[int, list[Coordinate]] = defaultdict(list)
    for r in range(cells.shape[0]):
        for c in range(cells.shape[1]):
            color = int(cells[r, c])
            if color != EMPTY:
                occurrences[color].append(Coordinate(r, c))

    endpoints: Endpoints = {}
    for color in sorted(occurrences):
        coords = occurrences[color]
        if len(coords) != 2:
            raise InvalidBoardError(
                f"Color {color} appears {len(coords)} times (should appear exactly twice)"
            )
        endpoints[color] = (coords[0], coords[1])

    return Board(cells, endpoints)
