"""Fixed-size 2D array addressed by ``Vec2``."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Generic, TypeVar

from backend.models.errors import InvalidGridError, OutOfBoundsError, RegionOccupiedError
from backend.models.vec2 import Vec2

T = TypeVar("T")


class Grid(Generic[T]):
    """Row-major store of ``width × height`` cells.

    ``empty`` is the sentinel checked by :meth:`fill_region_if_empty`.
    Reads outside the grid return ``None``; writes outside raise
    :class:`OutOfBoundsError`.
    """

    __slots__ = ("_size", "_cells", "empty")

    def __init__(self, size: Vec2, cells: list[T], empty: T) -> None:
        if size.x <= 0 or size.y <= 0:
            raise InvalidGridError(f"Grid size must be positive, got {size}.")
        if len(cells) != size.x * size.y:
            raise InvalidGridError(
                f"Expected {size.x * size.y} cells for a {size.x}×{size.y} grid, "
                f"got {len(cells)}."
            )
        self._size = size
        self._cells = cells
        self.empty = empty

    # -- construction helpers -------------------------------------------------

    @classmethod
    def fill(cls, size: Vec2, value: T, empty: T) -> Grid[T]:
        return cls(size, [value] * (size.x * size.y), empty)

    @classmethod
    def from_rows(cls, rows: list[list[T]], empty: T) -> Grid[T]:
        """Build a grid from a rectangular list of rows.

        Example::

            Grid.from_rows([[1, 1], [0, 2]], empty=0)
        """
        if not rows or not rows[0]:
            raise InvalidGridError("Grid needs at least one row and one column.")
        width = len(rows[0])
        cells: list[T] = []
        for r, row in enumerate(rows):
            if len(row) != width:
                raise InvalidGridError(
                    f"Row {r} has {len(row)} cells, expected {width}."
                )
            cells.extend(row)
        return cls(Vec2(width, len(rows)), cells, empty)

    # -- queries --------------------------------------------------------------

    @property
    def size(self) -> Vec2:
        return self._size

    @property
    def width(self) -> int:
        return self._size.x

    @property
    def height(self) -> int:
        return self._size.y

    def contains(self, pos: Vec2) -> bool:
        return 0 <= pos.x < self._size.x and 0 <= pos.y < self._size.y

    def get(self, pos: Vec2) -> T | None:
        if not self.contains(pos):
            return None
        return self._cells[pos.y * self._size.x + pos.x]

    def positions(self) -> Iterator[Vec2]:
        """Every cell position in row-major order."""
        for y in range(self._size.y):
            for x in range(self._size.x):
                yield Vec2(x, y)

    def rows(self) -> list[list[T]]:
        w = self._size.x
        return [self._cells[r * w : (r + 1) * w] for r in range(self._size.y)]

    # -- mutation -------------------------------------------------------------

    def set(self, pos: Vec2, value: T) -> None:
        if not self.contains(pos):
            raise OutOfBoundsError(f"{pos} is outside the {self.width}×{self.height} grid.")
        self._cells[pos.y * self._size.x + pos.x] = value

    def fill_region(self, anchor: Vec2, size: Vec2, value: T) -> None:
        """Overwrite the ``size`` rectangle at ``anchor``; all-or-nothing."""
        cells = list(_region(anchor, size))
        for pos in cells:
            if not self.contains(pos):
                raise OutOfBoundsError(
                    f"Region {size.x}×{size.y} at {anchor} leaves the grid."
                )
        for pos in cells:
            self._cells[pos.y * self._size.x + pos.x] = value

    def fill_region_if_empty(self, anchor: Vec2, size: Vec2, value: T) -> None:
        """Like :meth:`fill_region`, but every target cell must be empty."""
        cells = list(_region(anchor, size))
        for pos in cells:
            current = self.get(pos)
            if current is None:
                raise OutOfBoundsError(
                    f"Region {size.x}×{size.y} at {anchor} leaves the grid."
                )
            if current != self.empty:
                raise RegionOccupiedError(f"{pos} is already occupied by {current!r}.")
        for pos in cells:
            self._cells[pos.y * self._size.x + pos.x] = value

    def copy(self) -> Grid[T]:
        return Grid(self._size, self._cells[:], self.empty)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._size == other._size and self._cells == other._cells

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Grid(size={self._size!r}, rows={self.rows()!r})"


def _region(anchor: Vec2, size: Vec2) -> Iterator[Vec2]:
    for dy in range(size.y):
        for dx in range(size.x):
            yield Vec2(anchor.x + dx, anchor.y + dy)
