"""Board model for sliding block puzzles.

A board is a rectangular grid of block ids.  ``0`` marks a hole; every
other id covers a 1×1, 2×1, 1×2 or 2×2 rectangle.  Blocks slide one cell
at a time into holes.  The goal is the canonical packed layout: blocks
placed in id order, row-major, each at the first empty cell where it fits.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import StrEnum
from typing import NamedTuple

from backend.models.errors import (
    BlockedMoveError,
    InvalidGridError,
    MalformedBlockError,
    MissingBlockError,
    OutOfBoundsError,
    OutOfRangeMoveError,
    RegionOccupiedError,
    UnfittableLayoutError,
    UnknownBlockError,
)
from backend.models.grid import Grid
from backend.models.vec2 import MAX_COORD, Vec2

EMPTY = 0


class Direction(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def vector(self) -> Vec2:
        return _VECTORS[self]

    @property
    def letter(self) -> str:
        return self.value[0].upper()

    def inverse(self) -> Direction:
        return _INVERSES[self]

    @classmethod
    def from_letter(cls, letter: str) -> Direction:
        for d in cls:
            if d.letter == letter.upper():
                return d
        raise ValueError(f"Invalid direction: {letter!r} (expected U, D, L or R).")


_VECTORS = {
    Direction.UP: Vec2(0, -1),
    Direction.DOWN: Vec2(0, 1),
    Direction.LEFT: Vec2(-1, 0),
    Direction.RIGHT: Vec2(1, 0),
}

_INVERSES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Move(NamedTuple):
    """Slide ``block_id`` one cell towards ``direction``."""

    block_id: int
    direction: Direction

    def inverse(self) -> Move:
        return Move(self.block_id, self.direction.inverse())

    @classmethod
    def parse(cls, text: str) -> Move:
        """Parse the compact notation, e.g. ``"5L"`` or ``"10u"``."""
        text = text.strip()
        if not text:
            raise ValueError("Empty move.")
        direction = Direction.from_letter(text[-1])
        try:
            block_id = int(text[:-1])
        except ValueError:
            raise ValueError(f"Invalid block id: {text[:-1]!r}") from None
        return cls(block_id, direction)

    def __str__(self) -> str:
        return f"{self.block_id}{self.direction.letter}"


# The only block shapes this puzzle class supports.
BLOCK_SIZES = (Vec2(1, 1), Vec2(2, 1), Vec2(1, 2), Vec2(2, 2))


@dataclass(frozen=True, order=True, slots=True)
class Block:
    id: int
    pos: Vec2
    size: Vec2

    @classmethod
    def from_positions(cls, block_id: int, positions: list[Vec2]) -> Block:
        """Build a block from its cells, sorted in row-major order."""
        anchor = positions[0]
        if len(positions) == 1:
            return cls(block_id, anchor, Vec2(1, 1))
        if len(positions) == 2:
            if positions[1] == anchor + Vec2(1, 0):
                return cls(block_id, anchor, Vec2(2, 1))
            if positions[1] == anchor + Vec2(0, 1):
                return cls(block_id, anchor, Vec2(1, 2))
            raise MalformedBlockError(
                f"Block {block_id}: cells {_fmt(positions)} are not adjacent."
            )
        if len(positions) == 4:
            expected = [anchor + Vec2(dx, dy) for dy in (0, 1) for dx in (0, 1)]
            if positions != expected:
                raise MalformedBlockError(
                    f"Block {block_id}: cells {_fmt(positions)} do not form a 2×2 square."
                )
            return cls(block_id, anchor, Vec2(2, 2))
        raise MalformedBlockError(
            f"Block {block_id} has {len(positions)} cells, allowed sizes are 1, 2, 4."
        )

    def cells(self) -> Iterator[Vec2]:
        for dy in range(self.size.y):
            for dx in range(self.size.x):
                yield Vec2(self.pos.x + dx, self.pos.y + dy)

    def shifted(self, delta: Vec2) -> Block:
        return Block(self.id, self.pos + delta, self.size)


@dataclass(frozen=True, slots=True)
class PuzzleState:
    """Hole set plus block placements (ordered by id).

    Only meaningful when compared against states of the same puzzle, where
    block ids and sizes are fixed.
    """

    holes: frozenset[Vec2]
    blocks: tuple[Block, ...]


class Board:
    """Mutable puzzle position with memoized goal and move candidates.

    Build with ``Board(grid)`` or :meth:`from_rows`; structural problems
    raise an :class:`~backend.models.errors.InvalidBoardError` subclass.
    """

    __slots__ = ("_grid", "_holes", "_blocks", "_goal", "_moves")

    def __init__(self, grid: Grid[int]) -> None:
        if grid.width > MAX_COORD or grid.height > MAX_COORD:
            raise InvalidGridError(
                f"Board {grid.width}×{grid.height} exceeds {MAX_COORD} cells per side."
            )
        holes: set[Vec2] = set()
        cells_by_id: dict[int, list[Vec2]] = {}
        for pos in grid.positions():
            block_id = grid.get(pos)
            if block_id == EMPTY:
                holes.add(pos)
            elif not isinstance(block_id, int) or not 0 < block_id <= MAX_COORD:
                raise MalformedBlockError(
                    f"Invalid block id {block_id!r} at {pos}; ids range 1..{MAX_COORD}."
                )
            else:
                cells_by_id.setdefault(block_id, []).append(pos)

        self._grid = grid.copy()
        self._holes = holes
        self._blocks = _parse_blocks(cells_by_id)
        self._goal = _pack_goal(grid.size, self._blocks)
        self._moves = self._scan_moves()

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_rows(cls, rows: list[list[int]]) -> Board:
        """Create a board from a list of rows of block ids.

        Example::

            Board.from_rows([[1, 1, 2], [0, 3, 0], [0, 4, 4]])
        """
        return cls(Grid.from_rows([list(row) for row in rows], empty=EMPTY))

    def copy(self) -> Board:
        other = object.__new__(Board)
        other._grid = self._grid.copy()
        other._holes = set(self._holes)
        other._blocks = self._blocks[:]
        other._goal = self._goal
        other._moves = set(self._moves)
        return other

    # -- queries --------------------------------------------------------------

    @property
    def size(self) -> Vec2:
        return self._grid.size

    @property
    def state(self) -> PuzzleState:
        return PuzzleState(frozenset(self._holes), tuple(self._blocks))

    @property
    def goal(self) -> PuzzleState:
        return self._goal

    @property
    def blocks(self) -> tuple[Block, ...]:
        return tuple(self._blocks)

    @property
    def holes(self) -> frozenset[Vec2]:
        return frozenset(self._holes)

    def rows(self) -> list[list[int]]:
        return self._grid.rows()

    def block_at(self, pos: Vec2) -> int | None:
        """Block id covering *pos*, ``0`` for a hole, ``None`` off the board."""
        return self._grid.get(pos)

    def block(self, block_id: int) -> Block:
        if not 0 < block_id <= len(self._blocks):
            raise UnknownBlockError(f"Block id {block_id} not found.")
        return self._blocks[block_id - 1]

    def is_goal(self) -> bool:
        if self._holes != self._goal.holes:
            return False
        return all(
            curr.pos == target.pos
            for curr, target in zip(self._blocks, self._goal.blocks)
        )

    def is_block_placed(self, block_id: int) -> bool:
        """Check if a block sits at its goal position."""
        return self.block(block_id).pos == self._goal.blocks[block_id - 1].pos

    def heuristic(self) -> int:
        """Sum of Manhattan distances from each block to its goal anchor."""
        return sum(
            curr.pos.manhattan(target.pos)
            for curr, target in zip(self._blocks, self._goal.blocks)
        )

    def possible_moves(self) -> list[Move]:
        """Candidate moves from the current state, in a stable order.

        Candidates come from hole adjacency only; a multi-cell block may
        still be blocked, which :meth:`move_block` reports.
        """
        return sorted(self._moves)

    # -- movement -------------------------------------------------------------

    def check_move(self, block_id: int, direction: Direction) -> None:
        """Raise a :class:`MoveError` if the whole block cannot slide."""
        block = self.block(block_id)
        delta = direction.vector
        for cell in block.cells():
            target = cell + delta
            occupant = self._grid.get(target)
            if occupant is None:
                raise OutOfRangeMoveError(
                    f"Block {block_id} cannot move {direction.value}: {target} is off the board."
                )
            if occupant != EMPTY and occupant != block_id:
                raise BlockedMoveError(
                    f"Block {block_id} cannot move {direction.value}: "
                    f"{target} is occupied by {occupant}."
                )

    def move_block(self, block_id: int, direction: Direction) -> None:
        """Slide a block one cell.  The board is unchanged if this raises."""
        self.check_move(block_id, direction)
        block = self._blocks[block_id - 1]
        moved = block.shifted(direction.vector)

        self._grid.fill_region(block.pos, block.size, EMPTY)
        self._holes.update(block.cells())
        self._grid.fill_region(moved.pos, moved.size, block_id)
        self._holes.difference_update(moved.cells())
        self._blocks[block_id - 1] = moved

        self._moves = self._scan_moves()

    def apply(self, move: Move) -> None:
        self.move_block(move.block_id, move.direction)

    # -- helpers --------------------------------------------------------------

    def _scan_moves(self) -> set[Move]:
        moves: set[Move] = set()
        for hole in self._holes:
            for direction in Direction:
                neighbour = self._grid.get(hole + direction.vector)
                if neighbour:
                    moves.add(Move(neighbour, direction.inverse()))
        return moves

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._grid == other._grid
            and self._holes == other._holes
            and self._blocks == other._blocks
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Board(rows={self.rows()!r})"


def _fmt(positions: Iterable[Vec2]) -> str:
    return ", ".join(str(p) for p in positions)


def _parse_blocks(cells_by_id: dict[int, list[Vec2]]) -> list[Block]:
    blocks: list[Block] = []
    for block_id in range(1, len(cells_by_id) + 1):
        positions = cells_by_id.get(block_id)
        if positions is None:
            raise MissingBlockError(
                f"Missing block id {block_id}; ids must be exactly 1..{len(cells_by_id)}."
            )
        blocks.append(Block.from_positions(block_id, positions))
    return blocks


def _pack_goal(size: Vec2, blocks: list[Block]) -> PuzzleState:
    """Greedily pack *blocks* in id order into the top-left of the board."""
    grid = Grid.fill(size, EMPTY, empty=EMPTY)
    placed: list[Block] = []
    holes: set[Vec2] = set()

    for pos in grid.positions():
        if grid.get(pos) != EMPTY:
            continue
        if len(placed) == len(blocks):
            holes.add(pos)
            continue
        block = blocks[len(placed)]
        try:
            grid.fill_region_if_empty(pos, block.size, block.id)
        except (OutOfBoundsError, RegionOccupiedError):
            holes.add(pos)
        else:
            placed.append(Block(block.id, pos, block.size))

    if len(placed) != len(blocks):
        raise UnfittableLayoutError(
            f"Cannot fit {len(blocks)} blocks into a board with size "
            f"{size.y}x{size.x}; block {len(placed) + 1} has no room."
        )
    return PuzzleState(frozenset(holes), tuple(placed))
