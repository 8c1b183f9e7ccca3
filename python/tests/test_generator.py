"""Random board generation."""

from __future__ import annotations

import random

import pytest

from backend.engine.gamegenerator import GameGenerator
from backend.models.board import BLOCK_SIZES, Board
from backend.models.errors import InvalidGridError
from backend.models.vec2 import Vec2


@pytest.mark.parametrize("seed", range(5))
@pytest.mark.parametrize(
    "size, block_count",
    [(Vec2(4, 5), 10), (Vec2(3, 3), 4), (Vec2(6, 2), 3), (Vec2(1, 1), 1)],
    ids=["4x5", "3x3", "6x2", "1x1"],
)
def test_packed_board_is_its_own_goal(size: Vec2, block_count: int, seed: int) -> None:
    board = GameGenerator.packed(size, block_count, random.Random(seed))

    assert board.size == size
    assert board.is_goal()
    assert 1 <= len(board.blocks) <= block_count
    assert all(block.size in BLOCK_SIZES for block in board.blocks)


def test_packed_fills_the_whole_board_when_ids_allow() -> None:
    board = GameGenerator.packed(Vec2(4, 4), 127, random.Random(3))
    assert not board.holes


def test_packed_rejects_bad_block_count() -> None:
    with pytest.raises(InvalidGridError):
        GameGenerator.packed(Vec2(3, 3), 0)
    with pytest.raises(InvalidGridError):
        GameGenerator.packed(Vec2(3, 3), 128)


def test_generation_is_reproducible() -> None:
    first = GameGenerator.generate(Vec2(4, 5), 10, 20, random.Random(42))
    second = GameGenerator.generate(Vec2(4, 5), 10, 20, random.Random(42))
    assert first == second


@pytest.mark.parametrize("seed", range(5))
def test_scramble_keeps_blocks_and_holes(seed: int) -> None:
    rng = random.Random(seed)
    packed = GameGenerator.packed(Vec2(4, 5), 10, rng)
    board = packed.copy()

    GameGenerator.scramble(board, 30, rng)

    assert board.goal == packed.goal
    assert len(board.holes) == len(packed.holes)
    assert [b.size for b in board.blocks] == [b.size for b in packed.blocks]
    # The scrambled layout must itself be a valid board with the same goal.
    assert Board.from_rows(board.rows()).goal == packed.goal


def test_zero_shuffle_rounds_leaves_goal() -> None:
    board = GameGenerator.generate(Vec2(3, 3), 4, 0, random.Random(1))
    assert board.is_goal()
