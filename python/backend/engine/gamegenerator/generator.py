"""Generates random sliding block boards."""

from __future__ import annotations

import logging
import random

from backend.models.board import BLOCK_SIZES, EMPTY, Board
from backend.models.errors import GridError, InvalidGridError, MoveError
from backend.models.grid import Grid
from backend.models.vec2 import MAX_COORD, Vec2

logger = logging.getLogger(__name__)


class GameGenerator:
    """Creates boards by packing random blocks, then shuffling them."""

    @staticmethod
    def packed(size: Vec2, block_count: int, rng: random.Random | None = None) -> Board:
        """Return a board already in its goal layout.

        Cells are visited row-major; each empty cell receives the next id
        with a randomly chosen shape that fits.  Stops after *block_count*
        blocks, leaving the remaining cells as holes.
        """
        if block_count < 1 or block_count > MAX_COORD:
            raise InvalidGridError(f"Block count must be within 1..{MAX_COORD}, got {block_count}.")
        rng = rng or random.Random()
        grid = Grid.fill(size, EMPTY, empty=EMPTY)
        shapes = list(BLOCK_SIZES)
        next_id = 1

        for pos in grid.positions():
            if next_id > block_count:
                break
            if grid.get(pos) != EMPTY:
                continue
            rng.shuffle(shapes)
            for shape in shapes:
                try:
                    grid.fill_region_if_empty(pos, shape, next_id)
                except GridError:
                    continue
                break
            next_id += 1

        return Board(grid)

    @staticmethod
    def scramble(board: Board, shuffle_round: int, rng: random.Random | None = None) -> None:
        """Scramble *board* in-place with up to *shuffle_round* random moves.

        Candidates that turn out to be blocked are skipped and still use up
        a round.
        """
        rng = rng or random.Random()
        for _ in range(shuffle_round):
            moves = board.possible_moves()
            if not moves:
                break
            move = rng.choice(moves)
            try:
                board.apply(move)
            except MoveError:
                continue

    @staticmethod
    def generate(
        size: Vec2,
        block_count: int,
        shuffle_round: int = 8,
        rng: random.Random | None = None,
    ) -> Board:
        """Return a random board with at most *block_count* blocks."""
        rng = rng or random.Random()
        board = GameGenerator.packed(size, block_count, rng)
        GameGenerator.scramble(board, shuffle_round, rng)
        logger.debug(
            "Generated %dx%d board with %d blocks after %d shuffle rounds",
            size.y, size.x, len(board.blocks), shuffle_round,
        )
        return board
