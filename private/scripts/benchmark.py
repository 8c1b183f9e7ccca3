#!/usr/bin/env python3
"""Time IDDFS against IDA* on boards with a known optimal length.

Run from the project root::

    cd python && python ../private/scripts/benchmark.py

Each case generates a random board, solves it with IDA*, then replays the
first ``len - step`` moves so the remaining board needs exactly ``step``
moves.  Both solvers run ``REPEAT`` times on that board and the best time
is reported.  IDDFS is skipped where it would take minutes.
"""

from __future__ import annotations

import random
import sys
import time
from pathlib import Path

# Resolve paths: this script lives in <project_root>/private/scripts/
SCRIPT_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = SCRIPT_DIR.parent.parent
PYTHON_ROOT = PROJECT_ROOT / "python"

if str(PYTHON_ROOT) not in sys.path:
    sys.path.insert(0, str(PYTHON_ROOT))

from rich.console import Console  # noqa: E402
from rich.table import Table  # noqa: E402

from backend.engine.gamegenerator import GameGenerator  # noqa: E402
from backend.engine.gamesolver.solver import solve_iddfs, solve_idastar  # noqa: E402
from backend.models.board import Board  # noqa: E402
from backend.models.vec2 import Vec2  # noqa: E402

SEED = 42
REPEAT = 3
MAX_TRIES = 128

# (cols x rows, block count, optimal steps, run IDDFS too)
CASES: list[tuple[Vec2, int, int, bool]] = [
    (Vec2(5, 5), 8, 4, True),
    (Vec2(5, 5), 8, 6, True),
    (Vec2(8, 8), 24, 4, True),
    (Vec2(8, 8), 24, 6, True),
    (Vec2(5, 5), 8, 8, False),
    (Vec2(8, 8), 24, 12, False),
    (Vec2(16, 16), 96, 8, False),
    (Vec2(16, 16), 96, 12, False),
]


# -- board generation ---------------------------------------------------------


def _board_with_exact_step(
    size: Vec2, block_count: int, step: int, rng: random.Random
) -> Board:
    """Return a board whose optimal solution is exactly *step* moves."""
    for _ in range(MAX_TRIES):
        board = GameGenerator.generate(size, block_count, step * 3, rng)
        moves = solve_idastar(board) or []
        if len(moves) < step:
            continue
        for move in moves[: len(moves) - step]:
            board.apply(move)
        return board
    raise RuntimeError(f"No {size.x}x{size.y} board needing {step} moves after {MAX_TRIES} tries")


# -- timing -------------------------------------------------------------------


def _best_time(solve, board: Board) -> tuple[float, int]:
    best = float("inf")
    length = -1
    for _ in range(REPEAT):
        start = time.perf_counter()
        moves = solve(board)
        best = min(best, time.perf_counter() - start)
        length = len(moves) if moves is not None else -1
    return best, length


def _fmt(seconds: float | None) -> str:
    if seconds is None:
        return "[dim]-[/dim]"
    if seconds < 1:
        return f"{seconds * 1000:.1f} ms"
    return f"{seconds:.2f} s"


# -- main ---------------------------------------------------------------------


def main() -> None:
    console = Console()
    rng = random.Random(SEED)

    table = Table(title="Sliding block solver benchmark")
    table.add_column("Board", justify="left", style="cyan")
    table.add_column("Steps", justify="right")
    table.add_column("IDDFS", justify="right")
    table.add_column("IDA*", justify="right")

    for size, block_count, step, with_iddfs in CASES:
        label = f"{size.x:02}x{size.y:02}@{step:02}"
        with console.status(f"Running {label} …"):
            board = _board_with_exact_step(size, block_count, step, rng)
            iddfs_time = None
            if with_iddfs:
                iddfs_time, iddfs_len = _best_time(solve_iddfs, board)
                assert iddfs_len == step, f"{label}: IDDFS returned {iddfs_len} moves"
            idastar_time, idastar_len = _best_time(solve_idastar, board)
            assert idastar_len == step, f"{label}: IDA* returned {idastar_len} moves"
        table.add_row(label, str(step), _fmt(iddfs_time), _fmt(idastar_time))

    console.print(table)


if __name__ == "__main__":
    main()
