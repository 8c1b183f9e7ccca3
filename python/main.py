#!/usr/bin/env python3
"""Sliding Block Puzzle Solver.

Usage::

    python main.py search -i board.txt                # IDDFS, print to stdout
    python main.py search -i board.txt -a idastar -o out.txt
    python main.py search -i board.txt -a manual      # play by hand
    python main.py generate -s 4,5 -n 10              # random 5-row, 4-column board
    python main.py show -i board.txt
"""

import logging
import random
import sys
import time
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.engine.gamegenerator import GameGenerator  # noqa: E402
from backend.engine.gamesolver import Algorithm, Solver  # noqa: E402
from backend.models.board import Board  # noqa: E402
from backend.models.codec import format_board, format_solution, load_board, save_board  # noqa: E402
from backend.models.errors import InvalidBoardError, SearchTimeoutError  # noqa: E402
from backend.models.vec2 import Vec2  # noqa: E402

logger = logging.getLogger("sliding_puzzle")
err_console = Console(stderr=True)


# -- algorithm registry -------------------------------------------------------


class Mode(StrEnum):
    iddfs = "iddfs"
    idastar = "idastar"
    manual = "manual"


_ALGORITHMS = {
    Mode.iddfs: Algorithm.iddfs,
    Mode.idastar: Algorithm.idastar,
}


# -- helpers ------------------------------------------------------------------


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _write(text: str, output: Optional[Path]) -> None:
    if output is None:
        typer.echo(text, nl=False)
        return
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
    except OSError as exc:
        _write_failed(output, exc)


def _write_failed(path: Path, exc: OSError) -> None:
    err_console.print(f"[red]Cannot write {path}: {exc.strerror or exc}[/red]")
    raise typer.Exit(1)


def _load(path: Path) -> Board:
    try:
        board = load_board(path)
    except OSError as exc:
        err_console.print(f"[red]Cannot read {path}: {exc.strerror}[/red]")
        raise typer.Exit(1)
    except InvalidBoardError as exc:
        err_console.print(f"[red]Invalid input file {path}: {exc}[/red]")
        raise typer.Exit(1)
    logger.debug(
        "Loaded %dx%d board with %d blocks from %s",
        board.size.y, board.size.x, len(board.blocks), path,
    )
    return board


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False, no_args_is_help=True)


@app.callback()
def main(
    log_level: str = typer.Option(
        "WARNING", "--log-level",
        envvar="SLIDING_PUZZLE_LOG_LEVEL",
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Shortcut for --log-level DEBUG.",
    ),
) -> None:
    """Sliding Block Puzzle Solver."""
    _configure_logging("DEBUG" if verbose else log_level)


@app.command()
def search(
    board_file: Path = typer.Option(
        ..., "-i", "--input",
        help="Path to the board file.",
    ),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output",
        help="Path to the output file. Defaults to stdout.",
    ),
    algorithm: Mode = typer.Option(
        Mode.iddfs, "-a", "--algorithm",
        help="Search algorithm, or 'manual' to play by hand.",
    ),
    max_depth: Optional[int] = typer.Option(
        None, "--max-depth",
        min=1,
        help="IDDFS only: give up beyond this many moves.",
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout",
        envvar="SLIDING_PUZZLE_TIMEOUT",
        min=0.0,
        help="Abort the search after this many seconds.",
    ),
) -> None:
    """Search an optimal solution of the given board."""
    start = time.perf_counter()
    board = _load(board_file)

    if algorithm is Mode.manual:
        from frontend.cli.rich.app import play

        moves = play(board, console=err_console)
        _write(format_solution(moves, time.perf_counter() - start), output)
        return

    logger.info("Solving %s with %s", board_file, algorithm.value)
    try:
        moves = Solver.solve(
            board, _ALGORITHMS[algorithm], max_depth=max_depth, timeout=timeout
        )
    except SearchTimeoutError:
        err_console.print(f"[yellow]Search timed out after {timeout} seconds.[/yellow]")
        raise typer.Exit(2)

    _write(format_solution(moves, time.perf_counter() - start), output)


@app.command()
def generate(
    size: str = typer.Option(
        ..., "-s", "--size",
        help="Board size as COLS,ROWS, e.g. 4,5.",
    ),
    block_count: int = typer.Option(
        ..., "-n", "--block-count",
        min=1, max=127,
        help="At most how many blocks to generate.",
    ),
    shuffle_round: int = typer.Option(
        8, "--shuffle-round",
        min=0,
        help="At most how many random moves to shuffle the board with.",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Random seed for a reproducible board.",
    ),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output",
        help="Path to the output file. Defaults to stdout.",
    ),
) -> None:
    """Generate a random board."""
    try:
        dims = Vec2.parse(size)
        board = GameGenerator.generate(dims, block_count, shuffle_round, random.Random(seed))
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="'-s' / '--size'")

    if output is None:
        typer.echo(format_board(board), nl=False)
        return
    try:
        save_board(board, output)
    except OSError as exc:
        _write_failed(output, exc)
    logger.info("Saved generated board to %s", output)


@app.command()
def show(
    board_file: Path = typer.Option(
        ..., "-i", "--input",
        help="Path to the board file.",
    ),
) -> None:
    """Render a board with its legal moves and heuristic."""
    from frontend.cli.rich.app import show as show_board

    board = _load(board_file)
    show_board(board, Console(), title=board_file.name)


if __name__ == "__main__":
    app()
