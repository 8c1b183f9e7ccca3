"""Board text format and solution output.

Board files look like::

    5 4
    1 2 2 3
    1 2 2 3
    4 0 5 5
    4 0 7 6
    9 10 8 6

The header is ``rows cols``; each following line holds ``cols`` block ids
with ``0`` for a hole.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from backend.models.board import EMPTY, Board, Move
from backend.models.errors import BoardFormatError
from backend.models.grid import Grid
from backend.models.vec2 import MAX_COORD


# -- parsing ------------------------------------------------------------------


def _parse_int(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise BoardFormatError(f"Failed to parse {what}: {token!r} is not an integer.") from None


def parse_grid(text: str) -> Grid[int]:
    """Parse board text into an id grid without validating block shapes."""
    lines = text.splitlines()
    if not lines or not lines[0].strip():
        raise BoardFormatError("Missing first line with the board row & column size.")

    header = lines[0].split()
    if len(header) != 2:
        raise BoardFormatError(
            f"First line should be the board row & column size, got {lines[0]!r}."
        )
    rows = _parse_int(header[0], "row count")
    cols = _parse_int(header[1], "column count")
    if not (0 < rows <= MAX_COORD and 0 < cols <= MAX_COORD):
        raise BoardFormatError(
            f"Row and column sizes must be within 1..{MAX_COORD}, got {rows}x{cols}."
        )

    body = lines[1:]
    if len(body) < rows:
        raise BoardFormatError(f"Expected {rows} rows, got {len(body)}.")
    extra = [line for line in body[rows:] if line.strip()]
    if extra:
        raise BoardFormatError(
            f"Expected {rows} rows, found {len(extra)} extra non-blank line(s)."
        )

    grid_rows: list[list[int]] = []
    for row_i, line in enumerate(body[:rows]):
        tokens = line.split()
        if len(tokens) != cols:
            raise BoardFormatError(
                f"Invalid line {row_i}: expect {cols} blocks, got {len(tokens)}."
            )
        grid_rows.append([_parse_int(t, f"block id on line {row_i}") for t in tokens])

    return Grid.from_rows(grid_rows, empty=EMPTY)


def parse_board(text: str) -> Board:
    """Parse board text into a validated :class:`Board`."""
    return Board(parse_grid(text))


def load_board(path: Path) -> Board:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise BoardFormatError(
            f"Board file is not valid UTF-8 (byte {exc.start}: {exc.reason}).",
        ) from None
    return parse_board(text)


# -- serialisation -------------------------------------------------------------


def format_board(board: Board) -> str:
    rows = board.rows()
    lines = [f"{len(rows)} {len(rows[0])}"]
    lines.extend(" ".join(str(v) for v in row) for row in rows)
    return "\n".join(lines) + "\n"


def save_board(board: Board, path: Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_board(board), encoding="utf-8")


# -- moves & solutions -----------------------------------------------------------


def parse_move(text: str) -> Move:
    """Parse ``"5L"`` style notation.  Raises ``ValueError`` on bad input."""
    return Move.parse(text)


def format_moves(moves: Sequence[Move]) -> str:
    return " ".join(str(m) for m in moves)


def format_solution(moves: Sequence[Move] | None, elapsed: float) -> str:
    """Render a solver result the way the ``search`` command prints it."""
    if moves is None:
        return "no solution\n"
    return (
        f"Total run time = {elapsed:.4f} seconds.\n"
        f"An optimal solution has {len(moves)} moves:\n"
        f"{format_moves(moves)}\n"
    )
