"""Rich terminal frontend — board tables, panels, and manual play.

Uses the ``rich`` library for styled output.  Manual play reads one move
per line in the compact ``<id><U|D|L|R>`` notation (e.g. ``5L``).
"""

from __future__ import annotations

from collections.abc import Callable

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.gameplay import GamePlay
from backend.models.board import Board, Move
from backend.models.codec import format_moves
from backend.models.errors import MoveError
from backend.models.vec2 import Vec2

_PALETTE = (
    "bright_cyan",
    "bright_magenta",
    "bright_yellow",
    "bright_blue",
    "bright_red",
    "cyan",
    "magenta",
    "yellow",
)

_QUIT = {"q", "quit", "exit"}
_UNDO = {"u", "undo"}


# -- board rendering ----------------------------------------------------------


def render_board(board: Board) -> Table:
    """Return a Rich Table representing the puzzle grid.

    Blocks sitting at their goal position are shown in green.
    """
    width = len(str(len(board.blocks)))
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(board.size.x):
        table.add_column(width=width + 1, justify="center")

    for y in range(board.size.y):
        cells: list[str] = []
        for x in range(board.size.x):
            block_id = board.block_at(Vec2(x, y))
            if block_id == 0:
                cells.append("[dim]·[/dim]")
            elif board.is_block_placed(block_id):
                cells.append(f"[bold green]{block_id:>{width}}[/bold green]")
            else:
                style = _PALETTE[(block_id - 1) % len(_PALETTE)]
                cells.append(f"[{style}]{block_id:>{width}}[/{style}]")
        table.add_row(*cells)

    return table


def _render_status(board: Board) -> Text:
    status = Text()
    status.append("  Heuristic: ", style="dim")
    status.append(str(board.heuristic()), style="bold yellow")
    status.append("    Moves: ", style="dim")
    status.append(format_moves(board.possible_moves()) or "-", style="bold cyan")
    return status


def show(board: Board, console: Console, title: str = "Board") -> None:
    """Print *board* in a panel with its heuristic and candidate moves."""
    size = board.size
    panel = Panel(
        Group(Align.center(render_board(board)), Align.center(_render_status(board))),
        title=f"[bold cyan]{title}  {size.y}×{size.x}[/bold cyan]",
        border_style="bold green" if board.is_goal() else "bright_blue",
        padding=(1, 2),
    )
    console.print(Align.center(panel))


# -- manual play --------------------------------------------------------------


def play(
    board: Board,
    console: Console | None = None,
    read: Callable[[str], str] | None = None,
) -> list[Move]:
    """Run an interactive session and return the moves applied.

    Ends on the goal, ``q``, or end of input.  ``u`` undoes the last move.
    Invalid commands and illegal moves are reported and ignored.
    """
    console = console or Console(stderr=True)
    read = read or console.input
    game = GamePlay(board)

    show(game.board, console, title="Manual Play")
    while not game.is_won:
        try:
            line = read("Enter a move: ").strip()
        except EOFError:
            break
        if not line:
            continue
        if line.lower() in _QUIT:
            break
        if line.lower() in _UNDO:
            undone = game.undo()
            if undone is None:
                console.print("[yellow]Nothing to undo.[/yellow]")
            else:
                console.print(f"[cyan]Undid[/cyan] [bold]{undone}[/bold]")
                show(game.board, console, title="Manual Play")
            continue

        try:
            game.command(line)
        except MoveError as exc:
            console.print(f"[red]{exc}[/red]")
            continue
        except ValueError as exc:
            console.print(f"[yellow]Invalid command:[/yellow] {exc}")
            continue
        show(game.board, console, title="Manual Play")

    if game.is_won:
        console.print(
            f"[bold green]Reached the goal in {game.state.moves} moves "
            f"({game.state.elapsed_time:.1f}s).[/bold green]"
        )
    return game.history
