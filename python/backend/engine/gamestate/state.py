"""Tracks the mutable state of a manual play session."""

from __future__ import annotations

import time

from backend.models.board import Board, Move


class GameState:
    """Holds the current board, the applied move history, and elapsed time."""

    def __init__(self, board: Board) -> None:
        self.board = board
        self.history: list[Move] = []
        self._start_time: float = time.monotonic()

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        return time.monotonic() - self._start_time

    # -- moves ----------------------------------------------------------------

    @property
    def moves(self) -> int:
        return len(self.history)

    def record(self, move: Move) -> None:
        self.history.append(move)

    def pop(self) -> Move | None:
        return self.history.pop() if self.history else None

    @property
    def is_solved(self) -> bool:
        return self.board.is_goal()
