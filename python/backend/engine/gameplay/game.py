"""Manual play logic — applies typed moves and checks the win condition."""

from __future__ import annotations

import logging

from backend.engine.gamestate import GameState
from backend.models.board import Board, Move
from backend.models.errors import MoveError

logger = logging.getLogger(__name__)


class GamePlay:
    """Orchestrates a single manual session on a copy of the given board."""

    def __init__(self, board: Board) -> None:
        self.state = GameState(board.copy())

    @property
    def board(self) -> Board:
        return self.state.board

    # -- movement -------------------------------------------------------------

    def move(self, move: Move) -> None:
        """Apply *move*; raises :class:`MoveError` and leaves the board as is."""
        self.board.apply(move)
        self.state.record(move)

    def command(self, text: str) -> Move:
        """Apply a move written as ``"5L"``.

        Raises ``ValueError`` for unparsable text and :class:`MoveError`
        for an illegal move.
        """
        move = Move.parse(text)
        self.move(move)
        return move

    def undo(self) -> Move | None:
        """Revert the most recent move.  Returns it, or ``None`` if there is none."""
        move = self.state.pop()
        if move is None:
            return None
        try:
            self.board.apply(move.inverse())
        except MoveError:
            logger.error("Undo of %s failed", move)
            raise
        return move

    # -- queries --------------------------------------------------------------

    @property
    def history(self) -> list[Move]:
        return list(self.state.history)

    @property
    def is_won(self) -> bool:
        return self.state.is_solved
