"""Optimal sliding block solvers: IDDFS and IDA*.

Both searches mutate a single working copy of the board, undoing each move
on the way back out.  Traversal uses an explicit stack of move iterators
instead of recursion, so solution length is not bounded by Python's
recursion limit.  Cycle avoidance is path-local: a state is skipped only
while it is on the current path.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Iterator
from enum import StrEnum

from backend.models.board import Board, Move, PuzzleState
from backend.models.errors import MoveError, SearchInvariantError, SearchTimeoutError

logger = logging.getLogger(__name__)


class Algorithm(StrEnum):
    iddfs = "iddfs"
    idastar = "idastar"


# -- shared traversal helpers ----------------------------------------------------


class _Deadline:
    __slots__ = ("_at",)

    def __init__(self, timeout: float | None) -> None:
        self._at = None if timeout is None else time.monotonic() + timeout

    def check(self) -> None:
        if self._at is not None and time.monotonic() > self._at:
            raise SearchTimeoutError("Search timed out.")


def _undo(board: Board, move: Move) -> None:
    try:
        board.apply(move.inverse())
    except MoveError as exc:
        raise SearchInvariantError(
            f"Undo of {move} failed; board bookkeeping is inconsistent."
        ) from exc


def _try_apply(board: Board, move: Move) -> bool:
    try:
        board.apply(move)
    except MoveError:
        return False
    return True


# -- IDDFS ---------------------------------------------------------------------


def _depth_limited(
    board: Board, limit: int, deadline: _Deadline
) -> tuple[list[Move] | None, bool, int]:
    """Depth-bounded DFS from *board*.

    Returns ``(moves, cutoff, expanded)``: the solution (or ``None``),
    whether any branch was cut by the depth limit, and how many nodes were
    expanded.
    """
    if board.is_goal():
        return [], False, 0

    path: list[Move] = []
    visited: set[PuzzleState] = {board.state}
    stack: list[Iterator[Move]] = [iter(board.possible_moves())]
    cutoff = False
    expanded = 1

    while stack:
        move = next(stack[-1], None)
        if move is None:
            # Every candidate from this node failed: leave it.
            stack.pop()
            visited.discard(board.state)
            if path:
                _undo(board, path.pop())
            continue

        deadline.check()
        if not _try_apply(board, move):
            continue
        path.append(move)

        if board.is_goal():
            return path, cutoff, expanded
        if len(path) >= limit:
            cutoff = True
            _undo(board, path.pop())
            continue
        state = board.state
        if state in visited:
            _undo(board, path.pop())
            continue

        visited.add(state)
        stack.append(iter(board.possible_moves()))
        expanded += 1

    return None, cutoff, expanded


def solve_iddfs(
    board: Board,
    *,
    max_depth: int | None = None,
    timeout: float | None = None,
) -> list[Move] | None:
    """Return a minimum-length move list for *board*, or ``None``.

    The depth limit starts at 1 and grows by one per round.  ``None`` is
    returned once a round finishes without hitting the depth limit (the
    reachable space is exhausted) or when ``max_depth`` is exceeded.
    *board* itself is never modified.
    """
    deadline = _Deadline(timeout)
    limit = 1
    while max_depth is None or limit <= max_depth:
        moves, cutoff, expanded = _depth_limited(board.copy(), limit, deadline)
        logger.debug("IDDFS limit %d: expanded %d nodes", limit, expanded)
        if moves is not None:
            logger.info("IDDFS found a %d-move solution", len(moves))
            return moves
        if not cutoff:
            logger.info("IDDFS exhausted the state space at limit %d", limit)
            return None
        limit += 1

    logger.info("IDDFS gave up after max depth %d", max_depth)
    return None


# -- IDA* ----------------------------------------------------------------------


def _cost_limited(
    board: Board, f_limit: int, deadline: _Deadline
) -> tuple[list[Move] | None, int, int]:
    """Search paths whose ``g + h`` stays within *f_limit*.

    Returns ``(moves, next_limit, expanded)``.  ``next_limit`` is the
    smallest f-value that exceeded *f_limit*, or *f_limit* itself when no
    candidate exceeded it.
    """
    if board.is_goal():
        return [], f_limit, 0

    path: list[Move] = []
    visited: set[PuzzleState] = {board.state}
    stack: list[Iterator[Move]] = [iter(board.possible_moves())]
    next_limit = math.inf
    expanded = 1

    while stack:
        move = next(stack[-1], None)
        if move is None:
            stack.pop()
            visited.discard(board.state)
            if path:
                _undo(board, path.pop())
            continue

        deadline.check()
        if not _try_apply(board, move):
            continue

        f_value = len(path) + 1 + board.heuristic()
        if f_value > f_limit:
            next_limit = min(next_limit, f_value)
            _undo(board, move)
            continue
        path.append(move)

        if board.is_goal():
            return path, f_limit, expanded
        state = board.state
        if state in visited:
            _undo(board, path.pop())
            continue

        visited.add(state)
        stack.append(iter(board.possible_moves()))
        expanded += 1

    if next_limit == math.inf:
        return None, f_limit, expanded
    return None, int(next_limit), expanded


def solve_idastar(board: Board, *, timeout: float | None = None) -> list[Move] | None:
    """Return a minimum-length move list for *board*, or ``None``.

    Uses the board's Manhattan heuristic as an admissible lower bound.
    *board* itself is never modified.
    """
    deadline = _Deadline(timeout)
    f_limit = board.heuristic()
    while True:
        moves, next_limit, expanded = _cost_limited(board.copy(), f_limit, deadline)
        logger.debug("IDA* f-limit %d: expanded %d nodes", f_limit, expanded)
        if moves is not None:
            logger.info("IDA* found a %d-move solution", len(moves))
            return moves
        if next_limit <= f_limit:
            logger.info("IDA* found nothing beyond f-limit %d: no solution", f_limit)
            return None
        f_limit = next_limit


# -- public API ----------------------------------------------------------------


class Solver:
    """Stateless facade over the search algorithms."""

    @staticmethod
    def solve(
        board: Board,
        algorithm: Algorithm = Algorithm.idastar,
        *,
        max_depth: int | None = None,
        timeout: float | None = None,
    ) -> list[Move] | None:
        """Return an optimal move sequence for *board*, or ``None`` if unsolvable."""
        if algorithm is Algorithm.iddfs:
            return solve_iddfs(board, max_depth=max_depth, timeout=timeout)
        return solve_idastar(board, timeout=timeout)

    @staticmethod
    def hint(board: Board, algorithm: Algorithm = Algorithm.idastar) -> Move | None:
        """Return the first move of an optimal solution, or ``None`` if solved / unsolvable."""
        if board.is_goal():
            return None
        moves = Solver.solve(board, algorithm)
        return moves[0] if moves else None
