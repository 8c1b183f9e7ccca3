"""Exception hierarchy shared by the board model, codec and solvers."""

from __future__ import annotations


class PuzzleError(Exception):
    """Base class for every error raised by this package."""


# -- structural errors (raised once, at construction / parse time) -------------


class InvalidBoardError(PuzzleError, ValueError):
    """The board description cannot produce a usable ``Board``."""


class BoardFormatError(InvalidBoardError):
    """The board text does not follow the ``rows cols`` + grid format."""


class InvalidGridError(InvalidBoardError):
    """Rows are empty, ragged, or dimensions are out of range."""


class MalformedBlockError(InvalidBoardError):
    """An id's cells do not form a 1×1, 2×1, 1×2 or 2×2 rectangle."""


class MissingBlockError(InvalidBoardError):
    """Block ids are not the dense range ``1..N``."""


class UnfittableLayoutError(InvalidBoardError):
    """The blocks cannot be packed into the canonical goal layout."""


# -- grid errors ----------------------------------------------------------------


class GridError(PuzzleError):
    pass


class OutOfBoundsError(GridError):
    pass


class RegionOccupiedError(GridError):
    pass


# -- move errors (expected, recovered by the solvers) ---------------------------


class MoveError(PuzzleError):
    """A requested move is not legal in the current state."""


class UnknownBlockError(MoveError):
    pass


class OutOfRangeMoveError(MoveError):
    pass


class BlockedMoveError(MoveError):
    pass


# -- search errors ---------------------------------------------------------------


class SearchInvariantError(PuzzleError, RuntimeError):
    """Undoing a move failed: the board bookkeeping is corrupt."""


class SearchTimeoutError(PuzzleError, TimeoutError):
    """The caller-supplied time limit ran out before the search finished."""
