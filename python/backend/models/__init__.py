from backend.models.board import Block, Board, Direction, Move, PuzzleState
from backend.models.grid import Grid
from backend.models.vec2 import Vec2

__all__ = ["Block", "Board", "Direction", "Grid", "Move", "PuzzleState", "Vec2"]
