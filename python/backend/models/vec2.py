"""Integer 2D coordinate used for cell positions, block sizes and directions."""

from __future__ import annotations

from dataclasses import dataclass

# Dimensions and block ids must fit in a signed byte.
MAX_COORD = 127


@dataclass(frozen=True, order=True, slots=True)
class Vec2:
    x: int
    y: int

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def manhattan(self, other: Vec2) -> int:
        """L1 distance to *other*."""
        return abs(self.x - other.x) + abs(self.y - other.y)

    @classmethod
    def parse(cls, text: str) -> Vec2:
        """Parse ``"x,y"`` (e.g. ``"4,5"``)."""
        parts = text.split(",")
        if len(parts) != 2:
            raise ValueError(
                f"Expected 2 comma-delimited numbers, e.g. 4,2 — got {text!r}."
            )
        try:
            x, y = (int(p.strip()) for p in parts)
        except ValueError:
            raise ValueError(f"Cannot parse {text!r} as x,y integers.") from None
        return cls(x, y)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"
