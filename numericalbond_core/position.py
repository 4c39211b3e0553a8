from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """Immutable grid coordinate. x is the column, y the row; legality is checked by the Grid."""
    x: int
    y: int

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"
