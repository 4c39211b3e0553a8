from __future__ import annotations

from enum import Enum
from typing import Tuple

from .errors import InvalidArgumentError
from .position import Position


class Direction(Enum):
    """The four cardinal directions. Each value is the (dx, dy) step it applies."""
    UP = (0, -1)
    RIGHT = (1, 0)
    DOWN = (0, 1)
    LEFT = (-1, 0)

    def translate(self, position: Position) -> Position:
        """Returns the position one step away in this direction. Bounds are not checked."""
        dx, dy = self.value
        return Position(position.x + dx, position.y + dy)

    def opposite(self) -> 'Direction':
        dx, dy = self.value
        return Direction((-dx, -dy))

    @classmethod
    def all_directions(cls) -> Tuple['Direction', ...]:
        """All four directions in declaration order (UP, RIGHT, DOWN, LEFT)."""
        return tuple(cls)

    @classmethod
    def from_name(cls, name: str) -> 'Direction':
        """Looks up a direction by its lower- or upper-case name, e.g. 'up'."""
        try:
            return cls[str(name).upper()]
        except KeyError:
            raise InvalidArgumentError(f"Unknown direction: {name!r}") from None
