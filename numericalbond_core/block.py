from __future__ import annotations

from typing import Dict, Mapping, Optional

from .direction import Direction
from .errors import InvalidArgumentError, InvalidOperationError

MAX_LINKS_PER_BLOCK = 99


class Block:
    """
    A single island on the grid.

    Tracks how many links leave the island in each direction, the total it
    must reach to be satisfied (``links_to_have``) and the cap on links in
    any one direction (``max_links``). Counts only grow, one link at a time,
    through ``link``.
    """

    def __init__(
        self,
        max_links: int = MAX_LINKS_PER_BLOCK,
        links_to_have: int = 0,
        links: Optional[Mapping[Direction, int]] = None,
    ):
        if max_links < 0:
            raise InvalidArgumentError(f"max_links must be non-negative: {max_links}")
        if links_to_have < 0:
            raise InvalidArgumentError(f"links_to_have must be non-negative: {links_to_have}")
        self._max_links: int = int(max_links)
        self._links_to_have: int = int(links_to_have)
        self._links: Dict[Direction, int] = {d: 0 for d in Direction.all_directions()}
        for d, count in (links or {}).items():
            if not isinstance(d, Direction):
                raise InvalidArgumentError(f"Not a direction: {d!r}")
            if not 0 <= count <= self._max_links:
                raise InvalidArgumentError(
                    f"Link count {count} for {d.name} outside [0, {self._max_links}]"
                )
            self._links[d] = int(count)
        # Cached sum of the per-direction counts, kept in step by link().
        self._current_links: int = sum(self._links.values())

    @property
    def max_links(self) -> int:
        return self._max_links

    @property
    def links_to_have(self) -> int:
        return self._links_to_have

    def links_in_direction(self, direction: Direction) -> int:
        return self._links[direction]

    def current_links(self) -> int:
        return self._current_links

    def is_satisfied(self) -> bool:
        return self._current_links == self._links_to_have

    def can_link(self, direction: Direction) -> bool:
        """True if one more link in ``direction`` stays within the cap."""
        return self._links[direction] + 1 <= self._max_links

    def link(self, direction: Direction) -> None:
        """Adds one link in ``direction``. Raises InvalidOperationError past the cap."""
        if not self.can_link(direction):
            raise InvalidOperationError(
                f"Block already has {self._links[direction]} links {direction.name} (max {self._max_links})"
            )
        self._links[direction] += 1
        self._current_links += 1

    def links(self) -> Dict[Direction, int]:
        """Copy of the per-direction counts."""
        return dict(self._links)

    def copy(self) -> 'Block':
        return Block(self._max_links, self._links_to_have, self._links)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Block):
            return NotImplemented
        return (
            self._max_links == other._max_links
            and self._links_to_have == other._links_to_have
            and self._links == other._links
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        counts = ", ".join(f"{d.name.lower()}={n}" for d, n in self._links.items())
        return f"Block(links_to_have={self._links_to_have}, max_links={self._max_links}, {counts})"
