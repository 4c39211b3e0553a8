from __future__ import annotations

import logging
import threading
from itertools import islice
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from .block import MAX_LINKS_PER_BLOCK, Block
from .direction import Direction
from .errors import InvalidArgumentError, InvalidOperationError, InvalidStateError
from .position import Position

logger = logging.getLogger(__name__)


class Grid:
    """
    Square grid of blocks and the links between them.

    The grid exclusively owns one Block per legal position, i.e. per
    Position(x, y) with 0 <= x, y < size. Links are always recorded on both
    ends: a link from A to B in direction d bumps A's count for d and B's
    count for d.opposite(), so the two counts can never disagree.

    Snapshots returned by ``blocks()`` are deep copies; ``block_at`` returns
    the live Block. A single re-entrant lock serialises ``link`` against the
    whole-grid reads.
    """

    def __init__(
        self,
        size: int,
        blocks: Optional[Mapping[Position, Block]] = None,
        max_links: int = MAX_LINKS_PER_BLOCK,
    ):
        """
        Args:
            size: Side length of the square grid (>= 0).
            blocks: Optional mapping to adopt. It must hold exactly one Block per
                legal position; the Blocks are copied. When omitted, every
                position gets a fresh unlinked Block capped at ``max_links``.
            max_links: Per-direction cap for freshly generated Blocks.
        """
        if size < 0:
            raise InvalidArgumentError(f"Grid size must be non-negative: {size}")
        self._size: int = size
        self._lock = threading.RLock()
        if blocks is None:
            self._blocks: Dict[Position, Block] = {
                pos: Block(max_links) for pos in self.positions()
            }
            return
        if len(blocks) != size * size:
            raise InvalidArgumentError(
                f"Expected {size * size} blocks for a {size}x{size} grid, got {len(blocks)}"
            )
        # Same count, so any illegal key means some legal position is missing.
        extra = list(islice((p for p in blocks if not isinstance(p, Position) or not self.is_legal(p)), 4))
        if extra:
            missing = list(islice((p for p in self.positions() if p not in blocks), 4))
            raise InvalidArgumentError(
                f"Blocks do not match a {size}x{size} grid (missing={missing}, extra={extra})"
            )
        self._blocks = {pos: blocks[pos].copy() for pos in self.positions()}

    @classmethod
    def from_blocks(cls, size: int, blocks: Mapping[Position, Block]) -> 'Grid':
        """Builds a grid around copies of ``blocks``, which must cover every legal position exactly."""
        if blocks is None:
            raise InvalidArgumentError("blocks must not be None")
        return cls(size, blocks)

    @classmethod
    def from_targets(cls, rows: Sequence[Sequence[int]], max_links: int = MAX_LINKS_PER_BLOCK) -> 'Grid':
        """Builds an unlinked puzzle. ``rows[y][x]`` is the number of links Position(x, y) must reach."""
        size = len(rows)
        for y, row in enumerate(rows):
            if len(row) != size:
                raise InvalidArgumentError(f"Row {y} has {len(row)} entries, expected {size}")
        blocks = {
            Position(x, y): Block(max_links, int(rows[y][x]))
            for y in range(size)
            for x in range(size)
        }
        return cls.from_blocks(size, blocks)

    # =============================================================================
    # QUERIES
    # =============================================================================

    @property
    def size(self) -> int:
        return self._size

    def positions(self) -> Iterator[Position]:
        """Iterates over all legal positions, x outer and y inner."""
        for x in range(self._size):
            for y in range(self._size):
                yield Position(x, y)

    def blocks(self) -> Dict[Position, Block]:
        """Snapshot of the grid. Mutating the returned blocks does not touch the grid."""
        with self._lock:
            return {pos: block.copy() for pos, block in self._blocks.items()}

    def is_legal(self, position: Optional[Position]) -> bool:
        return (
            position is not None
            and 0 <= position.x < self._size
            and 0 <= position.y < self._size
        )

    def _require_legal(self, position: Optional[Position]) -> None:
        if not self.is_legal(position):
            raise InvalidArgumentError(f"Illegal position: {position}")

    def block_at(self, position: Position) -> Block:
        self._require_legal(position)
        return self._blocks[position]

    def nearby_position(self, position: Position, direction: Direction) -> Optional[Position]:
        """The legal neighbour of ``position`` in ``direction``, or None at the edge."""
        self._require_legal(position)
        if direction is None:
            raise InvalidArgumentError("direction must not be None")
        nearby = direction.translate(position)
        return nearby if self.is_legal(nearby) else None

    def neighbors(self, position: Position) -> List[Tuple[Direction, Position]]:
        """Legal neighbours of ``position`` in Direction.all_directions() order."""
        result: List[Tuple[Direction, Position]] = []
        for d in Direction.all_directions():
            nearby = self.nearby_position(position, d)
            if nearby is not None:
                result.append((d, nearby))
        return result

    def direction(self, pos1: Position, pos2: Position) -> Optional[Direction]:
        """Direction leading from ``pos1`` to the adjacent ``pos2``; None if they are not adjacent."""
        self._require_legal(pos1)
        self._require_legal(pos2)
        for d in Direction.all_directions():
            if d.translate(pos1) == pos2:
                return d
        return None

    def can_link(self, pos1: Position, pos2: Position) -> bool:
        return self.direction(pos1, pos2) is not None

    def links_between(self, pos1: Position, pos2: Position) -> int:
        d = self.direction(pos1, pos2)
        if d is None:
            raise InvalidArgumentError(f"Positions aren't adjacent: {pos1} and {pos2}")
        return self._blocks[pos1].links_in_direction(d)

    def is_complete(self) -> bool:
        """True once every block has exactly the number of links it needs."""
        with self._lock:
            return all(b.is_satisfied() for b in self._blocks.values())

    # =============================================================================
    # MUTATION
    # =============================================================================

    def link(self, pos1: Position, pos2: Position) -> None:
        """
        Adds one link between two adjacent positions.

        Raises:
            InvalidArgumentError: either position is outside the grid.
            InvalidStateError: the positions are not adjacent.
            InvalidOperationError: either end is already at its cap in the
                link's direction. Neither block is changed in that case.
        """
        with self._lock:
            d = self.direction(pos1, pos2)
            if d is None:
                logger.debug("Rejected link %s -> %s: not adjacent", pos1, pos2)
                raise InvalidStateError(f"Can't link {pos1} and {pos2}")
            first = self._blocks[pos1]
            second = self._blocks[pos2]
            back = d.opposite()
            # Check both ends before touching either so a failure changes nothing.
            for block, direction in ((first, d), (second, back)):
                if not block.can_link(direction):
                    logger.debug("Rejected link %s -> %s: cap reached", pos1, pos2)
                    raise InvalidOperationError(
                        f"Can't add another link {direction.name} (max {block.max_links})"
                    )
            first.link(d)
            second.link(back)
            logger.debug("Linked %s -> %s (%s), now %d", pos1, pos2, d.name, first.links_in_direction(d))

    # =============================================================================
    # RENDERING
    # =============================================================================

    def pretty(self) -> str:
        """
        Text view of the board, one line per row y. Each cell shows
        ``current/target``; link counts appear between linked neighbours.
        """
        with self._lock:
            cells = {pos: f"{b.current_links()}/{b.links_to_have}" for pos, b in self._blocks.items()}
            cell_w = max((len(t) for t in cells.values()), default=0)
            conn_w = 2 + max(
                (len(str(b.links_in_direction(Direction.RIGHT))) for b in self._blocks.values()),
                default=1,
            )
            lines: List[str] = []
            for y in range(self._size):
                row: List[str] = []
                below: List[str] = []
                for x in range(self._size):
                    pos = Position(x, y)
                    block = self._blocks[pos]
                    row.append(cells[pos].rjust(cell_w))
                    if x < self._size - 1:
                        right = block.links_in_direction(Direction.RIGHT)
                        row.append((str(right) if right else "").center(conn_w))
                    down = block.links_in_direction(Direction.DOWN)
                    below.append((str(down) if down else "").center(cell_w))
                lines.append("".join(row).rstrip())
                if y < self._size - 1:
                    lines.append((" " * conn_w).join(below).rstrip())
            return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Grid(size={self._size}, blocks={self._blocks})"
