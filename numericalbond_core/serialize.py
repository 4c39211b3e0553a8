from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple

from .block import MAX_LINKS_PER_BLOCK, Block
from .direction import Direction
from .errors import InvalidArgumentError
from .grid import Grid
from .position import Position


def position_to_json(p: Position) -> List[int]:
    return [int(p.x), int(p.y)]


def position_from_json(obj: Any) -> Position:
    """Accepts [x, y] or {"x": .., "y": ..}."""
    try:
        if isinstance(obj, dict):
            return Position(int(obj["x"]), int(obj["y"]))
        x, y = obj
        return Position(int(x), int(y))
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidArgumentError(f"bad position {obj!r}: {e}") from e


def block_to_json(position: Position, block: Block) -> Dict[str, Any]:
    return {
        "x": int(position.x),
        "y": int(position.y),
        "linksToHave": block.links_to_have,
        "maxLinks": block.max_links,
        "links": {d.name.lower(): block.links_in_direction(d) for d in Direction.all_directions()},
    }


def block_from_json(obj: Dict[str, Any]) -> Tuple[Position, Block]:
    if not isinstance(obj, dict):
        raise InvalidArgumentError(f"block must be an object: {obj!r}")
    try:
        position = Position(int(obj["x"]), int(obj["y"]))
        links = {
            Direction.from_name(name): int(count)
            for name, count in (obj.get("links") or {}).items()
        }
        block = Block(
            max_links=int(obj.get("maxLinks", MAX_LINKS_PER_BLOCK)),
            links_to_have=int(obj.get("linksToHave", 0)),
            links=links,
        )
    except InvalidArgumentError:
        raise
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise InvalidArgumentError(f"bad block {obj!r}: {e}") from e
    return position, block


def grid_to_json(grid: Grid) -> Dict[str, Any]:
    """Minimal state needed to rebuild the grid: its size and every block."""
    blocks = grid.blocks()
    return {
        "size": grid.size,
        "blocks": [block_to_json(pos, blocks[pos]) for pos in grid.positions()],
    }


def _check_link_symmetry(grid: Grid) -> None:
    """Every link must point at a cell on the grid that holds the same count back."""
    for pos in grid.positions():
        block = grid.block_at(pos)
        for d in Direction.all_directions():
            count = block.links_in_direction(d)
            if count == 0:
                continue
            other = grid.nearby_position(pos, d)
            if other is None:
                raise InvalidArgumentError(f"{pos} has {count} links {d.name} off the grid")
            back = grid.block_at(other).links_in_direction(d.opposite())
            if back != count:
                raise InvalidArgumentError(
                    f"{pos} has {count} links {d.name} but {other} has {back} back"
                )


def grid_from_json(obj: Dict[str, Any], max_size: Optional[int] = None) -> Grid:
    """
    Rebuilds a grid, checking that every legal cell has one block and that
    link counts agree on both ends. ``max_size`` caps the accepted size.
    """
    if not isinstance(obj, dict):
        raise InvalidArgumentError("grid must be an object")
    try:
        size = int(obj["size"])
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidArgumentError(f"bad grid: {e}") from e
    if max_size is not None and size > max_size:
        raise InvalidArgumentError(f"grid size {size} exceeds maximum {max_size}")
    entries = obj.get("blocks", [])
    if not isinstance(entries, list):
        raise InvalidArgumentError("blocks must be a list")
    blocks: Dict[Position, Block] = {}
    for entry in entries:
        pos, block = block_from_json(entry)
        if pos in blocks:
            raise InvalidArgumentError(f"duplicate block at {pos}")
        blocks[pos] = block
    grid = Grid.from_blocks(size, blocks)
    _check_link_symmetry(grid)
    return grid


def grid_to_json_str(grid: Grid) -> str:
    return json.dumps(grid_to_json(grid), separators=(",", ":"))


def grid_from_json_str(text: str) -> Grid:
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidArgumentError(f"bad grid JSON: {e}") from e
    return grid_from_json(obj)
