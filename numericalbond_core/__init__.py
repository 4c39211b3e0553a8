"""
Numerical bond core Python package.

Board engine for a bridge-linking number puzzle: every cell of a square grid
is an island that needs a fixed number of links to its neighbours.
Modules:
- position.py, direction.py: Position, Direction
- block.py: Block (per-direction link counts of one island)
- grid.py: Grid (legality, adjacency, symmetric linking, completion)
- serialize.py, db.py: JSON form and SQLite store of grids
- cli.py: command-line entry point
"""
from .block import MAX_LINKS_PER_BLOCK, Block
from .direction import Direction
from .errors import GridError, InvalidArgumentError, InvalidOperationError, InvalidStateError
from .grid import Grid
from .position import Position

__all__ = [
    'Block',
    'Direction',
    'Grid',
    'GridError',
    'InvalidArgumentError',
    'InvalidOperationError',
    'InvalidStateError',
    'MAX_LINKS_PER_BLOCK',
    'Position',
]
