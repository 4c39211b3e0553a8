from __future__ import annotations


class GridError(Exception):
    """Base class for every error raised by the board engine."""


class InvalidArgumentError(GridError, ValueError):
    """A position is outside the grid, or two positions are not adjacent."""


class InvalidStateError(GridError, RuntimeError):
    """A link was requested between positions that cannot be linked."""


class InvalidOperationError(GridError, RuntimeError):
    """A link would push a block past its per-direction cap."""
