from __future__ import annotations

import argparse
import logging
import os
from typing import List, Optional, Tuple

from .block import MAX_LINKS_PER_BLOCK
from .db import db_lookup_grid, db_store_grid
from .errors import GridError
from .grid import Grid
from .position import Position
from .serialize import grid_to_json_str

DEFAULT_DB = os.getenv('NUMERICALBOND_DB', 'data/numericalbond.db')


def parse_position(text: str) -> Position:
    """Parses 'x,y' or 'x y'."""
    sep = ',' if ',' in text else ' '
    parts = [t for t in text.strip().split(sep) if t != '']
    if len(parts) != 2:
        raise ValueError(f"Could not parse position: {text!r}")
    return Position(int(parts[0]), int(parts[1]))


def parse_link(text: str) -> Tuple[Position, Position]:
    """Parses 'x1,y1:x2,y2'."""
    left, sep, right = text.partition(':')
    if not sep:
        raise ValueError(f"Could not parse link (expected X1,Y1:X2,Y2): {text!r}")
    return parse_position(left), parse_position(right)


def parse_targets(text: str) -> List[List[int]]:
    """Parses rows separated by ';' of targets separated by ',', e.g. '1,2;2,1'."""
    return [[int(v) for v in row.split(',')] for row in text.split(';') if row.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Numerical bond board: build a grid and link islands')
    parser.add_argument('--size', type=int, default=None, help='Grid size (NxN) for an empty board')
    parser.add_argument('--targets', default=None, help='Target links per cell, rows split by ";" e.g. "1,2;2,1"')
    parser.add_argument('--max-links', type=int, default=MAX_LINKS_PER_BLOCK,
                        help='Maximum links per direction for new blocks')
    parser.add_argument('--link', action='append', default=[], metavar='X1,Y1:X2,Y2',
                        help='Link two adjacent cells (repeatable)')
    parser.add_argument('--db', default=DEFAULT_DB, help='SQLite DB file path')
    parser.add_argument('--load', default=None, metavar='NAME', help='Start from a saved grid')
    parser.add_argument('--save', default=None, metavar='NAME', help='Save the resulting grid')
    parser.add_argument('--json', action='store_true', help='Print the grid as JSON')
    parser.add_argument('--verbose', action='store_true', help='Log every link')
    return parser


def _initial_grid(args: argparse.Namespace) -> Grid:
    if args.load:
        grid = db_lookup_grid(args.db, args.load)
        if grid is None:
            raise ValueError(f"No saved grid named {args.load!r} in {args.db}")
        return grid
    if args.targets:
        return Grid.from_targets(parse_targets(args.targets), max_links=args.max_links)
    return Grid(args.size if args.size is not None else 3, max_links=args.max_links)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s: %(message)s',
    )

    try:
        grid = _initial_grid(args)
        for text in args.link:
            pos1, pos2 = parse_link(text)
            grid.link(pos1, pos2)
    except (GridError, ValueError) as e:
        print(f"error: {e}")
        return 1

    if args.json:
        print(grid_to_json_str(grid))
    else:
        print(grid.pretty())
        print('\nComplete!' if grid.is_complete() else '\nNot complete yet.')

    if args.save:
        db_store_grid(args.db, args.save, grid)
        print(f"Saved as {args.save!r} in {args.db}")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
