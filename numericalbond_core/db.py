from __future__ import annotations

import logging
import os
import sqlite3
import tempfile
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from .grid import Grid
from .serialize import grid_from_json_str, grid_to_json_str

logger = logging.getLogger(__name__)


def _db_file(db_path: str) -> str:
    """
    Path to open for ``db_path``. Its directory is created on demand; when
    that fails the file moves to $NUMERICALBOND_DB_DIR, ./data or the temp dir.
    """
    directory = os.path.dirname(db_path)
    if not directory:
        return db_path
    try:
        os.makedirs(directory, exist_ok=True)
        return db_path
    except OSError as e:
        logger.warning("Can't create %s (%s), looking for another DB directory", directory, e)
    name = os.path.basename(db_path) or 'numericalbond.db'
    for fallback in (os.getenv('NUMERICALBOND_DB_DIR'), os.path.join(os.getcwd(), 'data'), tempfile.gettempdir()):
        if not fallback:
            continue
        try:
            os.makedirs(fallback, exist_ok=True)
        except OSError:
            continue
        return os.path.join(fallback, name)
    return name


def _create_table(conn: sqlite3.Connection) -> None:
    """Creates the grids table on first use."""
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS grids (
            name TEXT PRIMARY KEY,
            size INTEGER NOT NULL,
            blocks TEXT NOT NULL,
            complete INTEGER NOT NULL,
            saved_at TEXT NOT NULL
        )
        """
    )
    conn.commit()


def _connect(db_path: str) -> sqlite3.Connection:
    conn = sqlite3.connect(_db_file(db_path))
    _create_table(conn)
    return conn


def db_store_grid(db_path: str, name: str, grid: Grid) -> None:
    """Saves ``grid`` under ``name``, replacing any earlier save with that name."""
    conn = _connect(db_path)
    try:
        conn.execute(
            """
            INSERT OR REPLACE INTO grids (name, size, blocks, complete, saved_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                name,
                grid.size,
                grid_to_json_str(grid),
                1 if grid.is_complete() else 0,
                datetime.now(timezone.utc).isoformat(timespec='seconds'),
            ),
        )
        conn.commit()
        logger.info("Stored grid %r (size %d) in %s", name, grid.size, db_path)
    finally:
        conn.close()


def db_lookup_grid(db_path: str, name: str) -> Optional[Grid]:
    """Loads the grid saved under ``name``, or None if there is none."""
    conn = _connect(db_path)
    try:
        row = conn.execute("SELECT blocks FROM grids WHERE name = ?", (name,)).fetchone()
        if not row:
            return None
        return grid_from_json_str(row[0])
    finally:
        conn.close()


def db_list_grids(db_path: str) -> List[Tuple[str, int, bool]]:
    """(name, size, complete) for every saved grid, sorted by name."""
    conn = _connect(db_path)
    try:
        rows = conn.execute("SELECT name, size, complete FROM grids ORDER BY name").fetchall()
        return [(str(n), int(s), bool(c)) for n, s, c in rows]
    finally:
        conn.close()


def db_delete_grid(db_path: str, name: str) -> bool:
    conn = _connect(db_path)
    try:
        cur = conn.execute("DELETE FROM grids WHERE name = ?", (name,))
        conn.commit()
        return cur.rowcount > 0
    finally:
        conn.close()
