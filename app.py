from __future__ import annotations

import os
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

from numericalbond_core.block import MAX_LINKS_PER_BLOCK
from numericalbond_core.db import db_lookup_grid, db_store_grid
from numericalbond_core.errors import GridError, InvalidArgumentError
from numericalbond_core.grid import Grid
from numericalbond_core.position import Position
from numericalbond_core.serialize import grid_from_json, grid_to_json, position_from_json, position_to_json

DEFAULT_DB = os.getenv("NUMERICALBOND_DB", "data/numericalbond.db")
MAX_SIZE = int(os.getenv("NUMERICALBOND_MAX_SIZE", "50"))

app = Flask(__name__)


def _error(message: str, status: int = 400) -> Tuple[Any, int]:
    app.logger.info("Rejected %s %s: %s", request.method, request.path, message)
    return jsonify({"ok": False, "error": message}), status


def _body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    return body if isinstance(body, dict) else {}


def _grid_payload(grid: Grid) -> Dict[str, Any]:
    return {"grid": grid_to_json(grid), "complete": grid.is_complete()}


def _grid_from_body(body: Dict[str, Any]) -> Grid:
    g_in = body.get("grid")
    if not isinstance(g_in, dict):
        raise InvalidArgumentError("grid required")
    return grid_from_json(g_in, max_size=MAX_SIZE)


def _require_size(size: int) -> None:
    if size > MAX_SIZE:
        raise InvalidArgumentError(f"grid size {size} exceeds maximum {MAX_SIZE}")


def _pair_from_body(body: Dict[str, Any]) -> Tuple[Position, Position]:
    if "from" not in body or "to" not in body:
        raise InvalidArgumentError("from and to required")
    return position_from_json(body["from"]), position_from_json(body["to"])


@app.post("/api/new")
def api_new() -> Any:
    body = _body()
    try:
        max_links = int(body.get("maxLinks", MAX_LINKS_PER_BLOCK))
        targets = body.get("targets")
        if targets is not None:
            _require_size(len(targets))
            grid = Grid.from_targets([[int(v) for v in row] for row in targets], max_links=max_links)
        else:
            size = int(body.get("size", 3))
            _require_size(size)
            grid = Grid(size, max_links=max_links)
    except (GridError, TypeError, ValueError) as e:
        return _error(f"bad grid: {e}")
    return jsonify({"ok": True, **_grid_payload(grid)})


@app.post("/api/link")
def api_link() -> Any:
    body = _body()
    try:
        grid = _grid_from_body(body)
        pos1, pos2 = _pair_from_body(body)
        grid.link(pos1, pos2)
    except GridError as e:
        return _error(str(e))
    return jsonify({"ok": True, **_grid_payload(grid), "links": grid.links_between(pos1, pos2)})


@app.post("/api/links")
def api_links() -> Any:
    body = _body()
    try:
        grid = _grid_from_body(body)
        pos1, pos2 = _pair_from_body(body)
        links = grid.links_between(pos1, pos2)
    except GridError as e:
        return _error(str(e))
    return jsonify({"ok": True, "links": links})


@app.post("/api/neighbors")
def api_neighbors() -> Any:
    body = _body()
    try:
        grid = _grid_from_body(body)
        if "position" not in body:
            raise InvalidArgumentError("position required")
        neighbors = grid.neighbors(position_from_json(body["position"]))
    except GridError as e:
        return _error(str(e))
    return jsonify({
        "ok": True,
        "neighbors": [
            {"direction": d.name.lower(), "position": position_to_json(p)} for d, p in neighbors
        ],
    })


@app.post("/api/status")
def api_status() -> Any:
    body = _body()
    try:
        grid = _grid_from_body(body)
    except GridError as e:
        return _error(str(e))
    return jsonify({"ok": True, "size": grid.size, "complete": grid.is_complete(), "pretty": grid.pretty()})


@app.post("/api/save")
def api_save() -> Any:
    body = _body()
    name: Optional[str] = body.get("name")
    if not name:
        return _error("name required")
    try:
        grid = _grid_from_body(body)
    except GridError as e:
        return _error(str(e))
    db_store_grid(DEFAULT_DB, str(name), grid)
    return jsonify({"ok": True, "name": name})


@app.post("/api/load")
def api_load() -> Any:
    body = _body()
    name: Optional[str] = body.get("name")
    if not name:
        return _error("name required")
    grid = db_lookup_grid(DEFAULT_DB, str(name))
    if grid is None:
        return _error(f"no saved grid named {name!r}", 404)
    return jsonify({"ok": True, **_grid_payload(grid)})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
