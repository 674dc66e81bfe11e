"""
Maze / pathfinding backend (Flask) for the canvas client.

Endpoints:
  GET  /maze?width=W&height=H -> [[0/1, ...], ...]   (0 = open, 1 = wall)
  POST /path  {maze, start: {x, y}, end: {x, y}, algo: 'astar'|'bfs'}
              -> {path: [{x, y}, ...]}               ([] when unreachable)
  GET  /health -> {status: 'ok'}
"""
import logging
import time
from typing import Any, Mapping, Optional

from flask import Flask, current_app, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import BadRequest, HTTPException

from maze_pathfinder.algo.dfs import generate
from maze_pathfinder.algo.solvers import DEFAULT_SOLVER, get_solver
from maze_pathfinder.io.serializer import MazeSerializer

logger = logging.getLogger(__name__)


class DefaultConfig:
    MAZE_DEFAULT_WIDTH = 20
    MAZE_DEFAULT_HEIGHT = 20
    MAZE_MAX_DIMENSION = 1001


def _dimension(name: str, default: int) -> int:
    """Missing, unparsable or non-positive values fall back to the default."""
    raw = request.args.get(name)
    try:
        value = int(raw) if raw is not None else 0
    except ValueError:
        value = 0
    if value <= 0:
        return default

    limit = current_app.config["MAZE_MAX_DIMENSION"]
    if value > limit:
        raise BadRequest(f"{name} must be at most {limit}")
    return value


def handle_maze():
    width = _dimension("width", current_app.config["MAZE_DEFAULT_WIDTH"])
    height = _dimension("height", current_app.config["MAZE_DEFAULT_HEIGHT"])

    grid = generate(width, height)
    logger.info(f"Generated {width}x{height} maze")
    return jsonify(MazeSerializer.grid_to_matrix(grid))


def handle_path():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise BadRequest("Request body must be a JSON object")

    try:
        grid = MazeSerializer.grid_from_matrix(body.get("maze"))
        start = MazeSerializer.cell_from_json(body.get("start"))
        end = MazeSerializer.cell_from_json(body.get("end"))
    except ValueError as e:
        raise BadRequest(str(e)) from e

    for name, cell in (("start", start), ("end", end)):
        if not grid.in_bounds(*cell):
            raise BadRequest(f"{name} ({cell.x}, {cell.y}) is outside the {grid.width}x{grid.height} maze")

    algo = body.get("algo")
    if not isinstance(algo, str):
        algo = DEFAULT_SOLVER
    solver = get_solver(algo, grid)

    t0 = time.perf_counter()
    path = solver.solve(start, end)
    logger.info(
        f"{type(solver).__name__} {tuple(start)} -> {tuple(end)}: "
        f"path={len(path)} expanded={solver.expanded_count} in {time.perf_counter() - t0:.4f}s"
    )
    return jsonify({"path": MazeSerializer.path_to_json(path)})


def handle_health():
    return jsonify({"status": "ok"})


def handle_http_error(e: HTTPException):
    return jsonify({"error": e.description}), e.code


def create_app(config: Optional[Mapping[str, Any]] = None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(DefaultConfig)
    app.config.from_prefixed_env()
    if config:
        app.config.update(config)

    CORS(app)

    app.add_url_rule("/maze", "maze", handle_maze, methods=["GET"])
    app.add_url_rule("/path", "path", handle_path, methods=["POST"])
    app.add_url_rule("/health", "health", handle_health, methods=["GET"])
    app.register_error_handler(HTTPException, handle_http_error)

    return app
