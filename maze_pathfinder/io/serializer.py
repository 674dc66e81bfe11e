import json
from typing import Any, Dict, IO, Iterable, List, Optional, Sequence, Tuple
from maze_pathfinder.core.grid import Cell, Grid

class MazeSerializer:
    """
    JSON wire format shared with the browser client:
    - maze: row-major matrix of 0 (open) / 1 (wall)
    - cell: {"x": int, "y": int}
    - path: ordered list of cells, [] when unreachable
    """

    CHAR_WALL = "#"
    CHAR_OPEN = " "
    CHAR_PATH = "*"
    CHAR_START = "S"
    CHAR_GOAL = "G"

    @staticmethod
    def grid_to_matrix(grid: Grid) -> List[List[int]]:
        return grid.to_rows()

    @staticmethod
    def grid_from_matrix(matrix: Any) -> Grid:
        if not isinstance(matrix, list) or not all(isinstance(row, list) for row in matrix):
            raise ValueError("Maze must be a list of rows")
        return Grid.from_rows(matrix)

    @staticmethod
    def cell_from_json(obj: Any) -> Cell:
        if not isinstance(obj, dict):
            raise ValueError(f"Cell must be an object with x and y, got {obj!r}")
        # Accept the capitalised keys older clients sent
        x = obj.get("x", obj.get("X"))
        y = obj.get("y", obj.get("Y"))
        for name, val in (("x", x), ("y", y)):
            if isinstance(val, bool) or not isinstance(val, int):
                raise ValueError(f"Cell {name} must be an integer, got {val!r}")
        return Cell(x, y)

    @staticmethod
    def cell_to_json(cell: Tuple[int, int]) -> Dict[str, int]:
        return {"x": cell[0], "y": cell[1]}

    @staticmethod
    def path_to_json(path: Optional[Iterable[Tuple[int, int]]]) -> List[Dict[str, int]]:
        if not path:
            return []
        return [MazeSerializer.cell_to_json(c) for c in path]

    @staticmethod
    def dump(grid: Grid, fp: IO[str]):
        json.dump(MazeSerializer.grid_to_matrix(grid), fp)
        fp.write("\n")

    @staticmethod
    def load(fp: IO[str]) -> Grid:
        try:
            matrix = json.load(fp)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid maze JSON: {e}") from e
        return MazeSerializer.grid_from_matrix(matrix)

    @staticmethod
    def to_text(grid: Grid, path: Optional[Sequence[Tuple[int, int]]] = None,
                start: Optional[Tuple[int, int]] = None,
                goal: Optional[Tuple[int, int]] = None) -> str:
        chars = [
            [MazeSerializer.CHAR_WALL if v == Grid.WALL else MazeSerializer.CHAR_OPEN for v in row]
            for row in grid.to_rows()
        ]
        for x, y in path or ():
            chars[y][x] = MazeSerializer.CHAR_PATH
        if start is not None:
            chars[start[1]][start[0]] = MazeSerializer.CHAR_START
        if goal is not None:
            chars[goal[1]][goal[0]] = MazeSerializer.CHAR_GOAL
        return "\n".join("".join(row) for row in chars)
