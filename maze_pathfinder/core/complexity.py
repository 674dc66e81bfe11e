from collections import deque
from typing import Any, Dict
from maze_pathfinder.core.grid import Grid

class MazeAnalyzer:
    @staticmethod
    def count_components(grid: Grid) -> int:
        """Number of 4-connected regions of open cells."""
        seen = set()
        components = 0
        for cell in grid.open_cells():
            if cell in seen:
                continue
            components += 1
            seen.add(cell)
            queue = deque([cell])
            while queue:
                cx, cy = queue.popleft()
                for n in grid.get_open_neighbors(cx, cy):
                    if n not in seen:
                        seen.add(n)
                        queue.append(n)
        return components

    @staticmethod
    def calculate_stats(grid: Grid) -> Dict[str, Any]:
        open_cells = 0
        edges = 0
        dead_ends = 0
        corridors = 0
        junctions = 0

        for x, y in grid.open_cells():
            open_cells += 1
            degree = sum(1 for _ in grid.get_open_neighbors(x, y))
            # Each adjacency is seen from both ends
            edges += degree
            if degree == 1: dead_ends += 1
            elif degree == 2: corridors += 1
            elif degree >= 3: junctions += 1
        edges //= 2

        components = MazeAnalyzer.count_components(grid)
        total = grid.width * grid.height
        return {
            "open_cells": open_cells,
            "wall_cells": total - open_cells,
            "edges": edges,
            "components": components,
            "dead_ends": dead_ends,
            "corridors": corridors,
            "junctions": junctions,
            "dead_end_percent": (dead_ends / open_cells) * 100 if open_cells > 0 else 0,
            "is_perfect": components == 1 and open_cells == edges + 1,
        }

    @staticmethod
    def is_perfect(grid: Grid) -> bool:
        """True when the open cells form a single tree (connected, no cycles)."""
        return MazeAnalyzer.calculate_stats(grid)["is_perfect"]
