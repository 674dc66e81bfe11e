import heapq
import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Dict, Iterator, List, Set, Tuple
from maze_pathfinder.core.grid import Cell, Grid

logger = logging.getLogger(__name__)


def manhattan(a: Tuple[int, int], b: Tuple[int, int]) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def reconstruct_path(predecessors: Dict[Cell, Cell], goal: Cell) -> List[Cell]:
    """
    Walks back from goal through the predecessor map until a cell with no
    predecessor (the start) is reached, then returns the cells start-first.
    """
    path = [goal]
    curr = goal
    while curr in predecessors:
        curr = predecessors[curr]
        path.append(curr)
    path.reverse()
    return path


class Solver(ABC):
    # Frontier pops between progress updates
    YIELD_EVERY = 100

    def __init__(self, grid: Grid):
        self.grid = grid
        self.path: List[Cell] = []
        self.visited_cells: Set[Cell] = set()
        self.expanded_count = 0
        # Heap entries popped after a cheaper route was found
        self.stale_count = 0

    def reset(self):
        self.path = []
        self.visited_cells = set()
        self.expanded_count = 0
        self.stale_count = 0

    def endpoints_open(self, start: Cell, goal: Cell) -> bool:
        return self.grid.is_open(*start) and self.grid.is_open(*goal)

    @abstractmethod
    def run(self, start: Tuple[int, int], goal: Tuple[int, int]) -> Iterator[str]:
        """
        Yields progress strings between frontier pops; abandoning the iterator
        at any yield simply discards the search state. On completion
        self.path holds the result (empty when unreachable).
        """
        pass

    def solve(self, start: Tuple[int, int], goal: Tuple[int, int]) -> List[Cell]:
        for _ in self.run(start, goal):
            pass
        return self.path


class BFS(Solver):
    def run(self, start: Tuple[int, int], goal: Tuple[int, int]) -> Iterator[str]:
        self.reset()
        start, goal = Cell(*start), Cell(*goal)

        if not self.endpoints_open(start, goal):
            yield "Blocked"
            return

        queue = deque([start])
        predecessors: Dict[Cell, Cell] = {}
        # Marked on enqueue so no cell is queued twice
        self.visited_cells.add(start)

        while queue:
            current = queue.popleft()
            self.expanded_count += 1

            if current == goal:
                self.path = reconstruct_path(predecessors, current)
                yield "Solved"
                return

            for neighbor in self.grid.get_open_neighbors(*current):
                if neighbor not in self.visited_cells:
                    self.visited_cells.add(neighbor)
                    predecessors[neighbor] = current
                    queue.append(neighbor)

            if self.expanded_count % self.YIELD_EVERY == 0:
                yield f"Visited: {len(self.visited_cells)}"

        yield "No path"


class AStar(Solver):
    def heuristic(self, a: Tuple[int, int], b: Tuple[int, int]) -> int:
        return manhattan(a, b)

    def run(self, start: Tuple[int, int], goal: Tuple[int, int]) -> Iterator[str]:
        self.reset()
        start, goal = Cell(*start), Cell(*goal)

        if not self.endpoints_open(start, goal):
            yield "Blocked"
            return

        # Priority Queue: (f_score, h_score, x, y)
        # Equal f prefers the lower h, i.e. the cell closer to the goal.
        # Stale duplicates stay in the heap and are skipped on pop.
        h = self.heuristic(start, goal)
        open_set = [(h, h, start.x, start.y)]
        g_score: Dict[Cell, int] = {start: 0}
        predecessors: Dict[Cell, Cell] = {}
        self.visited_cells.add(start)

        while open_set:
            f, h, cx, cy = heapq.heappop(open_set)
            current = Cell(cx, cy)
            g = f - h

            if g != g_score[current]:
                self.stale_count += 1
                continue

            self.expanded_count += 1

            if current == goal:
                self.path = reconstruct_path(predecessors, current)
                yield "Solved"
                return

            tentative_g = g + 1
            for neighbor in self.grid.get_open_neighbors(cx, cy):
                old_g = g_score.get(neighbor)
                if old_g is None or tentative_g < old_g:
                    g_score[neighbor] = tentative_g
                    predecessors[neighbor] = current
                    nh = self.heuristic(neighbor, goal)
                    heapq.heappush(open_set, (tentative_g + nh, nh, neighbor.x, neighbor.y))
                    self.visited_cells.add(neighbor)

            if self.expanded_count % self.YIELD_EVERY == 0:
                yield f"Visited: {len(self.visited_cells)}"

        yield "No path"


SOLVERS = {
    "bfs": BFS,
    "astar": AStar,
}

DEFAULT_SOLVER = "bfs"


def get_solver(name: str, grid: Grid) -> Solver:
    cls = SOLVERS.get(name) if isinstance(name, str) else None
    if cls is None:
        logger.debug(f"Unknown algorithm {name!r}, falling back to {DEFAULT_SOLVER}")
        cls = SOLVERS[DEFAULT_SOLVER]
    return cls(grid)


def find_path(grid: Grid, start: Tuple[int, int], goal: Tuple[int, int], algo: str = DEFAULT_SOLVER) -> List[Cell]:
    return get_solver(algo, grid).solve(start, goal)
