import logging
import random
from typing import Iterator, List, Optional, Tuple
from maze_pathfinder.core.grid import Grid
from maze_pathfinder.algo.base import Generator

logger = logging.getLogger(__name__)

class RecursiveBacktracker(Generator):
    """
    Carves a perfect maze on the odd-coordinate lattice.

    Passages are cut two cells at a time so that corridors stay one cell
    thick with walls between them; the outer boundary is never opened.
    The recursion is unrolled onto an explicit stack, each frame holding the
    cell and an iterator over its remaining (shuffled) directions, so large
    grids do not hit the interpreter's recursion limit.
    """

    START = (1, 1)

    def _shuffled_directions(self, rng: random.Random) -> Iterator[Tuple[int, int]]:
        dirs = list(Grid.DIRECTIONS)
        rng.shuffle(dirs)
        return iter(dirs)

    def run(self) -> Iterator[str]:
        rng = random.Random(self.seed)
        grid = self.grid
        w, h = grid.width, grid.height

        start_x, start_y = self.START
        if not grid.in_bounds(start_x, start_y):
            logger.debug(f"Grid {w}x{h} too small to carve, leaving all walls")
            yield "Done"
            return

        grid.set_open(start_x, start_y)

        # Stack of (x, y, remaining directions)
        stack: List[Tuple[int, int, Iterator[Tuple[int, int]]]] = [
            (start_x, start_y, self._shuffled_directions(rng))
        ]

        while stack:
            cx, cy, dirs = stack[-1]

            for dx, dy in dirs:
                nx, ny = cx + dx * 2, cy + dy * 2
                # Strictly inside the interior and not yet carved
                if 0 < nx < w - 1 and 0 < ny < h - 1 and grid.is_wall(nx, ny):
                    grid.set_open(cx + dx, cy + dy)
                    grid.set_open(nx, ny)
                    stack.append((nx, ny, self._shuffled_directions(rng)))
                    self.step_count += 1

                    # Yield every N steps to keep UI responsive without spamming
                    if self.step_count % 100 == 0:
                        yield f"Carving... Stack: {len(stack)}"
                    break
            else:
                # All four directions exhausted: backtrack
                stack.pop()

        yield "Done"


def generate(width: int, height: int, seed: Optional[int] = None) -> Grid:
    """Builds a fresh all-wall grid and carves a maze into it."""
    grid = Grid(width, height)
    RecursiveBacktracker(grid, seed=seed).run_all()
    logger.debug(f"Generated {width}x{height} maze with {grid.count_open()} open cells")
    return grid
