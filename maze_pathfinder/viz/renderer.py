import logging
from typing import Iterator, List, Optional, Tuple

import numpy as np
import pygame

from maze_pathfinder.algo.dfs import generate
from maze_pathfinder.algo.solvers import SOLVERS, Solver, get_solver
from maze_pathfinder.core.grid import Cell, Grid

logger = logging.getLogger(__name__)

class Renderer:
    COLOR_BG = (10, 10, 10)
    COLOR_WALL = (0, 0, 0)
    COLOR_OPEN = (255, 255, 255)
    COLOR_VISITED = (160, 190, 230)  # Blue tint
    COLOR_PATH = (0, 0, 255)
    COLOR_START = (0, 255, 0)
    COLOR_GOAL = (255, 0, 0)

    HUD_HEIGHT = 60

    def __init__(self, grid: Grid, algo: str = "bfs", cell_size: int = 20,
                 steps_per_frame: int = 5):
        self.grid = grid
        self.algo = algo if algo in SOLVERS else "bfs"
        self.cell_size = cell_size
        self.steps_per_frame = steps_per_frame

        self.start: Optional[Cell] = None
        self.goal: Optional[Cell] = None
        self.path: List[Cell] = []
        self.solver: Optional[Solver] = None
        self.solver_iter: Optional[Iterator[str]] = None
        self.status = "Click to place start"

        self.running = True
        self.surface = None
        self.clock = None
        self.font = None

    # --- State -------------------------------------------------------------

    def clear_search(self):
        self.path = []
        self.solver = None
        self.solver_iter = None

    def handle_click(self, cell: Tuple[int, int]):
        """First click sets start, second the goal, a third starts over."""
        if not self.grid.in_bounds(*cell):
            return
        cell = Cell(*cell)
        if self.start is None:
            self.start = cell
            self.status = "Click to place goal"
        elif self.goal is None:
            self.goal = cell
            self.status = "Space to search"
        else:
            self.start = cell
            self.goal = None
            self.status = "Click to place goal"
        self.clear_search()

    def toggle_algo(self):
        names = list(SOLVERS)
        self.algo = names[(names.index(self.algo) + 1) % len(names)]
        self.clear_search()

    def regenerate(self):
        self.grid = generate(self.grid.width, self.grid.height)
        self.start = None
        self.goal = None
        self.status = "Click to place start"
        self.clear_search()

    def start_search(self):
        if self.start is None or self.goal is None:
            return
        self.clear_search()
        self.solver = get_solver(self.algo, self.grid)
        # One yield per pop so the frontier visibly grows
        self.solver.YIELD_EVERY = 1
        self.solver_iter = self.solver.run(self.start, self.goal)
        self.status = "Searching..."

    def step(self):
        if self.solver_iter is None:
            return
        try:
            for _ in range(self.steps_per_frame):
                next(self.solver_iter)
        except StopIteration:
            self.solver_iter = None
            self.path = self.solver.path
            if self.path:
                self.status = f"Path: {len(self.path)} cells, expanded {self.solver.expanded_count}"
            else:
                self.status = "No path"
            logger.info(f"{self.algo.upper()}: {self.status}")

    # --- Drawing -----------------------------------------------------------

    def build_frame(self) -> np.ndarray:
        """
        Returns an RGB array, one pixel per cell, in pygame.surfarray layout
        (width, height, 3).
        """
        w, h = self.grid.width, self.grid.height
        cells = np.frombuffer(self.grid.cells, dtype=np.uint8).reshape(h, w)

        frame = np.empty((h, w, 3), dtype=np.uint8)
        frame[cells == Grid.WALL] = self.COLOR_WALL
        frame[cells == Grid.OPEN] = self.COLOR_OPEN

        if self.solver is not None:
            for x, y in self.solver.visited_cells:
                frame[y, x] = self.COLOR_VISITED
        for x, y in self.path:
            frame[y, x] = self.COLOR_PATH
        if self.start is not None:
            frame[self.start.y, self.start.x] = self.COLOR_START
        if self.goal is not None:
            frame[self.goal.y, self.goal.x] = self.COLOR_GOAL

        return frame.transpose(1, 0, 2)

    def screen_to_world(self, sx: int, sy: int) -> Tuple[int, int]:
        return sx // self.cell_size, sy // self.cell_size

    def draw_grid(self, surface):
        small = pygame.surfarray.make_surface(self.build_frame())
        size = (self.grid.width * self.cell_size, self.grid.height * self.cell_size)
        surface.blit(pygame.transform.scale(small, size), (0, 0))

    def draw_hud(self):
        top = self.grid.height * self.cell_size
        info = [
            f"Algo: {self.algo.upper()}  [Tab] switch  [Space] search  [G] new maze",
            self.status,
        ]
        for i, text in enumerate(info):
            lbl = self.font.render(text, True, (255, 255, 255))
            self.surface.blit(lbl, (10, top + 8 + i * 22))

    # --- Window ------------------------------------------------------------

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"Maze Pathfinder - {self.grid.width}x{self.grid.height}")
        self.surface = pygame.display.set_mode(
            (self.grid.width * self.cell_size, self.grid.height * self.cell_size + self.HUD_HEIGHT)
        )
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.handle_click(self.screen_to_world(*event.pos))
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_SPACE:
                    self.start_search()
                elif event.key == pygame.K_TAB:
                    self.toggle_algo()
                elif event.key == pygame.K_g:
                    self.regenerate()

    def run_loop(self):
        while self.running:
            self.handle_input()
            self.step()

            self.surface.fill(self.COLOR_BG)
            self.draw_grid(self.surface)
            self.draw_hud()
            pygame.display.flip()

            self.clock.tick(60)

        pygame.quit()
