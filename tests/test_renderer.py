import unittest
import sys
import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pygame

from maze_pathfinder.core.grid import Grid
from maze_pathfinder.viz.renderer import Renderer

class TestRenderer(unittest.TestCase):
    def setUp(self):
        self.grid = Grid.from_rows([
            [0, 0, 0],
            [1, 1, 0],
            [0, 0, 0],
        ])
        self.renderer = Renderer(self.grid, cell_size=4)

    def run_search(self):
        self.renderer.start_search()
        while self.renderer.solver_iter is not None:
            self.renderer.step()

    def test_frame_layout(self):
        frame = self.renderer.build_frame()
        # surfarray layout: (width, height, rgb)
        self.assertEqual(frame.shape, (3, 3, 3))
        self.assertEqual(tuple(frame[0, 1]), Renderer.COLOR_WALL)
        self.assertEqual(tuple(frame[2, 1]), Renderer.COLOR_OPEN)

    def test_click_selection(self):
        r = self.renderer
        r.handle_click((0, 0))
        r.handle_click((0, 2))
        self.assertEqual((r.start, r.goal), ((0, 0), (0, 2)))

        # Out of bounds clicks are ignored
        r.handle_click((7, 7))
        self.assertEqual((r.start, r.goal), ((0, 0), (0, 2)))

        # Third click starts a new selection
        r.handle_click((2, 2))
        self.assertEqual((r.start, r.goal), ((2, 2), None))

    def test_search_draws_path(self):
        r = self.renderer
        r.handle_click((0, 0))
        r.handle_click((0, 2))
        self.run_search()

        self.assertEqual(len(r.path), 7)
        frame = r.build_frame()
        self.assertEqual(tuple(frame[0, 0]), Renderer.COLOR_START)
        self.assertEqual(tuple(frame[0, 2]), Renderer.COLOR_GOAL)
        self.assertEqual(tuple(frame[2, 1]), Renderer.COLOR_PATH)
        self.assertEqual(r.status.split(",")[0], "Path: 7 cells")

    def test_search_needs_both_endpoints(self):
        self.renderer.handle_click((0, 0))
        self.renderer.start_search()
        self.assertIsNone(self.renderer.solver_iter)

    def test_toggle_algo(self):
        r = self.renderer
        self.assertEqual(r.algo, "bfs")
        r.toggle_algo()
        self.assertEqual(r.algo, "astar")
        r.handle_click((0, 0))
        r.handle_click((2, 2))
        self.run_search()
        self.assertEqual(len(r.path), 5)
        r.toggle_algo()
        self.assertEqual(r.algo, "bfs")
        self.assertEqual(r.path, [])

    def test_regenerate(self):
        r = Renderer(Grid(11, 11))
        r.handle_click((1, 1))
        r.regenerate()
        self.assertIsNone(r.start)
        self.assertEqual(r.grid.count_open(), 25 + 24)

    def test_draw_grid_scales_cells(self):
        surface = pygame.Surface((12, 12))
        self.renderer.draw_grid(surface)
        self.assertEqual(tuple(surface.get_at((5, 5)))[:3], Renderer.COLOR_WALL)
        self.assertEqual(tuple(surface.get_at((1, 1)))[:3], Renderer.COLOR_OPEN)
        self.assertEqual(self.renderer.screen_to_world(9, 5), (2, 1))

if __name__ == '__main__':
    unittest.main()
