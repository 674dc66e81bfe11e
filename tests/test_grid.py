import unittest
import sys
import os

# Add project root to path so we can import maze_pathfinder
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_pathfinder.core.grid import Cell, Grid

class TestGrid(unittest.TestCase):
    def test_initialization(self):
        w, h = 10, 6
        grid = Grid(w, h)
        self.assertEqual(len(grid.cells), w * h, f"Grid initialization size mismatch. Expected {w*h}, got {len(grid.cells)}")
        # All cells start as walls
        for val in grid.cells:
            self.assertEqual(val, Grid.WALL)
        self.assertEqual(grid.count_open(), 0)

    def test_open_fill(self):
        grid = Grid(3, 3, fill=Grid.OPEN)
        self.assertEqual(grid.count_open(), 9)

    def test_invalid_dimensions(self):
        with self.assertRaises(ValueError):
            Grid(0, 5)
        with self.assertRaises(ValueError):
            Grid(5, -1)

    def test_coordinates(self):
        grid = Grid(5, 5)
        idx = grid.get_index(2, 3)
        self.assertEqual(idx, 17) # 3 * 5 + 2

        with self.assertRaises(IndexError):
            grid.get_index(-1, 0)
        with self.assertRaises(IndexError):
            grid.get_index(0, 5)
        self.assertFalse(grid.in_bounds(5, 0))
        self.assertTrue(grid.in_bounds(4, 4))

    def test_set_open_and_wall(self):
        grid = Grid(3, 3)
        grid.set_open(1, 2)
        self.assertTrue(grid.is_open(1, 2))
        self.assertFalse(grid.is_wall(1, 2))
        grid.set_wall(1, 2)
        self.assertTrue(grid.is_wall(1, 2))

    def test_neighbors_order(self):
        grid = Grid(3, 3)
        # Center cell: up, down, left, right
        neighbors = list(grid.get_neighbors(1, 1))
        self.assertEqual(neighbors, [(1, 0), (1, 2), (0, 1), (2, 1)])

        # Corner cell (0,0) only has down and right
        self.assertEqual(list(grid.get_neighbors(0, 0)), [(0, 1), (1, 0)])

    def test_open_neighbors(self):
        grid = Grid(3, 3)
        grid.set_open(1, 1)
        self.assertEqual(list(grid.get_open_neighbors(1, 1)), [])
        grid.set_open(2, 1)
        grid.set_open(1, 0)
        self.assertEqual(list(grid.get_open_neighbors(1, 1)), [(1, 0), (2, 1)])

    def test_cell_is_value_type(self):
        a = Cell(2, 3)
        self.assertEqual(a, (2, 3))
        self.assertEqual(hash(a), hash(Cell(2, 3)))
        self.assertEqual({a: "x"}[Cell(2, 3)], "x")
        self.assertLess(Cell(1, 9), Cell(2, 0))

    def test_rows_conversion(self):
        rows = [[1, 0, 1], [0, 0, 1]]
        grid = Grid.from_rows(rows)
        self.assertEqual((grid.width, grid.height), (3, 2))
        self.assertTrue(grid.is_open(0, 1))
        self.assertTrue(grid.is_wall(2, 1))
        self.assertEqual(grid.to_rows(), rows)
        self.assertEqual(list(grid.open_cells()), [(1, 0), (0, 1), (1, 1)])

    def test_from_rows_rejects_malformed(self):
        with self.assertRaises(ValueError):
            Grid.from_rows([])
        with self.assertRaises(ValueError):
            Grid.from_rows([[]])
        with self.assertRaises(ValueError):
            Grid.from_rows([[0, 1], [0]])
        with self.assertRaises(ValueError):
            Grid.from_rows([[0, 2]])
        with self.assertRaises(ValueError):
            Grid.from_rows([[0, True]])
        with self.assertRaises(ValueError):
            Grid.from_rows([[0, "1"]])

    def test_copy_and_equality(self):
        grid = Grid(4, 4)
        grid.set_open(1, 1)
        other = grid.copy()
        self.assertEqual(grid, other)
        other.set_open(2, 1)
        self.assertNotEqual(grid, other)
        self.assertTrue(grid.is_wall(2, 1))

    def test_memory_sanity(self):
        # 1 byte per cell
        w, h = 2000, 2000
        grid = Grid(w, h)
        size_bytes = grid.cells.buffer_info()[1] * grid.cells.itemsize
        mb = size_bytes / (1024 * 1024)
        self.assertLess(mb, 5.0)

if __name__ == '__main__':
    unittest.main()
