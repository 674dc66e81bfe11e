from array import array
from typing import Iterator, List, NamedTuple, Sequence, Tuple


class Cell(NamedTuple):
    x: int
    y: int


class Grid:
    # Cell states (also the wire encoding)
    OPEN = 0
    WALL = 1

    # Neighbor order: up, down, left, right
    DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))

    __slots__ = ('width', 'height', 'cells')

    def __init__(self, width: int, height: int, fill: int = WALL):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        if fill not in (self.OPEN, self.WALL):
            raise ValueError(f"Invalid cell state {fill!r}")
        self.width = width
        self.height = height
        # 'B' (unsigned char) -> 1 byte per cell, row-major
        self.cells = array('B', [fill] * (width * height))

    def get_index(self, x: int, y: int) -> int:
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_open(self, x: int, y: int) -> bool:
        return self.cells[self.get_index(x, y)] == self.OPEN

    def is_wall(self, x: int, y: int) -> bool:
        return self.cells[self.get_index(x, y)] == self.WALL

    def set_open(self, x: int, y: int):
        self.cells[self.get_index(x, y)] = self.OPEN

    def set_wall(self, x: int, y: int):
        self.cells[self.get_index(x, y)] = self.WALL

    def get_neighbors(self, x: int, y: int) -> Iterator[Cell]:
        """
        Yields the in-bounds 4-neighbors of (x, y) in up, down, left, right order.
        Does NOT check cell state.
        """
        for dx, dy in self.DIRECTIONS:
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.width and 0 <= ny < self.height:
                yield Cell(nx, ny)

    def get_open_neighbors(self, x: int, y: int) -> Iterator[Cell]:
        """
        Yields the neighbors of (x, y) that can be stepped onto.
        """
        w = self.width
        for nx, ny in self.get_neighbors(x, y):
            if self.cells[ny * w + nx] == self.OPEN:
                yield Cell(nx, ny)

    def open_cells(self) -> Iterator[Cell]:
        w = self.width
        for idx, val in enumerate(self.cells):
            if val == self.OPEN:
                yield Cell(idx % w, idx // w)

    def count_open(self) -> int:
        return self.cells.count(self.OPEN)

    def copy(self) -> 'Grid':
        other = Grid(self.width, self.height)
        other.cells = array('B', self.cells)
        return other

    def to_rows(self) -> List[List[int]]:
        w = self.width
        return [self.cells[y * w:(y + 1) * w].tolist() for y in range(self.height)]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> 'Grid':
        if not rows or not rows[0]:
            raise ValueError("Grid matrix must have at least one row and one column")
        height = len(rows)
        width = len(rows[0])
        grid = cls(width, height)
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {y} has {len(row)} cells, expected {width}")
            for x, val in enumerate(row):
                # bool is an int subclass, but True/False are not cell states
                if isinstance(val, bool) or not isinstance(val, int) or val not in (cls.OPEN, cls.WALL):
                    raise ValueError(f"Invalid cell value {val!r} at ({x}, {y})")
                grid.cells[y * width + x] = val
        return grid

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.width, self.height) == (other.width, other.height) and self.cells == other.cells

    def __repr__(self):
        return f"Grid({self.width}x{self.height}, open={self.count_open()})"
