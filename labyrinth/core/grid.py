"""
Tile grid for the labyrinth.

A fixed-size 2D container addressed by integer (x, y) coordinates.
Cells are stored row-major and every access is bounds checked.

Tile values:
    PILLAR = transient generation marker (never survives generation)
    WALL   = impassable
    ROAD   = open path
"""

from enum import Enum, IntEnum
from typing import Callable, Generic, Iterator, NamedTuple, TypeVar

T = TypeVar("T")


class MazeError(Exception):
    """Base class for maze errors."""

    pass


class OutOfBoundsError(MazeError, IndexError):
    """Exception raised when a grid coordinate is outside the grid."""

    def __init__(self, x: int, y: int, width: int, height: int):
        self.x = x
        self.y = y
        super().__init__(
            f"Coordinate ({x}, {y}) out of bounds for {width}x{height} grid"
        )


class Tile(Enum):
    """Types of tiles in the maze."""
    PILLAR = "+"
    WALL = "X"
    ROAD = "."


class Point(NamedTuple):
    """2D coordinate in the grid."""
    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Point":
        """Return the point shifted by (dx, dy)."""
        return Point(self.x + dx, self.y + dy)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"x": self.x, "y": self.y}


class Direction(IntEnum):
    """Facing directions in clockwise order. The value is the directional index."""
    EAST = 0
    SOUTH = 1
    WEST = 2
    NORTH = 3

    @property
    def delta(self) -> tuple[int, int]:
        """Get (dx, dy) for this direction."""
        return _DELTAS[self]

    def turned_right(self) -> "Direction":
        """Direction after a clockwise quarter turn."""
        return Direction((self + 1) % len(Direction))

    def turned_left(self) -> "Direction":
        """Direction after a counter-clockwise quarter turn."""
        return Direction((self - 1) % len(Direction))


_DELTAS = {
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
    Direction.NORTH: (0, -1),
}


class Grid(Generic[T]):
    """
    Fixed width x height grid of cell values.

    Example usage:
        grid = Grid(5, 5, Tile.ROAD)
        grid.set(0, 0, Tile.WALL)
        grid.get(0, 0)            # Tile.WALL
        grid[Point(1, 1)]         # Tile.ROAD
    """

    def __init__(self, width: int, height: int, value: T = None):
        """
        Initialize grid with every cell set to value.

        Args:
            width: Number of columns.
            height: Number of rows.
            value: Initial value of every cell.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")

        self.width: int = width
        self.height: int = height
        self._cells: list[T] = [value] * (width * height)

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether (x, y) lies inside the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def _index(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self.width, self.height)
        return y * self.width + x

    def get(self, x: int, y: int) -> T:
        """Get cell value at position."""
        return self._cells[self._index(x, y)]

    def set(self, x: int, y: int, value: T) -> None:
        """Overwrite cell value at position."""
        self._cells[self._index(x, y)] = value

    def __getitem__(self, point: tuple[int, int]) -> T:
        x, y = point
        return self.get(x, y)

    def __setitem__(self, point: tuple[int, int], value: T) -> None:
        x, y = point
        self.set(x, y, value)

    def fill(self, value: T) -> None:
        """Set every cell to value."""
        self._cells = [value] * (self.width * self.height)

    def set_each(self, fn: Callable[[int, int, T], T]) -> None:
        """
        Replace every cell with fn(x, y, current).

        Cells are visited row-major (y outer, x inner) and each result is
        written before the next cell is evaluated.
        """
        for y in range(self.height):
            for x in range(self.width):
                index = y * self.width + x
                self._cells[index] = fn(x, y, self._cells[index])

    def each(self, fn: Callable[[int, int, T], None]) -> None:
        """
        Call fn(x, y, value) for every cell in row-major order.

        The value passed is read at the moment the cell is visited, so
        writes made by fn to later cells are observed.
        """
        for y in range(self.height):
            for x in range(self.width):
                fn(x, y, self._cells[y * self.width + x])

    def __iter__(self) -> Iterator[tuple[int, int, T]]:
        for y in range(self.height):
            for x in range(self.width):
                yield x, y, self._cells[y * self.width + x]

    def count(self, value: T) -> int:
        """Count cells holding value."""
        return self._cells.count(value)

    def row(self, y: int) -> list[T]:
        """Get a copy of row y."""
        if not 0 <= y < self.height:
            raise OutOfBoundsError(0, y, self.width, self.height)
        start = y * self.width
        return self._cells[start:start + self.width]

    def copy(self) -> "Grid[T]":
        """Return a shallow copy of the grid."""
        clone: Grid[T] = Grid(self.width, self.height)
        clone._cells = list(self._cells)
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self._cells == other._cells
        )

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height})"
