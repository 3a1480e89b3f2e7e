"""
Pillar-collapse maze generator.

Builds a perfect maze (every road cell reachable, no loops) in place:

1. Fill the grid with road.
2. Wall off the border.
3. Plant a pillar on every interior cell with even x and even y.
4. Collapse each pillar, row by row, into a random neighbouring cell,
   turning both cells into wall. A neighbour that is already wall is
   rejected and another direction is drawn.

Pillars on the first pillar row may fall in any direction. Pillars
further down never fall north, so every wall chain ends at the border
and no wall loop can enclose a pocket of road.
"""

import logging
import random
from typing import Optional

from .grid import Direction, Grid, MazeError, Tile

logger = logging.getLogger(__name__)

MIN_SIZE = 5
# Pillars on rows deeper than this never collapse north
NORTH_COLLAPSE_MAX_ROW = 2
DEFAULT_MAX_COLLAPSE_ATTEMPTS = 1000

ALL_DIRECTIONS = (Direction.EAST, Direction.SOUTH, Direction.WEST, Direction.NORTH)
NO_NORTH_DIRECTIONS = (Direction.EAST, Direction.SOUTH, Direction.WEST)


class InvariantViolation(MazeError):
    """Exception raised when generation reaches a state a valid grid cannot produce."""

    pass


def validate_dimensions(width: int, height: int) -> None:
    """
    Check that a maze can be generated on a width x height grid.

    Raises:
        ValueError: If either dimension is even or smaller than 5.
    """
    for name, value in (("width", width), ("height", height)):
        if value < MIN_SIZE or value % 2 == 0:
            raise ValueError(
                f"Maze {name} must be an odd number >= {MIN_SIZE}, got {value}"
            )


def candidate_directions(y: int) -> tuple[Direction, ...]:
    """Directions a pillar on row y may collapse towards."""
    return ALL_DIRECTIONS if y <= NORTH_COLLAPSE_MAX_ROW else NO_NORTH_DIRECTIONS


class MazeGenerator:
    """
    Generates perfect mazes with the pillar-collapse algorithm.

    Example usage:
        generator = MazeGenerator(random.Random(42))
        grid = Grid(21, 21)
        generator.generate(grid)
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        max_collapse_attempts: int = DEFAULT_MAX_COLLAPSE_ATTEMPTS,
    ):
        """
        Args:
            rng: Random source. A fresh unseeded Random is used if omitted.
            max_collapse_attempts: Cap on direction draws for a single pillar.
        """
        if max_collapse_attempts < 1:
            raise ValueError("max_collapse_attempts must be at least 1")

        self.rng = rng if rng is not None else random.Random()
        self.max_collapse_attempts = max_collapse_attempts

    def generate(self, grid: Grid[Tile]) -> Grid[Tile]:
        """
        Turn grid into a maze in place.

        Args:
            grid: Grid to overwrite. Its previous contents are discarded.

        Returns:
            The same grid, for convenience.

        Raises:
            ValueError: If the grid dimensions are invalid.
            InvariantViolation: If a pillar cannot collapse anywhere.
        """
        validate_dimensions(grid.width, grid.height)

        grid.fill(Tile.ROAD)
        grid.set_each(lambda x, y, tile: Tile.WALL if self._on_border(grid, x, y) else tile)
        grid.set_each(
            lambda x, y, tile: Tile.PILLAR if self._is_pillar_site(grid, x, y) else tile
        )

        def collapse_if_pillar(x: int, y: int, tile: Tile) -> None:
            if tile == Tile.PILLAR:
                self._collapse(grid, x, y)

        grid.each(collapse_if_pillar)

        logger.debug(
            f"Generated {grid.width}x{grid.height} maze with "
            f"{grid.count(Tile.ROAD)} road cells"
        )
        return grid

    @staticmethod
    def _on_border(grid: Grid[Tile], x: int, y: int) -> bool:
        return x == 0 or y == 0 or x == grid.width - 1 or y == grid.height - 1

    @staticmethod
    def _is_pillar_site(grid: Grid[Tile], x: int, y: int) -> bool:
        return (
            x % 2 == 0
            and y % 2 == 0
            and 0 < x < grid.width - 1
            and 0 < y < grid.height - 1
        )

    def _collapse(self, grid: Grid[Tile], x: int, y: int) -> None:
        """Knock the pillar at (x, y) over onto one of its open neighbours."""
        directions = candidate_directions(y)

        open_directions = [
            d for d in directions
            if grid.get(x + d.delta[0], y + d.delta[1]) != Tile.WALL
        ]
        if not open_directions:
            raise InvariantViolation(
                f"Pillar at ({x}, {y}) has no open neighbour to collapse onto"
            )

        for _ in range(self.max_collapse_attempts):
            dx, dy = self.rng.choice(directions).delta
            tx, ty = x + dx, y + dy

            # Falling onto existing wall would close a loop; draw again
            if grid.get(tx, ty) == Tile.WALL:
                continue

            grid.set(x, y, Tile.WALL)
            grid.set(tx, ty, Tile.WALL)
            return

        raise InvariantViolation(
            f"Pillar at ({x}, {y}) did not collapse after "
            f"{self.max_collapse_attempts} attempts"
        )


def create_maze(
    width: int,
    height: int,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    max_collapse_attempts: int = DEFAULT_MAX_COLLAPSE_ATTEMPTS,
) -> Grid[Tile]:
    """
    Allocate and generate a maze.

    Args:
        width: Odd number of columns, at least 5.
        height: Odd number of rows, at least 5.
        rng: Random source. Takes precedence over seed.
        seed: Seed for a new Random when rng is not given.
        max_collapse_attempts: Cap on direction draws for a single pillar.

    Returns:
        Finished maze grid.
    """
    validate_dimensions(width, height)
    if rng is None:
        rng = random.Random(seed)

    grid: Grid[Tile] = Grid(width, height, Tile.ROAD)
    return MazeGenerator(rng, max_collapse_attempts).generate(grid)
