"""
Right-hand wall-following walker.

The walker holds a position and a facing direction and advances one
grid step per call to step(). It never plans a path; it only looks at
the cell ahead and the cell to its right:

1. If the cell ahead is a wall, turn left and stay put.
   Otherwise move into it.
2. Then, if the cell to the right is not a wall, turn right.

In a perfect maze this traces every corridor and reaches any reachable
goal.
"""

from dataclasses import dataclass

from .grid import Direction, Grid, Point, Tile

__all__ = ["Direction", "StepResult", "Walker"]


@dataclass
class StepResult:
    """Result of a single walker step."""
    moved: bool
    turned_left: bool
    turned_right: bool
    position: Point
    direction: Direction

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "moved": self.moved,
            "turned_left": self.turned_left,
            "turned_right": self.turned_right,
            "position": self.position.to_dict(),
            "direction": self.direction.name.lower(),
        }


class Walker:
    """
    Maze walker following the wall on its right-hand side.

    Example usage:
        walker = Walker(Point(1, 1))
        while walker.position != goal:
            walker.step(grid)
    """

    def __init__(self, position: tuple[int, int], direction: Direction = Direction.EAST):
        self.position = Point(*position)
        self.direction = Direction(direction)

    @property
    def direction_index(self) -> int:
        return int(self.direction)

    @property
    def facing(self) -> tuple[int, int]:
        return self.direction.delta

    @property
    def left_direction(self) -> Direction:
        return self.direction.turned_left()

    @property
    def right_direction(self) -> Direction:
        return self.direction.turned_right()

    @property
    def ahead(self) -> Point:
        """Cell directly in front of the walker."""
        return self.position.offset(*self.direction.delta)

    @property
    def left(self) -> Point:
        """Cell on the walker's left-hand side."""
        return self.position.offset(*self.left_direction.delta)

    @property
    def right(self) -> Point:
        """Cell on the walker's right-hand side."""
        return self.position.offset(*self.right_direction.delta)

    def turn_left(self) -> None:
        self.direction = self.left_direction

    def turn_right(self) -> None:
        self.direction = self.right_direction

    def step(self, grid: Grid[Tile]) -> StepResult:
        """
        Advance one step using the right-hand rule.

        Args:
            grid: Finished maze. Only read, never modified.

        Returns:
            StepResult describing what changed.

        Raises:
            OutOfBoundsError: If the walker looks past the grid edge, which
                only happens when the maze border is not walled.
        """
        moved = turned_left = turned_right = False

        ahead = self.ahead
        if grid[ahead] == Tile.WALL:
            self.turn_left()
            turned_left = True
        else:
            self.position = ahead
            moved = True

        # Re-establish contact with the right-hand wall
        if grid[self.right] != Tile.WALL:
            self.turn_right()
            turned_right = True

        return StepResult(
            moved=moved,
            turned_left=turned_left,
            turned_right=turned_right,
            position=self.position,
            direction=self.direction,
        )

    def __repr__(self) -> str:
        return (
            f"Walker(position=({self.position.x}, {self.position.y}), "
            f"direction={self.direction.name})"
        )
