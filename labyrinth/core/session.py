"""
Labyrinth maze session.

Owns one maze, the walker exploring it, the goal and a visited trace.
Generation runs once at construction; the walker then advances one step
per call to step() until it stands on the goal.
"""

import logging
import random
import uuid
from typing import Optional

from .generator import DEFAULT_MAX_COLLAPSE_ATTEMPTS, InvariantViolation, create_maze
from .grid import Grid, Point, Tile
from .maze_text import render_maze, render_rows, parse_maze_text
from .walker import Direction, StepResult, Walker

logger = logging.getLogger(__name__)

# Upper bound on steps to reach the goal, per road cell
STEP_LIMIT_FACTOR = 4


def _new_session_id() -> str:
    return f"maze_{uuid.uuid4().hex[:12]}"


class MazeSession:
    """
    A maze, a walker and a goal.

    Example usage:
        session = MazeSession.generate(21, 21, seed=7)
        while not session.completed:
            session.step()
        print(session.step_count)
    """

    def __init__(
        self,
        grid: Grid[Tile],
        start: tuple[int, int],
        goal: tuple[int, int],
        seed: Optional[int] = None,
        session_id: Optional[str] = None,
    ):
        """
        Initialize session on a finished maze.

        Args:
            grid: Finished maze. The session never modifies it.
            start: Walker start cell.
            goal: Goal cell.
            seed: Seed the maze was generated from, if known.
            session_id: Optional custom session ID.

        Raises:
            ValueError: If start or goal is out of bounds or not road.
        """
        self.session_id = session_id or _new_session_id()
        self.grid = grid
        self.seed = seed
        self.start = Point(*start)
        self.goal = Point(*goal)

        for name, point in (("start", self.start), ("goal", self.goal)):
            if not grid.in_bounds(*point):
                raise ValueError(f"Maze {name} {tuple(point)} is outside the grid")
            if grid[point] != Tile.ROAD:
                raise ValueError(f"Maze {name} {tuple(point)} is not on a road cell")

        self.walker = Walker(self.start, Direction.EAST)
        self.trace: Grid[bool] = Grid(grid.width, grid.height, False)
        self.trace[self.start] = True
        self.step_count = 0
        self.completed = self.at_goal

    @classmethod
    def generate(
        cls,
        width: int,
        height: int,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        start: Optional[tuple[int, int]] = None,
        goal: Optional[tuple[int, int]] = None,
        session_id: Optional[str] = None,
        max_collapse_attempts: int = DEFAULT_MAX_COLLAPSE_ATTEMPTS,
    ) -> "MazeSession":
        """
        Generate a new maze and start a session on it.

        The walker starts at (1, 1) and the goal sits in the opposite
        corner, one cell in from the border, unless overridden.

        Raises:
            ValueError: If the dimensions, start or goal are invalid.
        """
        grid = create_maze(
            width,
            height,
            rng=rng,
            seed=seed,
            max_collapse_attempts=max_collapse_attempts,
        )
        session = cls(
            grid,
            start=start if start is not None else (1, 1),
            goal=goal if goal is not None else (width - 2, height - 2),
            seed=seed,
            session_id=session_id,
        )
        logger.info(
            f"Session {session.session_id} created: {width}x{height} maze "
            f"(seed={seed})"
        )
        return session

    @classmethod
    def from_text(cls, maze_text: str, session_id: Optional[str] = None) -> "MazeSession":
        """
        Start a session on a hand-drawn maze.

        Raises:
            MazeParseError: If the maze cannot be parsed.
            MazeValidationError: If the maze is invalid.
        """
        parsed = parse_maze_text(maze_text)
        return cls(parsed.grid, parsed.start, parsed.goal, session_id=session_id)

    @property
    def at_goal(self) -> bool:
        return self.walker.position == self.goal

    @property
    def road_cells(self) -> int:
        return self.grid.count(Tile.ROAD)

    @property
    def step_limit(self) -> int:
        """Steps within which the walker must reach the goal."""
        return STEP_LIMIT_FACTOR * self.road_cells

    def step(self) -> StepResult:
        """
        Advance the walker one step.

        Returns:
            StepResult of the walker.

        Raises:
            ValueError: If the session is already completed.
        """
        if self.completed:
            raise ValueError("Session already completed")

        result = self.walker.step(self.grid)
        self.step_count += 1
        self.trace[result.position] = True

        if self.at_goal:
            self.completed = True
            logger.info(
                f"Session {self.session_id} reached goal in {self.step_count} steps"
            )

        return result

    def run(self, max_steps: Optional[int] = None) -> int:
        """
        Step until the walker reaches the goal.

        Args:
            max_steps: Step budget. Defaults to step_limit.

        Returns:
            Total step count of the session.

        Raises:
            InvariantViolation: If the goal is not reached within budget.
        """
        budget = self.step_limit if max_steps is None else max_steps

        for _ in range(budget):
            if self.completed:
                break
            self.step()

        if not self.completed:
            raise InvariantViolation(
                f"Walker did not reach goal {tuple(self.goal)} within {budget} steps"
            )
        return self.step_count

    def rows(self, show_trace: bool = True) -> list[str]:
        """Render the maze with start, goal, walker and trace markers."""
        return render_rows(
            self.grid,
            start=self.start,
            goal=self.goal,
            walker=self.walker.position,
            trace=self.trace if show_trace else None,
        )

    def render(self, show_trace: bool = True) -> str:
        return render_maze(
            self.grid,
            start=self.start,
            goal=self.goal,
            walker=self.walker.position,
            trace=self.trace if show_trace else None,
        )

    def to_dict(self) -> dict:
        """Convert walker and session state to dictionary."""
        walker = self.walker
        return {
            "session_id": self.session_id,
            "width": self.grid.width,
            "height": self.grid.height,
            "seed": self.seed,
            "position": walker.position.to_dict(),
            "direction": walker.direction.name.lower(),
            "direction_index": walker.direction_index,
            "ahead": walker.ahead.to_dict(),
            "left": walker.left.to_dict(),
            "right": walker.right.to_dict(),
            "start": self.start.to_dict(),
            "goal": self.goal.to_dict(),
            "step_count": self.step_count,
            "completed": self.completed,
        }


if __name__ == "__main__":
    # Quick demo
    session = MazeSession.generate(21, 11, seed=7)
    print("Session:", session.session_id)
    print(session.render())

    steps = session.run()
    print(f"\nReached goal in {steps} steps (limit {session.step_limit})")
    print(session.render())
