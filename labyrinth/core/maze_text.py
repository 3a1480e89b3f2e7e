"""
Text format for labyrinth grids.

Renders mazes as ASCII and loads hand-drawn mazes back into a Grid.

Maze Format:
    S = Start position
    E = Exit (goal)
    X = Wall (impassable)
    . = Open road
    @ = Walker (render only)
    o = Visited road (render only)
    + = Pillar (render only, seen mid-generation)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .grid import Grid, Point, Tile

START_CHAR = "S"
EXIT_CHAR = "E"
WALKER_CHAR = "@"
TRACE_CHAR = "o"

VALID_CHARS = {Tile.WALL.value, Tile.ROAD.value, START_CHAR, EXIT_CHAR}


class MazeParseError(Exception):
    """Exception raised when maze parsing fails."""

    pass


class MazeValidationError(Exception):
    """Exception raised when maze validation fails."""

    pass


@dataclass
class ParsedMaze:
    """Parsed maze ready to be walked."""

    grid: Grid[Tile]
    start: Point
    goal: Point

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "width": self.width,
            "height": self.height,
            "start": self.start.to_dict(),
            "goal": self.goal.to_dict(),
            "rows": render_rows(self.grid, start=self.start, goal=self.goal),
        }


def render_rows(
    grid: Grid[Tile],
    start: Optional[Point] = None,
    goal: Optional[Point] = None,
    walker: Optional[Point] = None,
    trace: Optional[Grid[bool]] = None,
) -> list[str]:
    """
    Render grid as a list of text rows.

    Markers are layered: walker over goal over start over trace over tile.
    """
    rows = []
    for y in range(grid.height):
        line = ""
        for x, tile in enumerate(grid.row(y)):
            point = (x, y)
            if walker is not None and point == walker:
                line += WALKER_CHAR
            elif goal is not None and point == goal:
                line += EXIT_CHAR
            elif start is not None and point == start:
                line += START_CHAR
            elif trace is not None and trace.get(x, y):
                line += TRACE_CHAR
            else:
                line += tile.value
        rows.append(line)
    return rows


def render_maze(
    grid: Grid[Tile],
    start: Optional[Point] = None,
    goal: Optional[Point] = None,
    walker: Optional[Point] = None,
    trace: Optional[Grid[bool]] = None,
) -> str:
    """Render grid as a multi-line string. See render_rows."""
    return "\n".join(render_rows(grid, start, goal, walker, trace))


def parse_maze_text(maze_text: str) -> ParsedMaze:
    """
    Parse maze text into a grid with start and goal.

    Args:
        maze_text: Multi-line string representing the maze grid.

    Returns:
        ParsedMaze with grid, start and goal.

    Raises:
        MazeParseError: If the maze cannot be parsed.
        MazeValidationError: If the maze is invalid.
    """
    if not maze_text or not maze_text.strip():
        raise MazeParseError("Maze text is empty")

    lines = [line.rstrip("\r") for line in maze_text.strip().split("\n")]
    height = len(lines)
    width = len(lines[0])

    for y, line in enumerate(lines):
        if len(line) != width:
            raise MazeParseError(
                f"Row {y} has {len(line)} columns, expected {width}"
            )

    grid: Grid[Tile] = Grid(width, height, Tile.WALL)
    start_pos: Optional[Point] = None
    exit_pos: Optional[Point] = None

    for y, line in enumerate(lines):
        for x, char in enumerate(line):
            if char not in VALID_CHARS:
                raise MazeValidationError(
                    f"Invalid character '{char}' at position ({x}, {y}). "
                    f"Valid characters: {', '.join(sorted(VALID_CHARS))}"
                )

            if char == START_CHAR:
                if start_pos is not None:
                    raise MazeValidationError(
                        f"Multiple start positions found: "
                        f"first at ({start_pos.x}, {start_pos.y}), second at ({x}, {y})"
                    )
                start_pos = Point(x, y)
            elif char == EXIT_CHAR:
                if exit_pos is not None:
                    raise MazeValidationError(
                        f"Multiple exit positions found: "
                        f"first at ({exit_pos.x}, {exit_pos.y}), second at ({x}, {y})"
                    )
                exit_pos = Point(x, y)

            grid.set(x, y, Tile.WALL if char == Tile.WALL.value else Tile.ROAD)

    if start_pos is None:
        raise MazeValidationError("Maze must have a start position (S)")

    if exit_pos is None:
        raise MazeValidationError("Maze must have an exit position (E)")

    # The walker only looks one cell away, so a walled border keeps it in bounds
    for x, y, tile in grid:
        on_border = x in (0, width - 1) or y in (0, height - 1)
        if on_border and tile != Tile.WALL:
            raise MazeValidationError(
                f"Maze border must be wall, found open cell at ({x}, {y})"
            )

    return ParsedMaze(grid=grid, start=start_pos, goal=exit_pos)


def load_maze_file(file_path: Path | str) -> ParsedMaze:
    """
    Load and parse a maze file from the filesystem.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        MazeParseError: If the maze cannot be parsed.
        MazeValidationError: If the maze is invalid.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Maze file not found: {file_path}")

    if not file_path.is_file():
        raise MazeParseError(f"Path is not a file: {file_path}")

    try:
        maze_text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MazeParseError(f"Failed to read maze file: {e}") from e

    return parse_maze_text(maze_text)


def validate_maze_text(maze_text: str) -> tuple[bool, Optional[str]]:
    """
    Validate maze text without raising exceptions.

    Returns:
        Tuple of (is_valid, error_message).
        error_message is None if valid.
    """
    try:
        parse_maze_text(maze_text)
        return True, None
    except (MazeParseError, MazeValidationError) as e:
        return False, str(e)
