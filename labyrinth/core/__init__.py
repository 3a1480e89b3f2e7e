# Core module
from .grid import Grid, MazeError, OutOfBoundsError, Point, Tile
from .generator import (
    InvariantViolation,
    MazeGenerator,
    candidate_directions,
    create_maze,
    validate_dimensions,
)
from .walker import Direction, StepResult, Walker
from .session import MazeSession
from .maze_text import (
    MazeParseError,
    MazeValidationError,
    ParsedMaze,
    parse_maze_text,
    load_maze_file,
    render_maze,
    render_rows,
    validate_maze_text,
)

__all__ = [
    "Grid",
    "MazeError",
    "OutOfBoundsError",
    "Point",
    "Tile",
    "InvariantViolation",
    "MazeGenerator",
    "candidate_directions",
    "create_maze",
    "validate_dimensions",
    "Direction",
    "StepResult",
    "Walker",
    "MazeSession",
    "MazeParseError",
    "MazeValidationError",
    "ParsedMaze",
    "parse_maze_text",
    "load_maze_file",
    "render_maze",
    "render_rows",
    "validate_maze_text",
]
