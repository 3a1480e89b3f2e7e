"""Maze routes for generating mazes without a session."""

from fastapi import APIRouter, HTTPException

from labyrinth.api.deps import resolve_size
from labyrinth.config import get_settings
from labyrinth.core.generator import create_maze
from labyrinth.core.grid import Tile
from labyrinth.core.maze_text import render_rows
from labyrinth.schemas.maze import MazeDetail, MazeGenerateRequest, MazePosition

settings = get_settings()

router = APIRouter(prefix="/maze", tags=["Mazes"])


@router.post(
    "/generate",
    response_model=MazeDetail,
)
async def generate_maze(request: MazeGenerateRequest) -> MazeDetail:
    """Generate a maze.

    The same seed and size always produce the same maze.
    Start is (1, 1) and the goal is the opposite inner corner.
    """
    width, height = resolve_size(request.width, request.height)

    try:
        grid = create_maze(
            width,
            height,
            seed=request.seed,
            max_collapse_attempts=settings.max_collapse_attempts,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    start = MazePosition(x=1, y=1)
    goal = MazePosition(x=width - 2, y=height - 2)

    return MazeDetail(
        width=width,
        height=height,
        seed=request.seed,
        start=start,
        goal=goal,
        road_cells=grid.count(Tile.ROAD),
        rows=render_rows(grid, start=(start.x, start.y), goal=(goal.x, goal.y)),
    )
