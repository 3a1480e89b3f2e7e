"""Maze schemas for request/response validation."""

from typing import Optional

from pydantic import BaseModel, Field


class MazePosition(BaseModel):
    """Schema for a position in the maze."""

    x: int
    y: int


class MazeGenerateRequest(BaseModel):
    """Schema for generating a maze.

    Width and height fall back to the configured defaults.
    """

    width: Optional[int] = Field(None, ge=5)
    height: Optional[int] = Field(None, ge=5)
    seed: Optional[int] = None


class MazeDetail(BaseModel):
    """Schema for a generated maze with grid rows."""

    width: int
    height: int
    seed: Optional[int] = None
    start: MazePosition
    goal: MazePosition
    road_cells: int
    rows: list[str]
