"""Session schemas for request/response validation."""

from typing import Optional

from pydantic import BaseModel, Field

from labyrinth.schemas.maze import MazePosition


class SessionCreateRequest(BaseModel):
    """Schema for creating a new session."""

    width: Optional[int] = Field(None, ge=5)
    height: Optional[int] = Field(None, ge=5)
    seed: Optional[int] = None


class SessionState(BaseModel):
    """Schema for session state: walker readout and progress."""

    id: str
    width: int
    height: int
    seed: Optional[int] = None
    position: MazePosition
    direction: str  # east, south, west, north
    direction_index: int
    ahead: MazePosition
    left: MazePosition
    right: MazePosition
    start: MazePosition
    goal: MazePosition
    step_count: int
    completed: bool


class SessionGrid(BaseModel):
    """Schema for the rendered session grid."""

    id: str
    rows: list[str]


class StepRequest(BaseModel):
    """Schema for step request."""

    count: int = Field(1, ge=1)


class StepResponse(BaseModel):
    """Schema for step response."""

    status: str  # moved, turned, completed
    steps_taken: int
    position: MazePosition
    direction: str
    step_count: int
    completed: bool
    message: Optional[str] = None
