"""Session routes for walking generated mazes."""

import logging

from fastapi import APIRouter, HTTPException, Request, Response, status

from labyrinth.api.deps import (
    Sessions,
    limiter,
    lookup_session,
    resolve_size,
    step_rate_limit,
)
from labyrinth.config import get_settings
from labyrinth.core.generator import InvariantViolation
from labyrinth.core.session import MazeSession
from labyrinth.schemas.maze import MazePosition
from labyrinth.schemas.session import (
    SessionCreateRequest,
    SessionGrid,
    SessionState,
    StepRequest,
    StepResponse,
)

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix="/session", tags=["Sessions"])


def _to_state(session: MazeSession) -> SessionState:
    data = session.to_dict()
    data["id"] = data.pop("session_id")
    return SessionState(**data)


@router.post(
    "",
    response_model=SessionState,
    status_code=status.HTTP_201_CREATED,
)
async def create_session(
    request: SessionCreateRequest,
    sessions: Sessions,
) -> SessionState:
    """Create a new maze session.

    Generates a maze and places the walker at (1, 1) facing east.
    """
    width, height = resolve_size(request.width, request.height)

    try:
        session = sessions.create_session(width, height, seed=request.seed)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return _to_state(session)


@router.get(
    "/{session_id}",
    response_model=SessionState,
)
async def get_session(session_id: str, sessions: Sessions) -> SessionState:
    """Get session state by ID.

    Returns the walker position, facing and neighbour cells, plus the goal.
    """
    return _to_state(lookup_session(sessions, session_id))


@router.get(
    "/{session_id}/grid",
    response_model=SessionGrid,
)
async def get_grid(
    session_id: str,
    sessions: Sessions,
    trace: bool = True,
) -> SessionGrid:
    """Get the rendered maze with walker, goal and visited cells."""
    session = lookup_session(sessions, session_id)
    return SessionGrid(id=session.session_id, rows=session.rows(show_trace=trace))


@router.post(
    "/{session_id}/step",
    response_model=StepResponse,
)
@limiter.limit(step_rate_limit)
async def step(
    request: Request,
    session_id: str,
    step_data: StepRequest,
    sessions: Sessions,
) -> StepResponse:
    """Advance the walker.

    Takes up to `count` steps, stopping early when the goal is reached.
    """
    session = lookup_session(sessions, session_id)

    if session.completed:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Session already completed",
        )

    count = min(step_data.count, settings.max_steps_per_request)
    results = sessions.step(session_id, count)
    last = results[-1]

    if session.completed:
        step_status = "completed"
        message = f"Goal reached in {session.step_count} steps"
    elif last.moved:
        step_status = "moved"
        message = None
    else:
        step_status = "turned"
        message = None

    return StepResponse(
        status=step_status,
        steps_taken=len(results),
        position=MazePosition(x=last.position.x, y=last.position.y),
        direction=last.direction.name.lower(),
        step_count=session.step_count,
        completed=session.completed,
        message=message,
    )


@router.post(
    "/{session_id}/run",
    response_model=SessionState,
)
@limiter.limit(step_rate_limit)
async def run(
    request: Request,
    session_id: str,
    sessions: Sessions,
) -> SessionState:
    """Walk the session to its goal."""
    lookup_session(sessions, session_id)

    try:
        session = sessions.run(session_id)
    except InvariantViolation as e:
        logger.error(f"Session {session_id} failed to reach goal: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        )

    return _to_state(session)


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def end_session(session_id: str, sessions: Sessions) -> Response:
    """End a session and discard its maze."""
    if not sessions.end_session(session_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session not found: {session_id}",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
