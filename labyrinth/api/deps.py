"""API dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from slowapi import Limiter
from slowapi.util import get_remote_address

from labyrinth.config import get_settings
from labyrinth.core.session import MazeSession
from labyrinth.services.session_service import (
    SessionNotFoundError,
    SessionService,
    get_session_service,
)

settings = get_settings()

# Rate limiter shared by the app and the routes
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def step_rate_limit() -> str:
    """Limit for walker step and run requests, read on every request."""
    return f"{get_settings().rate_limit_steps}/minute"


def get_sessions() -> SessionService:
    """Get the session service."""
    return get_session_service()


def resolve_size(width: int | None, height: int | None) -> tuple[int, int]:
    """Apply defaults and configured limits to requested maze dimensions."""
    width = settings.default_width if width is None else width
    height = settings.default_height if height is None else height

    if width > settings.max_width or height > settings.max_height:
        raise HTTPException(
            status_code=422,
            detail=f"Maze size {width}x{height} exceeds limit "
            f"{settings.max_width}x{settings.max_height}",
        )
    return width, height


def lookup_session(sessions: SessionService, session_id: str) -> MazeSession:
    """Get a session or raise 404."""
    try:
        return sessions.get_session(session_id)
    except SessionNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session not found: {session_id}",
        )


# Type aliases for cleaner route signatures
Sessions = Annotated[SessionService, Depends(get_sessions)]
