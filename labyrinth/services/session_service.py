"""In-memory registry of live maze sessions."""

import logging
from collections import OrderedDict
from typing import Optional

from labyrinth.config import get_settings
from labyrinth.core.session import MazeSession
from labyrinth.core.walker import StepResult

logger = logging.getLogger(__name__)


class SessionNotFoundError(KeyError):
    """Exception raised when a session ID is unknown."""

    pass


class SessionService:
    """
    Service holding maze sessions for the lifetime of the process.

    Sessions are kept in creation order; when the registry is full the
    oldest session is evicted to make room.
    """

    def __init__(self, max_sessions: int = 100, max_collapse_attempts: int = 1000):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")

        self.max_sessions = max_sessions
        self.max_collapse_attempts = max_collapse_attempts
        self._sessions: OrderedDict[str, MazeSession] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def create_session(
        self,
        width: int,
        height: int,
        seed: Optional[int] = None,
    ) -> MazeSession:
        """
        Generate a maze and register a session on it.

        Raises:
            ValueError: If the dimensions are invalid.
        """
        session = MazeSession.generate(
            width,
            height,
            seed=seed,
            max_collapse_attempts=self.max_collapse_attempts,
        )

        while len(self._sessions) >= self.max_sessions:
            evicted_id, _ = self._sessions.popitem(last=False)
            logger.info(f"Session limit reached, evicted {evicted_id}")

        self._sessions[session.session_id] = session
        return session

    def get_session(self, session_id: str) -> MazeSession:
        """
        Get session by ID.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def end_session(self, session_id: str) -> bool:
        """End and remove a session."""
        if session_id in self._sessions:
            del self._sessions[session_id]
            logger.info(f"Session {session_id} ended")
            return True
        return False

    def step(self, session_id: str, count: int = 1) -> list[StepResult]:
        """
        Advance a session up to count steps, stopping at the goal.

        Raises:
            SessionNotFoundError: If the session does not exist.
            ValueError: If the session is already completed.
        """
        if count < 1:
            raise ValueError("Step count must be at least 1")

        session = self.get_session(session_id)
        if session.completed:
            raise ValueError("Session already completed")

        results = []
        for _ in range(count):
            results.append(session.step())
            if session.completed:
                break
        return results

    def run(self, session_id: str) -> MazeSession:
        """
        Walk a session to its goal.

        Raises:
            SessionNotFoundError: If the session does not exist.
            InvariantViolation: If the goal is not reached within the step limit.
        """
        session = self.get_session(session_id)
        if not session.completed:
            session.run()
        return session


# Singleton instance
_session_service: Optional[SessionService] = None


def get_session_service() -> SessionService:
    """Get singleton session service."""
    global _session_service
    if _session_service is None:
        settings = get_settings()
        _session_service = SessionService(
            max_sessions=settings.max_sessions,
            max_collapse_attempts=settings.max_collapse_attempts,
        )
    return _session_service
