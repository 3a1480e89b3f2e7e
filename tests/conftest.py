"""Pytest configuration and fixtures."""

from collections import deque
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from labyrinth.main import app
from labyrinth.api.deps import get_sessions
from labyrinth.core.grid import Grid, Tile
from labyrinth.services.session_service import SessionService


def road_components(grid: Grid[Tile]) -> int:
    """Count connected components of road cells under 4-neighbour adjacency."""
    seen = set()
    components = 0

    for x, y, tile in grid:
        if tile != Tile.ROAD or (x, y) in seen:
            continue
        components += 1
        queue = deque([(x, y)])
        seen.add((x, y))
        while queue:
            cx, cy = queue.popleft()
            for dx, dy in ((1, 0), (0, 1), (-1, 0), (0, -1)):
                nx, ny = cx + dx, cy + dy
                if (
                    grid.in_bounds(nx, ny)
                    and (nx, ny) not in seen
                    and grid.get(nx, ny) == Tile.ROAD
                ):
                    seen.add((nx, ny))
                    queue.append((nx, ny))

    return components


def road_adjacencies(grid: Grid[Tile]) -> int:
    """Count road-road adjacent pairs."""
    pairs = 0
    for x, y, tile in grid:
        if tile != Tile.ROAD:
            continue
        if x + 1 < grid.width and grid.get(x + 1, y) == Tile.ROAD:
            pairs += 1
        if y + 1 < grid.height and grid.get(x, y + 1) == Tile.ROAD:
            pairs += 1
    return pairs


@pytest.fixture
def session_service() -> SessionService:
    """Fresh in-memory session registry."""
    return SessionService(max_sessions=10)


@pytest_asyncio.fixture(scope="function")
async def client(session_service) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""
    app.dependency_overrides[get_sessions] = lambda: session_service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
