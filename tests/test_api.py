"""Tests for the HTTP API."""

import pytest
from httpx import AsyncClient

from labyrinth.api.deps import limiter
from labyrinth.config import get_settings


@pytest.fixture
def tight_step_limit(monkeypatch):
    """Allow only two step or run requests per minute."""
    monkeypatch.setattr(limiter, "enabled", True)
    monkeypatch.setattr(get_settings(), "rate_limit_steps", 2)
    limiter.reset()
    yield
    limiter.reset()


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    """Test that health endpoint returns ok status."""
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "version" in data
    assert "X-Request-ID" in response.headers


@pytest.mark.asyncio
async def test_root_endpoint(client: AsyncClient):
    """Test that root endpoint returns API info."""
    response = await client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert "name" in data
    assert "version" in data
    assert "docs" in data


@pytest.mark.asyncio
async def test_generate_maze(client: AsyncClient):
    """Test POST /v1/maze/generate is deterministic for a seed."""
    payload = {"width": 11, "height": 9, "seed": 21}

    response = await client.post("/v1/maze/generate", json=payload)
    assert response.status_code == 200
    data = response.json()

    assert data["width"] == 11
    assert data["height"] == 9
    assert data["seed"] == 21
    assert data["start"] == {"x": 1, "y": 1}
    assert data["goal"] == {"x": 9, "y": 7}
    assert len(data["rows"]) == 9
    assert data["rows"][0] == "X" * 11
    assert data["rows"][1][1] == "S"
    assert data["rows"][7][9] == "E"

    again = await client.post("/v1/maze/generate", json=payload)
    assert again.json()["rows"] == data["rows"]


@pytest.mark.asyncio
async def test_generate_maze_invalid_size(client: AsyncClient):
    response = await client.post("/v1/maze/generate", json={"width": 8, "height": 9})
    assert response.status_code == 422
    assert "odd number" in response.json()["detail"]

    response = await client.post("/v1/maze/generate", json={"width": 3, "height": 9})
    assert response.status_code == 422

    response = await client.post(
        "/v1/maze/generate", json={"width": 10001, "height": 9}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_session_lifecycle(client: AsyncClient):
    """Create a session, step it, run it to the goal and end it."""
    response = await client.post(
        "/v1/session", json={"width": 15, "height": 11, "seed": 3}
    )
    assert response.status_code == 201
    data = response.json()
    session_id = data["id"]

    assert data["position"] == {"x": 1, "y": 1}
    assert data["direction"] == "east"
    assert data["direction_index"] == 0
    assert data["ahead"] == {"x": 2, "y": 1}
    assert data["right"] == {"x": 1, "y": 2}
    assert data["goal"] == {"x": 13, "y": 9}
    assert data["step_count"] == 0
    assert data["completed"] is False

    # Single step
    response = await client.post(
        f"/v1/session/{session_id}/step", json={"count": 1}
    )
    assert response.status_code == 200
    step_data = response.json()
    assert step_data["steps_taken"] == 1
    assert step_data["step_count"] == 1
    assert step_data["status"] in ("moved", "turned")

    # State reflects the step
    response = await client.get(f"/v1/session/{session_id}")
    assert response.status_code == 200
    assert response.json()["step_count"] == 1
    assert response.json()["position"] == step_data["position"]

    # Grid shows the walker
    response = await client.get(f"/v1/session/{session_id}/grid")
    assert response.status_code == 200
    rows = response.json()["rows"]
    assert len(rows) == 11
    assert sum(row.count("@") for row in rows) == 1

    # Run to the goal
    response = await client.post(f"/v1/session/{session_id}/run")
    assert response.status_code == 200
    final = response.json()
    assert final["completed"] is True
    assert final["position"] == final["goal"]
    assert final["step_count"] > 1

    # Stepping a completed session is rejected
    response = await client.post(
        f"/v1/session/{session_id}/step", json={"count": 1}
    )
    assert response.status_code == 400

    # End it
    response = await client.delete(f"/v1/session/{session_id}")
    assert response.status_code == 204
    response = await client.get(f"/v1/session/{session_id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_step_stops_at_goal(client: AsyncClient):
    response = await client.post(
        "/v1/session", json={"width": 7, "height": 7, "seed": 12}
    )
    session_id = response.json()["id"]

    response = await client.post(
        f"/v1/session/{session_id}/step", json={"count": 500}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "completed"
    assert data["completed"] is True
    assert data["position"] == {"x": 5, "y": 5}
    assert data["steps_taken"] == data["step_count"]
    assert "Goal reached" in data["message"]


@pytest.mark.asyncio
async def test_session_defaults(client: AsyncClient):
    response = await client.post("/v1/session", json={})
    assert response.status_code == 201
    data = response.json()
    assert data["width"] == 31
    assert data["height"] == 31


@pytest.mark.asyncio
async def test_unknown_session(client: AsyncClient):
    response = await client.get("/v1/session/maze_missing")
    assert response.status_code == 404

    response = await client.post("/v1/session/maze_missing/step", json={"count": 1})
    assert response.status_code == 404

    response = await client.delete("/v1/session/maze_missing")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_invalid_step_count(client: AsyncClient):
    response = await client.post("/v1/session", json={"width": 5, "height": 5})
    session_id = response.json()["id"]

    response = await client.post(
        f"/v1/session/{session_id}/step", json={"count": 0}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_request_id_header(client: AsyncClient):
    """Test that every response carries its own short request ID."""
    first = await client.get("/health")
    second = await client.get("/health")

    assert len(first.headers["X-Request-ID"]) == 8
    assert len(second.headers["X-Request-ID"]) == 8
    assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_step_rate_limited(client: AsyncClient, tight_step_limit):
    """Test that step requests beyond the limit get a 429."""
    response = await client.post(
        "/v1/session", json={"width": 31, "height": 31, "seed": 1}
    )
    session_id = response.json()["id"]

    for _ in range(2):
        response = await client.post(
            f"/v1/session/{session_id}/step", json={"count": 1}
        )
        assert response.status_code == 200

    response = await client.post(
        f"/v1/session/{session_id}/step", json={"count": 1}
    )
    assert response.status_code == 429
    data = response.json()
    assert "Rate limit exceeded" in data["detail"]
    assert "2 per 1 minute" in data["retry_after"]
    assert "X-Request-ID" in response.headers

    # Rejected requests never move the walker
    response = await client.get(f"/v1/session/{session_id}")
    assert response.json()["step_count"] == 2


@pytest.mark.asyncio
async def test_session_creation_not_rate_limited(client: AsyncClient, tight_step_limit):
    for seed in range(4):
        response = await client.post(
            "/v1/session", json={"width": 5, "height": 5, "seed": seed}
        )
        assert response.status_code == 201
