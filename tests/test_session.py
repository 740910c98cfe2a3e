"""Tests for session endpoints."""

import pytest
from httpx import AsyncClient


async def _create(client: AsyncClient, level_id: int = 1) -> dict:
    response = await client.post("/v1/session", json={"level_id": level_id})
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_create_session(client: AsyncClient):
    """Test POST /v1/session endpoint to create a session."""
    data = await _create(client)

    assert data["id"].startswith("sess_")
    assert data["level_id"] == 1
    assert data["difficulty"] == "Easy"
    assert data["position"] == {"x": 1, "y": 1}
    assert data["moves"] == 0
    assert data["history_length"] == 0
    assert data["status"] == "playing"
    assert data["seconds"] == 0
    assert data["best_seconds"] is None
    assert "created_at" in data

    # Unknown level
    response = await client.post("/v1/session", json={"level_id": 501})
    assert response.status_code == 404

    # Invalid level id
    response = await client.post("/v1/session", json={"level_id": 0})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_get_session(client: AsyncClient):
    """Test GET /v1/session/{id} endpoint."""
    session_id = (await _create(client, 20))["id"]

    response = await client.get(f"/v1/session/{session_id}")
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == session_id
    assert data["level_id"] == 20

    response = await client.get("/v1/session/sess_doesnotexist")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_move_into_wall_is_blocked(client: AsyncClient):
    """Test that bumping the border changes nothing."""
    session_id = (await _create(client))["id"]

    response = await client.post(f"/v1/session/{session_id}/move", json={"direction": "up"})
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "blocked"
    assert data["position"] == {"x": 1, "y": 1}
    assert data["moves"] == 0

    state = (await client.get(f"/v1/session/{session_id}")).json()
    assert state["history_length"] == 0


@pytest.mark.asyncio
async def test_move_invalid_direction(client: AsyncClient):
    session_id = (await _create(client))["id"]

    response = await client.post(f"/v1/session/{session_id}/move", json={"direction": "north"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_move_unknown_session(client: AsyncClient):
    response = await client.post("/v1/session/sess_nope/move", json={"direction": "up"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_move_and_undo(client: AsyncClient, catalog, solve):
    """Test that undo reverses a legal move."""
    session_id = (await _create(client))["id"]
    first = solve(catalog.level_at(1))[0]

    response = await client.post(f"/v1/session/{session_id}/move", json={"direction": first.value})
    data = response.json()
    assert data["status"] == "moved"
    assert data["moves"] == 1

    response = await client.post(f"/v1/session/{session_id}/undo")
    assert response.status_code == 200
    data = response.json()
    assert data["undone"] is True
    assert data["position"] == {"x": 1, "y": 1}
    assert data["moves"] == 0
    assert data["history_length"] == 0

    # Nothing left to undo
    response = await client.post(f"/v1/session/{session_id}/undo")
    assert response.json()["undone"] is False


@pytest.mark.asyncio
async def test_play_through_level(client: AsyncClient, catalog, solve):
    """Test a full play-through: ticks, win, records, replay and next level."""
    session_id = (await _create(client))["id"]
    path = solve(catalog.level_at(1))

    response = await client.post(f"/v1/session/{session_id}/tick", json={"seconds": 4})
    assert response.json()["seconds"] == 4

    statuses = []
    for direction in path:
        response = await client.post(
            f"/v1/session/{session_id}/move", json={"direction": direction.value}
        )
        statuses.append(response.json()["status"])

    assert statuses[-1] == "won"
    assert statuses.count("won") == 1
    assert response.json()["best_seconds"] == 4

    state = (await client.get(f"/v1/session/{session_id}")).json()
    assert state["status"] == "won"
    assert state["moves"] == len(path)
    assert state["levels_cleared"] == 1

    # Terminal until reset
    response = await client.post(f"/v1/session/{session_id}/move", json={"direction": "up"})
    assert response.json()["status"] == "ignored"
    response = await client.post(f"/v1/session/{session_id}/undo")
    assert response.json()["undone"] is False

    # Clock is stopped
    response = await client.post(f"/v1/session/{session_id}/tick")
    assert response.json()["seconds"] == 4

    response = await client.get("/v1/records/1")
    assert response.json()["best_seconds"] == 4

    response = await client.get("/v1/records/career")
    assert response.json()["levels_cleared"] == 1

    # Replay
    response = await client.post(f"/v1/session/{session_id}/reset")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "playing"
    assert data["position"] == {"x": 1, "y": 1}
    assert data["moves"] == 0
    assert data["seconds"] == 0
    assert data["best_seconds"] == 4

    # Next level
    response = await client.post(f"/v1/session/{session_id}/next")
    assert response.status_code == 200
    data = response.json()
    assert data["level_id"] == 2
    assert data["best_seconds"] is None


@pytest.mark.asyncio
async def test_reset_to_level(client: AsyncClient):
    session_id = (await _create(client))["id"]

    response = await client.post(f"/v1/session/{session_id}/reset", json={"level_id": 120})
    assert response.status_code == 200
    data = response.json()
    assert data["level_id"] == 120
    assert data["difficulty"] == "Hard"

    response = await client.post(f"/v1/session/{session_id}/reset", json={"level_id": 999})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_next_past_last_level(client: AsyncClient):
    session_id = (await _create(client, 500))["id"]

    response = await client.post(f"/v1/session/{session_id}/next")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_tick_validation(client: AsyncClient):
    session_id = (await _create(client))["id"]

    response = await client.post(f"/v1/session/{session_id}/tick", json={"seconds": 0})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_end_session(client: AsyncClient):
    """Test DELETE /v1/session/{id} endpoint."""
    session_id = (await _create(client))["id"]

    response = await client.delete(f"/v1/session/{session_id}")
    assert response.status_code == 204

    response = await client.get(f"/v1/session/{session_id}")
    assert response.status_code == 404

    response = await client.delete(f"/v1/session/{session_id}")
    assert response.status_code == 404
