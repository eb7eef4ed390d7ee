"""Tests for maze endpoints."""

import pytest
from httpx import AsyncClient


SIMPLE_MAZE = """XXXXX
XSC.X
XFX.X
XL.EX
XXXXX"""


@pytest.mark.asyncio
async def test_generate_default_size(client: AsyncClient):
    """Test generating a maze with configured defaults."""
    response = await client.post("/v1/maze/generate", json={})

    assert response.status_code == 200
    data = response.json()
    assert data["width"] == 21
    assert data["height"] == 21
    rows = data["grid_data"].split("\n")
    assert len(rows) == 21
    assert all(len(row) == 21 for row in rows)
    assert rows[data["player_start"]["y"]][data["player_start"]["x"]] == "S"
    assert rows[data["exit"]["y"]][data["exit"]["x"]] == "E"


@pytest.mark.asyncio
async def test_generate_bumps_even_dimensions(client: AsyncClient):
    """Test even sizes become the next odd size."""
    response = await client.post(
        "/v1/maze/generate",
        json={"width": 20, "height": 22, "seed": 3},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["width"] == 21
    assert data["height"] == 23


@pytest.mark.asyncio
async def test_generate_same_seed_same_maze(client: AsyncClient):
    """Test seeded generation is reproducible."""
    payload = {"width": 15, "height": 15, "seed": 1234}

    first = (await client.post("/v1/maze/generate", json=payload)).json()
    second = (await client.post("/v1/maze/generate", json=payload)).json()

    assert first == second


@pytest.mark.asyncio
async def test_generate_item_counts(client: AsyncClient):
    """Test item counts stay within their ranges on a full-size maze."""
    data = (await client.post("/v1/maze/generate", json={"seed": 8})).json()

    assert 5 <= len(data["chips"]) <= 8
    assert 2 <= len(data["firewalls"]) <= 4
    assert 3 <= len(data["lockers"]) <= 5
    assert all(locker["id"] == f"locker_{locker['x']}_{locker['y']}" for locker in data["lockers"])


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload", [{"width": 2}, {"height": 1}, {"width": 3}, {"height": 4}, {"width": 500}]
)
async def test_generate_rejects_bad_dimensions(client: AsyncClient, payload):
    """Test dimension bounds."""
    response = await client.post("/v1/maze/generate", json=payload)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_validate_valid_maze(client: AsyncClient):
    """Test validating playable maze text."""
    response = await client.post("/v1/maze/validate", json={"grid_data": SIMPLE_MAZE})

    assert response.status_code == 200
    assert response.json() == {"valid": True, "error": None}


@pytest.mark.asyncio
async def test_validate_invalid_maze(client: AsyncClient):
    """Test validating maze text with no exit."""
    response = await client.post(
        "/v1/maze/validate",
        json={"grid_data": "XXXXX\nXS..X\nXXXXX"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["valid"] is False
    assert "exit position" in data["error"]


@pytest.mark.asyncio
async def test_generated_maze_validates(client: AsyncClient):
    """Test generated text passes validation."""
    maze = (await client.post("/v1/maze/generate", json={"seed": 21})).json()

    response = await client.post("/v1/maze/validate", json={"grid_data": maze["grid_data"]})

    assert response.json()["valid"] is True


@pytest.mark.asyncio
async def test_smallest_maze_is_playable(client: AsyncClient):
    """Test a 5x5 maze's text starts a session."""
    maze = (await client.post("/v1/maze/generate", json={"width": 5, "height": 5})).json()

    response = await client.post("/v1/session", json={"grid_data": maze["grid_data"]})

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "active"
    assert data["maze"]["exit"] == maze["exit"]
