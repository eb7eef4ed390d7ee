"""Pytest configuration and fixtures."""

import os
import random
from typing import AsyncGenerator

# Must be set before the app (and its limiter) is imported
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from maze_escape.main import app
from maze_escape.config import get_settings
from maze_escape.services.game_service import GameService, get_game_service


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible mazes."""
    return random.Random(1234)


@pytest.fixture
def clock() -> FakeClock:
    """Fake clock for time budget tests."""
    return FakeClock()


@pytest.fixture
def game_service() -> GameService:
    """Fresh in-memory game service."""
    return GameService(get_settings())


@pytest_asyncio.fixture(scope="function")
async def client(game_service) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""
    app.dependency_overrides[get_game_service] = lambda: game_service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
