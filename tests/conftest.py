"""Pytest configuration and fixtures."""

from collections import deque
from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from zenmaze.api.deps import limiter
from zenmaze.core import Difficulty, Direction, Grid, Level, LevelCatalog, Point
from zenmaze.db.store import MemoryStore
from zenmaze.main import app
from zenmaze.services.records_service import RecordsService, get_records_service
from zenmaze.services.session_service import SessionService, get_session_service


# A single winding corridor: start (1,1), exit (1,3), six moves apart
CORRIDOR_MAZE = """XXXXX
X...X
XXX.X
X...X
XXXXX"""

# Right, right, down, down, left, left
CORRIDOR_PATH = [
    Direction.RIGHT,
    Direction.RIGHT,
    Direction.DOWN,
    Direction.DOWN,
    Direction.LEFT,
    Direction.LEFT,
]


@pytest.fixture
def corridor_level() -> Level:
    """Hand-built level with a known solution (CORRIDOR_PATH)."""
    return Level(
        id=1,
        grid=Grid.from_text(CORRIDOR_MAZE),
        start=Point(1, 1),
        exit=Point(1, 3),
        difficulty=Difficulty.EASY,
    )


@pytest.fixture
def solve() -> Callable[[Level], list[Direction]]:
    """Shortest list of directions from a level's start to its exit."""

    def _solve(level: Level) -> list[Direction]:
        parents: dict[Point, Point] = {}
        seen = {level.start}
        queue = deque([level.start])
        while queue:
            current = queue.popleft()
            if current == level.exit:
                break
            for direction in Direction:
                nxt = current.moved(*direction.delta)
                if nxt not in seen and level.grid.is_passage(nxt):
                    seen.add(nxt)
                    parents[nxt] = current
                    queue.append(nxt)

        path = []
        point = level.exit
        while point != level.start:
            prev = parents[point]
            path.append(Direction.from_delta(point.x - prev.x, point.y - prev.y))
            point = prev
        return list(reversed(path))

    return _solve


@pytest.fixture
def store() -> MemoryStore:
    """Empty in-memory record store."""
    return MemoryStore()


@pytest.fixture
def catalog() -> LevelCatalog:
    """Stable catalog so level ids name fixed mazes."""
    return LevelCatalog(count=500, stable_levels=True, seed_salt="tests")


@pytest.fixture
def records(store) -> RecordsService:
    return RecordsService(store)


@pytest.fixture
def session_service(catalog, records) -> SessionService:
    return SessionService(catalog=catalog, records=records, max_sessions=10)


@pytest_asyncio.fixture(scope="function")
async def client(session_service, records) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client wired to in-memory services."""
    app.dependency_overrides[get_session_service] = lambda: session_service
    app.dependency_overrides[get_records_service] = lambda: records
    limiter.reset()

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
