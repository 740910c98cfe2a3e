"""Tests for record storage and the records endpoints."""

import asyncio
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from zenmaze.db.store import SET_IF_LOWER_SCRIPT, MemoryStore, RedisStore
from zenmaze.services.records_service import CareerStats, RecordsService


@pytest.mark.asyncio
async def test_first_clear_is_best(records):
    assert await records.get_best_time(3) is None
    assert await records.submit_time(3, 40) is True
    assert await records.get_best_time(3) == 40


@pytest.mark.asyncio
async def test_only_faster_time_replaces_best(records):
    await records.submit_time(3, 40)

    assert await records.submit_time(3, 40) is False
    assert await records.submit_time(3, 55) is False
    assert await records.get_best_time(3) == 40

    assert await records.submit_time(3, 12) is True
    assert await records.get_best_time(3) == 12


@pytest.mark.asyncio
async def test_best_time_key_format(store):
    """Test that best times live under zenmaze_best_{id}."""
    service = RecordsService(store)
    await service.submit_time(17, 8)
    assert await store.get("zenmaze_best_17") == "8"


@pytest.mark.asyncio
async def test_career_totals_accumulate(records):
    assert await records.get_career() == CareerStats()

    await records.record_clear(moves=30, seconds=12)
    career = await records.record_clear(moves=10, seconds=5)

    assert career == CareerStats(levels_cleared=2, moves=40, seconds=17)
    assert await records.get_career() == career


@pytest.mark.asyncio
async def test_memory_store_initial_data():
    store = MemoryStore({"zenmaze_best_1": "9"})
    assert await RecordsService(store).get_best_time(1) == 9


@pytest.mark.asyncio
async def test_redis_store():
    """Test that the Redis store compares and sets best times in one script."""
    mock_redis = AsyncMock()
    mock_redis.eval = AsyncMock(return_value=1)

    service = RecordsService(RedisStore(client=mock_redis))

    assert await service.submit_time(4, 20) is True
    mock_redis.eval.assert_awaited_once_with(SET_IF_LOWER_SCRIPT, 1, "zenmaze_best_4", 20)

    mock_redis.eval = AsyncMock(return_value=0)
    assert await service.submit_time(4, 30) is False


@pytest.mark.asyncio
async def test_redis_store_career_uses_incrby():
    mock_redis = AsyncMock()
    mock_redis.incrby = AsyncMock(side_effect=[3, 45, 20])

    service = RecordsService(RedisStore(client=mock_redis))
    career = await service.record_clear(moves=15, seconds=8)

    assert career == CareerStats(levels_cleared=3, moves=45, seconds=20)
    mock_redis.incrby.assert_any_await("zenmaze_career:levels_cleared", 1)
    mock_redis.incrby.assert_any_await("zenmaze_career:moves", 15)
    mock_redis.incrby.assert_any_await("zenmaze_career:seconds", 8)
    mock_redis.set.assert_not_awaited()


@pytest.mark.asyncio
async def test_concurrent_submissions_keep_fastest(records):
    """Test that racing clears of one level never overwrite a faster time."""
    results = await asyncio.gather(*(records.submit_time(6, s) for s in (30, 12, 25, 12, 40)))

    assert await records.get_best_time(6) == 12
    assert results[1] is True
    assert results[3] is False


@pytest.mark.asyncio
async def test_concurrent_clears_all_counted(records):
    await asyncio.gather(*(records.record_clear(moves=10, seconds=2) for _ in range(5)))
    assert await records.get_career() == CareerStats(levels_cleared=5, moves=50, seconds=10)


@pytest.mark.asyncio
async def test_get_best_time_endpoint(client: AsyncClient, records):
    """Test GET /v1/records/{level_id} endpoint."""
    response = await client.get("/v1/records/2")
    assert response.status_code == 200
    assert response.json() == {"level_id": 2, "best_seconds": None}

    await records.submit_time(2, 33)

    response = await client.get("/v1/records/2")
    assert response.json() == {"level_id": 2, "best_seconds": 33}


@pytest.mark.asyncio
async def test_get_career_endpoint(client: AsyncClient, records):
    """Test GET /v1/records/career endpoint."""
    await records.record_clear(moves=14, seconds=6)

    response = await client.get("/v1/records/career")
    assert response.status_code == 200
    assert response.json() == {"levels_cleared": 1, "moves": 14, "seconds": 6}
