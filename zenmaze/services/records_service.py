"""Personal best times and career totals kept in a key-value store."""

from dataclasses import dataclass
from typing import Optional

from zenmaze.db.store import KeyValueStore, get_store


@dataclass
class CareerStats:
    """Totals across every cleared level."""

    levels_cleared: int = 0
    moves: int = 0
    seconds: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "levels_cleared": self.levels_cleared,
            "moves": self.moves,
            "seconds": self.seconds,
        }


class RecordsService:
    """Service for reading and updating player records."""

    # Key patterns
    BEST_TIME_KEY = "zenmaze_best_{level_id}"
    CAREER_KEY = "zenmaze_career:{field}"

    def __init__(self, store: KeyValueStore):
        self._store = store

    async def _get_int(self, key: str) -> Optional[int]:
        raw = await self._store.get(key)
        return int(raw) if raw is not None else None

    async def get_best_time(self, level_id: int) -> Optional[int]:
        """Get the best completion time in seconds, or None if never cleared."""
        return await self._get_int(self.BEST_TIME_KEY.format(level_id=level_id))

    async def submit_time(self, level_id: int, seconds: int) -> bool:
        """
        Record a completion time.

        Args:
            level_id: Level that was cleared.
            seconds: Elapsed seconds for the clear.

        Returns:
            True if this is a new personal best (strictly faster, or the
            first clear).
        """
        key = self.BEST_TIME_KEY.format(level_id=level_id)
        return await self._store.set_if_lower(key, seconds)

    async def get_career(self) -> CareerStats:
        """Get career totals."""
        values = {}
        for field in ("levels_cleared", "moves", "seconds"):
            values[field] = await self._get_int(self.CAREER_KEY.format(field=field)) or 0
        return CareerStats(**values)

    async def record_clear(self, moves: int, seconds: int) -> CareerStats:
        """Add a cleared level to the career totals and return the new totals."""
        increments = {"levels_cleared": 1, "moves": moves, "seconds": seconds}
        totals = {}
        for field, amount in increments.items():
            totals[field] = await self._store.incr(self.CAREER_KEY.format(field=field), amount)
        return CareerStats(**totals)


def get_records_service() -> RecordsService:
    """Get a records service over the configured store."""
    return RecordsService(get_store())
