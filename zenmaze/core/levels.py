"""
Level catalog.

Maps a level id to its grid size and difficulty tier, and materializes the
level by generating a maze and placing the exit as far from the start as
the maze allows.
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .goal_placer import find_furthest_point
from .grid import Grid, Point
from .maze_generator import generate_maze

logger = logging.getLogger(__name__)

BASE_SIZE = 9
MAX_SIZE = 41
LEVELS_PER_GROWTH = 15
DEFAULT_LEVEL_COUNT = 500

LEVEL_START = Point(1, 1)


class Difficulty(Enum):
    """Difficulty tiers, in ascending order."""
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"
    EXPERT = "Expert"


def _require_level_id(level_id: int) -> None:
    if level_id < 1:
        raise ValueError(f"Level id must be positive, got {level_id}")


def level_difficulty(level_id: int) -> Difficulty:
    """Get the difficulty tier for a level id."""
    _require_level_id(level_id)
    if level_id <= 20:
        return Difficulty.EASY
    if level_id <= 100:
        return Difficulty.MEDIUM
    if level_id <= 300:
        return Difficulty.HARD
    return Difficulty.EXPERT


def level_size(level_id: int) -> int:
    """Get the grid side length for a level id: 9, growing by 2 every 15 levels, capped at 41."""
    _require_level_id(level_id)
    return min(BASE_SIZE + 2 * (level_id // LEVELS_PER_GROWTH), MAX_SIZE)


@dataclass(frozen=True)
class LevelInfo:
    """Level metadata that does not need a generated grid."""
    id: int
    size: int
    difficulty: Difficulty

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "size": self.size,
            "difficulty": self.difficulty.value,
        }


@dataclass(frozen=True)
class Level:
    """A generated level. Never mutated once built."""
    id: int
    grid: Grid
    start: Point
    exit: Point
    difficulty: Difficulty

    @property
    def size(self) -> int:
        return self.grid.width

    def info(self) -> LevelInfo:
        return LevelInfo(id=self.id, size=self.size, difficulty=self.difficulty)


class LevelCatalog:
    """
    Deterministic source of levels.

    With stable_levels the generator seed is derived from the level id, so
    "level 5" is the same maze on every play and built levels are cached.
    Without it every call carves a fresh maze; size and difficulty are the
    same either way.

    Example usage:
        catalog = LevelCatalog()
        level = catalog.level_at(15)   # 11x11, Easy
    """

    def __init__(
        self,
        count: int = DEFAULT_LEVEL_COUNT,
        stable_levels: bool = True,
        seed_salt: str = "zenmaze",
    ):
        """
        Initialize the catalog.

        Args:
            count: Number of levels offered for listing. level_at accepts
                any positive id regardless.
            stable_levels: Derive each level's maze from its id.
            seed_salt: Mixed into derived seeds so deployments can reshuffle
                the whole catalog.
        """
        self.count = count
        self.stable_levels = stable_levels
        self.seed_salt = seed_salt

        self._cache: dict[int, Level] = {}
        self._lock = threading.Lock()

    def seed_for(self, level_id: int) -> Optional[str]:
        """Get the generator seed for a level, or None when levels are fresh."""
        if not self.stable_levels:
            return None
        return f"{self.seed_salt}:{level_id}"

    def describe(self, level_id: int) -> LevelInfo:
        """Get size and difficulty for a level without generating it."""
        return LevelInfo(
            id=level_id,
            size=level_size(level_id),
            difficulty=level_difficulty(level_id),
        )

    def level_at(self, level_id: int) -> Level:
        """
        Build (or fetch) the level for an id.

        Args:
            level_id: Positive level id.

        Returns:
            Level with start at (1, 1) and exit at the farthest passage.

        Raises:
            ValueError: If level_id is not positive.
        """
        info = self.describe(level_id)

        if self.stable_levels:
            with self._lock:
                cached = self._cache.get(level_id)
            if cached is not None:
                return cached

        grid = generate_maze(info.size, info.size, seed=self.seed_for(level_id))
        level = Level(
            id=level_id,
            grid=grid,
            start=LEVEL_START,
            exit=find_furthest_point(grid, LEVEL_START),
            difficulty=info.difficulty,
        )
        logger.debug(
            f"Generated level {level_id} ({info.size}x{info.size}, "
            f"{info.difficulty.value}) exit at ({level.exit.x}, {level.exit.y})"
        )

        if self.stable_levels:
            with self._lock:
                level = self._cache.setdefault(level_id, level)

        return level

    def levels(
        self,
        difficulty: Optional[Difficulty] = None,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> list[LevelInfo]:
        """
        List catalog levels in id order.

        Args:
            difficulty: Only include this tier.
            offset: Number of matching levels to skip.
            limit: Maximum number of levels to return.

        Returns:
            List of LevelInfo.
        """
        infos = [self.describe(level_id) for level_id in range(1, self.count + 1)]
        if difficulty is not None:
            infos = [info for info in infos if info.difficulty is difficulty]

        end = None if limit is None else offset + limit
        return infos[offset:end]

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()
