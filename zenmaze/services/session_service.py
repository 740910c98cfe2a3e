"""Registry of live play sessions and the flows around them."""

import asyncio
import logging
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from redis.exceptions import RedisError

from zenmaze.config import get_settings
from zenmaze.core import Direction, GameSession, Level, LevelCatalog, MoveResult
from zenmaze.services.records_service import RecordsService, get_records_service

logger = logging.getLogger(__name__)


class SessionNotFoundError(LookupError):
    """Raised when a session id is unknown or has been evicted."""

    pass


class LevelNotFoundError(LookupError):
    """Raised when a level id is outside the catalog."""

    pass


@dataclass
class PlaySession:
    """A game session plus its clock and running totals."""

    id: str
    game: GameSession
    seconds: int = 0
    best_seconds: Optional[int] = None
    total_moves: int = 0
    total_seconds: int = 0
    levels_cleared: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)

    @property
    def level(self) -> Level:
        return self.game.level


class SessionService:
    """
    Service for creating and driving play sessions.

    Every mutation of a session runs under that session's lock, so moves
    arriving from several inputs are applied one at a time.
    """

    def __init__(
        self,
        catalog: LevelCatalog,
        records: RecordsService,
        max_sessions: int = 1000,
    ):
        self.catalog = catalog
        self.records = records
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, PlaySession]" = OrderedDict()

    def _load_level(self, level_id: int) -> Level:
        if not 1 <= level_id <= self.catalog.count:
            raise LevelNotFoundError(f"Level not found: {level_id}")
        return self.catalog.level_at(level_id)

    async def _restart(self, play: PlaySession, level: Level) -> None:
        play.game.reset(level)
        play.seconds = 0
        play.best_seconds = await self.records.get_best_time(level.id)

    async def create(self, level_id: int) -> PlaySession:
        """
        Start a new session at the start of a level.

        Raises:
            LevelNotFoundError: If level_id is outside the catalog.
        """
        level = self._load_level(level_id)

        play = PlaySession(
            id=f"sess_{uuid.uuid4().hex[:12]}",
            game=GameSession(level),
            best_seconds=await self.records.get_best_time(level.id),
        )

        while len(self._sessions) >= self.max_sessions:
            evicted_id, _ = self._sessions.popitem(last=False)
            logger.info(f"Session limit reached, evicted {evicted_id}")

        self._sessions[play.id] = play
        logger.info(f"Session {play.id} started on level {level.id}")
        return play

    def get(self, session_id: str) -> PlaySession:
        """
        Get a session by id.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        play = self._sessions.get(session_id)
        if play is None:
            raise SessionNotFoundError(f"Session not found: {session_id}")
        return play

    def end(self, session_id: str) -> None:
        """End and remove a session."""
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(f"Session not found: {session_id}")
        logger.info(f"Session {session_id} ended")

    async def move(self, session_id: str, direction: Direction) -> tuple[PlaySession, MoveResult]:
        """
        Move the player and record the clear when the move wins the level.

        Returns:
            Tuple of (session, move result).
        """
        play = self.get(session_id)
        async with play.lock:
            result = play.game.move(direction)
            if result.status == "won":
                await self._record_win(play)
            return play, result

    async def _record_win(self, play: PlaySession) -> None:
        level_id = play.level.id
        play.total_moves += play.game.move_count
        play.total_seconds += play.seconds
        play.levels_cleared += 1

        try:
            if await self.records.submit_time(level_id, play.seconds):
                play.best_seconds = play.seconds
                logger.info(
                    f"New personal best on level {level_id}: "
                    f"{play.seconds}s in {play.game.move_count} moves"
                )
        except (RedisError, OSError) as e:
            logger.warning(f"Failed to record best time for level {level_id}: {e}")

        try:
            await self.records.record_clear(play.game.move_count, play.seconds)
        except (RedisError, OSError) as e:
            logger.warning(f"Failed to update career totals for level {level_id}: {e}")

    async def undo(self, session_id: str) -> tuple[PlaySession, bool]:
        """Undo the last move. Returns (session, whether anything was undone)."""
        play = self.get(session_id)
        async with play.lock:
            return play, play.game.undo()

    async def reset(self, session_id: str, level_id: Optional[int] = None) -> PlaySession:
        """Replay the current level, or switch to level_id."""
        play = self.get(session_id)
        level = play.level if level_id is None else self._load_level(level_id)
        async with play.lock:
            await self._restart(play, level)
        return play

    async def advance(self, session_id: str) -> PlaySession:
        """
        Start the level after the current one.

        Raises:
            LevelNotFoundError: If the current level is the last one.
        """
        play = self.get(session_id)
        return await self.reset(session_id, play.level.id + 1)

    async def tick(self, session_id: str, seconds: int = 1) -> PlaySession:
        """Add elapsed seconds from the external ticker. The clock stops on a win."""
        play = self.get(session_id)
        async with play.lock:
            if not play.game.won:
                play.seconds += seconds
        return play

    def __len__(self) -> int:
        return len(self._sessions)


# Singleton instance
_session_service: Optional[SessionService] = None


def get_session_service() -> SessionService:
    """Get singleton session service."""
    global _session_service
    if _session_service is None:
        settings = get_settings()
        catalog = LevelCatalog(
            count=settings.level_count,
            stable_levels=settings.stable_levels,
            seed_salt=settings.level_seed_salt,
        )
        _session_service = SessionService(
            catalog=catalog,
            records=get_records_service(),
            max_sessions=settings.max_sessions,
        )
    return _session_service
