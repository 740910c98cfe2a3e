"""Session routes for playing levels."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Request, status

from zenmaze.api.deps import Sessions, limiter, settings
from zenmaze.core import Direction
from zenmaze.schemas.level import LevelPosition
from zenmaze.schemas.session import (
    MoveRequest,
    MoveResponse,
    SessionCreateRequest,
    SessionResetRequest,
    SessionState,
    TickRequest,
    UndoResponse,
)
from zenmaze.services.session_service import (
    LevelNotFoundError,
    PlaySession,
    SessionNotFoundError,
    SessionService,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/session", tags=["Sessions"])


def _get_or_404(sessions: SessionService, session_id: str) -> PlaySession:
    try:
        return sessions.get(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


def _to_state(play: PlaySession) -> SessionState:
    game = play.game
    return SessionState(
        id=play.id,
        level_id=play.level.id,
        difficulty=play.level.difficulty.value,
        position=LevelPosition(**game.position.to_dict()),
        moves=game.move_count,
        history_length=game.history_length,
        status=game.state.value,
        seconds=play.seconds,
        best_seconds=play.best_seconds,
        total_moves=play.total_moves,
        total_seconds=play.total_seconds,
        levels_cleared=play.levels_cleared,
        created_at=play.created_at,
    )


@router.post(
    "",
    response_model=SessionState,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(f"{settings.rate_limit_sessions}/minute")
async def create_session(
    request: Request,
    payload: SessionCreateRequest,
    sessions: Sessions,
) -> SessionState:
    """Start a new session at the start of a level."""
    try:
        play = await sessions.create(payload.level_id)
    except LevelNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    return _to_state(play)


@router.get(
    "/{session_id}",
    response_model=SessionState,
)
async def get_session(session_id: str, sessions: Sessions) -> SessionState:
    """Get session state by ID."""
    return _to_state(_get_or_404(sessions, session_id))


@router.post(
    "/{session_id}/move",
    response_model=MoveResponse,
)
async def move(
    session_id: str,
    payload: MoveRequest,
    sessions: Sessions,
) -> MoveResponse:
    """Move one cell.

    A blocked move leaves the session untouched. The move that reaches the
    exit returns status "won"; later moves return "ignored" until reset.
    """
    _get_or_404(sessions, session_id)
    play, result = await sessions.move(session_id, Direction(payload.direction))

    return MoveResponse(
        status=result.status,
        position=LevelPosition(**result.position.to_dict()),
        moves=result.moves,
        best_seconds=play.best_seconds,
    )


@router.post(
    "/{session_id}/undo",
    response_model=UndoResponse,
)
async def undo(session_id: str, sessions: Sessions) -> UndoResponse:
    """Step back to the previous position."""
    _get_or_404(sessions, session_id)
    play, undone = await sessions.undo(session_id)

    return UndoResponse(
        undone=undone,
        position=LevelPosition(**play.game.position.to_dict()),
        moves=play.game.move_count,
        history_length=play.game.history_length,
    )


@router.post(
    "/{session_id}/reset",
    response_model=SessionState,
)
async def reset(
    session_id: str,
    sessions: Sessions,
    payload: Optional[SessionResetRequest] = None,
) -> SessionState:
    """Replay the current level, or switch to another one."""
    _get_or_404(sessions, session_id)
    level_id = payload.level_id if payload else None
    try:
        play = await sessions.reset(session_id, level_id)
    except LevelNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    return _to_state(play)


@router.post(
    "/{session_id}/next",
    response_model=SessionState,
)
async def next_level(session_id: str, sessions: Sessions) -> SessionState:
    """Start the level after the current one."""
    _get_or_404(sessions, session_id)
    try:
        play = await sessions.advance(session_id)
    except LevelNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    return _to_state(play)


@router.post(
    "/{session_id}/tick",
    response_model=SessionState,
)
async def tick(
    session_id: str,
    sessions: Sessions,
    payload: Optional[TickRequest] = None,
) -> SessionState:
    """Feed elapsed seconds from the client's ticker."""
    _get_or_404(sessions, session_id)
    play = await sessions.tick(session_id, payload.seconds if payload else 1)
    return _to_state(play)


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def end_session(session_id: str, sessions: Sessions) -> None:
    """End a session."""
    try:
        sessions.end(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
