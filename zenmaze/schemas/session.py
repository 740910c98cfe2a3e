"""Session schemas for request/response validation."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from zenmaze.schemas.level import LevelPosition


class SessionCreateRequest(BaseModel):
    """Schema for creating a new session."""

    level_id: int = Field(1, ge=1)


class SessionResetRequest(BaseModel):
    """Schema for restarting a session, optionally on another level."""

    level_id: Optional[int] = Field(None, ge=1)


class SessionState(BaseModel):
    """Schema for session state."""

    id: str
    level_id: int
    difficulty: str
    position: LevelPosition
    moves: int
    history_length: int
    status: str  # playing, won
    seconds: int
    best_seconds: Optional[int] = None
    total_moves: int
    total_seconds: int
    levels_cleared: int
    created_at: datetime


class MoveRequest(BaseModel):
    """Schema for move request."""

    direction: str = Field(..., pattern="^(up|down|left|right)$")


class MoveResponse(BaseModel):
    """Schema for move response."""

    status: str  # moved, blocked, won, ignored
    position: LevelPosition
    moves: int
    best_seconds: Optional[int] = None


class UndoResponse(BaseModel):
    """Schema for undo response."""

    undone: bool
    position: LevelPosition
    moves: int
    history_length: int


class TickRequest(BaseModel):
    """Schema for feeding elapsed time to a session."""

    seconds: int = Field(1, ge=1, le=3600)
