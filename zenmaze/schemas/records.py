"""Records schemas for request/response validation."""

from typing import Optional

from pydantic import BaseModel


class BestTimeResponse(BaseModel):
    """Schema for a level's personal best."""

    level_id: int
    best_seconds: Optional[int] = None


class CareerResponse(BaseModel):
    """Schema for career totals."""

    levels_cleared: int
    moves: int
    seconds: int
