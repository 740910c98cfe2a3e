"""Level schemas for request/response validation."""

from pydantic import BaseModel, Field


class LevelPosition(BaseModel):
    """Schema for a position in a level."""

    x: int
    y: int


class LevelListItem(BaseModel):
    """Schema for level list item (without grid data)."""

    id: int = Field(..., ge=1)
    size: int
    difficulty: str


class LevelListResponse(BaseModel):
    """Schema for level list response."""

    levels: list[LevelListItem]
    total: int


class LevelDetail(LevelListItem):
    """Schema for detailed level response with grid rows.

    Rows use X for walls and . for passages.
    """

    rows: list[str]
    start: LevelPosition
    exit: LevelPosition
