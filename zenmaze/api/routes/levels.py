"""Level routes for listing and retrieving levels."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Path, Query, status

from zenmaze.api.deps import Catalog
from zenmaze.core import Difficulty
from zenmaze.schemas.level import (
    LevelDetail,
    LevelListItem,
    LevelListResponse,
    LevelPosition,
)

router = APIRouter(prefix="/levels", tags=["Levels"])


@router.get(
    "",
    response_model=LevelListResponse,
)
async def list_levels(
    catalog: Catalog,
    difficulty: Optional[str] = Query(
        None,
        description="Filter by difficulty (Easy, Medium, Hard, Expert)",
        pattern="^(Easy|Medium|Hard|Expert)$",
    ),
    offset: int = Query(0, ge=0, description="Offset for pagination"),
    limit: int = Query(100, ge=1, le=500, description="Maximum levels to return"),
) -> LevelListResponse:
    """List catalog levels in id order.

    Grid data is not included - use GET /v1/levels/{id} for full details.
    """
    infos = catalog.levels(
        difficulty=Difficulty(difficulty) if difficulty else None,
        offset=offset,
        limit=limit,
    )

    items = [
        LevelListItem(id=info.id, size=info.size, difficulty=info.difficulty.value)
        for info in infos
    ]

    return LevelListResponse(levels=items, total=len(items))


@router.get(
    "/{level_id}",
    response_model=LevelDetail,
)
async def get_level(
    catalog: Catalog,
    level_id: int = Path(..., ge=1),
) -> LevelDetail:
    """Get a level with its grid, start and exit."""
    if level_id > catalog.count:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Level not found: {level_id}",
        )

    level = catalog.level_at(level_id)

    return LevelDetail(
        **level.info().to_dict(),
        rows=level.grid.to_rows(),
        start=LevelPosition(**level.start.to_dict()),
        exit=LevelPosition(**level.exit.to_dict()),
    )
