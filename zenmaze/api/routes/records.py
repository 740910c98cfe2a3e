"""Records routes for personal bests and career totals."""

from fastapi import APIRouter, Path

from zenmaze.api.deps import Records
from zenmaze.schemas.records import BestTimeResponse, CareerResponse

router = APIRouter(prefix="/records", tags=["Records"])


@router.get(
    "/career",
    response_model=CareerResponse,
)
async def get_career(records: Records) -> CareerResponse:
    """Get totals across every cleared level."""
    career = await records.get_career()
    return CareerResponse(**career.to_dict())


@router.get(
    "/{level_id}",
    response_model=BestTimeResponse,
)
async def get_best_time(
    records: Records,
    level_id: int = Path(..., ge=1),
) -> BestTimeResponse:
    """Get the personal best for a level (null if never cleared)."""
    return BestTimeResponse(
        level_id=level_id,
        best_seconds=await records.get_best_time(level_id),
    )
