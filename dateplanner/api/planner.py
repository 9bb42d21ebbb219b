"""Date planner API."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from dateplanner.api.dependencies import get_venue_repository
from dateplanner.core.logger import get_logger
from dateplanner.schemas.enums import ModifyStatus, VenueCategory
from dateplanner.schemas.plan import (
    AddStopRequest,
    DatePlan,
    DatePreferences,
    DateStop,
    ReorderStopsRequest,
    StopResponse,
    SwapStopRequest,
)
from dateplanner.schemas.suggestions import (
    SuggestionsResponse,
    VenueCategoriesResponse,
    build_suggestions,
    build_venue_categories,
)
from dateplanner.schemas.venue import VenueListResponse
from dateplanner.services import plan_service
from dateplanner.services.venue_repository import VenueRepositoryProtocol

router = APIRouter(prefix="/api/v1/date-planner", tags=["date-planner"])
logger = get_logger(__name__)

NOT_FOUND_EXAMPLES = {
    404: {
        "description": "No candidate survived the search",
        "content": {"application/json": {"example": {"detail": "No alternative found."}}},
    }
}


@router.get("/suggestions", response_model=SuggestionsResponse)
def get_suggestions() -> SuggestionsResponse:
    """Option lists for building a request form."""
    return build_suggestions()


@router.get("/venue-categories", response_model=VenueCategoriesResponse)
def get_venue_categories() -> VenueCategoriesResponse:
    """Categories a caller can pick when adding a stop by hand."""
    return build_venue_categories()


@router.get("/venues-by-category/{category}", response_model=VenueListResponse)
async def get_venues_by_category(
    category: VenueCategory,
    limit: int = Query(default=10, ge=1, le=50),
    repository: VenueRepositoryProtocol = Depends(get_venue_repository),  # noqa: B008
) -> VenueListResponse:
    """Venues of one category for the add-stop picker."""
    venues = await plan_service.venues_by_category(category, repository, limit=limit)
    return VenueListResponse(venues=venues, count=len(venues))


@router.post("/generate", response_model=DatePlan, status_code=status.HTTP_200_OK)
async def generate_plan(
    preferences: DatePreferences,
    repository: VenueRepositoryProtocol = Depends(get_venue_repository),  # noqa: B008
) -> DatePlan:
    """Generate a date plan from preferences."""
    logger.info(
        "Generate request received: event_type=%s time_of_day=%s duration_hours=%s",
        preferences.event_type.value,
        preferences.time_of_day.value,
        preferences.duration_hours,
    )
    try:
        return await plan_service.generate_plan(preferences, repository)
    except RuntimeError as exc:
        logger.error("Plan generation failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate plan.",
        ) from exc


@router.post("/swap", response_model=StopResponse, responses=NOT_FOUND_EXAMPLES)
async def swap_stop(
    request: SwapStopRequest,
    repository: VenueRepositoryProtocol = Depends(get_venue_repository),  # noqa: B008
) -> StopResponse:
    """Suggest a replacement for one stop."""
    try:
        new_stop = await plan_service.swap_stop(
            request.stop_to_swap,
            request.all_stops,
            request.preferences,
            repository,
        )
    except RuntimeError as exc:
        logger.error("Swap failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to swap stop.",
        ) from exc

    if new_stop is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No alternative found.")
    return StopResponse(status=ModifyStatus.SUCCESS, new_stop=new_stop)


@router.post("/add", response_model=StopResponse, responses=NOT_FOUND_EXAMPLES)
async def add_stop(
    request: AddStopRequest,
    repository: VenueRepositoryProtocol = Depends(get_venue_repository),  # noqa: B008
) -> StopResponse:
    """Suggest a new stop to insert after ``insert_after_index``."""
    try:
        new_stop = await plan_service.add_stop(
            request.insert_after_index,
            request.all_stops,
            request.preferences,
            repository,
            category=request.category,
        )
    except RuntimeError as exc:
        logger.error("Add failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add stop.",
        ) from exc

    if new_stop is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No suggestion found.")
    return StopResponse(status=ModifyStatus.SUCCESS, new_stop=new_stop)


@router.post("/reorder", response_model=list[DateStop])
def reorder_stops(request: ReorderStopsRequest) -> list[DateStop]:
    """Re-sequence stops so each hop goes to the nearest remaining stop."""
    return plan_service.reorder_stops(request.stops)
