"""Stateless API routes: search, window calculation and plan building."""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel

from rotatarr.models.plan import RollingPlan, Show, SubscriptionWindow
from rotatarr.providers import ServiceRegistry
from rotatarr.services.planner import build_rolling_plan
from rotatarr.services.tmdb import MediaType, TMDBSearchResult, search_tmdb
from rotatarr.services.window import compute_window, compute_window_from_dates

router = APIRouter()


@router.get("/search", response_model=List[TMDBSearchResult])
async def api_search(
    q: str = Query(..., min_length=1, description="Search query"),
    media_type: str = Query("all", description="Media type: movie, tv, or all"),
):
    """Search TMDB for titles to track."""
    if media_type == "movie":
        mt = MediaType.MOVIE
    elif media_type in ("tv", "series"):
        mt = MediaType.SERIES
    else:
        mt = MediaType.ALL

    return await search_tmdb(q, mt)


@router.get("/services")
async def list_services():
    """List the streaming services with known cancel links."""
    return {"services": ServiceRegistry.names()}


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "service": "rotatarr"}


class WindowRequest(BaseModel):
    """Dates to compute a window from.

    Episode dates take precedence; release / air dates are the fallback.
    """

    episode_dates: Optional[List[Optional[str]]] = None
    release_date: Optional[str] = None
    first_air_date: Optional[str] = None
    last_air_date: Optional[str] = None
    today: Optional[date] = None


class PlanRequest(BaseModel):
    shows: List[Show]
    today: Optional[date] = None


@router.post("/windows", response_model=SubscriptionWindow)
async def api_compute_window(request: WindowRequest):
    """Compute the subscribe / cancel months for one title."""
    if request.episode_dates:
        return compute_window(
            request.episode_dates,
            request.today,
            first_air_date=request.first_air_date or request.release_date,
            last_air_date=request.last_air_date,
        )
    if request.release_date:
        return compute_window_from_dates(request.release_date, None, request.today)
    return compute_window_from_dates(
        request.first_air_date, request.last_air_date, request.today
    )


@router.post("/plan", response_model=RollingPlan)
async def api_build_plan(request: PlanRequest):
    """Build a 12-month rolling plan from a list of shows."""
    return build_rolling_plan(request.shows, request.today)
