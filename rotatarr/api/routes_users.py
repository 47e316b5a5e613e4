"""Per-user routes: tracked titles, their rolling plan and reminders."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import BaseModel
from sqlmodel import Session

from rotatarr.core.database import get_session
from rotatarr.models.library import FlagsUpdate, OrderUpdate, TrackRequest, UserShow
from rotatarr.models.plan import RollingPlan, Show
from rotatarr.services import library
from rotatarr.services.library import ShowAlreadyTrackedError, ShowNotFoundError
from rotatarr.services.loader import PlanView, filter_shows, load_user_shows
from rotatarr.services.planner import build_rolling_plan
from rotatarr.services.reminder import (
    ReminderMessage,
    RollingReminder,
    compose_reminder,
    render_reminder,
)

router = APIRouter(prefix="/users/{user_id}")
logger = logging.getLogger(__name__)


@router.get("/shows", response_model=List[Show])
async def get_shows(
    user_id: str, response: Response, session: Session = Depends(get_session)
):
    """Tracked titles with freshly computed windows."""
    response.headers["Cache-Control"] = "private, no-store, max-age=0"
    return await load_user_shows(session, user_id)


@router.post("/shows", response_model=UserShow, status_code=201)
async def add_show(
    user_id: str, request: TrackRequest, session: Session = Depends(get_session)
):
    """Track a movie or series."""
    try:
        return library.track(session, user_id, request.tmdb_id, request.media_type)
    except ShowAlreadyTrackedError as exc:
        raise HTTPException(status_code=409, detail=str(exc))


@router.put("/shows/order")
async def reorder_shows(
    user_id: str, request: OrderUpdate, session: Session = Depends(get_session)
):
    """Persist display order; the first title counts as added first."""
    updated = library.reorder(session, user_id, request.order)
    return {"success": True, "updated": updated}


@router.delete("/shows")
async def remove_all_shows(user_id: str, session: Session = Depends(get_session)):
    """Stop tracking every title."""
    removed = library.untrack_all(session, user_id)
    return {"success": True, "removed": removed}


@router.delete("/shows/{tmdb_id}")
async def remove_show(
    user_id: str, tmdb_id: int, session: Session = Depends(get_session)
):
    """Stop tracking one title."""
    try:
        library.untrack(session, user_id, tmdb_id)
    except ShowNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return {"success": True}


@router.patch("/shows/{tmdb_id}", response_model=UserShow)
async def update_show_flags(
    user_id: str,
    tmdb_id: int,
    request: FlagsUpdate,
    session: Session = Depends(get_session),
):
    """Set favorite and/or watch live for a tracked title."""
    if request.favorite is None and request.watch_live is None:
        raise HTTPException(
            status_code=400, detail="Provide favorite and/or watch_live"
        )
    try:
        return library.set_flags(
            session,
            user_id,
            tmdb_id,
            favorite=request.favorite,
            watch_live=request.watch_live,
        )
    except ShowNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))


@router.get("/plan", response_model=RollingPlan)
async def get_plan(
    user_id: str,
    view: PlanView = Query(PlanView.ALL, description="all, favorites or watch_live"),
    session: Session = Depends(get_session),
):
    """Rolling 12-month plan starting this month."""
    shows = await load_user_shows(session, user_id)
    return build_rolling_plan(filter_shows(shows, view))


class ReminderPreview(BaseModel):
    reminder: RollingReminder
    message: ReminderMessage


@router.get("/reminder", response_model=ReminderPreview)
async def get_reminder(
    user_id: str,
    view: PlanView = Query(PlanView.ALL),
    session: Session = Depends(get_session),
):
    """Preview the reminder for the turn of this month."""
    shows = await load_user_shows(session, user_id)
    if not shows:
        raise HTTPException(status_code=404, detail="No tracked shows")
    reminder = compose_reminder(build_rolling_plan(filter_shows(shows, view)))
    logger.debug(f"Composed reminder for user {user_id}: {reminder}")
    return ReminderPreview(reminder=reminder, message=render_reminder(reminder))
