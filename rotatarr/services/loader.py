"""Assemble scheduler input from a user's list and fresh TMDB data."""

import asyncio
import logging
from datetime import date
from enum import Enum
from typing import List, Optional, Sequence

from sqlmodel import Session

from rotatarr.core.config import get_settings
from rotatarr.models.library import UserShow
from rotatarr.models.plan import Show, UnknownWindow
from rotatarr.providers.catalog import (
    UNKNOWN_SERVICE,
    get_flatrate_from_regions,
    pick_primary_provider,
)
from rotatarr.services.library import list_tracked
from rotatarr.services.tmdb import TMDBError, get_movie_details, get_series_details
from rotatarr.services.window import compute_window, compute_window_from_dates

logger = logging.getLogger(__name__)


class PlanView(str, Enum):
    """Which of a user's shows a plan is built from."""

    ALL = "all"
    FAVORITES = "favorites"
    WATCH_LIVE = "watch_live"


async def load_show(
    row: UserShow, added_order: int, today: Optional[date] = None
) -> Show:
    """Build a ``Show`` for one tracked title.

    TMDB failures do not drop the title: it is kept with an unknown window
    so the caller still lists it, and the scheduler skips it.
    """
    regions = get_settings().tmdb_regions
    common = dict(
        favorite=row.favorite,
        watch_live=row.watch_live,
        added_order=added_order,
        tmdb_id=row.tmdb_id,
        media_type="movie" if row.media_type == "movie" else "tv",
    )

    try:
        if row.media_type == "movie":
            details = await get_movie_details(row.tmdb_id)
            window = compute_window_from_dates(details.release_date, None, today)
        else:
            details = await get_series_details(row.tmdb_id)
            window = compute_window(
                details.episode_air_dates,
                today,
                first_air_date=details.first_air_date,
                last_air_date=details.last_air_date,
            )
    except TMDBError as exc:
        logger.warning(f"Keeping TMDB ID {row.tmdb_id} without dates: {exc}")
        return Show(
            title=f"TMDB #{row.tmdb_id}",
            service=UNKNOWN_SERVICE,
            window=UnknownWindow(note="Details unavailable right now"),
            **common,
        )

    flatrate = get_flatrate_from_regions(details.watch_providers, regions)
    return Show(
        title=details.title,
        service=pick_primary_provider(flatrate),
        window=window,
        poster_url=details.poster_url,
        **common,
    )


async def load_user_shows(
    session: Session, user_id: str, today: Optional[date] = None
) -> List[Show]:
    """Load every tracked title for a user, in display order."""
    rows = list_tracked(session, user_id)
    if not rows:
        return []
    return list(
        await asyncio.gather(
            *[load_show(row, index, today) for index, row in enumerate(rows)]
        )
    )


def filter_shows(shows: Sequence[Show], view: PlanView) -> List[Show]:
    """Narrow shows to the ones a plan view is built from."""
    if view == PlanView.FAVORITES:
        return [s for s in shows if s.favorite]
    if view == PlanView.WATCH_LIVE:
        return [s for s in shows if s.watch_live and not s.window.is_complete]
    return list(shows)
