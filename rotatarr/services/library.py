"""Per-user list of tracked titles and their planning preferences."""

import logging
from typing import Sequence

from sqlmodel import Session, col, select

from rotatarr.models.library import UserShow

logger = logging.getLogger(__name__)


class ShowNotFoundError(Exception):
    """The user is not tracking the requested title."""

    def __init__(self, user_id: str, tmdb_id: int):
        super().__init__(f"User {user_id} is not tracking TMDB ID {tmdb_id}")
        self.user_id = user_id
        self.tmdb_id = tmdb_id


class ShowAlreadyTrackedError(Exception):
    """The user already tracks the requested title."""

    def __init__(self, user_id: str, tmdb_id: int):
        super().__init__(f"User {user_id} already tracks TMDB ID {tmdb_id}")
        self.user_id = user_id
        self.tmdb_id = tmdb_id


def list_tracked(session: Session, user_id: str) -> list[UserShow]:
    """Tracked titles in display order.

    Rows without an explicit ``sort_order`` follow ordered rows, oldest first.
    """
    statement = (
        select(UserShow)
        .where(UserShow.user_id == user_id)
        .order_by(col(UserShow.sort_order).is_(None), UserShow.sort_order, UserShow.id)
    )
    return list(session.exec(statement).all())


def _get_tracked(session: Session, user_id: str, tmdb_id: int) -> UserShow | None:
    statement = select(UserShow).where(
        UserShow.user_id == user_id, UserShow.tmdb_id == tmdb_id
    )
    return session.exec(statement).first()


def track(
    session: Session, user_id: str, tmdb_id: int, media_type: str = "tv"
) -> UserShow:
    """Add a title to the end of the user's list."""
    if _get_tracked(session, user_id, tmdb_id) is not None:
        raise ShowAlreadyTrackedError(user_id, tmdb_id)

    row = UserShow(user_id=user_id, tmdb_id=tmdb_id, media_type=media_type)
    session.add(row)
    session.commit()
    session.refresh(row)
    logger.info(f"User {user_id} tracked {media_type} {tmdb_id}")
    return row


def untrack(session: Session, user_id: str, tmdb_id: int) -> None:
    row = _get_tracked(session, user_id, tmdb_id)
    if row is None:
        raise ShowNotFoundError(user_id, tmdb_id)
    session.delete(row)
    session.commit()


def untrack_all(session: Session, user_id: str) -> int:
    """Remove every tracked title for a user, returning how many were removed."""
    rows = list_tracked(session, user_id)
    for row in rows:
        session.delete(row)
    session.commit()
    return len(rows)


def set_flags(
    session: Session,
    user_id: str,
    tmdb_id: int,
    favorite: bool | None = None,
    watch_live: bool | None = None,
) -> UserShow:
    """Update favorite and/or watch live; ``None`` leaves a flag unchanged."""
    row = _get_tracked(session, user_id, tmdb_id)
    if row is None:
        raise ShowNotFoundError(user_id, tmdb_id)
    if favorite is not None:
        row.favorite = favorite
    if watch_live is not None:
        row.watch_live = watch_live
    session.add(row)
    session.commit()
    session.refresh(row)
    return row


def reorder(session: Session, user_id: str, order: Sequence[int]) -> int:
    """Persist display order from a list of TMDB ids.

    Ids the user does not track are skipped. Returns the number of rows updated.
    """
    rows = {row.tmdb_id: row for row in list_tracked(session, user_id)}
    updated = 0
    for position, tmdb_id in enumerate(order):
        row = rows.get(tmdb_id)
        if row is None:
            logger.debug(f"Skipping untracked TMDB ID {tmdb_id} in reorder")
            continue
        row.sort_order = position
        session.add(row)
        updated += 1
    session.commit()
    return updated
