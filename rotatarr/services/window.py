"""Subscription window calculation.

Turns a show's episode air dates (or a movie's release date) into the month
to subscribe and binge, the month to cancel, and, while a show is still
airing, the month to subscribe instead to watch it live.
"""

import logging
from datetime import date, datetime
from typing import Iterable, Optional, Union

from dateutil import parser as date_parser

from rotatarr.core.months import add_months, format_month, month_key, start_of_month
from rotatarr.models.plan import ComputedWindow, SubscriptionWindow, UnknownWindow

logger = logging.getLogger(__name__)

DateLike = Union[str, date, datetime, None]

# A finale after this day of the current month leaves under half a month to binge
LATE_FINALE_DAY = 15

# Fills in parts missing from partial dates such as "2026" or "Oct 2026"
_PARSE_DEFAULT = datetime(2000, 1, 1)


def parse_date(value: DateLike) -> Optional[date]:
    """Leniently parse an air/release date, returning None when unusable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return date_parser.parse(value.strip(), default=_PARSE_DEFAULT).date()
    except (ValueError, OverflowError) as exc:
        logger.debug(f"Ignoring unparseable date {value!r}: {exc}")
        return None


def _is_missing(value: DateLike) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _human_date(d: date) -> str:
    return f"{d:%B} {d.day}, {d.year}"


def _window_between(
    first: date, last: date, today: date, *, more_to_come: bool = False
) -> ComputedWindow:
    if last < first:
        first, last = last, first

    if last <= today and not more_to_come:
        binge = start_of_month(today)
        finished_this_month = (last.year, last.month) == (today.year, today.month)
        if finished_this_month and last.day > LATE_FINALE_DAY:
            binge = add_months(binge, 1)
        binge_key = month_key(binge)
        return ComputedWindow(
            primary_subscribe=binge_key,
            primary_cancel=month_key(add_months(binge, 1)),
            is_complete=True,
            first_date=_human_date(first),
            last_date=_human_date(last),
            note=(
                f"Finished {_human_date(last)}. "
                f"Binge it in {format_month(binge_key)}."
            ),
        )

    # Undated episodes air after today at the earliest
    end = max(last, today) if more_to_come else last
    binge = add_months(start_of_month(end), 1)
    binge_key = month_key(binge)
    live_key = month_key(first)
    if more_to_come:
        until = f"Has episodes still to be dated after {_human_date(last)}."
    else:
        until = f"Airs until {_human_date(last)}."
    return ComputedWindow(
        primary_subscribe=binge_key,
        primary_cancel=month_key(add_months(binge, 1)),
        secondary_subscribe=live_key,
        is_complete=False,
        first_date=_human_date(first),
        last_date=_human_date(last),
        note=(
            f"{until} Subscribe in {format_month(binge_key)} "
            f"to binge, or from {format_month(live_key)} to watch live."
        ),
    )


def compute_window_from_dates(
    first: DateLike,
    last: DateLike = None,
    today: Optional[date] = None,
) -> SubscriptionWindow:
    """Window from a release date, or a first/last air date pair.

    A missing ``last`` means the title is a single release (``last = first``).
    Any date that is present but unparseable yields an ``UnknownWindow``.
    """
    today = today or date.today()
    first_date = parse_date(first)
    last_date = first_date if _is_missing(last) else parse_date(last)
    if first_date is None or last_date is None:
        return UnknownWindow()
    return _window_between(first_date, last_date, today)


def compute_window(
    episode_dates: Optional[Iterable[DateLike]],
    today: Optional[date] = None,
    *,
    first_air_date: DateLike = None,
    last_air_date: DateLike = None,
) -> SubscriptionWindow:
    """Window from a season's episode air dates.

    TMDB lists unannounced episodes without a date, so a season with any
    undated episode is still airing: it runs from its earliest dated episode
    to the later of its latest dated episode and ``last_air_date``. The
    series-level dates are used when no episode has a date or any episode
    date is present but unparseable.
    """
    today = today or date.today()
    raw = list(episode_dates or [])
    dates = [parse_date(d) for d in raw]
    dated = [d for d in dates if d is not None]
    garbled = any(
        parsed is None and not _is_missing(value) for value, parsed in zip(raw, dates)
    )
    if dated and len(dated) == len(dates):
        return _window_between(min(dated), max(dated), today)
    if dated and not garbled:
        last_aired = parse_date(last_air_date)
        last = max(dated + [last_aired]) if last_aired else max(dated)
        return _window_between(min(dated), last, today, more_to_come=True)

    if _is_missing(first_air_date) and _is_missing(last_air_date):
        return UnknownWindow()
    if _is_missing(first_air_date):
        return compute_window_from_dates(last_air_date, None, today)
    return compute_window_from_dates(first_air_date, last_air_date, today)
