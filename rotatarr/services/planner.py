"""Rolling plan scheduler.

Allocates each of the next 12 months to at most one streaming service so the
user only ever pays for one subscription at a time. Allocation is a greedy
month-first pass, not an optimizer:

1. Every show votes for one month on its service: the watch-live month when
   the user watches it live, otherwise the binge month.
2. Votes are weighted (watch live 10, favorite 5, otherwise 1) and summed
   per (service, month) bucket.
3. Months are filled in order; each goes to the unused service with the
   heaviest bucket for it, ties broken by the earliest-added show.
4. Services that lost every month they wanted take the first open month.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Sequence

from rotatarr.core.months import format_month, next_month_keys
from rotatarr.models.plan import (
    Calendar,
    ComputedWindow,
    MonthLabel,
    MonthPlan,
    RollingPlan,
    Show,
)

logger = logging.getLogger(__name__)

HORIZON_MONTHS = 12

WATCH_LIVE_SCORE = 10
FAVORITE_SCORE = 5
DEFAULT_SCORE = 1


@dataclass
class _Bucket:
    """Aggregated demand for one (service, month) pair."""

    score: int = 0
    shows: List[Show] = field(default_factory=list)
    min_added_order: float = float("inf")

    def add(self, show: Show) -> None:
        self.score += score_show(show)
        self.shows.append(show)
        order = show.added_order if show.added_order is not None else float("inf")
        self.min_added_order = min(self.min_added_order, order)

    @property
    def has_watch_live(self) -> bool:
        return any(s.watch_live for s in self.shows)


def score_show(show: Show) -> int:
    if show.watch_live:
        return WATCH_LIVE_SCORE
    if show.favorite:
        return FAVORITE_SCORE
    return DEFAULT_SCORE


def desired_month(show: Show, months: Sequence[str]) -> Optional[str]:
    """The month a show votes for, or None when it sits this plan out."""
    window = show.window
    if not isinstance(window, ComputedWindow):
        return None

    if show.watch_live and window.secondary_subscribe:
        month = window.secondary_subscribe
    else:
        month = window.primary_subscribe

    # Live shows whose debut month already passed still need a slot now
    if show.watch_live and month not in months:
        month = months[0]
    if month not in months:
        return None
    return month


def _collect_buckets(
    shows: Sequence[Show], months: Sequence[str]
) -> Dict[str, Dict[str, _Bucket]]:
    # service -> month -> bucket, services kept in first-seen order
    buckets: Dict[str, Dict[str, _Bucket]] = {}
    for show in shows:
        month = desired_month(show, months)
        if month is None:
            continue
        by_month = buckets.setdefault(show.service, {})
        by_month.setdefault(month, _Bucket()).add(show)
    return buckets


def _schedule(
    shows: Sequence[Show], months: Sequence[str]
) -> tuple[Calendar, List[str]]:
    calendar: Calendar = {m: MonthPlan() for m in months}
    buckets = _collect_buckets(shows, months)
    assigned: set[str] = set()

    for month in months:
        best_service: Optional[str] = None
        best: Optional[_Bucket] = None
        for service, by_month in buckets.items():
            if service in assigned:
                continue
            bucket = by_month.get(month)
            if bucket is None:
                continue
            if (
                best is None
                or bucket.score > best.score
                or (
                    bucket.score == best.score
                    and bucket.min_added_order < best.min_added_order
                )
            ):
                best_service, best = service, bucket

        if best_service is None or best is None:
            continue

        assigned.add(best_service)
        also_live = [
            service
            for service, by_month in buckets.items()
            if service != best_service
            and month in by_month
            and by_month[month].has_watch_live
        ]
        calendar[month] = MonthPlan(
            service=best_service,
            shows=list(best.shows),
            also_watch_live=also_live,
        )

    dropped: List[str] = []
    for service in buckets:
        if service in assigned:
            continue
        open_month = next((m for m in months if calendar[m].service is None), None)
        if open_month is None:
            dropped.append(service)
            continue
        calendar[open_month] = MonthPlan(service=service)
        assigned.add(service)

    if dropped:
        logger.info(
            f"No open month left for {len(dropped)} service(s): {', '.join(dropped)}"
        )
    return calendar, dropped


def build_subscription_plan(
    shows: Sequence[Show], today: Optional[date] = None
) -> Calendar:
    """Assign each of the next 12 months to at most one service."""
    calendar, _ = _schedule(shows, next_month_keys(today, HORIZON_MONTHS))
    return calendar


def build_rolling_plan(
    shows: Sequence[Show], today: Optional[date] = None
) -> RollingPlan:
    """Build the rolling plan along with display labels for its months."""
    months = next_month_keys(today, HORIZON_MONTHS)
    calendar, dropped = _schedule(shows, months)
    return RollingPlan(
        months=[MonthLabel(key=m, label=format_month(m)) for m in months],
        plan=calendar,
        dropped_services=dropped,
    )
