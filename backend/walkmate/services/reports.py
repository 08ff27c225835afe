"""Weekly report: per-day totals and goal completion for a Sunday-Saturday week.

Buckets are a fixed list of seven records indexed by day offset from the
week start, so a report always has exactly one entry per calendar day.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Optional

from walkmate.core.constants import DAYS_IN_WEEK, GOAL_DISTANCE, GOAL_STEPS
from walkmate.core.time_utils import (
    day_key,
    end_of_week,
    ensure_utc,
    format_date,
    start_of_week,
    utc_now,
)

logger = logging.getLogger(__name__)


@dataclass
class _Accumulator:
    steps: int = 0
    distance: float = 0.0
    duration: int = 0


@dataclass(frozen=True)
class DayBucket:
    date: str
    steps: int
    distance: float
    duration: int
    goal_met: bool

    @property
    def active(self) -> bool:
        return self.steps > 0 or self.distance > 0 or self.duration > 0


@dataclass(frozen=True)
class WeeklyTotals:
    total_steps: int
    total_distance: float
    total_duration: int
    days_active: int
    days_goal_met: int


@dataclass(frozen=True)
class WeeklyReport:
    start_date: str
    end_date: str
    daily_data: list[DayBucket]
    weekly_totals: WeeklyTotals
    unmatched_walks: int = 0


def goal_met(goal_type: str, goal_value: float, steps: int, distance: float) -> bool:
    goal_type = getattr(goal_type, "value", goal_type)
    if goal_type == GOAL_STEPS:
        return steps >= goal_value
    if goal_type == GOAL_DISTANCE:
        return distance >= goal_value
    return False


def week_window(anchor: Optional[datetime] = None) -> tuple[datetime, datetime]:
    """Inclusive [Sunday 00:00:00.000, Saturday 23:59:59.999] UTC around ``anchor``."""
    anchor = anchor if anchor is not None else utc_now()
    return start_of_week(anchor), end_of_week(anchor)


def build_weekly_report(
    walks: Iterable,
    goal_type: str,
    goal_value: float,
    anchor: Optional[datetime] = None,
) -> WeeklyReport:
    """Bucket ``walks`` into the week containing ``anchor`` and sum each day.

    ``goal_type``/``goal_value`` must belong to an existing user; this
    function does no lookups. Walks outside the week are skipped and counted
    in ``unmatched_walks``.
    """
    week_start, week_end = week_window(anchor)
    first_day = week_start.date()

    buckets = [_Accumulator() for _ in range(DAYS_IN_WEEK)]
    unmatched = 0

    for walk in walks:
        when = ensure_utc(walk.date)
        if when < week_start or when > week_end:
            unmatched += 1
            continue
        offset = (day_key(when) - first_day).days
        if not 0 <= offset < DAYS_IN_WEEK:
            # Cannot happen for in-window UTC timestamps; keep it visible if it does
            logger.warning(
                "walk %s dated %s fell inside week %s but outside its buckets",
                getattr(walk, "id", None),
                when.isoformat(),
                format_date(first_day),
            )
            unmatched += 1
            continue
        acc = buckets[offset]
        acc.steps += int(walk.steps)
        acc.distance += float(walk.distance)
        acc.duration += int(walk.duration)

    if unmatched:
        logger.debug("weekly report %s skipped %d walk(s)", format_date(first_day), unmatched)

    daily = [
        DayBucket(
            date=format_date(first_day + timedelta(days=i)),
            steps=acc.steps,
            distance=acc.distance,
            duration=acc.duration,
            goal_met=goal_met(goal_type, goal_value, acc.steps, acc.distance),
        )
        for i, acc in enumerate(buckets)
    ]

    totals = WeeklyTotals(
        total_steps=sum(d.steps for d in daily),
        total_distance=sum(d.distance for d in daily),
        total_duration=sum(d.duration for d in daily),
        days_active=sum(1 for d in daily if d.active),
        days_goal_met=sum(1 for d in daily if d.goal_met),
    )

    return WeeklyReport(
        start_date=format_date(week_start),
        end_date=format_date(week_end),
        daily_data=daily,
        weekly_totals=totals,
        unmatched_walks=unmatched,
    )
