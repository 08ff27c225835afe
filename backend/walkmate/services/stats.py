"""Aggregate walk stats over a date range.

Range conventions differ per period and both matter at boundary days:
``week`` is inclusive on both ends, every other range is half-open.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Optional

from walkmate.core.constants import (
    PERIOD_MONTH,
    PERIOD_WEEK,
    STATS_FALLBACK_DAYS,
    STATS_PERIODS,
)
from walkmate.core.errors import ValidationFailed
from walkmate.core.time_utils import (
    end_of_week,
    parse_date,
    start_of_day,
    start_of_month,
    start_of_next_month,
    start_of_week,
)


@dataclass(frozen=True)
class StatsRange:
    period: str
    start: datetime
    end: datetime
    inclusive_end: bool

    def contains(self, when: datetime) -> bool:
        if when < self.start:
            return False
        return when <= self.end if self.inclusive_end else when < self.end

    @property
    def last_instant(self) -> datetime:
        """Latest instant inside the range, used for display."""
        return self.end if self.inclusive_end else self.end - timedelta(microseconds=1)


@dataclass(frozen=True)
class WalkStats:
    total_steps: int
    total_distance: float
    total_duration: int
    walk_count: int
    average_steps: float
    average_distance: float
    average_duration: float


def resolve_stats_range(
    period: Optional[str],
    start_date: Optional[str],
    end_date: Optional[str],
    now: datetime,
) -> StatsRange:
    """Turn the stats query parameters into a concrete range.

    Bad dates raise InvalidDate; any other unusable combination raises
    ValidationFailed.
    """
    if period:
        period = period.lower()
        if period not in STATS_PERIODS:
            raise ValidationFailed([f"period must be one of: {', '.join(STATS_PERIODS)}"])
        if period == PERIOD_WEEK:
            return StatsRange(PERIOD_WEEK, start_of_week(now), end_of_week(now), True)
        if period == PERIOD_MONTH:
            return StatsRange(PERIOD_MONTH, start_of_month(now), start_of_next_month(now), False)

    if start_date or end_date:
        errors = []
        if not start_date:
            errors.append("startDate is required when endDate is given")
        if not end_date:
            errors.append("endDate is required when startDate is given")
        if errors:
            raise ValidationFailed(errors)
        start = parse_date(start_date)
        end = parse_date(end_date)
        if start >= end:
            raise ValidationFailed(["startDate must be before endDate"])
        return StatsRange("custom", start, end, False)

    today = start_of_day(now)
    return StatsRange(
        "recent",
        today - timedelta(days=STATS_FALLBACK_DAYS - 1),
        today + timedelta(days=1),
        False,
    )


def summarize_walks(walks: Iterable) -> WalkStats:
    total_steps = 0
    total_distance = 0.0
    total_duration = 0
    count = 0
    for w in walks:
        total_steps += int(w.steps)
        total_distance += float(w.distance)
        total_duration += int(w.duration)
        count += 1

    def mean(total):
        return total / count if count else 0

    return WalkStats(
        total_steps=total_steps,
        total_distance=total_distance,
        total_duration=total_duration,
        walk_count=count,
        average_steps=mean(total_steps),
        average_distance=mean(total_distance),
        average_duration=mean(total_duration),
    )
