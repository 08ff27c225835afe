"""Streak calculation: consecutive calendar days with at least one walk."""

from datetime import datetime, timedelta
from typing import Iterable

from walkmate.core.time_utils import day_key


def compute_streak(walks: Iterable, as_of: datetime) -> int:
    """Count consecutive active days ending today or yesterday.

    Args:
        walks: Walk-like objects with a ``date`` timestamp, any order.
        as_of: Reference instant standing in for "now".

    Returns:
        Number of consecutive UTC calendar days with activity, or 0 when the
        most recent active day is older than yesterday.
    """
    # Multiple walks on the same day count once
    days = sorted({day_key(w.date) for w in walks}, reverse=True)
    if not days:
        return 0

    today = day_key(as_of)
    yesterday = today - timedelta(days=1)

    most_recent = days[0]
    if most_recent < yesterday:
        return 0

    streak = 1
    current = most_recent
    for day in days[1:]:
        if day == current - timedelta(days=1):
            streak += 1
            current = day
        else:
            break

    return streak
