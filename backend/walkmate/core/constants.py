"""Shared application constants.

Keeps the calendar and goal values used by the report, streak and stats
code in one place.
"""

# Day-of-week index used for week windows: 0 = Sunday ... 6 = Saturday
DAYS_IN_WEEK = 7

# Trailing window (calendar days, today included) used when stats have no range
STATS_FALLBACK_DAYS = 7

# Supported daily goal metrics
GOAL_STEPS = "steps"
GOAL_DISTANCE = "distance"
GOAL_TYPES = (GOAL_STEPS, GOAL_DISTANCE)

DEFAULT_GOAL_VALUE = 10000

# Stats period shortcuts accepted by /walks/user/{id}/stats
PERIOD_WEEK = "week"
PERIOD_MONTH = "month"
STATS_PERIODS = (PERIOD_WEEK, PERIOD_MONTH)

# Upper bound for integer walk fields (signed 32-bit INTEGER columns)
MAX_WALK_INT = 2**31 - 1
