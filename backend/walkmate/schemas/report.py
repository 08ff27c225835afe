from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

from walkmate.schemas.user import CamelModel


class _FromAttributes(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class DayBucketRead(_FromAttributes):
    date: str  # 'YYYY-MM-DD'
    steps: int
    distance: float
    duration: int
    goal_met: bool


class WeeklyTotalsRead(_FromAttributes):
    total_steps: int
    total_distance: float
    total_duration: int
    days_active: int
    days_goal_met: int


class WeeklyReportRead(_FromAttributes):
    start_date: str
    end_date: str
    daily_data: list[DayBucketRead]
    weekly_totals: WeeklyTotalsRead
    # Walks handed to the builder that did not land in any day bucket
    unmatched_walks: int = 0
