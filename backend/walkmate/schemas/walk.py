from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from walkmate.core.constants import MAX_WALK_INT
from walkmate.core.time_utils import ensure_utc
from walkmate.schemas.user import CamelModel


class WalkBase(CamelModel):
    steps: int = Field(ge=0, le=MAX_WALK_INT)
    distance: float = Field(ge=0, allow_inf_nan=False)  # meters
    duration: int = Field(ge=0, le=MAX_WALK_INT)  # minutes
    date: datetime


class WalkCreate(WalkBase):
    """Schema for logging a new walk."""

    user_id: str = Field(min_length=1)


class WalkUpdate(CamelModel):
    """Schema for updating a walk (all fields optional)."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    steps: Optional[int] = Field(default=None, ge=0, le=MAX_WALK_INT)
    distance: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    duration: Optional[int] = Field(default=None, ge=0, le=MAX_WALK_INT)
    date: Optional[datetime] = None


class WalkRead(WalkBase):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: str
    user_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # SQLite hands back naive values; they were written as UTC
    @field_validator("date")
    @classmethod
    def _as_utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)


class WalkStatsRead(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    period: str
    start_date: str
    end_date: str
    total_steps: int
    total_distance: float
    total_duration: int
    walk_count: int
    average_steps: float
    average_distance: float
    average_duration: float
