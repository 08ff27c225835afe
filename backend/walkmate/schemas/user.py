from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GoalType(str, Enum):
    steps = "steps"
    distance = "distance"


class CamelModel(BaseModel):
    """Base for API payloads: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserCreate(CamelModel):
    name: str = Field(min_length=1)
    # Defaults come from settings when omitted
    goal_type: Optional[GoalType] = None
    goal_value: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)


class UserUpdate(CamelModel):
    """Schema for updating a user (all fields optional)."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    name: Optional[str] = Field(default=None, min_length=1)
    goal_type: Optional[GoalType] = None
    goal_value: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)


class UserRead(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: str
    name: str
    goal_type: GoalType
    goal_value: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class StreakRead(CamelModel):
    streak: int
