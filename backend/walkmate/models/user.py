import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, Float, String
from sqlalchemy.sql import func
from walkmate.db import Base


def new_id() -> str:
    return uuid.uuid4().hex


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("goal_type IN ('steps', 'distance')", name="ck_users_goal_type"),
        CheckConstraint("goal_value > 0", name="ck_users_goal_value_positive"),
    )

    id = Column(String(32), primary_key=True, default=new_id)

    name = Column(String, nullable=False)

    # Which metric the daily goal tracks: 'steps' or 'distance' (meters)
    goal_type = Column(String(20), nullable=False, server_default="steps")
    goal_value = Column(Float, nullable=False, server_default="10000")

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    # No relationship() to walks: deleting a user never touches its walks,
    # the RESTRICT foreign key on walks.user_id decides.
