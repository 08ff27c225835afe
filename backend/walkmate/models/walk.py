from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.sql import func
from walkmate.db import Base
from walkmate.models.user import new_id


class Walk(Base):
    __tablename__ = "walks"
    __table_args__ = (
        CheckConstraint("steps >= 0", name="ck_walks_steps_nonneg"),
        CheckConstraint("distance >= 0", name="ck_walks_distance_nonneg"),
        CheckConstraint("duration >= 0", name="ck_walks_duration_nonneg"),
        Index("ix_walks_user_id_date", "user_id", "date"),
    )

    id = Column(String(32), primary_key=True, default=new_id)

    user_id = Column(
        String(32),
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
    )

    steps = Column(Integer, nullable=False)
    distance = Column(Float, nullable=False)  # meters
    duration = Column(Integer, nullable=False)  # minutes

    # When the walk happened, always written as UTC (see core.time_utils)
    date = Column(DateTime(timezone=True), nullable=False, index=True)

    # Timestamps
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
