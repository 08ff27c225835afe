from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from walkmate import store
from walkmate.core.time_utils import format_date, parse_date, start_of_day, utc_now
from walkmate.db import get_db
from walkmate.schemas.walk import WalkCreate, WalkRead, WalkStatsRead, WalkUpdate
from walkmate.services.stats import resolve_stats_range, summarize_walks

router = APIRouter(prefix="/walks", tags=["walks"])


@router.post("/", response_model=WalkRead, status_code=201)
def create_walk(payload: WalkCreate, db: Session = Depends(get_db)):
    return store.create_walk(db, payload.model_dump())


@router.get("/user/{user_id}", response_model=list[WalkRead])
def list_user_walks(user_id: str, db: Session = Depends(get_db)):
    """All walks for a user, most recent first."""
    store.get_user(db, user_id)
    return store.find_walks_by_user(db, user_id)


@router.get("/user/{user_id}/date/{date}", response_model=list[WalkRead])
def list_walks_on_date(user_id: str, date: str, db: Session = Depends(get_db)):
    """
    Walks logged on one UTC calendar day.

      GET /walks/user/{id}/date/2025-01-06
    """
    store.get_user(db, user_id)
    day_start = start_of_day(parse_date(date))
    return store.find_walks_by_user(
        db, user_id, day_start, day_start + timedelta(days=1)
    )


@router.get("/user/{user_id}/stats", response_model=WalkStatsRead)
def get_walk_stats(
    user_id: str,
    period: Optional[str] = Query(None, description="'week' or 'month'"),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
):
    """
    Totals and per-walk averages over a range.

      - period=week: current Sunday-Saturday week, both ends inclusive
      - period=month: first of this month up to first of next month
      - startDate & endDate: [startDate, endDate)
      - nothing: the last 7 calendar days including today
    """
    store.get_user(db, user_id)
    rng = resolve_stats_range(period, start_date, end_date, now=utc_now())
    walks = store.find_walks_by_user(
        db, user_id, rng.start, rng.end, inclusive_end=rng.inclusive_end
    )
    stats = summarize_walks(walks)

    return WalkStatsRead(
        period=rng.period,
        start_date=format_date(rng.start),
        end_date=format_date(rng.last_instant),
        total_steps=stats.total_steps,
        total_distance=stats.total_distance,
        total_duration=stats.total_duration,
        walk_count=stats.walk_count,
        average_steps=stats.average_steps,
        average_distance=stats.average_distance,
        average_duration=stats.average_duration,
    )


@router.get("/{walk_id}", response_model=WalkRead)
def get_walk(walk_id: str, db: Session = Depends(get_db)):
    return store.get_walk(db, walk_id)


@router.put("/{walk_id}", response_model=WalkRead)
def update_walk(walk_id: str, payload: WalkUpdate, db: Session = Depends(get_db)):
    return store.update_walk(db, walk_id, payload.model_dump(exclude_unset=True))


@router.delete("/{walk_id}")
def delete_walk(walk_id: str, db: Session = Depends(get_db)):
    store.delete_walk(db, walk_id)
    return {"success": True}
