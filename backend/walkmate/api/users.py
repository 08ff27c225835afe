from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from walkmate import store
from walkmate.core.time_utils import parse_date, utc_now
from walkmate.db import get_db
from walkmate.schemas.report import WeeklyReportRead
from walkmate.schemas.user import StreakRead, UserCreate, UserRead, UserUpdate
from walkmate.services.reports import build_weekly_report, week_window
from walkmate.services.streaks import compute_streak


router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", response_model=list[UserRead])
def list_users(db: Session = Depends(get_db)):
    return store.list_users(db)


@router.post("/", response_model=UserRead, status_code=201)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    return store.create_user(db, payload.model_dump())


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: str, db: Session = Depends(get_db)):
    return store.get_user(db, user_id)


@router.put("/{user_id}", response_model=UserRead)
def update_user(user_id: str, payload: UserUpdate, db: Session = Depends(get_db)):
    # Only fields present in the request body change
    return store.update_user(db, user_id, payload.model_dump(exclude_unset=True))


@router.delete("/{user_id}")
def delete_user(user_id: str, db: Session = Depends(get_db)):
    store.delete_user(db, user_id)
    return {"success": True}


@router.get("/{user_id}/streak", response_model=StreakRead)
def get_user_streak(user_id: str, db: Session = Depends(get_db)):
    store.get_user(db, user_id)
    walks = store.find_walks_by_user(db, user_id)
    return StreakRead(streak=compute_streak(walks, as_of=utc_now()))


@router.get("/{user_id}/weekly-report", response_model=WeeklyReportRead)
def get_weekly_report(
    user_id: str,
    date: Optional[str] = Query(None, description="Any day in the week, YYYY-MM-DD"),
    db: Session = Depends(get_db),
):
    """
    Sunday-Saturday totals for the week containing `date` (default: today).

      GET /users/{id}/weekly-report?date=2025-03-05
    """
    anchor = parse_date(date) if date else utc_now()
    week_start, week_end = week_window(anchor)

    user, walks = store.get_user_snapshot(db, user_id, week_start, week_end)
    report = build_weekly_report(walks, user.goal_type, user.goal_value, anchor=anchor)
    return WeeklyReportRead.model_validate(report)
