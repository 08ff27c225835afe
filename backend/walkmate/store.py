"""Database access for users and walks.

Missing rows raise NotFound; any SQLAlchemy error is rolled back and raised
as StoreFailure. Nothing here retries.
"""

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from walkmate.core.config import settings
from walkmate.core.errors import NotFound, StoreFailure
from walkmate.core.time_utils import ensure_utc, to_millis
from walkmate.models.user import User
from walkmate.models.walk import Walk

logger = logging.getLogger(__name__)


@contextmanager
def _guard(db: Session, operation: str):
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("store operation %r failed", operation)
        raise StoreFailure(operation) from exc


def _enum_value(v):
    return getattr(v, "value", v)


# --------- Users --------- #

def list_users(db: Session) -> list[User]:
    with _guard(db, "List users"):
        return db.query(User).order_by(User.created_at).all()


def find_user_by_id(db: Session, user_id: str) -> Optional[User]:
    with _guard(db, "Fetch user"):
        return db.query(User).filter(User.id == user_id).first()


def get_user(db: Session, user_id: str) -> User:
    user = find_user_by_id(db, user_id)
    if user is None:
        raise NotFound("User", user_id)
    return user


def count_users(db: Session) -> int:
    with _guard(db, "Count users"):
        return db.query(User).count()


def create_user(db: Session, data: dict) -> User:
    goal_type = _enum_value(data.get("goal_type")) or settings.default_goal_type
    goal_value = data.get("goal_value") or settings.default_goal_value
    user = User(name=data["name"], goal_type=goal_type, goal_value=goal_value)
    with _guard(db, "Create user"):
        db.add(user)
        db.commit()
        db.refresh(user)
    logger.info("created user %s (goal %s >= %s)", user.id, user.goal_type, user.goal_value)
    return user


def update_user(db: Session, user_id: str, data: dict) -> User:
    """Apply only the provided fields (None means "not provided")."""
    user = get_user(db, user_id)
    for key in ("name", "goal_type", "goal_value"):
        if data.get(key) is not None:
            setattr(user, key, _enum_value(data[key]))
    with _guard(db, "Update user"):
        db.commit()
        db.refresh(user)
    logger.info("updated user %s", user.id)
    return user


def delete_user(db: Session, user_id: str) -> None:
    """Delete a user. Walks are not cascaded; the foreign key rejects it."""
    user = get_user(db, user_id)
    with _guard(db, "Delete user"):
        db.delete(user)
        db.commit()
    logger.info("deleted user %s", user_id)


# --------- Walks --------- #

def find_walk_by_id(db: Session, walk_id: str) -> Optional[Walk]:
    with _guard(db, "Fetch walk"):
        return db.query(Walk).filter(Walk.id == walk_id).first()


def get_walk(db: Session, walk_id: str) -> Walk:
    walk = find_walk_by_id(db, walk_id)
    if walk is None:
        raise NotFound("Walk", walk_id)
    return walk


def find_walks_by_user(
    db: Session,
    user_id: str,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    inclusive_end: bool = False,
) -> list[Walk]:
    """Walks for a user, newest first.

    The range is ``[start, end)`` unless ``inclusive_end`` makes it
    ``[start, end]``; either bound may be omitted.
    """
    query = db.query(Walk).filter(Walk.user_id == user_id)
    if start is not None:
        query = query.filter(Walk.date >= ensure_utc(start))
    if end is not None:
        end = ensure_utc(end)
        query = query.filter(Walk.date <= end if inclusive_end else Walk.date < end)
    with _guard(db, "Fetch walks"):
        return query.order_by(Walk.date.desc()).all()


def get_user_snapshot(
    db: Session,
    user_id: str,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> tuple[User, list[Walk]]:
    """Read a user and their walks in ``[start, end]`` inside one transaction.

    Both reads run in the session's current transaction with no commit in
    between, so the goal evaluated matches the walks read.
    """
    user = get_user(db, user_id)
    walks = find_walks_by_user(db, user_id, start, end, inclusive_end=True)
    return user, walks


def create_walk(db: Session, data: dict) -> Walk:
    """Create a walk for an existing user; NotFound when the user is missing."""
    user_id = data["user_id"]
    get_user(db, user_id)
    walk = Walk(
        user_id=user_id,
        steps=data["steps"],
        distance=data["distance"],
        duration=data["duration"],
        date=to_millis(data["date"]),
    )
    with _guard(db, "Create walk"):
        db.add(walk)
        db.commit()
        db.refresh(walk)
    logger.info("created walk %s for user %s on %s", walk.id, user_id, walk.date)
    return walk


def update_walk(db: Session, walk_id: str, data: dict) -> Walk:
    """Apply only the provided fields (None means "not provided")."""
    walk = get_walk(db, walk_id)
    for key in ("steps", "distance", "duration"):
        if data.get(key) is not None:
            setattr(walk, key, data[key])
    if data.get("date") is not None:
        walk.date = to_millis(data["date"])
    with _guard(db, "Update walk"):
        db.commit()
        db.refresh(walk)
    logger.info("updated walk %s", walk.id)
    return walk


def delete_walk(db: Session, walk_id: str) -> None:
    walk = get_walk(db, walk_id)
    with _guard(db, "Delete walk"):
        db.delete(walk)
        db.commit()
    logger.info("deleted walk %s", walk_id)
