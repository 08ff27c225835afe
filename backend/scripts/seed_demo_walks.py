from datetime import datetime, time, timedelta, timezone
import random

from walkmate.db import SessionLocal
from walkmate.models.user import User
from walkmate.models.walk import Walk

DEMO_USER_NAME = "Demo Walker"


def get_or_create_demo_user(db) -> User:
    """Reuse the demo user across runs so reseeding keeps the same id."""
    user = db.query(User).filter(User.name == DEMO_USER_NAME).first()
    if user is None:
        user = User(name=DEMO_USER_NAME, goal_type="steps", goal_value=8000)
        db.add(user)
        db.commit()
        db.refresh(user)
    return user


def clear_recent_walks(db, user_id: str, days: int = 60) -> None:
    """Delete the user's walks in the last N days so we can reseed cleanly."""
    cutoff = datetime.now(timezone.utc) - timedelta(days=days)
    db.query(Walk).filter(Walk.user_id == user_id, Walk.date >= cutoff).delete()
    db.commit()


def seed_demo_walks(db, user_id: str, weeks: int = 4) -> None:
    """Insert a block of demo walks ending today.

    Morning walk most days, an evening walk every other day, and a rest day
    roughly once a week so streaks and goal misses both show up.
    """
    today = datetime.now(timezone.utc).date()
    walks_to_add = []

    for days_ago in range(weeks * 7 - 1, -1, -1):
        day = today - timedelta(days=days_ago)
        if random.random() < 0.15:
            continue

        sessions = [time(7, 30)]
        if days_ago % 2 == 0:
            sessions.append(time(18, 15))

        for start in sessions:
            steps = random.randint(2500, 7000)
            walks_to_add.append(
                Walk(
                    user_id=user_id,
                    steps=steps,
                    distance=round(steps * 0.75, 1),  # ~0.75 m per step
                    duration=max(1, steps // 100),
                    date=datetime.combine(day, start, tzinfo=timezone.utc),
                )
            )

    if walks_to_add:
        db.add_all(walks_to_add)
        db.commit()

    print(f"Seeded {len(walks_to_add)} demo walks for user {user_id}")


def main():
    db = SessionLocal()
    try:
        user = get_or_create_demo_user(db)
        clear_recent_walks(db, user.id, days=60)
        seed_demo_walks(db, user.id)
    finally:
        db.close()


if __name__ == "__main__":
    main()
