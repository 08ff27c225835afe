#!/usr/bin/env python3
"""
Seed several weeks of walks into the WalkMate API.

Pattern per week (Sun–Sat):
  - Sun: long weekend walk
  - Mon–Fri: commute walk, plus a lunch walk on Tue/Thu
  - Sat: rest

Daily step targets ramp up week over week so the weekly report shows a
mix of goal hits and misses:
  [6000, 7000, 8000, 9000, 10000, 11000, ...]

Usage examples:
  - Against a local dev server, creating a fresh user:
      python scripts/seed_weeks.py --base-url http://localhost:8000
  - Reusing an existing user:
      python scripts/seed_weeks.py --base-url http://localhost:8000 --user-id <ID> --weeks 8
"""

from __future__ import annotations

import argparse
import datetime as dt
import sys
from typing import List, Optional

try:
    import requests  # type: ignore
except ImportError:  # pragma: no cover
    print("This script requires the 'requests' package.\nInstall with: pip install requests", file=sys.stderr)
    raise


BASE_STEPS = 6000
STEP_RAMP = 1000
METERS_PER_STEP = 0.75
STEPS_PER_MINUTE = 100


def sunday_of_week(d: dt.date) -> dt.date:
    return d - dt.timedelta(days=(d.weekday() + 1) % 7)


def walk_payload(user_id: str, day: dt.date, hour: int, steps: int) -> dict:
    start = dt.datetime.combine(day, dt.time(hour, 0), tzinfo=dt.timezone.utc)
    return {
        "userId": user_id,
        "steps": steps,
        "distance": round(steps * METERS_PER_STEP, 1),
        "duration": max(1, steps // STEPS_PER_MINUTE),
        "date": start.isoformat().replace("+00:00", "Z"),
    }


def split_daily_steps(target: int, sessions: int) -> List[int]:
    """Split a day's steps across sessions, remainder on the last one."""
    base = target // sessions
    parts = [base] * sessions
    parts[-1] += target - base * sessions
    return parts


def post_json(base_url: str, path: str, payload: dict) -> dict:
    url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    r = requests.post(url, json=payload, timeout=15)
    if r.status_code >= 300:
        raise RuntimeError(f"{path} -> HTTP {r.status_code}: {r.text}")
    return r.json()


def ensure_user(base_url: str, user_id: Optional[str], goal: int) -> str:
    if user_id:
        return user_id
    user = post_json(base_url, "users/", {"name": "Seeded Walker", "goalType": "steps", "goalValue": goal})
    print(f"Created user {user['id']}")
    return user["id"]


def seed_week(base_url: str, user_id: str, week_start: dt.date, daily_steps: int, today: dt.date) -> int:
    created = 0
    for dow in range(6):  # Saturday (6) is a rest day
        day = week_start + dt.timedelta(days=dow)
        if day > today:
            break
        if dow == 0:
            plan = [(10, int(daily_steps * 1.3))]
        elif dow in (2, 4):
            plan = list(zip((8, 12), split_daily_steps(daily_steps, 2)))
        else:
            plan = [(8, daily_steps)]
        for hour, steps in plan:
            post_json(base_url, "walks/", walk_payload(user_id, day, hour, steps))
            created += 1
    return created


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed weeks of walks through the API")
    ap.add_argument("--base-url", required=True, help="API base URL (e.g., http://localhost:8000)")
    ap.add_argument("--user-id", default=None, help="Existing user id (default: create one)")
    ap.add_argument("--weeks", type=int, default=6, help="Number of weeks ending with the current one")
    ap.add_argument("--goal", type=int, default=8000, help="Daily step goal for a newly created user")
    args = ap.parse_args()

    user_id = ensure_user(args.base_url, args.user_id, args.goal)

    today = dt.datetime.now(dt.timezone.utc).date()
    this_sunday = sunday_of_week(today)
    week_starts = [this_sunday - dt.timedelta(weeks=args.weeks - 1 - i) for i in range(args.weeks)]

    total = 0
    for i, ws in enumerate(week_starts):
        total += seed_week(args.base_url, user_id, ws, BASE_STEPS + STEP_RAMP * i, today)

    print(f"Seed complete: {total} walks over {args.weeks} weeks for user {user_id}.")


if __name__ == "__main__":
    main()
