from datetime import datetime, timedelta, timezone

import pytest

from walkmate import store
from walkmate.core.errors import NotFound, StoreFailure


def _walk(user_id, when, **extra):
    data = {"user_id": user_id, "steps": 1000, "distance": 750.0, "duration": 10, "date": when}
    data.update(extra)
    return data


@pytest.fixture
def user(db_session):
    return store.create_user(db_session, {"name": "Store User"})


def test_create_user_applies_default_goal(user):
    assert user.goal_type == "steps"
    assert user.goal_value == 10000
    assert len(user.id) == 32


def test_get_user_missing(db_session):
    with pytest.raises(NotFound) as exc:
        store.get_user(db_session, "nope")
    assert exc.value.message == "User not found"


def test_update_user_is_partial(db_session, user):
    updated = store.update_user(db_session, user.id, {"goal_value": 5000})
    assert updated.goal_value == 5000
    assert updated.name == "Store User"
    assert updated.goal_type == "steps"


def test_create_walk_requires_existing_user(db_session):
    with pytest.raises(NotFound):
        store.create_walk(db_session, _walk("missing", datetime(2025, 3, 5, tzinfo=timezone.utc)))


def test_walk_dates_stored_as_utc(db_session, user):
    est = timezone(timedelta(hours=-5))
    local = datetime(2025, 3, 5, 20, 0, tzinfo=est)
    walk = store.create_walk(db_session, _walk(user.id, local))
    fetched = store.get_walk(db_session, walk.id)
    assert fetched.date.replace(tzinfo=timezone.utc) == local.astimezone(timezone.utc)


def test_find_walks_range_conventions(db_session, user):
    start = datetime(2025, 3, 5, tzinfo=timezone.utc)
    end = datetime(2025, 3, 6, tzinfo=timezone.utc)
    store.create_walk(db_session, _walk(user.id, start))
    store.create_walk(db_session, _walk(user.id, end))
    store.create_walk(db_session, _walk(user.id, datetime(2025, 3, 5, 12, tzinfo=timezone.utc)))

    half_open = store.find_walks_by_user(db_session, user.id, start, end)
    closed = store.find_walks_by_user(db_session, user.id, start, end, inclusive_end=True)
    assert len(half_open) == 2
    assert len(closed) == 3
    # newest first
    assert closed[0].date.replace(tzinfo=None) == end.replace(tzinfo=None)


def test_update_walk_is_partial(db_session, user):
    walk = store.create_walk(db_session, _walk(user.id, datetime(2025, 3, 5, tzinfo=timezone.utc)))
    updated = store.update_walk(db_session, walk.id, {"steps": 4321})
    assert updated.steps == 4321
    assert updated.distance == 750.0
    assert updated.duration == 10


def test_delete_walk(db_session, user):
    walk = store.create_walk(db_session, _walk(user.id, datetime(2025, 3, 5, tzinfo=timezone.utc)))
    store.delete_walk(db_session, walk.id)
    assert store.find_walk_by_id(db_session, walk.id) is None
    with pytest.raises(NotFound):
        store.delete_walk(db_session, walk.id)


def test_delete_user_with_walks_is_store_failure(db_session, user):
    store.create_walk(db_session, _walk(user.id, datetime(2025, 3, 5, tzinfo=timezone.utc)))
    with pytest.raises(StoreFailure):
        store.delete_user(db_session, user.id)
    # session is usable again after the rollback
    assert store.get_user(db_session, user.id).name == "Store User"


def test_snapshot_reads_user_and_inclusive_range(db_session, user):
    start = datetime(2025, 3, 2, tzinfo=timezone.utc)
    end = datetime(2025, 3, 8, 23, 59, 59, 999000, tzinfo=timezone.utc)
    store.create_walk(db_session, _walk(user.id, end))
    store.create_walk(db_session, _walk(user.id, datetime(2025, 3, 9, tzinfo=timezone.utc)))
    snap_user, walks = store.get_user_snapshot(db_session, user.id, start, end)
    assert snap_user.id == user.id
    assert len(walks) == 1
