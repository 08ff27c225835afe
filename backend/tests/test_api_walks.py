import pytest


@pytest.fixture
def user_id(client, user_payload):
    return client.post("/users/", json=user_payload).json()["id"]


@pytest.fixture
def post_walk(client, user_id):
    def _post(date, steps=1000, distance=750.0, duration=10):
        r = client.post(
            "/walks/",
            json={"userId": user_id, "steps": steps, "distance": distance, "duration": duration, "date": date},
        )
        assert r.status_code == 201, r.text
        return r.json()

    return _post


def test_create_walk_unknown_user(client):
    r = client.post(
        "/walks/",
        json={"userId": "ghost", "steps": 1, "distance": 1, "duration": 1, "date": "2025-03-05T08:00:00Z"},
    )
    assert r.status_code == 404
    assert r.json() == {"detail": "User not found"}


def test_create_walk_reports_every_invalid_field(client, user_id):
    r = client.post(
        "/walks/",
        json={"userId": user_id, "steps": -1, "distance": "far", "duration": -5},
    )
    assert r.status_code == 400
    errors = r.json()["errors"]
    assert "steps must be at least 0" in errors
    assert "distance must be a number" in errors
    assert "duration must be at least 0" in errors
    assert "date is required" in errors
    assert len(errors) == 4


def test_create_walk_missing_user_id(client):
    r = client.post("/walks/", json={"steps": 1, "distance": 1, "duration": 1, "date": "2025-03-05T08:00:00Z"})
    assert r.status_code == 400
    assert r.json()["errors"] == ["userId is required"]


def test_walk_date_returned_in_utc(client, post_walk):
    walk = post_walk("2025-03-05T20:00:00-05:00")
    assert walk["date"].startswith("2025-03-06T01:00:00")


def test_sub_millisecond_date_truncated(post_walk):
    walk = post_walk("2025-03-08T23:59:59.999500Z")
    assert walk["date"].startswith("2025-03-08T23:59:59.999")
    assert "999500" not in walk["date"]


@pytest.mark.parametrize("body", [
    '{"userId": "%s", "steps": 1, "distance": Infinity, "duration": 1, "date": "2025-03-05T08:00:00Z"}',
    '{"userId": "%s", "steps": 1, "distance": NaN, "duration": 1, "date": "2025-03-05T08:00:00Z"}',
])
def test_create_walk_rejects_non_finite_distance(client, user_id, body):
    r = client.post(
        "/walks/", content=body % user_id, headers={"Content-Type": "application/json"}
    )
    assert r.status_code == 400
    assert r.json()["errors"] == ["distance must be a finite number"]
    assert client.get(f"/walks/user/{user_id}").json() == []


def test_update_walk_rejects_infinite_distance(client, post_walk):
    walk = post_walk("2025-03-05T08:00:00Z")
    r = client.put(
        f"/walks/{walk['id']}",
        content='{"distance": Infinity}',
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 400
    assert client.get(f"/walks/{walk['id']}").json()["distance"] == 750.0


def test_create_walk_rejects_counts_beyond_integer_column(client, user_id):
    r = client.post(
        "/walks/",
        json={"userId": user_id, "steps": 2**31, "distance": 1, "duration": 2**31, "date": "2025-03-05T08:00:00Z"},
    )
    assert r.status_code == 400
    assert r.json()["errors"] == [
        "steps must be at most 2147483647",
        "duration must be at most 2147483647",
    ]


def test_get_update_delete_walk(client, post_walk):
    walk = post_walk("2025-03-05T08:00:00Z", steps=1000)

    assert client.get(f"/walks/{walk['id']}").json()["steps"] == 1000

    r = client.put(f"/walks/{walk['id']}", json={"steps": 2500})
    assert r.status_code == 200
    updated = r.json()
    assert updated["steps"] == 2500
    assert updated["distance"] == 750.0
    assert updated["date"] == walk["date"]

    assert client.put(f"/walks/{walk['id']}", json={"duration": -1}).status_code == 400

    r = client.delete(f"/walks/{walk['id']}")
    assert r.json() == {"success": True}
    assert client.get(f"/walks/{walk['id']}").status_code == 404
    assert client.delete(f"/walks/{walk['id']}").json() == {"detail": "Walk not found"}


def test_list_walks_newest_first(client, user_id, post_walk):
    post_walk("2025-03-01T08:00:00Z")
    post_walk("2025-03-05T08:00:00Z")
    post_walk("2025-03-03T08:00:00Z")
    dates = [w["date"][:10] for w in client.get(f"/walks/user/{user_id}").json()]
    assert dates == ["2025-03-05", "2025-03-03", "2025-03-01"]


def test_walks_on_date_is_one_utc_day(client, user_id, post_walk):
    post_walk("2025-03-04T23:59:59Z")
    post_walk("2025-03-05T00:00:00Z")
    post_walk("2025-03-05T23:59:59Z")
    post_walk("2025-03-06T00:00:00Z")
    r = client.get(f"/walks/user/{user_id}/date/2025-03-05")
    assert r.status_code == 200
    assert len(r.json()) == 2


def test_walks_on_date_invalid(client, user_id):
    r = client.get(f"/walks/user/{user_id}/date/someday")
    assert r.status_code == 400
    assert r.json()["detail"] == "Invalid date format: someday"


def test_walks_for_unknown_user(client):
    assert client.get("/walks/user/ghost").status_code == 404
    assert client.get("/walks/user/ghost/stats").status_code == 404


class TestStatsEndpoint:
    def test_week_period_inclusive(self, client, user_id, post_walk, fixed_now):
        post_walk("2025-03-02T00:00:00Z", steps=1000, distance=800.0, duration=10)
        post_walk("2025-03-08T23:59:59.999Z", steps=3000, distance=2400.0, duration=30)
        post_walk("2025-03-09T00:00:00Z", steps=50000)
        r = client.get(f"/walks/user/{user_id}/stats", params={"period": "week"})
        assert r.status_code == 200, r.text
        stats = r.json()
        assert stats["period"] == "week"
        assert stats["startDate"] == "2025-03-02"
        assert stats["endDate"] == "2025-03-08"
        assert stats["walkCount"] == 2
        assert stats["totalSteps"] == 4000
        assert stats["averageSteps"] == 2000
        assert stats["averageDistance"] == 1600.0
        assert stats["averageDuration"] == 20

    def test_month_period(self, client, user_id, post_walk, fixed_now):
        post_walk("2025-03-01T00:00:00Z", steps=100)
        post_walk("2025-03-31T23:59:59Z", steps=200)
        post_walk("2025-04-01T00:00:00Z", steps=400)
        stats = client.get(f"/walks/user/{user_id}/stats", params={"period": "month"}).json()
        assert stats["totalSteps"] == 300
        assert stats["endDate"] == "2025-03-31"

    def test_explicit_range_half_open(self, client, user_id, post_walk):
        post_walk("2025-02-01T00:00:00Z", steps=100)
        post_walk("2025-02-10T00:00:00Z", steps=200)
        stats = client.get(
            f"/walks/user/{user_id}/stats",
            params={"startDate": "2025-02-01", "endDate": "2025-02-10"},
        ).json()
        assert stats["period"] == "custom"
        assert stats["totalSteps"] == 100

    def test_default_trailing_week(self, client, user_id, post_walk, fixed_now):
        post_walk("2025-02-26T23:59:59Z", steps=100)
        post_walk("2025-02-27T00:00:00Z", steps=200)
        post_walk("2025-03-05T11:00:00Z", steps=400)
        stats = client.get(f"/walks/user/{user_id}/stats").json()
        assert stats["period"] == "recent"
        assert stats["totalSteps"] == 600
        assert stats["startDate"] == "2025-02-27"
        assert stats["endDate"] == "2025-03-05"

    def test_no_walks_means_zero_averages(self, client, user_id, fixed_now):
        stats = client.get(f"/walks/user/{user_id}/stats", params={"period": "week"}).json()
        assert stats["walkCount"] == 0
        assert stats["averageSteps"] == 0

    def test_bad_period_and_dates(self, client, user_id):
        r = client.get(f"/walks/user/{user_id}/stats", params={"period": "decade"})
        assert r.status_code == 400
        assert r.json()["detail"] == "Validation failed"

        r = client.get(f"/walks/user/{user_id}/stats", params={"startDate": "x", "endDate": "2025-01-01"})
        assert r.status_code == 400
        assert r.json()["detail"] == "Invalid date format: x"
