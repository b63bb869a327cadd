from datetime import date

from conftest import make_activity, make_goal

from runtracker.core.time_utils import compute_pace, month_key, shift_months
from runtracker.services.stats import build_stats, monthly, overall_stats, recent_daily

TODAY = date(2024, 3, 15)


class TestOverall:
    def test_empty(self):
        stats = overall_stats([])
        assert stats.total_runs == 0
        assert stats.best_pace == 0.0

    def test_totals_and_bests(self):
        acts = [
            make_activity(date(2024, 3, 1), distance=10.0, duration=50),
            make_activity(date(2024, 3, 2), distance=5.0, duration=30),
            make_activity(date(2024, 3, 3), distance=21.1, duration=120),
        ]
        stats = overall_stats(acts)
        assert stats.total_runs == 3
        assert stats.total_distance == 36.1
        assert stats.total_time == 200
        assert stats.best_pace == 5.0
        assert stats.longest_run == 21.1
        assert stats.longest_duration == 120

    def test_zero_pace_is_not_best(self):
        acts = [
            make_activity(date(2024, 3, 1), distance=10.0, duration=55),
            make_activity(date(2024, 3, 2), distance=3.0, duration=20, pace=0.0),
        ]
        assert overall_stats(acts).best_pace == 5.5


class TestWindows:
    def test_recent_days_newest_first(self):
        acts = [
            make_activity(date(2024, 3, 14), distance=5.0),
            make_activity(date(2024, 3, 14), distance=3.0, duration=20),
            make_activity(date(2024, 3, 10), distance=8.0),
            make_activity(date(2024, 3, 1), distance=12.0),
        ]
        points = recent_daily(acts, TODAY, days=7)
        assert [(p.date, p.runs, p.distance) for p in points] == [
            (date(2024, 3, 14), 2, 8.0),
            (date(2024, 3, 10), 1, 8.0),
        ]

    def test_monthly_buckets(self):
        acts = [
            make_activity(date(2024, 3, 2), distance=5.0, duration=30),
            make_activity(date(2024, 3, 9), distance=6.0, duration=33),
            make_activity(date(2024, 1, 20), distance=10.0, duration=55),
            make_activity(date(2022, 12, 31), distance=42.2, duration=240),
        ]
        points = monthly(acts, TODAY, months=12)
        assert [(p.month, p.runs, p.distance, p.duration) for p in points] == [
            ("2024-03", 2, 11.0, 63),
            ("2024-01", 1, 10.0, 55),
        ]


def test_build_stats_counts_goal_statuses():
    goals = [
        make_goal(id="a"),
        make_goal(id="b", status="completed"),
        make_goal(id="c", status="completed"),
        make_goal(id="d", status="paused"),
    ]
    stats = build_stats([], goals, today=TODAY)
    assert stats.goals == {"active": 1, "completed": 2, "paused": 1}
    assert stats.recent == []
    assert stats.monthly == []


def test_stats_endpoint(client):
    client.post("/goals", json={
        "title": "Ten k", "type": "distance", "target": 10, "unit": "km",
        "start_date": "2024-01-01", "deadline": "2024-12-31",
    })
    client.post("/activities", json={"date": "2024-02-03", "distance": 12, "duration": 60, "pace": 5})

    r = client.get("/stats")
    assert r.status_code == 200
    body = r.json()
    assert body["overall"]["total_runs"] == 1
    assert body["overall"]["total_distance"] == 12
    assert body["goals"] == {"completed": 1}


class TestTimeUtils:
    def test_compute_pace(self):
        assert compute_pace(55, 10) == 5.5
        assert compute_pace(30, 0) == 0.0

    def test_shift_months_clamps_day(self):
        assert shift_months(date(2024, 3, 31), -1) == date(2024, 2, 29)
        assert shift_months(date(2024, 1, 15), -12) == date(2023, 1, 15)

    def test_month_key(self):
        assert month_key(date(2024, 7, 4)) == "2024-07"
