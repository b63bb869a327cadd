"""Derived statistics over a user's activities and goals."""

import math
from collections import Counter
from datetime import date, timedelta
from typing import Iterable, Optional

from runtracker.core.time_utils import as_date, month_key, shift_months
from runtracker.schemas.activity import ActivityRead
from runtracker.schemas.goal import GoalRead
from runtracker.schemas.stats import DailyPoint, MonthlyPoint, OverallStats, StatsRead


def overall_stats(activities: list[ActivityRead]) -> OverallStats:
    total_runs = len(activities)
    if total_runs == 0:
        return OverallStats(
            total_runs=0,
            total_distance=0.0,
            total_time=0,
            avg_pace=0.0,
            best_pace=0.0,
            longest_run=0.0,
            longest_duration=0,
        )

    # Zero pace means "not recorded", never the best pace
    paces = [a.pace for a in activities if a.pace and a.pace > 0]

    return OverallStats(
        total_runs=total_runs,
        total_distance=round(math.fsum(a.distance for a in activities), 2),
        total_time=sum(a.duration for a in activities),
        avg_pace=round(math.fsum(a.pace for a in activities) / total_runs, 2),
        best_pace=round(min(paces), 2) if paces else 0.0,
        longest_run=round(max(a.distance for a in activities), 2),
        longest_duration=max(a.duration for a in activities),
    )


def goal_status_counts(goals: Iterable[GoalRead]) -> dict[str, int]:
    counts = Counter(getattr(g.status, "value", g.status) or "active" for g in goals)
    return dict(counts)


def recent_daily(
    activities: list[ActivityRead],
    today: date,
    days: int = 7,
) -> list[DailyPoint]:
    """Per-day run count and distance since `today - days`, newest first."""
    cutoff = today - timedelta(days=days)
    runs: Counter = Counter()
    distance: dict[date, float] = {}
    for a in activities:
        day = as_date(a.date)
        if day < cutoff:
            continue
        runs[day] += 1
        distance[day] = distance.get(day, 0.0) + (a.distance or 0.0)

    return [
        DailyPoint(date=day, runs=runs[day], distance=round(distance[day], 2))
        for day in sorted(runs, reverse=True)
    ]


def monthly(
    activities: list[ActivityRead],
    today: date,
    months: int = 12,
) -> list[MonthlyPoint]:
    """Per-month totals since `today - months`, newest month first."""
    cutoff = shift_months(today, -months)
    buckets: dict[str, dict] = {}
    for a in activities:
        day = as_date(a.date)
        if day < cutoff:
            continue
        key = month_key(day)
        bucket = buckets.setdefault(key, {"runs": 0, "distance": 0.0, "duration": 0})
        bucket["runs"] += 1
        bucket["distance"] += a.distance or 0.0
        bucket["duration"] += a.duration or 0

    return [
        MonthlyPoint(
            month=key,
            runs=b["runs"],
            distance=round(b["distance"], 2),
            duration=b["duration"],
        )
        for key, b in sorted(buckets.items(), reverse=True)
    ]


def build_stats(
    activities: list[ActivityRead],
    goals: list[GoalRead],
    today: Optional[date] = None,
    recent_days: int = 7,
    monthly_window: int = 12,
) -> StatsRead:
    today = today or date.today()
    return StatsRead(
        overall=overall_stats(activities),
        goals=goal_status_counts(goals),
        recent=recent_daily(activities, today, recent_days),
        monthly=monthly(activities, today, monthly_window),
    )
