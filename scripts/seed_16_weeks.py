#!/usr/bin/env python3
"""
Seed 16 weeks of training data into the Run Tracker API.

Pattern per week (Mon–Sun):
  - Mon: easy
  - Tue: easy
  - Wed: workout ("marathon workout")
  - Thu: easy
  - Fri: easy
  - Sat: long run
  - Sun: rest

Weekly volume plan (16 weeks total, km):
  Build from 50 → 110 by week 12, hold 110 for 2 weeks, then taper.
  [50,55,60,65,70,75,80,85,90,95,100,110,110,110,80,55]

One distance goal per month of the block is created as well; every
activity POST recalculates goal progress on the server.

Usage examples:
  - Against a local backend:
      python scripts/seed_16_weeks.py --base-url http://localhost:8000
  - Against a port-forwarded backend:
      kubectl -n runtracker port-forward svc/runtracker-backend 8080:80 &
      python scripts/seed_16_weeks.py --base-url http://localhost:8080
"""

from __future__ import annotations

import argparse
import datetime as dt
import logging
from typing import List, Tuple

import httpx


WEEKLY_KM = [50, 55, 60, 65, 70, 75, 80, 85, 90, 95, 100, 110, 110, 110, 80, 55]

logger = logging.getLogger("seed_16_weeks")


def monday_of_week(d: dt.date) -> dt.date:
    return d - dt.timedelta(days=d.weekday())


def round1(x: float) -> float:
    return round(x + 1e-9, 1)


def split_weekly_dist(total: float) -> Tuple[float, float, List[float]]:
    """Return long_run, workout, list_of_four_easy distances summing to total."""
    long_run = round1(total * 0.30)
    workout = round1(total * 0.20)
    easy_total = round1(total - long_run - workout)
    # Split easy into 4 roughly equal parts
    base = round1(easy_total / 4.0)
    easies = [base, base, base, base]
    # Fix rounding drift on the last day
    diff = round1(easy_total - round1(sum(easies)))
    easies[-1] = round1(easies[-1] + diff)
    # Safety: ensure non-negative
    easies = [max(0.1, e) for e in easies]
    return long_run, workout, easies


def post_json(client: httpx.Client, path: str, payload: dict) -> dict:
    r = client.post(path, json=payload)
    if r.status_code >= 300:
        raise RuntimeError(f"{path} -> HTTP {r.status_code}: {r.text}")
    return r.json()


def seed_week(client: httpx.Client, week_start: dt.date, target_km: float) -> None:
    long_km, workout_km, easies = split_weekly_dist(target_km)

    # Days mapping: (label, km, pace min/km)
    days = {
        0: ("Easy", easies[0], 5.75),
        1: ("Easy", easies[1], 5.75),
        2: ("Marathon Workout", workout_km, 4.5),
        3: ("Easy", easies[2], 5.75),
        4: ("Easy", easies[3], 5.75),
        5: ("Long Run", long_km, 5.25),
        # 6=Sunday off
    }

    for dow, (label, km, pace) in days.items():
        run_date = week_start + dt.timedelta(days=dow)
        payload = {
            "date": run_date.isoformat(),
            "distance": round1(km),
            "duration": int(round(km * pace)),
            "pace": pace,
            "notes": f"seed: {label}",
        }
        post_json(client, "/activities", payload)


def seed_monthly_goals(client: httpx.Client, first: dt.date, last: dt.date) -> None:
    month = first.replace(day=1)
    while month <= last:
        next_month = (month + dt.timedelta(days=32)).replace(day=1)
        post_json(
            client,
            "/goals",
            {
                "title": f"{month:%B %Y} volume",
                "type": "distance",
                "target": 300,
                "unit": "km",
                "start_date": month.isoformat(),
                "deadline": (next_month - dt.timedelta(days=1)).isoformat(),
            },
        )
        month = next_month


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed 16 weeks of activities and monthly goals")
    ap.add_argument("--base-url", required=True, help="API base URL (e.g., http://localhost:8000)")
    args = ap.parse_args()

    logging.basicConfig(level=logging.INFO)

    today = dt.date.today()
    this_monday = monday_of_week(today)

    # Generate 16 week starts ending with current week
    week_starts = [this_monday - dt.timedelta(weeks=15 - i) for i in range(16)]

    with httpx.Client(base_url=args.base_url.rstrip("/"), timeout=15) as client:
        # Goals first so every activity POST updates them
        seed_monthly_goals(client, week_starts[0], week_starts[-1] + dt.timedelta(days=6))
        for ws, km in zip(week_starts, WEEKLY_KM):
            seed_week(client, ws, float(km))
        summary = post_json(client, "/goals/recalculate", {})

    logger.info("Seed complete: 16 weeks created, %s goals processed.", summary["processed"])


if __name__ == "__main__":
    main()
