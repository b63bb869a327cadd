from datetime import date, timedelta
import logging
import random

from runtracker.core.config import settings
from runtracker.core.time_utils import compute_pace, shift_months
from runtracker.db import Base, SessionLocal, engine
from runtracker.services.progress import recalculate_and_persist
from runtracker.storage.sql import SqlStorage

logger = logging.getLogger("seed_demo_activities")


def clear_user_data(storage: SqlStorage, user_id: str) -> None:
    """Delete the user's activities and goals so we can reseed cleanly."""
    for activity in storage.list_activities(user_id):
        storage.delete_activity(user_id, activity.id)
    for goal in storage.list_goals(user_id):
        storage.delete_goal(user_id, goal.id)


def seed_demo_activities(storage: SqlStorage, user_id: str) -> int:
    """Insert a 12-week block of demo runs (easy, workout, long)."""
    today = date.today()
    # Go back 11 full weeks + current week (12 total)
    start_day = today - timedelta(weeks=11)

    count = 0
    for week in range(12):
        week_start = start_day + timedelta(weeks=week)

        # Example: Tue easy, Thu tempo, Sun long run
        tue = week_start + timedelta(days=1)
        thu = week_start + timedelta(days=3)
        sun = week_start + timedelta(days=6)

        for d, km, pace, notes in [
            (tue, round(random.uniform(6.0, 10.0), 1), 6.0, "Easy aerobic run."),
            (thu, round(random.uniform(8.0, 14.0), 1), 5.0, "Threshold / tempo workout."),
            (sun, round(random.uniform(16.0, 28.0), 1), 5.75, "Long run on rolling hills."),
        ]:
            # Skip future days
            if d > today:
                continue

            duration = int(round(km * pace))
            storage.insert_activity(
                user_id,
                {
                    "date": d,
                    "distance": km,
                    "duration": duration,
                    "pace": round(compute_pace(duration, km), 2),
                    "location": "",
                    "notes": notes,
                    "images": [],
                },
            )
            count += 1

    return count


def month_bounds(today: date) -> tuple[date, date]:
    """First and last day of the month containing `today`."""
    month_start = today.replace(day=1)
    return month_start, shift_months(month_start, 1) - timedelta(days=1)


def seed_demo_goals(storage: SqlStorage, user_id: str) -> None:
    today = date.today()
    month_start, month_end = month_bounds(today)
    storage.insert_goal(
        user_id,
        {
            "title": "Run 150 km this month",
            "type": "distance",
            "target": 150,
            "unit": "km",
            "start_date": month_start,
            "deadline": month_end,
        },
    )
    storage.insert_goal(
        user_id,
        {
            "title": "36 runs this quarter",
            "type": "frequency",
            "target": 36,
            "unit": "runs",
            "start_date": today - timedelta(weeks=12),
            "deadline": today,
        },
    )
    storage.insert_goal(
        user_id,
        {
            "title": "20 hours on feet",
            "type": "time",
            "target": 1200,
            "unit": "min",
            "start_date": today - timedelta(weeks=8),
            "deadline": today + timedelta(weeks=4),
        },
    )


def main():
    logging.basicConfig(level=settings.log_level)
    Base.metadata.create_all(bind=engine)

    user_id = settings.default_user_id
    db = SessionLocal()
    try:
        storage = SqlStorage(db)
        clear_user_data(storage, user_id)
        seed_demo_goals(storage, user_id)
        count = seed_demo_activities(storage, user_id)
        summary = recalculate_and_persist(storage, user_id)
    finally:
        db.close()

    logger.info(
        "Seeded %d demo activities; %d goals updated, %d completed",
        count, summary.updated, len(summary.completed),
    )


if __name__ == "__main__":
    main()
