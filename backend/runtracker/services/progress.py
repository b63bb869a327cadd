"""Goal progress recalculation.

A goal's `current_value` is the aggregate of every activity whose date
falls inside the goal window [start_date, deadline] (inclusive, calendar
days):

  - distance:  sum of activity distance (km)
  - time:      sum of activity duration (minutes)
  - frequency: number of activities

and its status is `completed` once that value reaches the target,
`active` otherwise. Paused goals are left alone until a request changes
their status explicitly.

Everything here except `recalculate_and_persist` / `recalculate_safely`
is pure.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, Optional

from runtracker.core.constants import (
    GOAL_STATUS_ACTIVE,
    GOAL_STATUS_COMPLETED,
    GOAL_STATUS_PAUSED,
    GOAL_TYPE_DISTANCE,
    GOAL_TYPE_FREQUENCY,
    GOAL_TYPE_TIME,
)
from runtracker.core.time_utils import as_date
from runtracker.schemas.activity import ActivityRead
from runtracker.schemas.goal import GoalRead
from runtracker.storage.base import Storage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GoalProgress:
    current_value: float
    status: str


@dataclass
class RecalculationSummary:
    processed: int = 0
    updated: int = 0
    skipped_paused: int = 0
    # goal ids that moved into "completed" during this pass
    completed: list[str] = field(default_factory=list)


def _enum_value(value) -> str:
    return getattr(value, "value", value)


def in_window(activity: ActivityRead, goal: GoalRead) -> bool:
    """True when the activity's day lies in [start_date, deadline]."""
    day = as_date(activity.date)
    return as_date(goal.start_date) <= day <= as_date(goal.deadline)


def aggregate(goal_type: str, activities: Iterable[ActivityRead]) -> float:
    """Reduce activities to a single progress value for a goal type.

    Unknown types aggregate to 0 rather than raising.
    """
    goal_type = _enum_value(goal_type)
    if goal_type == GOAL_TYPE_DISTANCE:
        return math.fsum(a.distance or 0 for a in activities)
    if goal_type == GOAL_TYPE_TIME:
        return float(math.fsum(a.duration or 0 for a in activities))
    if goal_type == GOAL_TYPE_FREQUENCY:
        return float(sum(1 for _ in activities))
    return 0.0


def recalculate_one(goal: GoalRead, activities: Iterable[ActivityRead]) -> GoalProgress:
    """Compute (current_value, status) for one goal from the user's activities."""
    relevant = [a for a in activities if in_window(a, goal)]
    value = aggregate(goal.type, relevant)
    status = GOAL_STATUS_COMPLETED if value >= goal.target else GOAL_STATUS_ACTIVE
    return GoalProgress(current_value=value, status=status)


def recalculate_and_persist(storage: Storage, user_id: str) -> RecalculationSummary:
    """Recompute every non-paused goal of a user and store what changed.

    Goals and activities are read once up front, so a failed read aborts
    before anything is written. A failed write stops the pass; goals
    written before it keep their new values.
    """
    goals = storage.list_goals(user_id)
    activities = storage.list_activities(user_id)

    summary = RecalculationSummary()
    for goal in goals:
        stored_status = _enum_value(goal.status)
        if stored_status == GOAL_STATUS_PAUSED:
            summary.skipped_paused += 1
            continue

        summary.processed += 1
        progress = recalculate_one(goal, activities)
        if progress.current_value == goal.current_value and progress.status == stored_status:
            continue

        storage.update_goal_progress(
            user_id,
            goal.id,
            progress.current_value,
            progress.status,
        )
        summary.updated += 1
        logger.debug(
            "Goal %s (%s): %s/%s %s -> %s",
            goal.id, goal.title, progress.current_value, goal.target,
            goal.unit, progress.status,
        )
        if progress.status == GOAL_STATUS_COMPLETED and stored_status != GOAL_STATUS_COMPLETED:
            summary.completed.append(goal.id)
            logger.info("Goal completed: %s (%s)", goal.title, goal.id)

    logger.info(
        "Recalculated goals for user %s: %d processed, %d updated, %d paused skipped",
        user_id, summary.processed, summary.updated, summary.skipped_paused,
    )
    return summary


def recalculate_safely(storage: Storage, user_id: str) -> Optional[RecalculationSummary]:
    """Run a recalculation pass as a side effect of another write.

    Failures are logged and swallowed so the caller's own write still
    reports success; the next pass converges the goals.
    """
    try:
        return recalculate_and_persist(storage, user_id)
    except Exception:
        logger.exception("Goal progress recalculation failed for user %s", user_id)
        return None
