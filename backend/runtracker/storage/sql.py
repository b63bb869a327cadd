import json
import logging
import uuid
from contextlib import contextmanager
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from runtracker.core.constants import GOAL_STATUS_ACTIVE
from runtracker.models.activity import Activity
from runtracker.models.goal import Goal
from runtracker.schemas.activity import ActivityRead, normalize_images
from runtracker.schemas.goal import GoalRead
from runtracker.storage.base import Storage, StorageError, plain_values

logger = logging.getLogger(__name__)

_GOAL_FIELDS = {
    "title", "type", "target", "current_value", "unit",
    "start_date", "deadline", "description", "status",
}
_ACTIVITY_FIELDS = {
    "date", "distance", "duration", "pace", "location", "notes", "images",
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SqlStorage(Storage):
    """Storage backed by a SQLAlchemy session (Postgres in production)."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Database error while trying to %s: %s", action, e)
            raise StorageError(f"Failed to {action}") from e

    # --- goals --- #

    def _goal_row(self, user_id: str, goal_id: str) -> Optional[Goal]:
        return (
            self.db.query(Goal)
            .filter(Goal.id == goal_id)
            .filter(Goal.user_id == user_id)
            .first()
        )

    def list_goals(self, user_id: str) -> list[GoalRead]:
        with self._guard("list goals"):
            rows = (
                self.db.query(Goal)
                .filter(Goal.user_id == user_id)
                .order_by(Goal.created_at.desc())
                .all()
            )
            return [GoalRead.model_validate(r) for r in rows]

    def get_goal(self, user_id: str, goal_id: str) -> Optional[GoalRead]:
        with self._guard("fetch goal"):
            row = self._goal_row(user_id, goal_id)
            return GoalRead.model_validate(row) if row else None

    def insert_goal(self, user_id: str, data: dict) -> GoalRead:
        data = plain_values(data)
        now = _now()
        row = Goal(
            id=str(uuid.uuid4()),
            user_id=user_id,
            title=data["title"],
            type=data["type"],
            target=data["target"],
            current_value=0.0,
            unit=data["unit"],
            start_date=data.get("start_date") or date.today(),
            deadline=data["deadline"],
            description=data.get("description") or "",
            status=GOAL_STATUS_ACTIVE,
            created_at=now,
            updated_at=now,
        )
        with self._guard("create goal"):
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            return GoalRead.model_validate(row)

    def update_goal(self, user_id: str, goal_id: str, fields: dict) -> Optional[GoalRead]:
        fields = plain_values(fields)
        with self._guard("update goal"):
            row = self._goal_row(user_id, goal_id)
            if not row:
                return None
            for key, value in fields.items():
                if key in _GOAL_FIELDS:
                    setattr(row, key, value)
            row.updated_at = _now()
            self.db.commit()
            self.db.refresh(row)
            return GoalRead.model_validate(row)

    def update_goal_progress(
        self,
        user_id: str,
        goal_id: str,
        current_value: float,
        status: str,
    ) -> None:
        with self._guard("update goal progress"):
            (
                self.db.query(Goal)
                .filter(Goal.id == goal_id)
                .filter(Goal.user_id == user_id)
                .update(
                    {
                        Goal.current_value: current_value,
                        Goal.status: status,
                        Goal.updated_at: _now(),
                    },
                    synchronize_session=False,
                )
            )
            self.db.commit()

    def delete_goal(self, user_id: str, goal_id: str) -> bool:
        with self._guard("delete goal"):
            row = self._goal_row(user_id, goal_id)
            if not row:
                return False
            self.db.delete(row)
            self.db.commit()
            return True

    # --- activities --- #

    def _activity_row(self, user_id: str, activity_id: str) -> Optional[Activity]:
        return (
            self.db.query(Activity)
            .filter(Activity.id == activity_id)
            .filter(Activity.user_id == user_id)
            .first()
        )

    def list_activities(
        self,
        user_id: str,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[ActivityRead]:
        with self._guard("list activities"):
            query = (
                self.db.query(Activity)
                .filter(Activity.user_id == user_id)
                .order_by(Activity.date.desc(), Activity.created_at.desc())
            )
            if offset:
                query = query.offset(offset)
            if limit is not None:
                query = query.limit(limit)
            return [ActivityRead.model_validate(r) for r in query.all()]

    def list_activities_in_range(
        self,
        user_id: str,
        start: date,
        end: date,
    ) -> list[ActivityRead]:
        with self._guard("list activities in range"):
            rows = (
                self.db.query(Activity)
                .filter(Activity.user_id == user_id)
                .filter(Activity.date >= start)
                .filter(Activity.date <= end)
                .order_by(Activity.date.desc(), Activity.created_at.desc())
                .all()
            )
            return [ActivityRead.model_validate(r) for r in rows]

    def get_activity(self, user_id: str, activity_id: str) -> Optional[ActivityRead]:
        with self._guard("fetch activity"):
            row = self._activity_row(user_id, activity_id)
            return ActivityRead.model_validate(row) if row else None

    def insert_activity(self, user_id: str, data: dict) -> ActivityRead:
        now = _now()
        row = Activity(
            id=str(uuid.uuid4()),
            user_id=user_id,
            date=data["date"],
            distance=data["distance"],
            duration=data["duration"],
            pace=data["pace"],
            location=data.get("location") or "",
            notes=data.get("notes") or "",
            images=json.dumps(normalize_images(data.get("images"))),
            created_at=now,
            updated_at=now,
        )
        with self._guard("create activity"):
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            return ActivityRead.model_validate(row)

    def update_activity(
        self,
        user_id: str,
        activity_id: str,
        fields: dict,
    ) -> Optional[ActivityRead]:
        with self._guard("update activity"):
            row = self._activity_row(user_id, activity_id)
            if not row:
                return None
            for key, value in fields.items():
                if key not in _ACTIVITY_FIELDS:
                    continue
                if key == "images":
                    value = json.dumps(normalize_images(value))
                setattr(row, key, value)
            row.updated_at = _now()
            self.db.commit()
            self.db.refresh(row)
            return ActivityRead.model_validate(row)

    def delete_activity(self, user_id: str, activity_id: str) -> bool:
        with self._guard("delete activity"):
            row = self._activity_row(user_id, activity_id)
            if not row:
                return False
            self.db.delete(row)
            self.db.commit()
            return True
