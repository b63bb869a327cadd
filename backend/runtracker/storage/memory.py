import itertools
import json
import threading
import uuid
from datetime import date, datetime, timezone
from typing import Optional

from runtracker.core.constants import GOAL_STATUS_ACTIVE
from runtracker.schemas.activity import ActivityRead, normalize_images
from runtracker.schemas.goal import GoalRead
from runtracker.storage.base import Storage, plain_values

_GOAL_FIELDS = {
    "title", "type", "target", "current_value", "unit",
    "start_date", "deadline", "description", "status",
}
_ACTIVITY_FIELDS = {
    "date", "distance", "duration", "pace", "location", "notes", "images",
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MemoryStorage(Storage):
    """Process-local storage.

    Rows are kept as plain dicts shaped like the SQL tables (images as a
    JSON string) and pass through the same read models on the way out.
    One instance is shared by every request when STORAGE_BACKEND=memory,
    so all access goes through a lock.
    """

    def __init__(self):
        self.goals: dict[str, dict] = {}
        self.activities: dict[str, dict] = {}
        # insertion order breaks created_at ties
        self._seq = itertools.count()
        self._lock = threading.RLock()

    # --- goals --- #

    def _goal_row(self, user_id: str, goal_id: str) -> Optional[dict]:
        row = self.goals.get(goal_id)
        if row is None or row["user_id"] != user_id:
            return None
        return row

    def list_goals(self, user_id: str) -> list[GoalRead]:
        with self._lock:
            rows = [dict(r) for r in self.goals.values() if r["user_id"] == user_id]
        rows.sort(key=lambda r: r["_seq"], reverse=True)
        return [GoalRead.model_validate(r) for r in rows]

    def get_goal(self, user_id: str, goal_id: str) -> Optional[GoalRead]:
        with self._lock:
            row = self._goal_row(user_id, goal_id)
            return GoalRead.model_validate(row) if row else None

    def insert_goal(self, user_id: str, data: dict) -> GoalRead:
        data = plain_values(data)
        now = _now()
        with self._lock:
            row = {
                "id": str(uuid.uuid4()),
                "user_id": user_id,
                "title": data["title"],
                "type": data["type"],
                "target": data["target"],
                "current_value": 0.0,
                "unit": data["unit"],
                "start_date": data.get("start_date") or date.today(),
                "deadline": data["deadline"],
                "description": data.get("description") or "",
                "status": GOAL_STATUS_ACTIVE,
                "created_at": now,
                "updated_at": now,
                "_seq": next(self._seq),
            }
            self.goals[row["id"]] = row
            return GoalRead.model_validate(row)

    def update_goal(self, user_id: str, goal_id: str, fields: dict) -> Optional[GoalRead]:
        with self._lock:
            row = self._goal_row(user_id, goal_id)
            if row is None:
                return None
            for key, value in plain_values(fields).items():
                if key in _GOAL_FIELDS:
                    row[key] = value
            row["updated_at"] = _now()
            return GoalRead.model_validate(row)

    def update_goal_progress(
        self,
        user_id: str,
        goal_id: str,
        current_value: float,
        status: str,
    ) -> None:
        with self._lock:
            row = self._goal_row(user_id, goal_id)
            if row is None:
                return
            row["current_value"] = current_value
            row["status"] = status
            row["updated_at"] = _now()

    def delete_goal(self, user_id: str, goal_id: str) -> bool:
        with self._lock:
            if self._goal_row(user_id, goal_id) is None:
                return False
            del self.goals[goal_id]
            return True

    # --- activities --- #

    def _activity_row(self, user_id: str, activity_id: str) -> Optional[dict]:
        row = self.activities.get(activity_id)
        if row is None or row["user_id"] != user_id:
            return None
        return row

    def _sorted_activities(self, rows: list[dict]) -> list[dict]:
        return sorted(rows, key=lambda r: (r["date"], r["_seq"]), reverse=True)

    def list_activities(
        self,
        user_id: str,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[ActivityRead]:
        with self._lock:
            rows = [dict(r) for r in self.activities.values() if r["user_id"] == user_id]
        rows = self._sorted_activities(rows)
        end = None if limit is None else offset + limit
        return [ActivityRead.model_validate(r) for r in rows[offset:end]]

    def list_activities_in_range(
        self,
        user_id: str,
        start: date,
        end: date,
    ) -> list[ActivityRead]:
        with self._lock:
            rows = [
                dict(r) for r in self.activities.values()
                if r["user_id"] == user_id and start <= r["date"] <= end
            ]
        return [ActivityRead.model_validate(r) for r in self._sorted_activities(rows)]

    def get_activity(self, user_id: str, activity_id: str) -> Optional[ActivityRead]:
        with self._lock:
            row = self._activity_row(user_id, activity_id)
            return ActivityRead.model_validate(row) if row else None

    def insert_activity(self, user_id: str, data: dict) -> ActivityRead:
        now = _now()
        with self._lock:
            row = {
                "id": str(uuid.uuid4()),
                "user_id": user_id,
                "date": data["date"],
                "distance": data["distance"],
                "duration": data["duration"],
                "pace": data["pace"],
                "location": data.get("location") or "",
                "notes": data.get("notes") or "",
                "images": json.dumps(normalize_images(data.get("images"))),
                "created_at": now,
                "updated_at": now,
                "_seq": next(self._seq),
            }
            self.activities[row["id"]] = row
            return ActivityRead.model_validate(row)

    def update_activity(
        self,
        user_id: str,
        activity_id: str,
        fields: dict,
    ) -> Optional[ActivityRead]:
        with self._lock:
            row = self._activity_row(user_id, activity_id)
            if row is None:
                return None
            for key, value in fields.items():
                if key not in _ACTIVITY_FIELDS:
                    continue
                if key == "images":
                    value = json.dumps(normalize_images(value))
                row[key] = value
            row["updated_at"] = _now()
            return ActivityRead.model_validate(row)

    def delete_activity(self, user_id: str, activity_id: str) -> bool:
        with self._lock:
            if self._activity_row(user_id, activity_id) is None:
                return False
            del self.activities[activity_id]
            return True
