from abc import ABC, abstractmethod
from datetime import date
from enum import Enum
from typing import Optional

from runtracker.schemas.activity import ActivityRead
from runtracker.schemas.goal import GoalRead


class StorageError(Exception):
    """Raised when the backing store fails to read or write."""


def plain_values(fields: dict) -> dict:
    """Unwrap enum members so adapters only ever store plain values."""
    return {k: (v.value if isinstance(v, Enum) else v) for k, v in fields.items()}


class Storage(ABC):
    """Persistence port for goals and activities.

    Every call is scoped by the owning user id. Reads return read models;
    lookups of unknown ids return None (or False for deletes).
    """

    # --- goals --- #

    @abstractmethod
    def list_goals(self, user_id: str) -> list[GoalRead]:
        """Newest-created first."""

    @abstractmethod
    def get_goal(self, user_id: str, goal_id: str) -> Optional[GoalRead]:
        pass

    @abstractmethod
    def insert_goal(self, user_id: str, data: dict) -> GoalRead:
        """Store a new goal with current_value 0 and status active."""

    @abstractmethod
    def update_goal(self, user_id: str, goal_id: str, fields: dict) -> Optional[GoalRead]:
        """Overwrite only the given fields."""

    @abstractmethod
    def update_goal_progress(
        self,
        user_id: str,
        goal_id: str,
        current_value: float,
        status: str,
    ) -> None:
        pass

    @abstractmethod
    def delete_goal(self, user_id: str, goal_id: str) -> bool:
        pass

    # --- activities --- #

    @abstractmethod
    def list_activities(
        self,
        user_id: str,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[ActivityRead]:
        """Most recent date first, then most recently created."""

    @abstractmethod
    def list_activities_in_range(
        self,
        user_id: str,
        start: date,
        end: date,
    ) -> list[ActivityRead]:
        """Activities with start <= date <= end."""

    @abstractmethod
    def get_activity(self, user_id: str, activity_id: str) -> Optional[ActivityRead]:
        pass

    @abstractmethod
    def insert_activity(self, user_id: str, data: dict) -> ActivityRead:
        pass

    @abstractmethod
    def update_activity(
        self,
        user_id: str,
        activity_id: str,
        fields: dict,
    ) -> Optional[ActivityRead]:
        """Overwrite only the given fields."""

    @abstractmethod
    def delete_activity(self, user_id: str, activity_id: str) -> bool:
        pass
