from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class GoalType(str, Enum):
    distance = "distance"
    time = "time"
    frequency = "frequency"


class GoalStatus(str, Enum):
    active = "active"
    completed = "completed"
    paused = "paused"


class GoalBase(BaseModel):
    title: str = Field(min_length=1)
    type: GoalType
    # Zero or negative targets would count as completed before any run
    target: float = Field(gt=0)
    unit: str
    deadline: date
    description: Optional[str] = None


class GoalCreate(GoalBase):
    """Schema for creating a new goal. `start_date` defaults to today."""

    start_date: Optional[date] = None

    @model_validator(mode="after")
    def _window_in_order(self):
        start = self.start_date or date.today()
        if start > self.deadline:
            raise ValueError("start_date must be on or before deadline")
        return self


class GoalUpdate(BaseModel):
    """Schema for updating an existing goal (all fields optional).

    The merged start_date/deadline pair is checked by the router, since
    either side may come from the stored goal.
    """

    title: Optional[str] = Field(default=None, min_length=1)
    type: Optional[GoalType] = None
    target: Optional[float] = Field(default=None, gt=0)
    unit: Optional[str] = None
    start_date: Optional[date] = None
    deadline: Optional[date] = None
    description: Optional[str] = None
    current_value: Optional[float] = Field(default=None, ge=0)
    status: Optional[GoalStatus] = None

    model_config = ConfigDict(extra="ignore")


class GoalRead(BaseModel):
    """A stored goal as returned by storage and the API."""

    id: str
    user_id: str
    title: str
    # Plain string so rows written with an unexpected type still load
    type: str
    target: float
    current_value: float = 0.0
    unit: str
    start_date: date
    deadline: date
    description: Optional[str] = None
    status: GoalStatus = GoalStatus.active
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("status", mode="before")
    @classmethod
    def _known_status(cls, v):
        # Legacy or unexpected values load as active
        value = str(getattr(v, "value", v) or "").strip().lower()
        if value in GoalStatus.__members__:
            return value
        return GoalStatus.active


class RecalculationResult(BaseModel):
    message: str
    processed: int
    updated: int
    skipped_paused: int
    completed: list[str] = []
