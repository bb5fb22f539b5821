"""Goal models"""
from enum import Enum
from typing import Optional
from datetime import datetime, timezone
from pydantic import BaseModel, Field, field_validator
from uuid import uuid4

from levelup.models.completion import Completion


class GoalStatus(str, Enum):
    """Whether a goal is currently scheduled"""
    ACTIVE = "active"
    PAUSED = "paused"


class ScheduleType(str, Enum):
    """Recurrence kind"""
    DAILY = "daily"
    WEEKLY = "weekly"


class GoalDifficulty(str, Enum):
    """Difficulty tier, drives EXP awards"""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class GoalPriority(str, Enum):
    """Priority tier, drives dashboard ordering"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class GoalOrigin(str, Enum):
    """Who defined the goal; system goals are read-only"""
    USER = "user"
    SYSTEM = "system"


class GoalCategory(str, Enum):
    """Optional grouping used for stats"""
    PHYSICAL = "physical"
    MENTAL = "mental"


class Goal(BaseModel):
    """Recurring goal ("quest") definition"""
    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str
    title: str
    description: str = ""
    status: GoalStatus = GoalStatus.ACTIVE
    schedule_type: ScheduleType = ScheduleType.DAILY
    weekdays: list[int] = Field(default_factory=list)  # 0=Sunday .. 6=Saturday
    difficulty: GoalDifficulty = GoalDifficulty.MEDIUM
    priority: GoalPriority = GoalPriority.MEDIUM
    origin: GoalOrigin = GoalOrigin.USER
    category: Optional[GoalCategory] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Titles must have visible text"""
        if not v.strip():
            raise ValueError("Goal title cannot be empty")
        return v.strip()

    @field_validator('weekdays')
    @classmethod
    def validate_weekdays(cls, v: list[int]) -> list[int]:
        """Ensure weekdays are 0-6 (Sunday=0, Saturday=6), deduplicated and sorted"""
        for day in v:
            if day < 0 or day > 6:
                raise ValueError(
                    f"Invalid weekday: {day}. Weekdays must be 0-6 (Sunday=0, Saturday=6)"
                )
        return sorted(set(v))

    @property
    def is_system(self) -> bool:
        return self.origin == GoalOrigin.SYSTEM


class GoalWithCompletion(BaseModel):
    """A due goal paired with the completion recorded for the day, if any"""
    goal: Goal
    completion: Optional[Completion] = None

    @property
    def is_completed(self) -> bool:
        return self.completion is not None and self.completion.is_completed
