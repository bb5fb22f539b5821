"""Completion models"""
from enum import Enum
from typing import Optional
from datetime import date as dt_date, datetime, timezone
from pydantic import BaseModel, ConfigDict, Field
from uuid import uuid4


class CompletionStatus(str, Enum):
    """Outcome recorded for a goal on a day"""
    COMPLETED = "completed"
    SKIPPED = "skipped"


class Completion(BaseModel):
    """Immutable record that a goal was satisfied (or skipped) on a calendar date"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str
    goal_id: str
    date: dt_date  # calendar day, grouping key
    status: CompletionStatus = CompletionStatus.COMPLETED
    note: Optional[str] = None
    exp_awarded: int = Field(default=0, ge=0)
    completed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_completed(self) -> bool:
        return self.status == CompletionStatus.COMPLETED
