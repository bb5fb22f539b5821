"""Derived progression snapshots (never persisted)"""
from datetime import date as dt_date
from pydantic import BaseModel, Field

from levelup.models.completion import Completion


class LevelInfo(BaseModel):
    """Level and progress derived from lifetime EXP"""
    level: int = Field(ge=1)
    total_exp: int
    exp_to_next_level: int  # size of the current level's bar
    current_level_exp: int  # progress since the last level-up
    progress_percentage: float
    level_start_exp: int = 0  # cumulative EXP at which the current level began


class UserStats(BaseModel):
    """Streaks and category counters derived from completion history"""
    total_goals_completed: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    hard_goals_completed: int = 0
    physical_goals_completed: int = 0
    mental_goals_completed: int = 0


class DaySummary(BaseModel):
    """Completed records for one calendar day (history heatmap cell)"""
    date: dt_date
    completions: list[Completion] = Field(default_factory=list)
    total_exp: int = 0
    intensity: int = 0  # 0-4 heatmap bucket

    @property
    def count(self) -> int:
        return len(self.completions)
