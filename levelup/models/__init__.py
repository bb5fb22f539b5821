"""Typed records shared by the core, the store and the service layer"""
from levelup.models.completion import Completion, CompletionStatus
from levelup.models.goal import (
    Goal,
    GoalCategory,
    GoalDifficulty,
    GoalOrigin,
    GoalPriority,
    GoalStatus,
    GoalWithCompletion,
    ScheduleType,
)
from levelup.models.progress import DaySummary, LevelInfo, UserStats
from levelup.models.user import User, UserSettings

__all__ = [
    "Completion",
    "CompletionStatus",
    "DaySummary",
    "Goal",
    "GoalCategory",
    "GoalDifficulty",
    "GoalOrigin",
    "GoalPriority",
    "GoalStatus",
    "GoalWithCompletion",
    "LevelInfo",
    "ScheduleType",
    "User",
    "UserSettings",
    "UserStats",
]
