"""
Gamification core for Level Up

This module implements the progression and scheduling engine:
- EXP and leveling curve
- Due-today scheduling for recurring goals
- Streak and category statistics
- History aggregation for the calendar view

Everything here is pure: callers pass in goals, completions and the date.
"""

from levelup.gamification.level_curve import LevelCurve, compute_level_info, total_experience
from levelup.gamification.scheduling import is_due_today, due_goals_for_day
from levelup.gamification.stats_system import compute_stats
from levelup.gamification.history import summarize_by_date, heatmap_intensity

__all__ = [
    "LevelCurve",
    "compute_level_info",
    "total_experience",
    "is_due_today",
    "due_goals_for_day",
    "compute_stats",
    "summarize_by_date",
    "heatmap_intensity",
]
