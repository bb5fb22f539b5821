"""
Goal scheduling

Decides which goals are due on a calendar date. The caller always supplies
the date (the user's local day), so nothing here reads the clock.
"""

from datetime import date
from typing import Iterable, List, Optional

from levelup.gamification.constants import PRIORITY_ORDER
from levelup.models import (
    Completion,
    Goal,
    GoalOrigin,
    GoalPriority,
    GoalStatus,
    GoalWithCompletion,
    ScheduleType,
)


def weekday_index(day: date) -> int:
    """Weekday with Sunday=0 .. Saturday=6"""
    return day.isoweekday() % 7


def is_due_today(goal: Goal, today: date) -> bool:
    """
    Whether the goal's schedule requires action on `today`

    Paused goals are never due. Daily goals are due every day; weekly goals
    only on their listed weekdays. Unknown schedule kinds are not due.
    """
    if goal.status != GoalStatus.ACTIVE:
        return False

    if goal.schedule_type == ScheduleType.DAILY:
        return True
    if goal.schedule_type == ScheduleType.WEEKLY:
        return weekday_index(today) in goal.weekdays
    return False


def due_goals_for_day(
    goals: Iterable[Goal],
    completions: Iterable[Completion],
    today: date,
    origin: Optional[GoalOrigin] = None
) -> List[GoalWithCompletion]:
    """
    Goals due on `today`, each paired with its completion for that day

    Args:
        goals: Goal catalog
        completions: Completion history (any order)
        today: Calendar day to evaluate
        origin: Restrict to user or system goals

    Returns:
        Due goals sorted High -> Medium -> Low priority, catalog order kept
        within a tier
    """
    # First record of the day per goal; a completed record beats a skipped one
    todays = {}
    for completion in completions:
        if completion.date != today:
            continue
        current = todays.get(completion.goal_id)
        if current is None or (completion.is_completed and not current.is_completed):
            todays[completion.goal_id] = completion

    due = [
        GoalWithCompletion(goal=goal, completion=todays.get(goal.id))
        for goal in goals
        if (origin is None or goal.origin == origin) and is_due_today(goal, today)
    ]
    due.sort(key=lambda item: PRIORITY_ORDER.get(item.goal.priority, PRIORITY_ORDER[GoalPriority.MEDIUM]))
    return due
