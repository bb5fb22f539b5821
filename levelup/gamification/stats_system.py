"""
Completion Statistics and Streak System

Derives UserStats from a completion history:
- Current streak: consecutive days with a completion, ending today
- Longest streak: longest run of consecutive completion days ever
- Tallies: total, hard-difficulty, physical and mental completions

All date arithmetic is on calendar dates, so daylight-saving changes and the
time of day a goal was completed never break a streak. Several completions on
the same day count once for streaks and individually for tallies.
"""

from datetime import date, timedelta
from typing import Iterable, List, Optional, Set
import logging

from levelup.models import (
    Completion,
    Goal,
    GoalCategory,
    GoalDifficulty,
    UserStats,
)

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


def completed_dates(completions: Iterable[Completion]) -> Set[date]:
    """Distinct calendar dates that have at least one completed record"""
    return {c.date for c in completions if c.is_completed}


def current_streak(dates: Set[date], today: date) -> int:
    """
    Count consecutive days with a completion, walking back from today

    Returns 0 when today itself has no completion.
    """
    streak = 0
    day = today
    while day in dates:
        streak += 1
        day -= ONE_DAY
    return streak


def longest_streak(dates: Iterable[date]) -> int:
    """Longest run of consecutive calendar days (0 when there are none)"""
    ordered: List[date] = sorted(set(dates))
    if not ordered:
        return 0

    longest = 1
    run = 1
    for previous, current in zip(ordered, ordered[1:]):
        if current - previous == ONE_DAY:
            run += 1
        else:
            run = 1
        longest = max(longest, run)
    return longest


def compute_stats(
    goals: Iterable[Goal],
    completions: Iterable[Completion],
    today: Optional[date] = None
) -> UserStats:
    """
    Compute streaks and category counters

    Args:
        goals: Goal catalog used to resolve each completion's goal
        completions: Full completion history
        today: Local calendar day the current streak ends on (captured once;
            defaults to the local date)

    Returns:
        UserStats, all zeros when there are no goals or no completions.
        Completions whose goal is missing count toward the total only.
    """
    if today is None:
        today = date.today()

    goals_by_id = {g.id: g for g in goals}
    completed = [c for c in completions if c.is_completed]

    if not goals_by_id or not completed:
        return UserStats()

    dates = completed_dates(completed)

    hard = physical = mental = 0
    unresolved = 0
    for completion in completed:
        goal = goals_by_id.get(completion.goal_id)
        if goal is None:
            unresolved += 1
            continue
        if goal.difficulty == GoalDifficulty.HARD:
            hard += 1
        if goal.category == GoalCategory.PHYSICAL:
            physical += 1
        elif goal.category == GoalCategory.MENTAL:
            mental += 1

    if unresolved:
        logger.debug(f"{unresolved} completions reference goals that no longer exist")

    return UserStats(
        total_goals_completed=len(completed),
        current_streak=current_streak(dates, today),
        longest_streak=longest_streak(dates),
        hard_goals_completed=hard,
        physical_goals_completed=physical,
        mental_goals_completed=mental,
    )
