"""Global test fixtures and utilities for levelup tests"""
import pytest
from datetime import date, datetime, timezone
from decimal import Decimal

from levelup.gamification.level_curve import LevelCurve
from levelup.models import (
    Completion,
    CompletionStatus,
    Goal,
    GoalCategory,
    GoalDifficulty,
    GoalOrigin,
    GoalPriority,
    GoalStatus,
    ScheduleType,
)
from levelup.storage import JsonStore


# ============================================================================
# User Fixtures
# ============================================================================

@pytest.fixture
def test_user_id():
    """Standard test user ID"""
    return "user-123"


# ============================================================================
# Level Curve Fixtures
# ============================================================================

@pytest.fixture
def geometric_curve():
    """Default curve: 150 EXP for level 1, +15% per level"""
    return LevelCurve(growth_rule="geometric", base_exp=150, scaling_factor=Decimal("1.15"))


@pytest.fixture
def linear_curve():
    """Alternative curve: 2500 EXP for level 1, +100 per level"""
    return LevelCurve(growth_rule="linear", base_exp=2500, linear_increment=100)


# ============================================================================
# Goal & Completion Factories
# ============================================================================

@pytest.fixture
def goal_factory(test_user_id):
    """Factory for goals with sensible defaults"""
    def _create(goal_id="goal-1", **kwargs):
        data = {
            "id": goal_id,
            "user_id": test_user_id,
            "title": f"Goal {goal_id}",
            "status": GoalStatus.ACTIVE,
            "schedule_type": ScheduleType.DAILY,
            "difficulty": GoalDifficulty.MEDIUM,
            "priority": GoalPriority.MEDIUM,
            "origin": GoalOrigin.USER,
        }
        data.update(kwargs)
        return Goal(**data)

    return _create


@pytest.fixture
def completion_factory(test_user_id):
    """Factory for completions on a given date"""
    counter = {"n": 0}

    def _create(goal_id="goal-1", on_date=date(2024, 1, 1), **kwargs):
        counter["n"] += 1
        data = {
            "id": f"completion-{counter['n']}",
            "user_id": test_user_id,
            "goal_id": goal_id,
            "date": on_date,
            "status": CompletionStatus.COMPLETED,
            "exp_awarded": 25,
            "completed_at": datetime.combine(on_date, datetime.min.time(), tzinfo=timezone.utc),
        }
        data.update(kwargs)
        return Completion(**data)

    return _create


@pytest.fixture
def sample_goals(goal_factory):
    """A hard physical goal, an easy mental goal and an uncategorized weekly goal"""
    return [
        goal_factory(
            "run", title="10km Run", difficulty=GoalDifficulty.HARD,
            category=GoalCategory.PHYSICAL, priority=GoalPriority.HIGH,
        ),
        goal_factory(
            "read", title="Read", difficulty=GoalDifficulty.EASY,
            category=GoalCategory.MENTAL, priority=GoalPriority.LOW,
        ),
        goal_factory(
            "review", title="Weekly review", schedule_type=ScheduleType.WEEKLY,
            weekdays=[0], difficulty=GoalDifficulty.MEDIUM,
        ),
    ]


# ============================================================================
# Storage Fixtures
# ============================================================================

@pytest.fixture
def store(tmp_path):
    """JSON store rooted in a temporary directory"""
    return JsonStore(data_path=tmp_path, enforce_unique_daily_completion=True)
