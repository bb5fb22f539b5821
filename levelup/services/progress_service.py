"""
ProgressService - Session State and Progression Logic

Owns the current user's loaded goals, completions and settings and composes
the pure gamification core (levels, scheduling, stats, history) over them.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from levelup.exceptions import GoalNotFoundError, SystemGoalProtectedError, ValidationError
from levelup.gamification import (
    LevelCurve,
    compute_level_info,
    compute_stats,
    due_goals_for_day,
    summarize_by_date,
    total_experience,
)
from levelup.gamification.history import completions_in_year
from levelup.models import (
    Completion,
    DaySummary,
    Goal,
    GoalOrigin,
    GoalWithCompletion,
    LevelInfo,
    ScheduleType,
    User,
    UserSettings,
    UserStats,
)
from levelup.services.data_export import export_completions_csv
from levelup.storage import JsonStore
from levelup.utils.datetime_helpers import today_in_timezone

logger = logging.getLogger(__name__)


class ProgressService:
    """
    Service for one signed-in user's progression.

    Responsibilities:
    - Loading and caching the user's goals, completions and settings
    - Goal CRUD (system goals are read-only)
    - Recording completions and reporting level-ups
    - Level, stats, due-today and history views
    """

    def __init__(
        self,
        store: JsonStore,
        user_id: str,
        timezone: Optional[str] = None,
        curve: Optional[LevelCurve] = None
    ):
        """
        Initialize ProgressService.

        Args:
            store: Persistence collaborator
            user_id: Signed-in user
            timezone: IANA timezone for the user's day; taken from the
                profile on load() when not given
            curve: Level curve (configured default when None)
        """
        self.store = store
        self.user_id = user_id
        self.timezone = timezone
        self.curve = curve
        self.profile: Optional[User] = None
        self.settings: Optional[UserSettings] = None
        self._goals: List[Goal] = []
        self._completions: List[Completion] = []
        logger.debug(f"ProgressService initialized for user {user_id}")

    # ------------------------------------------------------------------
    # Session state
    # ------------------------------------------------------------------

    async def load(self) -> None:
        """(Re)load everything for the user from the store"""
        self.profile = await self.store.get_user_profile(self.user_id)
        if self.timezone is None and self.profile is not None:
            self.timezone = self.profile.timezone

        data = await self.store.load_all(self.user_id)
        self._goals = data["goals"]
        self._completions = data["completions"]
        self.settings = data["settings"]

        logger.info(
            f"Loaded user {self.user_id}: {len(self._goals)} goals, "
            f"{len(self._completions)} completions"
        )

    @property
    def goals(self) -> List[Goal]:
        return list(self._goals)

    @property
    def user_goals(self) -> List[Goal]:
        return [g for g in self._goals if g.origin == GoalOrigin.USER]

    @property
    def system_goals(self) -> List[Goal]:
        return [g for g in self._goals if g.origin == GoalOrigin.SYSTEM]

    @property
    def completions(self) -> List[Completion]:
        return list(self._completions)

    def today(self) -> date:
        """Current calendar date in the user's timezone"""
        return today_in_timezone(self.timezone)

    def get_goal(self, goal_id: str) -> Goal:
        for goal in self._goals:
            if goal.id == goal_id:
                return goal
        raise GoalNotFoundError(goal_id, user_id=self.user_id, operation="get_goal")

    # ------------------------------------------------------------------
    # Goals
    # ------------------------------------------------------------------

    async def add_goal(self, title: str, **fields: Any) -> Goal:
        """
        Create a user-defined goal.

        Args:
            title: Goal title
            **fields: Any other Goal field (description, schedule_type,
                weekdays, difficulty, priority, category, status)

        Raises:
            ValidationError: invalid field values, or a weekly goal with no weekdays
        """
        try:
            goal = Goal(user_id=self.user_id, title=title, **fields)
        except PydanticValidationError as e:
            raise ValidationError(
                message=f"Invalid goal: {e.errors()[0]['msg']}",
                field="goal",
                value=title,
                user_id=self.user_id,
                operation="add_goal",
                cause=e,
            )
        self._check_schedule(goal, "add_goal")

        saved = await self.store.save_goal(self.user_id, goal)
        self._goals.append(saved)
        return saved

    async def update_goal(self, goal: Goal) -> Goal:
        """Replace a user-defined goal"""
        existing = self.get_goal(goal.id)
        if existing.is_system or goal.is_system:
            raise SystemGoalProtectedError(goal.id, user_id=self.user_id, operation="update_goal")
        self._check_schedule(goal, "update_goal")

        updated = await self.store.update_goal(self.user_id, goal)
        self._goals = [updated if g.id == updated.id else g for g in self._goals]
        return updated

    async def delete_goal(self, goal_id: str) -> None:
        """Delete a user-defined goal together with its completions"""
        if self.get_goal(goal_id).is_system:
            raise SystemGoalProtectedError(goal_id, user_id=self.user_id, operation="delete_goal")

        await self.store.delete_goal(self.user_id, goal_id)
        self._goals = [g for g in self._goals if g.id != goal_id]
        self._completions = [c for c in self._completions if c.goal_id != goal_id]

    def _check_schedule(self, goal: Goal, operation: str) -> None:
        if goal.schedule_type == ScheduleType.WEEKLY and not goal.weekdays:
            raise ValidationError(
                message="Weekly goals need at least one weekday",
                field="weekdays",
                value=goal.weekdays,
                user_id=self.user_id,
                operation=operation,
            )

    # ------------------------------------------------------------------
    # Completions
    # ------------------------------------------------------------------

    async def complete_goal(
        self,
        goal_id: str,
        note: Optional[str] = None,
        on_date: Optional[date] = None
    ) -> Dict[str, Any]:
        """
        Mark a goal complete for the day and report progression.

        Returns:
            {
                'completion': Completion,
                'exp_awarded': int,
                'new_total_exp': int,
                'old_level': int,
                'new_level': int,
                'leveled_up': bool,
                'level_info': LevelInfo
            }
        """
        self.get_goal(goal_id)
        if on_date is None:
            on_date = self.today()

        old_level = self.level_info().level
        completion = await self.store.record_completion(self.user_id, goal_id, on_date, note=note)
        self._completions.append(completion)

        level_info = self.level_info()
        leveled_up = level_info.level > old_level
        if leveled_up:
            logger.info(f"User {self.user_id} leveled up from {old_level} to {level_info.level}!")

        return {
            "completion": completion,
            "exp_awarded": completion.exp_awarded,
            "new_total_exp": level_info.total_exp,
            "old_level": old_level,
            "new_level": level_info.level,
            "leveled_up": leveled_up,
            "level_info": level_info,
        }

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def level_info(self) -> LevelInfo:
        return compute_level_info(total_experience(self._completions), self.curve)

    def stats(self, today: Optional[date] = None) -> UserStats:
        return compute_stats(self._goals, self._completions, today or self.today())

    def due_today(self, today: Optional[date] = None) -> Dict[str, List[GoalWithCompletion]]:
        """Due goals for the day, split into user and system lists"""
        today = today or self.today()
        return {
            "user": due_goals_for_day(self._goals, self._completions, today, origin=GoalOrigin.USER),
            "system": due_goals_for_day(self._goals, self._completions, today, origin=GoalOrigin.SYSTEM),
        }

    def history(self, year: Optional[int] = None) -> Dict[date, DaySummary]:
        summaries = summarize_by_date(self._completions)
        if year is not None:
            summaries = completions_in_year(summaries, year)
        return summaries

    def export_csv(self) -> str:
        return export_completions_csv(self._goals, self._completions)

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    async def update_settings(self, **changes: Any) -> UserSettings:
        """Apply setting changes (theme, allow_freeze_days, daily_reminder_time)"""
        current = self.settings or await self.store.load_settings(self.user_id)
        try:
            settings = UserSettings.model_validate(
                {**current.model_dump(), **changes, "user_id": self.user_id}
            )
        except PydanticValidationError as e:
            raise ValidationError(
                message=f"Invalid settings: {e.errors()[0]['msg']}",
                field="settings",
                value=changes,
                user_id=self.user_id,
                operation="update_settings",
                cause=e,
            )
        self.settings = await self.store.update_settings(settings)
        return self.settings
