"""JSON file persistence for goals, completions, settings and profiles

LAYOUT:
    DATA_PATH/<user_id>/profile.json
    DATA_PATH/<user_id>/settings.json
    DATA_PATH/<user_id>/goals.json
    DATA_PATH/<user_id>/completions.json

Records are validated into models on load, so everything above this layer
only ever sees well-formed Goal/Completion values.
"""
import json
import logging
import re
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from levelup import config
from levelup.exceptions import (
    DuplicateCompletionError,
    GoalNotFoundError,
    SystemGoalProtectedError,
    ValidationError,
    wrap_storage_exception,
)
from levelup.gamification.constants import SYSTEM_GOALS
from levelup.gamification.level_curve import exp_for_difficulty
from levelup.models import (
    Completion,
    CompletionStatus,
    Goal,
    GoalOrigin,
    GoalStatus,
    User,
    UserSettings,
)
from levelup.utils.datetime_helpers import now_utc

logger = logging.getLogger(__name__)

GOALS_FILE = "goals.json"
COMPLETIONS_FILE = "completions.json"
SETTINGS_FILE = "settings.json"
PROFILE_FILE = "profile.json"

_goal_list = TypeAdapter(List[Goal])
_completion_list = TypeAdapter(List[Completion])


def system_goal_id(user_id: str, title: str) -> str:
    """Stable, user-specific id for a built-in goal"""
    slug = re.sub(r"\s+", "-", title.lower())
    return f"system-{user_id}-{slug}"


class JsonStore:
    """Per-user JSON document store"""

    def __init__(
        self,
        data_path: Path = config.DATA_PATH,
        enforce_unique_daily_completion: bool = config.ENFORCE_UNIQUE_DAILY_COMPLETION
    ):
        self.data_path = Path(data_path)
        self.enforce_unique_daily_completion = enforce_unique_daily_completion

    def get_user_dir(self, user_id: str) -> Path:
        """Get user's data directory"""
        return self.data_path / user_id

    # ------------------------------------------------------------------
    # File helpers
    # ------------------------------------------------------------------

    def _read_json(self, user_id: str, filename: str, operation: str) -> Optional[Any]:
        filepath = self.get_user_dir(user_id) / filename
        if not filepath.exists():
            return None
        try:
            return json.loads(filepath.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise wrap_storage_exception(
                e, operation=operation, user_id=user_id, context={"file": str(filepath)}
            )

    def _write_json(self, user_id: str, filename: str, payload: Any, operation: str) -> None:
        user_dir = self.get_user_dir(user_id)
        filepath = user_dir / filename
        try:
            user_dir.mkdir(parents=True, exist_ok=True)
            filepath.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as e:
            raise wrap_storage_exception(
                e, operation=operation, user_id=user_id, context={"file": str(filepath)}
            )

    def _validate(self, adapter_or_model, raw: Any, user_id: str, operation: str):
        try:
            if isinstance(adapter_or_model, TypeAdapter):
                return adapter_or_model.validate_python(raw)
            return adapter_or_model.model_validate(raw)
        except PydanticValidationError as e:
            raise wrap_storage_exception(e, operation=operation, user_id=user_id)

    @staticmethod
    def _dump(records: List[BaseModel]) -> List[Dict[str, Any]]:
        return [r.model_dump(mode="json") for r in records]

    # ------------------------------------------------------------------
    # Profile & settings
    # ------------------------------------------------------------------

    async def create_user_profile(
        self,
        user_id: str,
        name: str,
        email: str = "",
        timezone: str = "UTC"
    ) -> User:
        """Create profile, default settings and the built-in goals for a new user"""
        try:
            user = User(id=user_id, name=name, email=email, timezone=timezone)
        except PydanticValidationError as e:
            raise ValidationError(
                message=f"Invalid profile: {e.errors()[0]['msg']}",
                field="profile",
                value=timezone,
                user_id=user_id,
                operation="create_user_profile",
                cause=e,
            )

        self._write_json(user_id, PROFILE_FILE, user.model_dump(mode="json"), "create_user_profile")
        if self._read_json(user_id, SETTINGS_FILE, "create_user_profile") is None:
            self._write_json(
                user_id, SETTINGS_FILE, UserSettings(user_id=user_id).model_dump(mode="json"), "create_user_profile"
            )

        goals = {g.id: g for g in await self.load_goals(user_id)}
        for template in SYSTEM_GOALS:
            goal = Goal(
                id=system_goal_id(user_id, template["title"]),
                user_id=user_id,
                status=GoalStatus.ACTIVE,
                weekdays=[],
                origin=GoalOrigin.SYSTEM,
                **template,
            )
            goals.setdefault(goal.id, goal)
        self._write_json(user_id, GOALS_FILE, self._dump(list(goals.values())), "create_user_profile")

        logger.info(f"Created profile for user {user_id} with {len(SYSTEM_GOALS)} system goals")
        return user

    async def get_user_profile(self, user_id: str) -> Optional[User]:
        """Load a user's profile, or None if the user is unknown"""
        raw = self._read_json(user_id, PROFILE_FILE, "get_user_profile")
        if raw is None:
            return None
        return self._validate(User, raw, user_id, "get_user_profile")

    async def update_user_profile(self, user: User) -> User:
        self._write_json(user.id, PROFILE_FILE, user.model_dump(mode="json"), "update_user_profile")
        logger.info(f"Updated profile for user {user.id}")
        return user

    async def load_settings(self, user_id: str) -> UserSettings:
        """Load settings, creating the defaults when missing"""
        raw = self._read_json(user_id, SETTINGS_FILE, "load_settings")
        if raw is None:
            logger.warning(f"Settings not found for user {user_id}, creating defaults")
            settings = UserSettings(user_id=user_id)
            self._write_json(user_id, SETTINGS_FILE, settings.model_dump(mode="json"), "load_settings")
            return settings
        return self._validate(UserSettings, raw, user_id, "load_settings")

    async def update_settings(self, settings: UserSettings) -> UserSettings:
        self._write_json(settings.user_id, SETTINGS_FILE, settings.model_dump(mode="json"), "update_settings")
        logger.info(f"Updated settings for user {settings.user_id}")
        return settings

    # ------------------------------------------------------------------
    # Goals
    # ------------------------------------------------------------------

    async def load_goals(self, user_id: str) -> List[Goal]:
        raw = self._read_json(user_id, GOALS_FILE, "load_goals")
        if raw is None:
            return []
        return self._validate(_goal_list, raw, user_id, "load_goals")

    async def save_goal(self, user_id: str, goal: Goal) -> Goal:
        """Persist a new user-defined goal"""
        goal = goal.model_copy(update={"user_id": user_id, "origin": GoalOrigin.USER})
        goals = await self.load_goals(user_id)
        goals.append(goal)
        self._write_json(user_id, GOALS_FILE, self._dump(goals), "save_goal")
        logger.info(f"Saved goal {goal.id} ('{goal.title}') for user {user_id}")
        return goal

    async def update_goal(self, user_id: str, goal: Goal) -> Goal:
        """Replace a user-defined goal; system goals are read-only"""
        goals = await self.load_goals(user_id)
        for index, existing in enumerate(goals):
            if existing.id != goal.id:
                continue
            if existing.is_system or goal.is_system:
                raise SystemGoalProtectedError(goal.id, user_id=user_id, operation="update_goal")
            updated = goal.model_copy(update={"user_id": user_id, "created_at": existing.created_at})
            goals[index] = updated
            self._write_json(user_id, GOALS_FILE, self._dump(goals), "update_goal")
            logger.info(f"Updated goal {goal.id} for user {user_id}")
            return updated

        raise GoalNotFoundError(goal.id, user_id=user_id, operation="update_goal")

    async def delete_goal(self, user_id: str, goal_id: str) -> int:
        """
        Delete a user-defined goal and every completion recorded for it

        Returns:
            Number of completions removed with the goal
        """
        goals = await self.load_goals(user_id)
        target = next((g for g in goals if g.id == goal_id), None)
        if target is None:
            raise GoalNotFoundError(goal_id, user_id=user_id, operation="delete_goal")
        if target.is_system:
            raise SystemGoalProtectedError(goal_id, user_id=user_id, operation="delete_goal")

        completions = await self.load_completions(user_id)
        kept = [c for c in completions if c.goal_id != goal_id]
        removed = len(completions) - len(kept)

        self._write_json(user_id, COMPLETIONS_FILE, self._dump(kept), "delete_goal")
        self._write_json(user_id, GOALS_FILE, self._dump([g for g in goals if g.id != goal_id]), "delete_goal")

        logger.info(f"Deleted goal {goal_id} for user {user_id} ({removed} completions removed)")
        return removed

    # ------------------------------------------------------------------
    # Completions
    # ------------------------------------------------------------------

    async def load_completions(self, user_id: str) -> List[Completion]:
        raw = self._read_json(user_id, COMPLETIONS_FILE, "load_completions")
        if raw is None:
            return []
        return self._validate(_completion_list, raw, user_id, "load_completions")

    async def record_completion(
        self,
        user_id: str,
        goal_id: str,
        on_date: date,
        note: Optional[str] = None,
        status: CompletionStatus = CompletionStatus.COMPLETED
    ) -> Completion:
        """
        Record that a goal was completed (or skipped) on a calendar date

        EXP is fixed here from the goal's current difficulty; skipped records
        award nothing.

        Raises:
            GoalNotFoundError: goal_id is unknown for the user
            DuplicateCompletionError: goal already completed on that date
        """
        goals = await self.load_goals(user_id)
        goal = next((g for g in goals if g.id == goal_id), None)
        if goal is None:
            raise GoalNotFoundError(goal_id, user_id=user_id, operation="record_completion")

        completions = await self.load_completions(user_id)
        status = CompletionStatus(status)
        if self.enforce_unique_daily_completion and status == CompletionStatus.COMPLETED:
            if any(c.goal_id == goal_id and c.date == on_date and c.is_completed for c in completions):
                raise DuplicateCompletionError(goal_id, on_date, user_id=user_id, operation="record_completion")

        completion = Completion(
            user_id=user_id,
            goal_id=goal_id,
            date=on_date,
            status=status,
            note=note or None,
            exp_awarded=exp_for_difficulty(goal.difficulty) if status == CompletionStatus.COMPLETED else 0,
            completed_at=now_utc(),
        )
        completions.append(completion)
        self._write_json(user_id, COMPLETIONS_FILE, self._dump(completions), "record_completion")

        logger.info(
            f"Recorded {status.value} for goal {goal_id} on {on_date} "
            f"for user {user_id}: +{completion.exp_awarded} EXP"
        )
        return completion

    async def load_all(self, user_id: str) -> Dict[str, Any]:
        """Goals, completions and settings in one call"""
        return {
            "goals": await self.load_goals(user_id),
            "completions": await self.load_completions(user_id),
            "settings": await self.load_settings(user_id),
        }
