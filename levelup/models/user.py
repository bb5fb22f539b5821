"""User-related Pydantic models"""
from typing import Literal, Optional
from datetime import datetime, time as dt_time, timezone
from pydantic import BaseModel, Field, field_validator
import pytz


class User(BaseModel):
    """User profile information"""
    id: str
    name: str
    email: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    timezone: str = "UTC"  # IANA timezone (e.g., "America/New_York", "Europe/London")

    @field_validator('timezone')
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Ensure valid IANA timezone"""
        try:
            pytz.timezone(v)
        except pytz.exceptions.UnknownTimeZoneError:
            raise ValueError(
                f"Invalid timezone: '{v}'. "
                f"Use IANA timezone (e.g., 'Europe/Stockholm', 'America/New_York')"
            )
        return v


class UserSettings(BaseModel):
    """User preference settings"""
    user_id: str
    theme: Literal["light", "dark"] = "dark"
    allow_freeze_days: bool = False
    daily_reminder_time: Optional[str] = None  # "HH:MM"

    @field_validator('daily_reminder_time')
    @classmethod
    def validate_time_format(cls, v: Optional[str]) -> Optional[str]:
        """Ensure HH:MM format and valid time"""
        if v is None:
            return v
        try:
            dt_time.fromisoformat(v)
        except ValueError:
            raise ValueError(
                f"Invalid time format: '{v}'. Must be HH:MM (e.g., '21:00')"
            )
        return v
