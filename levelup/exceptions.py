"""
Standardized exception hierarchy for levelup
Provides rich context, consistent logging, and user-friendly error messages
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from uuid import uuid4
import logging

logger = logging.getLogger(__name__)


class LevelUpError(Exception):
    """
    Base exception for all levelup errors

    Provides:
    - Automatic timestamping
    - Request ID for tracing
    - User-friendly messages
    - Structured context
    - Automatic logging

    Example:
        raise LevelUpError(
            message="Failed to save goal",
            user_id="u-123",
            operation="save_goal",
            context={"goal_id": "abc-123"}
        )
    """

    def __init__(
        self,
        message: str,
        user_id: Optional[str] = None,
        request_id: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        user_message: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.user_id = user_id
        self.request_id = request_id or str(uuid4())
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        self.user_message = user_message or "An error occurred. Please try again."
        self.timestamp = datetime.now(timezone.utc)

        # Auto-log on creation
        self._log_error()

    def _log_error(self) -> None:
        """Log error with full context"""
        log_data = {
            "error_type": self.__class__.__name__,
            "error_message": self.message,  # 'message' is reserved by logging
            "request_id": self.request_id,
            "user_id": self.user_id,
            "operation": self.operation,
            "error_context": self.context,
            "timestamp": self.timestamp.isoformat()
        }

        if self.cause:
            log_data["cause"] = str(self.cause)
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data, exc_info=self.cause)
        else:
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for display or export"""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "user_message": self.user_message,
            "request_id": self.request_id,
            "timestamp": self.timestamp.isoformat()
        }


def _merge_context(kwargs: Dict[str, Any], **values: Any) -> Dict[str, Any]:
    """Combine subclass context fields with caller-supplied context"""
    context = dict(values)
    context.update(kwargs.pop("context", None) or {})
    return context


# ==========================================
# Validation Errors (Caller Input)
# ==========================================

class ValidationError(LevelUpError):
    """
    Raised when input fails validation

    Examples:
    - Negative or non-finite experience total
    - Weekly goal without weekdays

    Example:
        raise ValidationError(
            message="Experience must be non-negative",
            field="total_exp",
            value=-5
        )
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        self.field = field
        self.value = value
        kwargs.setdefault("user_message", f"Invalid {field}: {message}" if field else message)
        super().__init__(
            message=message,
            context=_merge_context(kwargs, field=field, value=value),
            **kwargs
        )


# ==========================================
# Configuration Errors
# ==========================================

class ConfigurationError(LevelUpError):
    """System configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs
    ):
        self.config_key = config_key
        kwargs.setdefault("user_message", "The application is not properly configured.")
        super().__init__(
            message=message,
            context=_merge_context(kwargs, config_key=config_key),
            **kwargs
        )


# ==========================================
# Storage Errors
# ==========================================

class StorageError(LevelUpError):
    """
    Base class for persistence errors (unreadable or malformed data files)
    """

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("user_message", "We encountered an issue accessing your data. Please try again.")
        super().__init__(message=message, **kwargs)


class RecordNotFoundError(StorageError):
    """Requested record does not exist"""

    def __init__(
        self,
        message: str,
        record_type: Optional[str] = None,
        record_id: Optional[str] = None,
        **kwargs
    ):
        self.record_type = record_type
        self.record_id = record_id
        kwargs.setdefault("user_message", f"{record_type or 'Record'} not found.")
        super().__init__(
            message=message,
            context=_merge_context(kwargs, record_type=record_type, record_id=record_id),
            **kwargs
        )


class GoalNotFoundError(RecordNotFoundError):
    """Goal id is unknown for the user"""

    def __init__(self, goal_id: str, **kwargs):
        super().__init__(
            message=f"Goal {goal_id} not found",
            record_type="Goal",
            record_id=goal_id,
            **kwargs
        )


class DuplicateCompletionError(StorageError):
    """A completed record already exists for this goal and date"""

    def __init__(self, goal_id: str, on_date: Any, **kwargs):
        self.goal_id = goal_id
        self.on_date = on_date
        kwargs.setdefault("user_message", "You already completed this goal today.")
        super().__init__(
            message=f"Goal {goal_id} already completed on {on_date}",
            context=_merge_context(kwargs, goal_id=goal_id, date=str(on_date)),
            **kwargs
        )


# ==========================================
# Authorization
# ==========================================

class AuthorizationError(LevelUpError):
    """User lacks permission for requested operation"""

    def __init__(
        self,
        message: str = "Insufficient permissions",
        resource: Optional[str] = None,
        **kwargs
    ):
        self.resource = resource
        kwargs.setdefault("user_message", f"You don't have permission to modify {resource or 'this resource'}.")
        super().__init__(
            message=message,
            context=_merge_context(kwargs, resource=resource),
            **kwargs
        )


class SystemGoalProtectedError(AuthorizationError):
    """System goals cannot be edited or deleted"""

    def __init__(self, goal_id: str, **kwargs):
        super().__init__(
            message=f"System goal {goal_id} cannot be modified",
            resource="system goals",
            user_message="Built-in goals cannot be edited or deleted.",
            **kwargs
        )


# ==========================================
# Helper Functions
# ==========================================

def wrap_storage_exception(
    error: Exception,
    operation: str,
    user_id: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None
) -> LevelUpError:
    """
    Wrap file and parsing exceptions into our exception hierarchy

    Example:
        try:
            raw = json.loads(path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise wrap_storage_exception(e, operation="load_goals", user_id="u-1")
    """
    return StorageError(
        message=f"{operation} failed: {str(error)}",
        user_id=user_id,
        operation=operation,
        context=context,
        cause=error
    )
