"""
Exception hierarchy for the daily tracker.

The activation engine itself never raises for malformed data; these are
raised by the layers around it:
- TrackerError: base class for every known error
- ConfigError: runtime configuration problems
- StateError: unreadable or corrupted repository files
- TaskNotFoundError: a task id the caller asked for does not exist
- RuleValidationError: condition rules rejected before being persisted
"""
from typing import List, Optional


class TrackerError(Exception):
    """Base class for known tracker errors.

    Catching this handles every expected failure.
    """

    def __init__(self, message: str, hint: Optional[str] = None):
        """
        Args:
            message: error description
            hint: suggestion shown to the user
        """
        super().__init__(message)
        self.message = message
        self.hint = hint

    def get_user_message(self) -> str:
        """Return a user-facing message."""
        if self.hint:
            return f"{self.message}\nHint: {self.hint}"
        return self.message


class ConfigError(TrackerError):
    """Raised when the runtime config is malformed."""

    def __init__(self, message: str, config_path: Optional[str] = None):
        hint = f"Check the config file: {config_path}" if config_path else "Check the config file format"
        super().__init__(message, hint)
        self.config_path = config_path


class StateError(TrackerError):
    """Raised when a stored tasks or entries file cannot be read back."""

    def __init__(self, message: str, corrupted_data: Optional[str] = None):
        hint = "The data file may be corrupted, inspect tasks.json / entries.json"
        super().__init__(message, hint)
        self.corrupted_data = corrupted_data


class TaskNotFoundError(TrackerError):
    """Raised by the service layer when a task id does not exist."""

    def __init__(self, task_id: str):
        super().__init__(f"Task not found: {task_id}", hint="Reload the task list and retry")
        self.task_id = task_id


class RuleValidationError(TrackerError):
    """Condition rules failed authoring-time validation."""

    def __init__(self, errors: List[str]):
        message = "Invalid condition rules: " + "; ".join(errors)
        super().__init__(message, hint="Fix the listed rules before saving")
        self.errors = list(errors)
