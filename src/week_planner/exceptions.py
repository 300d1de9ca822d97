"""Error types raised by the planner."""
from typing import Optional


class PlannerError(Exception):
    """Base class for expected planner failures.

    Carries an optional hint that the CLI shows under the message.
    """

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.hint = hint

    def user_message(self) -> str:
        if self.hint:
            return f"{self.message}\nHint: {self.hint}"
        return self.message


class WeekNotFoundError(PlannerError):
    """The current week has no record yet."""

    def __init__(self, week_number: int):
        super().__init__(
            f"No record exists for week {week_number}.",
            hint="Add at least one goal, then open 'execute' to start the week.",
        )
        self.week_number = week_number


class WeekAlreadyReviewedError(PlannerError):
    """The week was already scored; its review is final."""

    def __init__(self, week_number: int):
        super().__init__(f"Week {week_number} has already been reviewed.")
        self.week_number = week_number


class ConfigError(PlannerError):
    pass


class AssistantError(PlannerError):
    """The AI assistant call failed or returned something unusable."""

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message, hint="Check your API key and network connection, then try again.")
        self.operation = operation


class CalendarError(PlannerError):
    pass
