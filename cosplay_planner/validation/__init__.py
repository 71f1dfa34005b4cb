"""Form validation package."""

from cosplay_planner.validation.validator import (
    REQUIRED_MESSAGE,
    FormValidationError,
    PlannerFormValidator,
)

__all__ = [
    "REQUIRED_MESSAGE",
    "FormValidationError",
    "PlannerFormValidator",
]
