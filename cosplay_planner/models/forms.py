"""
Form Input Models

Drafts carry exactly what a user typed into a form, before any parsing.
Numbers arrive as text; the validator decides whether they are usable.

CRITICAL: The store never validates. Everything a form submits goes
through PlannerFormValidator first, and only a valid draft becomes a
Project / Expense / ChecklistTask.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from cosplay_planner.models.project import ExpenseCategory


class ProjectDraft(BaseModel):
    """Input of the "new project" and "edit project" forms."""

    project_name: str = ""
    source: str = ""
    event_name: str = ""
    budget: str = ""
    event_date: date
    image_data: Optional[bytes] = None


class ExpenseDraft(BaseModel):
    """Input of the "add expense" and "edit expense" forms."""

    store: str = ""
    item: str = ""
    amount: str = ""
    category: ExpenseCategory = ExpenseCategory.FABRIC_OUTFIT
    date: Optional[datetime] = Field(
        default=None,
        description="Creation time; the clock's now is used when missing"
    )


class TaskDraft(BaseModel):
    """Input of the "add task" form."""

    title: str = ""


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_number', 'negative')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """Result of validating one form submission."""

    form: str = Field(
        ...,
        description="Which form was validated (project, expense, task)"
    )
    validated_at: datetime = Field(default_factory=datetime.now)
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    def errors_for(self, field: str) -> list[ValidationIssue]:
        return [i for i in self.issues if i.field == field and i.severity == "error"]
