"""
Two-Stage Form Validation

DESIGN DECISION: The store performs no validation, so every form
submission goes through this validator before it becomes an entity.

STAGE 1 - INPUT VALIDATION:
- Required field presence ("You need to fill in this field")
- Budget / amount parse as finite, non-negative numbers
- A picked cover image can be decoded and is within the size limit
- Any failure here is an error and blocks the submission

STAGE 2 - PLAUSIBILITY CHECKS:
- Event date already in the past
- Expense pushes the project over its budget
- These are warnings only; the user may still save

Stage 2 is skipped when stage 1 fails.

IMPORTANT: Validation NEVER silently fixes input. Whitespace trimming
is the only normalization, and it happens in the entity models.
"""

from decimal import Decimal
from typing import Callable, Optional
from uuid import UUID, uuid4

from cosplay_planner.audit import AuditLogger
from cosplay_planner.models.forms import (
    ExpenseDraft,
    ProjectDraft,
    TaskDraft,
    ValidationIssue,
    ValidationResult,
)
from cosplay_planner.models.project import (
    ChecklistTask,
    Expense,
    Project,
    ProjectStatus,
    parse_decimal_text,
)
from cosplay_planner.services.clock import Clock, SystemClock
from cosplay_planner.services.image import CoverImageCodec


REQUIRED_MESSAGE = "You need to fill in this field"


class FormValidationError(Exception):
    """A draft was turned into an entity without passing validation."""

    def __init__(self, result: ValidationResult):
        self.result = result
        fields = ", ".join(sorted({i.field for i in result.issues if i.severity == "error"}))
        super().__init__(f"Invalid {result.form} form: {fields}")


class PlannerFormValidator:
    """
    Validates form drafts and builds entities from valid ones.

    Stage 1: Input validation (blocks the submission)
    Stage 2: Plausibility checks (warnings only)
    """

    def __init__(
        self,
        image_codec: Optional[CoverImageCodec] = None,
        audit_logger: Optional[AuditLogger] = None,
        clock: Optional[Clock] = None,
        id_factory: Callable[[], UUID] = uuid4,
    ):
        """
        Initialize validator.

        Args:
            image_codec: Codec used to check and re-encode cover images.
            audit_logger: Receives a VALIDATION_FAILED event per rejected form.
            clock: Source of "today" for date checks and expense timestamps.
            id_factory: Generates ids for built entities.
        """
        self._image_codec = image_codec or CoverImageCodec()
        self._audit_logger = audit_logger
        self._clock = clock or SystemClock()
        self._id_factory = id_factory

    # -------------------------------------------------------------------------
    # Project form
    # -------------------------------------------------------------------------

    def validate_project_draft(self, draft: ProjectDraft) -> ValidationResult:
        issues = []
        for field in ("project_name", "source", "event_name"):
            issues.extend(self._require(field, getattr(draft, field)))
        issues.extend(self._check_number("budget", draft.budget))

        if draft.image_data:
            problem = self._image_codec.describe_problem(draft.image_data)
            if problem:
                issues.append(ValidationIssue(
                    field="image_data",
                    issue_type="invalid_image",
                    message=problem,
                    severity="error",
                ))

        if not _has_errors(issues) and draft.event_date < self._clock.today():
            issues.append(ValidationIssue(
                field="event_date",
                issue_type="past_date",
                message="The event date is already in the past",
                severity="warning",
            ))

        return self._finish("project", issues)

    def build_project(self, draft: ProjectDraft) -> Project:
        """
        Create a new project from a valid draft.

        New projects always start in PLANNING.

        Raises:
            FormValidationError: If the draft has errors
        """
        self._ensure_valid(self.validate_project_draft(draft))
        return Project(
            id=self._id_factory(),
            project_name=draft.project_name,
            source=draft.source,
            event_name=draft.event_name,
            budget=draft.budget.strip(),
            event_date=draft.event_date,
            image_data=self._encode_image(draft.image_data),
            status=ProjectStatus.PLANNING,
        )

    def apply_project_draft(self, project: Project, draft: ProjectDraft) -> Project:
        """
        Copy edited details onto an existing project.

        Expenses, tasks and status are kept. A draft without an image
        keeps the current one.

        Raises:
            FormValidationError: If the draft has errors
        """
        self._ensure_valid(self.validate_project_draft(draft))
        update = {
            "project_name": draft.project_name.strip(),
            "source": draft.source.strip(),
            "event_name": draft.event_name.strip(),
            "budget": draft.budget.strip(),
            "event_date": draft.event_date,
        }
        if draft.image_data:
            update["image_data"] = self._encode_image(draft.image_data)
        return project.model_copy(update=update)

    # -------------------------------------------------------------------------
    # Expense form
    # -------------------------------------------------------------------------

    def validate_expense_draft(
        self,
        draft: ExpenseDraft,
        project: Optional[Project] = None,
    ) -> ValidationResult:
        """
        Validate an expense form.

        When the owning project is given, an expense that takes it over
        budget gets a warning.
        """
        issues = []
        issues.extend(self._require("store", draft.store))
        issues.extend(self._require("item", draft.item))
        issues.extend(self._check_number("amount", draft.amount))

        if not _has_errors(issues) and project is not None:
            amount = parse_decimal_text(draft.amount)
            if project.total_budget > 0 and amount > project.remaining_budget:
                issues.append(ValidationIssue(
                    field="amount",
                    issue_type="over_budget",
                    message="This expense exceeds the remaining budget",
                    severity="warning",
                ))

        return self._finish("expense", issues)

    def build_expense(self, draft: ExpenseDraft) -> Expense:
        """
        Raises:
            FormValidationError: If the draft has errors
        """
        self._ensure_valid(self.validate_expense_draft(draft))
        return Expense(
            id=self._id_factory(),
            store=draft.store,
            item=draft.item,
            amount=parse_decimal_text(draft.amount),
            category=draft.category,
            date=draft.date or self._clock.now(),
        )

    def apply_expense_draft(self, expense: Expense, draft: ExpenseDraft) -> Expense:
        """Edit an expense in place; its id and creation date are kept."""
        self._ensure_valid(self.validate_expense_draft(draft))
        return expense.model_copy(update={
            "store": draft.store.strip(),
            "item": draft.item.strip(),
            "amount": parse_decimal_text(draft.amount),
            "category": draft.category,
        })

    # -------------------------------------------------------------------------
    # Task form
    # -------------------------------------------------------------------------

    def validate_task_draft(self, draft: TaskDraft) -> ValidationResult:
        return self._finish("task", self._require("title", draft.title))

    def build_task(self, draft: TaskDraft) -> ChecklistTask:
        self._ensure_valid(self.validate_task_draft(draft))
        return ChecklistTask(id=self._id_factory(), title=draft.title)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _require(self, field: str, value: Optional[str]) -> list[ValidationIssue]:
        if value is None or not value.strip():
            return [ValidationIssue(
                field=field,
                issue_type="missing",
                message=REQUIRED_MESSAGE,
                severity="error",
            )]
        return []

    def _check_number(self, field: str, text: str) -> list[ValidationIssue]:
        missing = self._require(field, text)
        if missing:
            return missing

        value = parse_decimal_text(text)
        if value is None:
            return [ValidationIssue(
                field=field,
                issue_type="invalid_number",
                message="Enter a number",
                severity="error",
            )]
        if value < Decimal("0"):
            return [ValidationIssue(
                field=field,
                issue_type="negative",
                message="The value cannot be negative",
                severity="error",
            )]
        return []

    def _encode_image(self, raw: Optional[bytes]) -> Optional[bytes]:
        if not raw:
            return None
        return self._image_codec.encode(raw)

    def _finish(self, form: str, issues: list[ValidationIssue]) -> ValidationResult:
        result = ValidationResult(
            form=form,
            validated_at=self._clock.now(),
            issues=issues,
        )
        if result.has_errors and self._audit_logger:
            self._audit_logger.log_validation_failed(
                form, [issue.model_dump() for issue in result.issues]
            )
        return result

    def _ensure_valid(self, result: ValidationResult) -> None:
        if not result.is_valid:
            raise FormValidationError(result)


def _has_errors(issues: list[ValidationIssue]) -> bool:
    return any(issue.severity == "error" for issue in issues)