"""
Core Data Models for the Cosplay Planner

These models define the records the whole planner works with:
projects, their expenses and checklist tasks.

They are designed to:
1. Be immutable snapshots (edits produce new copies)
2. Serialize to a field-named JSON encoding for local storage
3. Compute every derived value on read, never store it

DESIGN DECISION: We use Pydantic v2 frozen models. A store holds
snapshots, and a screen that wants to change a project builds a new one
with model_copy(update=...) and hands it back to the store.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ProjectStatus(str, Enum):
    """
    Project lifecycle status.

    A new project always starts in PLANNING. After that the status is
    derived from checklist completion (see store.status_policy).
    """
    ACTIVE = "active"
    PLANNING = "planning"
    COMPLETED = "completed"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


class ExpenseCategory(str, Enum):
    """Expense categories a cosplay build spends money on."""
    FABRIC_OUTFIT = "fabric_outfit"
    WIG_HAIR = "wig_hair"
    DESIGN_PAINT = "design_paint"
    OTHER = "other"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


_STATUS_LABELS = {
    ProjectStatus.ACTIVE: "Active Projects",
    ProjectStatus.PLANNING: "Planning",
    ProjectStatus.COMPLETED: "Completed",
}

_CATEGORY_LABELS = {
    ExpenseCategory.FABRIC_OUTFIT: "Fabric & Outfit",
    ExpenseCategory.WIG_HAIR: "Wig & Hair",
    ExpenseCategory.DESIGN_PAINT: "Design & Paint",
    ExpenseCategory.OTHER: "Other",
}


# Largest accepted power of ten: amounts up to 9,999,999,999.99.
MAX_NUMBER_DIGITS = 9


def parse_decimal_text(text: Optional[str]) -> Optional[Decimal]:
    """
    Parse user-entered numeric text.

    Returns None for empty, malformed, non-finite or out-of-range input
    ("abc", "NaN", "inf", "1_000", "1e1000000"). Callers decide whether
    None means "reject" (forms) or "treat as zero" (Project.total_budget).
    """
    if text is None or "_" in text:
        return None
    try:
        value = Decimal(text.strip())
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite():
        return None
    if value and value.adjusted() > MAX_NUMBER_DIGITS:
        return None
    return value


# =============================================================================
# OWNED RECORDS
# =============================================================================

class Expense(BaseModel):
    """A single purchase logged against a project."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: UUID = Field(default_factory=uuid4)
    store: str = Field(
        ...,
        description="Shop the item was bought from"
    )
    item: str = Field(
        ...,
        description="What was bought"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Cost of the purchase"
    )
    category: ExpenseCategory = Field(
        default=ExpenseCategory.OTHER,
        description="Spending category"
    )
    date: datetime = Field(
        default_factory=datetime.now,
        description="When the expense was added (used for monthly totals)"
    )


class ChecklistTask(BaseModel):
    """A checklist entry on a project."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: UUID = Field(default_factory=uuid4)
    title: str
    is_completed: bool = False


# =============================================================================
# PROJECT
# =============================================================================

class Project(BaseModel):
    """
    A costume build tied to an event.

    The project exclusively owns its expenses and tasks: they are
    stored inside the project record and go wherever it goes
    (including the archive).

    Budget is kept as the text the user typed and parsed on demand,
    so a record with an unparseable budget still loads.
    """
    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        ser_json_bytes="base64",
        val_json_bytes="base64",
    )

    # Identity
    id: UUID = Field(
        default_factory=uuid4,
        description="Unique project ID"
    )

    # Descriptive fields
    project_name: str = Field(
        ...,
        description="Name of the costume / build"
    )
    source: str = Field(
        default="",
        description="Character or series the costume comes from"
    )
    event_name: str = Field(
        ...,
        description="Convention or event the costume is for"
    )
    budget: str = Field(
        default="0",
        description="Budget as entered by the user"
    )
    event_date: date = Field(
        ...,
        description="Calendar date of the event"
    )
    image_data: Optional[bytes] = Field(
        default=None,
        description="Encoded cover image (JPEG bytes)"
    )

    status: ProjectStatus = ProjectStatus.PLANNING
    expenses: list[Expense] = Field(default_factory=list)
    tasks: list[ChecklistTask] = Field(default_factory=list)

    # -------------------------------------------------------------------------
    # Derived fields
    # -------------------------------------------------------------------------

    @property
    def total_budget(self) -> Decimal:
        """Parsed budget, or zero if the text is not a number."""
        value = parse_decimal_text(self.budget)
        return value if value is not None else Decimal("0")

    @property
    def total_spent(self) -> Decimal:
        return sum((expense.amount for expense in self.expenses), Decimal("0"))

    @property
    def remaining_budget(self) -> Decimal:
        return self.total_budget - self.total_spent

    @property
    def completed_tasks_count(self) -> int:
        return sum(1 for task in self.tasks if task.is_completed)

    @property
    def completion_percentage(self) -> float:
        if not self.tasks:
            return 0.0
        return self.completed_tasks_count / len(self.tasks) * 100

    @property
    def has_image(self) -> bool:
        return bool(self.image_data)

    def days_until_event(self, today: date) -> int:
        """Signed number of calendar days from today to the event."""
        return (self.event_date - today).days

    def days_left(self, today: date) -> int:
        """Days remaining until the event, never negative."""
        return max(0, self.days_until_event(today))

    def expense_share(self, expense: Expense) -> float:
        """Percentage of total spend this expense accounts for."""
        total = self.total_spent
        if total <= 0:
            return 0.0
        return float(expense.amount / total * 100)

    # -------------------------------------------------------------------------
    # Snapshot edits
    # -------------------------------------------------------------------------

    def with_expense(self, expense: Expense) -> "Project":
        return self.model_copy(update={"expenses": [*self.expenses, expense]})

    def with_expense_replaced(self, expense: Expense) -> "Project":
        """Replace the expense with the same id. Unknown ids leave the project unchanged."""
        expenses = [expense if e.id == expense.id else e for e in self.expenses]
        return self.model_copy(update={"expenses": expenses})

    def without_expense(self, expense_id: UUID) -> "Project":
        expenses = [e for e in self.expenses if e.id != expense_id]
        return self.model_copy(update={"expenses": expenses})

    def with_task(self, task: ChecklistTask) -> "Project":
        return self.model_copy(update={"tasks": [*self.tasks, task]})

    def with_task_toggled(self, task_id: UUID) -> "Project":
        tasks = [
            t.model_copy(update={"is_completed": not t.is_completed}) if t.id == task_id else t
            for t in self.tasks
        ]
        return self.model_copy(update={"tasks": tasks})

    def without_task(self, task_id: UUID) -> "Project":
        tasks = [t for t in self.tasks if t.id != task_id]
        return self.model_copy(update={"tasks": tasks})
