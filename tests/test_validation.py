"""Tests for form validation and entity building."""

from datetime import datetime, timedelta
from decimal import Decimal
from io import BytesIO

import pytest
from PIL import Image

from cosplay_planner.models import (
    AuditEventType,
    ExpenseCategory,
    ExpenseDraft,
    ProjectDraft,
    ProjectStatus,
    TaskDraft,
)
from cosplay_planner.validation import REQUIRED_MESSAGE, FormValidationError
from tests.conftest import NOW, TODAY, make_png


@pytest.fixture
def project_draft():
    return ProjectDraft(
        project_name="Zelda",
        source="Breath of the Wild",
        event_name="Comic Con",
        budget="450.00",
        event_date=TODAY + timedelta(days=40),
    )


@pytest.fixture
def expense_draft():
    return ExpenseDraft(store="Fabric Town", item="Satin", amount="35.5")


class TestProjectForm:
    """Tests for the new / edit project form."""

    def test_valid_draft(self, validator, project_draft):
        result = validator.validate_project_draft(project_draft)
        assert result.is_valid
        assert result.issues == []
        assert result.form == "project"

    @pytest.mark.parametrize("field", ["project_name", "source", "event_name", "budget"])
    def test_required_fields(self, validator, project_draft, field):
        draft = project_draft.model_copy(update={field: "   "})

        result = validator.validate_project_draft(draft)

        assert not result.is_valid
        issue = result.errors_for(field)[0]
        assert issue.issue_type == "missing"
        assert issue.message == REQUIRED_MESSAGE

    @pytest.mark.parametrize("budget,issue_type", [
        ("abc", "invalid_number"),
        ("NaN", "invalid_number"),
        ("-10", "negative"),
    ])
    def test_bad_budget(self, validator, project_draft, budget, issue_type):
        result = validator.validate_project_draft(project_draft.model_copy(update={"budget": budget}))
        assert [i.issue_type for i in result.errors_for("budget")] == [issue_type]

    def test_past_event_is_only_a_warning(self, validator, project_draft):
        draft = project_draft.model_copy(update={"event_date": TODAY - timedelta(days=1)})

        result = validator.validate_project_draft(draft)

        assert result.is_valid
        assert [i.issue_type for i in result.issues] == ["past_date"]

    def test_rejected_form_is_audited(self, validator, project_draft, audit_logger):
        validator.validate_project_draft(project_draft.model_copy(update={"source": ""}))

        event = audit_logger.recent_events(1)[0]
        assert event.event_type == AuditEventType.VALIDATION_FAILED
        assert event.details["form"] == "project"

    def test_build_project(self, validator, project_draft):
        draft = project_draft.model_copy(update={"project_name": "  Zelda  ", "budget": " 450.00 "})

        project = validator.build_project(draft)

        assert project.project_name == "Zelda"
        assert project.budget == "450.00"
        assert project.total_budget == Decimal("450.00")
        assert project.status == ProjectStatus.PLANNING
        assert project.expenses == [] and project.tasks == []

    def test_build_invalid_project_raises(self, validator, project_draft):
        with pytest.raises(FormValidationError) as exc_info:
            validator.build_project(project_draft.model_copy(update={"event_name": ""}))
        assert exc_info.value.result.errors_for("event_name")
        assert "event_name" in str(exc_info.value)

    def test_cover_image_is_reencoded_as_jpeg(self, validator, project_draft):
        draft = project_draft.model_copy(update={"image_data": make_png()})

        project = validator.build_project(draft)

        assert project.image_data.startswith(b"\xff\xd8")
        with Image.open(BytesIO(project.image_data)) as img:
            assert img.format == "JPEG"
            assert img.mode == "RGB"
            assert img.size == (16, 16)

    def test_undecodable_image_is_rejected(self, validator, project_draft):
        draft = project_draft.model_copy(update={"image_data": b"definitely not an image"})
        result = validator.validate_project_draft(draft)
        assert [i.issue_type for i in result.errors_for("image_data")] == ["invalid_image"]

    def test_oversized_dimensions_are_rejected(self, validator, project_draft, monkeypatch):
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
        draft = project_draft.model_copy(update={"image_data": make_png(size=(64, 64))})

        result = validator.validate_project_draft(draft)

        assert [i.issue_type for i in result.errors_for("image_data")] == ["invalid_image"]

    def test_oversized_image_is_rejected(self, validator, project_draft):
        draft = project_draft.model_copy(update={"image_data": b"\x00" * (1024 * 1024 + 1)})
        result = validator.validate_project_draft(draft)
        assert "larger than 1 MB" in result.errors_for("image_data")[0].message

    def test_apply_project_draft_keeps_contents(self, validator, project_draft, make_project, expense_factory, tasks_factory):
        project = make_project(
            status=ProjectStatus.ACTIVE,
            image_data=b"old",
            expenses=[expense_factory("5")],
            tasks=tasks_factory(True, False),
        )

        edited = validator.apply_project_draft(project, project_draft.model_copy(update={"event_name": " Anime Expo "}))

        assert edited.id == project.id
        assert edited.event_name == "Anime Expo"
        assert edited.status == ProjectStatus.ACTIVE
        assert edited.image_data == b"old"
        assert edited.expenses == project.expenses
        assert edited.tasks == project.tasks


class TestExpenseForm:
    """Tests for the add / edit expense form."""

    @pytest.mark.parametrize("field", ["store", "item", "amount"])
    def test_required_fields(self, validator, expense_draft, field):
        result = validator.validate_expense_draft(expense_draft.model_copy(update={field: ""}))
        assert result.errors_for(field)[0].message == REQUIRED_MESSAGE

    @pytest.mark.parametrize("amount", ["12,50", "ten", "inf", "1e1000000", "1_000"])
    def test_malformed_amount(self, validator, expense_draft, amount):
        result = validator.validate_expense_draft(expense_draft.model_copy(update={"amount": amount}))
        assert [i.issue_type for i in result.errors_for("amount")] == ["invalid_number"]

    def test_negative_amount(self, validator, expense_draft):
        result = validator.validate_expense_draft(expense_draft.model_copy(update={"amount": "-1"}))
        assert [i.issue_type for i in result.errors_for("amount")] == ["negative"]

    def test_over_budget_warning(self, validator, expense_draft, make_project, expense_factory):
        project = make_project(budget="50", expenses=[expense_factory("20")])

        result = validator.validate_expense_draft(expense_draft, project)

        assert result.is_valid
        assert [i.issue_type for i in result.issues] == ["over_budget"]

    def test_no_warning_without_budget(self, validator, expense_draft, make_project):
        result = validator.validate_expense_draft(expense_draft, make_project(budget="0"))
        assert result.issues == []

    def test_build_expense_uses_clock(self, validator, expense_draft):
        expense = validator.build_expense(expense_draft)

        assert expense.amount == Decimal("35.5")
        assert expense.category == ExpenseCategory.FABRIC_OUTFIT
        assert expense.date == NOW

    def test_build_expense_keeps_given_date(self, validator, expense_draft):
        when = datetime(2026, 1, 2, 3, 4)
        expense = validator.build_expense(expense_draft.model_copy(update={"date": when}))
        assert expense.date == when

    def test_apply_expense_draft_keeps_identity(self, validator, expense_draft, expense_factory):
        original = expense_factory("10")
        draft = expense_draft.model_copy(update={"amount": "12", "category": ExpenseCategory.WIG_HAIR})

        edited = validator.apply_expense_draft(original, draft)

        assert edited.id == original.id
        assert edited.date == original.date
        assert edited.amount == Decimal("12")
        assert edited.category == ExpenseCategory.WIG_HAIR
        assert edited.store == "Fabric Town"

    def test_build_invalid_expense_raises(self, validator, expense_draft):
        with pytest.raises(FormValidationError):
            validator.build_expense(expense_draft.model_copy(update={"amount": "x"}))


class TestTaskForm:
    """Tests for the add task form."""

    def test_title_required(self, validator):
        result = validator.validate_task_draft(TaskDraft(title="  "))
        assert result.errors_for("title")[0].message == REQUIRED_MESSAGE

    def test_build_task(self, validator):
        task = validator.build_task(TaskDraft(title=" Style wig "))
        assert task.title == "Style wig"
        assert not task.is_completed

    def test_build_invalid_task_raises(self, validator):
        with pytest.raises(FormValidationError):
            validator.build_task(TaskDraft())
