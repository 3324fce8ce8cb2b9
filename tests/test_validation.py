"""Tests for form validation and field error messages."""

from datetime import date
from typing import Any

import pytest

from folio.errors import ErrorType, FormValidationError
from folio.models.entities import DEFAULT_TECH_STACK, EntityKind, ExperienceType
from folio.models.forms import BlogPostForm, ExperienceForm, ProjectForm, SettingsForm
from folio.validation import validate_form


def _field_errors(kind: EntityKind, data: dict[str, Any]) -> dict[str, str]:
    with pytest.raises(FormValidationError) as exc_info:
        validate_form(kind, data)
    return exc_info.value.field_errors


class TestProjectForm:
    """Tests for project form rules."""

    def test_valid_input_normalizes(self, project_data: dict[str, Any]) -> None:
        """Blank optionals become None and whitespace is stripped."""
        project_data["title"] = "  My Project  "
        project_data["content"] = "   "
        form = validate_form(EntityKind.PROJECT, project_data)

        assert isinstance(form, ProjectForm)
        assert form.title == "My Project"
        assert form.demo_url is None
        assert form.content is None
        assert form.slug is None

    def test_missing_required_fields(self) -> None:
        """Every missing required field gets its own message."""
        errors = _field_errors(EntityKind.PROJECT, {})
        assert errors["title"] == "Title is required"
        assert errors["description"] == "Description is required"
        assert errors["cover_image"] == "Cover image is required"
        assert errors["tags"] == "At least one tag is required"

    def test_short_description(self, project_data: dict[str, Any]) -> None:
        project_data["description"] = "Too short"
        errors = _field_errors(EntityKind.PROJECT, project_data)
        assert errors == {"description": "Description must be at least 10 characters"}

    def test_bad_urls(self, project_data: dict[str, Any]) -> None:
        project_data["cover_image"] = "not a url"
        project_data["repo_url"] = "ftp//broken"
        errors = _field_errors(EntityKind.PROJECT, project_data)
        assert errors["cover_image"] == "Cover image must be a valid URL"
        assert errors["repo_url"] == "Repo URL must be valid"

    def test_blank_tags_are_dropped(self, project_data: dict[str, Any]) -> None:
        """Tags that are only whitespace do not count toward the minimum."""
        project_data["tags"] = ["  ", ""]
        errors = _field_errors(EntityKind.PROJECT, project_data)
        assert errors == {"tags": "At least one tag is required"}

    def test_tags_from_comma_string(self, project_data: dict[str, Any]) -> None:
        project_data["tags"] = "python, fastapi, , sqlmodel"
        form = validate_form(EntityKind.PROJECT, project_data)
        assert form.tags == ["python", "fastapi", "sqlmodel"]  # type: ignore[attr-defined]

    def test_tags_kept_as_submitted(self, project_data: dict[str, Any]) -> None:
        """The submitted list replaces the stored one item for item, repeats included."""
        project_data["tags"] = [" python ", "fastapi", "python"]
        form = validate_form(EntityKind.PROJECT, project_data)
        assert form.tags == ["python", "fastapi", "python"]  # type: ignore[attr-defined]

    def test_explicit_slug_format(self, project_data: dict[str, Any]) -> None:
        project_data["slug"] = "Not A Slug"
        errors = _field_errors(EntityKind.PROJECT, project_data)
        assert errors == {"slug": "Slug must be lowercase with hyphens"}

    def test_unknown_fields_ignored(self, project_data: dict[str, Any]) -> None:
        project_data["views"] = 1000
        form = validate_form(EntityKind.PROJECT, project_data)
        assert not hasattr(form, "views")


class TestBlogPostForm:
    """Tests for blog post form rules."""

    def test_valid(self, post_data: dict[str, Any]) -> None:
        form = validate_form(EntityKind.BLOG_POST, post_data)
        assert isinstance(form, BlogPostForm)
        assert form.cover_image is None

    def test_content_minimum(self, post_data: dict[str, Any]) -> None:
        post_data["content"] = "short"
        errors = _field_errors(EntityKind.BLOG_POST, post_data)
        assert errors == {"content": "Content must be at least 50 characters"}

    def test_excerpt_minimum(self, post_data: dict[str, Any]) -> None:
        post_data["excerpt"] = "tiny"
        errors = _field_errors(EntityKind.BLOG_POST, post_data)
        assert errors == {"excerpt": "Excerpt must be at least 10 characters"}


class TestExperienceForm:
    """Tests for experience form rules."""

    def test_valid(self, experience_data: dict[str, Any]) -> None:
        form = validate_form(EntityKind.EXPERIENCE, experience_data)
        assert isinstance(form, ExperienceForm)
        assert form.type is ExperienceType.WORK
        assert form.start_date == date(2021, 3, 1)
        assert form.end_date == date(2023, 6, 30)

    def test_company_alias(self, experience_data: dict[str, Any]) -> None:
        """`company` is accepted in place of `organization`."""
        experience_data["company"] = experience_data.pop("organization")
        form = validate_form(EntityKind.EXPERIENCE, experience_data)
        assert form.organization == "Example Corp"  # type: ignore[attr-defined]

    def test_current_clears_end_date(self, experience_data: dict[str, Any]) -> None:
        experience_data["current"] = True
        form = validate_form(EntityKind.EXPERIENCE, experience_data)
        assert form.end_date is None  # type: ignore[attr-defined]

    def test_end_before_start(self, experience_data: dict[str, Any]) -> None:
        experience_data["end_date"] = "2020-01-01"
        errors = _field_errors(EntityKind.EXPERIENCE, experience_data)
        assert errors == {"end_date": "End date cannot be before start date"}

    def test_unknown_type(self, experience_data: dict[str, Any]) -> None:
        experience_data["type"] = "hobby"
        errors = _field_errors(EntityKind.EXPERIENCE, experience_data)
        assert errors == {"type": "Experience type must be work, education or volunteer"}

    def test_datetime_string_start_date(self, experience_data: dict[str, Any]) -> None:
        """ISO datetimes from date pickers are reduced to their date."""
        experience_data["start_date"] = "2021-03-01T00:00:00"
        form = validate_form(EntityKind.EXPERIENCE, experience_data)
        assert form.start_date == date(2021, 3, 1)  # type: ignore[attr-defined]

    def test_missing_organization(self, experience_data: dict[str, Any]) -> None:
        del experience_data["organization"]
        errors = _field_errors(EntityKind.EXPERIENCE, experience_data)
        assert errors == {"organization": "Company/Institution is required"}


class TestSettingsForm:
    """Tests for settings form rules."""

    def test_default_tech_stack(self, settings_data: dict[str, Any]) -> None:
        del settings_data["tech_stack"]
        form = validate_form(EntityKind.SETTINGS, settings_data)
        assert isinstance(form, SettingsForm)
        assert form.tech_stack == list(DEFAULT_TECH_STACK)

    def test_invalid_email_and_url(self, settings_data: dict[str, Any]) -> None:
        settings_data["email"] = "not-an-email"
        settings_data["linkedin"] = "linkedin"
        errors = _field_errors(EntityKind.SETTINGS, settings_data)
        assert errors == {"email": "Invalid email address", "linkedin": "Invalid URL"}

    def test_blank_optionals(self, settings_data: dict[str, Any]) -> None:
        settings_data["email"] = ""
        settings_data["twitter"] = "  "
        form = validate_form(EntityKind.SETTINGS, settings_data)
        assert form.email is None  # type: ignore[attr-defined]
        assert form.twitter is None  # type: ignore[attr-defined]


class TestFormValidationError:
    """Tests for the error raised on invalid input."""

    def test_message_is_first_field_error(self) -> None:
        with pytest.raises(FormValidationError) as exc_info:
            validate_form(EntityKind.SETTINGS, {"tagline": "Long enough tagline", "bio": "x"})
        error = exc_info.value
        assert error.error_type is ErrorType.VALIDATION
        assert error.message == next(iter(error.field_errors.values()))
        assert error.field_errors["name"] == "Name is required"
        assert error.field_errors["bio"] == "Bio must be at least 10 characters"
