from datetime import date

from utils.validators import (
    AUTHOR_RULES,
    AUTHOR_SANITIZERS,
    BOOKINSTANCE_RULES,
    BOOKINSTANCE_SANITIZERS,
    escape,
    iso8601,
    run_validation,
)


def _author(**overrides):
    form = {"first_name": "Jane", "family_name": "Austen", "date_of_birth": "", "date_of_death": ""}
    form.update(overrides)
    return run_validation(form, AUTHOR_RULES, AUTHOR_SANITIZERS)


def _copy(**overrides):
    form = {"book": "b1", "imprint": "Penguin, 2003.", "status": "Available", "due_back": ""}
    form.update(overrides)
    return run_validation(form, BOOKINSTANCE_RULES, BOOKINSTANCE_SANITIZERS)


def test_valid_author_is_trimmed_and_dates_coerced():
    result = _author(first_name="  Jane ", date_of_birth="1775-12-16")
    assert result.is_valid
    assert result.values["first_name"] == "Jane"
    assert result.values["date_of_birth"] == date(1775, 12, 16)
    assert result.values["date_of_death"] is None


def test_missing_names_report_one_error_per_field():
    result = _author(first_name="   ", family_name=None)
    assert [e.field for e in result.errors] == ["first_name", "family_name"]
    assert result.errors[0].message == "First name must be specified."
    assert result.errors[1].message == "Family name must be specified."


def test_non_alphanumeric_name_rejected():
    result = _author(family_name="O'Brien")
    assert len(result.errors) == 1
    assert result.errors[0].field == "family_name"
    assert result.errors[0].message == "Family name has non-alphanumeric characters."
    # Sanitizers still run so the form can be redisplayed
    assert result.values["family_name"] == "O&#x27;Brien"


def test_invalid_dates_reported_and_sanitized_to_none():
    result = _author(date_of_birth="not-a-date", date_of_death="1817-13-40")
    assert {e.message for e in result.errors} == {"Invalid date of birth", "Invalid date of death"}
    assert result.values["date_of_birth"] is None
    assert result.values["date_of_death"] is None


def test_missing_form_fields_count_as_empty():
    result = run_validation({}, AUTHOR_RULES, AUTHOR_SANITIZERS)
    assert {e.field for e in result.errors} == {"first_name", "family_name"}
    assert result.values["date_of_birth"] is None


def test_iso8601_accepts_dates_and_datetimes():
    assert iso8601("2020-01-02")
    assert iso8601("2020-01-02T10:30:00")
    assert iso8601("2020-01-02T10:30:00Z")
    assert not iso8601("02/01/2020")


def test_escape_replaces_html_characters():
    assert escape("<b>Tom & 'Jerry'</b>") == "&lt;b&gt;Tom &amp; &#x27;Jerry&#x27;&lt;&#x2F;b&gt;"


def test_bookinstance_status_maintenance_accepted():
    result = _copy(status="Maintenance", due_back="2024-05-01")
    assert result.is_valid
    assert result.values["status"] == "Maintenance"
    assert result.values["due_back"] == date(2024, 5, 1)


def test_bookinstance_requires_book_and_imprint():
    result = _copy(book="", imprint="  ")
    assert [(e.field, e.message) for e in result.errors] == [
        ("book", "Book must be specified"),
        ("imprint", "Imprint must be specified"),
    ]


def test_bookinstance_rejects_unknown_status_and_bad_date():
    result = _copy(status="Lost", due_back="tomorrow")
    assert {(e.field, e.message) for e in result.errors} == {
        ("status", "Invalid status"),
        ("due_back", "Invalid date"),
    }


def test_iso8601_accepts_reduced_precision_dates():
    assert iso8601("1920")
    assert iso8601("1920-05")
    assert not iso8601("1920-13")
    assert not iso8601("192")


def test_reduced_precision_dates_coerce_to_first_day_of_period():
    result = _author(date_of_birth="1920", date_of_death="1992-04")
    assert result.is_valid
    assert result.values["date_of_birth"] == date(1920, 1, 1)
    assert result.values["date_of_death"] == date(1992, 4, 1)
