"""
Tests for app/services/employee_service.py - lifecycle rules and paged queries.
"""
from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError
from sqlmodel import select

from app.core.exceptions import (
    DuplicateEmployeeError,
    EmployeeNotFoundError,
    InvalidInputError,
)
from app.models.employee import Employee
from app.services.employee_service import (
    ALLOWED_SORT_FIELDS,
    is_descending,
    sanitize_sort_by,
    validate_employee_model,
)


class TestValidation:
    """validate_employee_model rejects incomplete payloads and trims text."""

    def test_none_rejected(self):
        with pytest.raises(InvalidInputError):
            validate_employee_model(None)

    @pytest.mark.parametrize("field", ["name", "department"])
    def test_blank_text_rejected(self, employee_factory, field):
        with pytest.raises(InvalidInputError):
            validate_employee_model(employee_factory(**{field: "   "}))

    def test_non_positive_salary_rejected(self, employee_factory):
        model = employee_factory()
        model.salary = 0
        with pytest.raises(InvalidInputError):
            validate_employee_model(model)
        model.salary = -10
        with pytest.raises(InvalidInputError):
            validate_employee_model(model)

    @pytest.mark.parametrize("salary", [0.001, "90000.555", 12345678901])
    def test_salary_must_fit_numeric_12_2(self, employee_factory, salary):
        with pytest.raises(ValidationError):
            employee_factory(salary=salary)

    def test_salary_kept_as_decimal(self, employee_factory):
        assert employee_factory(salary="1234.50").salary == Decimal("1234.50")

    def test_text_fields_trimmed(self, employee_factory):
        model = employee_factory(name="  Ann  ", email=" a@x.com ", department=" Eng ")
        model = validate_employee_model(model)
        assert model.name == "Ann"
        assert model.email == "a@x.com"
        assert model.department == "Eng"


class TestSortSanitizing:
    def test_allowed_fields_pass_through(self):
        for field in ALLOWED_SORT_FIELDS:
            assert sanitize_sort_by(field) == field

    @pytest.mark.parametrize("field", ["__evil__", "joining_date", "", None, "ID"])
    def test_unknown_fields_fall_back_to_id(self, field):
        assert sanitize_sort_by(field) == "id"

    @pytest.mark.parametrize("value", ["desc", "DESC", " Desc "])
    def test_descending(self, value):
        assert is_descending(value) is True

    @pytest.mark.parametrize("value", ["asc", "ASC", "down", "", None])
    def test_anything_else_is_ascending(self, value):
        assert is_descending(value) is False


class TestCreate:
    def test_create_generates_id(self, service, employee_factory):
        created = service.save_or_update_employee(None, employee_factory())
        assert created.id
        assert len(created.id) == 36
        assert created.name == "Ann"
        assert created.salary == 90000

    def test_blank_id_means_create(self, service, employee_factory):
        created = service.save_or_update_employee("  ", employee_factory())
        assert created.id

    def test_payload_id_ignored_on_create(self, service, employee_factory):
        created = service.save_or_update_employee(None, employee_factory(id="mine"))
        assert created.id != "mine"

    def test_duplicate_email_any_case(self, service, employee_factory):
        service.save_or_update_employee(None, employee_factory(email="a@x.com"))
        with pytest.raises(DuplicateEmployeeError):
            service.save_or_update_employee(
                None, employee_factory(name="Other", email="A@X.COM")
            )

    def test_unique_index_backstop(self, service, session, employee_factory, monkeypatch):
        """A racing create that slips past the check still surfaces as a duplicate."""
        service.save_or_update_employee(None, employee_factory(email="a@x.com"))
        monkeypatch.setattr(
            service.repository, "exists_by_email_ignore_case", lambda *a, **kw: False
        )
        with pytest.raises(DuplicateEmployeeError):
            service.save_or_update_employee(None, employee_factory(email="a@x.com"))
        assert len(session.exec(select(Employee)).all()) == 1


class TestUpdate:
    def test_update_unknown_id(self, service, session, employee_factory):
        with pytest.raises(EmployeeNotFoundError):
            service.save_or_update_employee("missing", employee_factory())
        assert session.exec(select(Employee)).all() == []

    def test_update_overwrites_fields_and_keeps_id(self, service, employee_factory):
        created = service.save_or_update_employee(None, employee_factory())
        updated = service.save_or_update_employee(
            created.id,
            employee_factory(
                id="something-else",
                name="Ann Smith",
                email="ann.smith@x.com",
                department="Ops",
                salary=95000.5,
                joining_date=date(2020, 2, 2),
            ),
        )
        assert updated.id == created.id
        assert updated.name == "Ann Smith"
        assert updated.email == "ann.smith@x.com"
        assert updated.department == "Ops"
        assert updated.salary == 95000.5
        assert updated.joining_date == date(2020, 2, 2)
        assert service.find_by_id(created.id) == updated

    def test_update_keeping_own_email(self, service, employee_factory):
        created = service.save_or_update_employee(None, employee_factory())
        updated = service.save_or_update_employee(
            created.id, employee_factory(email="A@x.com", salary=1)
        )
        assert updated.email == "A@x.com"

    def test_update_to_another_employees_email(self, service, employee_factory):
        service.save_or_update_employee(None, employee_factory(email="a@x.com"))
        other = service.save_or_update_employee(None, employee_factory(email="b@x.com"))
        with pytest.raises(DuplicateEmployeeError):
            service.save_or_update_employee(other.id, employee_factory(email="a@X.com"))
        assert service.find_by_id(other.id).email == "b@x.com"


class TestDeleteAndFind:
    def test_find_trims_id(self, service, employee_factory):
        created = service.save_or_update_employee(None, employee_factory())
        assert service.find_by_id(f" {created.id} ").id == created.id

    def test_find_unknown(self, service):
        with pytest.raises(EmployeeNotFoundError):
            service.find_by_id("missing")

    def test_delete_twice(self, service, employee_factory):
        created = service.save_or_update_employee(None, employee_factory())
        service.delete_employee(created.id)
        with pytest.raises(EmployeeNotFoundError):
            service.delete_employee(created.id)
        with pytest.raises(EmployeeNotFoundError):
            service.find_by_id(created.id)


class TestPaging:
    def test_totals(self, service, staff):
        page = service.find_all_employees_with_filter(0, 2, "id", "asc")
        assert page.total_elements == 5
        assert page.total_pages == 3
        assert page.page == 0
        assert page.size == 2
        assert len(page.content) == 2
        assert page.last is False

    def test_last_page(self, service, staff):
        page = service.find_all_employees_with_filter(2, 2, "id", "asc")
        assert len(page.content) == 1
        assert page.last is True

    def test_out_of_range_page(self, service, staff):
        page = service.find_all_employees_with_filter(7, 2, "id", "asc")
        assert page.content == []
        assert page.total_elements == 5
        assert page.total_pages == 3
        assert page.last is True

    def test_empty_store(self, service):
        page = service.find_all_employees_with_filter(0, 10, "id", "asc")
        assert page.content == []
        assert page.total_elements == 0
        assert page.total_pages == 0
        assert page.last is True

    def test_exact_multiple_of_size(self, service, staff):
        page = service.find_all_employees_with_filter(0, 5, "id", "asc")
        assert page.total_pages == 1
        assert page.last is True

    def test_sort_by_salary_desc(self, service, staff):
        page = service.find_all_employees_with_filter(0, 10, "salary", "DESC")
        assert [e.salary for e in page.content] == [120000, 90000, 65000, 50000, 40000]

    def test_sort_by_joining_date(self, service, staff):
        page = service.find_all_employees_with_filter(0, 10, "joiningDate", "asc")
        assert [e.name.split()[0] for e in page.content] == [
            "Bob", "Dan", "Ann", "Cara", "Eve",
        ]

    def test_unknown_sort_field_sorts_by_id_ascending(self, service, staff):
        page = service.find_all_employees_with_filter(0, 10, "__evil__", "asc")
        ids = [e.id for e in page.content]
        assert ids == sorted(ids)

    def test_list_filters(self, service, staff):
        page = service.find_all_employees_with_filter(
            0, 10, "id", "asc", department="Eng", min_salary=50000
        )
        assert [e.name for e in page.content] == ["Ann Lee"]
        assert page.total_elements == 1

    def test_search_filters(self, service, staff):
        page = service.search_employees(
            0, 10, "name", "asc",
            max_salary=70000,
            joining_date_from="2019-01-01",
            joining_date_to="not-a-date",
        )
        assert [e.name for e in page.content] == ["Bob Stone", "Cara Annis", "Eve Park"]
