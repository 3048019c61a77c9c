"""
Business operations for employee records.

Covers create/update/delete/find-by-id with the email-uniqueness and
existence rules, and the paged list and search queries.
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.core.exceptions import (
    DuplicateEmployeeError,
    EmployeeNotFoundError,
    InvalidInputError,
)
from app.core.logging import get_logger
from app.models.employee import (
    Employee,
    EmployeeModel,
    PageResponse,
    to_employee_entity,
    to_employee_model,
    update_entity_from_model,
)
from app.repositories.employee_repository import EmployeeRepository
from app.repositories.employee_specification import EmployeeFilter

logger = get_logger(__name__)

DEFAULT_SORT_FIELD = "id"
ALLOWED_SORT_FIELDS = frozenset(
    {"id", "name", "email", "department", "salary", "joiningDate"}
)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_employee_model(model: Optional[EmployeeModel]) -> EmployeeModel:
    """Reject incomplete payloads and trim the text fields in place."""
    if model is None:
        raise InvalidInputError("Employee data cannot be null")
    if _is_blank(model.name):
        raise InvalidInputError("Employee name is required")
    if _is_blank(model.email):
        raise InvalidInputError("Employee email is required")
    if _is_blank(model.department):
        raise InvalidInputError("Employee department is required")
    if model.salary is None or model.salary <= 0:
        raise InvalidInputError("Salary must be greater than zero")
    if model.joining_date is None:
        raise InvalidInputError("Joining date is required")

    model.name = model.name.strip()
    model.email = model.email.strip()
    model.department = model.department.strip()
    return model


def sanitize_sort_by(sort_by: Optional[str]) -> str:
    if sort_by not in ALLOWED_SORT_FIELDS:
        logger.warning(f"Invalid sort field '{sort_by}', defaulting to '{DEFAULT_SORT_FIELD}'")
        return DEFAULT_SORT_FIELD
    return sort_by


def is_descending(sort_dir: Optional[str]) -> bool:
    return sort_dir is not None and sort_dir.strip().lower() == "desc"


class EmployeeService:
    def __init__(self, session: Session):
        self.repository = EmployeeRepository(session)

    # =========================================================================
    # Create / Update
    # =========================================================================

    def save_or_update_employee(
        self, employee_id: Optional[str], model: Optional[EmployeeModel]
    ) -> EmployeeModel:
        """
        Create a new employee when ``employee_id`` is blank, otherwise
        overwrite every field of the existing one except its id.
        """
        model = validate_employee_model(model)

        if not _is_blank(employee_id):
            return self._update(employee_id.strip(), model)
        return self._create(model)

    def _create(self, model: EmployeeModel) -> EmployeeModel:
        if self.repository.exists_by_email_ignore_case(model.email):
            logger.warning(f"Rejected duplicate email on create: {model.email}")
            raise DuplicateEmployeeError(model.email)

        saved = self._save(to_employee_entity(model), model.email)
        logger.info(f"Created employee: {saved.id}")
        return to_employee_model(saved)

    def _update(self, employee_id: str, model: EmployeeModel) -> EmployeeModel:
        employee = self._get_or_raise(employee_id)

        if self.repository.exists_by_email_ignore_case(
            model.email, exclude_id=employee.id
        ):
            logger.warning(
                f"Rejected duplicate email on update of {employee_id}: {model.email}"
            )
            raise DuplicateEmployeeError(model.email)

        update_entity_from_model(model, employee)
        updated = self._save(employee, model.email)
        logger.info(f"Updated employee: {updated.id}")
        return to_employee_model(updated)

    def _save(self, employee: Employee, email: str) -> Employee:
        try:
            return self.repository.save(employee)
        except IntegrityError as e:
            # The unique index on email caught a race the check above missed
            logger.warning(f"Integrity error while saving employee: {e.orig}")
            raise DuplicateEmployeeError(email) from e

    # =========================================================================
    # Delete / Find
    # =========================================================================

    def delete_employee(self, employee_id: str) -> None:
        employee = self._get_or_raise(employee_id.strip())
        self.repository.delete(employee)
        logger.info(f"Deleted employee: {employee_id}")

    def find_by_id(self, employee_id: str) -> EmployeeModel:
        return to_employee_model(self._get_or_raise(employee_id.strip()))

    def _get_or_raise(self, employee_id: str) -> Employee:
        employee = self.repository.get(employee_id)
        if employee is None:
            logger.warning(f"Employee with ID {employee_id} not found")
            raise EmployeeNotFoundError(employee_id)
        return employee

    # =========================================================================
    # Pagination + Filter
    # =========================================================================

    def find_all_employees_with_filter(
        self,
        page: int,
        size: int,
        sort_by: Optional[str],
        sort_dir: Optional[str],
        department: Optional[str] = None,
        min_salary: Optional[float] = None,
        name: Optional[str] = None,
    ) -> PageResponse[EmployeeModel]:
        employee_filter = EmployeeFilter(
            department=department, min_salary=min_salary, name=name
        )
        return self.find_page(page, size, sort_by, sort_dir, employee_filter)

    def search_employees(
        self,
        page: int,
        size: int,
        sort_by: Optional[str],
        sort_dir: Optional[str],
        name: Optional[str] = None,
        department: Optional[str] = None,
        min_salary: Optional[float] = None,
        max_salary: Optional[float] = None,
        joining_date_from: Optional[str] = None,
        joining_date_to: Optional[str] = None,
    ) -> PageResponse[EmployeeModel]:
        employee_filter = EmployeeFilter(
            department=department,
            min_salary=min_salary,
            max_salary=max_salary,
            name=name,
            joining_date_from=joining_date_from,
            joining_date_to=joining_date_to,
        )
        return self.find_page(page, size, sort_by, sort_dir, employee_filter)

    def find_page(
        self,
        page: int,
        size: int,
        sort_by: Optional[str],
        sort_dir: Optional[str],
        employee_filter: EmployeeFilter,
    ) -> PageResponse[EmployeeModel]:
        """Run one paged query and wrap the rows in a page envelope."""
        sort_field = sanitize_sort_by(sort_by)
        employees, total = self.repository.find_all(
            employee_filter.to_predicate(),
            sort_by=sort_field,
            descending=is_descending(sort_dir),
            page=page,
            size=size,
        )

        logger.info(f"Fetched page {page} of employees (size {size}, total {total})")
        return PageResponse[EmployeeModel].of(
            content=[to_employee_model(emp) for emp in employees],
            page=page,
            size=size,
            total_elements=total,
        )
