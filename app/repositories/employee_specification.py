"""
Composable filters for querying the employees table.

Each builder returns a SQL boolean expression, or ``None`` when its input is
absent, blank or malformed. ``None`` means "no constraint", so ``all_of``
simply drops it before AND-ing the rest together.
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import Optional

from sqlalchemy import and_, func
from sqlalchemy.sql.elements import ColumnElement

from app.core.logging import get_logger
from app.models.employee import Employee

logger = get_logger(__name__)

ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)

Predicate = Optional[ColumnElement[bool]]


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _parse_date(value: Optional[str]) -> Optional[date]:
    """Parse a strict yyyy-MM-dd date; anything else (padding included) is None."""
    if value is None or not ISO_DATE.fullmatch(value):
        logger.debug(f"Ignoring malformed date filter: {value!r}")
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        logger.debug(f"Ignoring unparseable date filter: {value!r}")
        return None


def has_department(department: Optional[str]) -> Predicate:
    """Exact, case-sensitive department match."""
    if _is_blank(department):
        return None
    return Employee.department == department.strip()


def salary_greater_than(min_salary: Optional[float]) -> Predicate:
    if min_salary is None:
        return None
    return Employee.salary > min_salary


def salary_less_than(max_salary: Optional[float]) -> Predicate:
    if max_salary is None:
        return None
    return Employee.salary < max_salary


def name_contains(name: Optional[str]) -> Predicate:
    """Case-insensitive substring match on the name."""
    if _is_blank(name):
        return None
    return func.lower(Employee.name).contains(name.strip().lower(), autoescape=True)


def joining_date_after(from_date: Optional[str]) -> Predicate:
    """Joined on or after ``from_date`` (yyyy-MM-dd)."""
    parsed = _parse_date(from_date)
    if parsed is None:
        return None
    return Employee.joining_date >= parsed


def joining_date_before(to_date: Optional[str]) -> Predicate:
    """Joined on or before ``to_date`` (yyyy-MM-dd)."""
    parsed = _parse_date(to_date)
    if parsed is None:
        return None
    return Employee.joining_date <= parsed


def all_of(*predicates: Predicate) -> Predicate:
    """AND together the given predicates, skipping ``None``."""
    present = [p for p in predicates if p is not None]
    if not present:
        return None
    if len(present) == 1:
        return present[0]
    return and_(*present)


@dataclass(frozen=True)
class EmployeeFilter:
    """The optional inputs accepted by the list and search endpoints."""

    department: Optional[str] = None
    min_salary: Optional[float] = None
    max_salary: Optional[float] = None
    name: Optional[str] = None
    joining_date_from: Optional[str] = None
    joining_date_to: Optional[str] = None

    def to_predicate(self) -> Predicate:
        return all_of(
            has_department(self.department),
            salary_greater_than(self.min_salary),
            salary_less_than(self.max_salary),
            name_contains(self.name),
            joining_date_after(self.joining_date_from),
            joining_date_before(self.joining_date_to),
        )
