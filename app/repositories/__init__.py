"""
Employee Records Service Repositories.

Storage access and composable query filters.
"""

from app.repositories.employee_repository import EmployeeRepository
from app.repositories.employee_specification import EmployeeFilter, all_of

__all__ = [
    "EmployeeRepository",
    "EmployeeFilter",
    "all_of",
]
