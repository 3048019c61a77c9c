"""
Employee Records Service Models.

Exports all model classes for easy importing.
"""

from app.models.employee import (
    Employee,
    EmployeeModel,
    PageResponse,
    to_employee_entity,
    to_employee_model,
    update_entity_from_model,
)

__all__ = [
    # Database Model
    "Employee",
    # Request / Response Schemas
    "EmployeeModel",
    "PageResponse",
    # Mapping
    "to_employee_entity",
    "to_employee_model",
    "update_entity_from_model",
]
