"""
Employee database model and schemas for Employee Records Service.

The table model is the stored record; EmployeeModel is its transport
representation, used for both request and response bodies. The field
copies between the two are explicit functions at the bottom of the module.
"""

from datetime import date
from decimal import Decimal
from math import ceil
from typing import Annotated, Generic, Optional, TypeVar
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, EmailStr, PlainSerializer, field_validator
from pydantic import Field as PydanticField
from pydantic.alias_generators import to_camel
from sqlmodel import Field, SQLModel

T = TypeVar("T")

# Stored as NUMERIC(12, 2); written to JSON as a number rather than a string
Salary = Annotated[
    Decimal,
    PydanticField(gt=0, max_digits=12, decimal_places=2),
    PlainSerializer(float, return_type=float, when_used="json"),
]


def generate_employee_id() -> str:
    return str(uuid4())


# Database Models


class Employee(SQLModel, table=True):
    """ORM model for Employee table."""

    __tablename__ = "employees"

    id: str = Field(
        default_factory=generate_employee_id, primary_key=True, max_length=36
    )
    name: str = Field(max_length=255, min_length=1)
    email: str = Field(max_length=255, index=True, unique=True)
    department: str = Field(max_length=255, index=True)
    salary: Decimal = Field(max_digits=12, decimal_places=2)
    joining_date: date


# Request / Response Schemas


class EmployeeModel(BaseModel):
    """
    Transport representation of an employee.

    Field names are camelCase on the wire (``joiningDate``); snake_case
    names are accepted on input as well. ``id`` is ignored on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: Optional[str] = None
    name: str
    email: EmailStr
    department: str
    salary: Salary
    joining_date: date

    @field_validator("name", "email", "department", mode="before")
    @classmethod
    def strip_text(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value


class PageResponse(BaseModel, Generic[T]):
    """One page of results plus pagination metadata."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    content: list[T]
    page: int
    size: int
    total_elements: int
    total_pages: int
    last: bool

    @classmethod
    def of(cls, content: list[T], page: int, size: int, total_elements: int):
        total_pages = ceil(total_elements / size) if size > 0 else 0
        return cls(
            content=content,
            page=page,
            size=size,
            total_elements=total_elements,
            total_pages=total_pages,
            last=page + 1 >= total_pages,
        )


# Mapping


def to_employee_entity(model: EmployeeModel) -> Employee:
    """Build a new table row from a transport model. Any incoming id is dropped."""
    return Employee(
        name=model.name,
        email=model.email,
        department=model.department,
        salary=model.salary,
        joining_date=model.joining_date,
    )


def update_entity_from_model(model: EmployeeModel, employee: Employee) -> Employee:
    """Overwrite every field of ``employee`` except ``id``."""
    employee.name = model.name
    employee.email = model.email
    employee.department = model.department
    employee.salary = model.salary
    employee.joining_date = model.joining_date
    return employee


def to_employee_model(employee: Employee) -> EmployeeModel:
    return EmployeeModel(
        id=employee.id,
        name=employee.name,
        email=employee.email,
        department=employee.department,
        salary=employee.salary,
        joining_date=employee.joining_date,
    )
