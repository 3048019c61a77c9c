"""
Employee API endpoints.

Provides endpoints for:
- Creating and updating employees (email must be unique, case-insensitive)
- Fetching and deleting a single employee by id
- Paged listing with department / minimum salary / name filters
- Advanced paged search adding salary range and joining date range
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Query, Response, status

from app.api.dependencies import EmployeeServiceDep
from app.core.config import settings
from app.core.logging import get_logger
from app.models.employee import EmployeeModel, PageResponse

logger = get_logger(__name__)

router = APIRouter(
    prefix="/employees",
    tags=["employees"],
    responses={404: {"description": "Employee not found"}},
)

PageQuery = Annotated[int, Query(ge=0, description="Zero-based page index")]
SizeQuery = Annotated[int, Query(ge=1, description="Page size")]
SortByQuery = Annotated[str, Query(alias="sortBy", description="Field to sort by")]
SortDirQuery = Annotated[str, Query(alias="sortDir", description="asc or desc")]


# =============================================================================
# Create / Update
# =============================================================================


@router.post("", response_model=EmployeeModel)
def create_employee(
    employee: EmployeeModel,
    service: EmployeeServiceDep,
):
    """
    Create a new employee.

    Any id in the payload is ignored; a new one is generated.
    Returns 409 when another employee already uses the email.
    """
    logger.info(f"Creating new employee: {employee.email}")
    return service.save_or_update_employee(None, employee)


@router.put("/{employee_id}", response_model=EmployeeModel)
def update_employee(
    employee_id: str,
    employee: EmployeeModel,
    service: EmployeeServiceDep,
):
    """
    Replace every field of an existing employee except its id.
    """
    logger.info(f"Updating employee {employee_id}")
    return service.save_or_update_employee(employee_id, employee)


# =============================================================================
# Pagination + Filter
# =============================================================================


@router.get("", response_model=PageResponse[EmployeeModel])
def list_employees(
    service: EmployeeServiceDep,
    page: PageQuery = 0,
    size: SizeQuery = settings.DEFAULT_PAGE_SIZE,
    sort_by: SortByQuery = "id",
    sort_dir: SortDirQuery = "asc",
    department: Optional[str] = None,
    min_salary: Annotated[Optional[float], Query(alias="minSalary")] = None,
    name: Optional[str] = None,
):
    """
    List employees with pagination and optional filters.
    """
    return service.find_all_employees_with_filter(
        page, size, sort_by, sort_dir, department, min_salary, name
    )


@router.get("/search", response_model=PageResponse[EmployeeModel])
def search_employees(
    service: EmployeeServiceDep,
    page: PageQuery = 0,
    size: SizeQuery = settings.DEFAULT_PAGE_SIZE,
    sort_by: SortByQuery = "id",
    sort_dir: SortDirQuery = "asc",
    name: Optional[str] = None,
    department: Optional[str] = None,
    min_salary: Annotated[Optional[float], Query(alias="minSalary")] = None,
    max_salary: Annotated[Optional[float], Query(alias="maxSalary")] = None,
    joining_date_from: Annotated[
        Optional[str], Query(alias="joiningDateFrom", description="yyyy-MM-dd")
    ] = None,
    joining_date_to: Annotated[
        Optional[str], Query(alias="joiningDateTo", description="yyyy-MM-dd")
    ] = None,
):
    """
    Advanced employee search.

    Salary bounds are exclusive, joining date bounds inclusive. A joining
    date that is not a valid yyyy-MM-dd date is ignored.
    """
    return service.search_employees(
        page,
        size,
        sort_by,
        sort_dir,
        name=name,
        department=department,
        min_salary=min_salary,
        max_salary=max_salary,
        joining_date_from=joining_date_from,
        joining_date_to=joining_date_to,
    )


# =============================================================================
# Find / Delete
# =============================================================================


@router.get("/{employee_id}", response_model=EmployeeModel)
def get_employee(
    employee_id: str,
    service: EmployeeServiceDep,
):
    """
    Get employee by ID.
    """
    logger.info(f"Fetching employee {employee_id}")
    return service.find_by_id(employee_id)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_employee(
    employee_id: str,
    service: EmployeeServiceDep,
):
    """
    Delete employee by ID.
    """
    logger.info(f"Deleting employee {employee_id}")
    service.delete_employee(employee_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
