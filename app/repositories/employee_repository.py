from typing import Optional

from sqlmodel import Session, func, select

from app.models.employee import Employee
from app.repositories.employee_specification import Predicate

# Transport field name -> column, for ORDER BY
SORT_COLUMNS = {
    "id": Employee.id,
    "name": Employee.name,
    "email": Employee.email,
    "department": Employee.department,
    "salary": Employee.salary,
    "joiningDate": Employee.joining_date,
}


class EmployeeRepository:
    """Storage access for employees over a single SQLModel session."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, employee_id: str) -> Optional[Employee]:
        return self.session.get(Employee, employee_id)

    def exists_by_email_ignore_case(
        self, email: str, exclude_id: Optional[str] = None
    ) -> bool:
        query = select(Employee.id).where(
            func.lower(Employee.email) == email.strip().lower()
        )
        if exclude_id is not None:
            query = query.where(Employee.id != exclude_id)
        return self.session.exec(query).first() is not None

    def save(self, employee: Employee) -> Employee:
        """Insert or update ``employee`` and commit. Rolls back on failure."""
        self.session.add(employee)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(employee)
        return employee

    def delete(self, employee: Employee) -> None:
        self.session.delete(employee)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def find_all(
        self,
        predicate: Predicate,
        sort_by: str,
        descending: bool,
        page: int,
        size: int,
    ) -> tuple[list[Employee], int]:
        """
        Return one page of employees matching ``predicate`` and the total
        number of matching rows across all pages.
        """
        query = select(Employee)
        if predicate is not None:
            query = query.where(predicate)

        # Get total count
        count_query = select(func.count()).select_from(query.subquery())
        total = self.session.exec(count_query).one()

        column = SORT_COLUMNS[sort_by]
        order = [column.desc() if descending else column.asc()]
        if sort_by != "id":
            order.append(Employee.id.asc())

        employees = self.session.exec(
            query.order_by(*order).offset(page * size).limit(size)
        ).all()
        return list(employees), total
