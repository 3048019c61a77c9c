from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from app.core.database import get_session
from app.services.employee_service import EmployeeService

SessionDep = Annotated[Session, Depends(get_session)]


def get_employee_service(session: SessionDep) -> EmployeeService:
    return EmployeeService(session)


EmployeeServiceDep = Annotated[EmployeeService, Depends(get_employee_service)]
