"""
Shared test fixtures for Employee Records Service tests.
"""
import os
from datetime import date

# Point the application at SQLite before any app module reads settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DEBUG"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.core.database import get_session
from app.main import app
from app.models.employee import EmployeeModel
from app.services.employee_service import EmployeeService


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def service(session):
    return EmployeeService(session)


@pytest.fixture
def client(engine):
    """TestClient whose requests share the in-memory database."""

    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_employee(**overrides) -> EmployeeModel:
    data = {
        "name": "Ann",
        "email": "a@x.com",
        "department": "Eng",
        "salary": 90000,
        "joining_date": date(2021, 1, 1),
    }
    data.update(overrides)
    return EmployeeModel(**data)


@pytest.fixture
def employee_factory():
    return make_employee


@pytest.fixture
def staff(service):
    """A small, varied set of stored employees, keyed by name."""
    rows = [
        make_employee(name="Ann Lee", email="ann@x.com", department="Eng",
                      salary=90000, joining_date=date(2021, 1, 1)),
        make_employee(name="Bob Stone", email="bob@x.com", department="Eng",
                      salary=50000, joining_date=date(2019, 6, 15)),
        make_employee(name="Cara Annis", email="cara@x.com", department="Sales",
                      salary=65000, joining_date=date(2022, 3, 10)),
        make_employee(name="Dan Moss", email="dan@x.com", department="eng",
                      salary=120000, joining_date=date(2020, 11, 30)),
        make_employee(name="Eve Park", email="eve@x.com", department="HR",
                      salary=40000, joining_date=date(2023, 7, 1)),
    ]
    created = [service.save_or_update_employee(None, row) for row in rows]
    return {emp.name.split()[0]: emp for emp in created}
