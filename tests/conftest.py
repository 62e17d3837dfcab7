import os
import tempfile
from datetime import datetime, timezone

# Point the app at a throwaway database before anything imports app.db.session
_db_dir = tempfile.mkdtemp(prefix="workforce-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ["AUTO_CREATE_TABLES"] = "false"

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from app.api import deps
from app.core.security import get_password_hash
from app.db.session import engine, get_db
from app.main import app
from app.models import Category, Employee, EmployeeRole, Project, Task
from app.realtime.channels import ChannelRegistry
from app.services.assignments import AssignmentEngine


@pytest.fixture(autouse=True)
def reset_db():
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield


@pytest.fixture()
def session():
    with Session(engine) as session:
        yield session


_password_hashes = {}


def hashed(password):
    # bcrypt is slow on purpose; hash each test password once per run
    if password not in _password_hashes:
        _password_hashes[password] = get_password_hash(password)
    return _password_hashes[password]


@pytest.fixture()
def make_employee(session):
    def _make(name="Alice", role=EmployeeRole.EMPLOYEE, email=None, password="secret", category=None):
        employee = Employee(
            name=name,
            email=email or f"{name.lower().replace(' ', '.')}@example.com",
            password=hashed(password),
            role=role,
            category_id=category.id if category else None,
        )
        session.add(employee)
        session.commit()
        session.refresh(employee)
        return employee
    return _make


@pytest.fixture()
def make_category(session):
    def _make(name="Developer"):
        category = Category(name=name)
        session.add(category)
        session.commit()
        session.refresh(category)
        return category
    return _make


@pytest.fixture()
def make_project(session):
    def _make(title="Website", **fields):
        project = Project(title=title, **fields)
        session.add(project)
        session.commit()
        session.refresh(project)
        return project
    return _make


@pytest.fixture()
def make_task(session):
    def _make(project, description="Draft brief", status="pending", deadline=None, employee_ids=()):
        task = Task(
            description=description,
            deadline=deadline or datetime(2025, 6, 1, 10, 0, tzinfo=timezone.utc),
            status=status,
            project_id=project.project_id,
        )
        session.add(task)
        session.commit()
        session.refresh(task)
        if employee_ids:
            AssignmentEngine(session).set_assignees(task.task_id, employee_ids)
            # the commit above expired the task
            session.refresh(task)
        return task
    return _make


@pytest.fixture()
def admin(make_employee):
    return make_employee(name="Admin", role=EmployeeRole.ADMIN)


class CurrentUser:
    """Holds the id of the employee the test client acts as."""

    def __init__(self):
        self.employee_id = None

    def act_as(self, employee):
        self.employee_id = employee.id


@pytest.fixture()
def current_user(admin):
    holder = CurrentUser()
    holder.act_as(admin)
    return holder


@pytest.fixture()
def client(current_user):
    """
    Test client authenticated as ``current_user`` (the admin by default).

    Each test gets a fresh channel registry.
    """
    def _current_employee(db: Session = Depends(get_db)):
        return db.get(Employee, current_user.employee_id)

    app.dependency_overrides[deps.get_current_user] = _current_employee
    app.state.channels = ChannelRegistry()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def anonymous_client():
    app.dependency_overrides.clear()
    app.state.channels = ChannelRegistry()
    with TestClient(app) as test_client:
        yield test_client

