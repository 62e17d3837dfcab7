from datetime import datetime, timezone

from sqlmodel import select

from app.models import (
    Category, Client, ClockRecord, Employee, Notification, Project, Task, TaskAssignment,
)
from app.models.base import utcnow


def test_utcnow_is_timezone_aware():
    assert utcnow().tzinfo is timezone.utc


def test_every_entity_round_trips_through_the_store(session):
    category = Category(name="Developer")
    customer = Client(name="Acme", email="ops@acme.com")
    session.add_all([category, customer])
    session.commit()

    employee = Employee(name="Ann", email="ann@example.com", password="x", category_id=category.id)
    project = Project(title="Apollo", client_id=customer.client_id)
    session.add_all([employee, project])
    session.commit()

    task = Task(
        description="Draft brief",
        deadline=datetime(2025, 6, 1, 10, 0, tzinfo=timezone.utc),
        project_id=project.project_id,
    )
    session.add(task)
    session.commit()

    session.add_all([
        TaskAssignment(task_id=task.task_id, employee_id=employee.id),
        Notification(message="Project 'Apollo' created"),
        ClockRecord(employee_id=employee.id, clock_out=utcnow()),
    ])
    session.commit()
    session.expire_all()

    for model in (Category, Client, Employee, Project, Task, TaskAssignment, Notification, ClockRecord):
        assert len(session.exec(select(model)).all()) == 1, model.__name__

    stored = session.exec(select(Task)).one()
    assert stored.created_at is not None
    assert stored.updated_at is not None
    assert stored.deadline.replace(tzinfo=None) == datetime(2025, 6, 1, 10, 0)
    assert session.exec(select(Employee)).one().created_at is not None
    assert session.exec(select(ClockRecord)).one().clock_out is not None


def test_naive_deadline_from_the_api_is_taken_as_utc(client, make_project):
    project = make_project()

    response = client.post("/api/v1/tasks", json={
        "description": "Draft brief",
        "deadline": "2025-06-01T10:00",
        "status": "pending",
        "project_id": project.project_id,
    })

    assert response.status_code == 201
    assert response.json()["task"]["deadline"].startswith("2025-06-01T10:00:00")
