from datetime import datetime, timezone

from sqlmodel import select

from app.models import Client, Notification, Task, TaskAssignment
from helpers import join

PROJECTS = "/api/v1/projects"


def notices(session):
    session.expire_all()
    return [n.message for n in session.exec(select(Notification).order_by(Notification.id)).all()]


def test_create_project_records_creator_and_notice(client, admin, session):
    response = client.post(PROJECTS, json={"title": "Apollo", "status": "In Progress", "priority": "High"})

    assert response.status_code == 201
    project = response.json()["project"]
    assert project["title"] == "Apollo"
    assert project["status"] == "In Progress"
    assert project["created_by"] == admin.id
    assert notices(session) == ["Project 'Apollo' created"]


def test_create_project_requires_title_and_status(client):
    response = client.post(PROJECTS, json={"description": "no title"})
    assert response.status_code == 400
    assert response.json()["message"] == "Missing or invalid fields: title, status"


def test_create_project_unknown_client(client):
    response = client.post(PROJECTS, json={"title": "Apollo", "status": "On Hold", "client_id": 77})
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Client not found"}


def test_employee_cannot_create_project(client, current_user, make_employee):
    current_user.act_as(make_employee(name="Plain"))
    response = client.post(PROJECTS, json={"title": "Apollo", "status": "On Hold"})
    assert response.status_code == 403


def test_employee_can_read_projects(client, current_user, make_employee, make_project):
    project = make_project("Apollo")
    current_user.act_as(make_employee(name="Plain"))

    assert [p["title"] for p in client.get(PROJECTS).json()["projects"]] == ["Apollo"]
    assert client.get(f"{PROJECTS}/{project.project_id}").json()["project"]["title"] == "Apollo"


def test_read_project_not_found(client):
    assert client.get(f"{PROJECTS}/9").status_code == 404


def test_ongoing_projects_are_recent_and_ordered_by_start(client, make_project):
    from datetime import date
    make_project("Ancient", created_at=datetime(2020, 1, 1, tzinfo=timezone.utc))
    later = make_project("Later", start_date=date(2025, 9, 1))
    sooner = make_project("Sooner", start_date=date(2025, 3, 1))

    titles = [p["title"] for p in client.get(f"{PROJECTS}/ongoing").json()["projects"]]

    assert titles == [sooner.title, later.title]


def test_update_project_replaces_fields(client, make_project, session):
    project = make_project("Apollo", description="old")

    response = client.put(
        f"{PROJECTS}/{project.project_id}",
        json={"title": "Apollo II", "status": "Completed"},
    )

    assert response.status_code == 200
    updated = response.json()["project"]
    assert updated["title"] == "Apollo II"
    assert updated["status"] == "Completed"
    assert updated["description"] is None
    assert notices(session) == ["Project 'Apollo II' updated"]


def test_update_unknown_project(client):
    response = client.put(f"{PROJECTS}/404", json={"title": "x", "status": "Completed"})
    assert response.status_code == 404


def test_delete_project_cascades_tasks_and_notifies(client, make_employee, make_project, make_task, session):
    ann = make_employee(name="Ann")
    project = make_project("Apollo")
    doomed_ids = {make_task(project, employee_ids=[ann.id]).task_id for _ in range(2)}
    survivor_id = make_task(make_project("Gemini"), employee_ids=[ann.id]).task_id

    with client.websocket_connect("/ws") as ws:
        join(ws, ann.id)

        response = client.delete(f"{PROJECTS}/{project.project_id}")

        assert response.status_code == 200
        assert response.json()["message"] == "Project deleted successfully"
        deleted = {ws.receive_json()["data"]["taskId"] for _ in range(2)}
        assert deleted == doomed_ids

    session.expire_all()
    assert [t.task_id for t in session.exec(select(Task)).all()] == [survivor_id]
    assert [a.task_id for a in session.exec(select(TaskAssignment)).all()] == [survivor_id]
    assert notices(session)[-1] == "Project 'Apollo' deleted"


def test_delete_project_keeps_its_client(client, session):
    customer = Client(name="Acme", email="ops@acme.com")
    session.add(customer)
    session.commit()
    session.refresh(customer)
    created = client.post(PROJECTS, json={"title": "Apollo", "status": "On Hold", "client_id": customer.client_id})

    client.delete(f"{PROJECTS}/{created.json()['project']['project_id']}")

    assert [c["name"] for c in client.get("/api/v1/clients").json()["clients"]] == ["Acme"]
