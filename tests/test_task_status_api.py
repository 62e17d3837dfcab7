import pytest

from helpers import assert_no_pending_event, join

TASK_STATUS = "/api/v1/taskstatus"


@pytest.fixture()
def worker(make_employee):
    return make_employee(name="Worker")


@pytest.fixture()
def task(make_project, make_task, worker):
    return make_task(make_project(), employee_ids=[worker.id])


def test_assignee_moves_task_and_everyone_assigned_hears(client, current_user, worker, task):
    current_user.act_as(worker)

    with client.websocket_connect("/ws") as ws:
        join(ws, worker.id)

        response = client.put(f"{TASK_STATUS}/{task.task_id}", json={"status": "in-progress"})

        assert response.status_code == 200
        assert response.json()["task"]["status"] == "in_progress"
        assert response.json()["task"]["employee_ids"] == [worker.id]
        assert ws.receive_json() == {
            "event": "taskUpdated",
            "data": {"taskId": task.task_id, "status": "in_progress", "message": f"Task #{task.task_id} has been updated"},
        }
        assert_no_pending_event(ws)


def test_employee_cannot_move_someone_elses_task(client, current_user, make_employee, task):
    current_user.act_as(make_employee(name="Bystander"))

    response = client.put(f"{TASK_STATUS}/{task.task_id}", json={"status": "completed"})

    assert response.status_code == 403
    assert response.json() == {"success": False, "message": "Not authorized to update this task"}


def test_manager_may_move_any_task(client, task):
    response = client.put(f"{TASK_STATUS}/{task.task_id}", json={"status": "COMPLETED"})
    assert response.status_code == 200
    assert response.json()["task"]["status"] == "completed"


def test_status_must_be_known(client, task):
    response = client.put(f"{TASK_STATUS}/{task.task_id}", json={"status": "archived"})
    assert response.status_code == 400
    assert response.json()["message"] == "Missing or invalid fields: status"


def test_status_of_unknown_task(client):
    response = client.put(f"{TASK_STATUS}/8080", json={"status": "pending"})
    assert response.status_code == 404
