from datetime import datetime, timezone

from app.models import ClockRecord

NOTIFICATIONS = "/api/v1/notifications"
ATTENDANCE = "/api/v1/attendance"


def test_notifications_are_listed_newest_first(client):
    for message in ("first", "second", "third"):
        assert client.post(NOTIFICATIONS, json={"message": message}).status_code == 201

    listed = client.get(NOTIFICATIONS).json()["notifications"]

    assert [n["message"] for n in listed] == ["third", "second", "first"]


def test_notification_requires_message(client):
    response = client.post(NOTIFICATIONS, json={"message": ""})
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_notifications_are_not_per_employee(client, current_user, make_employee):
    client.post(NOTIFICATIONS, json={"message": "Office closed Friday"})
    current_user.act_as(make_employee(name="Plain"))

    assert [n["message"] for n in client.get(NOTIFICATIONS).json()["notifications"]] == ["Office closed Friday"]


def test_attendance_counts_todays_clock_ins(client, current_user, make_employee, session):
    # admin plus three employees
    ann, ben, _ = (make_employee(name=name) for name in ("Ann", "Ben", "Cai"))
    session.add(ClockRecord(employee_id=ben.id, clock_in=datetime(2020, 1, 1, 9, 0, tzinfo=timezone.utc)))
    session.commit()

    current_user.act_as(ann)
    assert client.post(f"{ATTENDANCE}/clock-in").status_code == 201
    assert client.post(f"{ATTENDANCE}/clock-out").status_code == 200
    assert client.post(f"{ATTENDANCE}/clock-in").status_code == 201

    summary = client.get(ATTENDANCE).json()["attendance"]

    assert summary == {"present": 1, "absent": 3}


def test_clock_in_twice_is_rejected(client):
    assert client.post(f"{ATTENDANCE}/clock-in").status_code == 201

    response = client.post(f"{ATTENDANCE}/clock-in")

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Already clocked in"}


def test_clock_out_without_clock_in_is_rejected(client):
    response = client.post(f"{ATTENDANCE}/clock-out")
    assert response.status_code == 400
    assert response.json()["message"] == "Not clocked in"


def test_clock_out_closes_the_open_record(client):
    opened = client.post(f"{ATTENDANCE}/clock-in").json()["record"]
    assert opened["clock_out"] is None

    closed = client.post(f"{ATTENDANCE}/clock-out").json()["record"]

    assert closed["id"] == opened["id"]
    assert closed["clock_out"] is not None


def test_health(anonymous_client):
    assert anonymous_client.get("/api/v1/health").json() == {"success": True, "status": "ok"}
