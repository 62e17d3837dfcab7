CLIENTS = "/api/v1/clients"


def test_create_and_list_clients(client):
    response = client.post(CLIENTS, json={"name": "Acme", "email": "ops@acme.com", "phone": "555-0100"})

    assert response.status_code == 201
    created = response.json()["client"]
    assert created["name"] == "Acme"
    assert created["phone"] == "555-0100"

    listed = client.get(CLIENTS).json()
    assert listed["success"] is True
    assert [c["client_id"] for c in listed["clients"]] == [created["client_id"]]


def test_create_client_requires_name_and_email(client):
    response = client.post(CLIENTS, json={"phone": "555-0100"})
    assert response.status_code == 400
    assert response.json()["message"] == "Missing or invalid fields: name, email"


def test_create_client_rejects_bad_email(client):
    response = client.post(CLIENTS, json={"name": "Acme", "email": "not-an-email"})
    assert response.status_code == 400


def test_employee_cannot_create_client(client, current_user, make_employee):
    current_user.act_as(make_employee(name="Plain"))
    response = client.post(CLIENTS, json={"name": "Acme", "email": "ops@acme.com"})
    assert response.status_code == 403
    assert response.json() == {"success": False, "message": "Access Denied"}


def test_delete_client_detaches_projects(client):
    customer = client.post(CLIENTS, json={"name": "Acme", "email": "ops@acme.com"}).json()["client"]
    project = client.post(
        "/api/v1/projects",
        json={"title": "Apollo", "status": "In Progress", "client_id": customer["client_id"]},
    ).json()["project"]

    response = client.delete(f"{CLIENTS}/{customer['client_id']}")

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Client deleted successfully"}
    assert client.get(CLIENTS).json()["clients"] == []
    kept = client.get(f"/api/v1/projects/{project['project_id']}").json()["project"]
    assert kept["client_id"] is None


def test_delete_unknown_client(client):
    response = client.delete(f"{CLIENTS}/12")
    assert response.status_code == 404
    assert response.json()["message"] == "Client not found"
