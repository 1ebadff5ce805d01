from sqlalchemy.orm import Session

from taskboard.auth.bootstrap import ensure_bootstrap_admin

PASSWORD = "correct-horse-battery"

def login(client, email: str) -> str:
    r = client.post("/auth/register", json={"email": email, "password": PASSWORD, "name": "x"})
    assert r.status_code == 201
    r = client.post("/auth/login", json={"email": email, "password": PASSWORD})
    assert r.status_code == 200
    return r.json()["access_token"]

def auth_headers(jwt: str) -> dict[str, str]:
    return {"authorization": f"bearer {jwt}"}

def test_project_listing_is_scoped(client, db_session: Session):
    a = login(client, "a@example.com")
    b = login(client, "b@example.com")

    r = client.post("/projects", json={"name": "p-a"}, headers=auth_headers(a))
    assert r.status_code == 201
    project_a = r.json()["id"]

    r = client.post("/projects", json={"name": "p-b"}, headers=auth_headers(b))
    assert r.status_code == 201
    project_b = r.json()["id"]

    r = client.get("/projects", headers=auth_headers(a))
    assert r.status_code == 200
    assert [p["id"] for p in r.json()] == [project_a]

    # b is not a member of project_a, should be blocked
    r = client.get(f"/projects/{project_a}", headers=auth_headers(b))
    assert r.status_code == 403

    # also block direct update attempt (even if you guessed the id)
    r = client.patch(f"/projects/{project_a}", json={"name": "hacked"}, headers=auth_headers(b))
    assert r.status_code == 403

    # admins see everything
    ensure_bootstrap_admin(db_session, email="root@example.com", password=PASSWORD)
    r = client.post("/auth/login", json={"email": "root@example.com", "password": PASSWORD})
    assert r.status_code == 200
    admin = r.json()["access_token"]

    r = client.get("/projects", headers=auth_headers(admin))
    assert {p["id"] for p in r.json()} == {project_a, project_b}

def test_joined_projects_are_listed(client):
    a = login(client, "a@example.com")
    b = login(client, "b@example.com")
    b_id = client.get("/auth/me", headers=auth_headers(b)).json()["id"]

    r = client.post("/projects", json={"name": "shared"}, headers=auth_headers(a))
    project_id = r.json()["id"]
    r = client.post(f"/projects/{project_id}/members", json={"user_id": b_id}, headers=auth_headers(a))
    assert r.status_code == 201

    r = client.get("/projects", headers=auth_headers(b))
    assert [p["id"] for p in r.json()] == [project_id]

def test_deleting_a_project_cascades(client):
    a = login(client, "a@example.com")

    r = client.post("/projects", json={"name": "doomed"}, headers=auth_headers(a))
    project_id = r.json()["id"]
    r = client.post(f"/projects/{project_id}/boards", json={"name": "b"}, headers=auth_headers(a))
    board_id = r.json()["id"]
    r = client.post(f"/boards/{board_id}/tasks", json={"title": "t"}, headers=auth_headers(a))
    task_id = r.json()["id"]

    r = client.delete(f"/projects/{project_id}", headers=auth_headers(a))
    assert r.status_code == 200

    assert client.get(f"/projects/{project_id}", headers=auth_headers(a)).status_code == 404
    assert client.get(f"/boards/{board_id}", headers=auth_headers(a)).status_code == 404
    assert client.get(f"/tasks/{task_id}", headers=auth_headers(a)).status_code == 404
