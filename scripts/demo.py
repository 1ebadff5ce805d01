from __future__ import annotations

import os
import time
import uuid

import requests
from rich import print

BASE = os.getenv("API_BASE_URL", "http://127.0.0.1:8000")
PASSWORD = "demo-password-123"

def request(method: str, path: str, *, jwt: str | None = None, json: dict | None = None) -> requests.Response:
    headers = {"content-type": "application/json"}
    if jwt:
        headers["authorization"] = f"bearer {jwt}"
    return requests.request(method, f"{BASE}{path}", headers=headers, json=json, timeout=10)

def register(email: str, name: str) -> tuple[str, str]:
    r = request("POST", "/auth/register", json={"email": email, "password": PASSWORD, "name": name})
    r.raise_for_status()
    jwt = r.json()["access_token"]

    r = request("GET", "/auth/me", jwt=jwt)
    r.raise_for_status()
    return jwt, r.json()["id"]

def expect(r: requests.Response, status: int, what: str) -> dict:
    if r.status_code != status:
        raise RuntimeError(f"{what}: expected {status}, got {r.status_code}: {r.text}")
    colour = "green" if status < 400 else "yellow"
    print(f"[{colour}]{status}[/{colour}] {what}")
    return r.json()

def wait_ready(timeout_s: float = 30.0) -> None:
    deadline = time.time() + timeout_s
    last_err: Exception | None = None

    while time.time() < deadline:
        try:
            r = request("GET", "/ready")
            if r.status_code == 200:
                return
        except requests.RequestException as e:
            last_err = e
        time.sleep(0.5)

    if last_err:
        raise RuntimeError(f"api not ready after {timeout_s}s (last error: {last_err})")
    raise RuntimeError(f"api not ready after {timeout_s}s")

def main() -> None:
    print("[bold]demo: owner, member and outsider walk the project -> board -> task chain[/bold]")

    wait_ready()
    print("[green]ready ok[/green]")

    run = uuid.uuid4().hex[:8]
    owner_jwt, _ = register(f"owner+{run}@example.com", "owner")
    member_jwt, member_id = register(f"member+{run}@example.com", "member")
    outsider_jwt, _ = register(f"outsider+{run}@example.com", "outsider")

    project = expect(request("POST", "/projects", jwt=owner_jwt, json={"name": "demo project"}), 201, "owner creates project")
    project_id = project["id"]

    expect(
        request("POST", f"/projects/{project_id}/members", jwt=owner_jwt, json={"user_id": member_id, "role": "member"}),
        201,
        "owner adds member",
    )

    board = expect(request("POST", f"/projects/{project_id}/boards", jwt=member_jwt, json={"name": "sprint 1"}), 201, "member creates board")
    board_id = board["id"]

    task = expect(
        request("POST", f"/boards/{board_id}/tasks", jwt=member_jwt, json={"title": "demo task", "assignee_id": member_id}),
        201,
        "member creates task assigned to self",
    )
    task_id = task["id"]

    expect(request("PATCH", f"/tasks/{task_id}", jwt=member_jwt, json={"status": "in-progress"}), 200, "member updates own task")
    expect(request("PATCH", f"/boards/{board_id}", jwt=member_jwt, json={"name": "renamed"}), 403, "member renames board")
    expect(request("PATCH", f"/tasks/{task_id}", jwt=outsider_jwt, json={"title": "hacked"}), 403, "outsider updates task")
    expect(request("GET", f"/tasks/{uuid.uuid4()}", jwt=member_jwt), 404, "member reads unknown task")
    expect(request("GET", f"/projects/{project_id}"), 401, "anonymous reads project")

    expect(request("DELETE", f"/projects/{project_id}", jwt=owner_jwt), 200, "owner deletes project")
    print("[bold green]demo complete[/bold green]")

if __name__ == "__main__":
    main()
