from __future__ import annotations

import os
import time
import uuid

import requests
from rich import print

BASE = os.getenv("API_BASE_URL", "http://127.0.0.1:8000")

def request(method: str, path: str, *, jwt: str | None = None, json: dict | None = None) -> requests.Response:
    headers = {"content-type": "application/json"}
    if jwt:
        headers["authorization"] = f"bearer {jwt}"
    return requests.request(method, f"{BASE}{path}", headers=headers, json=json, timeout=10)

def login(email: str, password: str) -> str:
    r = request("POST", "/auth/login", json={"email": email, "password": password})
    r.raise_for_status()
    return r.json()["access_token"]

def create_user(owner_jwt: str, role: str) -> tuple[str, str, str]:
    email = f"{role}+{uuid.uuid4().hex[:8]}@example.com"
    r = request("POST", "/users", jwt=owner_jwt, json={"email": email, "name": f"demo {role}", "role": role})
    r.raise_for_status()
    body = r.json()
    return body["user"]["id"], email, body["password"]

def wait_ready(timeout_s: float = 30.0) -> None:
    deadline = time.time() + timeout_s
    last_err: Exception | None = None

    while time.time() < deadline:
        try:
            r = request("GET", "/ready")
            if r.status_code == 200:
                return
        except Exception as e:
            last_err = e
        time.sleep(0.5)

    if last_err:
        raise RuntimeError(f"api not ready after {timeout_s}s (last error: {last_err})")
    raise RuntimeError(f"api not ready after {timeout_s}s")

def main() -> None:
    print("[bold]demo: seed -> owner creates task -> viewer vs admin listing -> audit log[/bold]")

    wait_ready()
    print("[green]ready ok[/green]")

    r = request("POST", "/users/seed")
    r.raise_for_status()
    owner_email = r.json()["owner"]["email"]
    owner_jwt = login(owner_email, os.getenv("SEED_OWNER_PASSWORD", "password123"))
    print("owner authed:", owner_email)

    _, admin_email, admin_pw = create_user(owner_jwt, "admin")
    _, viewer_email, viewer_pw = create_user(owner_jwt, "viewer")
    admin_jwt = login(admin_email, admin_pw)
    viewer_jwt = login(viewer_email, viewer_pw)
    print("created admin + viewer")

    r = request("POST", "/tasks", jwt=owner_jwt, json={"title": "T1", "category": "work"})
    r.raise_for_status()
    t1 = r.json()
    print("owner created task:", t1["id"], "status:", t1["status"])

    r = request("GET", "/tasks", jwt=viewer_jwt)
    r.raise_for_status()
    seen = {t["id"] for t in r.json()}
    print("viewer sees T1:", t1["id"] in seen)

    r = request("GET", "/tasks", jwt=admin_jwt)
    r.raise_for_status()
    seen = {t["id"] for t in r.json()}
    print("admin sees T1:", t1["id"] in seen)

    r = request("DELETE", f"/tasks/{t1['id']}", jwt=viewer_jwt)
    print("viewer delete status:", r.status_code)

    r = request("GET", "/audit-log", jwt=admin_jwt)
    r.raise_for_status()
    print("audit entries visible to admin:", len(r.json()))
    print("[bold green]demo complete[/bold green]")

if __name__ == "__main__":
    main()
