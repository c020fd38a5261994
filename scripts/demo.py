from __future__ import annotations

import os
import time

import requests
from rich import print

BASE = os.getenv("API_BASE_URL", "http://127.0.0.1:8000")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "hexlet@example.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "qwerty")

def _headers(jwt: str | None) -> dict[str, str]:
    headers = {"content-type": "application/json"}
    if jwt:
        headers["authorization"] = f"bearer {jwt}"
    return headers

def post(path: str, *, jwt: str | None = None, json: dict | None = None) -> requests.Response:
    return requests.post(f"{BASE}{path}", headers=_headers(jwt), json=json, timeout=10)

def put(path: str, *, jwt: str | None = None, json: dict | None = None) -> requests.Response:
    return requests.put(f"{BASE}{path}", headers=_headers(jwt), json=json, timeout=10)

def get(path: str, *, jwt: str | None = None, params: dict | None = None) -> requests.Response:
    return requests.get(f"{BASE}{path}", headers=_headers(jwt), params=params, timeout=10)

def login(email: str, password: str) -> str:
    r = post("/api/login", json={"username": email, "password": password})
    r.raise_for_status()
    return r.json()["token"]

def wait_ready(timeout_s: float = 30.0) -> None:
    deadline = time.time() + timeout_s
    last_err: Exception | None = None

    while time.time() < deadline:
        try:
            r = get("/ready")
            if r.status_code == 200:
                return
        except requests.RequestException as e:
            last_err = e
        time.sleep(0.5)

    if last_err:
        raise RuntimeError(f"api not ready after {timeout_s}s (last error: {last_err})")
    raise RuntimeError(f"api not ready after {timeout_s}s")

def main() -> None:
    print("[bold]demo: login -> create task -> filter -> update -> re-fetch[/bold]")

    wait_ready()
    print("[green]ready ok[/green]")

    jwt = login(ADMIN_EMAIL, ADMIN_PASSWORD)
    print("admin authed")

    # seeded statuses include draft; no status in the body falls back to it
    r = post("/api/tasks", jwt=jwt, json={"title": f"demo task {int(time.time())}"})
    r.raise_for_status()
    task = r.json()
    print("created task:", task["id"], "status:", task["status"])

    r = get("/api/tasks", jwt=jwt, params={"status": "draft", "titleCont": "DEMO"})
    r.raise_for_status()
    print("draft demo tasks:", r.headers.get("X-Total-Count"))

    r = put(f"/api/tasks/{task['id']}", jwt=jwt, json={"title": "demo task, renamed"})
    r.raise_for_status()

    r = get(f"/api/tasks/{task['id']}", jwt=jwt)
    r.raise_for_status()
    print("re-fetched:", r.json()["title"], "status:", r.json()["status"])
    print("[bold green]demo complete[/bold green]")

if __name__ == "__main__":
    main()
