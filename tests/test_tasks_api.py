from sqlalchemy import func, select
from sqlalchemy.orm import Session

from conftest import make_user
from task_manager.models.task import Task

def create_task(client, headers, **body) -> dict:
    r = client.post("/api/tasks", json=body, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()

def test_requires_auth(client):
    r = client.get("/api/tasks")
    assert r.status_code == 401

    r = client.get("/api/tasks", headers={"authorization": "bearer not-a-jwt"})
    assert r.status_code == 401

def test_end_to_end_status_filter_and_sparse_update(client, headers):
    r = client.post("/api/task_statuses", json={"name": "Draft", "slug": "draft"}, headers=headers)
    assert r.status_code == 201, r.text
    draft_id = r.json()["id"]

    task = create_task(client, headers, title="Test Task", statusId=draft_id)
    assert task["status"] == "draft"
    assert task["statusId"] == draft_id

    r = client.get("/api/tasks", params={"status": "draft"}, headers=headers)
    assert r.status_code == 200
    assert [t["id"] for t in r.json()] == [task["id"]]
    assert r.headers["X-Total-Count"] == "1"

    r = client.put(f"/api/tasks/{task['id']}", json={"title": "Updated"}, headers=headers)
    assert r.status_code == 200, r.text

    r = client.get(f"/api/tasks/{task['id']}", headers=headers)
    assert r.status_code == 200
    assert r.json()["title"] == "Updated"
    assert r.json()["status"] == "draft"
    assert r.json()["content"] == ""

def test_create_defaults(client, headers, draft):
    task = create_task(client, headers)
    assert task["title"] == "Untitled Task"
    assert task["content"] == ""
    assert task["status"] == "draft"
    assert task["assigneeId"] is None
    assert task["labelIds"] == []
    assert task["createdAt"]

def test_create_with_aliases(client, headers, draft, labels, user):
    task = create_task(
        client,
        headers,
        name="Aliased",
        description="body",
        status="draft",
        assignee_id=user.id,
        taskLabelIds=[labels[1].id, labels[0].id],
    )
    assert task["title"] == "Aliased"
    assert task["content"] == "body"
    assert task["assigneeId"] == user.id
    assert task["labelIds"] == sorted(label.id for label in labels)

def test_create_with_unknown_status_persists_nothing(client, headers, db_session: Session, draft):
    r = client.post("/api/tasks", json={"title": "x", "statusId": 9999}, headers=headers)
    assert r.status_code == 404
    assert r.json()["detail"] == "Task status with id 9999 not found"
    assert db_session.scalar(select(func.count()).select_from(Task)) == 0

def test_create_without_default_status_is_404(client, headers):
    r = client.post("/api/tasks", json={"title": "x"}, headers=headers)
    assert r.status_code == 404
    assert "draft" in r.json()["detail"]

def test_create_with_unknown_labels(client, headers, draft, labels):
    r = client.post("/api/tasks", json={"labelIds": [labels[0].id, 555]}, headers=headers)
    assert r.status_code == 404
    assert r.json()["detail"] == "Labels not found for ids: [555]"

def test_update_label_semantics(client, headers, draft, labels):
    task = create_task(client, headers, title="t", labelIds=[labels[0].id])

    r = client.put(f"/api/tasks/{task['id']}", json={"content": "c"}, headers=headers)
    assert r.json()["labelIds"] == [labels[0].id]

    r = client.put(f"/api/tasks/{task['id']}", json={"labelIds": [labels[1].id]}, headers=headers)
    assert r.json()["labelIds"] == [labels[1].id]

    r = client.put(f"/api/tasks/{task['id']}", json={"labelIds": []}, headers=headers)
    assert r.json()["labelIds"] == []

def test_update_with_bad_label_applies_nothing(client, headers, db_session: Session, draft, labels, user):
    r = client.post("/api/task_statuses", json={"name": "Published", "slug": "published"}, headers=headers)
    assert r.status_code == 201
    task = create_task(client, headers, title="Keep", labelIds=[labels[0].id])

    r = client.put(
        f"/api/tasks/{task['id']}",
        json={"title": "Changed", "status": "published", "assigneeId": user.id, "labelIds": [404]},
        headers=headers,
    )
    assert r.status_code == 404

    db_session.expire_all()
    r = client.get(f"/api/tasks/{task['id']}", headers=headers)
    body = r.json()
    assert body["title"] == "Keep"
    assert body["status"] == "draft"
    assert body["assigneeId"] is None
    assert body["labelIds"] == [labels[0].id]

def test_update_assignee_explicit_null_unassigns(client, headers, draft, user):
    task = create_task(client, headers, title="t", assigneeId=user.id)

    r = client.put(f"/api/tasks/{task['id']}", json={"title": "t2"}, headers=headers)
    assert r.json()["assigneeId"] == user.id

    r = client.put(f"/api/tasks/{task['id']}", json={"assigneeId": None}, headers=headers)
    assert r.json()["assigneeId"] is None

def test_filters(client, headers, db_session: Session, draft, labels, user):
    other = make_user(db_session, "other@example.com")
    r = client.post("/api/task_statuses", json={"name": "Done", "slug": "done"}, headers=headers)
    assert r.status_code == 201

    a = create_task(client, headers, title="Quick fix", assigneeId=user.id, labelIds=[labels[1].id])
    b = create_task(client, headers, title="Write docs", status="done", assigneeId=other.id)
    c = create_task(client, headers, title="Fix CI", status="done", labelIds=[labels[0].id, labels[1].id])

    def ids(**params) -> list[int]:
        r = client.get("/api/tasks", params=params, headers=headers)
        assert r.status_code == 200, r.text
        assert r.headers["X-Total-Count"] == str(len(r.json()))
        return [t["id"] for t in r.json()]

    assert ids() == [a["id"], b["id"], c["id"]]
    assert ids(titleCont="FIX") == [a["id"], c["id"]]
    assert ids(assigneeId=user.id) == [a["id"]]
    assert ids(status="done") == [b["id"], c["id"]]
    assert ids(labelId=labels[1].id) == [a["id"], c["id"]]
    assert ids(status="done", labelId=labels[1].id) == [c["id"]]
    assert ids(titleCont="fix", assigneeId=other.id) == []
    assert ids(titleCont="") == [a["id"], b["id"], c["id"]]

def test_get_and_delete(client, headers, draft):
    task = create_task(client, headers, title="gone soon")

    r = client.delete(f"/api/tasks/{task['id']}", headers=headers)
    assert r.status_code == 204

    r = client.get(f"/api/tasks/{task['id']}", headers=headers)
    assert r.status_code == 404
    assert r.json()["detail"] == f"Task with id {task['id']} not found"

    r = client.delete(f"/api/tasks/{task['id']}", headers=headers)
    assert r.status_code == 404
