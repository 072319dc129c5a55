import sqlite3


def _count(db_path: str, sql: str, *params) -> int:
    with sqlite3.connect(db_path) as conn:
        return conn.execute(sql, params).fetchone()[0]


def _project(client, headers, **fields) -> int:
    resp = client.post("/api/projects", json={"name": "Intranet 2.0", **fields}, headers=headers)
    assert resp.status_code == 200
    return resp.json()["id"]


def test_creator_is_the_single_owner(client, alice, db_path) -> None:
    project_id = _project(client, alice, members=[1, 2, 2, 3])

    assert _count(db_path, "SELECT COUNT(*) FROM project_members WHERE project_id = ?", project_id) == 3
    assert _count(
        db_path, "SELECT COUNT(*) FROM project_members WHERE project_id = ? AND role = 'owner'", project_id
    ) == 1
    members = client.get(f"/api/projects/{project_id}/members", headers=alice).json()
    assert [(m["user_id"], m["role"]) for m in members] == [(1, "owner"), (2, "member"), (3, "member")]
    assert _count(db_path, "SELECT COUNT(*) FROM notifications WHERE type = 'project_invite'") == 2


def test_unknown_member_is_rejected(client, alice, db_path) -> None:
    resp = client.post("/api/projects", json={"name": "X", "members": [42]}, headers=alice)
    assert resp.status_code == 400
    assert _count(db_path, "SELECT COUNT(*) FROM projects") == 0


def test_private_project_visibility(client, alice, bob, carol, admin) -> None:
    project_id = _project(client, alice, visibility="private", members=[2])

    assert client.get(f"/api/projects/{project_id}", headers=bob).status_code == 200
    assert client.get(f"/api/projects/{project_id}", headers=carol).status_code == 403
    assert client.get("/api/projects", headers=carol).json() == []
    listed = client.get("/api/projects", headers=admin).json()
    assert [(p["id"], p["member_count"]) for p in listed] == [(project_id, 2)]


def test_member_roles(client, alice, bob, carol) -> None:
    project_id = _project(client, alice)

    assert client.post(f"/api/projects/{project_id}/members", json={"user_id": 2}, headers=bob).status_code == 403
    assert client.post(
        f"/api/projects/{project_id}/members", json={"user_id": 2, "role": "admin"}, headers=alice
    ).status_code == 200
    assert client.post(f"/api/projects/{project_id}/members", json={"user_id": 2}, headers=alice).status_code == 400

    # A project admin manages members but cannot touch the owner
    assert client.post(
        f"/api/projects/{project_id}/members", json={"user_id": 3, "role": "viewer"}, headers=bob
    ).status_code == 200
    assert client.delete(f"/api/projects/{project_id}/members/1", headers=bob).status_code == 400
    assert client.put(
        f"/api/projects/{project_id}/members/3", json={"role": "member"}, headers=bob
    ).status_code == 200
    assert client.delete(f"/api/projects/{project_id}/members/3", headers=bob).status_code == 200

    # Only the owner (or a portal admin) deletes the project
    assert client.delete(f"/api/projects/{project_id}", headers=bob).status_code == 403
    assert client.delete(f"/api/projects/{project_id}", headers=alice).status_code == 200


def test_update_archive_and_stats(client, alice) -> None:
    project_id = _project(client, alice)
    client.put(f"/api/projects/{project_id}", json={"description": "Novo portal", "name": None}, headers=alice)
    client.patch(f"/api/projects/{project_id}/archive", json={"is_archived": True}, headers=alice)

    project = client.get(f"/api/projects/{project_id}", headers=alice).json()
    assert project["name"] == "Intranet 2.0"
    assert project["description"] == "Novo portal"
    assert project["is_archived"] is True

    for status in ("todo", "done", "done", "review"):
        client.post(f"/api/projects/{project_id}/tasks", json={"title": status, "status": status}, headers=alice)
    stats = client.get(f"/api/projects/{project_id}/stats", headers=alice).json()
    assert stats == {
        "total_tasks": 4,
        "completed_tasks": 2,
        "in_progress_tasks": 0,
        "todo_tasks": 1,
        "review_tasks": 1,
    }


def test_duplicate_resets_tasks(client, alice, bob) -> None:
    project_id = _project(client, alice, members=[2])
    client.post(
        f"/api/projects/{project_id}/tasks",
        json={"title": "Publicar", "status": "done", "assignees": [2], "subtasks": ["revisar", "aprovar"]},
        headers=alice,
    )

    copy_id = client.post(f"/api/projects/{project_id}/duplicate", json={}, headers=bob).json()["id"]
    copy = client.get(f"/api/projects/{copy_id}", headers=bob).json()
    assert copy["name"] == "Intranet 2.0 (Cópia)"
    assert copy["owner_id"] == 2

    tasks = client.get(f"/api/projects/{copy_id}/tasks", headers=bob).json()
    assert len(tasks) == 1
    assert tasks[0]["status"] == "todo"
    assert tasks[0]["completed_at"] is None
    assert tasks[0]["assignees"] == []
    assert [s["title"] for s in tasks[0]["subtasks"]] == ["revisar", "aprovar"]
