def test_shortcuts_are_private(client, alice, bob) -> None:
    shortcut_id = client.post(
        "/api/shortcuts",
        json={"name": "Webmail", "url": "https://mail.corp", "icon_name": None},
        headers=alice,
    ).json()["id"]
    client.post("/api/shortcuts", json={"name": "RH", "url": "https://rh.corp"}, headers=alice)
    client.patch(f"/api/shortcuts/{shortcut_id}/favorite", json={"is_favorite": True}, headers=alice)

    shortcuts = client.get("/api/shortcuts", headers=alice).json()
    assert [s["name"] for s in shortcuts] == ["Webmail", "RH"]
    assert shortcuts[0]["icon_name"] == "Globe"
    assert client.get("/api/shortcuts", headers=bob).json() == []

    assert client.put(f"/api/shortcuts/{shortcut_id}", json={"name": "x"}, headers=bob).status_code == 404
    assert client.delete(f"/api/shortcuts/{shortcut_id}", headers=bob).status_code == 404
    assert client.put(f"/api/shortcuts/{shortcut_id}", json={"name": "E-mail"}, headers=alice).status_code == 200
    assert client.delete(f"/api/shortcuts/{shortcut_id}", headers=alice).status_code == 200
    assert [s["name"] for s in client.get("/api/shortcuts", headers=alice).json()] == ["RH"]


def test_system_shortcuts(client, alice, admin) -> None:
    body = {"name": "Chamados", "url": "https://help.corp"}
    assert client.post("/api/system-shortcuts", json=body, headers=alice).status_code == 403

    shortcut_id = client.post("/api/system-shortcuts", json=body, headers=admin).json()["id"]
    assert client.post("/api/system-shortcuts", json=body, headers=admin).status_code == 400

    listed = client.get("/api/system-shortcuts", headers=alice).json()
    assert [(s["id"], s["icon_name"]) for s in listed] == [(shortcut_id, "Box")]
    assert client.delete(f"/api/system-shortcuts/{shortcut_id}", headers=alice).status_code == 403
    assert client.delete(f"/api/system-shortcuts/{shortcut_id}", headers=admin).status_code == 200


def test_todos(client, alice, bob) -> None:
    todo_id = client.post("/api/todos", json={"text": "  enviar relatório "}, headers=alice).json()["id"]
    assert client.post("/api/todos", json={"text": " "}, headers=alice).status_code == 400

    assert client.patch(f"/api/todos/{todo_id}", json={"completed": True}, headers=bob).status_code == 404
    client.patch(f"/api/todos/{todo_id}", json={"completed": True}, headers=alice)
    todos = client.get("/api/todos", headers=alice).json()
    assert [(t["text"], t["completed"]) for t in todos] == [("enviar relatório", True)]

    client.delete(f"/api/todos/{todo_id}", headers=alice)
    assert client.get("/api/todos", headers=alice).json() == []


def test_note_upsert(client, alice, bob) -> None:
    assert client.get("/api/notes", headers=alice).json() == {"content": "", "updated_at": None}

    client.post("/api/notes", json={"content": "ligar para o fornecedor"}, headers=alice)
    client.post("/api/notes", json={"content": "ligar amanhã"}, headers=alice)

    note = client.get("/api/notes", headers=alice).json()
    assert note["content"] == "ligar amanhã"
    assert note["updated_at"] is not None
    assert client.get("/api/notes", headers=bob).json()["content"] == ""


def test_notifications_read_flow(client, alice, bob) -> None:
    client.post("/api/posts", data={"content": "@Bob e @Carol, vejam isto"}, headers=alice)

    notes = client.get("/api/notifications", headers=bob).json()
    assert len(notes) == 1 and notes[0]["is_read"] is False
    assert client.put(f"/api/notifications/{notes[0]['id']}/read", headers=alice).status_code == 404
    assert client.put(f"/api/notifications/{notes[0]['id']}/read", headers=bob).status_code == 200
    assert client.get("/api/notifications", headers=bob).json()[0]["is_read"] is True

    client.put("/api/notifications/read-all", headers=bob)
    assert all(n["is_read"] for n in client.get("/api/notifications", headers=bob).json())


def test_users_directory(client, alice) -> None:
    assert client.get("/api/users/me", headers=alice).json()["username"] == "alice"
    assert len(client.get("/api/users", headers=alice).json()) == 4
    assert client.get("/api/users/99", headers=alice).status_code == 404
    assert client.get("/health").json() == {"status": "healthy"}
