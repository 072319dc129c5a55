import os
import sqlite3


def _upload(client, headers, name="relatorio.pdf", content=b"%PDF-1.4 teste", folder_id=None):
    data = {"folder_id": str(folder_id)} if folder_id is not None else {}
    return client.post(
        "/api/drive/upload",
        data=data,
        files={"file": (name, content, "application/pdf")},
        headers=headers,
    )


def _folder(client, headers, name, parent_id=None) -> int:
    resp = client.post("/api/drive/folders", json={"name": name, "parent_id": parent_id}, headers=headers)
    assert resp.status_code == 200
    return resp.json()["id"]


def _stored_names(db_path: str):
    with sqlite3.connect(db_path) as conn:
        return [row[0] for row in conn.execute("SELECT filename FROM user_files")]


def test_root_items_are_private(client, alice, bob, admin) -> None:
    file_id = _upload(client, alice).json()["id"]
    folder_id = _folder(client, alice, "Pessoal")

    assert client.get(f"/api/drive/files/{file_id}", headers=bob).status_code == 403
    assert client.get(f"/api/drive/folders/{folder_id}", headers=bob).status_code == 403
    assert client.get("/api/drive/folders", headers=bob).json() == []
    # Administrators may read folders but never own them
    assert client.get(f"/api/drive/folders/{folder_id}", headers=admin).status_code == 200
    assert client.delete(f"/api/drive/folders/{folder_id}", headers=admin).status_code == 403


def test_write_share_allows_upload_but_not_delete(client, alice, bob, db_path) -> None:
    folder_id = _folder(client, alice, "Equipe")
    owner_file = _upload(client, alice, folder_id=folder_id).json()["id"]

    resp = client.post(
        f"/api/drive/folders/{folder_id}/share",
        json={"target_user_id": 2, "permission": "WRITE"},
        headers=alice,
    )
    assert resp.status_code == 200

    shared = client.get("/api/drive/folders", headers=bob).json()
    assert [(f["id"], f["permission"]) for f in shared] == [(folder_id, "WRITE")]

    resp = _upload(client, bob, name="ata.pdf", folder_id=folder_id)
    assert resp.status_code == 200
    names = [f["original_name"] for f in client.get(f"/api/drive/files?folder_id={folder_id}", headers=alice).json()]
    assert sorted(names) == ["ata.pdf", "relatorio.pdf"]

    assert client.delete(f"/api/drive/files/{owner_file}", headers=bob).status_code == 403
    assert client.delete(f"/api/drive/folders/{folder_id}", headers=bob).status_code == 403
    assert client.put(f"/api/drive/files/{owner_file}", json={"name": "x.pdf"}, headers=bob).status_code == 403

    with sqlite3.connect(db_path) as conn:
        kinds = [row[0] for row in conn.execute("SELECT type FROM notifications WHERE user_id = 2")]
    assert kinds == ["drive_share"]


def test_read_share_cannot_upload(client, alice, bob) -> None:
    folder_id = _folder(client, alice, "Leitura")
    client.post(f"/api/drive/folders/{folder_id}/share", json={"target_user_id": 2}, headers=alice)

    assert client.get(f"/api/drive/folders/{folder_id}", headers=bob).json()["permission"] == "READ"
    assert _upload(client, bob, folder_id=folder_id).status_code == 403
    assert client.post("/api/drive/folders", json={"name": "sub", "parent_id": folder_id}, headers=bob).status_code == 403


def test_permission_is_inherited_by_subfolders(client, alice, bob, carol) -> None:
    parent = _folder(client, alice, "Projetos")
    child = _folder(client, alice, "2026", parent_id=parent)
    grandchild = _folder(client, alice, "Q1", parent_id=child)
    client.post(f"/api/drive/folders/{parent}/share", json={"target_user_id": 2, "permission": "WRITE"}, headers=alice)

    assert client.get(f"/api/drive/folders/{grandchild}", headers=bob).json()["permission"] == "WRITE"
    children = client.get(f"/api/drive/folders?parent_id={parent}", headers=bob).json()
    assert [(c["name"], c["permission"]) for c in children] == [("2026", "WRITE")]
    assert client.get(f"/api/drive/folders/{grandchild}", headers=carol).status_code == 403

    # The nearest share wins
    client.post(f"/api/drive/folders/{child}/share", json={"target_user_id": 2, "permission": "READ"}, headers=alice)
    assert client.get(f"/api/drive/folders/{grandchild}", headers=bob).json()["permission"] == "READ"


def test_folder_delete_cascades(client, alice, bob, settings, db_path) -> None:
    parent = _folder(client, alice, "Arquivo")
    child = _folder(client, alice, "Antigo", parent_id=parent)
    _upload(client, alice, folder_id=parent)
    _upload(client, alice, name="velho.pdf", folder_id=child)
    kept = _upload(client, alice, name="raiz.pdf").json()["id"]
    client.post(f"/api/drive/folders/{child}/share", json={"target_user_id": 2}, headers=alice)

    stored = _stored_names(db_path)
    assert all(os.path.exists(os.path.join(settings.UPLOAD_DIR, name)) for name in stored)

    assert client.delete(f"/api/drive/folders/{parent}", headers=alice).status_code == 200

    assert client.get(f"/api/drive/folders/{child}", headers=alice).status_code == 404
    assert client.get("/api/drive/shared", headers=bob).json() == []
    remaining = _stored_names(db_path)
    assert len(remaining) == 1
    assert client.get(f"/api/drive/files/{kept}", headers=alice).status_code == 200
    for name in set(stored) - set(remaining):
        assert not os.path.exists(os.path.join(settings.UPLOAD_DIR, name))


def test_trash_restore_and_favorites(client, alice) -> None:
    folder_id = _folder(client, alice, "Docs")
    file_id = _upload(client, alice).json()["id"]

    client.post(f"/api/drive/files/{file_id}/favorite", json={"is_favorite": True}, headers=alice)
    assert [i["item_type"] for i in client.get("/api/drive/favorites", headers=alice).json()] == ["file"]

    assert client.post(f"/api/drive/folders/{folder_id}/trash", headers=alice).status_code == 200
    assert client.get("/api/drive/folders", headers=alice).json() == []
    assert [i["id"] for i in client.get("/api/drive/trash", headers=alice).json()] == [folder_id]

    client.post(f"/api/drive/folders/{folder_id}/restore", headers=alice)
    assert client.get("/api/drive/trash", headers=alice).json() == []
    assert len(client.get("/api/drive/recent", headers=alice).json()) == 2

    assert client.post(f"/api/drive/widgets/{file_id}/trash", headers=alice).status_code == 400


def test_storage_quota(client, alice, db_path) -> None:
    with sqlite3.connect(db_path) as conn:
        conn.execute("UPDATE users SET storage_quota = 20 WHERE id = 1")
        conn.commit()

    assert _upload(client, alice, content=b"0123456789").status_code == 200
    assert client.get("/api/drive/storage-stats", headers=alice).json() == {"used": 10, "quota": 20}

    resp = _upload(client, alice, content=b"0123456789ABC")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Storage quota exceeded"}


def test_share_rules(client, alice, bob) -> None:
    folder_id = _folder(client, alice, "Compartilhar")

    assert client.post(f"/api/drive/folders/{folder_id}/share", json={"target_user_id": 1}, headers=alice).status_code == 400
    assert client.post(f"/api/drive/folders/{folder_id}/share", json={"target_user_id": 99}, headers=alice).status_code == 404
    assert client.post(f"/api/drive/folders/{folder_id}/share", json={"target_user_id": 3}, headers=bob).status_code == 403

    client.post(f"/api/drive/folders/{folder_id}/share", json={"target_user_id": 2}, headers=alice)
    shares = client.get(f"/api/drive/folders/{folder_id}/shares", headers=alice).json()
    assert [(s["user_id"], s["user_name"]) for s in shares] == [(2, "Bob Lima")]

    # A sharee may leave
    assert client.delete(f"/api/drive/folders/{folder_id}/shares/2", headers=bob).status_code == 200
    assert client.get(f"/api/drive/folders/{folder_id}", headers=bob).status_code == 403
