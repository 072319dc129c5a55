def _names(results, kind=None):
    return [r["name"] for r in results if kind is None or r["type"] == kind]


def _event(client, headers, title, **extra) -> int:
    body = {"title": title, "event_date": "2026-11-10", **extra}
    return client.post("/api/events", json=body, headers=headers).json()["id"]


def _folder(client, headers, name) -> int:
    return client.post("/api/drive/folders", json={"name": name}, headers=headers).json()["id"]


def _upload(client, headers, name, folder_id=None) -> int:
    data = {"folder_id": str(folder_id)} if folder_id is not None else {}
    resp = client.post(
        "/api/drive/upload",
        data=data,
        files={"file": (name, b"%PDF-1.4 teste", "application/pdf")},
        headers=headers,
    )
    return resp.json()["id"]


def test_short_or_blank_query_returns_nothing(client, alice) -> None:
    empty = {"users": [], "events": [], "documents": []}
    assert client.get("/api/search", params={"q": "a"}, headers=alice).json() == empty
    assert client.get("/api/search", headers=alice).json() == empty


def test_users_match_name_and_wildcards_are_literal(client, alice) -> None:
    users = client.get("/api/search", params={"q": "li"}, headers=alice).json()["users"]
    assert _names(users) == ["Alice Souza", "Bob Lima"]
    assert users[0]["type"] == "user"

    assert client.get("/api/search", params={"q": "%%"}, headers=alice).json()["users"] == []


def test_events_follow_calendar_visibility(client, alice, bob, carol, admin) -> None:
    _event(client, alice, "Budget review", visibility="private")
    _event(client, alice, "Budget kickoff")
    _event(client, alice, "Budget planning", visibility="shared", shared_with=[3])

    def found(headers):
        return sorted(_names(client.get("/api/search", params={"q": "budget"}, headers=headers).json()["events"]))

    assert found(bob) == ["Budget kickoff"]
    assert found(carol) == ["Budget kickoff", "Budget planning"]
    assert found(alice) == ["Budget kickoff", "Budget planning", "Budget review"]
    assert found(admin) == ["Budget kickoff", "Budget planning", "Budget review"]


def test_documents_follow_drive_access(client, alice, bob, admin) -> None:
    _folder(client, alice, "Contratos")
    shared_id = _folder(client, alice, "Contratos 2026")
    old_id = _folder(client, alice, "Contratos velhos")
    client.post(
        f"/api/drive/folders/{shared_id}/share",
        json={"target_user_id": 2, "permission": "READ"},
        headers=alice,
    )
    client.post(f"/api/drive/folders/{old_id}/trash", headers=alice)
    _upload(client, alice, "contratos.pdf", folder_id=shared_id)
    _upload(client, alice, "contratos-pessoal.pdf")

    def documents(headers):
        return client.get("/api/search", params={"q": "contrat"}, headers=headers).json()["documents"]

    assert _names(documents(bob), "folder") == ["Contratos 2026"]
    assert _names(documents(bob), "file") == ["contratos.pdf"]

    assert _names(documents(alice), "folder") == ["Contratos", "Contratos 2026"]
    assert _names(documents(alice), "file") == ["contratos-pessoal.pdf", "contratos.pdf"]
    assert _names(documents(admin), "folder") == ["Contratos", "Contratos 2026"]


def test_search_requires_token(client) -> None:
    assert client.get("/api/search", params={"q": "alice"}).status_code == 401
