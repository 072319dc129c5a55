import sqlite3


def _invites(db_path: str, user_id: int) -> int:
    with sqlite3.connect(db_path) as conn:
        return conn.execute(
            "SELECT COUNT(*) FROM notifications WHERE user_id = ? AND type = 'calendar_invite'", (user_id,)
        ).fetchone()[0]


def _event(title: str, **extra) -> dict:
    return {"title": title, "event_date": "2026-11-10", **extra}


def test_private_event_is_hidden(client, alice, bob, admin) -> None:
    event_id = client.post("/api/events", json=_event("1:1", visibility="private"), headers=alice).json()["id"]

    assert client.get("/api/events", headers=bob).json() == []
    assert client.get(f"/api/events/{event_id}", headers=bob).status_code == 403
    assert client.get(f"/api/events/{event_id}", headers=alice).status_code == 200
    assert [e["id"] for e in client.get("/api/events", headers=admin).json()] == [event_id]


def test_missing_event_is_not_found(client, alice) -> None:
    resp = client.get("/api/events/999", headers=alice)
    assert resp.status_code == 404
    assert resp.json() == {"error": "Event not found"}


def test_shared_event_invites_each_sharee_once(client, alice, bob, carol, db_path) -> None:
    event_id = client.post(
        "/api/events",
        json=_event("Planejamento", visibility="shared", shared_with=[2, 2, 1]),
        headers=alice,
    ).json()["id"]

    event = client.get(f"/api/events/{event_id}", headers=bob).json()
    assert event["shared_with"] == [2]
    assert client.get(f"/api/events/{event_id}", headers=carol).status_code == 403
    assert _invites(db_path, 2) == 1
    assert _invites(db_path, 1) == 0

    resp = client.put(
        f"/api/events/{event_id}",
        json=_event("Planejamento Q1", visibility="shared", shared_with=[2, 3]),
        headers=alice,
    )
    assert resp.status_code == 200
    # Bob was already invited; only Carol is new
    assert _invites(db_path, 2) == 1
    assert _invites(db_path, 3) == 1
    assert client.get(f"/api/events/{event_id}", headers=carol).json()["title"] == "Planejamento Q1"


def test_only_author_or_admin_changes_event(client, alice, bob, admin) -> None:
    event_id = client.post("/api/events", json=_event("Festa"), headers=alice).json()["id"]

    assert client.put(f"/api/events/{event_id}", json=_event("x"), headers=bob).status_code == 403
    assert client.delete(f"/api/events/{event_id}", headers=bob).status_code == 403
    assert client.delete(f"/api/events/{event_id}", headers=admin).status_code == 200
    assert client.get("/api/events", headers=alice).json() == []


def test_events_are_in_calendar_order(client, alice) -> None:
    client.post("/api/events", json=_event("depois", event_date="2026-12-01"), headers=alice)
    client.post("/api/events", json=_event("tarde", event_time="15:00:00"), headers=alice)
    client.post("/api/events", json=_event("manhã", event_time="09:00:00"), headers=alice)

    titles = [e["title"] for e in client.get("/api/events", headers=alice).json()]
    assert titles == ["manhã", "tarde", "depois"]
