import sqlite3


def _active_count(db_path: str) -> int:
    with sqlite3.connect(db_path) as conn:
        return conn.execute("SELECT COUNT(*) FROM warnings WHERE active = 1").fetchone()[0]


def test_no_warning_by_default(client, alice) -> None:
    resp = client.get("/api/warnings", headers=alice)
    assert resp.status_code == 200
    assert resp.json() is None


def test_publishing_retires_the_previous_warning(client, alice, admin, db_path) -> None:
    first = client.post(
        "/api/warnings",
        json={"title": "Manutenção", "message": "Sistema fora do ar às 22h", "urgency": "high"},
        headers=admin,
    ).json()["id"]
    second = client.post(
        "/api/warnings",
        json={"title": "Vacinação", "message": "Campanha na sexta", "targetAudience": "rh"},
        headers=admin,
    ).json()["id"]

    assert _active_count(db_path) == 1
    warning = client.get("/api/warnings", headers=alice).json()
    assert warning["id"] == second != first
    assert warning["urgency"] == "low"
    assert warning["target_audience"] == "rh"


def test_only_admins_write_warnings(client, alice, admin) -> None:
    body = {"title": "Aviso", "message": "Texto"}
    assert client.post("/api/warnings", json=body, headers=alice).status_code == 403

    warning_id = client.post("/api/warnings", json=body, headers=admin).json()["id"]
    edited = {"title": "Aviso editado", "message": "Novo texto", "urgency": "medium"}
    assert client.put(f"/api/warnings/{warning_id}", json=edited, headers=alice).status_code == 403
    assert client.put(f"/api/warnings/{warning_id}", json=edited, headers=admin).status_code == 200
    assert client.get("/api/warnings", headers=alice).json()["title"] == "Aviso editado"

    assert client.delete(f"/api/warnings/{warning_id}", headers=alice).status_code == 403
    assert client.delete(f"/api/warnings/{warning_id}", headers=admin).status_code == 200
    assert client.get("/api/warnings", headers=alice).json() is None
    assert client.delete(f"/api/warnings/{warning_id}", headers=admin).status_code == 404


def test_blank_warning_is_rejected(client, admin) -> None:
    resp = client.post("/api/warnings", json={"title": " ", "message": "x"}, headers=admin)
    assert resp.status_code == 400
