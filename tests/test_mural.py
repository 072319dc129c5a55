import sqlite3


def _notifications(db_path: str, user_id: int, kind: str) -> int:
    with sqlite3.connect(db_path) as conn:
        return conn.execute(
            "SELECT COUNT(*) FROM notifications WHERE user_id = ? AND type = ?", (user_id, kind)
        ).fetchone()[0]


def test_post_with_attachment_and_mention(client, alice, bob, db_path) -> None:
    resp = client.post(
        "/api/posts",
        data={"content": "Reunião amanhã @Bob", "is_urgent": "true"},
        files=[("files", ("agenda.txt", b"10h sala 3", "text/plain"))],
        headers=alice,
    )
    assert resp.status_code == 200
    assert resp.json()["success"] is True

    posts = client.get("/api/posts", headers=bob).json()
    assert len(posts) == 1
    assert posts[0]["is_urgent"] is True
    assert posts[0]["author_name"] == "Alice Souza"
    assert len(posts[0]["attachments"]) == 1
    assert posts[0]["attachments"][0]["original_name"] == "agenda.txt"

    assert _notifications(db_path, 2, "mural_mention") == 1
    notes = client.get("/api/notifications", headers=bob).json()
    assert notes[0]["link"] == "mural"


def test_self_mention_is_ignored(client, alice, db_path) -> None:
    client.post("/api/posts", data={"content": "lembrete para @Alice"}, headers=alice)
    assert _notifications(db_path, 1, "mural_mention") == 0


def test_mention_underscore_is_literal(client, bob, db_path) -> None:
    # "e_S" would match "Alice Souza" if the underscore were a wildcard
    client.post("/api/posts", data={"content": "bom dia @e_S"}, headers=bob)
    assert _notifications(db_path, 1, "mural_mention") == 0


def test_blank_post_is_rejected(client, alice) -> None:
    resp = client.post("/api/posts", data={"content": "   "}, headers=alice)
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_like_toggles(client, alice, bob) -> None:
    post_id = client.post("/api/posts", data={"content": "olá"}, headers=alice).json()["id"]

    assert client.post(f"/api/posts/{post_id}/like", headers=bob).json()["liked"] is True
    assert client.get("/api/posts/liked", headers=bob).json() == [post_id]
    assert client.get("/api/posts", headers=bob).json()[0]["like_count"] == 1

    assert client.post(f"/api/posts/{post_id}/like", headers=bob).json()["liked"] is False
    assert client.get("/api/posts/liked", headers=bob).json() == []


def test_only_author_or_admin_edits(client, alice, bob, admin) -> None:
    post_id = client.post("/api/posts", data={"content": "original"}, headers=alice).json()["id"]

    assert client.put(f"/api/posts/{post_id}", json={"content": "hack"}, headers=bob).status_code == 403
    assert client.put(f"/api/posts/{post_id}", json={"content": "editado"}, headers=admin).status_code == 200
    assert client.get("/api/posts", headers=alice).json()[0]["content"] == "editado"

    assert client.delete(f"/api/posts/{post_id}", headers=bob).status_code == 403
    assert client.delete(f"/api/posts/{post_id}", headers=alice).status_code == 200
    assert client.delete(f"/api/posts/{post_id}", headers=alice).status_code == 404


def test_comments(client, alice, bob) -> None:
    post_id = client.post("/api/posts", data={"content": "post"}, headers=alice).json()["id"]
    comment_id = client.post(
        f"/api/posts/{post_id}/comments", json={"content": "boa!"}, headers=bob
    ).json()["id"]

    comments = client.get(f"/api/posts/{post_id}/comments", headers=alice).json()
    assert [c["content"] for c in comments] == ["boa!"]
    assert client.get("/api/posts", headers=alice).json()[0]["comment_count"] == 1

    assert client.put(f"/api/comments/{comment_id}", json={"content": "x"}, headers=alice).status_code == 403
    assert client.put(f"/api/comments/{comment_id}", json={"content": "ótima!"}, headers=bob).status_code == 200
    assert client.delete(f"/api/comments/{comment_id}", headers=bob).status_code == 200
    assert client.get(f"/api/posts/{post_id}/comments", headers=alice).json() == []


def test_feed_merges_posts_and_visible_events(client, alice, bob) -> None:
    client.post("/api/posts", data={"content": "primeiro"}, headers=alice)
    client.post("/api/events", json={"title": "Treinamento", "event_date": "2026-11-03"}, headers=alice)
    client.post(
        "/api/events",
        json={"title": "Privado", "event_date": "2026-11-04", "visibility": "private"},
        headers=alice,
    )
    client.post("/api/posts", data={"content": "segundo"}, headers=bob)

    feed = client.get("/api/mural/feed", headers=bob).json()
    assert [(item["type"], item["content"]) for item in feed] == [
        ("post", "segundo"),
        ("event", "Treinamento"),
        ("post", "primeiro"),
    ]


def test_requires_token(client) -> None:
    resp = client.get("/api/posts")
    assert resp.status_code == 401
    assert resp.json() == {"error": "Token not provided"}


def test_extract_mentions_keeps_first_occurrence() -> None:
    from portal.services.notifications import extract_mentions

    assert extract_mentions("oi @Bob, @carol e @Bob de novo") == ["Bob", "carol"]
    assert extract_mentions("sem menções") == []
    assert extract_mentions(None) == []
