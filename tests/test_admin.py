from portal.schemas.admin import LdapConfig, MAX_QUOTA, MIN_QUOTA
from portal.services import ldap


def test_admin_routes_require_admin(client, alice) -> None:
    for path in ("/api/admin/settings", "/api/admin/stats", "/api/admin/users"):
        resp = client.get(path, headers=alice)
        assert resp.status_code == 403
        assert resp.json() == {"error": "Administrators only"}


def test_settings_roundtrip(client, admin) -> None:
    resp = client.put("/api/admin/settings/login_ui", json={"value": {"title": "Intranet"}}, headers=admin)
    assert resp.status_code == 200
    client.put("/api/admin/settings/sidebar", json={"value": ["mural", "drive"]}, headers=admin)

    assert client.get("/api/admin/settings", headers=admin).json() == {
        "login_ui": {"title": "Intranet"},
        "sidebar": ["mural", "drive"],
    }
    assert client.get("/api/admin/settings/sidebar", headers=admin).json() == ["mural", "drive"]
    assert client.get("/api/admin/settings/missing", headers=admin).status_code == 404


def test_public_settings_are_whitelisted(client, admin) -> None:
    client.put("/api/admin/settings/login_ui", json={"value": {"title": "Intranet"}}, headers=admin)
    client.put("/api/admin/settings/ldap_config", json={"value": {"host": "dc01"}}, headers=admin)

    assert client.get("/api/public/settings/login_ui").json() == {"title": "Intranet"}
    resp = client.get("/api/public/settings/ldap_config")
    assert resp.status_code == 403
    assert resp.json() == {"error": "Access denied"}
    assert client.get("/api/public/settings/theme_config").status_code == 404


def test_setting_upload_writes_url(client, admin) -> None:
    client.put("/api/admin/settings/login_ui", json={"value": {"title": "Intranet"}}, headers=admin)

    resp = client.post(
        "/api/admin/settings/upload/login_ui",
        data={"field": "backgroundImage"},
        files={"file": ("fundo.png", b"\x89PNG fake", "image/png")},
        headers=admin,
    )
    assert resp.status_code == 200
    url = resp.json()["url"]
    assert url.startswith("http://testserver/uploads/")
    assert client.get("/api/public/settings/login_ui").json()["backgroundImage"] == url
    assert client.get(url[len("http://testserver"):]).content == b"\x89PNG fake"

    resp = client.post(
        "/api/admin/settings/upload/theme_config",
        data={"field": "logo"},
        files={"file": ("logo.png", b"png", "image/png")},
        headers=admin,
    )
    assert resp.status_code == 404


def test_stats_and_user_management(client, alice, admin) -> None:
    client.post("/api/posts", data={"content": "oi"}, headers=alice)

    assert client.get("/api/admin/stats", headers=admin).json() == {
        "users": 4,
        "non_admin_users": 3,
        "posts": 1,
        "files": 0,
    }
    users = client.get("/api/admin/users", headers=admin).json()
    assert [u["username"] for u in users] == ["alice", "bob", "carol", "dora"]
    assert users[0]["storage_quota"] == MIN_QUOTA

    assert client.put("/api/admin/users/2/role", json={"role": "ADMIN"}, headers=admin).status_code == 200
    assert client.put("/api/admin/users/2/role", json={"role": "ROOT"}, headers=admin).status_code == 400
    assert client.put("/api/admin/users/99/role", json={"role": "USER"}, headers=admin).status_code == 404
    assert client.get("/api/users/2", headers=alice).json()["role"] == "ADMIN"


def test_quota_bounds(client, admin) -> None:
    assert client.put("/api/admin/users/1/quota", json={"quota": MAX_QUOTA}, headers=admin).status_code == 200
    assert client.put("/api/admin/users/1/quota", json={"quota": MAX_QUOTA + 1}, headers=admin).status_code == 400
    assert client.put("/api/admin/users/1/quota", json={"quota": MIN_QUOTA - 1}, headers=admin).status_code == 400
    assert client.get("/api/admin/users", headers=admin).json()[0]["storage_quota"] == MAX_QUOTA


def test_ldap_test_without_configuration(client, admin) -> None:
    resp = client.post("/api/admin/ldap/test", headers=admin)
    assert resp.status_code == 200
    assert resp.json()["success"] is False
    assert resp.json()["error"] == "LDAP não configurado corretamente"


def test_ldap_config_accepts_stored_names() -> None:
    config = LdapConfig.model_validate(
        {"enabled": True, "host": "dc01", "port": 636, "bindDn": "cn=svc", "baseDn": "dc=corp", "extra": 1}
    )
    assert config.bind_dn == "cn=svc"
    assert config.base_dn == "dc=corp"
    assert ldap.test_connection(LdapConfig(host="dc01"))["success"] is False
