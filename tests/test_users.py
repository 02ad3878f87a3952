"""사용자/권한 관리 API 테스트 (관리자 전용)"""
import json

from models import Permission, User, db


def test_users_admin_only(client, make_user, auth_headers):
    user = make_user("alice")
    assert client.get("/api/users", headers=auth_headers(user)).status_code == 403


def test_create_user_with_permissions(client, make_user, auth_headers):
    admin = make_user("boss", role="admin")
    db.session.add(Permission(module="prices", action="view"))
    db.session.commit()
    perm_id = Permission.query.filter_by(module="prices", action="view").first().id

    resp = client.post("/api/users", data=json.dumps({
        "username": "newbie",
        "email": "newbie@example.com",
        "password": "password-123",
        "permissions": [perm_id],
    }), headers=auth_headers(admin))
    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["role"] == "user"
    assert data["permissions"] == [{"module": "prices", "action": "view"}]

    resp = client.post("/api/users", data=json.dumps({
        "username": "newbie",
        "email": "other@example.com",
        "password": "password-123",
    }), headers=auth_headers(admin))
    assert resp.status_code == 409


def test_create_user_validation(client, make_user, auth_headers):
    headers = auth_headers(make_user("boss", role="admin"))
    base = {"username": "x1", "email": "x1@example.com", "password": "password-123"}
    for bad in (dict(base, email="nope"), dict(base, password="short"),
                dict(base, role="root"), dict(base, permissions=[12345])):
        assert client.post("/api/users", data=json.dumps(bad), headers=headers).status_code == 400


def test_update_user(client, make_user, auth_headers):
    headers = auth_headers(make_user("boss", role="admin"))
    alice = make_user("alice")

    resp = client.put(f"/api/users/{alice.id}", data=json.dumps({"role": "admin"}), headers=headers)
    assert resp.status_code == 200
    assert resp.get_json()["data"]["role"] == "admin"


def test_cannot_delete_self(client, make_user, auth_headers):
    admin = make_user("boss", role="admin")
    resp = client.delete(f"/api/users/{admin.id}", headers=auth_headers(admin))
    assert resp.status_code == 400


def test_delete_user_deactivates(client, make_user, auth_headers):
    headers = auth_headers(make_user("boss", role="admin"))
    alice = make_user("alice")
    alice_id = alice.id

    assert client.delete(f"/api/users/{alice_id}", headers=headers).status_code == 200
    db.session.expire_all()
    assert db.session.get(User, alice_id).is_active is False


def test_all_permissions(client, make_user, auth_headers):
    admin = make_user("boss", role="admin", permissions=[("users", "view"), ("prices", "view")])
    data = client.get("/api/users/permissions/all", headers=auth_headers(admin)).get_json()["data"]
    assert [(p["module"], p["action"]) for p in data] == [("prices", "view"), ("users", "view")]


def _login(client, username, password):
    return client.post("/api/auth/login",
        data=json.dumps({"username": username, "password": password}),
        headers={"Content-Type": "application/json"})


def test_reset_password_requires_permission(client, make_user, auth_headers):
    viewer = make_user("viewer", permissions=[("users", "view")])
    alice = make_user("alice")

    resp = client.post(f"/api/users/{alice.id}/reset-password",
        data=json.dumps({"newPassword": "brand-new-pass"}), headers=auth_headers(viewer))
    assert resp.status_code == 403


def test_reset_password(client, make_user, auth_headers):
    manager = make_user("manager", permissions=[("users", "update")])
    alice = make_user("alice")
    headers = auth_headers(manager)
    url = f"/api/users/{alice.id}/reset-password"

    resp = client.post(url, data=json.dumps({}), headers=headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "New password is required"

    resp = client.post(url, data=json.dumps({"newPassword": "short"}), headers=headers)
    assert resp.status_code == 400

    resp = client.post("/api/users/user_nobody/reset-password",
        data=json.dumps({"newPassword": "brand-new-pass"}), headers=headers)
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "User not found"

    resp = client.post(url, data=json.dumps({"newPassword": "brand-new-pass"}), headers=headers)
    assert resp.status_code == 200
    assert resp.get_json()["message"] == "Password reset successfully"

    assert _login(client, "alice", "brand-new-pass").status_code == 200
