from app.models.auth import User, UserRole, UserStatus
from app.security.jwt import create_access_token, create_refresh_token
from app.services.passwords import hash_password


def _with_password(db, email="staff@piodurand.gov.ph", password="s3cret-pass", **kw):
    u = User(email=email, hashed_password=hash_password(password), role=kw.get("role", UserRole.editor),
             status=kw.get("status", UserStatus.active))
    db.add(u)
    db.commit()
    return u


def test_login_refresh_me(client, db):
    _with_password(db)
    r = client.post("/api/v1/auth/login", json={"email": "Staff@PioDurand.gov.ph", "password": "s3cret-pass"})
    assert r.status_code == 200
    tokens = r.json()
    assert tokens["token_type"] == "bearer"

    me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {tokens['access_token']}"})
    assert me.status_code == 200
    assert me.json()["role"] == "editor"
    assert me.json()["last_login"] is not None

    r = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert r.status_code == 200


def test_bad_password_is_401(client, db):
    _with_password(db)
    r = client.post("/api/v1/auth/login", json={"email": "staff@piodurand.gov.ph", "password": "wrong"})
    assert r.status_code == 401


def test_inactive_user_cannot_login(client, db):
    _with_password(db, status=UserStatus.inactive)
    r = client.post("/api/v1/auth/login", json={"email": "staff@piodurand.gov.ph", "password": "s3cret-pass"})
    assert r.status_code == 403


def test_refresh_token_is_not_an_access_token(client, editor_user):
    token = create_refresh_token(editor_user.id)
    r = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401


def test_admin_surface_needs_a_token(client):
    assert client.get("/api/v1/pages").status_code == 401
    assert client.get("/api/v1/pages", headers={"Authorization": "Bearer nope"}).status_code == 401


def test_editor_cannot_delete_pages_or_manage_users(client, editor_headers, admin_headers):
    r = client.post("/api/v1/pages", json={"title": "Editors welcome", "content": "<p>x</p>"}, headers=editor_headers)
    assert r.status_code == 201
    page_id = r.json()["id"]

    assert client.delete(f"/api/v1/pages/{page_id}", headers=editor_headers).status_code == 403
    assert client.get("/api/v1/users", headers=editor_headers).status_code == 403
    assert client.delete(f"/api/v1/pages/{page_id}", headers=admin_headers).status_code == 204


def test_inactive_token_holder_is_rejected(client, db, editor_user):
    headers = {"Authorization": f"Bearer {create_access_token(editor_user.id)}"}
    editor_user.status = UserStatus.inactive
    db.commit()
    assert client.get("/api/v1/pages", headers=headers).status_code == 401


def test_user_admin_rules(client, admin_user, admin_headers):
    r = client.post(
        "/api/v1/users",
        json={"email": "new@piodurand.gov.ph", "password": "longenough", "role": "editor"},
        headers=admin_headers,
    )
    assert r.status_code == 201

    dup = client.post(
        "/api/v1/users",
        json={"email": "NEW@piodurand.gov.ph", "password": "longenough"},
        headers=admin_headers,
    )
    assert dup.status_code == 409

    # the only active admin cannot demote or remove themselves
    assert client.patch(f"/api/v1/users/{admin_user.id}", json={"role": "editor"}, headers=admin_headers).status_code == 409
    assert client.delete(f"/api/v1/users/{admin_user.id}", headers=admin_headers).status_code == 409


def test_delivery_is_public(client):
    assert client.get("/delivery/v1/pages").status_code == 200
    assert client.get("/delivery/v1/alerts").status_code == 200
