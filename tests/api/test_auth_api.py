from __future__ import annotations

import pytest


def _body(**overrides):
    body = {
        "email": "guru@school.id",
        "password": "secret1",
        "name": "Bu Guru",
        "grade": 3,
        "subjects": ["Matematika"],
    }
    body.update(overrides)
    return body


def test_register_returns_profile_without_password(client):
    resp = client.post("/auth/register", json=_body())

    assert resp.status_code == 201
    user = resp.get_json()["user"]
    assert user["email"] == "guru@school.id"
    assert user["subjects"] == ["Matematika"]
    assert "password" not in user and "passwordHash" not in user


def test_register_validation_errors(client):
    resp = client.post("/auth/register", json=_body(subjects=["Bahasa Inggris"]))
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Invalid subjects for grade 3"}

    resp = client.post("/auth/register", json=_body(role="admin"))
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Unknown field: role"}

    resp = client.post("/auth/register", data="not json")
    assert resp.status_code == 400


def test_register_duplicate_email(client):
    client.post("/auth/register", json=_body())

    resp = client.post("/auth/register", json=_body(email="GURU@school.id"))

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Email is already registered"


def test_login_sets_http_only_cookie(client):
    client.post("/auth/register", json=_body())

    resp = client.post("/auth/login", json={"email": "guru@school.id", "password": "secret1"})

    assert resp.status_code == 200
    cookie = resp.headers["Set-Cookie"]
    assert cookie.startswith("token=")
    assert "HttpOnly" in cookie
    assert "SameSite=Lax" in cookie
    assert "Max-Age=604800" in cookie
    assert resp.get_json()["user"]["name"] == "Bu Guru"


def test_login_wrong_password(client):
    client.post("/auth/register", json=_body())

    resp = client.post("/auth/login", json={"email": "guru@school.id", "password": "nope"})

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Invalid email or password"}


def test_login_missing_fields(client):
    resp = client.post("/auth/login", json={"email": "", "password": ""})

    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Email and password are required"}


@pytest.mark.parametrize(
    "method,path",
    [
        ("get", "/auth/me"),
        ("delete", "/auth/delete-account"),
        ("get", "/students"),
        ("post", "/students"),
        ("put", "/students/1"),
        ("delete", "/students/1"),
        ("get", "/attendance"),
        ("post", "/attendance"),
        ("get", "/attendance/stats"),
        ("get", "/attendance/export"),
        ("get", "/dashboard/stats"),
    ],
)
def test_protected_routes_need_a_token(client, method, path):
    resp = getattr(client, method)(path)

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Token not found"}


def test_invalid_token(client):
    client.set_cookie("token", "garbage")

    resp = client.get("/auth/me")

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Invalid token"}


def test_me(signup):
    c = signup()

    resp = c.get("/auth/me")

    assert resp.status_code == 200
    assert resp.get_json()["user"]["email"] == "guru@school.id"


def test_logout_clears_cookie_but_old_token_still_verifies(app, signup):
    c = signup()
    token = c.get_cookie("token").value

    resp = c.post("/auth/logout")

    assert resp.status_code == 200
    assert c.get_cookie("token") is None
    assert c.get("/auth/me").status_code == 401

    # Credentials are stateless: a copy taken before logout works until it expires.
    replay = app.test_client()
    replay.set_cookie("token", token)
    assert replay.get("/auth/me").status_code == 200


def test_delete_account_cascades_and_clears_cookie(app, signup, db):
    c = signup()
    c.post("/students", json={"name": "Andi", "nis": "1"})
    token = c.get_cookie("token").value

    resp = c.delete("/auth/delete-account")

    assert resp.status_code == 200
    assert c.get_cookie("token") is None
    assert db.teachers == {} and db.students == {}

    replay = app.test_client()
    replay.set_cookie("token", token)
    resp = replay.get("/auth/me")
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "User not found"}


def test_subject_catalog(client):
    resp = client.get("/subjects?grade=5")

    assert resp.status_code == 200
    assert "IPAS" in resp.get_json()["subjects"]
    assert client.get("/subjects?grade=0").status_code == 400
    assert client.get("/subjects").status_code == 400
