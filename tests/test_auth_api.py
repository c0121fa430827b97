from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from app.db.repositories.users import UserRepository
from app.security.password import verify_password
from tests._helpers.api import DEFAULT_PASSWORD, login, register

REFRESH_URL = "/api/v1/auth/refresh-tokens"


def _set_cookie_headers(resp) -> list[str]:
    return resp.headers.get_list("set-cookie")


# -----------------------------
# Register
# -----------------------------
def test_register_returns_public_user(client: TestClient, session: Session):
    resp = register(client, name="jane", email="jane@mail.com")
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert set(body) == {"userId", "userName", "userEmail"}
    assert body["userName"] == "jane"
    assert body["userEmail"] == "jane@mail.com"

    stored = UserRepository(session).get(body["userId"])
    assert stored.password_hash != DEFAULT_PASSWORD
    assert verify_password(DEFAULT_PASSWORD, stored.password_hash)


def test_register_duplicate_email(client: TestClient):
    assert register(client, name="jane", email="jane@mail.com").status_code == 201
    resp = register(client, name="other", email="jane@mail.com")
    assert resp.status_code == 409
    assert resp.json() == {"message": "User Already Exist"}


def test_register_duplicate_email_wins_over_validation(client: TestClient):
    assert register(client, name="jane", email="jane@mail.com").status_code == 201
    resp = register(client, name="averyverylongname", email="jane@mail.com", password="short")
    assert resp.status_code == 409
    assert resp.json() == {"message": "User Already Exist"}


def test_register_duplicate_email_with_other_domain_case(client: TestClient):
    assert register(client, name="jane", email="jane@mail.com").status_code == 201
    assert register(client, name="other", email="jane@MAIL.com").status_code == 409


def test_register_validation_error(client: TestClient):
    resp = register(client, name="averyverylongname", email="jane@mail.com")
    assert resp.status_code == 400
    assert resp.json() == {
        "message": "Validation failed => userName: UserName must contain at most 10 character(s)"
    }


def test_register_short_password(client: TestClient):
    resp = register(client, name="jane", email="jane@mail.com", password="short")
    assert resp.status_code == 400
    assert "userPassword: Password must contain at least 8 character(s)" in resp.json()["message"]


# -----------------------------
# Login
# -----------------------------
def test_login_wrong_password(client: TestClient):
    register(client, name="jane", email="jane@mail.com")
    resp = login(client, email="jane@mail.com", password="wrong-password")
    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid Credentials"}


def test_login_unknown_email(client: TestClient):
    resp = login(client, email="ghost@mail.com")
    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid Credentials"}


def test_login_with_mixed_case_domain(client: TestClient):
    user = register(client, name="jane", email="jane@Mail.COM").json()
    resp = login(client, email="jane@Mail.COM")
    assert resp.status_code == 200, resp.text
    assert resp.json()["loggedInUser"] == user
    assert login(client, email="jane@mail.com").status_code == 200


@pytest.mark.parametrize(
    "kwargs",
    [
        {},
        {"json": {"userEmail": 123, "userPassword": ["s3cretpassword"]}},
        {"json": ["jane@mail.com", "s3cretpassword"]},
        {"content": b"{not json", "headers": {"Content-Type": "application/json"}},
        {"content": b"userEmail=jane@mail.com", "headers": {"Content-Type": "text/plain"}},
    ],
)
def test_login_malformed_body_is_unauthorized(client: TestClient, kwargs):
    register(client, name="jane", email="jane@mail.com")
    resp = client.post("/api/v1/auth/login", **kwargs)
    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid Credentials"}


def test_login_returns_tokens_matching_cookies(client: TestClient, session: Session):
    user = register(client, name="jane", email="jane@mail.com").json()
    resp = login(client, email="jane@mail.com")
    assert resp.status_code == 200, resp.text
    body = resp.json()

    assert body["loggedInUser"] == user
    assert body["accessToken"]
    assert body["refreshToken"]
    assert resp.cookies["accessToken"] == body["accessToken"]
    assert resp.cookies["refreshToken"] == body["refreshToken"]
    assert all("HttpOnly" in h for h in _set_cookie_headers(resp))

    # le refresh token émis est celui stocké pour l'utilisateur
    assert UserRepository(session).get(user["userId"]).refresh_token == body["refreshToken"]


# -----------------------------
# Auth dependency
# -----------------------------
def test_protected_route_without_token(client: TestClient):
    resp = client.get("/api/v1/todos")
    assert resp.status_code == 401
    assert resp.json() == {"message": "Unauthorized request"}


def test_protected_route_with_invalid_bearer(client: TestClient):
    resp = client.get("/api/v1/todos", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401


def test_refresh_token_is_not_an_access_token(app, make_user):
    _, body = make_user()
    with TestClient(app) as anonymous:
        resp = anonymous.get(
            "/api/v1/todos", headers={"Authorization": f"Bearer {body['refreshToken']}"}
        )
    assert resp.status_code == 401


def test_access_token_from_cookie(app, make_user):
    _, body = make_user()
    with TestClient(app) as anonymous:
        resp = anonymous.get(
            "/api/v1/todos", headers={"Cookie": f"accessToken={body['accessToken']}"}
        )
    assert resp.status_code == 200


# -----------------------------
# Logout
# -----------------------------
def test_logout_clears_cookies(make_user):
    client, _ = make_user()
    resp = client.post("/api/v1/auth/logout")
    assert resp.status_code == 200
    assert resp.json() == {"message": "User logged out"}
    headers = _set_cookie_headers(resp)
    for name in ("accessToken", "refreshToken"):
        cleared = [h for h in headers if h.startswith(f"{name}=")]
        assert cleared and "Max-Age=0" in cleared[0]


def test_logout_requires_access_token(client: TestClient):
    assert client.post("/api/v1/auth/logout").status_code == 401


def test_logout_keeps_server_side_refresh_token(app, make_user):
    client, body = make_user()
    client.post("/api/v1/auth/logout")
    with TestClient(app) as other:
        resp = other.post(REFRESH_URL, headers={"Cookie": f"refreshToken={body['refreshToken']}"})
    assert resp.status_code == 200


# -----------------------------
# Refresh
# -----------------------------
def test_refresh_with_cookie_jar_rotates_tokens(make_user, session: Session):
    client, body = make_user()
    resp = client.post(REFRESH_URL)
    assert resp.status_code == 200, resp.text
    pair = resp.json()
    assert set(pair) == {"accessToken", "refreshToken"}
    assert pair["refreshToken"] != body["refreshToken"]
    assert resp.cookies["refreshToken"] == pair["refreshToken"]
    assert resp.cookies["accessToken"] == pair["accessToken"]

    user_id = body["loggedInUser"]["userId"]
    assert UserRepository(session).get(user_id).refresh_token == pair["refreshToken"]


def test_refresh_token_cannot_be_reused(app, make_user):
    _, body = make_user()
    with TestClient(app) as c:
        first = c.post(REFRESH_URL, headers={"Cookie": f"refreshToken={body['refreshToken']}"})
        assert first.status_code == 200
        reused = c.post(REFRESH_URL, headers={"Cookie": f"refreshToken={body['refreshToken']}"})
    assert reused.status_code == 401
    assert reused.json() == {"message": "Unauthorized request"}


def test_refresh_with_stale_but_signed_token(app, make_user):
    client, first = make_user()
    # un nouveau login remplace le refresh token stocké
    second = login(client, email="jane@mail.com").json()
    assert second["refreshToken"] != first["refreshToken"]

    with TestClient(app) as c:
        stale = c.post(REFRESH_URL, headers={"Cookie": f"refreshToken={first['refreshToken']}"})
        fresh = c.post(REFRESH_URL, headers={"Cookie": f"refreshToken={second['refreshToken']}"})
    assert stale.status_code == 401
    assert fresh.status_code == 200


def test_refresh_without_cookie(client: TestClient):
    resp = client.post(REFRESH_URL)
    assert resp.status_code == 401
    assert resp.json() == {"message": "Unauthorized request"}


def test_refresh_with_access_token(app, make_user):
    _, body = make_user()
    with TestClient(app) as c:
        resp = c.post(REFRESH_URL, headers={"Cookie": f"refreshToken={body['accessToken']}"})
    assert resp.status_code == 401


def test_new_access_token_works(app, make_user):
    _, body = make_user()
    with TestClient(app) as c:
        pair = c.post(REFRESH_URL, headers={"Cookie": f"refreshToken={body['refreshToken']}"}).json()
    with TestClient(app) as c:
        resp = c.get("/api/v1/todos", headers={"Authorization": f"Bearer {pair['accessToken']}"})
    assert resp.status_code == 200
