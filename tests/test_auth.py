"""Authentication tests."""

from datetime import UTC, datetime, timedelta

from jose import jwt

from tierlist.config import get_settings
from tierlist.models.user import RefreshToken
from tierlist.services.auth import create_access_token, decode_access_token

settings = get_settings()


def test_access_token_round_trip():
    token = create_access_token(7, "alice")
    payload = decode_access_token(token)
    assert payload["sub"] == "7"
    assert payload["username"] == "alice"
    assert payload["iss"] == settings.jwt_issuer
    assert payload["aud"] == settings.jwt_audience
    assert payload["jti"]


def test_expired_access_token_is_rejected():
    token = create_access_token(7, "alice", datetime.now(UTC) - timedelta(minutes=1))
    assert decode_access_token(token) is None


def test_access_token_for_other_audience_is_rejected():
    token = jwt.encode(
        {
            "sub": "7",
            "iss": settings.jwt_issuer,
            "aud": "someone-else",
            "exp": datetime.now(UTC) + timedelta(minutes=5),
        },
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    assert decode_access_token(token) is None


def test_register_user(client):
    response = client.post(
        "/api/v1/auth/register", json={"username": "newuser", "password": "password123"}
    )
    assert response.status_code == 201
    data = response.json()
    assert data["username"] == "newuser"
    assert "password" not in data
    assert "password_hash" not in data


def test_register_duplicate_username(client, auth_headers):
    response = client.post(
        "/api/v1/auth/register",
        json={"username": auth_headers.username, "password": "password123"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Username already exists."


def test_register_short_username(client):
    response = client.post("/api/v1/auth/register", json={"username": "ab", "password": "secret1"})
    assert response.status_code == 400
    assert "Username" in response.json()["detail"]


def test_register_short_password(client):
    response = client.post("/api/v1/auth/register", json={"username": "abc", "password": "12345"})
    assert response.status_code == 400
    assert "Password" in response.json()["detail"]


def test_login(client, auth_headers):
    response = client.post(
        "/api/v1/auth/login", json={"username": auth_headers.username, "password": "testpass123"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["access_token"]
    assert data["refresh_token"]
    assert data["token_type"] == "bearer"


def test_login_wrong_password(client, auth_headers):
    response = client.post(
        "/api/v1/auth/login", json={"username": auth_headers.username, "password": "wrongpass"}
    )
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_login_unknown_user(client):
    response = client.post("/api/v1/auth/login", json={"username": "nobody", "password": "x"})
    assert response.status_code == 401


def test_get_current_user(client, auth_headers):
    response = client.get("/api/v1/auth/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["id"] == auth_headers.user_id
    assert response.json()["username"] == auth_headers.username


def test_invalid_token_is_rejected(client):
    response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def _login(client, auth_headers):
    return client.post(
        "/api/v1/auth/login", json={"username": auth_headers.username, "password": "testpass123"}
    ).json()


def test_refresh_rotates_token(client, auth_headers):
    tokens = _login(client, auth_headers)

    response = client.post(
        "/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]}
    )

    assert response.status_code == 200
    rotated = response.json()
    assert rotated["refresh_token"] != tokens["refresh_token"]
    me = client.get(
        "/api/v1/auth/me", headers={"Authorization": f"Bearer {rotated['access_token']}"}
    )
    assert me.status_code == 200


def test_refresh_token_cannot_be_reused(client, auth_headers):
    tokens = _login(client, auth_headers)
    client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})

    response = client.post(
        "/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]}
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Refresh token has been revoked."


def test_refresh_with_unknown_token(client):
    response = client.post("/api/v1/auth/refresh", json={"refresh_token": "bogus"})
    assert response.status_code == 401


def test_refresh_with_empty_token(client):
    response = client.post("/api/v1/auth/refresh", json={"refresh_token": ""})
    assert response.status_code == 400


def test_refresh_with_expired_token(client, db, auth_headers):
    tokens = _login(client, auth_headers)
    stored = db.query(RefreshToken).filter(RefreshToken.token == tokens["refresh_token"]).one()
    stored.expires_at = datetime.now(UTC) - timedelta(seconds=1)
    db.commit()

    response = client.post(
        "/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]}
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Refresh token has expired."
