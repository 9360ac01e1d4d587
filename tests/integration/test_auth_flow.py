"""Integration tests for bearer token handling."""
from datetime import UTC, datetime, timedelta

import jwt
from fastapi.testclient import TestClient

from taskmanager.core.security import create_access_token
from taskmanager.models import Token

API = "/rest/api/v1"


def test_missing_authorization_header(client: TestClient):
    """Protected endpoints need a bearer token."""
    response = client.get(f"{API}/auth/profile")
    assert response.status_code == 401
    assert response.json()["message"] == "Missing or invalid Authorization header"
    assert response.headers["www-authenticate"] == "Bearer"


def test_non_bearer_authorization_header(client: TestClient):
    response = client.get(f"{API}/tasks", headers={"Authorization": "Basic dXNlcjpwYXNz"})
    assert response.status_code == 401
    assert response.json()["message"] == "Missing or invalid Authorization header"


def test_unknown_token_rejected(client: TestClient, db_user, test_settings):
    """A validly signed token that was never issued is refused."""
    token = create_access_token(db_user.email, db_user.name, test_settings)

    response = client.get(
        f"{API}/auth/profile", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid or expired token"


def test_expired_token_rejected(client: TestClient, db_session, db_user, test_settings):
    """A stored token past its expiry is refused."""
    token = create_access_token(
        db_user.email, db_user.name, test_settings, expires_delta=timedelta(seconds=-10)
    )
    db_session.add(Token(user_id=db_user.id, access_token=token))
    db_session.commit()

    response = client.get(
        f"{API}/auth/profile", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Token has expired"


def test_logout_revokes_token(client: TestClient, login_as, test_user_data):
    """After logout the same token no longer works."""
    headers = login_as(test_user_data)

    response = client.get(f"{API}/auth/logout", headers=headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Logout successful"

    response = client.get(f"{API}/auth/profile", headers=headers)
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid or expired token"

    response = client.get(f"{API}/auth/logout", headers=headers)
    assert response.status_code == 401


def test_relogin_revokes_previous_token(client: TestClient, login_as, test_user_data):
    """Only the most recent login's token is accepted."""
    old_headers = login_as(test_user_data)
    new_headers = login_as(test_user_data)

    assert old_headers != new_headers

    response = client.get(f"{API}/auth/profile", headers=old_headers)
    assert response.status_code == 401

    response = client.get(f"{API}/auth/profile", headers=new_headers)
    assert response.status_code == 200


def test_tokens_are_not_shared_between_users(
    client: TestClient, login_as, test_user_data, other_user_data
):
    """Logging one user out leaves another user's session alone."""
    headers = login_as(test_user_data)
    other_headers = login_as(other_user_data)

    client.get(f"{API}/auth/logout", headers=headers)

    response = client.get(f"{API}/auth/profile", headers=other_headers)
    assert response.status_code == 200
    assert response.json()["data"]["email"] == other_user_data["email"]


def test_token_without_user_role_forbidden(
    client: TestClient, db_session, db_user, test_settings
):
    """A valid token lacking the user role is refused with 403."""
    now = datetime.now(UTC)
    token = jwt.encode(
        {
            "iss": test_settings.jwt_issuer,
            "sub": db_user.email,
            "upn": db_user.email,
            "name": db_user.name,
            "groups": [],
            "iat": now,
            "exp": now + timedelta(minutes=5),
        },
        test_settings.secret_key,
        algorithm=test_settings.algorithm,
    )
    db_session.add(Token(user_id=db_user.id, access_token=token))
    db_session.commit()

    response = client.get(f"{API}/tasks", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403
    body = response.json()
    assert body["success"] is False
    assert body["statusCode"] == 403
    assert body["message"] == "Insufficient role"
