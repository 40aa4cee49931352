import pytest
from jose import jwt

from core.exceptions import InvalidCredentialsError
from schemas.auth_schemas import MAX_ACCESS_TOKEN_LIFETIME_SECONDS
from services.token_service import AccessTokenCodec
from core.config import get_settings
from tests.conftest import TEST_PASSWORD


async def test_login_success(client, registered_user):
    """Test successful user login."""
    response = await client.post("/api/login", json={
        "email": registered_user.email,
        "password": TEST_PASSWORD
    })

    assert response.status_code == 200
    data = response.json()

    assert data["id"] == str(registered_user.id)
    assert data["email"] == registered_user.email
    assert data["is_chirpy_red"] is False
    assert len(data["refresh_token"]) == 64

    # Access token identifies the user
    codec = AccessTokenCodec.from_settings(get_settings())
    assert str(codec.verify(data["token"])) == data["id"]

    # Sensitive data is not included
    assert "hashed_password" not in data
    assert "password" not in data


async def test_login_wrong_password(client, registered_user):
    response = await client.post("/api/login", json={
        "email": registered_user.email,
        "password": "WrongPassword123!"
    })

    assert response.status_code == 401
    assert response.json()["detail"] == InvalidCredentialsError.detail


async def test_login_nonexistent_user(client, registered_user):
    """Unknown email gets exactly the same response as a wrong password."""
    unknown = await client.post("/api/login", json={
        "email": "nonexistent@example.com",
        "password": TEST_PASSWORD
    })
    wrong = await client.post("/api/login", json={
        "email": registered_user.email,
        "password": "WrongPassword123!"
    })

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json()


async def test_login_missing_fields(client):
    response = await client.post("/api/login", json={"email": "someone@example.com"})
    assert response.status_code == 422


async def test_login_negative_lifetime_rejected(client, registered_user):
    response = await client.post("/api/login", json={
        "email": registered_user.email,
        "password": TEST_PASSWORD,
        "expires_in_seconds": -5
    })
    assert response.status_code == 422


async def test_login_error_does_not_echo_password(client, registered_user):
    response = await client.post("/api/login", json={
        "email": registered_user.email,
        "password": "MySecretGuess99"
    })
    assert "MySecretGuess99" not in response.text


async def test_validation_error_does_not_echo_password(client):
    response = await client.post("/api/login", json={
        "email": "not-an-email",
        "password": "MySecretGuess99"
    })

    assert response.status_code == 422
    assert "MySecretGuess99" not in response.text
    assert response.json()["detail"][0]["loc"] == ["body", "email"]


@pytest.mark.parametrize("expires_in_seconds", [10**12, 10**15, MAX_ACCESS_TOKEN_LIFETIME_SECONDS + 1])
async def test_login_oversized_lifetime_rejected(client, registered_user, expires_in_seconds):
    response = await client.post("/api/login", json={
        "email": registered_user.email,
        "password": TEST_PASSWORD,
        "expires_in_seconds": expires_in_seconds
    })
    assert response.status_code == 422


async def test_login_longest_lifetime_accepted(client, registered_user):
    response = await client.post("/api/login", json={
        "email": registered_user.email,
        "password": TEST_PASSWORD,
        "expires_in_seconds": MAX_ACCESS_TOKEN_LIFETIME_SECONDS
    })

    assert response.status_code == 200
    claims = jwt.get_unverified_claims(response.json()["token"])
    assert claims["exp"] - claims["iat"] == MAX_ACCESS_TOKEN_LIFETIME_SECONDS
