"""
Tests for login, password reset, token verification and the password/JWT
utilities behind them.
"""

from datetime import timedelta

import pytest
from jose import jwt

from portfolio_api.utils.auth import hash_password, password_too_long, verify_password
from portfolio_api.utils.jwt_auth import (
    ALGORITHM,
    TokenStatus,
    create_access_token,
    decode_token,
    extract_bearer_token,
)


class TestPasswordUtils:

    def test_hash_and_verify(self):
        hashed = hash_password("s3cret", rounds=4)

        assert hashed != "s3cret"
        assert verify_password("s3cret", hashed)
        assert not verify_password("wrong", hashed)

    def test_malformed_hash_does_not_match(self):
        assert not verify_password("s3cret", "not-a-bcrypt-hash")
        assert not verify_password("", "anything")

    def test_password_byte_limit(self):
        assert not password_too_long("x" * 72)
        assert password_too_long("x" * 73)
        # multi-byte characters count by their UTF-8 length
        assert password_too_long("\u00e9" * 37)


class TestTokenUtils:

    def test_valid_token(self):
        token = create_access_token({"sub": "5", "userId": 5})
        result = decode_token(token)

        assert result.status is TokenStatus.VALID
        assert result.is_valid
        assert result.claims["userId"] == 5
        assert result.claims["type"] == "access"

    def test_expired_token(self):
        token = create_access_token({"sub": "5"}, expires_delta=timedelta(seconds=-30))

        assert decode_token(token).status is TokenStatus.EXPIRED

    def test_wrong_secret(self):
        token = create_access_token({"sub": "5"})

        assert decode_token(token, secret="other-secret").status is TokenStatus.INVALID

    def test_garbage_and_empty_tokens(self):
        assert decode_token("abc.def.ghi").status is TokenStatus.INVALID
        assert decode_token("").status is TokenStatus.INVALID
        assert decode_token(None).status is TokenStatus.INVALID

    def test_non_access_token_is_invalid(self):
        from portfolio_api.config import settings

        token = jwt.encode({"sub": "5", "type": "refresh"}, settings.JWT_SECRET, algorithm=ALGORITHM)

        assert decode_token(token).status is TokenStatus.INVALID

    @pytest.mark.parametrize("header, expected", [
        ("Bearer abc", "abc"),
        ("bearer abc", "abc"),
        ("Basic abc", None),
        ("Bearer", None),
        (None, None),
    ])
    def test_extract_bearer_token(self, header, expected):
        assert extract_bearer_token(header) == expected


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_success(self, test_client, test_user, user_password):
        response = await test_client.post(
            "/auth/login", data={"username": "admin", "password": user_password}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["user"] == {"id": test_user.id, "username": "admin", "email": "admin@example.com"}
        assert decode_token(body["token"]).claims["userId"] == test_user.id

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, test_client, test_user):
        response = await test_client.post(
            "/auth/login", data={"username": "admin", "password": "nope"}
        )

        assert response.status_code == 401
        assert "token" not in response.json()

    @pytest.mark.asyncio
    async def test_login_unknown_user(self, test_client, user_password):
        response = await test_client.post(
            "/auth/login", data={"username": "ghost", "password": user_password}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_login_token_opens_protected_routes(self, test_client, test_user, user_password):
        login = await test_client.post(
            "/auth/login", data={"username": "admin", "password": user_password}
        )
        token = login.json()["token"]

        response = await test_client.post(
            "/social_media",
            data={"name": "Site", "link": "https://example.com"},
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 201


class TestReset:

    @pytest.mark.asyncio
    async def test_reset_password(self, test_client, test_user, user_password):
        response = await test_client.post(
            "/auth/reset",
            data={"username": "admin", "oldPassword": user_password, "password": "brand new"},
        )
        assert response.status_code == 200
        assert response.json()["user"]["username"] == "admin"

        old = await test_client.post("/auth/login", data={"username": "admin", "password": user_password})
        new = await test_client.post("/auth/login", data={"username": "admin", "password": "brand new"})
        assert old.status_code == 401
        assert new.status_code == 200

    @pytest.mark.asyncio
    async def test_reset_with_wrong_old_password(self, test_client, test_user, user_password):
        response = await test_client.post(
            "/auth/reset",
            data={"username": "admin", "oldPassword": "wrong", "password": "brand new"},
        )
        assert response.status_code == 401

        login = await test_client.post("/auth/login", data={"username": "admin", "password": user_password})
        assert login.status_code == 200

    @pytest.mark.asyncio
    async def test_reset_rejects_password_bcrypt_cannot_hash(self, test_client, test_user, user_password):
        response = await test_client.post(
            "/auth/reset",
            data={"username": "admin", "oldPassword": user_password, "password": "x" * 80},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid password"

        login = await test_client.post("/auth/login", data={"username": "admin", "password": user_password})
        assert login.status_code == 200


class TestVerifyToken:

    @pytest.mark.asyncio
    async def test_valid(self, test_client):
        token = create_access_token({"sub": "1"})

        response = await test_client.post("/auth/verify_token", data={"token": token})

        assert response.status_code == 200
        assert response.json()["message"] == "Token is valid!"

    @pytest.mark.asyncio
    async def test_expired(self, test_client):
        token = create_access_token({"sub": "1"}, expires_delta=timedelta(minutes=-5))

        response = await test_client.post("/auth/verify_token", data={"token": token})

        assert response.status_code == 401
        assert response.json()["error"] == "Token expired"

    @pytest.mark.asyncio
    async def test_invalid(self, test_client):
        response = await test_client.post("/auth/verify_token", data={"token": "garbage"})

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid token"

    @pytest.mark.asyncio
    async def test_missing(self, test_client):
        response = await test_client.post("/auth/verify_token", data={})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_expired_token_rejected_on_protected_route(self, test_client):
        token = create_access_token({"sub": "1"}, expires_delta=timedelta(minutes=-5))

        response = await test_client.delete("/albums/1", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["error"] == "Token expired"


class TestRateLimit:

    @pytest.fixture
    def rate_limited(self):
        from portfolio_api.utils.rate_limit import limiter

        limiter.reset()
        limiter.enabled = True
        yield limiter
        limiter.enabled = False
        limiter.reset()

    @pytest.mark.asyncio
    async def test_sixth_login_in_a_minute_is_rejected(self, test_client, test_user, rate_limited):
        statuses = []
        for _ in range(6):
            response = await test_client.post(
                "/auth/login", data={"username": "admin", "password": "wrong"}
            )
            statuses.append(response.status_code)

        assert statuses == [401, 401, 401, 401, 401, 429]
