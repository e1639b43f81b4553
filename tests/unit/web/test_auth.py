"""
web/auth.py 테스트

JWT 발급/검증 및 소유자 식별 의존성.
"""

import time

import jwt
import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from core.config.loader import get_settings
from web.auth import (
    ALGORITHM,
    InvalidTokenError,
    create_access_token,
    decode_access_token,
    get_current_owner,
)

SECRET = "unit_test_secret"


class TestAccessToken:
    """토큰 발급/검증"""

    def test_round_trip(self) -> None:
        token = create_access_token("user-1", SECRET, ttl_minutes=5)

        assert decode_access_token(token, SECRET) == "user-1"

    def test_wrong_secret(self) -> None:
        token = create_access_token("user-1", SECRET, ttl_minutes=5)

        with pytest.raises(InvalidTokenError):
            decode_access_token(token, "other_secret")

    def test_expired(self) -> None:
        token = jwt.encode(
            {"sub": "user-1", "exp": int(time.time()) - 60},
            SECRET,
            algorithm=ALGORITHM,
        )

        with pytest.raises(InvalidTokenError):
            decode_access_token(token, SECRET)

    def test_missing_subject(self) -> None:
        token = jwt.encode({"exp": int(time.time()) + 60}, SECRET, algorithm=ALGORITHM)

        with pytest.raises(InvalidTokenError):
            decode_access_token(token, SECRET)

    def test_garbage(self) -> None:
        with pytest.raises(InvalidTokenError):
            decode_access_token("not-a-token", SECRET)


class TestGetCurrentOwner:
    """get_current_owner 의존성"""

    @pytest.mark.asyncio
    async def test_valid_token(self, temp_secrets_file) -> None:
        settings = get_settings(temp_secrets_file)
        token = create_access_token("user-1", settings.web_secret_key, 5)
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)

        assert await get_current_owner(credentials, settings) == "user-1"

    @pytest.mark.asyncio
    async def test_missing_credentials(self, temp_secrets_file) -> None:
        settings = get_settings(temp_secrets_file)

        with pytest.raises(HTTPException) as exc_info:
            await get_current_owner(None, settings)

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_invalid_token(self, temp_secrets_file) -> None:
        settings = get_settings(temp_secrets_file)
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials="bad")

        with pytest.raises(HTTPException) as exc_info:
            await get_current_owner(credentials, settings)

        assert exc_info.value.status_code == 401
