"""
인증

Bearer JWT (HS256)로 요청마다 소유자 ID를 식별.
토큰의 sub 클레임이 소유자 ID이며 web.secret_key로 서명.
"""

import logging
from datetime import timedelta

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.config.loader import Settings
from core.constants import ErrorMessages
from core.utils.timezone import now_utc
from web.dependencies import get_app_settings

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

_bearer = HTTPBearer(auto_error=False)


class InvalidTokenError(Exception):
    """토큰 검증 실패"""
    pass


def create_access_token(
    owner_id: str,
    secret_key: str,
    ttl_minutes: int,
) -> str:
    """액세스 토큰 발급

    Args:
        owner_id: 소유자 ID (sub)
        secret_key: 서명 키
        ttl_minutes: 유효 시간 (분)

    Returns:
        JWT 문자열
    """
    issued_at = now_utc()
    payload = {
        "sub": owner_id,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=ttl_minutes),
    }
    return jwt.encode(payload, secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str, secret_key: str) -> str:
    """액세스 토큰 검증

    Args:
        token: JWT 문자열
        secret_key: 서명 키

    Returns:
        소유자 ID

    Raises:
        InvalidTokenError: 서명/만료/형식 오류 또는 sub 없음
    """
    try:
        payload = jwt.decode(
            token,
            secret_key,
            algorithms=[ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.PyJWTError as e:
        raise InvalidTokenError(str(e)) from e

    owner_id = payload.get("sub")
    if not isinstance(owner_id, str) or not owner_id:
        raise InvalidTokenError("Token has no subject")

    return owner_id


async def get_current_owner(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_app_settings),
) -> str:
    """요청의 소유자 ID 반환 (FastAPI 의존성)

    Raises:
        HTTPException: 401 (토큰 없음 또는 검증 실패)
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=401,
            detail=ErrorMessages.SESSION_INVALID,
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return decode_access_token(credentials.credentials, settings.web_secret_key)
    except InvalidTokenError as e:
        logger.info(f"인증 실패: {e}")
        raise HTTPException(
            status_code=401,
            detail=ErrorMessages.SESSION_INVALID,
            headers={"WWW-Authenticate": "Bearer"},
        ) from None
