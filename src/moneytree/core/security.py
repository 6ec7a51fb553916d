"""Password hashing and JWT access/refresh tokens.

Tokens carry the user id in ``sub`` and their purpose in ``type``. Refresh
tokens are signed with ``JWT_REFRESH_SECRET`` when it is set, so a leaked
access secret cannot mint long-lived tokens.
"""

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

from jose import JWTError, jwt
from passlib.context import CryptContext

from moneytree.config import settings

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"


def hash_password(password: str) -> str:
    """Salted Argon2 hash of ``password``."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def _signing_key(token_type: str) -> str:
    return settings.refresh_secret if token_type == REFRESH_TOKEN else settings.jwt_secret


def _encode(user_id: UUID, token_type: str, lifetime: timedelta) -> str:
    claims = {
        "sub": str(user_id),
        "type": token_type,
        "exp": datetime.now(timezone.utc) + lifetime,
    }
    return jwt.encode(claims, _signing_key(token_type), algorithm=settings.jwt_algorithm)


def create_access_token(user_id: UUID, expires_delta: timedelta | None = None) -> str:
    """Short-lived token for authenticating API requests.

    Args:
        user_id: User the token identifies
        expires_delta: Lifetime; defaults to ``JWT_ACCESS_EXPIRE_MINUTES``
    """
    lifetime = expires_delta or timedelta(minutes=settings.jwt_access_expire_minutes)
    return _encode(user_id, ACCESS_TOKEN, lifetime)


def create_refresh_token(user_id: UUID) -> str:
    """Long-lived token accepted only by the refresh endpoint."""
    return _encode(user_id, REFRESH_TOKEN, timedelta(days=settings.jwt_refresh_expire_days))


def decode_token(token: str, token_type: str = ACCESS_TOKEN) -> dict[str, Any]:
    """Verify signature, expiry and purpose of ``token`` and return its claims.

    Raises:
        JWTError: If the token is malformed, tampered with, expired, or was
            issued for a different purpose than ``token_type``
    """
    claims = jwt.decode(token, _signing_key(token_type), algorithms=[settings.jwt_algorithm])
    if claims.get("type") != token_type:
        raise JWTError(f"Expected a {token_type} token")
    return claims


def get_user_id_from_token(token: str, token_type: str = ACCESS_TOKEN) -> UUID:
    """User id from a verified token.

    Raises:
        JWTError: If the token fails verification or has no subject
        ValueError: If the subject is not a UUID
    """
    subject = decode_token(token, token_type).get("sub")
    if subject is None:
        raise JWTError("Token has no subject")
    return UUID(subject)
