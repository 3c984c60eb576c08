"""Security utilities: password hashing, random credentials and JWT session tokens.

Tokens carry the account id in ``sub`` plus the ``role`` and display ``name``
claims, and self-expire through ``exp``. Verification is signature + expiry
only; there is no server-side revocation list.
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from academy.app.core.settings import get_settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ALGORITHM = "HS256"


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def generate_random_credential() -> str:
    """Hashed password for auto-provisioned accounts; the plain value is discarded."""
    return get_password_hash(secrets.token_urlsafe(12))


def create_access_token(
    user_id: int,
    role: Optional[str] = None,
    name: Optional[str] = None,
    expires_minutes: Optional[int] = None,
) -> str:
    settings = get_settings()
    expire_delta = timedelta(
        minutes=expires_minutes if expires_minutes is not None else settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    expire = datetime.now(timezone.utc) + expire_delta
    payload: Dict[str, Any] = {"sub": str(user_id), "exp": expire}
    if role is not None:
        payload["role"] = role
    if name is not None:
        payload["name"] = name
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError as exc:
        raise ValueError("Expired token") from exc
    except jwt.InvalidTokenError as exc:
        raise ValueError("Invalid token") from exc
