"""
Password hashing and bearer token handling
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from sandwich_api.core.config import settings

ALGORITHM = "HS256"
ACCESS_PURPOSE = "access"
MFA_PURPOSE = "mfa"


def get_password_hash(password: str) -> str:
    return generate_password_hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    return check_password_hash(hashed_password, plain_password)


def _encode(data: Dict[str, Any], purpose: str, expires_delta: timedelta) -> str:
    payload = dict(data)
    payload["purpose"] = purpose
    payload["exp"] = datetime.now(timezone.utc) + expires_delta
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def create_access_token(user_id: int, email: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create the bearer token a client presents on later requests"""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _encode({"sub": str(user_id), "email": email}, ACCESS_PURPOSE, expires_delta)


def create_mfa_token(user_id: int) -> str:
    """Create the interim token handed out while a second factor is pending"""
    expires_delta = timedelta(minutes=settings.MFA_TOKEN_EXPIRE_MINUTES)
    return _encode({"sub": str(user_id)}, MFA_PURPOSE, expires_delta)


def verify_token(token: str, purpose: str = ACCESS_PURPOSE) -> Dict[str, Any]:
    """Decode a token, raising jwt.InvalidTokenError if it is not usable for purpose"""
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    if payload.get("purpose") != purpose:
        raise jwt.InvalidTokenError("token purpose mismatch")
    return payload


def user_id_from_token(token: Optional[str]) -> Optional[int]:
    """Resolve a bearer token to a user id, or None for anonymous callers"""
    if not token:
        return None
    try:
        payload = verify_token(token)
        return int(payload["sub"])
    except (jwt.InvalidTokenError, KeyError, TypeError, ValueError):
        return None
