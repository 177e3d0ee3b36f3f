"""
Security utilities for admin authentication.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Any
from jose import jwt, JWTError
from .config import settings

ADMIN_ROLE = "admin"


def create_access_token(
    subject: str,
    expires_delta: Optional[timedelta] = None,
    additional_claims: Optional[dict[str, Any]] = None
) -> str:
    """Create a JWT access token."""
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )

    to_encode = {
        "exp": expire,
        "sub": str(subject),
        "iat": datetime.now(timezone.utc),
        "type": "auth"
    }

    if additional_claims:
        to_encode.update(additional_claims)

    encoded_jwt = jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )
    return encoded_jwt


def create_admin_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create a token carrying the admin role claim (issued to CMS editors)."""
    return create_access_token(
        subject,
        expires_delta=expires_delta,
        additional_claims={"role": ADMIN_ROLE},
    )


def decode_token(token: str) -> Optional[dict]:
    """Decode and validate a JWT token."""
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
        return payload
    except JWTError:
        return None


def verify_admin_token(token: str) -> Optional[str]:
    """Return the subject of a valid admin token, None otherwise."""
    payload = decode_token(token)
    if payload is None or payload.get("role") != ADMIN_ROLE:
        return None
    return payload.get("sub")
