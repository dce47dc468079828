"""Password hashing and session-token helpers."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

import jwt
from fastapi import Response
from passlib.context import CryptContext

from .config import Settings, get_settings
from .models import User
from .schemas import TokenData, compute_expiry

ALGORITHM = "HS256"

# Stored hashes are PBKDF2-SHA256
password_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
)


def hash_password(password: str) -> str:
    """Hash a password for storage."""
    return password_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain password against the stored hash."""
    return password_context.verify(password, password_hash)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def token_payload(user: User) -> dict[str, Any]:
    """
    Generate the JWT claims for a given user.

    create_access_token() adds "exp" on top of this.
    """
    return {
        "sub": user.id,
        "email": user.email,
        "role": user.role,
        "iat": int(datetime.now(timezone.utc).timestamp()),
    }


def create_access_token(user: User, settings: Settings | None = None) -> str:
    settings = settings or get_settings()
    expires_at = compute_expiry(settings.access_token_expires_minutes)
    return jwt.encode(
        {**token_payload(user), "exp": int(expires_at.timestamp())},
        settings.secret_key,
        algorithm=ALGORITHM,
    )


def decode_access_token(token: str, settings: Settings | None = None) -> TokenData:
    """Decode a JWT access token and return its claims.

    Raises ``jwt.PyJWTError`` for bad signatures, expired or malformed tokens.
    """

    settings = settings or get_settings()
    payload: Dict[str, Any] = jwt.decode(
        token,
        settings.secret_key,
        algorithms=[ALGORITHM],
        options={"require": ["exp", "sub"]},
    )
    return TokenData(**payload)


def set_session_cookie(response: Response, token: str, settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        max_age=settings.cookie_max_age,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )


def clear_session_cookie(response: Response, settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    response.delete_cookie(
        key=settings.cookie_name,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )
