"""Reusable FastAPI dependencies."""
from __future__ import annotations

from collections.abc import AsyncGenerator
from dataclasses import dataclass
from typing import Optional

import jwt
import pydantic
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from .config import get_settings
from .database import get_session
from .errors import Forbidden, Unauthorized
from .models import User
from .security import decode_access_token
from .services import users as users_service

# Bearer header is only a fallback for clients that cannot keep cookies
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    """Authenticated caller as asserted by the session token."""

    sub: str
    email: str
    role: Optional[str] = None


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that yields an AsyncSession."""
    async for session in get_session():
        yield session


def extract_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
) -> str | None:
    """Cookie first, then ``Authorization: Bearer <token>``."""

    token = request.cookies.get(get_settings().cookie_name)
    if token:
        return token
    if credentials is not None and credentials.scheme.lower() == "bearer":
        return credentials.credentials or None
    return None


async def get_identity(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Identity:
    """Validate the session token and return the caller's identity."""

    token = extract_token(request, credentials)
    if not token:
        raise Unauthorized()

    try:
        token_data = decode_access_token(token)
    except (jwt.PyJWTError, pydantic.ValidationError) as exc:
        raise Unauthorized() from exc

    return Identity(sub=token_data.sub, email=token_data.email, role=token_data.role)


async def get_current_user(
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(get_db_session),
) -> User:
    """Load the user behind the token; a deleted user is unauthorized."""

    user = await users_service.get_user(session, identity.sub)
    if user is None:
        raise Unauthorized()
    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    """Ensure the caller currently holds the ADMIN role.

    The role comes from the database, not the token, so a demotion takes
    effect on the next request.
    """

    if not user.is_admin:
        raise Forbidden()
    return user
