"""Credential store access: lookups, authentication and user creation."""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import Conflict, InvalidCredentials, ValidationError
from ..models import Role, User
from ..security import hash_password, normalize_email, verify_password

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


async def get_user(session: AsyncSession, user_id: str) -> User | None:
    return await session.get(User, user_id)


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    result = await session.execute(select(User).where(User.email == normalize_email(email)))
    return result.scalar_one_or_none()


async def authenticate(session: AsyncSession, email: str, password: str) -> User:
    """Return the user for valid credentials or raise ``InvalidCredentials``."""

    user = await get_user_by_email(session, email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Failed login attempt for %s", normalize_email(email))
        raise InvalidCredentials()
    return user


async def list_users(session: AsyncSession) -> Sequence[User]:
    result = await session.execute(select(User).order_by(User.created_at.desc()))
    return list(result.scalars().all())


async def create_user(
    session: AsyncSession,
    email: str,
    password: str,
    role: Role | str = Role.USER,
) -> User:
    """Create a user with a hashed password; duplicates raise ``Conflict``."""

    email = normalize_email(email)
    if not email:
        raise ValidationError("email is required")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"password must have at least {MIN_PASSWORD_LENGTH} characters")
    role_value = Role(role).value

    user = User(email=email, password_hash=hash_password(password), role=role_value)
    session.add(user)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        logger.warning("User creation rejected: %s already exists", email)
        raise Conflict("email already exists") from None
    await session.refresh(user)
    logger.info("User created with ID %s for %s (%s)", user.id, email, role_value)
    return user
