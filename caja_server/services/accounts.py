"""Account entity service: per-user ledger buckets with soft delete."""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import Conflict, NotFound, ValidationError
from ..models import CASH_ACCOUNT_NAME, Account, AccountType, Client

logger = logging.getLogger(__name__)

# Types owned by the system: never renamed or deactivated by users
LOCKED_TYPES = frozenset({AccountType.CLIENT.value, AccountType.INCOME.value})


def parse_account_type(value: str | None) -> AccountType | None:
    """Return the matching AccountType, or None for empty/unknown values."""

    if not value:
        return None
    try:
        return AccountType(value)
    except ValueError:
        return None


def _check_deactivation(account: Account) -> None:
    if account.type in LOCKED_TYPES:
        raise ValidationError("No se puede desactivar cuentas CLIENT/INCOME desde aquí")
    if account.name == CASH_ACCOUNT_NAME:
        raise ValidationError("CAJA no se puede desactivar")


async def list_accounts(
    session: AsyncSession,
    user_id: str,
    account_type: AccountType | None = None,
    include_inactive: bool = False,
) -> Sequence[Account]:
    stmt = select(Account).where(Account.user_id == user_id)
    if not include_inactive:
        stmt = stmt.where(Account.is_active.is_(True))
    if account_type is not None:
        stmt = stmt.where(Account.type == account_type.value)
    stmt = stmt.order_by(Account.type, Account.name)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_account(session: AsyncSession, user_id: str, account_id: str) -> Account:
    result = await session.execute(
        select(Account).where(Account.id == account_id, Account.user_id == user_id)
    )
    account = result.scalar_one_or_none()
    if account is None:
        raise NotFound("Cuenta no encontrada")
    return account


async def create_account(
    session: AsyncSession,
    user_id: str,
    name: str,
    account_type: AccountType | str,
    client_id: str | None = None,
) -> Account:
    """Create an account; ``client_id`` is required iff the type is CLIENT."""

    name = (name or "").strip()
    if not name:
        raise ValidationError("name es obligatorio")
    try:
        account_type = AccountType(account_type)
    except ValueError:
        raise ValidationError("type inválido") from None

    if account_type is AccountType.CLIENT:
        if not client_id:
            raise ValidationError("clientId es obligatorio cuando type=CLIENT")
        owned = await session.execute(
            select(Client.id).where(Client.id == client_id, Client.user_id == user_id)
        )
        if owned.scalar_one_or_none() is None:
            raise ValidationError("clientId inválido")
    elif client_id:
        raise ValidationError("clientId solo se permite cuando type=CLIENT")

    account = Account(
        user_id=user_id,
        name=name,
        type=account_type.value,
        client_id=client_id if account_type is AccountType.CLIENT else None,
        is_active=True,
    )
    session.add(account)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        logger.info("Duplicate account %r rejected for user %s", name, user_id)
        raise Conflict("Cuenta duplicada (nombre o clientId)") from None
    await session.refresh(account)
    return account


async def update_account(
    session: AsyncSession,
    user_id: str,
    account_id: str,
    name: str | None = None,
    is_active: bool | None = None,
) -> Account:
    """Rename and/or toggle an account.

    Only CASH and BANK accounts can be renamed, and CAJA keeps its name.
    Turning ``is_active`` off follows the same rules as ``deactivate_account``.
    """

    account = await get_account(session, user_id, account_id)

    if name is not None:
        name = name.strip()
        if not name:
            raise ValidationError("name no puede ser vacío")
        if account.type in LOCKED_TYPES:
            raise ValidationError("No se puede renombrar CLIENT/INCOME desde este endpoint")
        if account.name == CASH_ACCOUNT_NAME:
            raise ValidationError("CAJA no se puede renombrar")
        account.name = name

    if is_active is not None:
        if not is_active and account.is_active:
            _check_deactivation(account)
        account.is_active = is_active

    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise Conflict("Nombre de cuenta ya existe") from None
    await session.refresh(account)
    return account


async def deactivate_account(session: AsyncSession, user_id: str, account_id: str) -> Account:
    """Soft delete: the row stays, flagged inactive."""

    account = await get_account(session, user_id, account_id)
    _check_deactivation(account)
    account.is_active = False
    await session.commit()
    await session.refresh(account)
    logger.info("Account %s deactivated by user %s", account_id, user_id)
    return account
