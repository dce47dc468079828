"""Provisioning of the per-user system accounts (CAJA, INGRESOS HONORARIOS)."""
from __future__ import annotations

import logging

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import SYSTEM_ACCOUNTS, Account
from ..models.base import new_id, utcnow

logger = logging.getLogger(__name__)

_DIALECT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def _insert_for(session: AsyncSession):
    dialect = session.get_bind().dialect.name
    try:
        return _DIALECT_INSERTS[dialect]
    except KeyError:
        raise RuntimeError(f"Account provisioning does not support the {dialect!r} dialect") from None


async def ensure_default_accounts(session: AsyncSession, user_id: str) -> None:
    """Create or re-activate the system accounts of ``user_id``.

    Each account is a single ``INSERT .. ON CONFLICT (user_id, name) DO
    UPDATE`` so concurrent calls converge on the same rows.
    """

    insert = _insert_for(session)
    for name, account_type in SYSTEM_ACCOUNTS.items():
        stmt = insert(Account).values(
            id=new_id(),
            user_id=user_id,
            name=name,
            type=account_type.value,
            is_active=True,
            created_at=utcnow(),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[Account.user_id, Account.name],
            set_={"is_active": True, "type": account_type.value},
        )
        await session.execute(stmt)
    await session.commit()
    logger.debug("System accounts ensured for user %s", user_id)
