"""Client entity service: per-user CRUD with CUIT normalization."""
from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Sequence

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import Conflict, NotFound, ValidationError
from ..models import Account, Client, TipoPersona

logger = logging.getLogger(__name__)

CUIT_LENGTH = 11
RAZON_SOCIAL_MIN = 2
RAZON_SOCIAL_MAX = 120

_NON_DIGITS = re.compile(r"\D")
_UNSET: Any = object()


def normalize_cuit(value: str | None) -> str | None:
    """Strip every non-digit from ``value``.

    Returns None for empty input and the 11-digit string otherwise; any
    other digit count raises ``ValidationError``.
    """

    if value is None:
        return None
    digits = _NON_DIGITS.sub("", value.strip())
    if not digits:
        return None
    if len(digits) != CUIT_LENGTH:
        raise ValidationError("cuit must have 11 digits")
    return digits


def _clean_razon_social(value: str | None) -> str:
    razon_social = (value or "").strip()
    if not RAZON_SOCIAL_MIN <= len(razon_social) <= RAZON_SOCIAL_MAX:
        raise ValidationError(
            f"razonSocial must have between {RAZON_SOCIAL_MIN} and {RAZON_SOCIAL_MAX} characters"
        )
    return razon_social


def _clean_tipo_persona(value: str | None) -> str | None:
    if value is None:
        return None
    try:
        return TipoPersona(value).value
    except ValueError:
        raise ValidationError("tipoPersona must be JURIDICA or FISICA") from None


async def _commit_or_conflict(session: AsyncSession, message: str) -> None:
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise Conflict(message) from None


async def list_clients(session: AsyncSession, user_id: str, q: str | None = None) -> Sequence[Client]:
    """Clients of ``user_id``, newest first, optionally filtered by ``q``."""

    stmt = select(Client).where(Client.user_id == user_id)
    query = (q or "").strip()
    if query:
        conditions = [
            Client.razon_social.icontains(query, autoescape=True),
            Client.cuit.contains(query, autoescape=True),
        ]
        digits = _NON_DIGITS.sub("", query)
        if digits and digits != query:
            conditions.append(Client.cuit.contains(digits, autoescape=True))
        stmt = stmt.where(or_(*conditions))
    stmt = stmt.order_by(Client.created_at.desc(), Client.id)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_client(session: AsyncSession, user_id: str, client_id: str) -> Client:
    """Return the client or raise ``NotFound`` (also when owned by someone else)."""

    result = await session.execute(
        select(Client).where(Client.id == client_id, Client.user_id == user_id)
    )
    client = result.scalar_one_or_none()
    if client is None:
        raise NotFound()
    return client


async def create_client(
    session: AsyncSession,
    user_id: str,
    razon_social: str,
    cuit: str | None = None,
    tipo_persona: str | None = None,
) -> Client:
    client = Client(
        user_id=user_id,
        razon_social=_clean_razon_social(razon_social),
        cuit=normalize_cuit(cuit),
        tipo_persona=_clean_tipo_persona(tipo_persona),
    )
    session.add(client)
    await _commit_or_conflict(session, "cuit already exists for this user")
    await session.refresh(client)
    logger.info("Client %s created for user %s", client.id, user_id)
    return client


async def update_client(
    session: AsyncSession,
    user_id: str,
    client_id: str,
    changes: Mapping[str, Any],
) -> Client:
    """Apply a partial update.

    ``changes`` only holds the fields the caller sent; a None value for
    ``cuit`` or ``tipo_persona`` clears the column.
    """

    client = await get_client(session, user_id, client_id)

    razon_social = changes.get("razon_social", _UNSET)
    if razon_social is not _UNSET:
        client.razon_social = _clean_razon_social(razon_social)
    if "cuit" in changes:
        client.cuit = normalize_cuit(changes["cuit"])
    if "tipo_persona" in changes:
        client.tipo_persona = _clean_tipo_persona(changes["tipo_persona"])

    await _commit_or_conflict(session, "client with same CUIT already exists")
    await session.refresh(client)
    return client


async def delete_client(session: AsyncSession, user_id: str, client_id: str) -> None:
    """Hard-delete a client. Clients linked to an account cannot be removed."""

    client = await get_client(session, user_id, client_id)
    linked = await session.execute(
        select(Account.id).where(Account.client_id == client.id).limit(1)
    )
    if linked.scalar_one_or_none() is not None:
        raise Conflict("client is linked to an account")
    await session.delete(client)
    await session.commit()
    logger.info("Client %s deleted by user %s", client_id, user_id)
