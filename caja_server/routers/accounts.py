"""Account endpoints, scoped to the authenticated user."""
from typing import Optional, Sequence

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..dependencies import Identity, get_db_session, get_identity
from ..models import Account
from ..schemas import AccountCreate, AccountRead, AccountUpdate
from ..services import accounts as accounts_service

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.get("", response_model=list[AccountRead])
async def list_accounts(
    type: Optional[str] = Query(default=None),
    include_inactive: bool = Query(default=False, alias="includeInactive"),
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(get_db_session),
) -> Sequence[Account]:
    """Return the caller's accounts ordered by type then name.

    Unknown ``type`` values are ignored rather than rejected.
    """

    return await accounts_service.list_accounts(
        session,
        identity.sub,
        account_type=accounts_service.parse_account_type(type),
        include_inactive=include_inactive,
    )


@router.post("", response_model=AccountRead, status_code=status.HTTP_201_CREATED)
async def create_account(
    payload: AccountCreate,
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(get_db_session),
) -> Account:
    return await accounts_service.create_account(
        session,
        identity.sub,
        name=payload.name,
        account_type=payload.type,
        client_id=payload.client_id,
    )


@router.put("/{account_id}", response_model=AccountRead)
async def update_account(
    account_id: str,
    payload: AccountUpdate,
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(get_db_session),
) -> Account:
    """Rename (CASH/BANK only) or toggle ``isActive``."""

    return await accounts_service.update_account(
        session,
        identity.sub,
        account_id,
        name=payload.name,
        is_active=payload.is_active,
    )


@router.delete("/{account_id}", response_model=AccountRead)
async def deactivate_account(
    account_id: str,
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(get_db_session),
) -> Account:
    """Soft delete (``isActive=false``); the account is never removed."""

    return await accounts_service.deactivate_account(session, identity.sub, account_id)
