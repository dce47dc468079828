"""Client endpoints, scoped to the authenticated user."""
from typing import Optional, Sequence

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..dependencies import Identity, get_db_session, get_identity
from ..models import Client
from ..schemas import ClientCreate, ClientRead, ClientUpdate, OkResponse
from ..services import clients as clients_service

router = APIRouter(prefix="/clients", tags=["clients"])


@router.get("", response_model=list[ClientRead])
async def list_clients(
    q: Optional[str] = Query(default=None, max_length=120),
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(get_db_session),
) -> Sequence[Client]:
    """Return the caller's clients, newest first; ``q`` searches name and CUIT."""

    return await clients_service.list_clients(session, identity.sub, q)


@router.get("/{client_id}", response_model=ClientRead)
async def get_client(
    client_id: str,
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(get_db_session),
) -> Client:
    return await clients_service.get_client(session, identity.sub, client_id)


@router.post("", response_model=ClientRead, status_code=status.HTTP_201_CREATED)
async def create_client(
    payload: ClientCreate,
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(get_db_session),
) -> Client:
    return await clients_service.create_client(
        session,
        identity.sub,
        razon_social=payload.razon_social,
        cuit=payload.cuit,
        tipo_persona=payload.tipo_persona,
    )


@router.put("/{client_id}", response_model=ClientRead)
async def update_client(
    client_id: str,
    payload: ClientUpdate,
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(get_db_session),
) -> Client:
    """Partial update: fields left out of the body are not touched."""

    changes = payload.model_dump(exclude_unset=True)
    return await clients_service.update_client(session, identity.sub, client_id, changes)


@router.delete("/{client_id}", response_model=OkResponse)
async def delete_client(
    client_id: str,
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(get_db_session),
) -> OkResponse:
    await clients_service.delete_client(session, identity.sub, client_id)
    return OkResponse()
