"""Admin-only user management."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..dependencies import get_db_session, require_admin
from ..schemas import AdminUserCreate, UserEnvelope, UserListEnvelope, UserRead
from ..services import users as users_service

router = APIRouter(
    prefix="/admin/users",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=UserListEnvelope)
async def list_users(session: AsyncSession = Depends(get_db_session)) -> UserListEnvelope:
    """All users, newest first, without password hashes."""

    users = await users_service.list_users(session)
    return UserListEnvelope(users=[UserRead.model_validate(u) for u in users])


@router.post("", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: AdminUserCreate, session: AsyncSession = Depends(get_db_session)
) -> UserEnvelope:
    user = await users_service.create_user(session, payload.email, payload.password, payload.role)
    return UserEnvelope(user=UserRead.model_validate(user))
