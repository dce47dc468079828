"""Public self-registration."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import get_settings
from ..dependencies import get_db_session
from ..errors import Forbidden, ValidationError
from ..models import Role
from ..schemas import RegisterRequest, UserRead
from ..services import users as users_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register_user(
    payload: RegisterRequest, session: AsyncSession = Depends(get_db_session)
) -> UserRead:
    """Create a USER-role account when self-registration is enabled."""

    if not get_settings().allow_registration:
        raise Forbidden("registration is disabled")
    if not payload.email or not payload.password:
        raise ValidationError("email and password are required")

    user = await users_service.create_user(session, payload.email, payload.password, Role.USER)
    return UserRead.model_validate(user)
