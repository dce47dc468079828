"""Authentication routes: cookie-based login, logout and identity check."""
import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from ..dependencies import Identity, get_db_session, get_identity
from ..errors import Unauthorized, ValidationError
from ..schemas import LoginRequest, OkResponse, UserEnvelope, UserRead
from ..security import clear_session_cookie, create_access_token, set_session_cookie
from ..services import provisioning
from ..services import users as users_service

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/login", response_model=UserEnvelope)
async def login(
    payload: LoginRequest,
    response: Response,
    session: AsyncSession = Depends(get_db_session),
) -> UserEnvelope:
    """Check credentials and set the httpOnly session cookie.

    The token itself is never part of the response body.
    """

    if not payload.email or not payload.password:
        raise ValidationError("email and password are required")

    user = await users_service.authenticate(session, payload.email, payload.password)
    await provisioning.ensure_default_accounts(session, user.id)

    set_session_cookie(response, create_access_token(user))
    logger.info("User %s logged in", user.email)
    return UserEnvelope(user=UserRead.model_validate(user))


@router.post("/logout", response_model=OkResponse)
async def logout(response: Response) -> OkResponse:
    """Clear the session cookie. Always succeeds."""

    clear_session_cookie(response)
    return OkResponse()


@router.get("/me", response_model=UserEnvelope)
async def me(
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(get_db_session),
) -> UserEnvelope:
    """Return the current user, re-provisioning its system accounts."""

    user = await users_service.get_user(session, identity.sub)
    if user is None:
        raise Unauthorized()
    await provisioning.ensure_default_accounts(session, user.id)
    return UserEnvelope(user=UserRead.model_validate(user))
