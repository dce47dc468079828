"""Pydantic schemas used across the backend API.

Wire names are camelCase (``razonSocial``, ``isActive``...) while the
Python attributes stay snake_case.
"""
from datetime import datetime, timedelta, timezone
from typing import Annotated, Literal, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

RoleName = Literal["ADMIN", "USER"]
TipoPersonaName = Literal["JURIDICA", "FISICA"]
AccountTypeName = Literal["CASH", "BANK", "INCOME", "CLIENT"]


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive values; they are stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UTCDateTime = Annotated[datetime, AfterValidator(_as_utc)]


class CamelModel(BaseModel):
    """Base model that reads snake_case and speaks camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class TokenData(BaseModel):
    """Information encoded into JWTs."""

    sub: str
    email: str
    role: Optional[RoleName] = None


class LoginRequest(BaseModel):
    """Credentials supplied during login. Presence is checked by the route."""

    email: Optional[str] = None
    password: Optional[str] = None


class RegisterRequest(LoginRequest):
    """Payload for self-registration."""

    email: Optional[str] = Field(default=None, max_length=255)


class UserRead(CamelModel):
    """Public representation of a user (never includes the hash)."""

    id: str
    email: str
    role: RoleName
    created_at: UTCDateTime


class UserEnvelope(BaseModel):
    ok: bool = True
    user: UserRead


class UserListEnvelope(BaseModel):
    ok: bool = True
    users: list[UserRead]


class AdminUserCreate(BaseModel):
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=6)
    role: RoleName = "USER"


class OkResponse(BaseModel):
    ok: bool = True


class HealthRead(BaseModel):
    ok: bool = True
    service: str


# ---------- clients ----------


class ClientCreate(CamelModel):
    model_config = ConfigDict(extra="forbid")

    razon_social: str = Field(max_length=120)
    cuit: Optional[str] = Field(default=None, max_length=20)
    tipo_persona: Optional[TipoPersonaName] = None


class ClientUpdate(CamelModel):
    """Partial update; an explicit null clears ``cuit`` / ``tipoPersona``."""

    model_config = ConfigDict(extra="forbid")

    razon_social: Optional[str] = Field(default=None, max_length=120)
    cuit: Optional[str] = Field(default=None, max_length=20)
    tipo_persona: Optional[TipoPersonaName] = None


class ClientRead(CamelModel):
    id: str
    user_id: str
    razon_social: str
    cuit: Optional[str] = None
    tipo_persona: Optional[TipoPersonaName] = None
    created_at: UTCDateTime
    updated_at: UTCDateTime


# ---------- accounts ----------


class AccountCreate(CamelModel):
    name: str = Field(max_length=120)
    type: AccountTypeName
    client_id: Optional[str] = None


class AccountUpdate(CamelModel):
    name: Optional[str] = Field(default=None, max_length=120)
    is_active: Optional[bool] = None


class AccountRead(CamelModel):
    id: str
    name: str
    type: AccountTypeName
    is_active: bool
    client_id: Optional[str] = None


def compute_expiry(minutes: int) -> datetime:
    """Return an absolute expiration timestamp for tokens."""

    return datetime.now(timezone.utc) + timedelta(minutes=minutes)
