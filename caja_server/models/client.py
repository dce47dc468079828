"""Client model: business contacts owned by a single user."""
import enum
from datetime import datetime

from sqlalchemy import DateTime, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, OwnedMixin, new_id, utcnow


class TipoPersona(str, enum.Enum):
    JURIDICA = "JURIDICA"
    FISICA = "FISICA"


class Client(OwnedMixin, Base):
    """A client (razón social + optional CUIT) scoped to its owner."""

    __tablename__ = "clients"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    razon_social: Mapped[str] = mapped_column(String(120))
    cuit: Mapped[str | None] = mapped_column(String(11), nullable=True)
    tipo_persona: Mapped[str | None] = mapped_column(String(16), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    __table_args__ = (
        # NULL cuit values never collide
        UniqueConstraint("user_id", "cuit", name="uq_clients_user_cuit"),
        Index("ix_clients_user_created", "user_id", "created_at"),
    )
