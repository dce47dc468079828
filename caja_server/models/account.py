"""Account model: named ledger buckets owned by a user."""
import enum
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, OwnedMixin, new_id, utcnow


class AccountType(str, enum.Enum):
    CASH = "CASH"
    BANK = "BANK"
    INCOME = "INCOME"
    CLIENT = "CLIENT"


CASH_ACCOUNT_NAME = "CAJA"
INCOME_ACCOUNT_NAME = "INGRESOS HONORARIOS"

# name -> canonical type of every account provisioned for each user
SYSTEM_ACCOUNTS: dict[str, AccountType] = {
    CASH_ACCOUNT_NAME: AccountType.CASH,
    INCOME_ACCOUNT_NAME: AccountType.INCOME,
}


class Account(OwnedMixin, Base):
    """Account rows are soft-deleted through `is_active`, never removed."""

    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(120))
    type: Mapped[str] = mapped_column(String(16))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    client_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("clients.id"), nullable=True, unique=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_accounts_user_name"),
        Index("ix_accounts_user_type_name", "user_id", "type", "name"),
    )

    @property
    def is_system(self) -> bool:
        return self.name in SYSTEM_ACCOUNTS
