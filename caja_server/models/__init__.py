"""SQLAlchemy models exposed by the backend."""
from .account import CASH_ACCOUNT_NAME, INCOME_ACCOUNT_NAME, SYSTEM_ACCOUNTS, Account, AccountType
from .base import Base
from .client import Client, TipoPersona
from .user import Role, User

__all__ = [
    "Account",
    "AccountType",
    "Base",
    "CASH_ACCOUNT_NAME",
    "Client",
    "INCOME_ACCOUNT_NAME",
    "Role",
    "SYSTEM_ACCOUNTS",
    "TipoPersona",
    "User",
]
