# caja_desktop/core/accounts_view.py
"""State behind the accounts page: filtering, sorting and action guards."""
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from caja_desktop.services import repository
from caja_desktop.services.api_client import APIError

ACCOUNT_TYPES = ("CASH", "BANK", "INCOME", "CLIENT")
CREATABLE_TYPES = ("BANK", "CASH")
SYSTEM_NAMES = ("CAJA", "INGRESOS HONORARIOS")

TYPE_LABEL = {
    "CASH": "Caja",
    "BANK": "Banco",
    "INCOME": "Ingresos",
    "CLIENT": "Cliente",
}

Account = Dict[str, Any]


def normalize_name(text: str | None) -> str:
    """Trim, collapse inner whitespace and upper-case an account name."""
    return re.sub(r"\s+", " ", (text or "").strip()).upper()


def is_system(account: Account) -> bool:
    return account.get("name") in SYSTEM_NAMES


def sort_key(account: Account) -> tuple:
    return (0 if is_system(account) else 1, account.get("type", ""), account.get("name", ""))


def sort_accounts(rows: List[Account]) -> List[Account]:
    return sorted(rows, key=sort_key)


def can_rename(account: Account) -> bool:
    # only bank accounts are editable
    return account.get("type") == "BANK" and bool(account.get("isActive"))


def can_deactivate(account: Account) -> bool:
    if not account.get("isActive"):
        return False
    if account.get("name") == "CAJA":
        return False
    return account.get("type") in CREATABLE_TYPES


class AccountsView:
    """
    Holds the rows of the accounts page and the messages shown above them.

    ``repo`` defaults to services.repository; anything exposing the same
    account functions works.
    """

    def __init__(self, repo: Any = repository) -> None:
        self.repo = repo
        self.rows: List[Account] = []
        self.filter: str = "ALL"
        self.include_inactive: bool = False
        self.new_type: str = "BANK"
        self.new_name: str = ""
        self.error: Optional[str] = None
        self.notice: Optional[str] = None

    # ----- derived state

    @property
    def visible(self) -> List[Account]:
        out = []
        for a in self.rows:
            if self.filter != "ALL" and a.get("type") != self.filter:
                continue
            if not self.include_inactive and not a.get("isActive"):
                continue
            out.append(a)
        return out

    def set_filter(self, value: str) -> None:
        self.filter = value if value in ACCOUNT_TYPES else "ALL"

    def _clear_messages(self) -> None:
        self.error = None
        self.notice = None

    def _replace(self, updated: Account) -> None:
        self.rows = sort_accounts(
            [{**a, **updated} if a.get("id") == updated.get("id") else a for a in self.rows]
        )

    # ----- actions

    def load(self) -> bool:
        self.error = None
        try:
            self.rows = sort_accounts(self.repo.list_accounts(include_inactive=True))
        except APIError as exc:
            self.error = exc.message or "Error al cargar cuentas"
            return False
        return True

    def create(self) -> Optional[Account]:
        self._clear_messages()
        name = normalize_name(self.new_name)
        if not name:
            self.error = "El nombre es obligatorio."
            return None
        if self.new_type == "CASH" and name == "CAJA":
            self.error = "CAJA ya existe como cuenta del sistema."
            return None
        try:
            created = self.repo.create_account(name, self.new_type)
        except APIError as exc:
            self.error = exc.message or "No se pudo crear la cuenta"
            return None
        self.rows = sort_accounts([created, *self.rows])
        self.new_name = ""
        self.notice = "Cuenta creada."
        return created

    def rename(self, account: Account, new_name: str | None) -> Optional[Account]:
        """Rename a bank account; ``None`` or a blank name means the prompt was dismissed."""
        self._clear_messages()
        if new_name is None:
            return None
        name = normalize_name(new_name)
        if not name:
            return None
        if not can_rename(account):
            self.error = "Solo se pueden renombrar cuentas bancarias activas."
            return None
        try:
            updated = self.repo.rename_account(account["id"], name)
        except APIError as exc:
            self.error = exc.message or "No se pudo renombrar"
            return None
        self._replace(updated)
        self.notice = "Cuenta renombrada."
        return updated

    def deactivate(self, account: Account) -> bool:
        self._clear_messages()
        if not can_deactivate(account):
            self.error = f'"{account.get("name")}" no se puede desactivar.'
            return False
        try:
            self.repo.deactivate_account(account["id"])
        except APIError as exc:
            self.error = exc.message or "No se pudo desactivar"
            return False
        self._replace({"id": account["id"], "isActive": False})
        self.notice = "Cuenta desactivada."
        return True
