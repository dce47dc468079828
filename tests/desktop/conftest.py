"""Fixtures for the desktop view-model tests; these never touch the database."""
from typing import Any, Dict, List, Optional

import pytest

from caja_desktop.services.api_client import APIError


@pytest.fixture(autouse=True)
def prepare_database() -> None:
    """Override the backend schema fixture: nothing to set up here."""


class FakeRepo:
    """In-memory stand-in for caja_desktop.services.repository."""

    def __init__(self) -> None:
        self.accounts: List[Dict[str, Any]] = []
        self.clients: List[Dict[str, Any]] = []
        self.users: List[Dict[str, Any]] = []
        self.calls: List[tuple] = []
        self.fail_with: Optional[APIError] = None

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    # accounts
    def list_accounts(self, include_inactive: bool = True):
        self.calls.append(("list_accounts", include_inactive))
        self._maybe_fail()
        return list(self.accounts)

    def create_account(self, name, account_type, client_id=None):
        self.calls.append(("create_account", name, account_type))
        self._maybe_fail()
        row = {"id": f"a{len(self.accounts) + 1}", "name": name, "type": account_type,
               "isActive": True, "clientId": client_id}
        self.accounts.append(row)
        return row

    def rename_account(self, account_id, name):
        self.calls.append(("rename_account", account_id, name))
        self._maybe_fail()
        return {"id": account_id, "name": name}

    def deactivate_account(self, account_id):
        self.calls.append(("deactivate_account", account_id))
        self._maybe_fail()
        return {"id": account_id, "isActive": False}

    # clients
    def list_clients(self, q=""):
        self.calls.append(("list_clients", q))
        self._maybe_fail()
        return list(self.clients)

    def create_client(self, payload):
        self.calls.append(("create_client", payload))
        self._maybe_fail()
        row = {"id": f"c{len(self.clients) + 1}", "cuit": None, "tipoPersona": None, **payload}
        self.clients.append(row)
        return row

    def update_client(self, client_id, payload):
        self.calls.append(("update_client", client_id, payload))
        self._maybe_fail()
        return {"id": client_id, **payload}

    def delete_client(self, client_id):
        self.calls.append(("delete_client", client_id))
        self._maybe_fail()
        self.clients = [c for c in self.clients if c["id"] != client_id]

    # admin
    def list_users(self):
        self.calls.append(("list_users",))
        self._maybe_fail()
        return list(self.users)

    def create_user(self, email, password, role="USER"):
        self.calls.append(("create_user", email, password, role))
        self._maybe_fail()
        row = {"id": f"u{len(self.users) + 1}", "email": email, "role": role, "createdAt": "2024-01-01T00:00:00Z"}
        self.users.append(row)
        return row


@pytest.fixture
def repo() -> FakeRepo:
    return FakeRepo()
