"""
Caja repository: thin wrapper that lets the Qt UI call simple
functions while the real work is done via the HTTP backend.

All coroutines run on one private event loop so the httpx connection
pool and its cookie jar survive between calls.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Dict, List, Optional, TypeVar

from caja_desktop.services.api_client import APIClient

T = TypeVar("T")

_loop: Optional[asyncio.AbstractEventLoop] = None


def _run(coro: Awaitable[T]) -> T:
    global _loop
    if _loop is None or _loop.is_closed():
        _loop = asyncio.new_event_loop()
    return _loop.run_until_complete(coro)


def _client() -> APIClient:
    return APIClient.get()


def shutdown() -> None:
    """Close the HTTP client and the private loop. Call once on exit."""
    global _loop
    if _loop is None or _loop.is_closed():
        return
    _loop.run_until_complete(_client().close())
    _loop.close()
    _loop = None


# ---- auth ----


def login(email: str, password: str) -> Dict[str, Any]:
    return _run(_client().login(email=email, password=password))


def logout() -> None:
    _run(_client().logout())


def current_user() -> Optional[Dict[str, Any]]:
    """Ask the backend who is logged in; None once the session is gone."""
    return _run(_client().me())


def health() -> Dict[str, Any]:
    return _run(_client().health())


# ---- clients ----


def list_clients(q: str = "") -> List[Dict[str, Any]]:
    return _run(_client().list_clients(q))


def create_client(payload: Dict[str, Any]) -> Dict[str, Any]:
    return _run(_client().create_client(payload))


def update_client(client_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    return _run(_client().update_client(client_id, payload))


def delete_client(client_id: str) -> None:
    _run(_client().delete_client(client_id))


# ---- accounts ----


def list_accounts(include_inactive: bool = True) -> List[Dict[str, Any]]:
    """
    The accounts page filters locally, so by default every account
    (inactive ones included) is fetched.
    """
    return _run(_client().list_accounts(include_inactive=include_inactive))


def create_account(name: str, account_type: str, client_id: Optional[str] = None) -> Dict[str, Any]:
    return _run(_client().create_account(name, account_type, client_id))


def rename_account(account_id: str, name: str) -> Dict[str, Any]:
    return _run(_client().update_account(account_id, {"name": name}))


def deactivate_account(account_id: str) -> Dict[str, Any]:
    return _run(_client().deactivate_account(account_id))


# ---- admin ----


def list_users() -> List[Dict[str, Any]]:
    return _run(_client().list_users())


def create_user(email: str, password: str, role: str = "USER") -> Dict[str, Any]:
    return _run(_client().create_user(email, password, role))
