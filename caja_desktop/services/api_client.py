"""
HTTP API client for talking to the Caja backend.

Usage pattern (the Qt code goes through services.repository instead):

    from caja_desktop.services.api_client import get_api_client

    client = get_api_client()

    # login: the server answers with an httpOnly cookie kept in the jar
    user = await client.login(email="martin@estudio.com", password="Clave123")

    # list clients
    clients = await client.list_clients(q="acme")
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://127.0.0.1:3001"


# -----------------------------
# Configuration helpers
# -----------------------------


def _load_base_url() -> str:
    """
    Determine the backend base URL.

    Priority:
    1. Environment variable CAJA_API_BASE_URL
    2. caja_desktop/config.json -> {"api_base_url": "..."}
    3. Default: http://127.0.0.1:3001
    """
    env_url = os.getenv("CAJA_API_BASE_URL")
    if env_url:
        return env_url.rstrip("/")

    # config.json lives one level above this file (inside caja_desktop)
    config_path = Path(__file__).resolve().parent.parent / "config.json"
    if config_path.exists():
        try:
            with config_path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable %s: %s", config_path, exc)
        else:
            cfg_url = data.get("api_base_url")
            if cfg_url:
                return str(cfg_url).rstrip("/")

    return DEFAULT_BASE_URL


# -----------------------------
# Error types
# -----------------------------


class APIError(Exception):
    """Generic API error; the message is the server's ``error`` text."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ValidationAPIError(APIError):
    """400: the server rejected the input."""


class AuthError(APIError):
    """401: missing, invalid or expired session."""


class PermissionDeniedError(APIError):
    """403: authenticated but not allowed."""


class NotFoundError(APIError):
    """404: absent or not owned by the caller."""


class ConflictError(APIError):
    """409: uniqueness violation."""


_STATUS_ERRORS = {
    400: ValidationAPIError,
    401: AuthError,
    403: PermissionDeniedError,
    404: NotFoundError,
    409: ConflictError,
}


def _error_message(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return f"HTTP {resp.status_code}"
    if isinstance(data, dict):
        msg = data.get("error") or data.get("message") or data.get("detail")
        if msg:
            return str(msg)
    return f"HTTP {resp.status_code}"


def _raise_for_status(resp: httpx.Response) -> None:
    if resp.is_success:
        return
    error_cls = _STATUS_ERRORS.get(resp.status_code, APIError)
    raise error_cls(_error_message(resp), status_code=resp.status_code)


# -----------------------------
# Main API client
# -----------------------------


class APIClient:
    """
    Reusable HTTP client for the Caja backend.

    The session lives in the cookie jar of the underlying httpx client,
    so the same instance must be reused between login and later calls.
    Use APIClient.get() to obtain a singleton instance.
    """

    _instance: Optional["APIClient"] = None

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url: str = (base_url or _load_base_url()).rstrip("/")
        self._transport = transport
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None
        self.current_user: Optional[Dict[str, Any]] = None

    # ---------- Singleton helper ----------

    @classmethod
    def get(cls) -> "APIClient":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    # ---------- Internal helpers ----------

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        client = await self._ensure_client()
        try:
            resp = await client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise APIError(f"No se pudo conectar con {self.base_url}: {exc}") from exc
        _raise_for_status(resp)
        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    # ---------- Public methods ----------

    async def close(self) -> None:
        """
        Close underlying HTTP connection pool.

        Call this once on app shutdown.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    # ---- Health check ----

    async def health(self) -> Dict[str, Any]:
        """Call /health on the backend."""
        return await self._request("GET", "/health")

    # ---- Authentication ----

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        """
        Call /auth/login. The backend sets the session cookie and returns
        {"ok": true, "user": {...}}; the user dict is returned here.
        """
        data = await self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.current_user = data["user"]
        return self.current_user

    async def logout(self) -> None:
        try:
            await self._request("POST", "/auth/logout")
        finally:
            self.current_user = None
            if self._client is not None:
                self._client.cookies.clear()

    async def me(self) -> Optional[Dict[str, Any]]:
        """Return the logged-in user, or None when the session is gone."""
        try:
            data = await self._request("GET", "/auth/me")
        except AuthError:
            self.current_user = None
            return None
        self.current_user = data["user"]
        return self.current_user

    # ---- Clients ----

    async def list_clients(self, q: str = "") -> List[Dict[str, Any]]:
        params = {"q": q.strip()} if q and q.strip() else None
        data = await self._request("GET", "/clients", params=params)
        if not isinstance(data, list):
            raise APIError("Expected a list of clients from /clients")
        return data

    async def get_client(self, client_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/clients/{client_id}")

    async def create_client(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST /clients; payload uses the wire names (razonSocial, cuit, tipoPersona)."""
        return await self._request("POST", "/clients", json=payload)

    async def update_client(self, client_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/clients/{client_id}", json=payload)

    async def delete_client(self, client_id: str) -> None:
        await self._request("DELETE", f"/clients/{client_id}")

    # ---- Accounts ----

    async def list_accounts(
        self,
        account_type: Optional[str] = None,
        include_inactive: bool = False,
    ) -> List[Dict[str, Any]]:
        params: Dict[str, str] = {}
        if account_type:
            params["type"] = account_type
        if include_inactive:
            params["includeInactive"] = "true"
        data = await self._request("GET", "/accounts", params=params or None)
        if not isinstance(data, list):
            raise APIError("Expected a list of accounts from /accounts")
        return data

    async def create_account(
        self, name: str, account_type: str, client_id: Optional[str] = None
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"name": name, "type": account_type}
        if client_id:
            payload["clientId"] = client_id
        return await self._request("POST", "/accounts", json=payload)

    async def update_account(self, account_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/accounts/{account_id}", json=payload)

    async def deactivate_account(self, account_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/accounts/{account_id}")

    # ---- Admin ----

    async def list_users(self) -> List[Dict[str, Any]]:
        data = await self._request("GET", "/admin/users")
        return data["users"]

    async def create_user(self, email: str, password: str, role: str = "USER") -> Dict[str, Any]:
        data = await self._request(
            "POST", "/admin/users", json={"email": email, "password": password, "role": role}
        )
        return data["user"]


# -----------------------------
# Convenience wrapper for Qt UI
# -----------------------------


def get_api_client() -> APIClient:
    """Return the process-wide singleton APIClient."""
    return APIClient.get()


# -----------------------------
# Simple CLI test hook
# -----------------------------


async def _demo() -> None:
    """
    Quick manual test: checks /health.

    Run from project root:
        python -m caja_desktop.services.api_client
    """
    client = APIClient.get()

    print(f"Base URL: {client.base_url}")
    print("Checking /health ...")
    print(await client.health())

    await client.close()


if __name__ == "__main__":
    asyncio.run(_demo())
