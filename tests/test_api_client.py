"""Desktop API client exercised against the real backend app."""
from typing import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport

from caja_desktop.services.api_client import (
    APIClient, AuthError, ConflictError, NotFoundError, PermissionDeniedError,
    ValidationAPIError, _load_base_url
)
from caja_server.main import app

from .conftest import BASE_URL, PASSWORD


@pytest_asyncio.fixture
async def api() -> AsyncIterator[APIClient]:
    client = APIClient(base_url=BASE_URL, transport=ASGITransport(app=app))
    yield client
    await client.close()


def test_base_url_prefers_environment(monkeypatch) -> None:
    monkeypatch.setenv("CAJA_API_BASE_URL", "http://caja.local:8080/")
    assert _load_base_url() == "http://caja.local:8080"


@pytest.mark.asyncio
async def test_health(api: APIClient) -> None:
    assert await api.health() == {"ok": True, "service": "caja-server"}


@pytest.mark.asyncio
async def test_login_keeps_session_cookie(api: APIClient, make_user) -> None:
    await make_user("owner@example.com")

    assert await api.me() is None
    with pytest.raises(AuthError):
        await api.list_clients()

    user = await api.login("owner@example.com", PASSWORD)
    assert user["email"] == "owner@example.com"
    assert api.is_authenticated

    me = await api.me()
    assert me["id"] == user["id"]

    accounts = await api.list_accounts()
    assert [a["name"] for a in accounts] == ["CAJA", "INGRESOS HONORARIOS"]

    await api.logout()
    assert not api.is_authenticated
    assert await api.me() is None


@pytest.mark.asyncio
async def test_wrong_password_raises_auth_error(api: APIClient, make_user) -> None:
    await make_user("owner@example.com")
    with pytest.raises(AuthError) as excinfo:
        await api.login("owner@example.com", "nope")
    assert excinfo.value.status_code == 401
    assert excinfo.value.message == "invalid credentials"


@pytest.mark.asyncio
async def test_errors_carry_server_message(api: APIClient, make_user) -> None:
    await make_user("owner@example.com")
    await api.login("owner@example.com", PASSWORD)

    created = await api.create_client({"razonSocial": "ACME", "cuit": "20-12345678-3"})
    assert created["cuit"] == "20123456783"

    with pytest.raises(ConflictError) as conflict:
        await api.create_client({"razonSocial": "OTRO", "cuit": "20123456783"})
    assert conflict.value.message == "cuit already exists for this user"

    with pytest.raises(ValidationAPIError) as invalid:
        await api.create_client({"razonSocial": "X", "cuit": "123"})
    assert invalid.value.status_code == 400

    with pytest.raises(NotFoundError):
        await api.get_client("missing")

    with pytest.raises(PermissionDeniedError):
        await api.list_users()


@pytest.mark.asyncio
async def test_client_and_account_round(api: APIClient, make_user) -> None:
    await make_user("owner@example.com")
    await api.login("owner@example.com", PASSWORD)

    client = await api.create_client({"razonSocial": "ACME", "tipoPersona": "JURIDICA"})
    updated = await api.update_client(client["id"], {"cuit": "20123456783", "tipoPersona": None})
    assert updated["cuit"] == "20123456783"
    assert updated["tipoPersona"] is None
    assert [c["id"] for c in await api.list_clients("acme")] == [client["id"]]

    bank = await api.create_account("BANCO", "BANK")
    renamed = await api.update_account(bank["id"], {"name": "BANCO GALICIA"})
    assert renamed["name"] == "BANCO GALICIA"
    off = await api.deactivate_account(bank["id"])
    assert off["isActive"] is False
    assert bank["id"] not in {a["id"] for a in await api.list_accounts()}
    assert bank["id"] in {a["id"] for a in await api.list_accounts(include_inactive=True)}

    linked = await api.create_account("ACME", "CLIENT", client_id=client["id"])
    assert linked["clientId"] == client["id"]
    with pytest.raises(ConflictError):
        await api.delete_client(client["id"])


@pytest.mark.asyncio
async def test_admin_calls(api: APIClient, make_user) -> None:
    await make_user("admin@example.com", role="ADMIN")
    await api.login("admin@example.com", PASSWORD)

    user = await api.create_user("nuevo@example.com", "Clave123")
    assert user["role"] == "USER"
    emails = [u["email"] for u in await api.list_users()]
    assert set(emails) == {"admin@example.com", "nuevo@example.com"}
