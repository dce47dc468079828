"""Integration tests for the account API."""
import pytest
from httpx import ASGITransport, AsyncClient

from caja_server.main import app

from .conftest import BASE_URL, PASSWORD


async def _account_by_name(client: AsyncClient, name: str) -> dict:
    accounts = (await client.get("/accounts", params={"includeInactive": "true"})).json()
    return next(a for a in accounts if a["name"] == name)


@pytest.mark.asyncio
async def test_accounts_require_authentication(client: AsyncClient) -> None:
    assert (await client.get("/accounts")).status_code == 401
    assert (await client.post("/accounts", json={"name": "X", "type": "BANK"})).status_code == 401
    assert (await client.put("/accounts/x", json={"name": "Y"})).status_code == 401
    assert (await client.delete("/accounts/x")).status_code == 401


@pytest.mark.asyncio
async def test_login_provisions_system_accounts(user_client: AsyncClient) -> None:
    accounts = (await user_client.get("/accounts")).json()
    assert [(a["name"], a["type"], a["isActive"]) for a in accounts] == [
        ("CAJA", "CASH", True),
        ("INGRESOS HONORARIOS", "INCOME", True),
    ]
    assert all(a["clientId"] is None for a in accounts)


@pytest.mark.asyncio
async def test_create_bank_and_cash_accounts(user_client: AsyncClient) -> None:
    bank = await user_client.post("/accounts", json={"name": "  BANCO MACRO ", "type": "BANK"})
    assert bank.status_code == 201
    assert bank.json()["name"] == "BANCO MACRO"
    assert bank.json()["isActive"] is True
    assert bank.json()["clientId"] is None

    cash = await user_client.post("/accounts", json={"name": "CAJA CHICA", "type": "CASH"})
    assert cash.status_code == 201

    listed = (await user_client.get("/accounts")).json()
    assert [(a["type"], a["name"]) for a in listed] == [
        ("BANK", "BANCO MACRO"),
        ("CASH", "CAJA"),
        ("CASH", "CAJA CHICA"),
        ("INCOME", "INGRESOS HONORARIOS"),
    ]

    only_cash = (await user_client.get("/accounts", params={"type": "CASH"})).json()
    assert [a["name"] for a in only_cash] == ["CAJA", "CAJA CHICA"]

    unknown_type = (await user_client.get("/accounts", params={"type": "NOPE"})).json()
    assert len(unknown_type) == 4


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload, message",
    [
        ({"name": "   ", "type": "BANK"}, "name es obligatorio"),
        ({"name": "ACME", "type": "CLIENT"}, "clientId es obligatorio cuando type=CLIENT"),
        ({"name": "EFECTIVO", "type": "CASH", "clientId": "abc"}, "clientId solo se permite cuando type=CLIENT"),
        ({"name": "ACME", "type": "CLIENT", "clientId": "missing"}, "clientId inválido"),
    ],
)
async def test_create_account_validation(user_client: AsyncClient, payload, message) -> None:
    response = await user_client.post("/accounts", json=payload)
    assert response.status_code == 400
    assert response.json() == {"error": message}


@pytest.mark.asyncio
async def test_create_account_with_invalid_type(user_client: AsyncClient) -> None:
    response = await user_client.post("/accounts", json={"name": "X", "type": "SAVINGS"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_duplicate_account_name_conflicts(user_client: AsyncClient) -> None:
    first = await user_client.post("/accounts", json={"name": "BANCO NACION", "type": "BANK"})
    assert first.status_code == 201
    second = await user_client.post("/accounts", json={"name": "BANCO NACION", "type": "CASH"})
    assert second.status_code == 409

    system = await user_client.post("/accounts", json={"name": "CAJA", "type": "CASH"})
    assert system.status_code == 409


@pytest.mark.asyncio
async def test_client_account_links_owned_client(user_client: AsyncClient, make_user) -> None:
    client_row = (await user_client.post("/clients", json={"razonSocial": "ACME"})).json()

    created = await user_client.post(
        "/accounts", json={"name": "ACME", "type": "CLIENT", "clientId": client_row["id"]}
    )
    assert created.status_code == 201
    assert created.json()["clientId"] == client_row["id"]

    again = await user_client.post(
        "/accounts", json={"name": "ACME 2", "type": "CLIENT", "clientId": client_row["id"]}
    )
    assert again.status_code == 409

    await make_user("other@example.com")
    async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL) as other:
        await other.post("/auth/login", json={"email": "other@example.com", "password": PASSWORD})
        stolen = await other.post(
            "/accounts", json={"name": "ACME", "type": "CLIENT", "clientId": client_row["id"]}
        )
        assert stolen.status_code == 400


@pytest.mark.asyncio
async def test_rename_bank_account(user_client: AsyncClient) -> None:
    bank = (await user_client.post("/accounts", json={"name": "BANCO", "type": "BANK"})).json()

    response = await user_client.put(f"/accounts/{bank['id']}", json={"name": " BANCO GALICIA "})
    assert response.status_code == 200
    assert response.json()["name"] == "BANCO GALICIA"

    empty = await user_client.put(f"/accounts/{bank['id']}", json={"name": "  "})
    assert empty.status_code == 400

    clash = await user_client.put(f"/accounts/{bank['id']}", json={"name": "CAJA"})
    assert clash.status_code == 409
    assert clash.json() == {"error": "Nombre de cuenta ya existe"}


@pytest.mark.asyncio
async def test_rename_income_account_is_rejected(user_client: AsyncClient) -> None:
    income = await _account_by_name(user_client, "INGRESOS HONORARIOS")
    response = await user_client.put(f"/accounts/{income['id']}", json={"name": "X"})
    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_rename_client_account_is_rejected(user_client: AsyncClient) -> None:
    client_row = (await user_client.post("/clients", json={"razonSocial": "ACME"})).json()
    account = (
        await user_client.post(
            "/accounts", json={"name": "ACME", "type": "CLIENT", "clientId": client_row["id"]}
        )
    ).json()
    response = await user_client.put(f"/accounts/{account['id']}", json={"name": "OTRO"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_caja_cannot_be_renamed_or_deactivated(user_client: AsyncClient) -> None:
    caja = await _account_by_name(user_client, "CAJA")

    assert (await user_client.put(f"/accounts/{caja['id']}", json={"name": "CAJA 2"})).status_code == 400
    assert (await user_client.put(f"/accounts/{caja['id']}", json={"isActive": False})).status_code == 400
    assert (await user_client.delete(f"/accounts/{caja['id']}")).status_code == 400

    still = await _account_by_name(user_client, "CAJA")
    assert still["isActive"] is True


@pytest.mark.asyncio
async def test_deactivate_income_and_client_accounts_is_rejected(user_client: AsyncClient) -> None:
    income = await _account_by_name(user_client, "INGRESOS HONORARIOS")
    response = await user_client.delete(f"/accounts/{income['id']}")
    assert response.status_code == 400

    client_row = (await user_client.post("/clients", json={"razonSocial": "ACME"})).json()
    account = (
        await user_client.post(
            "/accounts", json={"name": "ACME", "type": "CLIENT", "clientId": client_row["id"]}
        )
    ).json()
    assert (await user_client.delete(f"/accounts/{account['id']}")).status_code == 400


@pytest.mark.asyncio
async def test_deactivate_is_soft_delete(user_client: AsyncClient) -> None:
    bank = (await user_client.post("/accounts", json={"name": "BANCO", "type": "BANK"})).json()

    response = await user_client.delete(f"/accounts/{bank['id']}")
    assert response.status_code == 200
    assert response.json()["isActive"] is False

    active = (await user_client.get("/accounts")).json()
    assert bank["id"] not in {a["id"] for a in active}

    everything = (await user_client.get("/accounts", params={"includeInactive": "true"})).json()
    restored = next(a for a in everything if a["id"] == bank["id"])
    assert restored["isActive"] is False

    reactivated = await user_client.put(f"/accounts/{bank['id']}", json={"isActive": True})
    assert reactivated.status_code == 200
    assert reactivated.json()["isActive"] is True


@pytest.mark.asyncio
async def test_accounts_are_scoped_to_owner(user_client: AsyncClient, make_user) -> None:
    bank = (await user_client.post("/accounts", json={"name": "BANCO", "type": "BANK"})).json()

    await make_user("intruder@example.com")
    async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL) as intruder:
        await intruder.post("/auth/login", json={"email": "intruder@example.com", "password": PASSWORD})
        listed = (await intruder.get("/accounts", params={"includeInactive": "true"})).json()
        assert bank["id"] not in {a["id"] for a in listed}
        assert (await intruder.put(f"/accounts/{bank['id']}", json={"name": "MIO"})).status_code == 404
        assert (await intruder.delete(f"/accounts/{bank['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_account_name_length_is_limited(user_client: AsyncClient) -> None:
    too_long = await user_client.post("/accounts", json={"name": "B" * 121, "type": "BANK"})
    assert too_long.status_code == 400

    bank = await user_client.post("/accounts", json={"name": "B" * 120, "type": "BANK"})
    assert bank.status_code == 201

    rename = await user_client.put(f"/accounts/{bank.json()['id']}", json={"name": "C" * 121})
    assert rename.status_code == 400
    assert (await _account_by_name(user_client, "B" * 120))["id"] == bank.json()["id"]


@pytest.mark.asyncio
async def test_locked_accounts_reject_any_name(user_client: AsyncClient) -> None:
    income = await _account_by_name(user_client, "INGRESOS HONORARIOS")
    same_name = await user_client.put(f"/accounts/{income['id']}", json={"name": "INGRESOS HONORARIOS"})
    assert same_name.status_code == 400

    caja = await _account_by_name(user_client, "CAJA")
    assert (await user_client.put(f"/accounts/{caja['id']}", json={"name": "CAJA"})).status_code == 400
