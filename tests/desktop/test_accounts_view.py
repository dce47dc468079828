"""Tests for the accounts page view model."""
import pytest

from caja_desktop.core.accounts_view import (
    AccountsView, can_deactivate, can_rename, normalize_name, sort_accounts
)
from caja_desktop.services.api_client import ConflictError


def _acc(id, name, type, active=True):
    return {"id": id, "name": name, "type": type, "isActive": active, "clientId": None}


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("  banco   galicia ", "BANCO GALICIA"),
        ("caja\tchica", "CAJA CHICA"),
        ("", ""),
        (None, ""),
    ],
)
def test_normalize_name(raw, expected) -> None:
    assert normalize_name(raw) == expected


def test_sort_puts_system_accounts_first() -> None:
    rows = [
        _acc("1", "BANCO NACION", "BANK"),
        _acc("2", "INGRESOS HONORARIOS", "INCOME"),
        _acc("3", "ACME", "CLIENT"),
        _acc("4", "CAJA", "CASH"),
        _acc("5", "BANCO CIUDAD", "BANK"),
    ]
    assert [a["name"] for a in sort_accounts(rows)] == [
        "CAJA",
        "INGRESOS HONORARIOS",
        "BANCO CIUDAD",
        "BANCO NACION",
        "ACME",
    ]


def test_rename_and_deactivate_guards() -> None:
    assert can_rename(_acc("1", "BANCO", "BANK"))
    assert not can_rename(_acc("1", "BANCO", "BANK", active=False))
    assert not can_rename(_acc("2", "CAJA CHICA", "CASH"))

    assert can_deactivate(_acc("1", "BANCO", "BANK"))
    assert can_deactivate(_acc("2", "CAJA CHICA", "CASH"))
    assert not can_deactivate(_acc("3", "CAJA", "CASH"))
    assert not can_deactivate(_acc("4", "INGRESOS HONORARIOS", "INCOME"))
    assert not can_deactivate(_acc("5", "ACME", "CLIENT"))
    assert not can_deactivate(_acc("6", "BANCO", "BANK", active=False))


def test_visible_applies_type_filter_and_inactive_toggle(repo) -> None:
    repo.accounts = [
        _acc("1", "CAJA", "CASH"),
        _acc("2", "BANCO VIEJO", "BANK", active=False),
        _acc("3", "BANCO", "BANK"),
    ]
    view = AccountsView(repo)
    assert view.load()
    assert ("list_accounts", True) in repo.calls

    assert [a["id"] for a in view.visible] == ["1", "3"]

    view.set_filter("BANK")
    assert [a["id"] for a in view.visible] == ["3"]

    view.include_inactive = True
    assert [a["id"] for a in view.visible] == ["3", "2"]

    view.set_filter("whatever")
    assert view.filter == "ALL"


def test_create_normalizes_and_reports(repo) -> None:
    view = AccountsView(repo)
    view.new_type = "BANK"
    view.new_name = "  banco   macro "

    created = view.create()

    assert created["name"] == "BANCO MACRO"
    assert repo.calls[-1] == ("create_account", "BANCO MACRO", "BANK")
    assert view.notice == "Cuenta creada."
    assert view.error is None
    assert view.new_name == ""
    assert view.rows == [created]


def test_create_refuses_blank_and_manual_caja(repo) -> None:
    view = AccountsView(repo)
    view.new_name = "   "
    assert view.create() is None
    assert view.error == "El nombre es obligatorio."

    view.new_type = "CASH"
    view.new_name = " caja "
    assert view.create() is None
    assert view.error == "CAJA ya existe como cuenta del sistema."
    assert not any(call[0] == "create_account" for call in repo.calls)


def test_create_surfaces_server_message(repo) -> None:
    repo.fail_with = ConflictError("Cuenta duplicada (nombre o clientId)", status_code=409)
    view = AccountsView(repo)
    view.new_name = "BANCO"
    assert view.create() is None
    assert view.error == "Cuenta duplicada (nombre o clientId)"
    assert view.new_name == "BANCO"


def test_rename_updates_row(repo) -> None:
    view = AccountsView(repo)
    view.rows = [_acc("1", "BANCO", "BANK")]

    assert view.rename(view.rows[0], None) is None
    assert view.rename(view.rows[0], "   ") is None
    assert repo.calls == []

    view.rename(view.rows[0], " banco galicia")
    assert view.rows[0]["name"] == "BANCO GALICIA"
    assert view.rows[0]["type"] == "BANK"
    assert view.notice == "Cuenta renombrada."


def test_deactivate_marks_row_inactive(repo) -> None:
    view = AccountsView(repo)
    view.rows = [_acc("1", "CAJA", "CASH"), _acc("2", "BANCO", "BANK")]

    assert not view.deactivate(view.rows[0])
    assert repo.calls == []
    assert view.error

    assert view.deactivate(view.rows[1])
    assert repo.calls == [("deactivate_account", "2")]
    assert view.rows[1]["isActive"] is False
    assert view.notice == "Cuenta desactivada."
    assert [a["id"] for a in view.visible] == ["1"]
