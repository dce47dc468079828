"""Tests for the admin panel view model."""
from caja_desktop.core.admin_view import AdminView
from caja_desktop.services.api_client import ValidationAPIError


def test_users_are_sorted_by_email(repo) -> None:
    repo.users = [
        {"id": "1", "email": "zeta@example.com", "role": "USER"},
        {"id": "2", "email": "admin@example.com", "role": "ADMIN"},
        {"id": "3", "email": "martin@example.com", "role": "USER"},
    ]
    view = AdminView(repo)
    assert view.load()
    assert [u["email"] for u in view.sorted_users] == [
        "admin@example.com",
        "martin@example.com",
        "zeta@example.com",
    ]


def test_create_user_resets_form(repo) -> None:
    view = AdminView(repo)
    view.email, view.password, view.role = "nuevo@example.com", "Clave123", "ADMIN"

    user = view.create()

    assert user["email"] == "nuevo@example.com"
    assert repo.calls[0] == ("create_user", "nuevo@example.com", "Clave123", "ADMIN")
    assert view.message == "Usuario creado: nuevo@example.com (ADMIN)"
    assert (view.email, view.password, view.role) == ("", "", "USER")
    assert [u["email"] for u in view.users] == ["nuevo@example.com"]


def test_create_user_error_keeps_form(repo) -> None:
    repo.fail_with = ValidationAPIError("password: String should have at least 6 characters", 400)
    view = AdminView(repo)
    view.email, view.password = "nuevo@example.com", "123"

    assert view.create() is None
    assert view.error.startswith("password")
    assert view.message is None
    assert view.email == "nuevo@example.com"
