# caja_desktop/core/admin_view.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from caja_desktop.services import repository
from caja_desktop.services.api_client import APIError

ROLES = ("USER", "ADMIN")


class AdminView:
    """User list and create-user form of the admin panel."""

    def __init__(self, repo: Any = repository) -> None:
        self.repo = repo
        self.users: List[Dict[str, Any]] = []
        self.email: str = ""
        self.password: str = ""
        self.role: str = "USER"
        self.error: Optional[str] = None
        self.message: Optional[str] = None

    @property
    def sorted_users(self) -> List[Dict[str, Any]]:
        return sorted(self.users, key=lambda u: u.get("email", ""))

    def reset_form(self) -> None:
        self.email = ""
        self.password = ""
        self.role = "USER"

    def load(self) -> bool:
        self.error = None
        try:
            self.users = list(self.repo.list_users())
        except APIError as exc:
            self.error = exc.message or "Error cargando usuarios"
            return False
        return True

    def create(self) -> Optional[Dict[str, Any]]:
        self.error = None
        self.message = None
        try:
            user = self.repo.create_user(self.email, self.password, self.role)
        except APIError as exc:
            self.error = exc.message or "Error creando usuario"
            return None
        self.message = f"Usuario creado: {user['email']} ({user['role']})"
        self.reset_form()
        self.load()
        return user
