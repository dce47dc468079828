# caja_desktop/core/clients_view.py
"""State behind the clients page: search, create form and inline editing."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from caja_desktop.services import repository
from caja_desktop.services.api_client import APIError

TIPOS_PERSONA = ("JURIDICA", "FISICA")

Client = Dict[str, Any]


@dataclass
class ClientForm:
    razon_social: str = ""
    cuit: str = ""
    tipo_persona: str = ""

    @classmethod
    def from_client(cls, client: Client) -> "ClientForm":
        return cls(
            razon_social=client.get("razonSocial") or "",
            cuit=client.get("cuit") or "",
            tipo_persona=client.get("tipoPersona") or "",
        )

    def create_payload(self) -> Dict[str, Any]:
        """Optional fields are left out entirely when empty."""
        payload: Dict[str, Any] = {"razonSocial": self.razon_social.strip()}
        if self.cuit.strip():
            payload["cuit"] = self.cuit.strip()
        if self.tipo_persona:
            payload["tipoPersona"] = self.tipo_persona
        return payload

    def edit_payload(self) -> Dict[str, Any]:
        """A blank cuit or tipo persona is sent as null so the server clears it."""
        payload: Dict[str, Any] = {}
        if self.razon_social.strip():
            payload["razonSocial"] = self.razon_social.strip()
        payload["cuit"] = self.cuit.strip() or None
        payload["tipoPersona"] = self.tipo_persona or None
        return payload


class ClientsView:
    def __init__(self, repo: Any = repository) -> None:
        self.repo = repo
        self.items: List[Client] = []
        self.q: str = ""
        self.form = ClientForm()
        self.editing_id: Optional[str] = None
        self.edit_form = ClientForm()
        self.error: Optional[str] = None

    @property
    def query(self) -> str:
        return self.q.strip()

    @property
    def can_create(self) -> bool:
        return bool(self.form.razon_social.strip())

    def load(self) -> bool:
        self.error = None
        try:
            data = self.repo.list_clients(self.query)
        except APIError as exc:
            self.error = exc.message or "Error cargando clientes"
            return False
        self.items = data if isinstance(data, list) else []
        return True

    def create(self) -> bool:
        self.error = None
        try:
            self.repo.create_client(self.form.create_payload())
        except APIError as exc:
            self.error = exc.message or "Error creando cliente"
            return False
        self.form = ClientForm()
        return self.load()

    # ----- inline edit

    def start_edit(self, client: Client) -> None:
        self.editing_id = client["id"]
        self.edit_form = ClientForm.from_client(client)

    def cancel_edit(self) -> None:
        self.editing_id = None
        self.edit_form = ClientForm()

    def edit_payload(self) -> Dict[str, Any]:
        return self.edit_form.edit_payload()

    def save_edit(self) -> bool:
        if self.editing_id is None:
            return False
        self.error = None
        try:
            self.repo.update_client(self.editing_id, self.edit_payload())
        except APIError as exc:
            self.error = exc.message or "Error guardando cambios"
            return False
        self.cancel_edit()
        return self.load()

    def remove(self, client_id: str) -> bool:
        self.error = None
        try:
            self.repo.delete_client(client_id)
        except APIError as exc:
            self.error = exc.message or "Error borrando cliente"
            return False
        if self.editing_id == client_id:
            self.cancel_edit()
        return self.load()
