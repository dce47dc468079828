# caja_desktop/ui/dashboard_page.py
from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from .base_page import Page


class DashboardPage(Page):
    """Menu for regular users."""

    open_clients = Signal()
    open_accounts = Signal()
    logout_requested = Signal()

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        v = QVBoxLayout(self)

        title = QLabel("Proyecto Caja")
        title.setStyleSheet("font-size: 22px; font-weight: 700;")
        v.addWidget(title, alignment=Qt.AlignLeft)

        self.lbl_user = QLabel("")
        v.addWidget(self.lbl_user)

        row = QHBoxLayout()
        btn_clients = QPushButton("Clientes")
        btn_accounts = QPushButton("Cuentas")
        btn_logout = QPushButton("Cerrar sesión")
        btn_clients.clicked.connect(self.open_clients)
        btn_accounts.clicked.connect(self.open_accounts)
        btn_logout.clicked.connect(self.logout_requested)
        row.addWidget(btn_clients)
        row.addWidget(btn_accounts)
        row.addStretch(1)
        row.addWidget(btn_logout)
        v.addLayout(row)
        v.addStretch(1)

    def set_user(self, user: dict | None) -> None:
        if not user:
            self.lbl_user.clear()
            return
        self.lbl_user.setText(f"Logueado como <b>{user['email']}</b> · User ID: {user['id']}")
