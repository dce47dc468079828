# caja_desktop/ui/admin_page.py
from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QComboBox, QFormLayout, QHBoxLayout, QLabel, QLineEdit, QPushButton,
    QTableWidget, QTableWidgetItem, QVBoxLayout, QWidget, QAbstractItemView,
    QHeaderView
)

from ..core.admin_view import ROLES, AdminView
from .base_page import Page, set_alert


class AdminPage(Page):
    """User management (ADMIN only)."""

    logout_requested = Signal()

    def __init__(self, view: AdminView | None = None, parent: QWidget | None = None):
        super().__init__(parent)
        self.view = view or AdminView()

        v = QVBoxLayout(self)

        header = QHBoxLayout()
        title = QLabel("Panel de administración"); title.setStyleSheet("font-size: 18px; font-weight: 700;")
        subtitle = QLabel("Gestión de usuarios (solo ADMIN)")
        btn_logout = QPushButton("Cerrar sesión"); btn_logout.clicked.connect(self.logout_requested)
        header.addWidget(title); header.addWidget(subtitle); header.addStretch(1); header.addWidget(btn_logout)
        v.addLayout(header)

        form = QFormLayout()
        self.ed_email = QLineEdit(); self.ed_email.setPlaceholderText("email@estudio.com")
        self.ed_pass = QLineEdit(); self.ed_pass.setEchoMode(QLineEdit.Password)
        self.cb_role = QComboBox()
        for r in ROLES:
            self.cb_role.addItem(r, r)
        btn_create = QPushButton("Crear usuario"); btn_create.clicked.connect(self._create)
        form.addRow("Email", self.ed_email)
        form.addRow("Contraseña", self.ed_pass)
        form.addRow("Rol", self.cb_role)
        form.addRow("", btn_create)
        v.addLayout(form)

        self.lbl_alert = QLabel(); self.lbl_alert.hide()
        v.addWidget(self.lbl_alert)

        self.table = QTableWidget(0, 3)
        self.table.setHorizontalHeaderLabels(["Email", "Rol", "Creado"])
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.Stretch)
        v.addWidget(self.table, 1)

    def refresh(self) -> None:
        self.view.load()
        self._render()

    def focus_input(self) -> None:
        self.ed_email.setFocus()

    def _create(self) -> None:
        self.view.email = self.ed_email.text()
        self.view.password = self.ed_pass.text()
        self.view.role = self.cb_role.currentData()
        self.view.create()
        # reflect the form reset (or keep input on error)
        self.ed_email.setText(self.view.email)
        self.ed_pass.setText(self.view.password)
        self.cb_role.setCurrentIndex(max(self.cb_role.findData(self.view.role), 0))
        self._render()

    def _render(self) -> None:
        set_alert(self.lbl_alert, self.view.error, self.view.message)
        users = self.view.sorted_users
        self.table.setRowCount(len(users))
        for r, u in enumerate(users):
            self.table.setItem(r, 0, QTableWidgetItem(u["email"]))
            self.table.setItem(r, 1, QTableWidgetItem(u["role"]))
            self.table.setItem(r, 2, QTableWidgetItem(str(u.get("createdAt", ""))))
