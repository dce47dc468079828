# caja_desktop/ui/accounts_page.py
from __future__ import annotations

from PySide6.QtWidgets import (
    QCheckBox, QComboBox, QHBoxLayout, QInputDialog, QLabel, QLineEdit,
    QMessageBox, QPushButton, QTableWidget, QTableWidgetItem, QVBoxLayout,
    QWidget, QAbstractItemView, QHeaderView
)

from ..core.accounts_view import (
    ACCOUNT_TYPES, CREATABLE_TYPES, TYPE_LABEL, AccountsView, can_deactivate,
    can_rename, is_system
)
from .base_page import Page, set_alert


class AccountsPage(Page):
    def __init__(self, view: AccountsView | None = None, parent: QWidget | None = None):
        super().__init__(parent)
        self.view = view or AccountsView()

        v = QVBoxLayout(self)

        # Topbar
        top = QHBoxLayout()
        btn_back = QPushButton("← Menú"); btn_back.clicked.connect(self.back_requested)
        title = QLabel("Cuentas"); title.setStyleSheet("font-size: 18px; font-weight: 700;")
        hint = QLabel("ESC menú · Ctrl+K buscar · R refrescar")
        btn_refresh = QPushButton("Refrescar"); btn_refresh.clicked.connect(self.refresh)
        top.addWidget(btn_back); top.addWidget(title); top.addWidget(hint)
        top.addStretch(1); top.addWidget(btn_refresh)
        v.addLayout(top)

        self.lbl_alert = QLabel(); self.lbl_alert.hide()
        v.addWidget(self.lbl_alert)

        # New account + filters
        row = QHBoxLayout()
        self.cb_new_type = QComboBox()
        for t in CREATABLE_TYPES:
            self.cb_new_type.addItem(TYPE_LABEL[t], t)
        self.ed_name = QLineEdit(); self.ed_name.setPlaceholderText("Nombre (ej: BANCO GALICIA)")
        self.ed_name.returnPressed.connect(self._create)
        btn_create = QPushButton("Crear"); btn_create.clicked.connect(self._create)
        row.addWidget(self.cb_new_type); row.addWidget(self.ed_name, 1); row.addWidget(btn_create)
        row.addSpacing(24)

        self.cb_filter = QComboBox()
        self.cb_filter.addItem("Todas", "ALL")
        for t in ACCOUNT_TYPES:
            self.cb_filter.addItem(TYPE_LABEL[t], t)
        self.cb_filter.currentIndexChanged.connect(self._on_filter_changed)
        self.chk_inactive = QCheckBox("Mostrar inactivas")
        self.chk_inactive.toggled.connect(self._on_inactive_toggled)
        row.addWidget(self.cb_filter); row.addWidget(self.chk_inactive)
        v.addLayout(row)

        self.table = QTableWidget(0, 5)
        self.table.setHorizontalHeaderLabels(["Nombre", "Tipo", "Estado", "", ""])
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.Stretch)
        v.addWidget(self.table, 1)

    # ----- Page hooks
    def refresh(self) -> None:
        self.view.load()
        self._render()

    def focus_input(self) -> None:
        self.ed_name.setFocus()

    # ----- actions
    def _on_filter_changed(self) -> None:
        self.view.set_filter(self.cb_filter.currentData())
        self._render()

    def _on_inactive_toggled(self, checked: bool) -> None:
        self.view.include_inactive = checked
        self._render()

    def _create(self) -> None:
        self.view.new_type = self.cb_new_type.currentData()
        self.view.new_name = self.ed_name.text()
        self.view.create()
        self.ed_name.setText(self.view.new_name)
        if self.view.error:
            self.ed_name.setFocus()
        self._render()

    def _rename(self, account: dict) -> None:
        text, ok = QInputDialog.getText(self, "Renombrar", "Nuevo nombre de la cuenta:", text=account["name"])
        self.view.rename(account, text if ok else None)
        self._render()

    def _deactivate(self, account: dict) -> None:
        ok = QMessageBox.question(self, "Desactivar", f'¿Desactivar "{account["name"]}"?')
        if ok != QMessageBox.Yes:
            return
        self.view.deactivate(account)
        self._render()

    def _render(self) -> None:
        set_alert(self.lbl_alert, self.view.error, self.view.notice)
        rows = self.view.visible
        self.table.setRowCount(len(rows))
        for r, a in enumerate(rows):
            name = a["name"] + ("  (sistema)" if is_system(a) else "")
            self.table.setItem(r, 0, QTableWidgetItem(name))
            self.table.setItem(r, 1, QTableWidgetItem(TYPE_LABEL.get(a["type"], a["type"])))
            self.table.setItem(r, 2, QTableWidgetItem("Activa" if a["isActive"] else "Inactiva"))

            btn_rename = QPushButton("Renombrar")
            btn_rename.setEnabled(can_rename(a))
            btn_rename.clicked.connect(lambda _=False, a=a: self._rename(a))
            btn_off = QPushButton("Desactivar")
            btn_off.setEnabled(can_deactivate(a))
            btn_off.clicked.connect(lambda _=False, a=a: self._deactivate(a))
            self.table.setCellWidget(r, 3, btn_rename)
            self.table.setCellWidget(r, 4, btn_off)
