# caja_desktop/ui/clients_page.py
from __future__ import annotations

from PySide6.QtWidgets import (
    QComboBox, QFormLayout, QHBoxLayout, QLabel, QLineEdit, QMessageBox,
    QPushButton, QTableWidget, QTableWidgetItem, QVBoxLayout, QWidget,
    QAbstractItemView, QHeaderView, QDialog, QDialogButtonBox
)

from ..core.clients_view import ClientForm, ClientsView, TIPOS_PERSONA
from .base_page import Page, set_alert

_TIPO_ITEMS = [("", "Tipo persona (opcional)"), ("JURIDICA", "Jurídica"), ("FISICA", "Física")]


def _fill_tipo_combo(combo: QComboBox) -> None:
    for value, label in _TIPO_ITEMS:
        combo.addItem(label, value)


def _set_tipo(combo: QComboBox, value: str) -> None:
    idx = combo.findData(value if value in TIPOS_PERSONA else "")
    combo.setCurrentIndex(max(idx, 0))


class _EditClientDialog(QDialog):
    """Inline-edit form for one client."""

    def __init__(self, form: ClientForm, parent: QWidget | None = None):
        super().__init__(parent)
        self.setWindowTitle("Editar cliente")
        lay = QFormLayout(self)
        self.ed_razon = QLineEdit(form.razon_social)
        self.ed_cuit = QLineEdit(form.cuit)
        self.cb_tipo = QComboBox(); _fill_tipo_combo(self.cb_tipo); _set_tipo(self.cb_tipo, form.tipo_persona)
        lay.addRow("Razón social", self.ed_razon)
        lay.addRow("CUIT", self.ed_cuit)
        lay.addRow("Tipo", self.cb_tipo)
        buttons = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        lay.addRow(buttons)

    def apply_to(self, form: ClientForm) -> None:
        form.razon_social = self.ed_razon.text()
        form.cuit = self.ed_cuit.text()
        form.tipo_persona = self.cb_tipo.currentData() or ""


class ClientsPage(Page):
    def __init__(self, view: ClientsView | None = None, parent: QWidget | None = None):
        super().__init__(parent)
        self.view = view or ClientsView()

        v = QVBoxLayout(self)

        top = QHBoxLayout()
        btn_back = QPushButton("Volver al menú (Esc)")
        btn_back.clicked.connect(self.back_requested)
        title = QLabel("Clientes"); title.setStyleSheet("font-size: 18px; font-weight: 700;")
        top.addWidget(btn_back); top.addWidget(title); top.addStretch(1)
        v.addLayout(top)

        search = QHBoxLayout()
        self.ed_q = QLineEdit(); self.ed_q.setPlaceholderText("Buscar por razón social o CUIT…")
        self.ed_q.returnPressed.connect(self.refresh)
        btn_search = QPushButton("Buscar"); btn_search.clicked.connect(self.refresh)
        search.addWidget(self.ed_q, 1); search.addWidget(btn_search)
        v.addLayout(search)

        create = QHBoxLayout()
        self.ed_razon = QLineEdit(); self.ed_razon.setPlaceholderText("Razón social (obligatorio)")
        self.ed_cuit = QLineEdit(); self.ed_cuit.setPlaceholderText("CUIT (opcional)")
        self.cb_tipo = QComboBox(); _fill_tipo_combo(self.cb_tipo)
        self.btn_create = QPushButton("Crear cliente")
        self.btn_create.setEnabled(False)
        self.ed_razon.textChanged.connect(lambda t: self.btn_create.setEnabled(bool(t.strip())))
        self.btn_create.clicked.connect(self._create)
        create.addWidget(self.ed_razon, 2); create.addWidget(self.ed_cuit, 1)
        create.addWidget(self.cb_tipo); create.addWidget(self.btn_create)
        v.addLayout(create)

        self.lbl_alert = QLabel(); self.lbl_alert.hide()
        v.addWidget(self.lbl_alert)

        self.table = QTableWidget(0, 5)
        self.table.setHorizontalHeaderLabels(["Razón social", "CUIT", "Tipo", "", ""])
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.Stretch)
        v.addWidget(self.table, 1)

        self.lbl_empty = QLabel("No hay clientes."); self.lbl_empty.hide()
        v.addWidget(self.lbl_empty)

    # ----- Page hooks
    def refresh(self) -> None:
        self.view.q = self.ed_q.text()
        self.view.load()
        self._render()

    def focus_input(self) -> None:
        self.ed_q.setFocus()
        self.ed_q.selectAll()

    # ----- actions
    def _create(self) -> None:
        self.view.form = ClientForm(
            razon_social=self.ed_razon.text(),
            cuit=self.ed_cuit.text(),
            tipo_persona=self.cb_tipo.currentData() or "",
        )
        if self.view.create():
            self.ed_razon.clear(); self.ed_cuit.clear(); self.cb_tipo.setCurrentIndex(0)
        self._render()

    def _edit(self, client: dict) -> None:
        self.view.start_edit(client)
        dlg = _EditClientDialog(self.view.edit_form, self)
        if dlg.exec() != QDialog.Accepted:
            self.view.cancel_edit()
            return
        dlg.apply_to(self.view.edit_form)
        self.view.save_edit()
        self._render()

    def _remove(self, client: dict) -> None:
        ok = QMessageBox.question(self, "Borrar cliente", "¿Seguro que querés borrar este cliente?")
        if ok != QMessageBox.Yes:
            return
        self.view.remove(client["id"])
        self._render()

    def _render(self) -> None:
        set_alert(self.lbl_alert, self.view.error)
        items = self.view.items
        self.table.setRowCount(len(items))
        for r, c in enumerate(items):
            self.table.setItem(r, 0, QTableWidgetItem(c["razonSocial"]))
            self.table.setItem(r, 1, QTableWidgetItem(c.get("cuit") or "-"))
            self.table.setItem(r, 2, QTableWidgetItem(c.get("tipoPersona") or "-"))
            btn_edit = QPushButton("Editar"); btn_edit.clicked.connect(lambda _=False, c=c: self._edit(c))
            btn_del = QPushButton("Borrar"); btn_del.clicked.connect(lambda _=False, c=c: self._remove(c))
            self.table.setCellWidget(r, 3, btn_edit)
            self.table.setCellWidget(r, 4, btn_del)
        self.lbl_empty.setVisible(not items)
