# caja_desktop/ui/login_dialog.py
from __future__ import annotations
from PySide6.QtCore import Qt, QSettings
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit, QCheckBox,
    QDialogButtonBox, QWidget, QFormLayout
)


class LoginDialog(QDialog):
    def __init__(self, parent: QWidget | None = None, error: str | None = None):
        super().__init__(parent)
        self.setWindowTitle("Proyecto Caja: Ingresar")
        self.settings = QSettings("ProyectoCaja", "Caja")

        root = QVBoxLayout(self)

        title = QLabel("Proyecto Caja")
        title.setStyleSheet("font-size: 18px; font-weight: 700;")
        root.addWidget(title, alignment=Qt.AlignCenter)

        # Form
        form = QFormLayout()
        self.ed_email = QLineEdit(); self.ed_email.setPlaceholderText("email@estudio.com")
        self.ed_pass = QLineEdit(); self.ed_pass.setEchoMode(QLineEdit.Password); self.ed_pass.setPlaceholderText("Contraseña")
        form.addRow("Email", self.ed_email)
        form.addRow("Contraseña", self.ed_pass)
        root.addLayout(form)

        # Server message from the previous attempt
        self.lbl_error = QLabel(error or "")
        self.lbl_error.setStyleSheet("color: #b00020;")
        self.lbl_error.setWordWrap(True)
        self.lbl_error.setVisible(bool(error))
        root.addWidget(self.lbl_error)

        # Remember on this PC (email only; the session itself lives in a cookie)
        chk_row = QHBoxLayout()
        self.cb_email = QCheckBox("Recordar email en esta PC")
        chk_row.addWidget(self.cb_email)
        chk_row.addStretch(1)
        root.addLayout(chk_row)

        # OK / Cancel
        self.buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        self.buttons.button(QDialogButtonBox.Ok).setText("Ingresar")
        self.buttons.accepted.connect(self._on_login_clicked)
        self.buttons.rejected.connect(self.reject)
        root.addWidget(self.buttons)

        # Enter key submits OK
        ok_btn = self.buttons.button(QDialogButtonBox.Ok)
        ok_btn.setDefault(True)
        ok_btn.setAutoDefault(True)
        self.ed_email.returnPressed.connect(self._on_login_clicked)
        self.ed_pass.returnPressed.connect(self._on_login_clicked)

        self._load_cached_fields()

    # Public API used by app.py
    def credentials(self) -> tuple[str, str]:
        return self.ed_email.text().strip(), self.ed_pass.text()

    # ----- internals
    def _load_cached_fields(self) -> None:
        if self.settings.value("login/remember_email", False, bool):
            self.ed_email.setText(self.settings.value("login/email", "", str))
            self.cb_email.setChecked(True)
            self.ed_pass.setFocus()

    def _cache_now(self) -> None:
        if self.cb_email.isChecked():
            self.settings.setValue("login/remember_email", True)
            self.settings.setValue("login/email", self.ed_email.text().strip())
        else:
            self.settings.setValue("login/remember_email", False)
            self.settings.remove("login/email")

    def _on_login_clicked(self) -> None:
        self._cache_now()
        self.accept()
