# caja_desktop/ui/base_page.py
from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QKeyEvent
from PySide6.QtWidgets import (
    QApplication, QLabel, QLineEdit, QPlainTextEdit, QTextEdit, QWidget
)

from ..core.shortcuts import Action, resolve_shortcut

_NAMED_KEYS = {Qt.Key_Escape: "Escape"}


def _key_name(event: QKeyEvent) -> str:
    return _NAMED_KEYS.get(event.key()) or event.text()


def _is_typing() -> bool:
    return isinstance(QApplication.focusWidget(), (QLineEdit, QTextEdit, QPlainTextEdit))


class Page(QWidget):
    """Base class for pages shown in the main window's stack."""

    back_requested = Signal()

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self.setFocusPolicy(Qt.StrongFocus)

    # Subclasses override these
    def refresh(self) -> None:
        pass

    def focus_input(self) -> None:
        pass

    def keyPressEvent(self, event: QKeyEvent) -> None:
        mods = event.modifiers()
        # On macOS Qt maps Cmd to ControlModifier and Ctrl to MetaModifier
        action = resolve_shortcut(
            _key_name(event),
            ctrl=bool(mods & Qt.ControlModifier),
            meta=bool(mods & Qt.MetaModifier),
            typing=_is_typing(),
        )
        if action is Action.BACK:
            self.back_requested.emit()
        elif action is Action.FOCUS_INPUT:
            self.focus_input()
        elif action is Action.REFRESH:
            self.refresh()
        else:
            super().keyPressEvent(event)
            return
        event.accept()


def set_alert(label: QLabel, error: str | None, notice: str | None = None) -> None:
    """Show an error (red) or notice (green) line, hiding the label when both are empty."""
    if error:
        label.setStyleSheet("color: #b00020;")
        label.setText(error)
        label.show()
    elif notice:
        label.setStyleSheet("color: #1b7f3b;")
        label.setText(notice)
        label.show()
    else:
        label.clear()
        label.hide()
