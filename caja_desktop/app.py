# caja_desktop/app.py
import logging
import sys

from PySide6.QtCore import Qt
from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import QApplication, QDialog, QMessageBox

from .services import repository
from .services.api_client import APIError, AuthError, ValidationAPIError
from .ui.login_dialog import LoginDialog
from .ui.main_window import MainWindow

logger = logging.getLogger(__name__)


def _login_once(parent=None) -> dict | None:
    """Show login dialog. Return the logged-in user dict or None on cancel."""
    error = None
    while True:
        dlg = LoginDialog(parent, error=error)
        if dlg.exec() != QDialog.Accepted:
            return None
        email, password = dlg.credentials()

        if not email or not password:
            error = "Email y contraseña son obligatorios."
            continue

        try:
            return repository.login(email, password)
        except (AuthError, ValidationAPIError) as exc:
            error = exc.message
        except APIError as exc:
            logger.warning("Login failed: %s", exc)
            QMessageBox.critical(parent, "Sin conexión", exc.message)
            error = None


def _resume_session() -> dict | None:
    """Reuse a still-valid session cookie, if any."""
    try:
        return repository.current_user()
    except APIError as exc:
        logger.info("Could not resume session: %s", exc)
        return None


def run_app():
    # High-DPI normalization
    QGuiApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("Proyecto Caja")
    app.setOrganizationName("ProyectoCaja")

    # Login loop: close main window on logout, return to login dialog only
    should_quit = False
    user = _resume_session()
    while not should_quit:
        if user is None:
            user = _login_once(parent=None)
        if not user:
            break

        win = MainWindow(user)

        def _on_logout():
            try:
                repository.logout()
            except APIError as exc:
                logger.warning("Logout request failed: %s", exc)
            win.close()

        def _on_exit():
            nonlocal should_quit
            should_quit = True
            win.close()
            app.quit()

        win.logout_requested.connect(_on_logout)
        win.exit_requested.connect(_on_exit)
        win.showMaximized()

        # Enter event loop until window closes (logout), then loop to login again
        app.exec()
        user = None

    repository.shutdown()
    return 0
