# caja_desktop/ui/main_window.py
from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QLabel, QMainWindow, QStackedWidget, QStatusBar

from ..core.routing import Route, resolve_route
from .accounts_page import AccountsPage
from .admin_page import AdminPage
from .base_page import Page
from .clients_page import ClientsPage
from .dashboard_page import DashboardPage


class MainWindow(QMainWindow):
    logout_requested = Signal()
    exit_requested = Signal()

    def __init__(self, user: dict):
        super().__init__()
        self.setWindowTitle("Proyecto Caja")
        self.resize(1100, 720)
        self.user = user

        # ---------- Pages ----------
        self.stack = QStackedWidget(self)
        self.setCentralWidget(self.stack)

        self.pages: dict[Route, Page] = {
            Route.DASHBOARD: DashboardPage(self),
            Route.CLIENTS: ClientsPage(parent=self),
            Route.ACCOUNTS: AccountsPage(parent=self),
            Route.ADMIN: AdminPage(parent=self),
        }
        for page in self.pages.values():
            self.stack.addWidget(page)
            page.back_requested.connect(lambda: self.navigate(Route.DASHBOARD))

        dash = self.pages[Route.DASHBOARD]
        dash.open_clients.connect(lambda: self.navigate(Route.CLIENTS))
        dash.open_accounts.connect(lambda: self.navigate(Route.ACCOUNTS))
        dash.logout_requested.connect(self.logout_requested)
        dash.set_user(user)
        self.pages[Route.ADMIN].logout_requested.connect(self.logout_requested)

        # ---------- Menu ----------
        m = self.menuBar().addMenu("Sesión")
        act_logout = QAction("Cerrar sesión", self)
        act_logout.triggered.connect(self.logout_requested)
        act_exit = QAction("Salir", self)
        act_exit.triggered.connect(self.exit_requested)
        m.addAction(act_logout)
        m.addAction(act_exit)

        # ---------- Status bar ----------
        sb = QStatusBar(self)
        sb.addPermanentWidget(QLabel(f"{user['email']} ({user['role']})"))
        self.setStatusBar(sb)

        self.navigate(None)

    def navigate(self, requested: Route | None) -> Route:
        """Show the page the routing rules allow for the current user."""
        route = resolve_route(self.user, requested)
        page = self.pages.get(route)
        if page is None:
            # LOGIN: the session is gone
            self.logout_requested.emit()
            return route
        self.stack.setCurrentWidget(page)
        page.refresh()
        page.setFocus()
        return route
