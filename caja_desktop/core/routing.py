# caja_desktop/core/routing.py
from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional


class Route(str, Enum):
    LOGIN = "login"
    DASHBOARD = "dashboard"
    CLIENTS = "clients"
    ACCOUNTS = "accounts"
    ADMIN = "admin"


USER_ROUTES = (Route.DASHBOARD, Route.CLIENTS, Route.ACCOUNTS)


def is_admin(user: Optional[Mapping[str, Any]]) -> bool:
    return bool(user) and user.get("role") == "ADMIN"


def home_for(user: Optional[Mapping[str, Any]]) -> Route:
    if not user:
        return Route.LOGIN
    return Route.ADMIN if is_admin(user) else Route.DASHBOARD


def resolve_route(user: Optional[Mapping[str, Any]], requested: Optional[Route | str] = None) -> Route:
    """
    Decide which page to show.

    Anonymous users always land on the login page; admins only get the
    admin panel; regular users get every page except the admin panel.
    """
    try:
        target = Route(requested) if requested is not None else None
    except ValueError:
        target = None

    if not user:
        return Route.LOGIN
    if target is None or target is Route.LOGIN:
        return home_for(user)
    if is_admin(user):
        return Route.ADMIN
    if target is Route.ADMIN:
        return Route.DASHBOARD
    return target
