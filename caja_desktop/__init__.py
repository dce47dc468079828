"""Proyecto Caja desktop client (PySide6)."""
