"""Web surface for addon sync."""

from .app import create_app, api_error
from .sessions import SessionStore

__all__ = [
    "create_app",
    "api_error",
    "SessionStore"
]
