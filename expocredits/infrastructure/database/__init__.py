"""Database infrastructure helpers (engine, sessions, optimistic writes)."""

from .base import Base
from .session import (
    configure_engine,
    dispose_engine,
    get_engine,
    get_session,
    get_session_factory,
    init_db,
)

__all__ = [
    "Base",
    "configure_engine",
    "dispose_engine",
    "get_engine",
    "get_session",
    "get_session_factory",
    "init_db",
]
