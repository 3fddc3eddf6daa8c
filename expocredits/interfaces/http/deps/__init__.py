"""Reusable FastAPI dependencies."""

from .database import get_db_session, get_db_session_factory
from .account import (
    get_account_repository,
    get_account_service,
    get_query_service,
    get_transfer_service,
)

__all__ = [
    "get_db_session",
    "get_db_session_factory",
    "get_account_repository",
    "get_account_service",
    "get_query_service",
    "get_transfer_service",
]
