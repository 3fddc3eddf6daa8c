"""Database dependency providers."""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from expocredits.infrastructure.database.session import get_session as get_db_session
from expocredits.infrastructure.database.session import get_session_factory


def get_db_session_factory() -> async_sessionmaker[AsyncSession]:
    return get_session_factory()


__all__ = ["get_db_session", "get_db_session_factory"]
