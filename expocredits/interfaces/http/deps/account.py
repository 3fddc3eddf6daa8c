"""Service dependency providers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from expocredits.core.config import get_settings
from expocredits.infrastructure.database.repositories.account_repository import SqlAccountRepository
from expocredits.modules.accounts.service import AccountService
from expocredits.modules.queries.service import QueryService
from expocredits.modules.transfers.service import TransferService

from .database import get_db_session, get_db_session_factory


def get_account_repository(db: AsyncSession = Depends(get_db_session)) -> SqlAccountRepository:
    return SqlAccountRepository(db)


def get_account_service(repository: SqlAccountRepository = Depends(get_account_repository)) -> AccountService:
    return AccountService(repository, get_settings().ledger)


def get_query_service(db: AsyncSession = Depends(get_db_session)) -> QueryService:
    return QueryService.with_session(db)


def get_transfer_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_db_session_factory),
) -> TransferService:
    return TransferService(session_factory, get_settings().ledger)


__all__ = [
    "get_account_repository",
    "get_account_service",
    "get_query_service",
    "get_transfer_service",
]
