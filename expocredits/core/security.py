"""Verification of identity provider tokens and caller context resolution."""
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from expocredits.core.config import get_settings
from expocredits.interfaces.http.deps.account import get_account_service
from expocredits.modules.accounts import AccountRole, AccountService
from expocredits.modules.common.context import RequestContext
from expocredits.schemas import TokenData

security = HTTPBearer()


def create_access_token(
    account_id: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Issue a token the way the identity provider does (used by scripts and tests)."""
    settings = get_settings()
    expire_delta = expires_delta or timedelta(minutes=settings.security.access_token_expire_minutes)
    payload = {
        "sub": account_id,
        "exp": datetime.now(timezone.utc) + expire_delta,
    }
    if settings.security.issuer:
        payload["iss"] = settings.security.issuer
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> TokenData:
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
            issuer=settings.security.issuer,
        )
    except JWTError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate credentials") from exc

    account_id = payload.get("sub")
    if not account_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate credentials")
    return TokenData(account_id=account_id)


async def get_identity(credentials: HTTPAuthorizationCredentials = Depends(security)) -> TokenData:
    return decode_access_token(credentials.credentials)


async def get_request_context(
    identity: TokenData = Depends(get_identity),
    account_service: AccountService = Depends(get_account_service),
) -> RequestContext:
    # Role comes from the stored account, never from the token
    account = await account_service.get_by_id(identity.account_id)
    if account is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account is not provisioned")
    return RequestContext(account_id=account.id, role=account.role)


async def get_current_admin(context: RequestContext = Depends(get_request_context)) -> RequestContext:
    if context.role != AccountRole.ADMIN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin privileges required")
    return context
