"""
API Dependencies.

Provides the database session and the authenticated caller to API endpoints.
Access tokens are read from the ``Authorization: Bearer`` header; the account
is loaded from the database on every request so deactivation and role changes
take effect immediately.
"""

from typing import Annotated, Callable, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from studentos.core.database import get_session
from studentos.core.database.entities import User
from studentos.core.database.repositories import UserRepository
from studentos.core.logging_config import get_logger
from studentos.core.models.domain import UserRole
from studentos.core.security import TokenError, decode_access_token
from studentos.server.core.config import settings

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

SessionDep = Annotated[AsyncSession, Depends(get_session)]
BearerDep = Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)]


async def _load_user(session: AsyncSession, token: str) -> User:
    try:
        claims = decode_access_token(token)
    except TokenError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc

    user = await UserRepository(session).get_by_id(claims.user_id)
    if user is None or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found or inactive")
    return user


async def get_current_user(session: SessionDep, credentials: BearerDep) -> User:
    """Resolve the authenticated account or fail with 401."""
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return await _load_user(session, credentials.credentials)


async def get_optional_user(session: SessionDep, credentials: BearerDep) -> Optional[User]:
    """Resolve the caller when a valid token is sent; anonymous callers get None."""
    if credentials is None:
        return None
    try:
        return await _load_user(session, credentials.credentials)
    except HTTPException:
        logger.debug("Ignoring invalid bearer token on optionally authenticated route")
        return None


CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[Optional[User], Depends(get_optional_user)]


def require_role(*roles: UserRole) -> Callable:
    """Build a dependency that admits only accounts holding one of ``roles``."""
    allowed = {role.value for role in roles}

    async def dependency(user: CurrentUser) -> User:
        if user.role not in allowed:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return user

    return dependency


AdminUser = Annotated[User, Depends(require_role(UserRole.ADMIN))]
EmployerUser = Annotated[User, Depends(require_role(UserRole.EMPLOYER, UserRole.ADMIN))]


def client_ip(request: Request, trusted_hops: Optional[int] = None) -> str:
    """Client address as seen by the outermost trusted proxy.

    Each proxy in front of the server appends the address it received the
    request from to ``X-Forwarded-For``. Only the right-most ``trusted_hops``
    entries were written by our proxies, so the client is the entry just left
    of them; anything further left is caller supplied and ignored.
    """
    hops = settings.trusted_proxy_hops if trusted_hops is None else trusted_hops
    peer = request.client.host if request.client else "unknown"
    forwarded = request.headers.get("x-forwarded-for")
    if hops <= 0 or not forwarded:
        return peer
    chain = [entry.strip() for entry in forwarded.split(",") if entry.strip()] + [peer]
    return chain[max(len(chain) - 1 - hops, 0)]

