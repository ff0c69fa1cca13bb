"""Shared API Dependencies — service wiring and bearer-token authentication.

Invariants:
    - Every request gets services bound to its own AsyncSession
    - get_current_user re-fetches the user on each request (token is only an id reference)
    - Missing or invalid tokens raise AuthError; the handler renders "You're not logged in!"

Design Decisions:
    - Accepts Authorization: Bearer <token> and the legacy `jwtoken` header
    - HTTPBearer(auto_error=False): the domain AuthError owns the failure response
"""

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.infrastructure.credential_store import CredentialStore
from app.infrastructure.database import get_db
from app.infrastructure.repositories import SqlUserRepository, SqlWeeklistRepository
from app.infrastructure.token_service import TokenService
from app.models.user import User
from app.services.user_registry import UserRegistry
from app.services.weeklist_lifecycle import WeeklistLifecycle

bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service() -> TokenService:
    settings = get_settings()
    return TokenService(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl_seconds=settings.access_token_ttl_seconds,
    )


def get_credential_store() -> CredentialStore:
    return CredentialStore(rounds=get_settings().bcrypt_rounds)


async def get_user_registry(
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
    credentials: CredentialStore = Depends(get_credential_store),
) -> UserRegistry:
    return UserRegistry(SqlUserRepository(db), credentials, tokens)


async def get_lifecycle(db: AsyncSession = Depends(get_db)) -> WeeklistLifecycle:
    repository = SqlWeeklistRepository(
        db, optimistic_locking=get_settings().weeklist_optimistic_locking,
    )
    return WeeklistLifecycle(repository)


async def get_current_user(
    bearer: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    jwtoken: str | None = Header(None),
    registry: UserRegistry = Depends(get_user_registry),
) -> User:
    """Authenticated user for the request, or AuthError."""
    token = bearer.credentials if bearer else jwtoken
    return await registry.authenticate(token)
