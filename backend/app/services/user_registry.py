"""User Registry — registration, login and token-to-user resolution.

Invariants:
    - Email and mobile are unique: checked before insert AND enforced by DB constraints
    - Passwords are hashed before they reach the repository
    - Issued tokens carry only the user id; authenticate() always re-fetches the user

Design Decisions:
    - bcrypt runs in a worker thread (asyncio.to_thread): keeps the event loop responsive
    - Login distinguishes unknown email from wrong password (UserNotFound vs InvalidCredentials)
"""

import asyncio
import logging

from app.core.errors import (
    AuthError,
    DuplicateIdentityError,
    ErrorContext,
    InvalidCredentialsError,
    UserNotFoundError,
)
from app.core.repository_protocols import UserLike, UserRepository
from app.infrastructure.credential_store import CredentialStore
from app.infrastructure.token_service import IssuedToken, TokenService

logger = logging.getLogger(__name__)


class UserRegistry:
    """Manages user records and their session tokens."""

    def __init__(
        self,
        users: UserRepository,
        credentials: CredentialStore,
        tokens: TokenService,
    ):
        self.users = users
        self.credentials = credentials
        self.tokens = tokens

    async def register(
        self,
        fullname: str,
        email: str,
        password: str,
        age: int,
        gender: str,
        mobile: str,
    ) -> IssuedToken:
        """Create a user and return a token for it. DuplicateIdentity on email/mobile clash."""
        existing = await self.users.find_by_email_or_mobile(email, mobile)
        if existing is not None:
            raise DuplicateIdentityError()

        password_hash = await asyncio.to_thread(self.credentials.hash, password)
        user = await self.users.insert(
            fullname=fullname,
            email=email,
            password_hash=password_hash,
            age=age,
            gender=gender,
            mobile=mobile,
        )
        logger.info("User registered", extra={"user_id": str(user.id)})
        return self.tokens.issue(user.id)

    async def login(self, email: str, password: str) -> IssuedToken:
        user = await self.users.find_by_email(email)
        if user is None:
            raise UserNotFoundError()

        matched = await asyncio.to_thread(
            self.credentials.verify, password, user.password_hash,
        )
        if not matched:
            raise InvalidCredentialsError(ErrorContext(user_id=str(user.id)))
        return self.tokens.issue(user.id)

    async def authenticate(self, token: str | None) -> UserLike:
        """Resolve a bearer token to the current user record."""
        if not token:
            raise AuthError(reason="missing token")
        user_id = self.tokens.subject_id(token)
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise AuthError(
                reason="unknown subject", context=ErrorContext(user_id=str(user_id)),
            )
        return user
