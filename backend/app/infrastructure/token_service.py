"""Session Token Service — issues and verifies signed, expiring bearer tokens.

Invariants:
    - Claims carry ONLY the user id (sub) plus iat/exp — never passwords or profile data
    - verify() raises AuthError for any invalid, expired or subject-less token
    - Tokens are HS256-signed with the configured secret

Design Decisions:
    - python-jose for JWT encode/decode (same library as the auth layer it replaces)
    - Subject is an opaque reference: callers re-fetch the user on every request
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import UUID

from jose import JWTError, jwt

from app.core.errors import AuthError

TOKEN_TYPE = "bearer"


@dataclass(frozen=True)
class IssuedToken:
    access_token: str
    token_type: str
    expires_in: int


class TokenService:
    """Signs and verifies identity tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256", ttl_seconds: int = 3600):
        self.secret = secret
        self.algorithm = algorithm
        self.ttl_seconds = ttl_seconds

    def issue(self, subject: UUID | str, now: datetime | None = None) -> IssuedToken:
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": str(subject),
            "iat": issued_at,
            "exp": issued_at + timedelta(seconds=self.ttl_seconds),
        }
        token = jwt.encode(claims, self.secret, algorithm=self.algorithm)
        return IssuedToken(token, TOKEN_TYPE, self.ttl_seconds)

    def verify(self, token: str) -> dict:
        """Decode a token; AuthError on bad signature, expiry or missing subject."""
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            raise AuthError(reason=str(e))
        if not claims.get("sub"):
            raise AuthError(reason="token has no subject")
        return claims

    def subject_id(self, token: str) -> UUID:
        """Verified subject as a UUID."""
        claims = self.verify(token)
        try:
            return UUID(claims["sub"])
        except (TypeError, ValueError):
            raise AuthError(reason="malformed subject")
