"""Signed bearer tokens for access, email verification and password reset."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt

from calorie_tracker.domain.models import CallerIdentity

ACCESS_PURPOSE = "access"
VERIFICATION_PURPOSE = "email-verification"
PASSWORD_RESET_PURPOSE = "password-reset"


@dataclass
class TokenService:
    """Issues and reads HMAC-signed JWTs."""

    secret: str
    algorithm: str = "HS256"
    access_ttl: timedelta = timedelta(days=30)
    verification_ttl: timedelta = timedelta(hours=24)
    password_reset_ttl: timedelta = timedelta(hours=1)

    def issue_access_token(self, user_id: UUID) -> str:
        """Return a bearer token identifying the user."""
        return self._encode(user_id, ACCESS_PURPOSE, self.access_ttl)

    def issue_verification_token(self, user_id: UUID) -> str:
        """Return a short-lived token for the email verification link."""
        return self._encode(user_id, VERIFICATION_PURPOSE, self.verification_ttl)

    def issue_password_reset_token(self, user_id: UUID) -> str:
        """Return a short-lived token for the password reset link."""
        return self._encode(user_id, PASSWORD_RESET_PURPOSE, self.password_reset_ttl)

    def resolve_caller(self, token: str) -> CallerIdentity | None:
        """Return the caller for a valid access token, else None."""
        user_id = self._decode(token, ACCESS_PURPOSE)
        if user_id is None:
            return None
        return CallerIdentity(user_id=user_id)

    def read_verification_token(self, token: str) -> UUID | None:
        """Return the user id from a valid verification token, else None."""
        return self._decode(token, VERIFICATION_PURPOSE)

    def read_password_reset_token(self, token: str) -> UUID | None:
        """Return the user id from a valid password reset token, else None."""
        return self._decode(token, PASSWORD_RESET_PURPOSE)

    def _encode(self, user_id: UUID, purpose: str, ttl: timedelta) -> str:
        now = datetime.now(tz=UTC)
        payload = {
            "sub": str(user_id),
            "purpose": purpose,
            "iat": now,
            "exp": now + ttl,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def _decode(self, token: str, purpose: str) -> UUID | None:
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.InvalidTokenError:
            return None
        if claims.get("purpose") != purpose:
            return None
        try:
            return UUID(str(claims.get("sub")))
        except ValueError:
            return None
