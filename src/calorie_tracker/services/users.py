"""User accounts: registration, email verification, login and password reset."""

import logging
import re
from dataclasses import dataclass
from html import escape
from typing import Protocol
from uuid import UUID, uuid4

from passlib.hash import pbkdf2_sha256

from calorie_tracker.domain.models import CallerIdentity, UserRecord
from calorie_tracker.errors import ErrorKind, TrackerError, unauthenticated
from calorie_tracker.services.tokens import TokenService

logger = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6
_EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")
PASSWORD_RESET_SENT_MESSAGE = (
    "If an account with that email exists, a password reset link has been sent."
)


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user with the given id, if present."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user with the given email, if present."""

    def get_by_username(self, username: str) -> UserRecord | None:
        """Return the user with the given username, if present."""

    def create_user(
        self, user_id: UUID, username: str, email: str, password_hash: str
    ) -> UserRecord:
        """Create and return an unverified user."""

    def mark_verified(self, user_id: UUID) -> None:
        """Flag the user's email as verified."""

    def set_password_hash(self, user_id: UUID, password_hash: str) -> None:
        """Replace the user's password hash."""


class EmailClient(Protocol):
    """Interface for outbound email delivery."""

    async def send_email(self, to: str, subject: str, html: str) -> None:
        """Deliver an HTML email or raise on failure."""


@dataclass(frozen=True)
class LoginResult:
    """Authenticated user and the bearer token issued for them."""

    user: UserRecord
    token: str


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository
    tokens: TokenService
    email_client: EmailClient
    client_url: str

    async def register(self, username: str, email: str, password: str) -> UserRecord:
        """Create an unverified user once the verification email is sent."""
        username = username.strip()
        email = email.strip().lower()
        _check_registration(username, email, password)
        if self.repository.get_by_email(email):
            raise TrackerError(
                ErrorKind.CONFLICT, "User with this email already exists"
            )
        if self.repository.get_by_username(username):
            raise TrackerError(ErrorKind.CONFLICT, "Username is already taken")

        user_id = uuid4()
        token = self.tokens.issue_verification_token(user_id)
        verify_url = f"{self.client_url.rstrip('/')}/verify/{token}"
        try:
            await self.email_client.send_email(
                email, "Verify your email", _verification_html(username, verify_url)
            )
        except Exception as exc:
            raise TrackerError(
                ErrorKind.UPSTREAM_SERVICE_FAILURE,
                f"Failed to send verification email: {exc}",
            ) from exc

        user = self.repository.create_user(
            user_id=user_id,
            username=username,
            email=email,
            password_hash=pbkdf2_sha256.hash(password),
        )
        logger.info("Registered user %s", user.id)
        return user

    def verify_email(self, token: str) -> str:
        """Mark the token's user verified and return a status message."""
        user_id = self.tokens.read_verification_token(token)
        user = self.repository.get_by_id(user_id) if user_id else None
        if user is None:
            raise TrackerError(ErrorKind.INVALID_TOKEN, "Invalid or expired token")
        if user.verified:
            return "Email already verified"
        self.repository.mark_verified(user.id)
        logger.info("Verified email for user %s", user.id)
        return "Email verified successfully!"

    def login(self, email: str, password: str) -> LoginResult:
        """Check credentials and issue an access token."""
        user = self.repository.get_by_email(email.strip().lower())
        if user is None or not pbkdf2_sha256.verify(password, user.password_hash):
            raise TrackerError(
                ErrorKind.INVALID_CREDENTIALS, "Invalid email or password"
            )
        if not user.verified:
            raise TrackerError(
                ErrorKind.EMAIL_NOT_VERIFIED, "Please verify your email first"
            )
        return LoginResult(user=user, token=self.tokens.issue_access_token(user.id))

    def get_profile(self, caller: CallerIdentity | None) -> UserRecord:
        """Return the caller's user record."""
        if caller is None:
            raise unauthenticated()
        user = self.repository.get_by_id(caller.user_id)
        if user is None:
            raise TrackerError(ErrorKind.NOT_FOUND, "User not found")
        return user

    def change_password(
        self,
        caller: CallerIdentity | None,
        current_password: str,
        new_password: str,
    ) -> None:
        """Replace the caller's password after checking the current one."""
        user = self.get_profile(caller)
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise TrackerError(
                ErrorKind.INVALID_INPUT,
                "New password must be at least 6 characters long",
            )
        if not pbkdf2_sha256.verify(current_password, user.password_hash):
            raise TrackerError(
                ErrorKind.INVALID_CREDENTIALS, "Current password is incorrect"
            )
        self.repository.set_password_hash(user.id, pbkdf2_sha256.hash(new_password))

    async def forgot_password(self, email: str) -> str:
        """Email a reset link when the account exists; the reply never says."""
        email = email.strip().lower()
        if not email:
            raise TrackerError(
                ErrorKind.MISSING_FIELD, "Please provide an email address"
            )
        user = self.repository.get_by_email(email)
        if user is None:
            return PASSWORD_RESET_SENT_MESSAGE

        token = self.tokens.issue_password_reset_token(user.id)
        reset_url = f"{self.client_url.rstrip('/')}/reset-password/{token}"
        try:
            await self.email_client.send_email(
                user.email,
                "Password Reset Request",
                _password_reset_html(user.username, reset_url),
            )
        except Exception as exc:
            raise TrackerError(
                ErrorKind.UPSTREAM_SERVICE_FAILURE,
                f"Failed to send password reset email: {exc}",
            ) from exc
        logger.info("Sent password reset link to user %s", user.id)
        return PASSWORD_RESET_SENT_MESSAGE

    def reset_password(self, token: str, new_password: str) -> None:
        """Replace the password of the user named by a reset token."""
        if not new_password:
            raise TrackerError(
                ErrorKind.MISSING_FIELD, "Please provide a new password"
            )
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise TrackerError(
                ErrorKind.INVALID_INPUT, "Password must be at least 6 characters long"
            )
        user_id = self.tokens.read_password_reset_token(token)
        user = self.repository.get_by_id(user_id) if user_id else None
        if user is None:
            raise TrackerError(
                ErrorKind.INVALID_TOKEN, "Invalid or expired reset token"
            )
        self.repository.set_password_hash(user.id, pbkdf2_sha256.hash(new_password))
        logger.info("Reset password for user %s", user.id)


def _check_registration(username: str, email: str, password: str) -> None:
    if not username or not email or not password:
        raise TrackerError(
            ErrorKind.MISSING_FIELD, "Please provide username, email, and password"
        )
    if len(username) < MIN_USERNAME_LENGTH:
        raise TrackerError(
            ErrorKind.INVALID_INPUT, "Username must be at least 3 characters long"
        )
    if not _EMAIL_PATTERN.match(email):
        raise TrackerError(
            ErrorKind.INVALID_INPUT, "Please enter a valid email address"
        )
    if len(password) < MIN_PASSWORD_LENGTH:
        raise TrackerError(
            ErrorKind.INVALID_INPUT, "Password must be at least 6 characters long"
        )


def _verification_html(username: str, verify_url: str) -> str:
    return (
        f"<h3>Welcome, {escape(username)}!</h3>"
        "<p>Click below to verify your email:</p>"
        f'<a href="{verify_url}" target="_blank">Verify Email</a>'
        "<p>This link expires in 24 hours.</p>"
        f"<p>If the link doesn't work, paste this into your browser: {verify_url}</p>"
    )


def _password_reset_html(username: str, reset_url: str) -> str:
    return (
        "<h3>Password Reset Request</h3>"
        f"<p>Hello {escape(username)},</p>"
        "<p>You requested to reset your password. Click below to reset it:</p>"
        f'<a href="{reset_url}" target="_blank">Reset Password</a>'
        "<p>This link expires in 1 hour.</p>"
        "<p>If you didn't request this, please ignore this email.</p>"
    )
