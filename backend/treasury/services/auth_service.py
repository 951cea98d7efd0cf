"""
Auth Service — Treasurer login and signed, time-limited bearer tokens.

Tokens are HS256 JWTs carrying ``id``, ``email``, ``name``, ``iat`` and ``exp``.
"""
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import jwt

from treasury.config import Settings
from treasury.errors import AuthError, ValidationError
from treasury.schemas.schemas import AdminLoginResponse, AdminProfile

logger = logging.getLogger(__name__)

TOKEN_ALGORITHM = "HS256"

# Used when SECRET_KEY is not configured; tokens then die with the process.
_ephemeral_secret: Optional[str] = None


def signing_secret(settings: Settings) -> str:
    global _ephemeral_secret  # noqa: PLW0603
    if settings.SECRET_KEY:
        return settings.SECRET_KEY
    if _ephemeral_secret is None:
        _ephemeral_secret = secrets.token_hex(32)
        logger.warning("SECRET_KEY not set; using a random per-process signing key")
    return _ephemeral_secret


class AuthService:
    """Issues and verifies treasurer tokens."""

    @staticmethod
    def login(settings: Settings, email: Optional[str], password: Optional[str]) -> AdminLoginResponse:
        """Check the configured treasurer credentials and issue a token.

        Raises:
            ValidationError: email or password missing.
            AuthError: credentials do not match (or none are configured).
        """
        if not email or not password:
            raise ValidationError("Email and password are required")

        if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
            logger.warning("Login attempted but ADMIN_EMAIL/ADMIN_PASSWORD are not configured")
            raise AuthError("Invalid email or password")

        email_ok = secrets.compare_digest(email.encode("utf-8"), settings.ADMIN_EMAIL.encode("utf-8"))
        password_ok = secrets.compare_digest(password.encode("utf-8"), settings.ADMIN_PASSWORD.encode("utf-8"))
        if not (email_ok and password_ok):
            logger.info("Rejected treasurer login for %s", email)
            raise AuthError("Invalid email or password")

        admin = AdminProfile(id=settings.ADMIN_ID, email=email, name=settings.ADMIN_NAME)
        token = AuthService.issue_token(settings, admin.model_dump())
        logger.info("Treasurer logged in: %s", email)
        return AdminLoginResponse(token=token, admin=admin)

    @staticmethod
    def issue_token(settings: Settings, identity: Dict, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "id": identity["id"],
            "email": identity["email"],
            "name": identity["name"],
            "iat": issued_at,
            "exp": issued_at + timedelta(hours=settings.TOKEN_EXPIRY_HOURS),
        }
        return jwt.encode(claims, signing_secret(settings), algorithm=TOKEN_ALGORITHM)

    @staticmethod
    def verify_token(settings: Settings, token: Optional[str]) -> Dict:
        """Return the token's claims.

        Raises:
            AuthError: token missing, malformed, badly signed, or expired.
        """
        if not token:
            raise AuthError("No token provided")

        try:
            return jwt.decode(
                token,
                signing_secret(settings),
                algorithms=[TOKEN_ALGORITHM],
                options={"require": ["exp", "iat"]},
            )
        except jwt.InvalidTokenError as exc:
            logger.debug("Rejected bearer token: %s", exc)
            raise AuthError("Invalid token") from exc
