"""Staff sign-in and session tokens."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from aaasj_site.adapters.google_oauth_client import GoogleOAuthClient
from aaasj_site.domain.auth import AuthenticatedUser
from aaasj_site.errors import AccessDeniedError

_ALGORITHM = "HS256"

_logger = logging.getLogger(__name__)


def is_staff_email(email: str | None, domain: str) -> bool:
    """Return true when the email belongs to the staff domain."""
    if not email:
        return False
    return email.lower().endswith(f"@{domain.lower()}")


@dataclass
class SessionCodec:
    """Signs and verifies the JWT stored in the session cookie."""

    secret: str
    max_age_seconds: int

    def encode(self, claims: dict[str, object], now: datetime | None = None) -> str:
        """Return a signed token that expires after ``max_age_seconds``."""
        issued_at = now or datetime.now(tz=UTC)
        payload = {
            **claims,
            "iat": int(issued_at.timestamp()),
            "exp": int(
                (issued_at + timedelta(seconds=self.max_age_seconds)).timestamp()
            ),
        }
        return jwt.encode(payload, self.secret, algorithm=_ALGORITHM)

    def decode(self, token: str) -> dict[str, object] | None:
        """Return the token claims, or None when invalid or expired."""
        try:
            return jwt.decode(token, self.secret, algorithms=[_ALGORITHM])
        except JWTError as exc:
            _logger.info("Rejected session token: %s", exc)
            return None


@dataclass
class AuthService:
    """Completes the Google sign-in flow and resolves session users."""

    oauth_client: GoogleOAuthClient
    codec: SessionCodec
    allowed_domain: str

    def authorization_url(self, redirect_uri: str, state: str) -> str:
        """Return the Google consent URL."""
        return self.oauth_client.authorization_url(redirect_uri, state)

    async def complete_sign_in(
        self, code: str, redirect_uri: str
    ) -> tuple[AuthenticatedUser, str]:
        """Exchange the code and return the user with a session token."""
        tokens = await self.oauth_client.exchange_code(code, redirect_uri)
        profile = await self.oauth_client.fetch_profile(tokens.access_token)
        if not is_staff_email(profile.email, self.allowed_domain):
            _logger.warning("Refused sign-in for %s", profile.email)
            raise AccessDeniedError("Unauthorized domain")
        expires_at = datetime.now(tz=UTC) + timedelta(seconds=tokens.expires_in)
        session_token = self.codec.encode(
            {
                "sub": profile.email,
                "email": profile.email,
                "name": profile.name,
                "access_token": tokens.access_token,
                "refresh_token": tokens.refresh_token,
                "access_token_expires_at": int(expires_at.timestamp()),
            }
        )
        _logger.info("Staff sign-in for %s", profile.email)
        user = AuthenticatedUser(
            id=profile.email,
            email=profile.email,
            name=profile.name,
            access_token=tokens.access_token,
        )
        return user, session_token

    def resolve_user(self, session_token: str | None) -> AuthenticatedUser | None:
        """Return the user behind a session token, if it is valid."""
        if not session_token:
            return None
        claims = self.codec.decode(session_token)
        if not claims or not claims.get("email"):
            return None
        email = str(claims["email"])
        return AuthenticatedUser(
            id=email,
            email=email,
            name=claims.get("name"),
            access_token=claims.get("access_token"),
        )
