"""Domain models for staff authentication."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthenticatedUser:
    """A signed-in staff member."""

    id: str
    email: str
    name: str | None = None
    access_token: str | None = None


@dataclass(frozen=True)
class GoogleTokens:
    """Tokens returned by Google's OAuth token endpoint."""

    access_token: str
    refresh_token: str | None
    expires_in: int
    id_token: str | None = None


@dataclass(frozen=True)
class GoogleProfile:
    """The subset of Google's userinfo response the site uses."""

    email: str
    name: str | None
    email_verified: bool
