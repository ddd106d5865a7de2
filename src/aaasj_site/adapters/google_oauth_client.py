"""Google OAuth 2.0 client for staff sign-in."""

from dataclasses import dataclass
from typing import Protocol
from urllib.parse import urlencode

import httpx

from aaasj_site.domain.auth import GoogleProfile, GoogleTokens
from aaasj_site.errors import OAuthError

AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"
SCOPES = (
    "openid",
    "email",
    "profile",
    "https://www.googleapis.com/auth/drive.readonly",
    "https://www.googleapis.com/auth/photoslibrary.readonly",
)


class GoogleOAuthClient(Protocol):
    """Interface for the Google OAuth authorization code flow."""

    def authorization_url(self, redirect_uri: str, state: str) -> str:
        """Return the consent screen URL to redirect the browser to."""

    async def exchange_code(self, code: str, redirect_uri: str) -> GoogleTokens:
        """Exchange an authorization code for tokens."""

    async def fetch_profile(self, access_token: str) -> GoogleProfile:
        """Return the signed-in user's profile."""


@dataclass
class HttpxGoogleOAuthClient(GoogleOAuthClient):
    """Google OAuth client implemented with httpx."""

    client_id: str
    client_secret: str
    hosted_domain: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, client_id: str, client_secret: str, hosted_domain: str
    ) -> "HttpxGoogleOAuthClient":
        """Create an OAuth client with a managed httpx session."""
        return cls(
            client_id=client_id,
            client_secret=client_secret,
            hosted_domain=hosted_domain,
            http_client=httpx.AsyncClient(),
        )

    def authorization_url(self, redirect_uri: str, state: str) -> str:
        """Build the consent URL restricted to the hosted domain."""
        params = {
            "client_id": self.client_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "scope": " ".join(SCOPES),
            "hd": self.hosted_domain,
            "access_type": "offline",
            "prompt": "consent",
            "state": state,
        }
        return f"{AUTHORIZE_URL}?{urlencode(params)}"

    async def exchange_code(self, code: str, redirect_uri: str) -> GoogleTokens:
        """Exchange an authorization code at the token endpoint."""
        response = await self.http_client.post(
            TOKEN_URL,
            data={
                "code": code,
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "redirect_uri": redirect_uri,
                "grant_type": "authorization_code",
            },
            timeout=10,
        )
        if not response.is_success:
            raise OAuthError(f"Token exchange failed: {response.text}")
        payload = response.json()
        return GoogleTokens(
            access_token=payload["access_token"],
            refresh_token=payload.get("refresh_token"),
            expires_in=int(payload.get("expires_in") or 0),
            id_token=payload.get("id_token"),
        )

    async def fetch_profile(self, access_token: str) -> GoogleProfile:
        """Fetch the OpenID Connect userinfo document."""
        response = await self.http_client.get(
            USERINFO_URL,
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=10,
        )
        if not response.is_success:
            raise OAuthError(f"Userinfo request failed: {response.status_code}")
        payload = response.json()
        return GoogleProfile(
            email=str(payload.get("email") or ""),
            name=payload.get("name"),
            email_verified=bool(payload.get("email_verified", False)),
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
