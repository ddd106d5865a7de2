"""Staff sign-in routes and session dependencies."""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import RedirectResponse

from aaasj_site.domain.auth import AuthenticatedUser
from aaasj_site.services.auth import is_staff_email

if TYPE_CHECKING:
    from aaasj_site.containers import AppContainer

SESSION_COOKIE = "aaasj_session"
STATE_COOKIE = "aaasj_oauth_state"
STATE_MAX_AGE_SECONDS = 10 * 60
CALLBACK_PATH = "/api/auth/callback"
POST_LOGIN_PATH = "/admin"

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _redirect_uri(container: AppContainer) -> str:
    return f"{container.settings.public_base_url.rstrip('/')}{CALLBACK_PATH}"


def _secure_cookies(container: AppContainer) -> bool:
    return container.settings.public_base_url.startswith("https://")


async def session_user(request: Request) -> AuthenticatedUser | None:
    """Return the user behind the session cookie, whatever their domain."""
    container = _container(request)
    return container.auth_service.resolve_user(request.cookies.get(SESSION_COOKIE))


async def optional_user(
    request: Request,
    user: AuthenticatedUser | None = Depends(session_user),
) -> AuthenticatedUser | None:
    """Return the signed-in staff user, or None for anyone else."""
    domain = _container(request).settings.allowed_email_domain
    if user is None or not is_staff_email(user.email, domain):
        return None
    return user


async def require_user(
    request: Request,
    user: AuthenticatedUser | None = Depends(session_user),
) -> AuthenticatedUser:
    """Ensure the request carries a staff session."""
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required"
        )
    domain = _container(request).settings.allowed_email_domain
    if not is_staff_email(user.email, domain):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Unauthorized domain"
        )
    return user


@router.get("/login")
async def login(request: Request) -> RedirectResponse:
    """Send the browser to Google's consent screen."""
    container = _container(request)
    state = secrets.token_urlsafe(24)
    response = RedirectResponse(
        container.auth_service.authorization_url(_redirect_uri(container), state),
        status_code=status.HTTP_302_FOUND,
    )
    response.set_cookie(
        STATE_COOKIE,
        state,
        max_age=STATE_MAX_AGE_SECONDS,
        httponly=True,
        samesite="lax",
        secure=_secure_cookies(container),
    )
    return response


@router.get("/callback")
async def callback(
    request: Request, code: str | None = None, state: str | None = None
) -> RedirectResponse:
    """Finish the OAuth flow and issue the session cookie."""
    container = _container(request)
    expected_state = request.cookies.get(STATE_COOKIE)
    if not state or not expected_state or not secrets.compare_digest(
        state, expected_state
    ):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid state"
        )
    if not code:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Missing code"
        )
    _, session_token = await container.auth_service.complete_sign_in(
        code, _redirect_uri(container)
    )
    response = RedirectResponse(POST_LOGIN_PATH, status_code=status.HTTP_302_FOUND)
    response.delete_cookie(STATE_COOKIE)
    response.set_cookie(
        SESSION_COOKIE,
        session_token,
        max_age=container.settings.session_max_age_seconds,
        httponly=True,
        samesite="lax",
        secure=_secure_cookies(container),
    )
    return response


@router.get("/session")
async def session(
    user: AuthenticatedUser | None = Depends(optional_user),
) -> dict[str, object]:
    """Return the current user, or null."""
    if user is None:
        return {"user": None}
    return {"user": {"id": user.id, "email": user.email, "name": user.name}}


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout() -> Response:
    """Clear the session cookie."""
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(SESSION_COOKIE)
    return response
