"""Google Photos Library routes for signed-in staff."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from aaasj_site.api.auth import require_user
from aaasj_site.api.models import ConsoleLogEntry, PhotosAlbumCreateRequest
from aaasj_site.domain.auth import AuthenticatedUser
from aaasj_site.errors import PhotosLibraryError

if TYPE_CHECKING:
    from aaasj_site.containers import AppContainer

router = APIRouter(prefix="/api/google/photos", tags=["google-photos"])

_logger = logging.getLogger(__name__)
_client_logger = logging.getLogger(f"{__name__}.client")

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _access_token(user: AuthenticatedUser) -> str:
    if not user.access_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized"
        )
    return user.access_token


def _upstream_error(exc: PhotosLibraryError) -> Response:
    return Response(content=exc.body or exc.message, status_code=exc.status_code)


@router.get("/albums", response_model=None)
async def list_albums(
    request: Request,
    debug: str | None = None,
    user: AuthenticatedUser = Depends(require_user),
) -> Response | dict[str, object]:
    """List the staff member's owned and shared albums."""
    container: AppContainer = request.app.state.container
    debug_enabled = debug == "1"
    try:
        listing = await container.google_photos_service.list_albums(
            _access_token(user), debug=debug_enabled
        )
    except PhotosLibraryError as exc:
        return _upstream_error(exc)
    if debug_enabled:
        return {"albums": listing.albums, "debug": listing.debug}
    return {"albums": listing.albums}


@router.post("/albums")
async def create_album(
    body: PhotosAlbumCreateRequest,
    request: Request,
    user: AuthenticatedUser = Depends(require_user),
) -> Response:
    """Create an album and relay Google's response."""
    container: AppContainer = request.app.state.container
    try:
        created = await container.google_photos_service.create_album(
            _access_token(user), body.title
        )
    except PhotosLibraryError as exc:
        return _upstream_error(exc)
    return Response(
        content=created,
        status_code=status.HTTP_201_CREATED,
        media_type="application/json",
    )


@router.post(
    "/console-log",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_user)],
)
async def console_log(request: Request) -> Response:
    """Write a browser log line to the server log."""
    try:
        entry = ConsoleLogEntry.model_validate(await request.json())
    except ValueError as exc:
        _logger.info("Rejected client log payload: %s", exc)
        return Response(
            content="Invalid JSON", status_code=status.HTTP_400_BAD_REQUEST
        )
    level = _LOG_LEVELS.get(entry.level.lower(), logging.INFO)
    _client_logger.log(
        level,
        "[CLIENT %s] %s",
        entry.level.upper(),
        entry.message,
        extra={"data": entry.data},
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
