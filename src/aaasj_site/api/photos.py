"""Shared photo album routes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from aaasj_site.api.auth import optional_user, require_user
from aaasj_site.api.models import (
    AlbumCreateRequest,
    AlbumDebugRequest,
    AlbumUpdateRequest,
)
from aaasj_site.api.security import sanitize_input
from aaasj_site.domain.albums import album_to_dict
from aaasj_site.domain.auth import AuthenticatedUser
from aaasj_site.errors import AlbumFetchError

if TYPE_CHECKING:
    from aaasj_site.containers import AppContainer

router = APIRouter(prefix="/api/photos", tags=["photos"])

_logger = logging.getLogger(__name__)


@router.get("/albums")
async def list_albums(
    request: Request, user: AuthenticatedUser | None = Depends(optional_user)
) -> dict[str, object]:
    """Return albums; anonymous visitors only see public ones."""
    container: AppContainer = request.app.state.container
    albums = container.album_service.list_albums(include_private=user is not None)
    return {"albums": [album_to_dict(album) for album in albums]}


@router.post("/albums", dependencies=[Depends(require_user)])
async def create_album(
    body: AlbumCreateRequest, request: Request
) -> dict[str, object]:
    """Register a shared album."""
    container: AppContainer = request.app.state.container
    album = await container.album_service.create_album(
        title=sanitize_input(body.title) if body.title else None,
        share_url=body.share_url,
        description=sanitize_input(body.description) if body.description else None,
        is_public=body.is_public,
        fetch_photos=body.fetch_photos,
    )
    return {"album": album_to_dict(album)}


@router.put("/albums", dependencies=[Depends(require_user)])
async def update_album(
    body: AlbumUpdateRequest, request: Request
) -> dict[str, object]:
    """Refresh an album's photos or remove one photo."""
    container: AppContainer = request.app.state.container
    album = await container.album_service.update_album(
        body.album_id, body.action, body.photo_id
    )
    return {"album": album_to_dict(album)}


@router.delete(
    "/albums",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_user)],
)
async def delete_album(
    request: Request,
    id: str | None = None,  # noqa: A002
) -> Response:
    """Delete an album by id."""
    container: AppContainer = request.app.state.container
    container.album_service.delete_album(id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/debug", dependencies=[Depends(require_user)])
async def debug_album(body: AlbumDebugRequest, request: Request) -> Response:
    """Report how the scraper's patterns match a live album page."""
    container: AppContainer = request.app.state.container
    try:
        report = await container.album_service.debug_extraction(body.share_url)
    except AlbumFetchError as exc:
        _logger.warning("Album debug fetch failed: %s", exc.message)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": exc.message,
                "status": exc.status,
                "actualUrl": exc.actual_url,
            },
        )
    return JSONResponse(content=report)
